import pytest
import pyarrow as pa
from hypothesis import given, strategies as st

from data_structures.bit_array import BitArray, IndexOutOfRangeError, InvalidSizeError


class TestBitArray:
    @given(st.data())
    def test_set_get(self, data):
        length = data.draw(st.integers(1, 2000))
        indices = data.draw(st.sets(st.integers(0, length - 1)))
        bits = BitArray(length)
        for i in indices:
            bits.set(i)

        assert len(bits) == length
        assert bits.count() == len(indices)
        assert [bits.get(i) for i in range(length)] == [i in indices for i in range(length)]

    @pytest.mark.parametrize("length", [0, -1, -64])
    def test_invalid_size(self, length):
        with pytest.raises(InvalidSizeError) as excinfo:
            BitArray(length)
        assert excinfo.value.length == length

    def test_out_of_range(self):
        bits = BitArray(10)
        for index in (-1, 10, 11):
            with pytest.raises(IndexOutOfRangeError):
                bits.set(index)
            with pytest.raises(IndexOutOfRangeError):
                bits.get(index)
            assert bits.try_set(index) is False
        assert bits.try_set(9) is True
        assert bits.get(9)
        assert bits.count() == 1

    def test_arrow_view(self):
        bits = BitArray(13)
        bits.set(0)
        bits.set(8)
        bits.set(12)
        view = bits.to_arrow()
        assert isinstance(view, pa.BooleanArray)
        assert len(view) == 13
        assert view.null_count == 0
        assert [i for i, v in enumerate(view.to_pylist()) if v] == [0, 8, 12]
        assert bits.buffer.to_pybytes()[:2] == b'\x01\x11'
