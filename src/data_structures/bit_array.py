import numpy as np
import pyarrow as pa
import pyarrow.compute as pc


class InvalidSizeError(ValueError):
    """Raised when a bit array is requested with a non-positive length"""
    def __init__(self, length: int):
        super().__init__(f"Bit array length must be positive, got {length}")
        self.length = length


class IndexOutOfRangeError(IndexError):
    """Raised when a bit index falls outside [0, length)"""
    def __init__(self, index: int, length: int):
        super().__init__(f"Bit index {index} out of range [0, {length})")
        self.index = index
        self.length = length


class BitArray:
    """Fixed-length packed bit array backed by a mutable PyArrow buffer.

    Bits are stored eight to a byte in Arrow's bitmap order (least significant
    bit first), so the storage can be exposed as a ``pyarrow.BooleanArray``
    without copying. Writes go through a NumPy ``uint8`` view over the same
    memory.

    Attributes:
        buffer (pyarrow.Buffer): The mutable buffer holding the packed bits.

    Example:
        >>> bits = BitArray(16)
        >>> bits.set(3)
        >>> bits.get(3), bits.get(4)
        (True, False)
        >>> bits.count()
        1

    """
    def __init__(self, length: int):
        if length <= 0:
            raise InvalidSizeError(length)
        self._length = length
        self.buffer = pa.allocate_buffer((length + 7) // 8)
        self._bytes = np.frombuffer(self.buffer, dtype=np.uint8)
        self._bytes.fill(0)

    def __len__(self) -> int:
        return self._length

    def _check(self, index: int):
        if not 0 <= index < self._length:
            raise IndexOutOfRangeError(index, self._length)

    def set(self, index: int):
        """Set bit at index to 1"""
        self._check(index)
        self._bytes[index >> 3] |= np.uint8(1 << (index & 7))

    def try_set(self, index: int) -> bool:
        """Set bit at index, returning False instead of raising when out of range"""
        try:
            self.set(index)
        except IndexOutOfRangeError:
            return False
        return True

    def get(self, index: int) -> bool:
        """Read bit at index"""
        self._check(index)
        return bool((self._bytes[index >> 3] >> (index & 7)) & 1)

    def to_arrow(self) -> pa.BooleanArray:
        """Zero-copy boolean view of the bitmap"""
        return pa.Array.from_buffers(pa.bool_(), self._length, [None, self.buffer])

    def count(self) -> int:
        """Number of bits set"""
        return pc.sum(self.to_arrow()).as_py() or 0
