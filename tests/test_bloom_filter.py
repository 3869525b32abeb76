import logging

import pytest
from hypothesis import given, settings, strategies as st

from algorithms.empirical_tester import WordGenerator, estimate_false_positive_rate
from algorithms.sizing import FilterParameters
from data_structures.bit_array import InvalidSizeError
from data_structures.bloom_filter import BloomFilter, ConstructionError


class TestBloomFilter:
    @settings(deadline=None)
    @given(st.lists(st.text(), min_size=1, max_size=200), st.floats(0.001, 0.5))
    def test_no_false_negatives(self, items, error_rate):
        bf = BloomFilter.create(items, error_rate)

        for item in items:
            assert item in bf
            assert bf.contains(item)

    def test_sizing_from_collection(self):
        items = [f"word{i}" for i in range(1000)]
        bf = BloomFilter.create(items, 0.01)
        assert bf.bit_count == 9586
        assert bf.hash_count == 7
        params = FilterParameters(1000, 0.01)
        assert (bf.bit_count, bf.hash_count) == (params.bit_count(), params.hash_count())
        assert bf.inserted == 1000

    def test_false_positive_rate_bounded(self):
        members = [f"member-{i}" for i in range(1000)]
        bf = BloomFilter.create(members, 0.01)

        report = estimate_false_positive_rate(
            bf, 100000, set(members), WordGenerator(5, 12, seed=1234))

        # random words never contain '-', so none of them are members
        assert report.fraction <= 0.03
        assert abs(bf.expected_false_positive_rate() - 0.01) < 0.001

    def test_surrogate_strings(self):
        bf = BloomFilter.create(["ok", "\ud800", "a\udfffb"], 0.01)
        assert "\ud800" in bf
        assert bf.contains("a\udfffb")
        assert bf.inserted == 3
        assert isinstance(bf.contains("\udc00"), bool)

    def test_empty_collection(self):
        bf = BloomFilter.create([], 0.01)
        assert bf.bit_count >= 1
        assert bf.hash_count >= 1
        assert bf.bits.count() == 0
        assert "missing" not in bf
        assert not bf.contains("")

    def test_construction_error(self):
        with pytest.raises(ConstructionError) as excinfo:
            BloomFilter(0, 3)
        assert excinfo.value.size == 0
        assert isinstance(excinfo.value.__cause__, InvalidSizeError)
        assert "0 bits" in str(excinfo.value)

    def test_partial_insertion_keeps_bits(self, monkeypatch, caplog):
        bf = BloomFilter.create(["alpha", "beta", "gamma"], 0.01)
        before = bf.bits.to_arrow().to_pylist()

        good = [1, 2]
        monkeypatch.setattr(bf.hashes, "indices", lambda item: [good[0], bf.bit_count + 5, good[1]])
        with caplog.at_level(logging.ERROR, logger="data_structures.bloom_filter"):
            assert bf.insert("broken") is False
        monkeypatch.undo()

        assert "Could not set bit" in caplog.text
        after = bf.bits.to_arrow().to_pylist()
        # bits set before are untouched, positions on either side of the bad one are set
        assert all(a or not b for a, b in zip(after, before))
        assert after[1] and after[2]
        assert bf.inserted == 3
        for item in ["alpha", "beta", "gamma"]:
            assert item in bf

    def test_query_does_not_mutate(self):
        bf = BloomFilter.create(["x", "y"], 0.05)
        count = bf.bits.count()
        for i in range(100):
            bf.contains(str(i))
        assert bf.bits.count() == count
        assert 0 < bf.fill_ratio() <= 1


# --------------------------
# Running Tests
# --------------------------
#if __name__ == "__main__":
#    pytest.main([
#        "-v",
#        "--hypothesis-show-statistics",
#        "--cov=bloom-filter",
#        "--cov-report=html:coverage"
#    ])
# --------------------------
