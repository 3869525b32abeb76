import logging
from typing import Sequence

from algorithms.hash_family import HashFamily
from algorithms.sizing import FilterParameters, expected_false_positive_rate
from data_structures.bit_array import BitArray, InvalidSizeError

logger = logging.getLogger(__name__)


class ConstructionError(RuntimeError):
    """Raised when the bit array of a filter cannot be allocated"""
    def __init__(self, size: int):
        super().__init__(f"Could not create BloomFilter of {size} bits")
        self.size = size


class BloomFilter:
    """Membership filter built once from a collection of strings known in advance.

    :meth:`create` sizes the filter for the collection and a target false
    positive rate, inserts every element, and the filter is then only queried.
    Like any Bloom filter it may report a string as present when it's not
    (a false positive, bounded by the target rate) but never reports an
    inserted string as absent.

    Bits live in a PyArrow-backed :class:`BitArray`; positions come from a
    :class:`HashFamily` whose seeds are fixed at construction, so lookups
    check exactly the bits that insertion set.

    Attributes:
        bits (BitArray): The packed bit array of length ``bit_count``.
        hashes (HashFamily): The k seeded hash functions.

    Example:
        >>> bf = BloomFilter.create(["hello", "there"], 0.01)
        >>> "hello" in bf
        True
        >>> bf.contains("world")
        False  # Potentially, with a small probability of being True (false positive)

    """
    def __init__(self, bit_count: int, hash_count: int):
        try:
            self.bits = BitArray(bit_count)
        except InvalidSizeError as e:
            raise ConstructionError(bit_count) from e
        self.hashes = HashFamily(bit_count, hash_count)
        self._inserted = 0

    @classmethod
    def create(cls, collection: Sequence[str], error_rate: float) -> 'BloomFilter':
        """Size a filter for collection and insert every element
        Args:
        collection: Strings to insert, in order
        error_rate: Target false positive probability in (0, 1]
        """
        n = len(collection)
        params = FilterParameters(n, error_rate)
        m, k = params.bit_count(), params.hash_count()
        logger.info("Creating BloomFilter for %d elements: %d bits, %d hash functions", n, m, k)
        bf = cls(m, k)
        for item in collection:
            bf.insert(item)
        return bf

    @property
    def bit_count(self) -> int:
        return len(self.bits)

    @property
    def hash_count(self) -> int:
        return self.hashes.hash_count

    @property
    def inserted(self) -> int:
        """Number of fully successful insertions"""
        return self._inserted

    def insert(self, item: str) -> bool:
        """Insert item into filter
        Returns:
        False if any of its bits could not be set, True otherwise
        """
        ok = True
        for idx in self.hashes.indices(item):
            if not self.bits.try_set(idx):
                logger.error("Could not set bit %d for object %r", idx, item)
                ok = False
        if ok:
            self._inserted += 1
        return ok

    def contains(self, item: str) -> bool:
        """Check item membership"""
        return all(self.bits.get(idx) for idx in self.hashes.indices(item))

    def __contains__(self, item: str) -> bool:
        return self.contains(item)

    def fill_ratio(self) -> float:
        """Fraction of bits set"""
        return self.bits.count() / self.bit_count

    def expected_false_positive_rate(self) -> float:
        return expected_false_positive_rate(self._inserted, self.bit_count, self.hash_count)
