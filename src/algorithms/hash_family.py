import mmh3

DIGEST_MASK = (1 << 127) - 1


class HashFamily:
    """k seeded MurmurHash3 (x64, 128-bit) functions folded onto [0, m).

    Seed ``i`` drives the i-th hash function. Seeds are fixed when the family
    is built, so a string always maps to the same index sequence for a given
    ``(bit_count, hash_count)``; inserting and querying a Bloom filter both go
    through :meth:`indices`.

    Attributes:
        bit_count (int): Size m of the target bit array.
        hash_count (int): Number k of hash functions.
        seeds (tuple): The seeds 0..k-1.

    Example:
        >>> family = HashFamily(bit_count=9586, hash_count=7)
        >>> family.indices("apple") == family.indices("apple")
        True

    """
    def __init__(self, bit_count: int, hash_count: int):
        if bit_count <= 0:
            raise ValueError(f"bit_count must be positive, got {bit_count}")
        if hash_count <= 0:
            raise ValueError(f"hash_count must be positive, got {hash_count}")
        self.bit_count = bit_count
        self.hash_count = hash_count
        self.seeds = tuple(range(hash_count))

    @staticmethod
    def digest(value: str, seed: int) -> int:
        """Signed 128-bit digest of the UTF-8 encoded value"""
        return mmh3.hash128(value.encode('utf-8', 'surrogatepass'), seed, signed=True)

    def index(self, digest: int) -> int:
        """Map a digest onto [0, bit_count)"""
        return (digest & DIGEST_MASK) % self.bit_count

    def indices(self, value: str) -> list[int]:
        """Bit positions for value, one per seed"""
        return [self.index(self.digest(value, seed)) for seed in self.seeds]
