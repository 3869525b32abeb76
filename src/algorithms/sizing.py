import math
from dataclasses import dataclass

# smallest positive double, stands in for p == 0
MIN_PROBABILITY = math.ulp(0.0)


def optimal_bit_count(n: int, p: float) -> int:
    """Bit array length m = ceil(-n * ln(p) / ln(2)^2), at least 1"""
    if p == 0:
        p = MIN_PROBABILITY
    m = math.ceil(-(n * math.log(p)) / (math.log(2) ** 2))
    return max(1, m)


def optimal_hash_count(n: int, m: int) -> int:
    """Hash function count k = round((m/n) * ln(2)), at least 1"""
    if n <= 0:
        return 1
    k = math.floor((m / n) * math.log(2) + 0.5)
    return max(1, k)


def expected_false_positive_rate(n: int, m: int, k: int) -> float:
    """Theoretical false positive rate (1 - e^(-kn/m))^k after n insertions"""
    if n <= 0:
        return 0.0
    return (1 - math.exp(-k * n / m)) ** k


@dataclass(frozen=True)
class FilterParameters:
    """Sizing input for a Bloom filter.

    Attributes:
        expected_insertions (int): Number of elements the filter will hold.
        false_positive_probability (float): Target false positive rate in (0, 1].

    Example:
        >>> params = FilterParameters(1000, 0.01)
        >>> params.bit_count(), params.hash_count()
        (9586, 7)

    """
    expected_insertions: int
    false_positive_probability: float

    def bit_count(self) -> int:
        return optimal_bit_count(self.expected_insertions, self.false_positive_probability)

    def hash_count(self) -> int:
        return optimal_hash_count(self.expected_insertions, self.bit_count())
