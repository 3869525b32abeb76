import string
from dataclasses import dataclass
from typing import AbstractSet, Callable, Optional

import numpy as np

LETTERS = np.array(list(string.ascii_lowercase))


class WordGenerator:
    """Random lowercase words with a uniformly drawn length.

    Lengths are drawn from the closed range ``[min_length, max_length]`` and
    every character independently from a-z, using a dedicated NumPy
    ``Generator`` so runs are reproducible when a seed is given.

    Example:
        >>> words = WordGenerator(5, 12, seed=42)
        >>> 5 <= len(words()) <= 12
        True

    """
    def __init__(self, min_length: int = 5, max_length: int = 12, seed: Optional[int] = None):
        if min_length < 1:
            raise ValueError(f"min_length must be at least 1, got {min_length}")
        if max_length < min_length:
            raise ValueError(f"max_length {max_length} is below min_length {min_length}")
        self.min_length = min_length
        self.max_length = max_length
        self.rng = np.random.default_rng(seed)

    def __call__(self) -> str:
        length = self.rng.integers(self.min_length, self.max_length, endpoint=True)
        return ''.join(LETTERS[self.rng.integers(0, len(LETTERS), size=length)])


@dataclass(frozen=True)
class FalsePositiveReport:
    trial_count: int
    false_positive_count: int
    rate: float  # percent, 4 decimals
    fraction: float

    def summary(self) -> str:
        return (f"{self.false_positive_count} false positives "
                f"(from a total of {self.trial_count} words).\n"
                f"Error percentage: {self.rate}%")


def estimate_false_positive_rate(bloom_filter, trial_count: int,
                                 known_members: AbstractSet[str],
                                 word_generator: Callable[[], str]) -> FalsePositiveReport:
    """Query bloom_filter with random words and count false positives
    Args:
    bloom_filter: Anything exposing contains(str) -> bool
    trial_count: Number of random words to test
    known_members: Ground truth set; words in it are never counted
    word_generator: Zero-argument callable producing candidate words
    """
    if trial_count <= 0:
        raise ValueError(f"trial_count must be positive, got {trial_count}")
    false_positives = 0
    for _ in range(trial_count):
        candidate = word_generator()
        if bloom_filter.contains(candidate) and candidate not in known_members:
            false_positives += 1
    fraction = false_positives / trial_count
    return FalsePositiveReport(
        trial_count=trial_count,
        false_positive_count=false_positives,
        rate=round(100 * fraction, 4),
        fraction=fraction,
    )
