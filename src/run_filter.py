# run_filter.py

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field, fields
from typing import Optional

import pyarrow as pa

from algorithms.empirical_tester import WordGenerator, estimate_false_positive_rate
from data_structures.bloom_filter import BloomFilter, ConstructionError

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    words: str = field(default_factory=lambda: os.environ.get("ARROW_BLOOM_WORDS", "words.txt"))
    false_positive_probability: float = 0.01
    trials: int = 100000
    min_length: int = 5
    max_length: int = 12
    seed: Optional[int] = None
    log_level: str = "INFO"


def read_strings(location: str) -> list[str]:
    """Read one string per line from a UTF-8 text file.
    A missing or unreadable file yields an empty list.
    """
    try:
        with pa.input_stream(location) as stream:
            text = stream.read().decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read words from %s: %s", location, e)
        words = []
    else:
        words = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
        # a final line terminator does not start another line
        if words[-1] == '':
            words.pop()
    logger.info("%d words added to the set.", len(words))
    return words


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arrow-bloom",
        description="Build a Bloom filter from a word list and measure its false positive rate.",
    )
    parser.add_argument("words", nargs="?", default=defaults.words,
                        help="word list, one word per line (default: %(default)s)")
    parser.add_argument("-p", "--false-positive-probability", type=float,
                        default=defaults.false_positive_probability)
    parser.add_argument("-n", "--trials", type=int, default=defaults.trials,
                        help="random words to test against the filter")
    parser.add_argument("--min-length", type=int, default=defaults.min_length)
    parser.add_argument("--max-length", type=int, default=defaults.max_length)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--log-level", default=defaults.log_level)
    return parser


def parse_settings(argv=None) -> Settings:
    args = build_parser(Settings()).parse_args(argv)
    return Settings(**{f.name: getattr(args, f.name) for f in fields(Settings)})


def main(argv=None) -> int:
    settings = parse_settings(argv)
    logging.basicConfig(level=settings.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    words = read_strings(settings.words)
    try:
        bf = BloomFilter.create(words, settings.false_positive_probability)
    except ConstructionError as e:
        logger.error("%s (requested size: %d bits)", e, e.size)
        return 1

    report = estimate_false_positive_rate(
        bf,
        settings.trials,
        set(words),
        WordGenerator(settings.min_length, settings.max_length, seed=settings.seed),
    )
    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
