"""Pytest configuration and fixtures."""

import numpy as np
import pytest

SEED = 42


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--fast",
        action="store_true",
        default=False,
        help="Skip slow tests (exhaustive 16-bit sweeps)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests when --fast flag is used."""
    if config.getoption("--fast"):
        skip_slow = pytest.mark.skip(reason="skipped with --fast flag")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic random generator for sampled word values."""
    return np.random.default_rng(SEED)


def random_words(rng: np.random.Generator, width, count: int = 64) -> list:
    """Sample words over the full bit pattern range of a width."""
    words = []
    for _ in range(count):
        high = int(rng.integers(0, 1 << 32))
        low = int(rng.integers(0, 1 << 32))
        words.append(width.from_unsigned((high << 32) | low))
    return words


def boundary_words(width) -> list:
    """Zero, one, all ones, extremes and every single-bit pattern of a width."""
    words = [0, 1, width.from_unsigned(width.mask), width.min_value, width.max_value]
    words.extend(width.from_unsigned(1 << pos) for pos in range(width.bits))
    return words
