"""
conftest.py — Shared pytest fixtures for fuzzalign test suite

Provides common scoring configurations, a small product catalog, and
random number generators used across all test modules.
"""

import pytest
import numpy as np

from fuzzalign.dp_core import AlignmentConfig


# ---------------------------------------------------------------------------
# Scoring fixtures (match default.py)
# ---------------------------------------------------------------------------

@pytest.fixture
def lcs_config() -> AlignmentConfig:
    """Plain LCS scoring: +1 match, no penalties."""
    return AlignmentConfig(match_score=1, mismatch_penalty=0, default_gap_penalty=0)


@pytest.fixture
def catalog_config() -> AlignmentConfig:
    """Catalog scoring: +3 / -10 / -10 with cheap spaces and middle dots."""
    return AlignmentConfig(
        match_score=3,
        mismatch_penalty=10,
        default_gap_penalty=10,
        penalty_map={"の": 100, " ": 0, "・": 0},
    )


@pytest.fixture
def threshold() -> float:
    """Default fuzzy match threshold."""
    return 0.6


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def products() -> list:
    """Small catalog in the product JSON layout."""
    return [
        {
            "ItemNo": "B-100",
            "name": "ステンレス六角ボルト",
            "forindex": "ステンレス 六角 ボルト M8 stainless bolt",
            "unit_catalog1": "締結部品",
            "series": "SUS",
            "type1": "ボルト",
        },
        {
            "ItemNo": "N-200",
            "name": "六角ナット",
            "forindex": "六角 ナット M8 hex nut",
            "unit_catalog1": "締結部品",
            "series": "STD",
            "type1": "ナット",
        },
        {
            "ItemNo": "PA100",
            "name": "Product-A100",
            "forindex": "product a100 sensor",
            "unit_catalog1": "センサ",
            "series": "PA",
            "type1": "センサ",
        },
    ]


# ---------------------------------------------------------------------------
# Random number generator fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(888)


@pytest.fixture
def alphabet() -> str:
    """Mixed alphabet with multi-byte symbols and joining characters."""
    return "ABCアイウの・- "


@pytest.fixture
def random_text_factory(alphabet):
    """Factory fixture returning a function to generate random strings."""
    def _random_text(length: int, rng: np.random.Generator) -> str:
        return "".join(rng.choice(list(alphabet), size=length))
    return _random_text
