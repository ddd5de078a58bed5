"""
default.py — Default parameters for fuzzalign

Provides the plain LCS scoring, the tuned catalog scoring scheme
(+3 match / -10 mismatch / -10 gap, with cheap spaces and middle dots),
the 60% match threshold and the catalog field priority order used
throughout examples, scripts and tests.
"""

from .dp_core import AlignmentConfig

# Pure longest-common-subsequence scoring
DEFAULT_CONFIG = AlignmentConfig(match_score=1, mismatch_penalty=0, default_gap_penalty=0)

# Catalog scoring: skipping "の" is expensive, spaces and "・" are free
CATALOG_PENALTY_MAP = {
    "の": 100,
    " ": 0,
    "・": 0,
}
CATALOG_CONFIG = AlignmentConfig(
    match_score=3,
    mismatch_penalty=10,
    default_gap_penalty=10,
    penalty_map=CATALOG_PENALTY_MAP,
)

DEFAULT_THRESHOLD = 0.6

## Catalog record fields
NAME_FIELD = "name"
INDEX_FIELD = "forindex"
CODE_FIELD = "ItemNo"
UNIT_FIELD = "unit_catalog1"

# Priority order for fuzzy matching
DEFAULT_FIELDS = (NAME_FIELD, INDEX_FIELD, CODE_FIELD, UNIT_FIELD)

# Prefix length of the keyword compared against the code field in exact search
CODE_PREFIX_LENGTH = 7


def match_params(*, catalog: bool = True) -> dict:
    """
    Bundle default matching parameters into a dict for easy unpacking.

    Parameters:
        catalog (bool): If True, use the tuned catalog scoring, else plain LCS.

    Usage:
        matcher = FuzzyMatcher(**match_params())"""
    return {
        "config": CATALOG_CONFIG if catalog else DEFAULT_CONFIG,
        "threshold": DEFAULT_THRESHOLD,
        "fields": DEFAULT_FIELDS,
    }
