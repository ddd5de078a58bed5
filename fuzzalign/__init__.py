"""
fuzzalign: local-alignment fuzzy matching package.
"""

import logging

# =============================================================================
# CORE ALIGNMENT
# =============================================================================

from .dp_core import (
    AlignmentConfig,
    ScoreData,
    LocalAlignmentResult,
    TIE_BREAK_UP,
    TIE_BREAK_LEFT,
    fill_score_matrix,
    traceback_local,
    run_local_dp,
    get_local_alignment,
)

from .default import (
    DEFAULT_CONFIG,
    CATALOG_CONFIG,
    DEFAULT_THRESHOLD,
    DEFAULT_FIELDS,
    match_params,
)


# =============================================================================
# FUZZY MATCHING
# =============================================================================

from .matcher import (
    MODE_TOKENS,
    MODE_QUERY,
    FuzzyMatcher,
    TokenScore,
    SearchBudgetExceeded,
    alignment_ratio,
    satisfies_threshold,
    match_all_tokens,
    match_whole_query,
    exact_match,
)

from .normalize import (
    collapse_whitespace,
    split_tokens,
    normalize_keyword,
)

from .catalog import (
    load_catalog,
    search_catalog,
)


# =============================================================================
# VALIDATION AND TESTING
# =============================================================================

from .validation import (
    lcs_length,
    is_subsequence,
    check_default_vs_lcs,
    check_alignment_validity,
)


# =============================================================================
# PLOTTING (requires both matplotlib and seaborn -- install with pip install fuzzalign[plot])
# =============================================================================
def _missing_plot_dep(func_name: str) -> ImportError:
    return ImportError(
        f"{func_name} requires plotting dependencies.\n"
        'Install with: pip install "fuzzalign[plot]"'
    )

try:
    from .plot import plot_score_matrix
    PLOT_AVAILABLE = True
except ImportError:
    # Raises ImportError if called without matplotlib/seaborn
    def plot_score_matrix(*args, **kwargs):
        raise _missing_plot_dep("plot_score_matrix")
    PLOT_AVAILABLE = False


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    # Core alignment
    "AlignmentConfig",
    "ScoreData",
    "LocalAlignmentResult",
    "TIE_BREAK_UP",
    "TIE_BREAK_LEFT",
    "fill_score_matrix",
    "traceback_local",
    "run_local_dp",
    "get_local_alignment",
    # Defaults
    "DEFAULT_CONFIG",
    "CATALOG_CONFIG",
    "DEFAULT_THRESHOLD",
    "DEFAULT_FIELDS",
    "match_params",
    # Fuzzy matching
    "MODE_TOKENS",
    "MODE_QUERY",
    "FuzzyMatcher",
    "TokenScore",
    "SearchBudgetExceeded",
    "alignment_ratio",
    "satisfies_threshold",
    "match_all_tokens",
    "match_whole_query",
    "exact_match",
    # Keyword handling
    "collapse_whitespace",
    "split_tokens",
    "normalize_keyword",
    # Catalog
    "load_catalog",
    "search_catalog",
    # Validation
    "lcs_length",
    "is_subsequence",
    "check_default_vs_lcs",
    "check_alignment_validity",
    # Plotting
    "PLOT_AVAILABLE",
    "plot_score_matrix",
]
