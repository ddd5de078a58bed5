"""
fuzzalign plotting package.

Submodules:
    - plot.colors: Color constants for all visualization
    - plot.matrix: DP score table heatmaps

Example imports:
    from fuzzalign.plot import plot_score_matrix  # top-level re-export
    from fuzzalign.plot.colors import PATH_COLORS  # color constants
"""

from .colors import (
    SYMBOL_COLORS,
    PATH_COLORS,
    HEATMAP_COLORMAPS,
)

from .matrix import plot_score_matrix


__all__ = [
    "SYMBOL_COLORS",
    "PATH_COLORS",
    "HEATMAP_COLORMAPS",
    "plot_score_matrix",
]
