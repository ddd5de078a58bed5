"""
Score table visualization for fuzzalign.

This module draws the local-alignment table as a heatmap with the
traceback path overlaid.

Functions:
    - plot_score_matrix: heatmap of H with path and best cell
"""

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.patches import Rectangle
from typing import Optional, Tuple

from ..dp_core import AlignmentConfig, LocalAlignmentResult
from .colors import SYMBOL_COLORS, PATH_COLORS, HEATMAP_COLORMAPS


def plot_score_matrix(
    result: LocalAlignmentResult,
    s: str,
    t: str,
    config: Optional[AlignmentConfig] = None,
    figsize: Tuple[float, float] = (8, 6),
    colormap: str = HEATMAP_COLORMAPS['default'],
    annotate: bool = True,
    marker_size: int = 14,
    marker_width: int = 2,
    tick_fontsize: float = 10.0,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """
    Plot the local-alignment table H as a heatmap.

    Cells on the traceback path are outlined: diagonal steps on equal
    symbols in PATH_COLORS['match'], skips in PATH_COLORS['skip'].  The
    traceback start cell (global maximum) gets a gold box.

    Parameters
    ----------
    result : LocalAlignmentResult
        Result from run_local_dp(..., return_data=True).
    s, t : str
        Row and column sequences used for the alignment.
    config : AlignmentConfig, optional
        If given, symbols with a zero gap penalty are colored
        SYMBOL_COLORS['gap_free'] in the tick labels.
    ax : matplotlib Axes, optional
        Axes to draw into; a new figure is created otherwise.

    Returns
    -------
    fig : matplotlib.figure.Figure
    """
    if result.data is None:
        raise ValueError(
            "plot_score_matrix requires result.data (ScoreData). "
            "Run the aligner with return_data=True."
        )

    data = result.data
    H = np.asarray(data.H, dtype=float)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    xticklabels = [""] + list(t)
    yticklabels = [""] + list(s)

    sns.heatmap(
        H,
        ax=ax,
        cmap=sns.color_palette(colormap, as_cmap=True),
        vmin=0,
        square=True,
        cbar=True,
        annot=annotate,
        fmt=".0f",
        xticklabels=xticklabels,
        yticklabels=yticklabels,
    )
    ax.set_title(f"Local alignment: {result.aligned!r} (score {result.score})")
    ax.set_xlabel("t (columns)")
    ax.set_ylabel("s (rows)")
    ax.tick_params(top=True, bottom=False, labeltop=True, labelbottom=False)
    ax.xaxis.set_label_position("top")

    matched = set(result.aligned)

    def _label_color(lab: str) -> str:
        if config is not None and lab and config.gap_penalty(lab) == 0:
            return SYMBOL_COLORS['gap_free']
        if lab in matched:
            return SYMBOL_COLORS['match']
        return SYMBOL_COLORS['other']

    for ticks, labels in ((ax.get_xticklabels(), xticklabels), (ax.get_yticklabels(), yticklabels)):
        for tick, lab in zip(ticks, labels):
            tick.set_rotation(0)
            tick.set_color(_label_color(lab))
            tick.set_fontweight("bold")
            tick.set_fontsize(tick_fontsize)

    # Path overlay
    for i, j in result.path:
        is_match = s[i - 1] == t[j - 1]
        ax.plot(
            j + 0.5,
            i + 0.5,
            marker="s",
            markersize=marker_size,
            markeredgecolor=PATH_COLORS['match'] if is_match else PATH_COLORS['skip'],
            markerfacecolor="none",
            markeredgewidth=marker_width,
        )

    if data.best_score > 0:
        ax.add_patch(Rectangle(
            (data.best_j, data.best_i), 1, 1,
            fill=False,
            edgecolor=PATH_COLORS['best'],
            linewidth=marker_width + 1,
        ))

    return fig
