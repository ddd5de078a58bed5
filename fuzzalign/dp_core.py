"""
dp_core.py — local-alignment dynamic programming core

This module implements the single-layer local alignment used for fuzzy
matching: a Smith-Waterman style score table with linear, per-symbol gap
penalties, followed by an iterative traceback that collects the matched
symbols on the best path.

The result of a traceback is a weighted common subsequence of the two
inputs, not necessarily a contiguous substring of either.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, List, Tuple, Optional

import numpy as np
from numpy.typing import NDArray


TIE_BREAK_UP = "up"
TIE_BREAK_LEFT = "left"
TIE_BREAKS = (TIE_BREAK_UP, TIE_BREAK_LEFT)


# ---------------------------------------------------------------------------
# Scoring parameters, DP state and output containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlignmentConfig:
    """
    Scoring parameters for a local alignment run.

    Attributes
    ----------
    match_score : int
        Reward added on the diagonal when two symbols are equal.

    mismatch_penalty : int
        Subtracted on the diagonal when two symbols differ.

    default_gap_penalty : int
        Cost of skipping one symbol in either sequence.

    penalty_map : mapping str -> int
        Per-symbol gap penalties overriding default_gap_penalty, e.g. to
        make a joining character nearly free to skip.  Stored as a
        read-only copy.
    """

    match_score: int = 1
    mismatch_penalty: int = 0
    default_gap_penalty: int = 0
    penalty_map: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "penalty_map", MappingProxyType(dict(self.penalty_map)))

    def gap_penalty(self, symbol: str) -> int:
        """Return the gap penalty for skipping `symbol`."""
        return self.penalty_map.get(symbol, self.default_gap_penalty)


@dataclass
class ScoreData:
    """
    Filled local-alignment table.

    Attributes
    ----------
    H : (n+1, m+1) array
        H[i, j] is the best local score over prefixes s[:i], t[:j].
        Row 0 and column 0 are zero; every cell is >= 0.  The array is
        marked read-only once filled.

    best_score : int
        Global maximum of H.

    best_i, best_j : int
        Coordinates of the first cell reaching best_score under a
        row-major scan.
    """

    H: NDArray[np.number]
    best_score: int
    best_i: int
    best_j: int


@dataclass
class LocalAlignmentResult:
    """
    Result of a single local alignment run.

    Attributes
    ----------
    aligned : str
        Matched symbols on the best path, read left to right.

    score : int
        Best local score (H at the traceback start cell).

    path : list of (i, j)
        Cells visited by the traceback, from the stopping cell to the
        start cell (forward order).

    data : ScoreData or None
        Full score table, if requested.
    """
    aligned: str
    score: int
    path: List[Tuple[int, int]]
    data: Optional[ScoreData] = None

    def __len__(self) -> int:
        return len(self.aligned)


# ---------------------------------------------------------------------------
# Table fill
# ---------------------------------------------------------------------------

def _table_dtype(config: AlignmentConfig):
    values = [config.match_score, config.mismatch_penalty, config.default_gap_penalty]
    values.extend(config.penalty_map.values())
    if all(isinstance(v, (int, np.integer)) for v in values):
        return np.int64
    return float


def fill_score_matrix(s: str, t: str, config: AlignmentConfig) -> ScoreData:
    """
    Fill the local-alignment table for s (rows) and t (columns).

    H[i, j] = max(0,
                  H[i-1, j-1] + match      if s[i-1] == t[j-1]
                  H[i-1, j-1] - mismatch   otherwise,
                  H[i-1, j]   - gap(s[i-1]),
                  H[i, j-1]   - gap(t[j-1]))

    Symbol comparison is exact codepoint equality; callers normalize
    upstream.  The maximum is updated on strictly greater values only, so
    the first maximal cell in row-major order is kept.
    """
    n, m = len(s), len(t)
    match = config.match_score
    mismatch = config.mismatch_penalty

    H = np.zeros((n + 1, m + 1), dtype=_table_dtype(config))
    t_gaps = [config.gap_penalty(ch) for ch in t]

    best_score = 0
    best_i = 0
    best_j = 0
    for i in range(1, n + 1):
        si = s[i - 1]
        gap_s = config.gap_penalty(si)
        prev = H[i - 1]
        row = H[i]
        for j in range(1, m + 1):
            if si == t[j - 1]:
                diag = prev[j - 1] + match
            else:
                diag = prev[j - 1] - mismatch
            up   = prev[j] - gap_s
            left = row[j - 1] - t_gaps[j - 1]
            score = max(0, diag, up, left)
            row[j] = score
            if score > best_score:
                best_score = score
                best_i = i
                best_j = j

    H.flags.writeable = False
    return ScoreData(H=H, best_score=H[best_i, best_j].item(), best_i=best_i, best_j=best_j)


# ---------------------------------------------------------------------------
# Traceback
# ---------------------------------------------------------------------------

def traceback_local(
    s: str,
    t: str,
    data: ScoreData,
    tie_break: str = TIE_BREAK_UP,
) -> Tuple[str, List[Tuple[int, int]]]:
    """
    Recover the matched symbols on the best path from the filled table.

    Starting at (best_i, best_j), walk back until i == 0, j == 0 or
    H[i, j] == 0.  Equal symbols are recorded and the walk steps
    diagonally.  Otherwise the walk moves to the larger of the up
    neighbour H[i-1, j] and the left neighbour H[i, j-1]; on equal
    scores tie_break decides ("up" consumes from s, "left" from t).

    Returns
    -------
    aligned : str
        Recorded symbols in left-to-right order.
    path : list of (i, j)
        Visited cells in forward order.
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"Unknown tie_break: {tie_break!r}, expected one of {TIE_BREAKS}")

    H = data.H
    i, j = data.best_i, data.best_j

    matched: List[str] = []
    path: List[Tuple[int, int]] = []

    while i > 0 and j > 0 and H[i, j] != 0:
        path.append((i, j))
        if s[i - 1] == t[j - 1]:
            matched.append(s[i - 1])
            i -= 1
            j -= 1
            continue

        up, left = H[i - 1, j], H[i, j - 1]
        if up > left or (up == left and tie_break == TIE_BREAK_UP):
            i -= 1
        else:
            j -= 1

    matched.reverse()
    path.reverse()

    return "".join(matched), path


# ---------------------------------------------------------------------------
# Top-level driver
# ---------------------------------------------------------------------------

def run_local_dp(
    s: str,
    t: str,
    config: Optional[AlignmentConfig] = None,
    tie_break: str = TIE_BREAK_UP,
    return_data: bool = False,
) -> LocalAlignmentResult:
    """
    Run the local-alignment DP for (s, t) and return the best alignment.

    Parameters
    ----------
    s, t : str
        Sequences to align; each character is one symbol.
    config : AlignmentConfig or None
        Scoring parameters.  None means match=1, mismatch=0, gap=0
        (longest-common-subsequence scoring).
    tie_break : {"up", "left"}
        Traceback move when the up and left neighbours score equally.
    return_data : bool, default False
        If True, attach the filled ScoreData to the result.
    """
    if config is None:
        config = AlignmentConfig()

    data = fill_score_matrix(s, t, config)
    aligned, path = traceback_local(s, t, data, tie_break=tie_break)

    return LocalAlignmentResult(
        aligned=aligned,
        score=data.best_score,
        path=path,
        data=data if return_data else None,
    )


def get_local_alignment(
    s: str,
    t: str,
    config: Optional[AlignmentConfig] = None,
    tie_break: str = TIE_BREAK_UP,
) -> str:
    """Return the best local-alignment string of s and t."""
    return run_local_dp(s, t, config, tie_break=tie_break).aligned
