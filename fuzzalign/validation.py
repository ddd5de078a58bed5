"""
validation.py — independent baselines and consistency checks for fuzzalign

This module provides an independent longest-common-subsequence length
(lcs_length) and small helpers for randomized regression tests.

The goals are:

  1. Verify that with the default scoring (match=1, mismatch=0, gap=0) the
     local alignment recovers exactly an LCS: len(align(s, t)) equals
     the LCS length of s and t.

  2. Verify structural properties of any alignment result: the aligned
     string is a common subsequence of both inputs, no longer than the
     shorter one, and every DP cell is non-negative.

lcs_length does not use dp_core, so bugs in the DP fill cannot mask
themselves during testing.
"""

from typing import Optional, Tuple

import numpy as np

from .dp_core import AlignmentConfig, LocalAlignmentResult, run_local_dp
from . import default


def lcs_length(s: str, t: str) -> int:
    """
    Classic LCS length via a two-row table.
    """
    prev = [0] * (len(t) + 1)
    for a in s:
        cur = [0]
        for j, b in enumerate(t, start=1):
            if a == b:
                cur.append(prev[j - 1] + 1)
            else:
                cur.append(max(prev[j], cur[j - 1]))
        prev = cur
    return prev[-1]


def is_subsequence(sub: str, text: str) -> bool:
    """True when `sub` can be obtained from `text` by deleting symbols."""
    it = iter(text)
    return all(ch in it for ch in sub)


def check_default_vs_lcs(s: str, t: str) -> Tuple[int, int]:
    """
    Return (len(local alignment), LCS length) under the default scoring.
    """
    result = run_local_dp(s, t, default.DEFAULT_CONFIG)
    return len(result.aligned), lcs_length(s, t)


def check_alignment_validity(
    result: LocalAlignmentResult,
    s: str,
    t: str,
) -> Tuple[bool, str]:
    """
    Check that an alignment result is structurally consistent.

    1. aligned is a subsequence of both s and t,
    2. len(aligned) <= min(len(s), len(t)),
    3. if the table is attached: shape is (n+1, m+1), all cells >= 0,
       the border is zero and result.score equals the table maximum.

    Returns
    -------
    (valid, message)
    """
    aligned = result.aligned
    if not is_subsequence(aligned, s):
        return False, f"{aligned!r} is not a subsequence of s={s!r}"
    if not is_subsequence(aligned, t):
        return False, f"{aligned!r} is not a subsequence of t={t!r}"
    if len(aligned) > min(len(s), len(t)):
        return False, f"Aligned length {len(aligned)} exceeds min({len(s)}, {len(t)})"

    data = result.data
    if data is not None:
        H = data.H
        if H.shape != (len(s) + 1, len(t) + 1):
            return False, f"Table shape {H.shape} != {(len(s) + 1, len(t) + 1)}"
        if np.any(H < 0):
            return False, "Table has negative cells"
        if np.any(H[0, :] != 0) or np.any(H[:, 0] != 0):
            return False, "Table border is not zero"
        if result.score != H.max():
            return False, f"Score {result.score} != table max {H.max()}"
    return True, "ok"


def run_random_checks(
    rng: np.random.Generator,
    alphabet: str,
    n_trials: int = 50,
    max_len: int = 12,
    config: Optional[AlignmentConfig] = None,
) -> Tuple[int, Optional[Tuple[str, str, str]]]:
    """
    Align random pairs over `alphabet` and validate every result.

    Returns
    -------
    n_ok : int
        Number of trials passing check_alignment_validity.
    first_failure : (s, t, message) or None
        The first failing case, if any.
    """
    symbols = list(alphabet)
    n_ok = 0
    first_failure = None
    for _ in range(n_trials):
        s = "".join(rng.choice(symbols, size=int(rng.integers(0, max_len + 1))))
        t = "".join(rng.choice(symbols, size=int(rng.integers(0, max_len + 1))))
        result = run_local_dp(s, t, config, return_data=True)
        valid, msg = check_alignment_validity(result, s, t)
        if valid:
            n_ok += 1
        elif first_failure is None:
            first_failure = (s, t, msg)
    return n_ok, first_failure
