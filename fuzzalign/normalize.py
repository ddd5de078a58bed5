"""
normalize.py — keyword pre-normalization and whitespace tokenization

The alignment core compares symbols by exact codepoint equality and never
normalizes.  These helpers bring a raw search keyword into the form the
catalog search expects before it reaches the matcher:

  - full-width ASCII letters and digits become half-width,
  - the ideographic space becomes an ASCII space,
  - half-width katakana become full-width (voiced marks composed),
  - long dashes and hyphens fold to "-", capital phi folds to "φ".
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import List

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_HALFWIDTH_KANA_RUN = re.compile("[｡-ﾟ]+")
_FULLWIDTH_ALNUM = re.compile("[０-９Ａ-Ｚａ-ｚ]")

# Full-width forms sit at a fixed offset from ASCII
_FULLWIDTH_OFFSET = 0xFEE0

SYMBOL_FOLDS = {
    "―": "-",  # horizontal bar
    "‐": "-",  # hyphen
    "Φ": "φ",  # Φ -> φ
}


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace with a single space."""
    return _WHITESPACE_RUN.sub(" ", text)


def split_tokens(text: str) -> List[str]:
    """
    Split text on whitespace into unique tokens.

    Tokens keep the order in which they first appear; empty strings are
    dropped, so an all-blank text yields no tokens.
    """
    tokens = collapse_whitespace(text).split(" ")
    return list(dict.fromkeys(tok for tok in tokens if tok))


def _halfwidth_alnum(match: re.Match) -> str:
    return chr(ord(match.group(0)) - _FULLWIDTH_OFFSET)


def _fullwidth_kana(match: re.Match) -> str:
    return unicodedata.normalize("NFKC", match.group(0))


def normalize_keyword(text: str) -> str:
    """
    Normalize a raw search keyword.

    Parameters
    ----------
    text : str
        Keyword as typed by the user.

    Returns
    -------
    str
        Trimmed keyword with width, kana and symbol folding applied.
        Internal whitespace is left as is; tokenization collapses it.
    """
    keyword = text.strip()
    if not keyword:
        return ""

    keyword = _FULLWIDTH_ALNUM.sub(_halfwidth_alnum, keyword)
    keyword = keyword.replace("　", " ")
    keyword = _HALFWIDTH_KANA_RUN.sub(_fullwidth_kana, keyword)
    for src, dst in SYMBOL_FOLDS.items():
        keyword = keyword.replace(src, dst)

    if keyword != text:
        logger.debug("Normalized keyword %r -> %r", text, keyword)
    return keyword
