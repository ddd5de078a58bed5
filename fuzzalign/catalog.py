"""
catalog.py — product catalog loading and keyword search

Glue between a JSON product catalog and the matchers.  search_catalog
normalizes the raw keyword once and then filters records with one of

  - "normal": exact substring search (exact_match),
  - "fuzzy":  all-tokens-per-field fuzzy search,
  - "query":  whole-query fuzzy search.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .matcher import FuzzyMatcher, MODE_QUERY, MODE_TOKENS, Record, exact_match
from .normalize import normalize_keyword
from . import default

logger = logging.getLogger(__name__)

SEARCH_NORMAL = "normal"
SEARCH_FUZZY = "fuzzy"
SEARCH_QUERY = "query"
SEARCH_MODES = (SEARCH_NORMAL, SEARCH_FUZZY, SEARCH_QUERY)


def load_catalog(path: Union[str, Path]) -> List[Record]:
    """
    Load a catalog stored as a JSON array of objects.

    Raises
    ------
    FileNotFoundError
        If path does not exist.
    ValueError
        If the document is not a list of objects.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        records = json.load(fh)

    if not isinstance(records, list):
        raise ValueError(f"Catalog must be a JSON array, got {type(records).__name__}")
    for pos, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Catalog entry {pos} is not an object: {record!r}")

    logger.info("Loaded %d records from %s", len(records), path)
    return records


def search_catalog(
    records: Sequence[Record],
    keyword: str,
    mode: str = SEARCH_FUZZY,
    matcher: Optional[FuzzyMatcher] = None,
) -> List[Record]:
    """
    Filter catalog records by a raw search keyword.

    Parameters
    ----------
    records : sequence of mapping
        Catalog records.
    keyword : str
        Keyword as typed; normalized with normalize_keyword before use.
    mode : {"normal", "fuzzy", "query"}
        Search mode.
    matcher : FuzzyMatcher, optional
        Matcher for the fuzzy modes.  Defaults to the catalog scoring
        scheme; its mode is overridden to fit `mode`.

    Returns
    -------
    list of mapping
        Matching records in catalog order; every record for an empty
        keyword.
    """
    if mode not in SEARCH_MODES:
        raise ValueError(f"Unknown search mode: {mode!r}, expected one of {SEARCH_MODES}")

    keyword = normalize_keyword(keyword)
    if keyword == "":
        return list(records)

    if mode == SEARCH_NORMAL:
        hits = [record for record in records if exact_match(record, keyword)]
        logger.debug("Exact search for %r matched %d records", keyword, len(hits))
        return hits

    if matcher is None:
        matcher = FuzzyMatcher(**default.match_params())
    match_mode = MODE_QUERY if mode == SEARCH_QUERY else MODE_TOKENS
    if matcher.mode != match_mode:
        matcher = dataclasses.replace(matcher, mode=match_mode)

    return matcher.search(records, keyword)
