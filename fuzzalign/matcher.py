"""
matcher.py — ratio-threshold fuzzy matching over catalog records

This module turns local alignments into match / no-match decisions.
For a (field, token) pair the alignment ratio is

    ratio = len(align(field, token)) / len(token)

and the pair passes when ratio >= threshold (inclusive).  An empty token
has ratio 1.0 and always passes.

Two record-level modes are provided:

  - "tokens": the query is split into unique whitespace tokens; a record
    matches when, for some candidate field (tried in priority order),
    every token passes against that field.
  - "query":  the whole query is one unit; a record matches when any
    candidate field passes.

exact_match implements the plain substring search used when fuzzy
matching is not requested.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .dp_core import AlignmentConfig, TIE_BREAKS, TIE_BREAK_UP, get_local_alignment
from .normalize import split_tokens
from . import default

logger = logging.getLogger(__name__)

MODE_TOKENS = "tokens"
MODE_QUERY = "query"
MATCH_MODES = (MODE_TOKENS, MODE_QUERY)

Record = Mapping[str, Any]


class SearchBudgetExceeded(RuntimeError):
    """Raised when a catalog search runs past its time budget."""


# ---------------------------------------------------------------------------
# Pair-level decisions
# ---------------------------------------------------------------------------

def alignment_ratio(
    field_text: str,
    token: str,
    config: Optional[AlignmentConfig] = None,
    tie_break: str = TIE_BREAK_UP,
) -> float:
    """
    Fraction of `token` recovered by the local alignment against `field_text`.

    Returns 1.0 for an empty token.
    """
    if len(token) == 0:
        return 1.0
    aligned = get_local_alignment(field_text, token, config, tie_break=tie_break)
    return len(aligned) / len(token)


def satisfies_threshold(
    field_text: str,
    token: str,
    threshold: float,
    config: Optional[AlignmentConfig] = None,
    tie_break: str = TIE_BREAK_UP,
) -> bool:
    """True when alignment_ratio(field_text, token) >= threshold."""
    return alignment_ratio(field_text, token, config, tie_break=tie_break) >= threshold


# ---------------------------------------------------------------------------
# Record-level decisions
# ---------------------------------------------------------------------------

def candidate_fields(record: Record, fields: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Collect (name, text) for each configured field present in record.

    Fields are returned in priority order; missing or None values are
    skipped and non-string values are converted with str().
    """
    present = []
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        present.append((name, value if isinstance(value, str) else str(value)))
    return present


def match_all_tokens(
    record: Record,
    tokens: Iterable[str],
    threshold: float,
    config: Optional[AlignmentConfig] = None,
    fields: Sequence[str] = default.DEFAULT_FIELDS,
    tie_break: str = TIE_BREAK_UP,
) -> bool:
    """
    All-tokens-per-field mode: some field must pass every token.

    Fields are tried in order and the first accepted field short-circuits.
    """
    tokens = list(dict.fromkeys(tokens))
    for name, text in candidate_fields(record, fields):
        if all(satisfies_threshold(text, tok, threshold, config, tie_break) for tok in tokens):
            logger.debug("Field %r accepted all %d tokens", name, len(tokens))
            return True
    return False


def match_whole_query(
    record: Record,
    query: str,
    threshold: float,
    config: Optional[AlignmentConfig] = None,
    fields: Sequence[str] = default.DEFAULT_FIELDS,
    tie_break: str = TIE_BREAK_UP,
) -> bool:
    """Whole-query mode: some field must pass the full query."""
    for name, text in candidate_fields(record, fields):
        if satisfies_threshold(text, query, threshold, config, tie_break):
            logger.debug("Field %r accepted query %r", name, query)
            return True
    return False


def exact_match(
    record: Record,
    keyword: str,
    *,
    name_field: str = default.NAME_FIELD,
    index_field: str = default.INDEX_FIELD,
    code_field: str = default.CODE_FIELD,
    unit_field: str = default.UNIT_FIELD,
    code_prefix_length: int = default.CODE_PREFIX_LENGTH,
) -> bool:
    """
    Plain substring search over one catalog record.

    A record matches when any of the following holds, checked in order:

      1. the index field contains every keyword token (case-insensitive),
      2. the name field contains the whole keyword (case-insensitive),
      3. the unit field equals the keyword,
      4. the code field contains the first `code_prefix_length`
         characters of the keyword (case-insensitive).
    """
    folded = keyword.casefold()

    index_text = record.get(index_field)
    if index_text is not None:
        index_text = str(index_text).casefold()
        if all(tok.casefold() in index_text for tok in split_tokens(keyword)):
            return True

    name = record.get(name_field)
    if name is not None and folded in str(name).casefold():
        return True

    unit = record.get(unit_field)
    if unit is not None and str(unit) == keyword:
        return True

    code = record.get(code_field)
    if code is not None and folded[:code_prefix_length] in str(code).casefold():
        return True

    return False


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenScore:
    """
    Diagnostic record for one (field, token) comparison.

    Attributes
    ----------
    field : str
        Name of the candidate field.
    token : str
        Query token (or the whole query in "query" mode).
    aligned : str
        Local-alignment string of field text and token.
    ratio : float
        len(aligned) / len(token), 1.0 for an empty token.
    passed : bool
        ratio >= threshold.
    """
    field: str
    token: str
    aligned: str
    ratio: float
    passed: bool


@dataclass(frozen=True)
class FuzzyMatcher:
    """
    Record filter applying a ratio threshold to local alignments.

    Attributes
    ----------
    config : AlignmentConfig or None
        Scoring parameters; None means plain LCS scoring.
    threshold : float
        Minimum alignment ratio, 0 < threshold <= 1.  Inclusive.
    fields : sequence of str
        Candidate field names in priority order.
    mode : {"tokens", "query"}
        Record-level decision mode.
    tie_break : {"up", "left"}
        Traceback tie-break passed to the aligner.
    time_budget : float or None
        Seconds allowed for one call to search(); None disables the check.
    max_symbols : int or None
        If set, field texts and tokens are truncated to this many symbols
        before alignment.
    """
    config: Optional[AlignmentConfig] = None
    threshold: float = default.DEFAULT_THRESHOLD
    fields: Sequence[str] = default.DEFAULT_FIELDS
    mode: str = MODE_TOKENS
    tie_break: str = TIE_BREAK_UP
    time_budget: Optional[float] = None
    max_symbols: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 < self.threshold <= 1:
            raise ValueError(f"threshold must satisfy 0 < threshold <= 1, got {self.threshold}")
        if self.mode not in MATCH_MODES:
            raise ValueError(f"Unknown mode: {self.mode!r}, expected one of {MATCH_MODES}")
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"Unknown tie_break: {self.tie_break!r}, expected one of {TIE_BREAKS}")
        if self.time_budget is not None and self.time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {self.time_budget}")
        if self.max_symbols is not None and self.max_symbols < 1:
            raise ValueError(f"max_symbols must be >= 1, got {self.max_symbols}")
        object.__setattr__(self, "fields", tuple(self.fields))

    def _cap(self, text: str) -> str:
        if self.max_symbols is None or len(text) <= self.max_symbols:
            return text
        logger.debug("Truncating %d symbols to %d", len(text), self.max_symbols)
        return text[: self.max_symbols]

    def _units(self, query: str) -> List[str]:
        if self.mode == MODE_QUERY:
            return [self._cap(query)]
        return [self._cap(tok) for tok in split_tokens(query)]

    def _fields(self, record: Record) -> List[Tuple[str, str]]:
        return [(name, self._cap(text)) for name, text in candidate_fields(record, self.fields)]

    def matches(self, record: Record, query: str) -> bool:
        """Decide whether `record` matches `query`."""
        units = self._units(query)
        for name, text in self._fields(record):
            if self.mode == MODE_QUERY:
                accepted = satisfies_threshold(
                    text, units[0], self.threshold, self.config, self.tie_break
                )
            else:
                accepted = all(
                    satisfies_threshold(text, tok, self.threshold, self.config, self.tie_break)
                    for tok in units
                )
            if accepted:
                logger.debug("Record matched on field %r", name)
                return True
        return False

    def explain(self, record: Record, query: str) -> List[TokenScore]:
        """
        Score every (field, token) pair of a record without short-circuiting.

        Useful for choosing thresholds; the decision made by matches() is
        unaffected.
        """
        scores = []
        for name, text in self._fields(record):
            for tok in self._units(query):
                if len(tok) == 0:
                    aligned, ratio = "", 1.0
                else:
                    aligned = get_local_alignment(text, tok, self.config, tie_break=self.tie_break)
                    ratio = len(aligned) / len(tok)
                scores.append(TokenScore(
                    field=name,
                    token=tok,
                    aligned=aligned,
                    ratio=ratio,
                    passed=ratio >= self.threshold,
                ))
        return scores

    def search(self, records: Iterable[Record], query: str) -> List[Record]:
        """
        Return the records matching `query`, in input order.

        Raises
        ------
        SearchBudgetExceeded
            If time_budget is set and the scan runs past it.
        """
        start = time.monotonic()
        hits = []
        scanned = 0
        for record in records:
            if self.time_budget is not None and time.monotonic() - start > self.time_budget:
                raise SearchBudgetExceeded(
                    f"Search for {query!r} exceeded {self.time_budget}s after {scanned} records"
                )
            scanned += 1
            if self.matches(record, query):
                hits.append(record)
        logger.debug("Query %r matched %d of %d records", query, len(hits), scanned)
        return hits
