"""
Result assembly: threshold filter, ordering, truncation.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .fields import resolve_path
from .options import SortBy

_MISSING = object()


@dataclass
class SearchResult:
    """Single ranked record"""
    item: Any                   # Original record (not copied)
    score: float
    matches: List[str] = field(default_factory=list)  # Query terms found in the document


def identity_results(records: Sequence[Any]) -> List[SearchResult]:
    """Every record at score 0 in input order (query without usable terms)."""
    return [SearchResult(item=record, score=0.0) for record in records]


def _sort_key(value: Any) -> tuple:
    # Mixed types must stay comparable: numbers < strings < everything else
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def _apply_sort(results: List[SearchResult], sort_by: SortBy) -> List[SearchResult]:
    present = []
    missing = []
    for result in results:
        value = resolve_path(result.item, sort_by.property, _MISSING)
        if value is _MISSING or value is None:
            missing.append(result)
        else:
            present.append((_sort_key(value), result))

    # sorted() is stable for reverse=True as well
    present.sort(key=lambda pair: pair[0], reverse=sort_by.order == "DESC")
    return [result for _, result in present] + missing


def assemble_results(
    records: Sequence[Any],
    scores: Sequence[float],
    matches: Sequence[List[str]],
    threshold: float = 0.0,
    max_results: int = 50,
    sort_by: Optional[SortBy] = None,
) -> List[SearchResult]:
    """
    Filter, order and truncate scored records.

    Args:
        records: Records in input order
        scores: Score per record (same order)
        matches: Matched query terms per record (same order)
        threshold: Minimum score (inclusive)
        max_results: Maximum number of results
        sort_by: Sort by a record property instead of score

    Returns:
        Results ordered by score descending (ties keep input order), or by
        `sort_by` when given
    """
    candidates = [
        (position, SearchResult(item=record, score=score, matches=list(terms)))
        for position, (record, score, terms) in enumerate(zip(records, scores, matches))
        if score >= threshold
    ]

    if sort_by is not None:
        ordered = _apply_sort([result for _, result in candidates], sort_by)
    else:
        candidates.sort(key=lambda pair: (-pair[1].score, pair[0]))
        ordered = [result for _, result in candidates]

    return ordered[:max_results]
