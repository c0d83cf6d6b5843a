"""
Two-phase lexical search API: build an index once, query it many times.

    index = build_index(records, {"fields": ["title", "body"]})
    results = search(index, "deployment strategies", {"maxResults": 5})

A LexicalIndex is immutable after build_index() returns and may be queried
from several threads at once. To refresh a corpus, build a new index and swap
the reference.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from src.text_chunker import chunk_text

from .corpus import Corpus, build_corpus
from .fields import combine_fields, extract_fields
from .options import SearchOptions, coerce_options
from .results import SearchResult, assemble_results, identity_results
from .scorer import BM25Scorer
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LexicalIndex:
    records: Tuple[Any, ...]
    options: SearchOptions
    corpus: Corpus

    def __len__(self) -> int:
        return len(self.records)


def _document_texts(records: Sequence[Any], options: SearchOptions) -> List[str]:
    return [
        combine_fields(extract_fields(record, options.fields), options.boost)
        for record in records
    ]


def build_index(records: Sequence[Any], options=None) -> LexicalIndex:
    """
    Build a searchable index over records.

    Args:
        records: Mappings to search (never mutated)
        options: SearchOptions, dict or None (defaults)

    Returns:
        LexicalIndex holding the records, options and corpus

    Raises:
        TypeError: If a record is not a mapping
        pydantic.ValidationError: If options are invalid
    """
    options = coerce_options(options)
    records = tuple(records)

    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise TypeError(
                f"Record {position} must be a mapping, got {type(record).__name__}"
            )

    corpus = build_corpus(_document_texts(records, options), options.case_sensitive)
    logger.debug(f"Built lexical index: {len(records)} records, fields={options.fields or 'all'}")

    return LexicalIndex(records=records, options=options, corpus=corpus)


def _matching_terms(query_terms: Sequence[str], tokens: Sequence[str]) -> List[str]:
    token_set = set(tokens)
    matches = []
    for term in query_terms:
        if term in token_set and term not in matches:
            matches.append(term)
    return matches


def search(index: LexicalIndex, query: Optional[str], options=None) -> List[SearchResult]:
    """
    Rank the index records against a query.

    Args:
        index: Index from build_index()
        query: Free-text query
        options: Per-call overrides (SearchOptions or dict). Only explicitly
            set values override the index options.

    Returns:
        Ranked SearchResult list. A query without usable terms returns every
        record at score 0 in input order.
    """
    effective = index.options
    if options is not None:
        effective = index.options.merged(coerce_options(options))

    query_terms = tokenize(query, effective.case_sensitive)
    if not query_terms:
        logger.debug(f"Query {query!r} has no searchable terms, returning all {len(index)} records")
        return identity_results(index.records)

    if not index.records:
        return []

    corpus = index.corpus
    if effective.corpus_key() != index.options.corpus_key():
        # Overrides change document text: score against a throwaway corpus
        corpus = build_corpus(_document_texts(index.records, effective), effective.case_sensitive)

    scorer = BM25Scorer(k1=effective.k1, b=effective.b)
    scores = scorer.score_all(query_terms, corpus)
    matches = [_matching_terms(query_terms, document.tokens) for document in corpus.documents]

    results = assemble_results(
        index.records,
        scores,
        matches,
        threshold=effective.threshold,
        max_results=effective.max_results,
        sort_by=effective.sort_by,
    )

    logger.debug(f"Query {query!r}: {len(query_terms)} terms, {len(results)} results")
    return results


def search_once(records: Sequence[Any], query: Optional[str], options=None) -> List[Any]:
    """Build a throwaway index, search it and return just the ranked records."""
    index = build_index(records, options)
    return [result.item for result in search(index, query)]


# Alias for callers that only want the ranked records
simple_search = search_once


def search_with_threshold(
    records: Sequence[Any],
    query: Optional[str],
    min_score: float,
    options=None,
) -> List[SearchResult]:
    """Single-shot search keeping only results scoring at least `min_score`."""
    options = coerce_options(options).merged(SearchOptions(threshold=min_score))
    return search(build_index(records, options), query)


def search_text(
    text: Optional[str],
    query: Optional[str],
    search_options=None,
    chunking_options=None,
) -> List[SearchResult]:
    """
    Chunk a long text and rank its chunks against a query.

    Each chunk is searched as the record {"text": chunk}.
    """
    records = [{"text": chunk} for chunk in chunk_text(text, chunking_options)]
    logger.debug(f"Searching {len(records)} chunks for {query!r}")
    return search(build_index(records, search_options), query)
