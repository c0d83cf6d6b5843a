"""
Lexical (BM25) search over structured records.

Components:
- tokenizer: Case/punctuation normalization into terms
- fields: Field extraction from nested records and field weighting
- corpus: Tokenized documents plus corpus statistics (N, avgdl, df)
- scorer: Okapi BM25 with clamped idf
- results: Threshold filter, ordering, truncation
- options: Validated search configuration
- index: Two-phase API (build_index / search) and single-shot helpers

Everything is in-memory and synchronous: records in, ranked records out.
"""

from .tokenizer import tokenize
from .fields import extract_fields, combine_fields, field_weight, resolve_path
from .corpus import Corpus, Document, build_corpus
from .scorer import BM25Scorer
from .options import SearchOptions, SortBy
from .results import SearchResult
from .index import (
    LexicalIndex,
    build_index,
    search,
    search_once,
    simple_search,
    search_text,
    search_with_threshold,
)

__all__ = [
    "tokenize",
    "extract_fields",
    "combine_fields",
    "field_weight",
    "resolve_path",
    "Corpus",
    "Document",
    "build_corpus",
    "BM25Scorer",
    "SearchOptions",
    "SortBy",
    "SearchResult",
    "LexicalIndex",
    "build_index",
    "search",
    "search_once",
    "simple_search",
    "search_text",
    "search_with_threshold",
]
