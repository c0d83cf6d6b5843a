"""
Corpus builder - tokenizes combined document texts and aggregates statistics.

The corpus is built once per index and never modified afterwards:
- N: number of documents
- avgdl: average document length in tokens
- document_frequencies: {term: number of documents containing term}

Document frequencies are computed while tokenizing instead of rescanning all
documents for every query term; the resulting counts are the same.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Single tokenized document owned by a Corpus"""
    doc_id: int                 # Position of the source record in the input
    text: str                   # Combined (weighted) text
    tokens: Tuple[str, ...]
    term_frequencies: Counter = field(repr=False)

    @property
    def length(self) -> int:
        return len(self.tokens)


@dataclass(frozen=True)
class Corpus:
    documents: Tuple[Document, ...]
    avgdl: float
    document_frequencies: Counter = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.documents)

    def document_frequency(self, term: str) -> int:
        return self.document_frequencies.get(term, 0)


def build_corpus(texts: Iterable[str], case_sensitive: bool = False) -> Corpus:
    """
    Build a corpus from combined document texts.

    Args:
        texts: Combined text per document, in input order
        case_sensitive: Passed through to the tokenizer

    Returns:
        Corpus with documents in input order

    Example:
        >>> corpus = build_corpus(["kubernetes pod deployment", "pod configuration"])
        >>> corpus.size, corpus.avgdl
        (2, 2.5)
        >>> corpus.document_frequency("pod")
        2
    """
    documents = []
    document_frequencies: Counter = Counter()
    total_tokens = 0

    for doc_id, text in enumerate(texts):
        tokens = tuple(tokenize(text, case_sensitive))
        term_frequencies = Counter(tokens)
        document_frequencies.update(term_frequencies.keys())
        total_tokens += len(tokens)
        documents.append(Document(doc_id, text, tokens, term_frequencies))

    avgdl = total_tokens / len(documents) if documents else 0.0

    logger.debug(
        f"Built corpus: {len(documents)} documents, avgdl={avgdl:.2f}, "
        f"{len(document_frequencies)} unique terms"
    )

    return Corpus(tuple(documents), avgdl, document_frequencies)
