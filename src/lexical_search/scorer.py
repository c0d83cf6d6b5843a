"""
Okapi BM25 scorer.

BM25 (Best Match 25) is a probabilistic ranking function used for information retrieval.

Formula:
    score(D, Q) = Σ idf(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

Where:
    tf = term frequency of query term t in document D
    k1 = term frequency saturation parameter (default: 1.2)
    b = length normalization parameter (default: 0.75)
    dl = document length (number of tokens)
    avgdl = average document length across the corpus
    idf(t) = ln((N - df + 0.5) / (df + 0.5))

Terms that appear in half the corpus or more would get a zero or negative idf;
they are clamped to IDF_EPSILON so a match never lowers a score.
"""

import math
from typing import List, Sequence

from .corpus import Corpus, Document

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75
IDF_EPSILON = 0.1


class BM25Scorer:
    """
    BM25 scoring against a corpus built by build_corpus().
    """

    def __init__(self, k1: float = DEFAULT_K1, b: float = DEFAULT_B):
        """
        Initialize BM25 scorer.

        Args:
            k1: Term frequency saturation parameter
                Higher = more weight to term frequency
                Range: 1.2 - 2.0
                Default: 1.2 (standard)

            b: Length normalization parameter
                Higher = more penalty for long documents
                Range: 0.0 - 1.0
                Default: 0.75 (standard)
        """
        if k1 < 0:
            raise ValueError(f"k1 must be non-negative, got {k1}")
        if not 0 <= b <= 1:
            raise ValueError(f"b must be between 0 and 1, got {b}")
        self.k1 = k1
        self.b = b

    def idf(self, term: str, corpus: Corpus) -> float:
        """Inverse document frequency, never below IDF_EPSILON."""
        n = corpus.size
        df = corpus.document_frequency(term)
        value = math.log((n - df + 0.5) / (df + 0.5))
        return value if value > 0 else IDF_EPSILON

    def score(self, query_terms: Sequence[str], document: Document, corpus: Corpus) -> float:
        """
        Compute BM25 score for one document.

        Args:
            query_terms: Tokenized query (repeated terms count repeatedly)
            document: Document from `corpus`
            corpus: Corpus statistics

        Returns:
            BM25 score (>= 0, higher = more relevant)

        Example:
            >>> corpus = build_corpus(["search algorithms", "machine learning"])
            >>> BM25Scorer().score(["search"], corpus.documents[0], corpus) > 0
            True
        """
        if not query_terms or not document.tokens:
            return 0.0

        # avgdl > 0 whenever any document has tokens
        length_ratio = document.length / corpus.avgdl if corpus.avgdl else 0.0
        norm = self.k1 * (1 - self.b + self.b * length_ratio)

        score = 0.0
        for term in query_terms:
            tf = document.term_frequencies.get(term, 0)

            if tf == 0:
                continue

            numerator = tf * (self.k1 + 1)
            denominator = tf + norm
            score += self.idf(term, corpus) * numerator / denominator

        return score

    def score_all(self, query_terms: Sequence[str], corpus: Corpus) -> List[float]:
        """Scores for every document, in corpus order."""
        return [self.score(query_terms, document, corpus) for document in corpus.documents]
