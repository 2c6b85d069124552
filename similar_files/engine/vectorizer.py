"""
TF-IDF vectorizer folded into a fixed dimension with feature hashing.

Corpus mode (``fit_transform``) computes document frequencies across the given
documents and returns one L2-normalised row per document. Single document mode
(``transform``) weights a lone query either against persisted corpus
statistics or, when none are given, against itself (every IDF is then 1 and
the weighting is plain term frequency).
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from similar_files.engine.hashing import hash_term
from similar_files.engine.tokenizer import DEFAULT_EXCERPT_LENGTH, tokenize


@dataclass
class Document:
    id: str
    title: str
    content: str


@dataclass
class CorpusStatistics:
    """Document count and per-bucket document frequencies of an indexed corpus."""

    doc_count: int
    doc_frequencies: Dict[int, int] = field(default_factory=dict)


def smoothed_idf(doc_count: int, doc_frequency: int) -> float:
    # ln((1 + N) / (1 + df)) + 1 stays positive, even when a term is in every document
    return math.log((1 + doc_count) / (1 + doc_frequency)) + 1.0


def l2_normalize(vector: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        return vector
    return vector / norm


class HashingTfidfVectorizer:
    def __init__(self, hash_dim: int = 2048, excerpt_length: int = DEFAULT_EXCERPT_LENGTH) -> None:
        if hash_dim < 1:
            raise ValueError(f"Hash dimension must be positive, got {hash_dim}")
        self.hash_dim = hash_dim
        self.excerpt_length = excerpt_length

    def term_frequencies(self, document: Document) -> Dict[str, float]:
        """Relative term frequency: occurrences of a term over all terms of the document."""
        counts = Counter(tokenize(document.content, self.excerpt_length))
        total = sum(counts.values())
        if total == 0:
            return {}
        return {term: count / total for term, count in counts.items()}

    def _fold(self, weights: Mapping[str, float]) -> np.ndarray:
        vector = np.zeros(self.hash_dim, dtype=np.float64)
        for term, weight in weights.items():
            vector[hash_term(term, self.hash_dim)] += weight
        return l2_normalize(vector)

    def _weigh(self, tf: Mapping[str, float], statistics: CorpusStatistics) -> np.ndarray:
        weights = {}
        for term, freq in tf.items():
            df = statistics.doc_frequencies.get(hash_term(term, self.hash_dim), 0)
            weights[term] = freq * smoothed_idf(statistics.doc_count, df)
        return self._fold(weights)

    def fit_transform(self, documents: Sequence[Document]) -> Tuple[np.ndarray, CorpusStatistics]:
        doc_count = len(documents)
        matrix = np.zeros((doc_count, self.hash_dim), dtype=np.float64)
        if doc_count == 0:
            return matrix, CorpusStatistics(doc_count=0)

        tfs: List[Dict[str, float]] = [self.term_frequencies(doc) for doc in documents]

        # document frequency is counted per bucket, the same statistic a query is weighted with
        bucket_df: Counter = Counter()
        for tf in tfs:
            bucket_df.update({hash_term(term, self.hash_dim) for term in tf})
        statistics = CorpusStatistics(doc_count=doc_count, doc_frequencies=dict(bucket_df))

        for row, tf in enumerate(tfs):
            matrix[row] = self._weigh(tf, statistics)
        return matrix, statistics

    def transform(self, document: Document, statistics: CorpusStatistics | None = None) -> np.ndarray:
        tf = self.term_frequencies(document)
        if statistics is None:
            # corpus of one: df == N == 1 for every term
            return self._fold({term: freq * smoothed_idf(1, 1) for term, freq in tf.items()})

        return self._weigh(tf, statistics)


def vectorize_documents(
    documents: Sequence[Document],
    hash_dim: int = 2048,
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> np.ndarray:
    matrix, _ = HashingTfidfVectorizer(hash_dim, excerpt_length).fit_transform(documents)
    return matrix


__all__ = [
    "Document",
    "CorpusStatistics",
    "HashingTfidfVectorizer",
    "vectorize_documents",
    "smoothed_idf",
    "l2_normalize",
]
