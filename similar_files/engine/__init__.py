"""
Similarity engine: tokenizer, feature hasher, TF-IDF vectorizer and ranker.
"""

from similar_files.engine.hashing import hash_term
from similar_files.engine.similarity import RankedMatch, cosine_similarity, present_score, rank, rank_matrix
from similar_files.engine.tokenizer import tokenize
from similar_files.engine.vectorizer import (
    CorpusStatistics,
    Document,
    HashingTfidfVectorizer,
    vectorize_documents,
)

__all__ = [
    "hash_term",
    "tokenize",
    "Document",
    "CorpusStatistics",
    "HashingTfidfVectorizer",
    "vectorize_documents",
    "RankedMatch",
    "cosine_similarity",
    "present_score",
    "rank",
    "rank_matrix",
]
