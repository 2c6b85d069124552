"""
Cosine similarity ranking of candidate vectors against a query vector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, List, Sequence, Tuple

import numpy as np


@dataclass
class RankedMatch:
    id: str
    score: float
    position: int


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def _select(
    scored: List[RankedMatch],
    threshold: float,
    top: int,
) -> List[RankedMatch]:
    if top <= 0:
        return []
    kept = [match for match in scored if match.score >= threshold]
    # sorted() is stable, so equal scores keep their index order
    kept.sort(key=lambda match: match.score, reverse=True)
    return kept[:top]


def rank(
    query: np.ndarray,
    candidates: Sequence[Tuple[np.ndarray, str]],
    threshold: float = 0.1,
    top: int = 10,
    exclude: Collection[str] = (),
) -> List[RankedMatch]:
    """
    Score every candidate, drop excluded ids and scores below ``threshold``,
    then return the ``top`` best matches sorted by descending score.

    Scores are kept at full precision; rounding is left to presentation.
    """
    scored = [
        RankedMatch(id=candidate_id, score=cosine_similarity(query, vector), position=position)
        for position, (vector, candidate_id) in enumerate(candidates)
        if candidate_id not in exclude
    ]
    return _select(scored, threshold, top)


def rank_matrix(
    query: np.ndarray,
    matrix: np.ndarray,
    ids: Sequence[str],
    threshold: float = 0.1,
    top: int = 10,
    exclude: Collection[str] = (),
) -> List[RankedMatch]:
    """Same contract as ``rank`` with the candidates stacked as matrix rows."""
    if matrix.shape[0] != len(ids):
        raise ValueError(f"Got {matrix.shape[0]} vectors for {len(ids)} ids")
    if matrix.shape[0] == 0:
        return []

    query_norm = float(np.linalg.norm(query))
    row_norms = np.linalg.norm(matrix, axis=1)
    if query_norm == 0.0:
        scores = np.zeros(matrix.shape[0], dtype=np.float64)
    else:
        denominators = row_norms * query_norm
        dots = matrix @ query
        scores = np.divide(dots, denominators, out=np.zeros_like(dots), where=denominators > 0)

    scored = [
        RankedMatch(id=doc_id, score=float(scores[position]), position=position)
        for position, doc_id in enumerate(ids)
        if doc_id not in exclude
    ]
    return _select(scored, threshold, top)


def present_score(score: float) -> float:
    return round(score, 2)


__all__ = ["RankedMatch", "cosine_similarity", "rank", "rank_matrix", "present_score"]
