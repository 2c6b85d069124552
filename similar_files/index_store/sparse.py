"""
Sparse encoding of hashed vectors for compact index storage.
"""

from __future__ import annotations

from typing import Dict, List, Mapping

import numpy as np

SPARSE_PRECISION = 4


def to_sparse(vector: np.ndarray, precision: int = SPARSE_PRECISION) -> Dict[int, float]:
    """
    Round non-zero weights to ``precision`` places, keyed by bucket index.

    Weights that round to 0 are dropped rather than stored as 0, so expanding and
    re-compressing yields the same mapping.
    """
    sparse: Dict[int, float] = {}
    for bucket in np.flatnonzero(vector):
        value = round(float(vector[bucket]), precision)
        if value != 0.0:
            sparse[int(bucket)] = value
    return sparse


def to_dense(sparse: Mapping[int, float], dim: int) -> np.ndarray:
    vector = np.zeros(dim, dtype=np.float64)
    for bucket, value in sparse.items():
        vector[int(bucket)] = value
    return vector


def to_matrix(vectors: List[Mapping[int, float]], dim: int) -> np.ndarray:
    matrix = np.zeros((len(vectors), dim), dtype=np.float64)
    for row, sparse in enumerate(vectors):
        for bucket, value in sparse.items():
            matrix[row, int(bucket)] = value
    return matrix


__all__ = ["to_sparse", "to_dense", "to_matrix", "SPARSE_PRECISION"]
