"""
Index store interface.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from similar_files.models.schemas import SimilarityIndex


class IndexStore(Protocol):
    index_dir: Path
    index_file: Path

    def exists(self) -> bool:
        ...

    def save(self, index: SimilarityIndex) -> None:
        ...

    def load(self) -> SimilarityIndex:
        ...


__all__ = ["IndexStore"]
