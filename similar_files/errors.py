"""
Error taxonomy shared by the build and query operations.
"""

from __future__ import annotations

from pathlib import Path

BUILD_HINT = "similar-index --root /path/to/workspace"


class SimilarFilesError(Exception):
    """Base class for errors surfaced to CLI and API callers."""


class IndexNotFoundError(SimilarFilesError):
    def __init__(self, index_file: str | Path) -> None:
        self.index_file = str(index_file)
        super().__init__(f"Index not found at: {self.index_file}. To create an index, run: {BUILD_HINT}")


class CorruptIndexError(SimilarFilesError):
    def __init__(self, index_file: str | Path, reason: str) -> None:
        self.index_file = str(index_file)
        self.reason = reason
        super().__init__(f"Invalid index format in {self.index_file}: {reason}. Rebuild it with: {BUILD_HINT}")


class UnreadableDocumentError(SimilarFilesError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class InvalidQueryError(SimilarFilesError):
    pass


__all__ = [
    "BUILD_HINT",
    "SimilarFilesError",
    "IndexNotFoundError",
    "CorruptIndexError",
    "UnreadableDocumentError",
    "InvalidQueryError",
]
