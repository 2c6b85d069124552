"""
Index store abstractions and factories.
"""

from pathlib import Path

from similar_files.config import settings
from similar_files.index_store.json_store import (
    INDEX_FILE_NAME,
    JsonIndexStore,
    default_index_dir,
    index_file_path,
)
from similar_files.index_store.sparse import to_dense, to_matrix, to_sparse

DEFAULT_INDEX_STORE_BACKEND = settings.index_store_backend


def get_index_store(index_dir: str | Path):
    """
    Factory to obtain configured IndexStore instance.
    Currently supports only the JSON file backend.
    """
    backend = DEFAULT_INDEX_STORE_BACKEND.lower()
    if backend == "json":
        return JsonIndexStore(index_dir)
    raise ValueError(f"Unsupported index store backend: {backend}")


__all__ = [
    "DEFAULT_INDEX_STORE_BACKEND",
    "INDEX_FILE_NAME",
    "JsonIndexStore",
    "default_index_dir",
    "get_index_store",
    "index_file_path",
    "to_dense",
    "to_matrix",
    "to_sparse",
]
