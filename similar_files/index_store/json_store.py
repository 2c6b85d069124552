"""
JSON file IndexStore implementation.

The whole index is rewritten on every save: the payload goes to a temporary
file in the index directory which is then renamed over ``index.json``, so a
concurrent reader sees either the previous index or the new one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from similar_files.errors import CorruptIndexError, IndexNotFoundError
from similar_files.index_store.base import IndexStore
from similar_files.models.schemas import INDEX_VERSION, SimilarityIndex

INDEX_FILE_NAME = "index.json"

logger = logging.getLogger(__name__)


def default_index_dir(workspace_root: str | Path, dir_name: str = ".similar-files") -> Path:
    return Path(workspace_root) / dir_name


def index_file_path(index_dir: str | Path) -> Path:
    return Path(index_dir) / INDEX_FILE_NAME


class JsonIndexStore(IndexStore):
    def __init__(self, index_dir: str | Path) -> None:
        self.index_dir = Path(index_dir)
        self.index_file = index_file_path(self.index_dir)

    def exists(self) -> bool:
        return self.index_file.is_file()

    def save(self, index: SimilarityIndex) -> None:
        self.index_dir.mkdir(parents=True, exist_ok=True)
        payload = index.model_dump_json(by_alias=True, indent=2)

        fd, tmp_name = tempfile.mkstemp(prefix=".index-", suffix=".tmp", dir=self.index_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.index_file)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(
            "Index written",
            extra={"index_file": str(self.index_file), "doc_count": index.doc_count, "hash_dim": index.hash_dim},
        )

    def load(self) -> SimilarityIndex:
        try:
            raw = self.index_file.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise IndexNotFoundError(self.index_file) from exc
        except UnicodeDecodeError as exc:
            raise CorruptIndexError(self.index_file, "not valid UTF-8") from exc
        except OSError as exc:
            raise CorruptIndexError(self.index_file, f"cannot read index ({exc.strerror or exc})") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptIndexError(self.index_file, f"not valid JSON ({exc.msg})") from exc

        if not isinstance(data, dict):
            raise CorruptIndexError(self.index_file, "top-level value is not an object")
        if "version" not in data:
            raise CorruptIndexError(self.index_file, "missing version")
        if data["version"] != INDEX_VERSION:
            raise CorruptIndexError(
                self.index_file, f"unsupported version {data['version']!r} (expected {INDEX_VERSION})"
            )

        try:
            index = SimilarityIndex.model_validate(data)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ())) or "index"
            raise CorruptIndexError(self.index_file, f"{location}: {first.get('msg')}") from exc

        logger.debug("Index loaded", extra={"index_file": str(self.index_file), "doc_count": index.doc_count})
        return index


__all__ = ["JsonIndexStore", "INDEX_FILE_NAME", "default_index_dir", "index_file_path"]
