"""
Indexing pipeline: discover workspace files, vectorize, and save the index.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from similar_files.config import SimilarityConfig, default_config
from similar_files.engine.vectorizer import Document, HashingTfidfVectorizer
from similar_files.errors import UnreadableDocumentError
from similar_files.index_store import default_index_dir, get_index_store, to_sparse
from similar_files.indexing.discovery import iter_workspace_files
from similar_files.indexing.parser import load_document
from similar_files.models.schemas import DocumentMetadata, SimilarityIndex

logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    root: str
    index_file: str | None
    doc_count: int
    skipped: int
    elapsed_sec: float
    by_extension: Dict[str, int] = field(default_factory=dict)


def build_index(
    root: str | Path,
    config: SimilarityConfig | None = None,
    index_dir: str | Path | None = None,
    show_progress: bool = False,
) -> BuildSummary:
    started = time.time()
    config = config or default_config()
    root_path = Path(root).resolve()
    store = get_index_store(index_dir or default_index_dir(root_path, config.index_dir_name))

    logger.info("Scanning workspace", extra={"root": str(root_path), "index_dir": str(store.index_dir)})

    documents: List[Document] = []
    metadata: List[DocumentMetadata] = []
    skipped = 0

    files = iter_workspace_files(root_path, config.allowed_extensions, config.excluded_dirs)
    for path in tqdm(files, desc="Indexing", unit="files", disable=not show_progress):
        try:
            document, meta = load_document(path, root_path)
        except UnreadableDocumentError as exc:
            skipped += 1
            logger.warning("Skipping %s: %s", exc.path, exc.reason)
            continue
        documents.append(document)
        metadata.append(meta)

    if not documents:
        logger.info("No indexable files found", extra={"root": str(root_path), "skipped": skipped})
        return BuildSummary(
            root=str(root_path),
            index_file=None,
            doc_count=0,
            skipped=skipped,
            elapsed_sec=time.time() - started,
        )

    vectorizer = HashingTfidfVectorizer(config.hash_dim, config.content_excerpt_length)
    matrix, statistics = vectorizer.fit_transform(documents)

    index = SimilarityIndex(
        root_path=str(root_path),
        hash_dim=config.hash_dim,
        doc_count=len(documents),
        metadata=metadata,
        vectors=[to_sparse(row) for row in matrix],
        doc_frequencies=statistics.doc_frequencies,
    )
    store.save(index)

    by_extension = Counter(meta.ext for meta in metadata)
    elapsed = time.time() - started
    logger.info(
        "Index build completed",
        extra={"doc_count": index.doc_count, "skipped": skipped, "elapsed_sec": round(elapsed, 2)},
    )
    return BuildSummary(
        root=str(root_path),
        index_file=str(store.index_file),
        doc_count=index.doc_count,
        skipped=skipped,
        elapsed_sec=elapsed,
        by_extension=dict(by_extension.most_common()),
    )


class IndexService:
    """Service wrapper around ``build_index`` for CLI and API callers."""

    def __init__(
        self,
        config: SimilarityConfig | None = None,
        show_progress: bool = False,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.config = config or default_config()
        self.show_progress = show_progress
        self.logger = logger_ or logging.getLogger(__name__)

    def run(self, root: str | Path, index_dir: str | Path | None = None) -> BuildSummary:
        summary = build_index(root, self.config, index_dir=index_dir, show_progress=self.show_progress)
        self.logger.info(
            "IndexService completed",
            extra={"indexed_documents": summary.doc_count, "elapsed_sec": round(summary.elapsed_sec, 2)},
        )
        return summary


__all__ = ["build_index", "IndexService", "BuildSummary"]
