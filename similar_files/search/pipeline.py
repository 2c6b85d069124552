"""
Query pipeline: load the index, vectorize the query, rank indexed documents.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Set

import numpy as np

from similar_files.config import SimilarityConfig, default_config
from similar_files.engine.similarity import present_score, rank_matrix
from similar_files.engine.vectorizer import CorpusStatistics, Document, HashingTfidfVectorizer
from similar_files.errors import InvalidQueryError, UnreadableDocumentError
from similar_files.index_store import default_index_dir, get_index_store, to_matrix
from similar_files.indexing.parser import read_text, strip_frontmatter
from similar_files.models.schemas import SimilarityIndex, SimilarResponse, SimilarResult

logger = logging.getLogger(__name__)


@dataclass
class Query:
    kind: Literal["file", "text"]
    value: str

    @classmethod
    def from_file(cls, path: str | Path) -> "Query":
        return cls(kind="file", value=str(path))

    @classmethod
    def from_text(cls, text: str) -> "Query":
        return cls(kind="text", value=text)


@dataclass
class QueryContent:
    content: str
    title: str
    absolute_path: Path | None = None


class SimilarityService:
    """Finds indexed files similar to a file or a text query."""

    def __init__(
        self,
        config: SimilarityConfig | None = None,
        index_dir: str | Path | None = None,
        cwd: str | Path | None = None,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.config = config or default_config()
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.store = get_index_store(index_dir or default_index_dir(self.cwd, self.config.index_dir_name))
        self.logger = logger_ or logging.getLogger(__name__)

    # --- Public API ---
    def find_similar(
        self,
        query: Query,
        top: int | None = None,
        threshold: float | None = None,
    ) -> SimilarResponse:
        if not query.value or not query.value.strip():
            raise InvalidQueryError("No query file or text provided")

        top = self.config.top if top is None else top
        threshold = self.config.threshold if threshold is None else threshold

        index = self.store.load()
        workspace_root = Path(index.root_path) if index.root_path else None
        query_content = self._query_content(query, workspace_root)

        query_vector = self._vectorize_query(query_content, index)
        matrix = to_matrix(index.vectors, index.hash_dim)
        ids = [meta.id for meta in index.metadata]
        exclude = self._self_matches(query, query_content, index, workspace_root)

        matches = rank_matrix(query_vector, matrix, ids, threshold=threshold, top=top, exclude=exclude)
        results = [
            SimilarResult(
                path=index.metadata[match.position].path,
                title=index.metadata[match.position].title,
                similarity=present_score(match.score),
                ext=index.metadata[match.position].ext,
            )
            for match in matches
        ]

        self.logger.info(
            "Similarity query completed",
            extra={"kind": query.kind, "results": len(results), "excluded": len(exclude), "threshold": threshold},
        )
        return SimilarResponse(
            query=query.value if query.kind == "text" else query_content.title,
            workspace_root=str(workspace_root) if workspace_root else None,
            results=results,
        )

    # --- Internals ---
    def _query_content(self, query: Query, workspace_root: Path | None) -> QueryContent:
        if query.kind == "text":
            return QueryContent(content=query.value, title="Query")

        file_path = Path(query.value)
        if not file_path.is_absolute():
            file_path = self.cwd / file_path
        file_path = file_path.resolve()

        try:
            content = read_text(file_path)
        except UnreadableDocumentError as exc:
            raise InvalidQueryError(f"Cannot read file: {query.value} ({exc.reason})") from exc

        title = query.value
        if workspace_root is not None:
            title = Path(os.path.relpath(file_path, workspace_root)).as_posix()
        return QueryContent(content=strip_frontmatter(content), title=title, absolute_path=file_path)

    def _vectorize_query(self, query_content: QueryContent, index: SimilarityIndex) -> np.ndarray:
        vectorizer = HashingTfidfVectorizer(index.hash_dim, self.config.content_excerpt_length)
        statistics = None
        if self.config.query_idf == "corpus":
            statistics = CorpusStatistics(doc_count=index.doc_count, doc_frequencies=index.doc_frequencies)
        document = Document(id="query", title=query_content.title, content=query_content.content)
        return vectorizer.transform(document, statistics)

    @staticmethod
    def _self_matches(
        query: Query,
        query_content: QueryContent,
        index: SimilarityIndex,
        workspace_root: Path | None,
    ) -> Set[str]:
        if query.kind != "file":
            return set()

        excluded: Set[str] = set()
        for meta in index.metadata:
            doc_path = Path(meta.path)
            if workspace_root is not None:
                doc_path = (workspace_root / doc_path).resolve()
            if query_content.absolute_path is not None and doc_path == query_content.absolute_path:
                excluded.add(meta.id)
            elif meta.path == query_content.title:
                excluded.add(meta.id)
        return excluded


def find_similar(
    query: Query,
    config: SimilarityConfig | None = None,
    index_dir: str | Path | None = None,
    cwd: str | Path | None = None,
    top: int | None = None,
    threshold: float | None = None,
) -> SimilarResponse:
    service = SimilarityService(config=config, index_dir=index_dir, cwd=cwd)
    return service.find_similar(query, top=top, threshold=threshold)


def result_lines(response: SimilarResponse) -> List[str]:
    """Human readable rendering: rank, path, score, and the title when it adds information."""
    lines = [f"Similar files to: {response.query}"]
    if response.workspace_root:
        lines.append(f"Workspace: {response.workspace_root}")
    lines.append("")
    for position, result in enumerate(response.results, start=1):
        lines.append(f"{position}. {result.path} ({result.similarity:.2f})")
        if result.title != Path(result.path).stem:
            lines.append(f'   "{result.title}"')
    return lines


__all__ = ["Query", "QueryContent", "SimilarityService", "find_similar", "result_lines"]
