from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

INDEX_VERSION = 4  # v4: per-bucket document frequencies stored for query weighting

SparseVector = Dict[int, float]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Index
class DocumentMetadata(_CamelModel):
    """Per-document metadata, index-aligned with the vectors list."""

    id: str
    path: str
    title: str
    fingerprint: str = Field(..., description="Content hash for change detection")
    ext: str
    tags: List[str] = Field(default_factory=list)


class SimilarityIndex(_CamelModel):
    """Persisted corpus: metadata and sparse TF-IDF vectors of one workspace."""

    version: int = INDEX_VERSION
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    root_path: str
    hash_dim: int = Field(..., gt=0)
    doc_count: int = Field(..., ge=0)
    metadata: List[DocumentMetadata]
    vectors: List[SparseVector]
    doc_frequencies: Dict[int, int] = Field(
        ..., description="Bucket index -> number of documents with a term in that bucket"
    )

    @model_validator(mode="after")
    def _check_alignment(self) -> "SimilarityIndex":
        if not (len(self.metadata) == len(self.vectors) == self.doc_count):
            raise ValueError(
                f"metadata ({len(self.metadata)}), vectors ({len(self.vectors)}) "
                f"and docCount ({self.doc_count}) disagree"
            )
        for position, vector in enumerate(self.vectors):
            for bucket in vector:
                if not 0 <= bucket < self.hash_dim:
                    raise ValueError(f"vector {position} has bucket {bucket} outside [0, {self.hash_dim})")
        for bucket in self.doc_frequencies:
            if not 0 <= bucket < self.hash_dim:
                raise ValueError(f"docFrequencies has bucket {bucket} outside [0, {self.hash_dim})")
        return self


# Admin
class ReindexRequest(BaseModel):
    """Request to rebuild the index of a workspace."""

    root: str = Field(..., min_length=1, description="Workspace root directory")
    index_dir: str | None = Field(default=None, description="Custom index directory")


class ReindexResponse(BaseModel):
    status: Literal["completed"] = Field(default="completed")
    indexed_documents: int = Field(..., ge=0)
    skipped: int = Field(default=0, ge=0)
    elapsed_sec: float | None = Field(None, ge=0)


# Search
class SimilarRequest(BaseModel):
    """Either ``path`` or ``text`` must be given."""

    path: str | None = None
    text: str | None = None
    top: int | None = Field(default=None, gt=0)
    threshold: float | None = None
    index_dir: str | None = None


class SimilarResult(_CamelModel):
    path: str
    title: str
    similarity: float
    ext: str


class SimilarResponse(_CamelModel):
    query: str
    workspace_root: str | None = None
    results: List[SimilarResult]


__all__ = [
    "INDEX_VERSION",
    "SparseVector",
    "DocumentMetadata",
    "SimilarityIndex",
    "ReindexRequest",
    "ReindexResponse",
    "SimilarRequest",
    "SimilarResult",
    "SimilarResponse",
]
