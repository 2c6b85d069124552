"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_EXTENSIONS: List[str] = [".md", ".ts", ".tsx", ".js", ".jsx", ".py", ".rs", ".go"]
DEFAULT_EXCLUDED_DIRS: List[str] = [
    "node_modules",
    "venv",
    ".venv",
    "target",
    ".git",
    "dist",
    "build",
    "__pycache__",
    ".pnpm-store",
    ".netlify",
    "archives",
    ".next",
    ".cache",
    "coverage",
]

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    hash_dim: int = Field(default=2048, gt=0, alias="SIMILAR_HASH_DIM")
    content_excerpt_length: int = Field(default=1000, alias="SIMILAR_EXCERPT_LENGTH")
    threshold: float = Field(default=0.1, alias="SIMILAR_THRESHOLD")
    top: int = Field(default=10, alias="SIMILAR_TOP")

    allowed_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS), alias="SIMILAR_ALLOWED_EXTENSIONS"
    )
    excluded_dirs: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS), alias="SIMILAR_EXCLUDED_DIRS"
    )

    # "corpus" reuses the index's document frequencies, "query" scores a query against itself only
    query_idf: Literal["corpus", "query"] = Field(default="corpus", alias="SIMILAR_QUERY_IDF")

    index_store_backend: str = Field(default="json", alias="SIMILAR_INDEX_STORE_BACKEND")
    index_dir_name: str = Field(default=".similar-files", alias="SIMILAR_INDEX_DIR_NAME")

    admin_token: SecretStr | None = Field(default=None, alias="ADMIN_TOKEN")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()


class SimilarityConfig(BaseModel):
    """
    Immutable knobs for one build or query operation.

    Built from ``settings`` by default; tests and callers may construct their own.
    """

    model_config = ConfigDict(frozen=True)

    hash_dim: int = Field(default=2048, gt=0)
    content_excerpt_length: int = 1000
    threshold: float = 0.1
    top: int = 10
    allowed_extensions: Tuple[str, ...] = tuple(DEFAULT_ALLOWED_EXTENSIONS)
    excluded_dirs: Tuple[str, ...] = tuple(DEFAULT_EXCLUDED_DIRS)
    query_idf: Literal["corpus", "query"] = "corpus"
    index_dir_name: str = ".similar-files"

    @classmethod
    def from_settings(cls, source: Settings) -> "SimilarityConfig":
        return cls(
            hash_dim=source.hash_dim,
            content_excerpt_length=source.content_excerpt_length,
            threshold=source.threshold,
            top=source.top,
            allowed_extensions=tuple(ext.lower() for ext in source.allowed_extensions),
            excluded_dirs=tuple(source.excluded_dirs),
            query_idf=source.query_idf,
            index_dir_name=source.index_dir_name,
        )


def default_config() -> SimilarityConfig:
    return SimilarityConfig.from_settings(settings)


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    return logging.getLogger("similar_files")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"admin_token"},
        exclude_none=True,
    )


__all__ = [
    "Settings",
    "SimilarityConfig",
    "settings",
    "default_config",
    "setup_logging",
    "public_settings",
    "DEFAULT_ALLOWED_EXTENSIONS",
    "DEFAULT_EXCLUDED_DIRS",
]
