"""Test fixtures and configuration."""

import logging
from pathlib import Path
from typing import Dict

import pytest

from similar_files.config import SimilarityConfig


def pytest_configure(config):
    """Configure logging to be visible for all tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s:%(name)s:%(message)s",
    )


@pytest.fixture
def small_config() -> SimilarityConfig:
    """64 buckets keep cat/dog/bird collision free (buckets 14, 37 and 1)."""
    return SimilarityConfig(hash_dim=64)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace with numeric file stems so filenames add no words to the content."""
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "001.md").write_text("cat dog cat", encoding="utf-8")
    (root / "002.md").write_text("dog bird", encoding="utf-8")
    (root / "003.md").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def project_tree(tmp_path: Path) -> Dict[str, Path]:
    """A small code project with excluded, hidden and unreadable entries."""
    root = tmp_path / "project"
    files = {
        "readme": root / "README.md",
        "auth": root / "src" / "auth_middleware.py",
        "session": root / "src" / "session-store.ts",
        "vendored": root / "node_modules" / "lib" / "index.js",
        "hidden": root / ".obsidian" / "notes.md",
        "text": root / "notes.txt",
    }
    for path in files.values():
        path.parent.mkdir(parents=True, exist_ok=True)

    files["readme"].write_text(
        "---\ntitle: Project Overview\ntags:\n  - auth\n  - sessions\n---\n"
        "# Overview\n\nThe project authenticates users and stores sessions.\n",
        encoding="utf-8",
    )
    files["auth"].write_text(
        '"""Authentication middleware for incoming requests."""\n\n'
        "def authenticate(request):\n    token = request.headers.get('token')\n    return verify_token(token)\n",
        encoding="utf-8",
    )
    files["session"].write_text(
        "/** Session store backed by memory */\n"
        "export class SessionStore {\n  get(token) { return this.sessions[token]; }\n}\n",
        encoding="utf-8",
    )
    files["vendored"].write_text("module.exports = function authenticate() {};\n", encoding="utf-8")
    files["hidden"].write_text("authentication notes\n", encoding="utf-8")
    files["text"].write_text("authentication plain text\n", encoding="utf-8")

    files["binary"] = root / "src" / "blob.py"
    files["binary"].write_bytes(b"\xff\xfe\x00\x80 not utf-8")
    return files
