from pathlib import Path

import pytest

from similar_files.config import DEFAULT_ALLOWED_EXTENSIONS, DEFAULT_EXCLUDED_DIRS
from similar_files.errors import UnreadableDocumentError
from similar_files.indexing.discovery import iter_workspace_files
from similar_files.indexing.parser import (
    build_enriched_content,
    extract_tags,
    extract_title,
    filename_words,
    fingerprint_text,
    load_document,
    parse_frontmatter,
    strip_frontmatter,
)

NOTE = """---
title: "Auth Design"
description: How sessions are issued
tags:
  - auth
  - 'security'
draft:
---
# Heading Title

Body text here.
"""


def test_parse_frontmatter_fields_and_block_list():
    frontmatter, body = parse_frontmatter(NOTE)
    assert frontmatter["title"] == "Auth Design"
    assert frontmatter["description"] == "How sessions are issued"
    assert frontmatter["tags"] == ["auth", "security"]
    assert "draft" not in frontmatter
    assert body.startswith("# Heading Title")


def test_parse_frontmatter_inline_list_and_absent_block():
    frontmatter, _ = parse_frontmatter("---\ntags: [one, \"two\"]\n---\nbody\n")
    assert frontmatter == {"tags": ["one", "two"]}
    assert parse_frontmatter("# no frontmatter\n") == (None, "# no frontmatter\n")
    assert strip_frontmatter(NOTE).startswith("# Heading Title")


def test_extract_tags_variants():
    assert extract_tags(None) == []
    assert extract_tags({"tags": ["a", "b"]}) == ["a", "b"]
    assert extract_tags({"tags": "a, b c"}) == ["a", "b", "c"]


def test_filename_words():
    assert filename_words("src/session-store.ts") == "session store"
    assert filename_words("auth_middleware.py") == "auth middleware"
    assert filename_words("202601310041.md") is None


def test_enriched_content_includes_metadata_filename_and_body():
    enriched = build_enriched_content(NOTE, "docs/auth-design.md")
    lines = enriched.enriched_content.split("\n")
    assert lines[:4] == ["Auth Design", "How sessions are issued", "auth security", "auth design"]
    assert enriched.enriched_content.endswith("Body text here.\n")
    assert enriched.tags == ["auth", "security"]


def test_extract_title_precedence():
    assert extract_title("# Heading\n", "x.md", {"title": "Front"}) == "Front"
    assert extract_title("intro\n# Heading  \n", "x.md") == "Heading"
    assert extract_title('"""Module docstring."""\n', "x.py") == "Module docstring."
    assert extract_title("//! Crate docs\n", "lib.rs") == "Crate docs"
    assert extract_title("/** Store helpers */\n", "store.ts") == "Store helpers"
    assert extract_title("plain body\n", "dir/plain-file.go") == "plain-file"


def test_fingerprint_is_stable_content_hash():
    assert fingerprint_text("abc") == fingerprint_text("abc")
    assert fingerprint_text("abc") != fingerprint_text("abd")
    assert len(fingerprint_text("abc")) == 16


def test_load_document_builds_document_and_metadata(project_tree):
    root = project_tree["readme"].parent
    document, metadata = load_document(project_tree["readme"], root)
    assert document.id == "README.md"
    assert document.title == "Project Overview"
    assert "auth sessions" in document.content
    assert metadata.path == "README.md"
    assert metadata.ext == ".md"
    assert metadata.tags == ["auth", "sessions"]


def test_load_document_rejects_non_utf8(project_tree):
    root = project_tree["readme"].parent
    with pytest.raises(UnreadableDocumentError):
        load_document(project_tree["binary"], root)


def test_discovery_filters_and_orders(project_tree):
    root = project_tree["readme"].parent
    found = [
        path.relative_to(root).as_posix()
        for path in iter_workspace_files(root, DEFAULT_ALLOWED_EXTENSIONS, DEFAULT_EXCLUDED_DIRS)
    ]
    assert found == ["README.md", "src/auth_middleware.py", "src/blob.py", "src/session-store.ts"]


def test_discovery_extension_match_is_case_insensitive(tmp_path: Path):
    (tmp_path / "UPPER.MD").write_text("x", encoding="utf-8")
    (tmp_path / "keep.py").write_text("x", encoding="utf-8")
    found = sorted(p.name for p in iter_workspace_files(tmp_path, [".md"], []))
    assert found == ["UPPER.MD"]
