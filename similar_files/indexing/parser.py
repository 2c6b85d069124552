"""
Document parsing utilities: frontmatter, titles, tags and enriched content.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from similar_files.engine.vectorizer import Document
from similar_files.errors import UnreadableDocumentError
from similar_files.models.schemas import DocumentMetadata

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n(.*)\Z", flags=re.DOTALL)
KEY_VALUE_PATTERN = re.compile(r"^(\w+):\s*(.*?)\s*$")
LIST_ITEM_PATTERN = re.compile(r"^\s+-\s*(.+?)\s*$")
HEADING_PATTERN = re.compile(r"^#\s+(.+)$", flags=re.MULTILINE)
DOC_COMMENT_PATTERN = re.compile(r'^(?:"""|//!|/\*\*)\s*(.+?)\s*(?:"""|\*/|$)', flags=re.MULTILINE)
NUMERIC_STEM_PATTERN = re.compile(r"^\d+$")

FINGERPRINT_LENGTH = 16

Frontmatter = Dict[str, object]


@dataclass
class EnrichedContent:
    enriched_content: str
    body: str
    frontmatter: Frontmatter | None = None
    tags: List[str] = field(default_factory=list)


def _unquote(value: str) -> str:
    return value.strip().strip("\"'").strip()


def _parse_inline_list(value: str) -> List[str] | None:
    if value.startswith("[") and value.endswith("]"):
        return [_unquote(item) for item in value[1:-1].split(",") if _unquote(item)]
    return None


def parse_frontmatter(content: str) -> Tuple[Frontmatter | None, str]:
    """
    Split a leading ``---`` YAML block from ``content``.

    Only the subset used by notes is understood: ``key: value`` pairs, inline
    ``[a, b]`` lists and block lists of ``- item`` lines under an empty key.
    Returns ``(None, content)`` when there is no frontmatter.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content

    block, body = match.group(1), match.group(2)
    frontmatter: Frontmatter = {}
    current_key: str | None = None

    for line in block.splitlines():
        item = LIST_ITEM_PATTERN.match(line)
        if item and current_key is not None:
            values = frontmatter.setdefault(current_key, [])
            if isinstance(values, list):
                values.append(_unquote(item.group(1)))
            continue

        pair = KEY_VALUE_PATTERN.match(line)
        if not pair:
            continue
        key, value = pair.group(1), pair.group(2)
        inline = _parse_inline_list(value)
        if inline is not None:
            frontmatter[key] = inline
            current_key = None
        elif _unquote(value):
            frontmatter[key] = _unquote(value)
            current_key = None
        else:
            # an empty value may open a block list
            current_key = key

    return frontmatter, body


def strip_frontmatter(content: str) -> str:
    return parse_frontmatter(content)[1]


def extract_tags(frontmatter: Frontmatter | None) -> List[str]:
    if not frontmatter:
        return []
    tags = frontmatter.get("tags")
    if isinstance(tags, list):
        return [str(tag) for tag in tags]
    if isinstance(tags, str) and tags:
        return [tag for tag in re.split(r"[,\s]+", tags) if tag]
    return []


def filename_words(filename: str | Path) -> str | None:
    """kebab-case / snake_case stem as words; None for purely numeric ids like 202601310041."""
    stem = Path(filename).stem
    if not stem or NUMERIC_STEM_PATTERN.match(stem):
        return None
    return re.sub(r"[-_]", " ", stem)


def build_enriched_content(content: str, filename: str | Path) -> EnrichedContent:
    frontmatter, body = parse_frontmatter(content)
    tags = extract_tags(frontmatter)

    parts: List[str] = []
    if frontmatter:
        for key in ("title", "description"):
            value = frontmatter.get(key)
            if isinstance(value, str) and value:
                parts.append(value)
        if tags:
            parts.append(" ".join(tags))

    name_words = filename_words(filename)
    if name_words:
        parts.append(name_words)

    parts.append(body)
    return EnrichedContent(enriched_content="\n".join(parts), body=body, frontmatter=frontmatter, tags=tags)


def extract_title(body: str, filename: str | Path, frontmatter: Frontmatter | None = None) -> str:
    if frontmatter:
        title = frontmatter.get("title")
        if isinstance(title, str) and title:
            return title

    heading = HEADING_PATTERN.search(body)
    if heading:
        return heading.group(1).strip()

    doc_comment = DOC_COMMENT_PATTERN.search(body)
    if doc_comment and doc_comment.group(1).strip():
        return doc_comment.group(1).strip()

    return Path(filename).stem


def fingerprint_text(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise UnreadableDocumentError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise UnreadableDocumentError(path, exc.strerror or str(exc)) from exc


def load_document(path: Path, root: Path) -> Tuple[Document, DocumentMetadata]:
    """
    Read one workspace file and build its vectorizer input and index metadata.

    Raises UnreadableDocumentError when the file cannot be read as UTF-8 text.
    Metadata extraction is best effort: on failure the filename stem becomes the
    title, tags are empty and the raw content is vectorized.
    """
    content = read_text(path)
    relative_path = path.relative_to(root).as_posix()

    try:
        enriched = build_enriched_content(content, path)
        title = extract_title(enriched.body, path, enriched.frontmatter)
    except Exception:
        logger.warning("Metadata extraction failed, using filename", extra={"doc": relative_path}, exc_info=True)
        enriched = EnrichedContent(enriched_content=content, body=content)
        title = path.stem

    document = Document(id=relative_path, title=title, content=enriched.enriched_content)
    metadata = DocumentMetadata(
        id=relative_path,
        path=relative_path,
        title=title,
        fingerprint=fingerprint_text(content),
        ext=path.suffix.lower(),
        tags=enriched.tags,
    )
    return document, metadata


__all__ = [
    "EnrichedContent",
    "parse_frontmatter",
    "strip_frontmatter",
    "extract_tags",
    "filename_words",
    "build_enriched_content",
    "extract_title",
    "fingerprint_text",
    "read_text",
    "load_document",
]
