"""
Feature hashing: maps a term to one of ``dim`` fixed buckets.
"""

from __future__ import annotations

import hashlib


def hash_term(term: str, dim: int) -> int:
    # builtin hash() is salted per process, so index and query would disagree
    if dim < 1:
        raise ValueError(f"Hash dimension must be positive, got {dim}")
    digest = hashlib.md5(term.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % dim


__all__ = ["hash_term"]
