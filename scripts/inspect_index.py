"""
Utility script to inspect a built index without running a query.

Usage:
    python -m scripts.inspect_index --limit 5 --offset 0
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from similar_files.config import default_config
from similar_files.errors import SimilarFilesError
from similar_files.index_store import default_index_dir, get_index_store


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="similar-inspect", description="Inspect a similarity index.")
    parser.add_argument("--index", "-i", dest="index_dir", default=None, help="Index directory (default: ./.similar-files)")
    parser.add_argument("--limit", type=int, default=5, help="Number of documents to show")
    parser.add_argument("--offset", type=int, default=0, help="Offset for pagination")
    args = parser.parse_args(argv)

    store = get_index_store(args.index_dir or default_index_dir(Path.cwd(), default_config().index_dir_name))
    try:
        index = store.load()
    except SimilarFilesError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Index file: {store.index_file}")
    print(f"Version: {index.version}, created: {index.created_at.isoformat()}")
    print(f"Root: {index.root_path}")
    print(f"Hash dimension: {index.hash_dim}, documents: {index.doc_count}, buckets used: {len(index.doc_frequencies)}")

    window = range(args.offset, min(args.offset + args.limit, index.doc_count))
    print(f"Showing {len(window)} documents (offset={args.offset}, limit={args.limit})")
    for position in window:
        meta = index.metadata[position]
        print(f"\n#{position + 1}: {meta.path}")
        print("Metadata:", json.dumps(meta.model_dump(by_alias=True), ensure_ascii=False))
        print(f"Non-zero buckets: {len(index.vectors[position])}")


if __name__ == "__main__":
    main()
