"""
CLI to build the similarity index of a workspace.

Example:
    python -m scripts.build_index --root /path/to/workspace
    python -m scripts.build_index -r . -i ~/.similar-files/myproject
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Sequence

from similar_files.config import default_config, setup_logging
from similar_files.indexing.pipeline import IndexService

PACKAGE_NAME = "similar-files"


def package_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+local"


def _normalize_extensions(values: Sequence[str]) -> List[str]:
    extensions = []
    for value in values:
        for ext in value.split(","):
            ext = ext.strip().lower()
            if ext:
                extensions.append(ext if ext.startswith(".") else f".{ext}")
    return extensions


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    config = default_config()
    parser = argparse.ArgumentParser(
        prog="similar-index",
        description="Build TF-IDF index for workspace files.",
        epilog=(
            f"File types indexed: {', '.join(config.allowed_extensions)}. "
            f"Excluded directories: {', '.join(config.excluded_dirs[:5])}, ..."
        ),
    )
    parser.add_argument("--root", "-r", default=".", help="Workspace root directory (default: current directory)")
    parser.add_argument("--index", "-i", dest="index_dir", default=None, help="Custom index directory (default: <root>/.similar-files)")
    parser.add_argument("--ext", nargs="+", default=None, help="Override allowed extensions, e.g. --ext .md .py or --ext md,py")
    parser.add_argument("--exclude", nargs="+", default=None, help="Override excluded directory names")
    parser.add_argument("--quiet", "-q", action="store_true", help="Hide the progress bar")
    parser.add_argument("--version", "-v", action="version", version=f"similar-index v{package_version()}")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args(argv)

    overrides = {}
    if args.ext:
        overrides["allowed_extensions"] = tuple(_normalize_extensions(args.ext))
    if args.exclude:
        overrides["excluded_dirs"] = tuple(args.exclude)
    config = default_config().model_copy(update=overrides)

    service = IndexService(config, show_progress=not args.quiet, logger_=logger)
    try:
        summary = service.run(args.root, index_dir=args.index_dir)
    except Exception:
        logger.exception("Index build failed")
        sys.exit(1)

    print(f"Workspace: {summary.root}")
    if summary.doc_count == 0:
        print("No indexable files found. Check file extensions and excluded directories.")
        return

    print(f"Index written to: {summary.index_file}")
    print(f"Total documents: {summary.doc_count} (skipped {summary.skipped}, elapsed {summary.elapsed_sec:.2f}s)")
    print("\nFiles by type:")
    for ext, count in summary.by_extension.items():
        print(f"  {ext}: {count}")


if __name__ == "__main__":
    main()
