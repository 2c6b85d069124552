"""
CLI to find files similar to a file or text using a pre-built index.

Example:
    python -m scripts.find_similar README.md
    python -m scripts.find_similar --text "authentication middleware"
    python -m scripts.find_similar --top 5 --threshold 0.2 docs/architecture.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from similar_files.config import default_config, setup_logging
from similar_files.errors import BUILD_HINT, CorruptIndexError, IndexNotFoundError, InvalidQueryError
from similar_files.search.pipeline import Query, SimilarityService, result_lines


def build_parser() -> argparse.ArgumentParser:
    config = default_config()
    parser = argparse.ArgumentParser(
        prog="similar-find",
        description="Find related files using TF-IDF similarity.",
    )
    parser.add_argument("path", nargs="?", help="Find files similar to this file")
    parser.add_argument("--text", "-t", default=None, help="Search using text instead of a file")
    parser.add_argument("--top", "-n", type=int, default=config.top, help=f"Number of results (default: {config.top})")
    parser.add_argument(
        "--threshold",
        type=float,
        default=config.threshold,
        help=f"Minimum similarity score (default: {config.threshold})",
    )
    parser.add_argument("--index", "-i", dest="index_dir", default=None, help="Custom index directory")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log query details to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        parser.print_help()
        sys.exit(1)

    args = parser.parse_args(argv)
    setup_logging("INFO" if args.verbose else "WARNING")
    logger = logging.getLogger(__name__)

    if args.text is not None:
        query = Query.from_text(args.text)
    elif args.path:
        query = Query.from_file(args.path)
    else:
        print("Error: No query file or text provided", file=sys.stderr)
        parser.print_help(sys.stderr)
        sys.exit(1)

    service = SimilarityService(index_dir=args.index_dir, logger_=logger)
    try:
        response = service.find_similar(query, top=args.top, threshold=args.threshold)
    except IndexNotFoundError as exc:
        print(f"Index not found at: {exc.index_file}", file=sys.stderr)
        print("\nTo create an index, run:", file=sys.stderr)
        print(f"  {BUILD_HINT}", file=sys.stderr)
        sys.exit(1)
    except (CorruptIndexError, InvalidQueryError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(response.model_dump_json(by_alias=True, indent=2))
        return

    if not response.results:
        print("No similar files found above threshold.")
        print(f"Try lowering --threshold (current: {args.threshold})")
        return

    print("\n".join(result_lines(response)))


if __name__ == "__main__":
    main()
