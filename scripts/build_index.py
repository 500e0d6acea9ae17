#!/usr/bin/env python3
"""Build the posts.json index from a directory of Markdown pages.

Usage:
    python scripts/build_index.py --pages site/pages --output site/posts.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from postdeck.index import build_index, dump_index
from postdeck.logging_config import configure_logging

LOGGER = structlog.get_logger("build_index")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write posts.json from Markdown front matter.")
    parser.add_argument(
        "--pages",
        type=Path,
        default=Path("site/pages"),
        help="Directory holding the Markdown pages (default: site/pages)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("site/posts.json"),
        help="Index file to write (default: site/posts.json)",
    )
    parser.add_argument("--pattern", default="*.md", help="Glob for page files (default: *.md)")
    parser.add_argument("--log-level", default="info", help="Log level (default: info)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if not args.pages.is_dir():
        LOGGER.error("build_index.pages_missing", pages=str(args.pages))
        return 1

    posts = build_index(args.pages, pattern=args.pattern)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(dump_index(posts), encoding="utf-8")
    LOGGER.info("build_index.written", output=str(args.output), posts=len(posts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
