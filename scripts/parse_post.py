#!/usr/bin/env python3
"""Parse one document's front matter and print it as JSON.

Usage:
    python scripts/parse_post.py site/pages/hello-world.md [--no-body]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from postdeck.frontmatter import parse_front_matter


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a document's front matter as JSON.")
    parser.add_argument("path", type=Path, help="Markdown document to parse")
    parser.add_argument(
        "--no-body",
        action="store_true",
        help="Only print the metadata, not the body text",
    )
    args = parser.parse_args(argv)

    if not args.path.is_file():
        print(f"Document not found: {args.path}", file=sys.stderr)
        return 1

    document = parse_front_matter(args.path.read_text(encoding="utf-8"))
    payload: dict[str, object] = {"metadata": document.metadata_dict()}
    if not args.no_body:
        payload["body"] = document.body
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
