#!/usr/bin/env python3
"""
Command line access to the content pipeline.

    sitecontent list posts --limit 4
    sitecontent list projects --query react
    sitecontent show posts my-first-post
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .components import with_defaults
from .config import CONTENT_DIR_ENV, KINDS
from .errors import ContentError
from .listing import apply, published_date
from .render import render
from .store import ContentStore

logger = logging.getLogger("sitecontent")


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitecontent")
    parser.add_argument(
        "--root",
        default=None,
        help=f"content directory (default: ${CONTENT_DIR_ENV} or ./content)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="list entries, newest first")
    ls.add_argument("kind", choices=KINDS)
    ls.add_argument("--limit", type=int, default=0)
    ls.add_argument("--query", default="")

    show = sub.add_parser("show", help="render one entry to HTML")
    show.add_argument("kind", choices=KINDS)
    show.add_argument("slug")
    return parser


def cmd_list(store: ContentStore, kind: str, limit: int, query: str) -> int:
    entries = apply(store.list_all(kind), limit=limit, query=query)
    for entry in entries:
        d = published_date(entry)
        print(f"{d.isoformat() if d else '----------'}  {entry.slug}  {entry.title}")
    return 0


def cmd_show(store: ContentStore, kind: str, slug: str) -> int:
    entry = store.get_by_slug(kind, slug)
    if entry is None:
        print(f"ERROR: no {kind} entry named {slug!r}", file=sys.stderr)
        return 1
    print(render(entry.body, with_defaults()).html)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    store = ContentStore(args.root)
    try:
        if args.command == "list":
            return cmd_list(store, args.kind, args.limit, args.query)
        return cmd_show(store, args.kind, args.slug)
    except (ContentError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
