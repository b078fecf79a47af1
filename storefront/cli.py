# storefront/cli.py
"""
Command-line entry point for the storefront catalog tools.

  storefront build-snapshot [--raw PATH] [--out PATH]
  storefront related --item-id ID [--limit N] [--snapshot PATH] [--explain]
  storefront browse [--search S] [--category C] [--brand B] [--snapshot PATH]
  storefront serve [--host H] [--port P]

Results go to stdout, one per line; logs go to stderr and logs/.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn
from loguru import logger

from .catalog_build import build_catalog_snapshot
from .catalog_filter import filter_catalog
from .config import (
    CATALOG_SNAPSHOT_PATH,
    LOG_DIR,
    RELATED_DEFAULT_LIMIT,
    CatalogItem,
    setup_logging,
)
from .constants import ALL_CATEGORIES
from .pipeline_types import InvalidArgument
from .related import rank_related
from .scoring import score_breakdown
from ._singletons import get_catalog_items

EXIT_INVALID = 1
EXIT_NOT_FOUND = 2


def _format_item(item: CatalogItem) -> str:
    parts = [item.id, item.name]
    if item.brand_name:
        parts.append(f"[{item.brand_name}]")
    return "\t".join(parts)


def _cmd_build_snapshot(args: argparse.Namespace) -> int:
    out = build_catalog_snapshot(args.raw, args.out)
    print(out)
    return 0


def _load_items(snapshot: Path) -> Optional[Sequence[CatalogItem]]:
    try:
        return get_catalog_items(snapshot)
    except FileNotFoundError as e:
        logger.error("{}", e)
        return None


def _cmd_related(args: argparse.Namespace) -> int:
    items = _load_items(args.snapshot)
    if items is None:
        return EXIT_NOT_FOUND
    focal = next((i for i in items if i.id == args.item_id), None)
    if focal is None:
        logger.error("Item {} not found in {}", args.item_id, args.snapshot)
        return EXIT_NOT_FOUND

    try:
        scored = rank_related(focal, items, args.limit)
    except InvalidArgument as e:
        logger.error("Cannot rank related items: {}", e)
        return EXIT_INVALID

    for s in scored:
        line = _format_item(s.item)
        if args.explain:
            bits = ", ".join(f"{k}={v}" for k, v in score_breakdown(focal, s.item).items() if v)
            line = f"{line}\t{s.score}\t{bits}"
        print(line)
    if not scored:
        logger.info("No related items for {}", focal.id)
    return 0


def _cmd_browse(args: argparse.Namespace) -> int:
    items = _load_items(args.snapshot)
    if items is None:
        return EXIT_NOT_FOUND
    for item in filter_catalog(items, search=args.search, category=args.category, brand=args.brand):
        print(_format_item(item))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run("storefront.api:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="storefront")
    ap.add_argument("--log-level", default="INFO", help="loguru level (default INFO)")
    ap.add_argument("--no-log-file", action="store_true", help="log to stderr only")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("build-snapshot", help="normalize a raw catalog export into a Parquet snapshot")
    p.add_argument("--raw", type=Path, default=None, help="raw export (.xlsx/.csv/.json)")
    p.add_argument("--out", type=Path, default=CATALOG_SNAPSHOT_PATH)
    p.set_defaults(func=_cmd_build_snapshot)

    p = sub.add_parser("related", help="list products related to one product")
    p.add_argument("--item-id", required=True)
    p.add_argument("--limit", type=int, default=RELATED_DEFAULT_LIMIT)
    p.add_argument("--snapshot", type=Path, default=CATALOG_SNAPSHOT_PATH)
    p.add_argument("--explain", action="store_true", help="print score and per-rule points")
    p.set_defaults(func=_cmd_related)

    p = sub.add_parser("browse", help="filter the storefront catalog")
    p.add_argument("--search", default="")
    p.add_argument("--category", default=ALL_CATEGORIES)
    p.add_argument("--brand", default=None)
    p.add_argument("--snapshot", type=Path, default=CATALOG_SNAPSHOT_PATH)
    p.set_defaults(func=_cmd_browse)

    p = sub.add_parser("serve", help="run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(func=_cmd_serve)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, log_dir=None if args.no_log_file else LOG_DIR)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
