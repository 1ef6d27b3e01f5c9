"""Command-line interface for the block catalog.

This module provides the ``mod-block-catalog`` entry point. Results are
written to stdout as JSON; progress and errors go to stderr.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import CatalogConfig
from .core.errors import CatalogError
from .core.types import BlockRecord
from .logging_config import configure_logging
from .service import CatalogService


def _summarize(record: BlockRecord, with_texture: bool = False) -> dict:
    """Drop the (large) texture payload unless asked for it."""
    summary = dict(record)
    if not with_texture:
        summary["texture64"] = record["texture64"] is not None
    return summary


def _dump(data: object) -> None:
    json.dump(data, sys.stdout, indent=2)
    print()  # Add newline at end


def build_config(args: argparse.Namespace) -> CatalogConfig:
    """Environment-derived config with command-line overrides applied."""
    config = CatalogConfig.from_env()
    if args.home:
        config.home = Path(args.home).expanduser()
    if args.workers:
        config.workers = args.workers
    return config


def cmd_ingest(service: CatalogService, args: argparse.Namespace) -> int:
    directory = Path(args.path) if args.path else service.config.mods_dir
    print(f"Ingesting archives from: {directory}", file=sys.stderr)

    report = service.ingest_directory(directory)

    print(
        f"Committed {report.committed} blocks from {len(report.archives)} archives "
        f"({report.skip_count} entries skipped)",
        file=sys.stderr,
    )
    if report.index_stale:
        print(f"Warning: {report.index_error}", file=sys.stderr)

    _dump(report.summary())
    return 1 if report.index_stale else 0


def cmd_search(service: CatalogService, args: argparse.Namespace) -> int:
    results = service.search_blocks(args.query)
    _dump([_summarize(r) for r in results])
    return 0


def cmd_show(service: CatalogService, args: argparse.Namespace) -> int:
    record = service.get_block(args.block_id, args.mod)
    if record is None:
        print(f"Error: Block not found: {args.block_id}", file=sys.stderr)
        return 1
    _dump(_summarize(record, with_texture=args.texture))
    return 0


def cmd_archives(service: CatalogService, args: argparse.Namespace) -> int:
    if args.action == "list":
        _dump(service.list_archives())
        return 0

    if args.action == "add":
        path = Path(args.target)
        if not path.is_file():
            print(f"Error: File does not exist: {path}", file=sys.stderr)
            return 1
        report = service.add_archive(path.read_bytes(), args.name or path.name)
        if report is not None:
            _dump(report.summary())
        return 0

    try:
        service.remove_archive(args.target)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    return 0


def cmd_clear(service: CatalogService, args: argparse.Namespace) -> int:
    service.clear_cache()
    print("Catalog cleared", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mod-block-catalog",
        description="Build and query a block catalog from mod archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ingest every archive in the mods directory
  mod-block-catalog ingest

  # Ingest a specific directory with 4 worker threads
  mod-block-catalog --workers 4 ingest ~/minecraft/mods

  # Fuzzy search, or prefix search on block ids
  mod-block-catalog search "oak door"
  mod-block-catalog search @oak_
        """,
    )
    parser.add_argument("--home", help="Catalog directory (default: ~/.mod-block-catalog)")
    parser.add_argument("--workers", type=int, help="Archives processed concurrently")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Rebuild the catalog from archives")
    ingest.add_argument("path", nargs="?", help="Archive directory (default: <home>/mods)")
    ingest.set_defaults(handler=cmd_ingest)

    search = subparsers.add_parser("search", help="Search blocks")
    search.add_argument("query", nargs="?", default="", help="Query; prefix with @ for id prefix")
    search.set_defaults(handler=cmd_search)

    show = subparsers.add_parser("show", help="Show one block")
    show.add_argument("block_id")
    show.add_argument("--mod", help="Mod id, when several mods share the block id")
    show.add_argument("--texture", action="store_true", help="Include base64 texture")
    show.set_defaults(handler=cmd_show)

    archives = subparsers.add_parser("archives", help="Manage stored archives")
    archives.add_argument("action", choices=["list", "add", "remove"])
    archives.add_argument("target", nargs="?", help="File to add, or slug to remove")
    archives.add_argument("--name", help="Archive name to store under (add only)")
    archives.set_defaults(handler=cmd_archives)

    clear = subparsers.add_parser("clear", help="Delete stored archives and empty the catalog")
    clear.set_defaults(handler=cmd_clear)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the catalog command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "archives" and args.action != "list" and not args.target:
        parser.error(f"archives {args.action} requires a target")

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        with CatalogService(build_config(args)) as service:
            exit_code = args.handler(service, args)
    except (CatalogError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
