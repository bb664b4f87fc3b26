"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Parse args and dispatch to subcommands. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="metaforge-sync",
        description="Sync canonical Arc Raiders data from MetaForge into a document store",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging (per-page and per-batch progress)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sync
    sync_parser = subparsers.add_parser("sync", help="Fetch, map and upsert every entity kind")
    _add_store_args(sync_parser)
    sync_parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="MetaForge API base URL (default: $META_BASE_URL or the public API)",
    )
    sync_parser.add_argument(
        "--kinds",
        nargs="+",
        default=None,
        metavar="KIND",
        help="Only sync these kinds (items quests arcs traders maps)",
    )
    sync_parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Documents per atomic batch (max 500)",
    )
    sync_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )
    sync_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the run report as JSON to file",
    )

    # store
    store_parser = subparsers.add_parser("store", help="Query the document store")
    _add_store_args(store_parser)
    store_parser.add_argument(
        "action",
        choices=["list", "count"],
        help="List documents or show count",
    )
    store_parser.add_argument(
        "--collection",
        type=str,
        default=None,
        help="Collection name, e.g. mfItems (count: all collections when omitted)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from metaforge_sync.errors import ConfigError

    try:
        if args.command == "sync":
            return _run_sync(args)
        if args.command == "store":
            return _run_store(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    parser.print_help()
    return 2


def _add_store_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML",
    )
    p.add_argument(
        "--backend",
        choices=["sqlite", "firestore"],
        default=None,
        help="Destination store (default: sqlite)",
    )
    p.add_argument(
        "--db",
        type=Path,
        default=None,
        metavar="DB_PATH",
        help="SQLite database path for the sqlite backend (default: metaforge.db)",
    )
    p.add_argument(
        "--project",
        type=str,
        default=None,
        help="Google Cloud project for the firestore backend (default: from credentials)",
    )


def _load_settings(args: argparse.Namespace, **overrides):
    from metaforge_sync.config import SyncSettings

    return SyncSettings.load(
        args.config,
        backend=args.backend,
        db_path=args.db,
        firestore_project=args.project,
        **overrides,
    )


def _open_store(settings):
    """Build the configured store once; it is passed down explicitly."""
    if settings.backend == "firestore":
        from metaforge_sync.store.firestore_store import FirestoreDocumentStore

        return FirestoreDocumentStore(project=settings.firestore_project)

    from metaforge_sync.store import SQLiteDocumentStore

    return SQLiteDocumentStore(settings.db_path)


def _run_sync(args: argparse.Namespace) -> int:
    """Run sync command. Exit 1 when a required kind failed."""
    from metaforge_sync.connectors.metaforge import MetaForgeConnector
    from metaforge_sync.errors import SyncFailedError
    from metaforge_sync.kinds import default_kinds, select_kinds
    from metaforge_sync.pipeline import run_sync
    from metaforge_sync.store import BatchUpsertWriter

    settings = _load_settings(
        args,
        base_url=args.base_url,
        kinds=args.kinds,
        batch_size=args.batch_size,
        request_timeout=args.timeout,
    )
    kinds = select_kinds(default_kinds(settings), settings.kinds)
    store = _open_store(settings)
    writer = BatchUpsertWriter(store, batch_size=settings.batch_size)
    connector = MetaForgeConnector(settings.base_url, timeout=settings.request_timeout)

    exit_code = 0
    try:
        report = run_sync(kinds, connector=connector, writer=writer)
    except SyncFailedError as e:
        print(f"MetaForge sync failed: {e.__cause__ or e}", file=sys.stderr)
        report = e.report
        exit_code = 1
    finally:
        connector.close()

    for r in report.results:
        line = f"{r.kind}: {r.fetched} fetched, {r.written} written to {r.collection}"
        if r.error:
            line += f" (failed while {r.failed_during.value}: {r.error})"
        print(line)

    if args.output:
        args.output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        print(f"Wrote run report to {args.output}")
    return exit_code


def _run_store(args: argparse.Namespace) -> int:
    """Run store command."""
    settings = _load_settings(args)
    store = _open_store(settings)

    if args.action == "list":
        if not args.collection:
            print("store list requires --collection", file=sys.stderr)
            return 2
        docs = [{"id": doc_id, **data} for doc_id, data in store.list_documents(args.collection)]
        print(json.dumps(docs, indent=2, default=str))
    elif args.action == "count":
        if args.collection:
            print(store.count(args.collection))
        else:
            from metaforge_sync.kinds import default_kinds

            for kind in default_kinds(settings):
                print(f"{kind.collection}: {store.count(kind.collection)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
