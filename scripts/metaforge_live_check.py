#!/usr/bin/env python3
"""Quick live check of the MetaForge API: first page of each kind, mapped.

Nothing is written to a store.

Run:
  poetry run python scripts/metaforge_live_check.py          # every kind
  poetry run python scripts/metaforge_live_check.py traders  # one kind
"""

import logging
import sys

from metaforge_sync.config import SyncSettings
from metaforge_sync.connectors.metaforge import MetaForgeConnector
from metaforge_sync.errors import SyncError
from metaforge_sync.kinds import default_kinds, select_kinds


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = SyncSettings.load()
    kinds = select_kinds(default_kinds(settings), sys.argv[1:] or None)
    connector = MetaForgeConnector(settings.base_url, timeout=settings.request_timeout)

    ok = True
    for kind in kinds:
        print(f"Fetching first page of {kind.name}...")
        try:
            first_page = next(connector.iter_pages(kind.endpoint, kind.key), [])
            records = [kind.mapper(raw) for raw in first_page]
        except SyncError as e:
            ok = False
            print(f"  ⚠️ {kind.name}: {e}")
            continue
        print(f"  Got {len(records)} {kind.name}")
        for i, r in enumerate(records[:3], 1):
            print(f"  {i}. {r.data.get('name', 'N/A')} (id={r.id})")
    connector.close()

    print("\n✅ All kinds fetched and mapped." if ok else "\n⚠️ Some kinds failed. Check logs.")


if __name__ == "__main__":
    main()
