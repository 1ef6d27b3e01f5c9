"""Basic ingestion example.

This example demonstrates how to:
- Ingest a local mods directory into a catalog
- Display summary statistics
- Run the three kinds of block search
"""

import sys
from pathlib import Path

from mod_block_catalog import CatalogConfig, CatalogService
from mod_block_catalog.logging_config import configure_logging


def main():
    # Ingest a directory of mod jars (change this to your mods folder)
    mods_dir = Path.home() / ".minecraft" / "mods"

    if not mods_dir.exists():
        print(f"Directory not found: {mods_dir}", file=sys.stderr)
        print("Please update the mods_dir variable in this script", file=sys.stderr)
        return

    configure_logging()

    config = CatalogConfig(home=Path("catalog-example"), workers=4)

    with CatalogService(config) as service:
        print(f"Ingesting archives from: {mods_dir}", file=sys.stderr)
        report = service.ingest_directory(mods_dir)

        print(f"\n✓ Catalog rebuilt", file=sys.stderr)
        print(f"  Archives: {len(report.archives)}", file=sys.stderr)
        print(f"  Blocks: {report.committed}", file=sys.stderr)
        print(f"  Skipped entries: {report.skip_count}", file=sys.stderr)
        for reason, count in sorted(report.skip_reasons().items(), key=lambda kv: -kv[1])[:5]:
            print(f"    {count:5d}  {reason}", file=sys.stderr)
        for failed in report.failed_archives:
            print(f"  Unreadable: {failed.archive} ({failed.reason})", file=sys.stderr)

        textured = service.search_blocks("")
        print(f"\nFirst textured blocks: {[r['blockId'] for r in textured[:10]]}")

        doors = service.search_blocks("@oak_")
        print(f"Ids starting with 'oak_': {[r['blockId'] for r in doors]}")

        fuzzy = service.search_blocks("wooden door")
        print(f"Fuzzy 'wooden door': {[r['blockName'] or r['blockId'] for r in fuzzy[:10]]}")


if __name__ == '__main__':
    main()
