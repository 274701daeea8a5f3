"""
Backfill work items from completed resume sources

Re-runs the work history import for each completed resume of a user that
has no work items linked to it yet.

Usage:
    python scripts/backfill_work_items.py --user-id <uuid>
    python scripts/backfill_work_items.py --user-id <uuid> --force   # re-import every source
"""
import argparse
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from narrata.core.database import AsyncSessionLocal, init_db, close_db  # noqa: E402
from narrata.crud import source_crud, work_item_crud  # noqa: E402
from narrata.services.work_history_import import import_structured_data  # noqa: E402


async def backfill(user_id: str, force: bool = False) -> dict:
    """Import every eligible source; returns totals"""
    totals = {"sources": 0, "work_items_created": 0, "stories_created": 0}
    async with AsyncSessionLocal() as db:
        sources = await source_crud.get_completed_resumes(db, user_id=user_id)
        print(f"Found {len(sources)} completed resume source(s)")

        for source in sources:
            existing = await work_item_crud.get_by_source(db, source.id, user_id=user_id)
            if existing and not force:
                print(f"  - {source.file_name}: {len(existing)} work item(s) already linked, skipping")
                continue
            if not (source.structured_data or {}).get("workHistory"):
                print(f"  - {source.file_name}: no workHistory in structured_data, skipping")
                continue

            summary = await import_structured_data(db, user_id, source.structured_data, source.id)
            await db.commit()
            totals["sources"] += 1
            totals["work_items_created"] += summary["work_items_created"]
            totals["stories_created"] += summary["stories_created"]
            print(f"  - {source.file_name}: {summary}")
    return totals


async def main(user_id: str, force: bool) -> None:
    await init_db()
    try:
        totals = await backfill(user_id, force)
        print(f"\nBackfill complete: {totals}")
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Backfill work items from resume sources")
    parser.add_argument("--user-id", required=True, help="Owner of the sources")
    parser.add_argument("--force", action="store_true", help="Import even when work items exist")
    args = parser.parse_args()
    asyncio.run(main(args.user_id, args.force))
