"""
Print a user's work items and sources

Usage:
    python scripts/check_work_items.py --user-id <uuid>
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from narrata.core.database import AsyncSessionLocal, close_db  # noqa: E402
from narrata.crud import source_crud, work_item_crud  # noqa: E402


async def check(user_id: str, limit: int) -> None:
    async with AsyncSessionLocal() as db:
        print("\n=== Checking work_items ===")
        work_items = await work_item_crud.get_by_company(db, user_id=user_id, limit=limit)
        print(f"Found {len(work_items)} work_items")
        for item in work_items:
            print(f"  - {item.title} (source_id: {item.source_id or 'NULL'})")

        print("\n=== Checking sources ===")
        sources = await source_crud.get_multi(db, user_id=user_id, limit=limit)
        print(f"Found {len(sources)} sources")
        for source in sources:
            work_history = (source.structured_data or {}).get("workHistory")
            has_history = isinstance(work_history, list) and len(work_history) > 0
            print(f"  - {source.file_name}")
            print(f"    Status: {source.processing_status}")
            print(f"    Has workHistory: {has_history} ({len(work_history) if has_history else 0} entries)")
            print(f"    Source ID: {source.id[:8]}...")

        print("\n=== Checking if work_items should exist ===")
        resume = next((s for s in sources if s.source_type == "resume"), None)
        if resume is None:
            print("No resume source found")
            return
        work_history = (resume.structured_data or {}).get("workHistory")
        if isinstance(work_history, list) and work_history:
            print(f"Resume source has {len(work_history)} workHistory entries")
            print("Sample entry:", json.dumps(work_history[0], indent=2)[:200] + "...")
        else:
            print("Resume source has NO workHistory in structured_data")


async def main(user_id: str, limit: int) -> None:
    try:
        await check(user_id, limit)
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inspect a user's work items and sources")
    parser.add_argument("--user-id", required=True, help="User to inspect")
    parser.add_argument("--limit", type=int, default=10, help="Rows per table (default: 10)")
    args = parser.parse_args()
    asyncio.run(main(args.user_id, args.limit))
