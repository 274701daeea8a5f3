"""
Row isolation check against the configured database

Creates throwaway rows for two synthetic users, checks each only sees and
changes its own, then removes them.

Usage:
    python scripts/check_isolation.py
"""
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from narrata.core.database import AsyncSessionLocal, init_db, close_db  # noqa: E402
from narrata.services.isolation_check import IsolationChecker  # noqa: E402


async def main() -> int:
    await init_db()
    try:
        results = await IsolationChecker(AsyncSessionLocal).run_all()
    finally:
        await close_db()

    for name, passed in results.items():
        print(f"{'✅' if passed else '❌'} {name}")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
