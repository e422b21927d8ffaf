#!/usr/bin/env python3
"""
Maintenance script for the Property Listing API.
Creates and drops tables, seeds reference data and flushes the listing cache.
"""

import asyncio
import sys
import argparse
import logging

from listing_api.config import settings
from listing_api.cache import build_cache_store, flush_listing_cache
from listing_api.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
from listing_api.seed import seed_reference_data

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class MaintenanceManager:
    """Runs maintenance tasks against the configured database and cache."""

    async def create_tables(self) -> None:
        logger.info("Creating database tables")
        await create_tables()

    async def drop_tables(self) -> None:
        """Drop every table. Refused in production."""
        logger.warning("Dropping database tables - all data will be lost!")
        await drop_tables()

    async def seed(self) -> None:
        """Seed reference data, then evict the cached reference lists."""
        async with AsyncSessionLocal() as session:
            inserted = await seed_reference_data(session)

        for table, count in inserted.items():
            logger.info(f"  {table}: {count} inserted")

        await self.flush_cache()

    async def flush_cache(self) -> None:
        cache = build_cache_store(settings)
        try:
            removed = await flush_listing_cache(cache)
            logger.info(f"Removed {removed} cache entries")
        finally:
            await cache.close()

    async def run(self, command: str) -> None:
        try:
            if command == "create-tables":
                await self.create_tables()
            elif command == "drop-tables":
                await self.drop_tables()
            elif command == "seed":
                await self.seed()
            elif command == "flush-cache":
                await self.flush_cache()
        finally:
            await close_db_connection()


def main():
    """Main CLI interface for maintenance tasks."""
    parser = argparse.ArgumentParser(description="Property Listing API maintenance")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all database tables")

    drop_parser = subparsers.add_parser("drop-tables", help="Drop all database tables (not in production)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping every table")

    subparsers.add_parser("seed", help="Seed reference data (states, cities, types, tags, amenities)")
    subparsers.add_parser("flush-cache", help="Evict every listing cache entry")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "drop-tables" and not args.confirm:
        print("Dropping tables requires --confirm flag")
        return

    try:
        asyncio.run(MaintenanceManager().run(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
