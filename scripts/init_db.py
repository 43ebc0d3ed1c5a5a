#!/usr/bin/env python3
"""Database initialization script."""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.database import Base, drop_db, init_db


async def main():
    """Initialize database."""
    parser = argparse.ArgumentParser(description="Database management")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate database")
    args = parser.parse_args()

    if args.reset:
        print("Dropping existing database...")
        await drop_db()
        print("Database dropped.")

    print("Initializing database...")
    await init_db()
    print("Database initialized successfully!")
    print("\nTables created:")
    for table in Base.metadata.sorted_tables:
        print(f"  - {table}")


if __name__ == "__main__":
    asyncio.run(main())
