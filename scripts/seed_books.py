#!/usr/bin/env python3
# =============================================================================
# scripts/seed_books.py - Seed the Books Collection
# =============================================================================
# Inserts a couple of classic books so a fresh database has something to
# list. Does nothing when the collection already holds documents.
#
# Usage:
#   python scripts/seed_books.py
#
# Prerequisites:
#   - MongoDB must be running
#   - MONGODB_URI / MONGODB_DATABASE set (environment or .env file)
# =============================================================================

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.models.outcomes import Success
from core.services.book_store import BookStore
from lib.mongo_client import MongoClient

SEED_BOOKS = [
    {"title": "1984", "author": "George Orwell", "year": 1949},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
]


async def seed() -> int:
    """Insert the seed books; returns how many were created."""
    store = BookStore(MongoClient.get_collection(BookStore.collection_name))
    try:
        if await store.collection.count_documents({}, limit=1):
            print("Books collection is not empty, nothing to do")
            return 0

        created = 0
        for fields in SEED_BOOKS:
            outcome = await store.create(fields)
            if isinstance(outcome, Success):
                created += 1
                print(f"  + {fields['title']} ({outcome.value['_id']})")
            else:
                print(f"  ! {fields['title']}: {outcome}")
        return created
    finally:
        await MongoClient.close()


def main():
    """Seed the books collection."""
    print("=" * 60)
    print("Bookshelf - seeding books")
    print("=" * 60)
    created = asyncio.run(seed())
    print(f"Created {created} book(s)")


if __name__ == "__main__":
    main()
