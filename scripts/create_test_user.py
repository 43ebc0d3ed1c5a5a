#!/usr/bin/env python3
"""Create a demo account with one note."""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.exceptions import DuplicateResourceException
from app.database import async_session_factory, init_db
from app.services.account_service import AccountService
from app.services.media_uploader import get_media_uploader
from app.services.note_service import NoteService

EMAIL = "test@example.com"
USERNAME = "testuser"
PASSWORD = "password123"


async def create_test_user():
    """Create a test user."""
    await init_db()
    async with async_session_factory() as db:
        accounts = AccountService(db)
        try:
            user = await accounts.register(USERNAME, EMAIL, PASSWORD)
        except DuplicateResourceException:
            user = await accounts.find_by_email(EMAIL)
            print("Test user already exists:")
            print(f"  Email: {user.email}")
            print(f"  Username: {user.username}")
            return

        notes = NoteService(db, get_media_uploader())
        await notes.create("Welcome", "Your first note.", [], user)

        print("Test user created successfully!")
        print(f"  Email: {user.email}")
        print(f"  Username: {user.username}")
        print(f"  Password: {PASSWORD}")


if __name__ == "__main__":
    asyncio.run(create_test_user())
