#!/usr/bin/env python3
"""
Seed the database with demo users (`python -m starter.seed`).

Users whose email already exists are skipped, so the seeder can be re-run.
Run the migrations first.
"""

from dotenv import load_dotenv
load_dotenv()

import sys
from typing import Dict, List

import logfire

from starter.config import load_settings
from starter.database import Database, UserDB
from starter.exceptions import ConfigurationError
from starter.observability import configure_logging

DEMO_USERS: List[Dict[str, str]] = [
    {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jane.smith@example.com"},
    {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
]


def seed_users(database: Database, users: List[Dict[str, str]] = DEMO_USERS) -> int:
    """Insert the given users, returning how many were created"""
    created = 0
    with database.session() as db:
        existing = {email for (email,) in db.query(UserDB.email).all()}
        for data in users:
            if data["email"] in existing:
                continue
            db.add(UserDB(**data))
            existing.add(data["email"])
            created += 1
        db.commit()
    logfire.info("Seeded users", created=created, skipped=len(users) - created)
    return created


def undo_seed_users(database: Database, users: List[Dict[str, str]] = DEMO_USERS) -> int:
    """Delete the seeded users, returning how many were removed"""
    emails = [u["email"] for u in users]
    with database.session() as db:
        removed = db.query(UserDB).filter(UserDB.email.in_(emails)).delete(synchronize_session=False)
        db.commit()
    logfire.info("Removed seeded users", removed=removed)
    return removed


def main(argv: List[str] = None) -> int:
    configure_logging(service_name="starter-seed")
    argv = argv or []

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ Error: {e}")
        return 1

    database = Database(settings.database_url)
    try:
        if "--undo" in argv:
            removed = undo_seed_users(database)
            print(f"✅ Removed {removed} seeded user(s)")
        else:
            created = seed_users(database)
            print(f"✅ Seeded {created} user(s)")
        return 0
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
