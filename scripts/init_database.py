#!/usr/bin/env python
"""
Database initialization script for the movie catalog.

This script:
1. Creates the database schema (tables, indexes, constraints)
2. Creates (or reuses) an admin account and prints a bearer token for it
3. Optionally imports a handful of sample movies

Usage:
    # Fresh database with an admin and sample data
    python scripts/init_database.py --reset --admin-email admin@example.com --sample

    # Print a token for an existing account
    python scripts/init_database.py --admin-email admin@example.com
"""

import sys
import argparse
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.api.config import get_database_path
from catalog.api.security import create_access_token
from catalog.database import init_database, verify_schema, crud
from catalog.database.models import ROLE_ADMIN
from catalog.utils.logging_config import configure_script_logging


SAMPLE_MOVIES = [
    {
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology "
                       "is given the inverse task of planting an idea.",
        "release_date": date(2010, 7, 16),
        "duration": 148,
        "rating": 8.8,
        "genre": ["Sci-Fi", "Action", "Thriller"],
        "director": "Christopher Nolan",
        "cast": ["Leonardo DiCaprio", "Joseph Gordon-Levitt", "Elliot Page"],
    },
    {
        "title": "The Shawshank Redemption",
        "description": "Two imprisoned men bond over a number of years, finding solace and "
                       "eventual redemption through acts of common decency.",
        "release_date": date(1994, 9, 23),
        "duration": 142,
        "rating": 9.3,
        "genre": ["Drama"],
        "director": "Frank Darabont",
        "cast": ["Tim Robbins", "Morgan Freeman"],
    },
    {
        "title": "Spirited Away",
        "description": "During her family's move to the suburbs, a sullen 10-year-old girl "
                       "wanders into a world ruled by gods, witches and spirits.",
        "release_date": date(2001, 7, 20),
        "duration": 125,
        "rating": 8.6,
        "genre": ["Animation", "Fantasy", "Family"],
        "director": "Hayao Miyazaki",
        "cast": ["Rumi Hiiragi", "Miyu Irino"],
    },
    {
        "title": "Parasite",
        "description": "Greed and class discrimination threaten the newly formed symbiotic "
                       "relationship between the wealthy Park family and the destitute Kim clan.",
        "release_date": date(2019, 5, 30),
        "duration": 132,
        "rating": 8.5,
        "genre": ["Thriller", "Drama"],
        "director": "Bong Joon Ho",
        "cast": ["Song Kang-ho", "Lee Sun-kyun", "Cho Yeo-jeong"],
    },
]


def print_section(title):
    """Print a formatted section header."""
    print(f"\n{'='*60}")
    print(f"{title}")
    print('='*60)


def ensure_admin(session, email, name):
    """Return the admin account for `email`, creating it if needed."""
    user = crud.get_user_by_email(session, email)
    if user is None:
        user = crud.create_user(session, name=name, email=email, role=ROLE_ADMIN)
        print(f"  Created admin {email} (id {user.user_id})")
    elif user.role != ROLE_ADMIN:
        print(f"  Warning: {email} exists with role '{user.role}', token will not allow edits")
    else:
        print(f"  Using existing admin {email} (id {user.user_id})")
    return user


def import_sample_movies(session, admin_id):
    """Insert the sample movies that aren't in the catalog yet."""
    existing = {m.title for m in crud.search_movies(session, page_size=1000).items}
    added = 0
    for movie in SAMPLE_MOVIES:
        if movie["title"] in existing:
            continue
        crud.create_movie(session, created_by=admin_id, **movie)
        added += 1
    print(f"  Added {added} sample movies ({len(SAMPLE_MOVIES) - added} already present)")


def main():
    parser = argparse.ArgumentParser(description="Initialize the movie catalog database")
    parser.add_argument("--db-path", default=get_database_path(), help="SQLite database file")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables")
    parser.add_argument("--admin-email", help="Create/reuse this admin and print a token")
    parser.add_argument("--admin-name", default="Admin", help="Display name for a new admin")
    parser.add_argument("--sample", action="store_true", help="Import sample movies")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_script_logging(debug=args.debug)

    print_section("1. Schema")
    db_manager = init_database(db_path=args.db_path, reset=args.reset)
    if not verify_schema(db_manager):
        print("\n❌ Database initialization failed!")
        db_manager.close()
        return 1
    print(f"  Tables ready in {db_manager.db_path}")

    if args.sample and not args.admin_email:
        parser.error("--sample needs --admin-email to own the sample movies")

    if args.admin_email:
        with db_manager.session_scope() as session:
            print_section("2. Admin account")
            admin = ensure_admin(session, args.admin_email, args.admin_name)

            if args.sample:
                print_section("3. Sample movies")
                import_sample_movies(session, admin.user_id)

            token = create_access_token(admin.user_id)

        print_section("Bearer token")
        print(token)

    db_manager.close()
    print("\n✅ Database initialization successful!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
