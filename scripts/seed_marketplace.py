"""Seed script: create tables and insert demo users, themes and plugins.

Usage:
    python scripts/seed_marketplace.py               # Create tables, insert demo data, print tokens
    python scripts/seed_marketplace.py --reconcile   # Recompute favorites_count from the join tables
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import func, select, update  # noqa: E402

from core.security import create_access_token  # noqa: E402
from database import (  # noqa: E402
    close_database,
    get_engine,
    get_session,
    init_database,
    is_database_available,
)
from database.models import Base, FavoritePlugin, FavoriteTheme, Plugin, Theme  # noqa: E402
from database.repositories import PluginRepository, ThemeRepository, UserRepository  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


USERS: list[dict] = [
    {"username": "admin", "email": "admin@example.com", "display_name": "Admin", "role": "admin"},
    {"username": "alice", "email": "alice@example.com", "display_name": "Alice"},
    {"username": "bob", "email": "bob@example.com", "display_name": "Bob"},
]

THEMES: list[dict] = [
    {"owner": "alice", "name": "Midnight Terminal", "description": "Dark theme with green accents", "versions_count": 3},
    {"owner": "alice", "name": "Paper Light", "description": "High-contrast light theme", "versions_count": 1},
    {"owner": "bob", "name": "Sunset Gradient", "description": "Warm gradient backgrounds", "versions_count": 2},
]

PLUGINS: list[dict] = [
    {"owner": "bob", "name": "Typing Indicator", "description": "Shows when the bot is typing", "versions_count": 4},
    {"owner": "alice", "name": "Markdown Tables", "description": "Renders markdown tables", "versions_count": 1},
]


async def create_tables() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def seed() -> None:
    async for session in get_session():
        user_repo = UserRepository(session)
        theme_repo = ThemeRepository(session)
        plugin_repo = PluginRepository(session)

        users = {}
        created = set()
        for data in USERS:
            user = await user_repo.get_by_username(data["username"])
            if not user:
                user = await user_repo.create(**data)
                created.add(user.username)
                logger.info(f"Created user {user.username}")
            users[user.username] = user

        for data in THEMES:
            if data["owner"] not in created:
                continue
            owner = users[data["owner"]]
            await theme_repo.create(
                user_id=owner.id,
                name=data["name"],
                description=data["description"],
                versions_count=data["versions_count"],
            )
        for data in PLUGINS:
            if data["owner"] not in created:
                continue
            owner = users[data["owner"]]
            await plugin_repo.create(
                user_id=owner.id,
                name=data["name"],
                description=data["description"],
                versions_count=data["versions_count"],
            )
        logger.info(f"Inserted demo themes and plugins for {len(created)} new users")

        for user in users.values():
            token = create_access_token(user.id)
            print(f"{user.username:<8} {user.id}  Bearer {token}")


async def reconcile() -> None:
    """Reset every favorites_count to the number of join rows pointing at it."""
    async for session in get_session():
        for model, fav_model, fk in (
            (Theme, FavoriteTheme, FavoriteTheme.theme_id),
            (Plugin, FavoritePlugin, FavoritePlugin.plugin_id),
        ):
            actual = (
                select(func.count())
                .select_from(fav_model)
                .where(fk == model.id)
                .scalar_subquery()
            )
            result = await session.execute(
                update(model)
                .where(model.favorites_count != actual)
                .values(favorites_count=actual)
                .execution_options(synchronize_session=False)
            )
            logger.info(f"{model.__tablename__}: fixed {result.rowcount} drifted counters")


async def main(args) -> None:
    """Main entry point."""
    await init_database()
    if not is_database_available():
        logger.error("DATABASE_URL not configured")
        sys.exit(1)

    try:
        if args.reconcile:
            await reconcile()
        else:
            await create_tables()
            await seed()
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed marketplace demo data")
    parser.add_argument(
        "--reconcile",
        action="store_true",
        help="Recompute favorites_count from the favorite tables instead of seeding",
    )
    args = parser.parse_args()

    asyncio.run(main(args))
