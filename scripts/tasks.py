import asyncio
import datetime
import os
import shutil
import sys

from trophy_core.catalog_loader import catalog_stats, load_catalog, read_app_list
from trophy_core.db.engine import Database
from trophy_discord.config import DATABASE_URL
from trophy_discord.logging_config import setup_logging

DB_PATH = "data/catalog.db"


async def _with_db(action):
    db = Database(DATABASE_URL)
    await db.connect()
    try:
        return await action(db)
    finally:
        await db.close()


def check_db():
    print("📊 Checking catalog...")
    stats = asyncio.run(_with_db(catalog_stats))
    if not stats:
        print("⚠️  Catalog is empty. Run: python scripts/tasks.py load-catalog <applist.json>")
        return
    for kind, count in sorted(stats.items(), key=lambda item: -item[1]):
        print(f"  {kind or '(untyped)'}: {count}")
    print(f"✅ {sum(stats.values())} apps in catalog")


def backup_db():
    print("💾 Backing up catalog...")
    if not os.path.exists(DB_PATH):
        print("⚠️  No SQLite catalog to backup")
        return
    os.makedirs("backups", exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    dst = f"backups/catalog_{timestamp}.db"
    shutil.copy2(DB_PATH, dst)
    print(f"✅ Catalog backed up to {dst}")


def load_catalog_command(path: str, default_type: str = "game"):
    print(f"📥 Loading catalog from {path}...")
    apps = read_app_list(path)
    written = asyncio.run(_with_db(lambda db: load_catalog(db, apps, default_type=default_type)))
    print(f"✅ Loaded {written} apps")


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/tasks.py <command> [args]")
        sys.exit(1)

    setup_logging()
    command, args = sys.argv[1], sys.argv[2:]

    commands = {
        "check-db": check_db,
        "backup-db": backup_db,
        "load-catalog": load_catalog_command,
    }

    if command not in commands:
        print(f"Unknown command: {command}")
        sys.exit(1)

    if command == "load-catalog" and not args:
        print("Usage: python scripts/tasks.py load-catalog <applist.json> [default_type]")
        sys.exit(1)

    commands[command](*args)


if __name__ == "__main__":
    main()
