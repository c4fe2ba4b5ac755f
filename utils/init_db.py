"""
Database initialization script
Run this to set up the database schema and optional sample data

Usage: python -m utils.init_db [init|seed|reset] [--force]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import DatabaseConfig
from container import RepositoryContainer
from database import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent.parent / "schema.sql"

SAMPLE_COMPANIES = [
    {"handle": "anderson-arias", "name": "Anderson, Arias and Morrow",
     "description": "Somebody program how I.", "numEmployees": 245},
    {"handle": "bauer-gallagher", "name": "Bauer-Gallagher",
     "description": "Difficult ready trip question produce produce someone.", "numEmployees": 862},
    {"handle": "watson-davis", "name": "Watson-Davis",
     "description": "Year join loss.", "numEmployees": 819},
]

SAMPLE_JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": "0", "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": "0", "companyHandle": "anderson-arias"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": "0.044", "companyHandle": "bauer-gallagher"},
]


async def initialize_database(db: DatabaseConnection, force: bool = False) -> bool:
    """
    Apply schema.sql; an existing schema is only dropped with force=True.
    Returns True if the schema was applied.
    """
    tables = await db.get_all_tables()
    if tables:
        if not force:
            logger.warning(f"⚠️  Database already has tables ({', '.join(tables)}). Use --force to recreate.")
            return False
        logger.warning("Dropping existing schema...")
        await db.execute("DROP SCHEMA public CASCADE")
        await db.execute("CREATE SCHEMA public")

    await db.apply_schema(str(SCHEMA_FILE))
    logger.info("✅ Database initialized successfully!")
    return True


async def seed_sample_data(db: DatabaseConnection):
    """Seed database with sample companies and jobs"""
    repos = RepositoryContainer(db)

    for company in SAMPLE_COMPANIES:
        await repos.companies.create(company)
    logger.info(f"✅ Created {len(SAMPLE_COMPANIES)} sample companies")

    for job in SAMPLE_JOBS:
        await repos.jobs.create(job)
    logger.info(f"✅ Created {len(SAMPLE_JOBS)} sample jobs")


async def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Initialize the Jobly database.")
    parser.add_argument("command", choices=["init", "seed", "reset"])
    parser.add_argument("-f", "--force", action="store_true", help="Drop and recreate an existing schema")
    args = parser.parse_args(argv)

    config = DatabaseConfig.from_environment()
    logger.info(f"Connecting to: {config.host}:{config.port}/{config.database}")

    db = DatabaseConnection(config)
    await db.connect()
    try:
        if args.command in ("init", "reset"):
            applied = await initialize_database(db, force=args.force or args.command == "reset")
            if not applied:
                return
        if args.command in ("seed", "reset"):
            await seed_sample_data(db)
    except Exception as e:
        logger.error(f"❌ {args.command} failed: {e}")
        raise
    finally:
        await db.disconnect()


def cli_entry():
    """Console script entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())


if __name__ == "__main__":
    cli_entry()
