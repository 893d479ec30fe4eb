"""
Create the Event API schema.

Run once against an empty database (safe to re-run, every statement is
idempotent):

    python -m event_api.database.init_db
"""

import logging
import sys

import psycopg2

from event_api.config import Config
from event_api.database.db_connection import Database

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password TEXT NOT NULL,
        name TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS events (
        id SERIAL PRIMARY KEY,
        owner_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        description TEXT NOT NULL,
        date DATE NOT NULL,
        location TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS attendees (
        id SERIAL PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
        UNIQUE (event_id, user_id)
    );
"""

TABLES = ["users", "events", "attendees"]


def init_db(db: Database) -> None:
    """
    Apply the schema and confirm every table exists.

    Raises:
        RuntimeError: If a table is still missing after the schema ran.
    """
    with db.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            missing = []
            for table in TABLES:
                cur.execute("SELECT to_regclass(%s);", (table,))
                if not cur.fetchone()[0]:
                    missing.append(table)

    if missing:
        raise RuntimeError(f"Tables missing after init: {', '.join(missing)}")
    logging.info(f"Schema ready: {', '.join(TABLES)}")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")
    config = Config.from_env()
    if not config.database_url:
        logging.error("DATABASE_URL is not set. Please set the environment variable.")
        return 1

    db = Database(config.database_url, minconn=1, maxconn=1)
    try:
        init_db(db)
    except (psycopg2.Error, RuntimeError) as e:
        logging.error(f"Database init FAILED: {e}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
