import logging

import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from cinema_booking.core.config import settings

logger = logging.getLogger(__name__)

def create_database():
    """Create the PostgreSQL database if it doesn't exist. No-op for other backends."""
    if not settings.uses_postgres:
        logger.info("Database URL is not PostgreSQL, skipping database creation.")
        return

    try:
        # Connect to default 'postgres' database to check/create target DB
        con = psycopg2.connect(
            user=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            host=settings.POSTGRES_SERVER,
            port=settings.POSTGRES_PORT,
            dbname="postgres"
        )
    except psycopg2.OperationalError as e:
        # Connection params may point straight at an existing target DB
        logger.error(f"Could not connect to the maintenance database: {e}")
        return

    con.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    try:
        with con.cursor() as cur:
            cur.execute(
                "SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s",
                (settings.POSTGRES_DB,),
            )
            exists = cur.fetchone()

            if not exists:
                logger.info(f"Database {settings.POSTGRES_DB} does not exist. Creating...")
                cur.execute(
                    sql.SQL("CREATE DATABASE {}").format(sql.Identifier(settings.POSTGRES_DB))
                )
                logger.info(f"Database {settings.POSTGRES_DB} created successfully.")
            else:
                logger.info(f"Database {settings.POSTGRES_DB} already exists.")
    finally:
        con.close()


def init_db(bind=None):
    """Create every table of the entity graph on the given engine."""
    from cinema_booking.db.base import Base
    from cinema_booking.db.session import engine

    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    create_database()
    init_db()
