import logging

import psycopg2
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from weblog.core.config import Settings, get_settings


def build_engine(settings: Settings):
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their single connection
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(settings.database_url, **kwargs)
    return create_engine(settings.database_url, pool_pre_ping=True)


engine = build_engine(get_settings())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_database(settings: Settings):
    """Create the Postgres database named in the URL if it doesn't exist yet."""
    url = make_url(settings.database_url)
    if url.get_backend_name() != "postgresql":
        return
    try:
        conn = psycopg2.connect(
            dbname="postgres",
            user=url.username,
            password=url.password,
            host=url.host,
            port=url.port or 5432,
        )
        conn.autocommit = True
        cur = conn.cursor()
        cur.execute(f'CREATE DATABASE "{url.database}"')
        cur.close()
        conn.close()
        logging.info(f"Created database {url.database}")
    except psycopg2.errors.DuplicateDatabase:
        pass
    except psycopg2.Error as e:
        logging.warning(f"Could not ensure database exists: {e}")


def init_db():
    # Models must be imported so their tables are registered on Base.metadata
    from weblog.db import models  # noqa: F401
    from weblog.db.base import Base
    from weblog.db.seed import seed_categories

    ensure_database(get_settings())
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_categories(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
