"""
Pytest configuration and fixtures for testing.

- DATABASE_URL defaults to in-memory SQLite so settings and db.session import
  without a real database
- test_engine uses TEST_DATABASE_URL (PostgreSQL, migrated with Alembic) when
  set, otherwise an in-memory SQLite schema built from the models
- Each test runs in an isolated transaction with rollback
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from pathlib import Path
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

from models import Base

BACKEND_DIR = Path(__file__).parent

# Load environment variables (.env.local takes precedence over .env)
env_local = BACKEND_DIR / '.env.local'
env_file = BACKEND_DIR / '.env'

if env_local.exists():
    load_dotenv(env_local)
elif env_file.exists():
    load_dotenv(env_file)


def _postgres_engine(test_db_url: str):
    """Connect to the PostgreSQL test database and migrate it to head."""
    from alembic.config import Config
    from alembic import command

    engine = create_engine(
        test_db_url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )

    # Verify connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        raise ConnectionError(
            f"Failed to connect to test database.\n"
            f"Error: {e}\n"
            f"Please verify TEST_DATABASE_URL in .env.local is correct."
        )

    alembic_cfg = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")
    return engine


@pytest.fixture(scope="session")
def test_engine():
    """
    Create test database engine.

    - TEST_DATABASE_URL set: PostgreSQL with Alembic migrations
    - Otherwise: in-memory SQLite shared across threads (the paginator
      runs page queries on executor threads)
    """
    test_db_url = os.getenv("TEST_DATABASE_URL")
    if test_db_url:
        engine = _postgres_engine(test_db_url)
    else:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine):
    """
    Create a database session for each test with automatic rollback.

    - Fresh transaction for every test (complete isolation)
    - All changes automatically rolled back after test

    Usage:
        def test_upsert_subscriber(test_db):
            from db.subscriber_service import upsert_subscriber

            subscriber = upsert_subscriber(test_db, "Ana", "ana@example.com", ["Dev"], ["USA"], 0)
            assert subscriber.id is not None
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    TestSessionLocal = sessionmaker(bind=connection)
    db = TestSessionLocal()

    try:
        yield db
    finally:
        db.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()
