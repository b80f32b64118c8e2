"""Internal job store: engine, session factory and the FastAPI session dependency"""
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from config.settings import settings


def build_engine(database_url: str) -> Engine:
    """Engine for the job store; connections are pinged before use and recycled hourly."""
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


# DATABASE_URL comes from the environment or backend/.env.local / backend/.env
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency yielding one session per request.

    Usage in FastAPI:
        @router.get("/jobs")
        async def get_jobs(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
