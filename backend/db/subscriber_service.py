"""Subscriber database service layer"""
import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from models.subscriber import Subscriber
from search.types import SubscriberPreferences


def get_subscriber_by_email(db: Session, email: str) -> Optional[Subscriber]:
    """
    Get subscriber by email address.

    Args:
        db: Database session
        email: Subscriber's email address

    Returns:
        Subscriber object if found, None otherwise
    """
    return db.query(Subscriber).filter(Subscriber.email == email.lower()).first()


def get_subscriber_by_id(db: Session, subscriber_id: uuid.UUID) -> Optional[Subscriber]:
    """
    Get subscriber by id.

    Args:
        db: Database session
        subscriber_id: Subscriber's UUID

    Returns:
        Subscriber object if found, None otherwise
    """
    return db.query(Subscriber).filter(Subscriber.id == subscriber_id).first()


def get_subscriber_preferences(
    db: Session,
    subscriber_id: uuid.UUID,
) -> Optional[SubscriberPreferences]:
    """
    Read the stored search defaults of a subscriber.

    NULL array columns are read as empty lists.

    Args:
        db: Database session
        subscriber_id: Subscriber's UUID

    Returns:
        SubscriberPreferences if the subscriber exists, None otherwise
    """
    row = (
        db.query(Subscriber.job_titles, Subscriber.preferred_countries)
        .filter(Subscriber.id == subscriber_id)
        .first()
    )
    if row is None:
        return None

    job_titles, countries = row
    return SubscriberPreferences(
        subscriber_id=subscriber_id,
        job_titles=list(job_titles or []),
        preferred_countries=list(countries or []),
    )


def _insert_for(db: Session):
    """Dialect-specific INSERT construct supporting ON CONFLICT."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"subscriber upsert is not supported on {dialect}")


def upsert_subscriber(
    db: Session,
    name: str,
    email: str,
    job_titles: list[str],
    preferred_countries: list[str],
    salary_min: int,
) -> Subscriber:
    """
    Create a subscriber or refresh the existing one with the same email.

    Single INSERT ... ON CONFLICT (email) DO UPDATE statement, so concurrent
    subscriptions with the same new email both succeed. On an existing email
    the name, job titles, salary floor, countries and updated_at are replaced;
    id and created_at are kept.

    Args:
        db: Database session
        name: Subscriber's display name
        email: Subscriber's email address (upsert key)
        job_titles: Default job titles for searches
        preferred_countries: Default countries for searches
        salary_min: Default salary floor

    Returns:
        The created or updated Subscriber
    """
    now = datetime.now(timezone.utc)
    insert = _insert_for(db)

    stmt = insert(Subscriber).values(
        id=uuid.uuid4(),
        user_name=name,
        email=email.lower(),
        job_titles=list(job_titles),
        preferred_countries=list(preferred_countries),
        salary_min=salary_min,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Subscriber.email],
        set_={
            "user_name": stmt.excluded.user_name,
            "job_titles": stmt.excluded.job_titles,
            "preferred_countries": stmt.excluded.preferred_countries,
            "salary_min": stmt.excluded.salary_min,
            "updated_at": stmt.excluded.updated_at,
        },
    ).returning(Subscriber.id)

    subscriber_id = db.execute(stmt).scalar_one()
    db.commit()

    # Identity map may hold a copy loaded before the statement ran
    return db.get(Subscriber, subscriber_id, populate_existing=True)
