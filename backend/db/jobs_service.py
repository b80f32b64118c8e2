"""
Database service functions for the internal job store.

Provides the paged search query consumed by the internal job paginator.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.job import Job

logger = logging.getLogger(__name__)


def get_internal_job_ids_page(
    db: Session,
    salary_min: int,
    posted_after: Optional[datetime],
    titles: list[str],
    countries: list[str],
    limit: int,
    offset: int,
) -> list[uuid.UUID]:
    """
    Read one page of job ids matching the search filters.

    Filters:
    - salary_min >= salary_min
    - title in titles (exact match; an empty list matches nothing)
    - country in countries (exact match; an empty list matches nothing)

    Rows are ordered by the boolean comparison posted_date >= posted_after,
    with the primary key as tie-breaker so consecutive pages don't overlap.

    Args:
        db: Database session
        salary_min: Salary floor
        posted_after: Posted-date threshold used for ordering (optional)
        titles: Accepted job titles
        countries: Accepted countries
        limit: Page size
        offset: Rows to skip

    Returns:
        Job ids of the page, empty when past the last match

    Raises:
        sqlalchemy.exc.SQLAlchemyError: On any store failure
    """
    stmt = (
        select(Job.id)
        .where(
            Job.salary_min >= salary_min,
            Job.title.in_(titles),
            Job.country.in_(countries),
        )
    )

    if posted_after is not None:
        stmt = stmt.order_by(Job.posted_date >= posted_after)

    stmt = stmt.order_by(Job.id).limit(limit).offset(offset)

    ids = list(db.execute(stmt).scalars().all())
    logger.debug(f"Job page offset={offset} limit={limit} returned {len(ids)} rows")
    return ids
