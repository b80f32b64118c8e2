"""
API routes for job search.

Endpoints:
- GET  /V1/jobs     Search internal and external jobs for a subscriber

Interactive API docs:
- Swagger UI: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
"""

import logging
import uuid
from datetime import datetime
from typing import AsyncGenerator, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config.settings import settings
from db.session import get_db
from search.errors import DecodeError, NotFoundError, SearchError, TransportError, ValidationError
from search.service import JobSearchService
from search.types import SearchCriteria

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class ExternalJobOut(BaseModel):
    """Job listing from the external source."""
    title: str
    salary: int
    skills: list[str]


class JobsResponse(BaseModel):
    """Response for GET /V1/jobs."""
    internal_jobs: list[uuid.UUID]
    external_jobs: list[ExternalJobOut]
    message: Optional[str] = None


# =============================================================================
# Dependencies
# =============================================================================

async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Dependency yielding an httpx client for the external job source."""
    async with httpx.AsyncClient(
        base_url=settings.EXTERNAL_JOBS_URL,
        timeout=settings.EXTERNAL_JOBS_TIMEOUT,
    ) as client:
        yield client


def _require_non_blank(name: str, values: Optional[list[str]]) -> None:
    """Reject blank repeated query values; an unsupplied list is left alone."""
    if values is not None and any(not value.strip() for value in values):
        raise ValidationError(f"{name} entries must not be empty")


def _map_search_error(e: Exception) -> int:
    """Map a search failure to an HTTP status code."""
    if isinstance(e, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    elif isinstance(e, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(e, (TransportError, DecodeError)):
        return status.HTTP_502_BAD_GATEWAY
    else:
        return status.HTTP_500_INTERNAL_SERVER_ERROR


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/jobs", response_model=JobsResponse, response_model_exclude_none=True)
async def get_jobs(
    id: Optional[uuid.UUID] = Query(None, description="Subscriber ID"),
    posted_date: Optional[datetime] = Query(None, description="ISO-8601 posted-date threshold"),
    job_titles: Optional[list[str]] = Query(None, description="Overrides stored job titles"),
    country: Optional[list[str]] = Query(None, description="Overrides stored countries"),
    salary_min: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Search the internal store and the external source for a subscriber.

    Job titles and countries not given in the query are taken from the
    subscriber's stored preferences. If the external source fails but the
    internal store matched at least one job, the internal jobs are returned
    with a warning message instead of an error.

    Example:
        GET /V1/jobs?id=3f2a...&job_titles=Cloud%20Engineer&country=USA

        Response:
        {
            "internal_jobs": ["7c1e...", "9b04..."],
            "external_jobs": [
                {"title": "Cloud Engineer", "salary": 65000, "skills": ["AWS", "Azure"]}
            ]
        }
    """
    criteria = SearchCriteria(
        subscriber_id=id,
        job_titles=job_titles,
        salary_min=salary_min,
        posted_date=posted_date,
        preferred_countries=country,
    )
    service = JobSearchService(
        db,
        client,
        page_size=settings.INTERNAL_PAGE_SIZE,
        default_country=settings.DEFAULT_COUNTRY,
    )

    try:
        _require_non_blank("job_titles", job_titles)
        _require_non_blank("country", country)
        result = await service.get_jobs(criteria)
        result.raise_for_error()
    except SearchError as e:
        logger.error(f"Job search failed for subscriber {id}: {e}")
        raise HTTPException(status_code=_map_search_error(e), detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error in job search for subscriber {id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unexpected error occurred",
        )

    return JobsResponse(
        internal_jobs=result.internal_jobs,
        external_jobs=[ExternalJobOut(**job.to_dict()) for job in result.external_jobs],
        message=result.message,
    )
