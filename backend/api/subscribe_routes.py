"""
API routes for subscriber registration.

Endpoints:
- POST /V1/subscribe     Create or update a subscriber (upsert by email)

Interactive API docs:
- Swagger UI: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.session import get_db
from db.subscriber_service import upsert_subscriber

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class SubscribeRequest(BaseModel):
    """Subscriber registration payload."""
    name: str = Field(min_length=1)
    email: EmailStr
    job_titles: list[str] = Field(min_length=1)
    country: list[str] = Field(min_length=1, description="Preferred countries")
    salary_min: int = Field(ge=0)

    @field_validator('job_titles', 'country')
    @classmethod
    def validate_no_blank_entries(cls, v: list[str]) -> list[str]:
        """Every entry must be a non-blank string."""
        if any(not item.strip() for item in v):
            raise ValueError("entries must not be empty")
        return v


class SubscribeResponse(BaseModel):
    """Response for POST /V1/subscribe."""
    id: uuid.UUID
    name: str
    timestamp: datetime
    message: Optional[str] = None


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/subscribe", response_model=SubscribeResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    request: SubscribeRequest,
    db: Session = Depends(get_db),
):
    """
    Create or update a subscriber and their default search preferences.

    Subscribers are keyed by email: posting an existing email replaces its
    name, job titles, countries and salary floor.

    Example:
        POST /V1/subscribe
        {
            "name": "Romina Bareiro",
            "email": "romina@example.com",
            "job_titles": ["SSr Java Developer", "Sr Java Developer"],
            "country": ["USA", "Canada"],
            "salary_min": 10000
        }

        Response (201):
        {
            "id": "3f2a...",
            "name": "Romina Bareiro",
            "timestamp": "2025-01-01T12:00:00Z",
            "message": "User successfully subscribed"
        }
    """
    try:
        subscriber = upsert_subscriber(
            db,
            name=request.name,
            email=request.email,
            job_titles=request.job_titles,
            preferred_countries=request.country,
            salary_min=request.salary_min,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Subscriber upsert failed for {request.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="could not upsert user to subscriber table",
        )

    logger.info(f"Subscribed {subscriber.email} (id={subscriber.id})")

    return SubscribeResponse(
        id=subscriber.id,
        name=subscriber.user_name,
        timestamp=datetime.now(timezone.utc),
        message="User successfully subscribed",
    )
