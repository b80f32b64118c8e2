"""
Typed structures passed between the search components.

All of them are request-scoped: built for one GET /V1/jobs call and
discarded once the response is written.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SearchCriteria:
    """
    Filters for one job search.

    None means "not supplied by the caller" for job_titles and
    preferred_countries; an explicit empty list is a supplied value.
    """
    subscriber_id: Optional[uuid.UUID] = None
    job_titles: Optional[list[str]] = None
    salary_min: int = 0
    posted_date: Optional[datetime] = None
    preferred_countries: Optional[list[str]] = None

    def with_defaults(self, preferences: "SubscriberPreferences") -> "SearchCriteria":
        """Fill unsupplied title/country lists from stored preferences, field by field."""
        return replace(
            self,
            job_titles=list(preferences.job_titles) if self.job_titles is None else self.job_titles,
            preferred_countries=(
                list(preferences.preferred_countries)
                if self.preferred_countries is None
                else self.preferred_countries
            ),
        )


@dataclass(frozen=True)
class SubscriberPreferences:
    """Stored search defaults of a subscriber."""
    subscriber_id: uuid.UUID
    job_titles: list[str] = field(default_factory=list)
    preferred_countries: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExternalJob:
    """A job listing decoded from the external source."""
    title: str
    salary: int
    skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"title": self.title, "salary": self.salary, "skills": list(self.skills)}


@dataclass(frozen=True)
class AggregationResult:
    """
    Combined answer of one aggregation call.

    error is set only when the operation failed as a whole; in that case
    both job lists are empty. message carries a non-fatal warning when
    the external fetch was downgraded.
    """
    internal_jobs: list[uuid.UUID] = field(default_factory=list)
    external_jobs: list[ExternalJob] = field(default_factory=list)
    message: Optional[str] = None
    error: Optional[Exception] = None

    def raise_for_error(self) -> None:
        """Raise the operation error, if any."""
        if self.error is not None:
            raise self.error
