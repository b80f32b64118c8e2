"""Criteria resolution: fill unsupplied filters from the subscriber profile."""

import uuid
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from search.errors import NotFoundError, PersistenceError
from search.types import SearchCriteria, SubscriberPreferences
from utils.search_logging import SearchLogContext

PreferencesLoader = Callable[[uuid.UUID], Optional[SubscriberPreferences]]


class CriteriaResolver:
    """
    Resolves SearchCriteria against the stored subscriber profile.

    Titles and countries supplied by the caller win; each unsupplied
    field is taken whole from the profile, never merged.
    """

    def __init__(self, load_preferences: PreferencesLoader, log: SearchLogContext):
        self._load_preferences = load_preferences
        self.log = log

    def resolve(self, criteria: SearchCriteria) -> SearchCriteria:
        """
        Args:
            criteria: Caller criteria, subscriber_id required

        Returns:
            Criteria with job_titles and preferred_countries filled in

        Raises:
            NotFoundError: subscriber_id missing or unknown
            PersistenceError: profile read failed
        """
        if criteria.subscriber_id is None:
            raise NotFoundError("user ID is required to resolve search criteria")

        try:
            preferences = self._load_preferences(criteria.subscriber_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"error getting user info: {e}") from e

        if preferences is None:
            raise NotFoundError(f"user with ID {criteria.subscriber_id} not found")

        resolved = criteria.with_defaults(preferences)
        self.log.log_info(
            f"Resolved criteria: titles={resolved.job_titles} "
            f"countries={resolved.preferred_countries} salary_min={resolved.salary_min}"
        )
        return resolved
