"""
Unit tests for criteria resolution.

The preferences loader is injected, so no database is needed.

Run: python3 -m pytest search/__tests__/test_criteria.py -v
"""
import uuid

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from search.criteria import CriteriaResolver
from search.errors import NotFoundError, PersistenceError
from search.types import SearchCriteria, SubscriberPreferences
from utils.search_logging import SearchComponent, SearchLogContext

SUBSCRIBER_ID = uuid.UUID("11111111-2222-3333-4444-555555555555")


def make_resolver(preferences=None, side_effect=None):
    """Create a resolver whose loader returns preferences (or raises side_effect)."""
    loader = MagicMock(return_value=preferences, side_effect=side_effect)
    log = SearchLogContext(SUBSCRIBER_ID, SearchComponent.CRITERIA)
    return CriteriaResolver(loader, log=log), loader


def stored(titles=None, countries=None):
    return SubscriberPreferences(
        subscriber_id=SUBSCRIBER_ID,
        job_titles=titles if titles is not None else ["T1"],
        preferred_countries=countries if countries is not None else ["USA"],
    )


class TestCriteriaResolver:
    """Tests for CriteriaResolver.resolve."""

    def test_fills_unsupplied_fields_from_profile(self):
        """Titles and countries come from the profile when the caller gave none."""
        resolver, loader = make_resolver(stored(["T1"], ["USA", "Spain"]))

        resolved = resolver.resolve(SearchCriteria(subscriber_id=SUBSCRIBER_ID, salary_min=5000))

        loader.assert_called_once_with(SUBSCRIBER_ID)
        assert resolved.job_titles == ["T1"]
        assert resolved.preferred_countries == ["USA", "Spain"]
        assert resolved.salary_min == 5000

    def test_explicit_titles_win_over_profile(self):
        """Caller titles [T2] replace stored titles [T1]."""
        resolver, _ = make_resolver(stored(["T1"], ["USA"]))

        resolved = resolver.resolve(
            SearchCriteria(subscriber_id=SUBSCRIBER_ID, job_titles=["T2"])
        )

        assert resolved.job_titles == ["T2"]
        assert resolved.preferred_countries == ["USA"]

    def test_explicit_countries_win_over_profile(self):
        """Countries are overridden independently of titles."""
        resolver, _ = make_resolver(stored(["T1"], ["USA"]))

        resolved = resolver.resolve(
            SearchCriteria(subscriber_id=SUBSCRIBER_ID, preferred_countries=["Canada"])
        )

        assert resolved.job_titles == ["T1"]
        assert resolved.preferred_countries == ["Canada"]

    def test_fields_are_never_merged(self):
        """A supplied field is taken whole, not unioned with stored values."""
        resolver, _ = make_resolver(stored(["T1", "T3"], ["USA"]))

        resolved = resolver.resolve(
            SearchCriteria(subscriber_id=SUBSCRIBER_ID, job_titles=["T2"], preferred_countries=["Spain"])
        )

        assert resolved.job_titles == ["T2"]
        assert resolved.preferred_countries == ["Spain"]

    def test_explicit_empty_list_counts_as_supplied(self):
        """An empty list from the caller is kept, not replaced by the profile."""
        resolver, _ = make_resolver(stored(["T1"], ["USA"]))

        resolved = resolver.resolve(SearchCriteria(subscriber_id=SUBSCRIBER_ID, job_titles=[]))

        assert resolved.job_titles == []

    def test_original_criteria_untouched(self):
        """Resolution returns a new object."""
        resolver, _ = make_resolver(stored())
        criteria = SearchCriteria(subscriber_id=SUBSCRIBER_ID)

        resolver.resolve(criteria)

        assert criteria.job_titles is None
        assert criteria.preferred_countries is None

    def test_missing_subscriber_id_raises_not_found(self):
        """No subscriber id means no lookup and NotFoundError."""
        resolver, loader = make_resolver(stored())

        with pytest.raises(NotFoundError):
            resolver.resolve(SearchCriteria(job_titles=["T2"]))

        loader.assert_not_called()

    def test_unknown_subscriber_raises_not_found(self):
        """Loader returning None means unknown subscriber."""
        resolver, _ = make_resolver(None)

        with pytest.raises(NotFoundError) as exc_info:
            resolver.resolve(SearchCriteria(subscriber_id=SUBSCRIBER_ID))

        assert str(SUBSCRIBER_ID) in str(exc_info.value)

    def test_store_failure_raises_persistence_error(self):
        """SQLAlchemy errors from the loader are wrapped."""
        resolver, _ = make_resolver(side_effect=OperationalError("SELECT", {}, Exception("down")))

        with pytest.raises(PersistenceError) as exc_info:
            resolver.resolve(SearchCriteria(subscriber_id=SUBSCRIBER_ID))

        assert isinstance(exc_info.value.__cause__, OperationalError)
