"""
Search logging utilities with Protocol + Mixin pattern.

Provides trait-like logging for the search components. Each component
receives a log context as an explicit constructor argument; the mixin
provides consistent log_info/log_warning/log_error methods.

Usage:
    log = SearchLogContext(subscriber_id=uid)
    paginator = InternalJobPaginator(fetch_page, log=log.child(SearchComponent.PAGINATOR))
    log.log_info("Starting")  # [AggregationCoordinator:subscriber=<uid>] Starting
"""

import logging
import uuid
from enum import Enum
from typing import Optional, Protocol

logger = logging.getLogger("search")


class SearchComponent(Enum):
    """Component name used as log prefix."""
    CRITERIA = "CriteriaResolver"
    PAGINATOR = "InternalJobPaginator"
    FETCHER = "ExternalJobFetcher"
    COORDINATOR = "AggregationCoordinator"


class SearchLoggerProtocol(Protocol):
    """
    Protocol defining what classes using SearchLoggerMixin must provide.

    This enables type checking - mypy will error if a class uses the mixin
    but doesn't define component or _log_context().
    """
    component: SearchComponent

    def _log_context(self) -> str:
        """Return context string like 'subscriber=<uuid>'."""
        ...


class SearchLoggerMixin:
    """
    Mixin providing log_info/log_warning/log_error methods.

    Log format: [Component:context] message

    Examples:
    - [InternalJobPaginator:subscriber=3f2a...] Page offset=20 returned 20 rows
    - [AggregationCoordinator:subscriber=anonymous] External fetch failed
    """

    def _log_prefix(self: SearchLoggerProtocol) -> str:
        """Build log prefix from component and context."""
        return f"[{self.component.value}:{self._log_context()}]"

    def log_info(self: SearchLoggerProtocol, message: str) -> None:
        """Log info message with component prefix."""
        logger.info(f"{self._log_prefix()} {message}")

    def log_warning(self: SearchLoggerProtocol, message: str) -> None:
        """Log warning message with component prefix."""
        logger.warning(f"{self._log_prefix()} {message}")

    def log_error(self: SearchLoggerProtocol, message: str) -> None:
        """Log error message with component prefix."""
        logger.error(f"{self._log_prefix()} {message}")


class SearchLogContext(SearchLoggerMixin):
    """
    Logging context for one search request.

    Log format: [Component:subscriber=<id>] message
    """

    def __init__(
        self,
        subscriber_id: Optional[uuid.UUID] = None,
        component: SearchComponent = SearchComponent.COORDINATOR,
    ):
        self.subscriber_id = subscriber_id
        self.component = component

    def _log_context(self) -> str:
        return f"subscriber={self.subscriber_id or 'anonymous'}"

    def child(self, component: SearchComponent) -> "SearchLogContext":
        """Same request context, different component prefix."""
        return SearchLogContext(subscriber_id=self.subscriber_id, component=component)
