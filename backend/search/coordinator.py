"""
Aggregation of internal and external job searches.

The paginator and the fetcher run as two concurrent tasks. Neither is
cancelled when the other fails; the merge happens once both are done.

Merge policy:
1. Internal failure -> its error is the operation error.
2. External failure with >= 1 internal id -> downgraded to a warning message,
   internal results only.
3. External failure with 0 internal ids -> external error is the operation error.
4. Both succeed -> both result lists, no message.
"""

import asyncio
import uuid
from typing import Union

from search.external_fetcher import ExternalJobFetcher
from search.paginator import InternalJobPaginator
from search.types import AggregationResult, ExternalJob, SearchCriteria
from utils.search_logging import SearchLogContext

EXTERNAL_FETCH_WARNING = "Warning: failed to fetch external jobs"


def merge_results(
    internal: Union[list[uuid.UUID], Exception],
    external: Union[list[ExternalJob], Exception],
    log: SearchLogContext,
) -> AggregationResult:
    """Apply the merge policy to the outcome of both tasks."""
    internal_failed = isinstance(internal, Exception)
    external_failed = isinstance(external, Exception)

    if internal_failed:
        log.log_error(f"could not get internal jobs: {internal}")
    if external_failed:
        log.log_error(f"could not get external jobs: {external}")

    if internal_failed:
        return AggregationResult(error=internal)

    if external_failed:
        if internal:
            log.log_warning(f"Returning {len(internal)} internal jobs without external jobs")
            return AggregationResult(internal_jobs=internal, message=EXTERNAL_FETCH_WARNING)
        return AggregationResult(error=external)

    log.log_info(f"Got jobs: internal: {len(internal)}, external: {len(external)}")
    return AggregationResult(internal_jobs=internal, external_jobs=external)


class AggregationCoordinator:
    """Runs both searches concurrently and merges their outcomes."""

    def __init__(
        self,
        paginator: InternalJobPaginator,
        fetcher: ExternalJobFetcher,
        log: SearchLogContext,
    ):
        self.paginator = paginator
        self.fetcher = fetcher
        self.log = log

    async def aggregate(self, criteria: SearchCriteria) -> AggregationResult:
        """
        Args:
            criteria: Resolved criteria

        Returns:
            AggregationResult; failures are reported through its error field
        """
        self.log.log_info("Starting to fetch internal and external jobs...")

        # return_exceptions: a failing task neither cancels nor hides the other
        internal, external = await asyncio.gather(
            self.paginator.collect(criteria),
            self.fetcher.fetch_all(criteria),
            return_exceptions=True,
        )

        # A cancelled task is not a search failure
        for outcome in (internal, external):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome

        return merge_results(internal, external, self.log)
