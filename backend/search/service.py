"""Request-scoped job search facade used by the API layer."""

from functools import partial

import httpx
from sqlalchemy.orm import Session

from db.jobs_service import get_internal_job_ids_page
from db.subscriber_service import get_subscriber_preferences
from search.coordinator import AggregationCoordinator
from search.criteria import CriteriaResolver
from search.external_fetcher import DEFAULT_COUNTRY, ExternalJobFetcher
from search.paginator import DEFAULT_PAGE_SIZE, InternalJobPaginator
from search.types import AggregationResult, SearchCriteria
from utils.search_logging import SearchComponent, SearchLogContext


class JobSearchService:
    """
    Wires the search components for one request.

    Usage:
        async with httpx.AsyncClient(base_url=...) as client:
            service = JobSearchService(db, client)
            result = await service.get_jobs(SearchCriteria(subscriber_id=uid))
    """

    def __init__(
        self,
        db: Session,
        client: httpx.AsyncClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        default_country: str = DEFAULT_COUNTRY,
    ):
        self.db = db
        self.client = client
        self.page_size = page_size
        self.default_country = default_country

    async def get_jobs(self, criteria: SearchCriteria) -> AggregationResult:
        """
        Resolve criteria against the subscriber profile, then aggregate.

        Raises:
            NotFoundError: unknown or missing subscriber
            PersistenceError: subscriber profile read failed
        """
        log = SearchLogContext(subscriber_id=criteria.subscriber_id)

        resolver = CriteriaResolver(
            partial(get_subscriber_preferences, self.db),
            log=log.child(SearchComponent.CRITERIA),
        )
        resolved = resolver.resolve(criteria)

        coordinator = AggregationCoordinator(
            paginator=InternalJobPaginator(
                partial(get_internal_job_ids_page, self.db),
                log=log.child(SearchComponent.PAGINATOR),
                page_size=self.page_size,
            ),
            fetcher=ExternalJobFetcher(
                self.client,
                log=log.child(SearchComponent.FETCHER),
                default_country=self.default_country,
            ),
            log=log,
        )
        return await coordinator.aggregate(resolved)
