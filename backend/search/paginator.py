"""
Internal job store pagination.

Pages through the store with a fixed page size until the first empty page
and returns every matching job id in page order.
"""

import asyncio
import uuid
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from search.errors import PersistenceError
from search.types import SearchCriteria
from utils.search_logging import SearchLogContext

DEFAULT_PAGE_SIZE = 20

# (salary_min, posted_after, titles, countries, limit, offset) -> ids
PageQuery = Callable[
    [int, Optional[datetime], list[str], list[str], int, int],
    list[uuid.UUID],
]


class InternalJobPaginator:
    """
    Collects all internal job ids matching resolved criteria.

    The page query is synchronous (SQLAlchemy session); each page runs on
    the default executor so the event loop stays free for the external fetch.
    """

    def __init__(
        self,
        fetch_page: PageQuery,
        log: SearchLogContext,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.log = log

    async def collect(self, criteria: SearchCriteria) -> list[uuid.UUID]:
        """
        Args:
            criteria: Resolved criteria (titles and countries set)

        Returns:
            Matching ids, concatenated in page order

        Raises:
            PersistenceError: Any page query failed; collected pages are discarded
        """
        loop = asyncio.get_running_loop()
        titles = list(criteria.job_titles or [])
        countries = list(criteria.preferred_countries or [])

        all_ids: list[uuid.UUID] = []
        offset = 0
        while True:
            try:
                batch = await loop.run_in_executor(
                    None,
                    self._fetch_page,
                    criteria.salary_min,
                    criteria.posted_date,
                    titles,
                    countries,
                    self.page_size,
                    offset,
                )
            except SQLAlchemyError as e:
                self.log.log_error(f"Page query failed at offset={offset}: {e}")
                raise PersistenceError(f"error getting internal jobs: {e}") from e

            if not batch:
                break

            all_ids.extend(batch)
            offset += self.page_size

        self.log.log_info(f"Retrieved {len(all_ids)} internal jobs")
        return all_ids
