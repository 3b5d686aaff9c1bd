import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from errors import CreateError, FetchError
from models import ApplicationPayload, Page

logger = logging.getLogger(__name__)


class PageSource(ABC):
    """Abstract base class for paged job search backends."""

    name: str = "base"

    @abstractmethod
    def fetch_page(
        self,
        keywords: str,
        location: str,
        min_salary: Optional[int],
        page: int,
        page_size: int,
    ) -> Page:
        """Fetch one page of results. Blocking; may raise FetchError."""
        ...

    async def fetch(
        self,
        keywords: str,
        location: str,
        min_salary: Optional[int],
        page: int,
        page_size: int,
    ) -> Page:
        """Run fetch_page off the event loop; any failure surfaces as FetchError."""
        try:
            result = await asyncio.to_thread(
                self.fetch_page, keywords, location, min_salary, page, page_size
            )
        except FetchError as e:
            logger.error(f"[{self.name}] Failed to fetch page {page}: {e}")
            raise
        except Exception as e:
            logger.error(f"[{self.name}] Failed to fetch page {page}: {e}")
            raise FetchError(str(e)) from e
        logger.info(
            f"[{self.name}] Page {page}: {len(result.jobs)} jobs of {result.total_count} total"
        )
        return result


class BulkCreateSink(ABC):
    """Abstract base class for backends that persist selected jobs."""

    name: str = "base"

    @abstractmethod
    def insert(self, payloads: list[ApplicationPayload]) -> list:
        """Persist payloads and return one identifier per created item."""
        ...

    async def create(self, payloads: list[ApplicationPayload]) -> list:
        try:
            ids = await asyncio.to_thread(self.insert, payloads)
        except CreateError as e:
            logger.error(f"[{self.name}] Insert failed: {e}")
            raise
        except Exception as e:
            logger.error(f"[{self.name}] Insert failed: {e}")
            raise CreateError(str(e)) from e
        logger.info(f"[{self.name}] Created {len(ids)} record(s)")
        return ids
