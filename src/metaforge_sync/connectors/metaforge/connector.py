"""MetaForge connector for the Arc Raiders content API.

The API is page-number addressed: every endpoint accepts ?page=<n> and
reports pagination metadata in one of several places depending on the
endpoint and API version. Record arrays are also wrapped inconsistently;
see parsers.extract_records.

Pages are fetched strictly in sequence. A non-2xx status or network error
fails the whole endpoint; nothing is retried.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import httpx

from metaforge_sync.config import DEFAULT_BASE_URL
from metaforge_sync.connectors.base import BaseConnector
from metaforge_sync.errors import SourceRequestError
from metaforge_sync.models.raw import RawRecord

from .parsers import (
    build_page_url,
    extract_pagination,
    extract_records,
    next_page,
    pagination_totals,
)

logger = logging.getLogger(__name__)


@dataclass
class PaginationState:
    """Cursor for one endpoint walk."""

    current_page: int = 1
    next_page: Optional[int] = None

    def advance(self) -> bool:
        """Move to next_page; False when it is absent or would not progress."""
        if self.next_page is None or self.next_page <= self.current_page:
            return False
        self.current_page = self.next_page
        self.next_page = None
        return True


class MetaForgeConnector(BaseConnector):
    """
    Connector for the MetaForge API (metaforge.app).
    Resolves endpoints against a base URL and walks page-numbered results.
    """

    source_id = "metaforge"

    DEFAULT_HEADERS = {
        "User-Agent": "metaforge-sync/0.1 (canonical data sync)",
        "Accept": "application/json",
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_url: Prefix for relative endpoints (e.g. /items)
            timeout: Per-request deadline in seconds
            client: Optional httpx client
        """
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    def close(self) -> None:
        self._client.close()

    def resolve_url(self, endpoint: str) -> str:
        """Absolute URLs pass through; relative endpoints join the base URL."""
        if not endpoint:
            raise ValueError("MetaForge endpoint is required")
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        if endpoint.startswith("/"):
            return f"{self.base_url}{endpoint}"
        return f"{self.base_url}/{endpoint}"

    def fetch_page(self, url: str) -> Any:
        """GET one page and decode JSON; raises SourceRequestError on failure."""
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise SourceRequestError(
                f"MetaForge request failed ({status}): {url}",
                url=url,
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            raise SourceRequestError(f"MetaForge request failed: {url}: {e}", url=url) from e

        try:
            return resp.json()
        except ValueError as e:
            raise SourceRequestError(
                f"MetaForge returned non-JSON body: {url}",
                url=url,
                status_code=resp.status_code,
            ) from e

    def iter_pages(self, endpoint: str, key: str) -> Iterator[list[RawRecord]]:
        """
        Yield each page's raw records. Stops when no next page is reported
        or the reported next page does not advance past the current one.
        """
        url = self.resolve_url(endpoint)
        state = PaginationState()
        logged_pagination = False

        while True:
            payload = self.fetch_page(build_page_url(url, state.current_page))
            pagination = extract_pagination(payload)
            if pagination and not logged_pagination:
                total_items, total_pages = pagination_totals(pagination)
                logger.info(
                    "Pagination info for %s: total=%s, pages=%s",
                    endpoint,
                    total_items if total_items is not None else "unknown",
                    total_pages if total_pages is not None else "unknown",
                )
                logged_pagination = True

            records = extract_records(payload, key)
            logger.debug("Page %d of %s: %d records", state.current_page, endpoint, len(records))
            yield [RawRecord(data=r) for r in records]

            state.next_page = next_page(state.current_page, pagination)
            if not state.advance():
                break
