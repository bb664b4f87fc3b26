"""Abstract base class for paginated source connectors."""

from abc import ABC, abstractmethod
from typing import Any, Iterator

from metaforge_sync.models.raw import RawRecord


class BaseConnector(ABC):
    """
    Standard interface for content API connectors.
    Connectors fetch one page at a time and yield raw record batches.
    """

    source_id: str = ""

    @abstractmethod
    def fetch_page(self, url: str) -> Any:
        """
        Fetch one page and return its decoded JSON payload.
        """
        pass

    @abstractmethod
    def iter_pages(self, endpoint: str, key: str) -> Iterator[list[RawRecord]]:
        """
        Lazily yield the raw records of each page until pagination is exhausted.
        """
        pass

    def fetch_all(self, endpoint: str, key: str) -> list[RawRecord]:
        """
        Fetch every page of an endpoint and return the concatenated records.
        """
        records: list[RawRecord] = []
        for batch in self.iter_pages(endpoint, key):
            records.extend(batch)
        return records
