"""Document store interface used by the batch writer."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


class DocumentStore(ABC):
    """
    Collection-scoped document store with merge-upsert batches.
    A batch is applied atomically: every document or none.
    """

    max_batch_size: int = 500

    @abstractmethod
    def commit_batch(self, collection: str, documents: Sequence[tuple[str, dict[str, Any]]]) -> None:
        """
        Merge-upsert (doc_id, data) pairs in one atomic batch.
        Existing fields not present in data are kept.
        """
        pass

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Return one document's data, or None."""
        pass

    @abstractmethod
    def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        """Return (doc_id, data) for every document in a collection."""
        pass

    def count(self, collection: str) -> int:
        return len(self.list_documents(collection))


def merge_document(existing: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """
    Merge update into existing. Nested mappings merge recursively; any other
    value (lists included) replaces the stored one.
    """
    merged = dict(existing)
    for key, value in update.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_document(current, value)
        else:
            merged[key] = value
    return merged
