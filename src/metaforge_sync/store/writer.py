"""Chunked merge-upsert of canonical records into a document store."""

import logging
from typing import Optional

from metaforge_sync.models.canonical import CanonicalRecord
from metaforge_sync.store.base import DocumentStore

logger = logging.getLogger(__name__)


class BatchUpsertWriter:
    """
    Writes canonical records in chunks of at most batch_size.
    Each chunk is atomic; chunks are not atomic with each other, so a failed
    run can leave earlier chunks committed. Re-running is idempotent.
    """

    def __init__(self, store: DocumentStore, batch_size: Optional[int] = None):
        limit = store.max_batch_size
        if batch_size is None:
            batch_size = limit
        if batch_size < 1 or batch_size > limit:
            raise ValueError(f"batch_size must be between 1 and {limit}, got {batch_size}")
        self.store = store
        self.batch_size = batch_size

    def upsert(self, collection: str, records: list[CanonicalRecord]) -> int:
        """Persist every record; returns the number written."""
        written = 0
        for start in range(0, len(records), self.batch_size):
            chunk = records[start : start + self.batch_size]
            self.store.commit_batch(collection, [(r.id, r.data) for r in chunk])
            written += len(chunk)
            logger.debug("Committed %d/%d documents to %s", written, len(records), collection)
        return written
