"""Firestore document store.

Credentials come from Application Default Credentials: set
GOOGLE_APPLICATION_CREDENTIALS to a service account JSON file, or run where
ambient credentials exist. The client is built once by the caller and passed in.
"""

import logging
from typing import Any, Optional, Sequence

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore

from metaforge_sync.errors import StoreWriteError
from metaforge_sync.store.base import DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Writes with WriteBatch.set(..., merge=True); 500 writes per batch."""

    max_batch_size = 500

    def __init__(self, client: Optional[firestore.Client] = None, project: Optional[str] = None):
        self._client = client or firestore.Client(project=project)

    def commit_batch(self, collection: str, documents: Sequence[tuple[str, dict[str, Any]]]) -> None:
        if len(documents) > self.max_batch_size:
            raise ValueError(
                f"Firestore batches hold at most {self.max_batch_size} writes, got {len(documents)}"
            )
        batch = self._client.batch()
        col = self._client.collection(collection)
        for doc_id, data in documents:
            batch.set(col.document(doc_id), data, merge=True)
        try:
            batch.commit()
        except GoogleAPICallError as e:
            raise StoreWriteError(
                f"Firestore batch commit to {collection} failed: {e}", collection=collection
            ) from e

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        snapshot = self._client.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        return [
            (snapshot.id, snapshot.to_dict() or {})
            for snapshot in self._client.collection(collection).stream()
        ]
