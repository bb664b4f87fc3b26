"""Document stores and the batch upsert writer."""

from metaforge_sync.store.base import DocumentStore, merge_document
from metaforge_sync.store.sqlite_store import SQLiteDocumentStore
from metaforge_sync.store.writer import BatchUpsertWriter

__all__ = [
    "BatchUpsertWriter",
    "DocumentStore",
    "SQLiteDocumentStore",
    "merge_document",
]
