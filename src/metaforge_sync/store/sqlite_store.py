"""SQLite-backed document store with Firestore-style merge semantics."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from metaforge_sync.errors import StoreWriteError
from metaforge_sync.store.base import DocumentStore, merge_document


class SQLiteDocumentStore(DocumentStore):
    """
    Local document store: one row per (collection, id) holding JSON data.
    Each commit_batch runs in a single transaction.
    """

    def __init__(self, db_path: str | Path = "metaforge.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def commit_batch(self, collection: str, documents: Sequence[tuple[str, dict[str, Any]]]) -> None:
        """Merge-upsert documents; rolls back the whole batch on any error."""
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connection()
        try:
            with conn:
                conn.execute("BEGIN IMMEDIATE")
                for doc_id, data in documents:
                    row = conn.execute(
                        "SELECT data FROM documents WHERE collection = ? AND id = ?",
                        (collection, doc_id),
                    ).fetchone()
                    merged = merge_document(json.loads(row["data"]), data) if row else data
                    conn.execute(
                        """
                        INSERT INTO documents (collection, id, data, created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?)
                        ON CONFLICT(collection, id) DO UPDATE SET
                            data = excluded.data,
                            updated_at = excluded.updated_at
                        """,
                        (collection, doc_id, json.dumps(merged, default=str), now, now),
                    )
        except sqlite3.Error as e:
            raise StoreWriteError(
                f"Batch write to {collection} failed: {e}", collection=collection
            ) from e
        finally:
            conn.close()

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Get single document by id."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        return json.loads(row["data"]) if row else None

    def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        """Return all documents of a collection ordered by id."""
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? ORDER BY id",
                (collection,),
            ).fetchall()
        return [(r["id"], json.loads(r["data"])) for r in rows]

    def count(self, collection: str) -> int:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM documents WHERE collection = ?", (collection,)
            ).fetchone()
        return row["n"]

