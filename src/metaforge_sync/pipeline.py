"""Sync orchestration: fetch -> map -> write, one entity kind at a time."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from metaforge_sync.connectors.base import BaseConnector
from metaforge_sync.errors import SyncFailedError
from metaforge_sync.kinds import EntityKind
from metaforge_sync.models.canonical import CanonicalRecord
from metaforge_sync.store.writer import BatchUpsertWriter

logger = logging.getLogger(__name__)


class KindState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    MAPPING = "mapping"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class RunStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class KindResult(BaseModel):
    """Outcome of one entity kind within a run."""

    kind: str
    collection: str
    required: bool
    state: KindState = KindState.IDLE
    fetched: int = 0
    written: int = 0
    error: Optional[str] = Field(default=None, description="Set when state is failed")
    failed_during: Optional[KindState] = None


class SyncReport(BaseModel):
    """Summary of a sync run."""

    status: RunStatus = RunStatus.RUNNING
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None
    results: list[KindResult] = Field(default_factory=list)

    def result(self, kind: str) -> Optional[KindResult]:
        return next((r for r in self.results if r.kind == kind), None)

    @property
    def failed_kinds(self) -> list[str]:
        return [r.kind for r in self.results if r.state == KindState.FAILED]


def sync_kind(
    kind: EntityKind,
    *,
    connector: BaseConnector,
    writer: BatchUpsertWriter,
    result: KindResult,
) -> KindResult:
    """
    Run fetch, map and write for one kind, updating result.state as it goes.
    Exceptions propagate with result left in the state that raised.
    """
    result.state = KindState.FETCHING
    logger.info("Fetching %s from %s", kind.name, kind.endpoint)
    raw_records = connector.fetch_all(kind.endpoint, kind.key)
    result.fetched = len(raw_records)
    logger.info("Fetched %d %s from MetaForge", result.fetched, kind.name)

    result.state = KindState.MAPPING
    records: list[CanonicalRecord] = [kind.mapper(raw) for raw in raw_records]

    result.state = KindState.WRITING
    logger.info("Upserting %s into %s", kind.name, kind.collection)
    result.written = writer.upsert(kind.collection, records)
    logger.info("Upserted %d %s into %s", result.written, kind.name, kind.collection)

    result.state = KindState.DONE
    return result


def run_sync(
    kinds: list[EntityKind],
    *,
    connector: BaseConnector,
    writer: BatchUpsertWriter,
) -> SyncReport:
    """
    Sync each kind in order. A required kind's failure aborts the run with
    SyncFailedError; an optional kind's failure is logged and skipped.
    """
    report = SyncReport()
    logger.info("Starting MetaForge sync (%d kinds)", len(kinds))

    for kind in kinds:
        result = KindResult(kind=kind.name, collection=kind.collection, required=kind.required)
        report.results.append(result)
        try:
            sync_kind(kind, connector=connector, writer=writer, result=result)
        except Exception as e:
            result.failed_during = result.state
            result.state = KindState.FAILED
            result.error = f"{type(e).__name__}: {e}"
            if kind.required:
                logger.error(
                    "Required kind %s failed while %s: %s",
                    kind.name,
                    result.failed_during.value,
                    e,
                )
                report.status = RunStatus.FAILED
                report.finished_at = datetime.now(timezone.utc)
                raise SyncFailedError(kind.name, report) from e
            logger.warning(
                "Optional kind %s failed while %s; continuing: %s",
                kind.name,
                result.failed_during.value,
                e,
            )

    report.status = RunStatus.COMPLETED
    report.finished_at = datetime.now(timezone.utc)
    if report.failed_kinds:
        logger.info("MetaForge sync completed; optional kinds failed: %s", report.failed_kinds)
    else:
        logger.info("MetaForge sync completed successfully.")
    return report
