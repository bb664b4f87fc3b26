"""Exceptions raised by the sync pipeline."""

from typing import Optional


class SyncError(Exception):
    """Base class for sync pipeline errors."""


class ConfigError(SyncError, ValueError):
    """Invalid settings or entity kind selection."""


class SourceRequestError(SyncError):
    """A page request failed (network error or non-2xx status)."""

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MissingIdentifierError(SyncError, ValueError):
    """A raw record has none of its kind's identifier fields."""

    def __init__(self, kind: str, candidates: tuple[str, ...]):
        super().__init__(
            f"Missing {kind} identifier in MetaForge payload (tried: {', '.join(candidates)})"
        )
        self.kind = kind
        self.candidates = candidates


class StoreWriteError(SyncError):
    """A batch commit to the document store failed."""

    def __init__(self, message: str, *, collection: str):
        super().__init__(message)
        self.collection = collection


class SyncFailedError(SyncError):
    """A required entity kind failed; the run was aborted."""

    def __init__(self, kind: str, report):
        super().__init__(f"Required kind '{kind}' failed; sync aborted")
        self.kind = kind
        self.report = report
