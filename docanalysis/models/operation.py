"""Value types of the long-running operation client.

A document becomes an OperationReference on submission; each status query
yields one OperationStatus; the poller ends with one OperationResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union
from urllib.parse import urlsplit


@dataclass(frozen=True)
class DocumentPayload:
    """Raw document bytes plus the content type supplied by the uploader."""

    content: bytes = field(repr=False)
    content_type: str
    filename: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("Document payload must not be empty")

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class OperationReference:
    """Opaque handle to a remote analysis job (the Operation-Location URL)."""

    url: str

    @property
    def operation_id(self) -> str:
        """Trailing path segment, used only to correlate log lines."""
        path = urlsplit(self.url).path.rstrip("/")
        return path.rsplit("/", 1)[-1] or self.url


# -----------------------------------------------------------------------------
# Per-query status
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class OperationRunning:
    raw_status: str


@dataclass(frozen=True)
class OperationSucceeded:
    text: str


@dataclass(frozen=True)
class OperationFailed:
    # Provider error value exactly as sent; usually an object, not always
    detail: Any


OperationStatus = Union[OperationRunning, OperationSucceeded, OperationFailed]


# -----------------------------------------------------------------------------
# Poller outcome
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Succeeded:
    text: str
    attempts: int


@dataclass(frozen=True)
class Failed:
    detail: Any
    attempts: int


@dataclass(frozen=True)
class TimedOut:
    attempts: int
    elapsed_seconds: float


OperationResult = Union[Succeeded, Failed, TimedOut]


@dataclass(frozen=True)
class PollAttempt:
    """Bookkeeping for one status query; never stored."""

    index: int
    elapsed_seconds: float
