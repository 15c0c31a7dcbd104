"""Document analysis: submit a document, poll it to completion, classify the outcome."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import httpx

from docanalysis.clients.operation_config import OperationClientConfig
from docanalysis.clients.operation_poller import OperationPoller
from docanalysis.clients.operation_submitter import OperationSubmitter
from docanalysis.core.exceptions import PollTransportError, SubmissionError
from docanalysis.models.operation import (
    DocumentPayload,
    Failed,
    Succeeded,
)
from docanalysis.utils.timing import Clock

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class AnalysisText:
    text: str
    attempts: int


@dataclass(frozen=True)
class AnalysisError:
    """A failed analysis, already classified for the HTTP boundary.

    ``error`` is a stable code, ``status`` the HTTP status to answer with.
    """

    error: str
    status: int
    message: str
    details: dict[str, Any] = field(default_factory=dict)


AnalysisOutcome = Union[AnalysisText, AnalysisError]


def _failure_message(detail: Any) -> str:
    if isinstance(detail, dict):
        message = detail.get("message")
        if isinstance(message, str) and message:
            return message
    elif isinstance(detail, str) and detail:
        return detail
    return "Provider reported failure"


class DocumentAnalysisService:
    """Runs one submit-then-poll cycle per call.

    A semaphore caps how many operations are in flight toward the provider;
    nothing else is shared between calls.
    """

    def __init__(
        self,
        submitter: OperationSubmitter,
        poller: OperationPoller,
        max_concurrent_operations: int,
    ):
        self._submitter = submitter
        self._poller = poller
        self._semaphore = asyncio.Semaphore(max_concurrent_operations)

    @classmethod
    def from_config(
        cls,
        config: OperationClientConfig,
        client: httpx.AsyncClient,
        clock: Optional[Clock] = None,
    ) -> "DocumentAnalysisService":
        return cls(
            submitter=OperationSubmitter(config, client),
            poller=OperationPoller(config, client, clock=clock),
            max_concurrent_operations=config.max_concurrent_operations,
        )

    async def run_analysis(
        self,
        content: bytes,
        content_type: Optional[str],
        filename: Optional[str] = None,
        deadline_seconds: Optional[float] = None,
    ) -> AnalysisOutcome:
        """Extract the text of a document.

        Args:
            content: Raw document bytes
            content_type: Uploader-declared MIME type, forwarded unchanged
            filename: Original filename, for logs only
            deadline_seconds: Caller deadline for the whole operation; when it
                expires the poll loop is cancelled and a timeout is reported

        Returns:
            AnalysisText on success, AnalysisError otherwise
        """
        try:
            payload = DocumentPayload(
                content=content,
                content_type=content_type or DEFAULT_CONTENT_TYPE,
                filename=filename,
            )
        except ValueError as e:
            return AnalysisError(
                error="INVALID_INPUT",
                status=400,
                message="Invalid document",
                details={"detail": str(e)},
            )

        start_time = time.perf_counter()
        try:
            if deadline_seconds is None:
                outcome = await self._run(payload)
            else:
                outcome = await asyncio.wait_for(self._run(payload), timeout=deadline_seconds)
        except asyncio.TimeoutError:
            outcome = AnalysisError(
                error="PROCESSING_TIMEOUT",
                status=504,
                message="Document processing did not finish in time",
                details={
                    "detail": f"Request deadline of {deadline_seconds}s exceeded",
                    "reason": "deadline",
                },
            )

        duration_ms = round((time.perf_counter() - start_time) * 1000)
        if isinstance(outcome, AnalysisText):
            logger.info(
                "Analysis finished: %d chars extracted",
                len(outcome.text),
                extra={"duration_ms": duration_ms},
            )
        else:
            logger.warning(
                "Analysis failed: %s",
                outcome.error,
                extra={
                    "duration_ms": duration_ms,
                    "error_code": outcome.error,
                    "http_status": outcome.status,
                },
            )
        return outcome

    async def _run(self, payload: DocumentPayload) -> AnalysisOutcome:
        async with self._semaphore:
            try:
                ref = await self._submitter.submit(payload)
            except SubmissionError as e:
                return AnalysisError(
                    error="SUBMISSION_FAILED",
                    status=500,
                    message="Document could not be submitted for analysis",
                    details=e.to_details(),
                )

            try:
                result = await self._poller.poll(ref)
            except PollTransportError as e:
                return AnalysisError(
                    error="POLL_TRANSPORT_FAILED",
                    status=500,
                    message="Lost contact with the analysis provider",
                    details=e.to_details(),
                )

        if isinstance(result, Succeeded):
            return AnalysisText(text=result.text, attempts=result.attempts)

        if isinstance(result, Failed):
            return AnalysisError(
                error="PROVIDER_FAILURE",
                status=502,
                message="The provider could not process the document",
                details={
                    "detail": _failure_message(result.detail),
                    "provider_error": result.detail,
                    "attempts": result.attempts,
                },
            )

        # TimedOut: the client gave up, the provider never said the job failed
        return AnalysisError(
            error="PROCESSING_TIMEOUT",
            status=504,
            message="Document processing did not finish in time",
            details={
                "detail": f"No result after {result.attempts} status checks",
                "reason": "max_attempts",
                "attempts": result.attempts,
                "elapsed_seconds": round(result.elapsed_seconds, 3),
            },
        )
