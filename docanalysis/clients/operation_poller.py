"""Status polling for submitted analysis operations.

The poller waits a fixed interval, queries the operation, and repeats until
the provider reports a terminal status or the attempt budget is spent:

    RUNNING -> RUNNING     unrecognized or running status, attempts < max
    RUNNING -> SUCCEEDED   provider status "succeeded"
    RUNNING -> FAILED      provider status "failed"
    RUNNING -> TIMED_OUT   attempts == max without a terminal status

Failed queries (network errors, 429/5xx, unreadable bodies) are tolerated up
to ``poll_transport_retries`` in a row and are retried on the next scheduled
attempt; each one still consumes an attempt.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from docanalysis.clients.operation_config import OperationClientConfig
from docanalysis.core.config import PROVIDER_KEY_HEADER, TRANSIENT_POLL_STATUS_CODES
from docanalysis.core.exceptions import PollTransportError
from docanalysis.models.operation import (
    Failed,
    OperationFailed,
    OperationReference,
    OperationResult,
    OperationStatus,
    OperationSucceeded,
    PollAttempt,
    Succeeded,
    TimedOut,
)
from docanalysis.models.provider import parse_operation_status
from docanalysis.utils.timing import Clock, SystemClock

logger = logging.getLogger(__name__)


class _TransientPollFailure(Exception):
    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status = status


class OperationPoller:
    def __init__(
        self,
        config: OperationClientConfig,
        client: httpx.AsyncClient,
        clock: Optional[Clock] = None,
    ):
        self._config = config
        self._client = client
        self._clock = clock or SystemClock()

    async def poll(self, ref: OperationReference) -> OperationResult:
        """Poll ``ref`` until it finishes or the attempt budget runs out.

        Returns:
            Succeeded, Failed or TimedOut

        Raises:
            PollTransportError: If status queries keep failing past the
                retry budget, or the provider refuses a query outright
        """
        max_attempts = self._config.max_poll_attempts
        started = self._clock.monotonic()
        consecutive_failures = 0

        for index in range(1, max_attempts + 1):
            await self._clock.sleep(self._config.poll_interval_seconds)
            attempt = PollAttempt(index=index, elapsed_seconds=self._clock.monotonic() - started)

            try:
                status = await self._query(ref, attempt)
            except _TransientPollFailure as e:
                consecutive_failures += 1
                if consecutive_failures > self._config.poll_transport_retries:
                    logger.error(
                        "Giving up on operation after %d consecutive failed queries",
                        consecutive_failures,
                        extra=self._log_extra(ref, attempt, http_status=e.status),
                    )
                    raise PollTransportError(
                        ref.operation_id, index, e.reason, status=e.status
                    ) from e
                logger.warning(
                    "Status query failed (%s), retrying on next attempt",
                    e.reason,
                    extra=self._log_extra(ref, attempt, http_status=e.status),
                )
                continue

            consecutive_failures = 0

            if isinstance(status, OperationSucceeded):
                logger.info(
                    "Operation succeeded after %d checks",
                    index,
                    extra=self._log_extra(ref, attempt, status="succeeded"),
                )
                return Succeeded(text=status.text, attempts=index)

            if isinstance(status, OperationFailed):
                logger.warning(
                    "Operation failed on provider side after %d checks",
                    index,
                    extra=self._log_extra(ref, attempt, status="failed"),
                )
                return Failed(detail=status.detail, attempts=index)

            logger.debug(
                "Operation still running",
                extra=self._log_extra(ref, attempt, status=status.raw_status),
            )

        elapsed = self._clock.monotonic() - started
        logger.warning(
            "Operation did not finish within %d checks (%.1fs)",
            max_attempts,
            elapsed,
            extra={"operation_id": ref.operation_id, "attempt": max_attempts, "elapsed_seconds": elapsed},
        )
        return TimedOut(attempts=max_attempts, elapsed_seconds=elapsed)

    async def _query(self, ref: OperationReference, attempt: PollAttempt) -> OperationStatus:
        try:
            resp = await self._client.get(
                ref.url,
                headers={PROVIDER_KEY_HEADER: self._config.api_key},
                timeout=self._config.request_timeout_seconds,
            )
        except httpx.TransportError as e:
            raise _TransientPollFailure(f"{type(e).__name__}: {e}") from e

        if resp.status_code in TRANSIENT_POLL_STATUS_CODES:
            raise _TransientPollFailure(f"HTTP {resp.status_code}", status=resp.status_code)

        if resp.status_code >= 400:
            raise PollTransportError(
                ref.operation_id,
                attempt.index,
                f"Provider refused status query with HTTP {resp.status_code}",
                status=resp.status_code,
            )

        try:
            return parse_operation_status(resp.json())
        except ValueError as e:
            # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
            reason = "unexpected response shape" if isinstance(e, ValidationError) else "invalid JSON"
            raise _TransientPollFailure(reason, status=resp.status_code) from e

    @staticmethod
    def _log_extra(ref: OperationReference, attempt: PollAttempt, **fields) -> dict:
        extra = {
            "operation_id": ref.operation_id,
            "attempt": attempt.index,
            "elapsed_seconds": round(attempt.elapsed_seconds, 3),
        }
        extra.update({k: v for k, v in fields.items() if v is not None})
        return extra
