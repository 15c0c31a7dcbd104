import logging
from urllib.parse import urlsplit

import httpx

from docanalysis.clients.operation_config import OperationClientConfig
from docanalysis.core.config import (
    ERROR_BODY_MAX_CHARS,
    OPERATION_LOCATION_HEADER,
    PROVIDER_ANALYZE_PATH,
    PROVIDER_KEY_HEADER,
    SUBMIT_ACCEPTED_STATUS,
)
from docanalysis.core.exceptions import SubmissionError, SubmissionKind
from docanalysis.models.operation import DocumentPayload, OperationReference

logger = logging.getLogger(__name__)


class OperationSubmitter:
    """Starts a remote analysis job for one document.

    Sends exactly one request; failures are raised to the caller as
    SubmissionError and never retried here.
    """

    def __init__(self, config: OperationClientConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client
        self._analyze_url = config.endpoint.rstrip("/") + PROVIDER_ANALYZE_PATH.format(
            model_id=config.model_id
        )

    async def submit(self, payload: DocumentPayload) -> OperationReference:
        try:
            resp = await self._client.post(
                self._analyze_url,
                params={"api-version": self._config.api_version},
                content=payload.content,
                headers={
                    "Content-Type": payload.content_type,
                    PROVIDER_KEY_HEADER: self._config.api_key,
                },
                timeout=self._config.request_timeout_seconds,
            )
        except httpx.TransportError as e:
            logger.error(
                "Document submission transport failure: %s",
                type(e).__name__,
                extra={"service": "provider"},
            )
            raise SubmissionError(
                SubmissionKind.TRANSPORT,
                f"Could not reach document analysis provider: {e}",
            ) from e

        if resp.status_code != SUBMIT_ACCEPTED_STATUS:
            body = resp.text[:ERROR_BODY_MAX_CHARS]
            logger.warning(
                "Document submission rejected with HTTP %d",
                resp.status_code,
                extra={"service": "provider", "http_status": resp.status_code},
            )
            raise SubmissionError(
                SubmissionKind.REJECTED,
                f"Provider rejected document with HTTP {resp.status_code}",
                status=resp.status_code,
                body=body,
            )

        location = resp.headers.get(OPERATION_LOCATION_HEADER, "").strip()
        if not location:
            raise SubmissionError(
                SubmissionKind.MALFORMED_RESPONSE,
                f"Provider accepted document without an {OPERATION_LOCATION_HEADER} header",
                status=resp.status_code,
            )

        parts = urlsplit(location)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            logger.warning(
                "Provider returned unusable %s: %.100s",
                OPERATION_LOCATION_HEADER,
                location,
                extra={"service": "provider", "http_status": resp.status_code},
            )
            raise SubmissionError(
                SubmissionKind.MALFORMED_RESPONSE,
                f"{OPERATION_LOCATION_HEADER} is not an absolute http(s) URL",
                status=resp.status_code,
                body=location[:ERROR_BODY_MAX_CHARS],
            )

        ref = OperationReference(url=location)
        logger.info(
            "Document accepted: %d bytes, content_type=%s",
            payload.size,
            payload.content_type,
            extra={"service": "provider", "operation_id": ref.operation_id},
        )
        return ref
