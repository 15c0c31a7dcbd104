import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict

import httpx

from docanalysis.core.config import (
    ERROR_BODY_MAX_CHARS,
    LLM_API_VERSION,
    LLM_ENDPOINT_URL,
    LLM_MAX_TOKENS,
    LLM_MODEL,
    LLM_REQUEST_TIMEOUT_SECONDS,
)
from docanalysis.core.exceptions import ExternalServiceError
from docanalysis.prompts import build_first_visit_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMClientConfig:
    endpoint_url: str = LLM_ENDPOINT_URL
    model: str = LLM_MODEL
    max_tokens: int = LLM_MAX_TOKENS
    api_version: str = LLM_API_VERSION
    timeout_seconds: float = LLM_REQUEST_TIMEOUT_SECONDS


def _raise_llm_error(
    error_type: str,
    details: Dict[str, Any],
    exc: Exception,
) -> None:
    raise ExternalServiceError(
        service_name="LLM",
        error_type=error_type,
        details=details,
    ) from exc


def _build_payload(config: LLMClientConfig, text: str) -> dict:
    return {
        "model": config.model,
        "max_tokens": config.max_tokens,
        "messages": [
            {"role": "user", "content": build_first_visit_prompt(text)},
        ],
    }


def _extract_report(data: Any) -> str:
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list) or not content:
        raise ValueError("response has no content blocks")
    report = content[0].get("text") if isinstance(content[0], dict) else None
    if not isinstance(report, str):
        raise ValueError("first content block has no text")
    return report


class LLMClient:
    """One-shot report generation against the messages API.

    No retries: a failed call is raised to the caller as ExternalServiceError.
    """

    def __init__(self, config: LLMClientConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    async def generate_report(self, text: str, api_key: str) -> str:
        """
        Generate a first-visit note from extracted document text.

        Raises:
            ExternalServiceError: On any network, HTTP or response-shape failure.
        """
        logger.info("Calling LLM for report", extra={"service": "llm"})

        try:
            resp = await self._client.post(
                self._config.endpoint_url,
                json=_build_payload(self._config, text),
                headers={
                    "Content-Type": "application/json",
                    "x-api-key": api_key,
                    "anthropic-version": self._config.api_version,
                },
                timeout=self._config.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            _raise_llm_error("timeout", {"reason": str(e) or "request timed out"}, e)
        except httpx.TransportError as e:
            _raise_llm_error("unavailable", {"reason": str(e)}, e)

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_type = (
                "rate_limit"
                if resp.status_code == HTTPStatus.TOO_MANY_REQUESTS
                else "error"
            )
            _raise_llm_error(
                error_type,
                {
                    "http_code": resp.status_code,
                    "detail": f"LLM API error: {resp.status_code}",
                    "body": resp.text[:ERROR_BODY_MAX_CHARS],
                },
                e,
            )

        try:
            report = _extract_report(resp.json())
        except ValueError as e:
            _raise_llm_error("invalid_response", {"reason": str(e)}, e)

        logger.info(
            "Analysis complete: %d chars",
            len(report),
            extra={"service": "llm"},
        )
        return report
