"""Unit tests for the LLM client."""

import json

import httpx
import pytest

from docanalysis.clients.llm_client import LLMClient, LLMClientConfig
from docanalysis.core.exceptions import ExternalServiceError
from docanalysis.prompts import FIRST_VISIT_NOTE_PROMPT

DOCUMENT_TEXT = "Page 1:\nPATIENT: Jane Doe (34 years)\nAMH 1.2 ng/mL"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGenerateReport:
    """Tests for successful report generation."""

    @pytest.mark.asyncio
    async def test_successful_call(self):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(
                200,
                json={"content": [{"type": "text", "text": "FIRST VISIT NOTE ..."}]},
            )

        async with _client(handler) as client:
            report = await LLMClient(LLMClientConfig(), client).generate_report(
                DOCUMENT_TEXT, "sk-test"
            )

        assert report == "FIRST VISIT NOTE ..."
        request = captured[0]
        assert request.headers["x-api-key"] == "sk-test"
        assert request.headers["anthropic-version"] == "2023-06-01"

        payload = json.loads(request.content)
        assert payload["max_tokens"] == 4096
        assert len(payload["messages"]) == 1
        content = payload["messages"][0]["content"]
        assert content.startswith(FIRST_VISIT_NOTE_PROMPT)
        assert content.endswith(f"Analyze the following medical document:\n\n{DOCUMENT_TEXT}")

    @pytest.mark.asyncio
    async def test_single_request_no_retry(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="upstream error")

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError):
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        assert len(calls) == 1


class TestGenerateReportErrors:
    """Tests for error classification."""

    @pytest.mark.asyncio
    async def test_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "bad request"}})

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        error = exc_info.value
        assert error.error_code == "LLM_ERROR"
        assert error.http_status == 502
        assert error.details["http_code"] == 400
        assert "bad request" in error.details["body"]

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": {"type": "rate_limit_error"}})

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        assert exc_info.value.error_code == "LLM_RATE_LIMIT"

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        assert exc_info.value.error_code == "LLM_UNAVAILABLE"
        assert exc_info.value.http_status == 503

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        assert exc_info.value.error_code == "LLM_TIMEOUT"
        assert exc_info.value.http_status == 504

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [{"content": []}, {"content": [{"type": "tool_use"}]}, {"id": "msg_1"}],
    )
    async def test_malformed_response(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await LLMClient(LLMClientConfig(), client).generate_report(DOCUMENT_TEXT, "k")

        assert exc_info.value.error_code == "LLM_INVALID_RESPONSE"
        assert exc_info.value.retryable is False
