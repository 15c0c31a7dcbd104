from __future__ import annotations

import dataclasses
from io import BytesIO

import httpx
import pytest
from fastapi.testclient import TestClient

from core.dependencies import get_analysis_service, get_llm_client, get_settings
from core.settings import AppSettings
from docanalysis.core.exceptions import ExternalServiceError
from main import app
from services.analysis_service import DocumentAnalysisService
from tests.fakes import FakeClock, FakeProvider, connect_error, failed, running, succeeded

client = TestClient(app)

PDF_BYTES = b"%PDF-1.4\n%dummy pdf file\n"
LONG_TEXT = "Page 1:\nPATIENT: Jane Doe (34 years)\nAMH 1.2 ng/mL, AFC 14, FSH 6.1 IU/L"


class _StubLLM:
    def __init__(self, report: str = "FIRST VISIT NOTE", error: Exception | None = None):
        self.report = report
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate_report(self, text: str, api_key: str) -> str:
        self.calls.append((text, api_key))
        if self.error is not None:
            raise self.error
        return self.report


@pytest.fixture(autouse=True)
def _clear_overrides():
    app.dependency_overrides[get_settings] = lambda: AppSettings(MAX_UPLOAD_SIZE_MB=1)
    yield
    app.dependency_overrides.clear()


def _use_provider(provider: FakeProvider, config) -> None:
    service = DocumentAnalysisService.from_config(config, provider.client(), clock=FakeClock())
    app.dependency_overrides[get_analysis_service] = lambda: service


def _upload(content: bytes = PDF_BYTES, filename: str = "referral.pdf"):
    return client.post(
        "/api/ocr",
        files={"file": (filename, BytesIO(content), "application/pdf")},
    )


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["provider_configured"] is True


def test_trace_id_echoed():
    resp = client.get("/health", headers={"X-Trace-ID": "trace-abc"})
    assert resp.headers["X-Trace-ID"] == "trace-abc"


def test_ocr_happy_path(config):
    provider = FakeProvider(polls=[running(), running(), succeeded(LONG_TEXT)])
    _use_provider(provider, config)

    resp = _upload()

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "text": LONG_TEXT, "filename": "referral.pdf"}
    assert provider.poll_count == 3
    assert provider.submit_requests[0].headers["Content-Type"] == "application/pdf"
    assert provider.submit_requests[0].content == PDF_BYTES
    assert "X-Trace-ID" in resp.headers


def test_ocr_missing_file(config):
    _use_provider(FakeProvider(), config)

    resp = client.post("/api/ocr")

    assert resp.status_code == 400
    assert resp.json()["code"] == "MISSING_INPUT"


def test_ocr_empty_file(config):
    provider = FakeProvider()
    _use_provider(provider, config)

    resp = _upload(content=b"")

    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_INPUT"
    assert provider.submit_requests == []


def test_ocr_file_too_large(config):
    provider = FakeProvider()
    _use_provider(provider, config)

    resp = _upload(content=b"x" * (1024 * 1024 + 1))

    assert resp.status_code == 413
    assert resp.json()["code"] == "PAYLOAD_TOO_LARGE"
    assert provider.submit_requests == []


def test_ocr_short_text_rejected(config):
    _use_provider(FakeProvider(polls=[succeeded("Page 1:")]), config)

    resp = _upload()

    assert resp.status_code == 400
    assert resp.json()["code"] == "NO_TEXT_EXTRACTED"


def test_ocr_provider_failure(config):
    error = {"code": "InvalidContent", "message": "The file is corrupted or format is unsupported."}
    _use_provider(FakeProvider(polls=[failed(error)]), config)

    resp = _upload()

    assert resp.status_code == 502
    body = resp.json()
    assert body["code"] == "PROVIDER_FAILURE"
    assert body["detail"] == error["message"]
    assert body["details"]["provider_error"] == error


def test_ocr_provider_failure_with_plain_string_error(config):
    _use_provider(FakeProvider(polls=[failed("corrupt file")]), config)

    resp = _upload()

    assert resp.status_code == 502
    body = resp.json()
    assert body["code"] == "PROVIDER_FAILURE"
    assert body["detail"] == "corrupt file"
    assert body["details"]["provider_error"] == "corrupt file"


def test_ocr_processing_timeout(config):
    cfg = dataclasses.replace(config, max_poll_attempts=3)
    _use_provider(FakeProvider(polls=[running()]), cfg)

    resp = _upload()

    assert resp.status_code == 504
    body = resp.json()
    assert body["code"] == "PROCESSING_TIMEOUT"
    assert body["details"]["reason"] == "max_attempts"


def test_ocr_submission_rejected(config):
    _use_provider(FakeProvider(submit=httpx.Response(401, text="Access denied")), config)

    resp = _upload()

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "SUBMISSION_FAILED"
    assert body["details"]["provider_status"] == 401


def test_ocr_relative_operation_location(config):
    provider = FakeProvider(submit=httpx.Response(202, headers={"Operation-Location": "/analyzeResults/op-123"}))
    _use_provider(provider, config)

    resp = _upload()

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "SUBMISSION_FAILED"
    assert body["details"]["kind"] == "malformed_response"
    assert provider.poll_count == 0


def test_ocr_poll_transport_failure(config):
    cfg = dataclasses.replace(config, poll_transport_retries=0)
    _use_provider(FakeProvider(polls=[connect_error()]), cfg)

    resp = _upload()

    assert resp.status_code == 500
    assert resp.json()["code"] == "POLL_TRANSPORT_FAILED"


def test_analyze_missing_text():
    app.dependency_overrides[get_llm_client] = lambda: _StubLLM()

    resp = client.post("/api/analyze", json={"apiKey": "sk-test"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "MISSING_INPUT"
    assert resp.json()["details"]["field"] == "text"


def test_analyze_missing_api_key():
    llm = _StubLLM()
    app.dependency_overrides[get_llm_client] = lambda: llm

    resp = client.post("/api/analyze", json={"text": LONG_TEXT})

    assert resp.status_code == 400
    assert resp.json()["details"]["field"] == "apiKey"
    assert llm.calls == []


def test_analyze_happy_path():
    llm = _StubLLM(report="FIRST VISIT NOTE\nPatient: Jane Doe")
    app.dependency_overrides[get_llm_client] = lambda: llm

    resp = client.post("/api/analyze", json={"text": LONG_TEXT, "apiKey": "sk-test"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "report": "FIRST VISIT NOTE\nPatient: Jane Doe"}
    assert llm.calls == [(LONG_TEXT, "sk-test")]


def test_analyze_llm_error():
    error = ExternalServiceError("LLM", "rate_limit", details={"http_code": 429})
    app.dependency_overrides[get_llm_client] = lambda: _StubLLM(error=error)

    resp = client.post("/api/analyze", json={"text": LONG_TEXT, "apiKey": "sk-test"})

    assert resp.status_code == 502
    assert resp.json()["code"] == "LLM_RATE_LIMIT"
