"""Unit tests for exception hierarchy."""

from docanalysis.core.exceptions import (
    AnalysisFailedError,
    BaseError,
    ClientError,
    ErrorCategory,
    ExternalServiceError,
    MissingInputError,
    NoTextExtractedError,
    PayloadTooLargeError,
    PollTransportError,
    SubmissionError,
    SubmissionKind,
)


class TestBaseError:
    """Tests for BaseError class."""

    def test_base_error_creation(self):
        error = BaseError(
            message="Test error",
            error_code="TEST_ERROR",
            category=ErrorCategory.CLIENT_ERROR,
            http_status=400,
            details={"detail": "Additional info", "field": "test"},
            retryable=False,
        )

        assert str(error) == "Test error"
        assert error.error_code == "TEST_ERROR"
        assert error.http_status == 400
        assert error.details == {"detail": "Additional info", "field": "test"}

    def test_base_error_to_dict(self):
        """Test BaseError converts to RFC 7807 format."""
        error = BaseError(
            message="Test error",
            error_code="TEST_ERROR",
            category=ErrorCategory.CLIENT_ERROR,
            http_status=400,
            details={"detail": "Additional context", "field": "file"},
        )

        result = error.to_dict()

        assert result["type"] == "/errors/TEST_ERROR"
        assert result["title"] == "Test error"
        assert result["status"] == 400
        assert result["category"] == "client_error"
        assert result["detail"] == "Additional context"
        assert result["details"] == {"field": "file"}

    def test_to_dict_without_extra_details(self):
        error = BaseError("x", "X", ErrorCategory.SERVER_ERROR, 500, details={"detail": "d"})
        assert error.to_dict()["details"] is None


class TestClientErrors:
    def test_client_error_defaults(self):
        error = ClientError(message="Client error", error_code="CLIENT")
        assert error.http_status == 400
        assert error.retryable is False

    def test_missing_input(self):
        error = MissingInputError("No text provided", field="text")
        assert error.http_status == 400
        assert error.error_code == "MISSING_INPUT"

    def test_payload_too_large(self):
        error = PayloadTooLargeError(max_size_mb=10, actual_size_mb=12.5)
        assert error.http_status == 413
        assert "12.50MB" in error.message

    def test_no_text_extracted(self):
        error = NoTextExtractedError(extracted_chars=12, min_chars=50)
        assert error.http_status == 400
        assert error.message == "No text could be extracted from the document"


class TestExternalServiceError:
    def test_status_by_error_type(self):
        assert ExternalServiceError("LLM", "timeout").http_status == 504
        assert ExternalServiceError("LLM", "unavailable").http_status == 503
        assert ExternalServiceError("LLM", "error").http_status == 502
        assert ExternalServiceError("LLM", "rate_limit").http_status == 502

    def test_code_and_details(self):
        error = ExternalServiceError("LLM", "rate_limit", details={"http_code": 429})
        assert error.error_code == "LLM_RATE_LIMIT"
        assert error.category == ErrorCategory.EXTERNAL_SERVICE
        assert error.details == {"http_code": 429, "service": "LLM", "error_type": "rate_limit"}


class TestAnalysisFailedError:
    def test_keeps_status(self):
        error = AnalysisFailedError("late", "PROCESSING_TIMEOUT", 504, {"detail": "d"})
        assert error.http_status == 504
        assert error.retryable is True
        assert error.category == ErrorCategory.EXTERNAL_SERVICE

    def test_client_status_category(self):
        error = AnalysisFailedError("bad", "INVALID_INPUT", 400, {})
        assert error.category == ErrorCategory.CLIENT_ERROR
        assert error.retryable is False


class TestOperationErrors:
    def test_submission_error_details(self):
        error = SubmissionError(
            SubmissionKind.REJECTED, "rejected", status=415, body="Unsupported media"
        )
        assert error.to_details() == {
            "kind": "rejected",
            "detail": "rejected",
            "provider_status": 415,
            "provider_body": "Unsupported media",
        }

    def test_submission_transport_details(self):
        error = SubmissionError(SubmissionKind.TRANSPORT, "unreachable")
        assert error.to_details() == {"kind": "transport", "detail": "unreachable"}

    def test_poll_transport_error(self):
        error = PollTransportError("op-123", attempts=4, reason="HTTP 503", status=503)
        assert "op-123" in str(error)
        assert error.to_details()["attempts"] == 4
        assert error.to_details()["provider_status"] == 503
        assert not isinstance(error, BaseError)
