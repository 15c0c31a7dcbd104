"""Exception hierarchy for the document analysis service.

All HTTP-facing exceptions inherit from BaseError and render as RFC 7807
Problem Details. The long-running operation client adds two failures of its
own: SubmissionError (the document never became a remote job) and
PollTransportError (the job exists but its status could not be read).
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """Error categories for classification and monitoring."""

    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    EXTERNAL_SERVICE = "external_service"
    VALIDATION = "validation"


class BaseError(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error message
        error_code: Application-specific error code
        category: Error category for classification
        http_status: HTTP status code to return
        details: Additional context (dict)
        retryable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory,
        http_status: int,
        details: Optional[dict[str, Any]] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.http_status = http_status
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 Problem Details format.

        ``details["detail"]`` becomes the top-level detail string; any other
        context is carried in the ``details`` extension member.
        """
        extra = {k: v for k, v in self.details.items() if k != "detail"}
        return {
            "type": f"/errors/{self.error_code}",
            "title": self.message,
            "status": self.http_status,
            "code": self.error_code,
            "detail": self.details.get("detail"),
            "category": self.category.value,
            "retryable": self.retryable,
            "details": extra or None,
        }


class ClientError(BaseError):
    """Base for client errors (4xx). Not retryable."""

    def __init__(self, message: str, error_code: str, **kwargs):
        super().__init__(
            message=message,
            error_code=error_code,
            category=ErrorCategory.CLIENT_ERROR,
            http_status=kwargs.pop("http_status", 400),
            retryable=False,
            **kwargs,
        )


class MissingInputError(ClientError):
    """A required request input is absent (400)."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message=message,
            error_code="MISSING_INPUT",
            http_status=400,
            details={"field": field},
        )


class PayloadTooLargeError(ClientError):
    """Uploaded file exceeds the size limit (413)."""

    def __init__(self, max_size_mb: int, actual_size_mb: float):
        super().__init__(
            message=f"File too large: {actual_size_mb:.2f}MB (max: {max_size_mb}MB)",
            error_code="PAYLOAD_TOO_LARGE",
            http_status=413,
            details={"max_size_mb": max_size_mb, "actual_size_mb": actual_size_mb},
        )


class NoTextExtractedError(ClientError):
    """The provider finished but recognized too little text (400)."""

    def __init__(self, extracted_chars: int, min_chars: int):
        super().__init__(
            message="No text could be extracted from the document",
            error_code="NO_TEXT_EXTRACTED",
            http_status=400,
            details={"extracted_chars": extracted_chars, "min_chars": min_chars},
        )


class ServerError(BaseError):
    """Base for server errors (5xx)."""

    def __init__(self, message: str, error_code: str, **kwargs):
        super().__init__(
            message=message,
            error_code=error_code,
            category=kwargs.pop("category", ErrorCategory.SERVER_ERROR),
            http_status=kwargs.pop("http_status", 500),
            retryable=kwargs.pop("retryable", False),
            **kwargs,
        )


class ExternalServiceError(ServerError):
    """External service failure (502 Bad Gateway / 504 Gateway Timeout).

    Args:
        service_name: Name of the external service
        error_type: Type of error ("timeout", "unavailable", "error",
            "rate_limit", "invalid_response")
        details: Additional error context
    """

    def __init__(self, service_name: str, error_type: str, **kwargs):
        if error_type == "timeout":
            http_status = 504
        elif error_type == "unavailable":
            http_status = 503
        else:
            http_status = 502

        additional_details = kwargs.pop("details", {})
        additional_details.update(
            {
                "service": service_name,
                "error_type": error_type,
            }
        )

        super().__init__(
            message=f"{service_name} service {error_type}",
            error_code=f"{service_name.upper()}_{error_type.upper()}",
            category=ErrorCategory.EXTERNAL_SERVICE,
            http_status=http_status,
            retryable=error_type != "invalid_response",
            details=additional_details,
            **kwargs,
        )


class AnalysisFailedError(ServerError):
    """An analysis outcome that must be reported as an HTTP error.

    Carries the status chosen by the analysis service unchanged so that the
    submission, provider and timeout categories stay distinguishable.
    """

    def __init__(self, message: str, error_code: str, http_status: int, details: dict):
        category = (
            ErrorCategory.CLIENT_ERROR if http_status < 500 else ErrorCategory.EXTERNAL_SERVICE
        )
        super().__init__(
            message=message,
            error_code=error_code,
            category=category,
            http_status=http_status,
            retryable=http_status in (500, 504),
            details=details,
        )


class SubmissionKind(str, Enum):
    """Why a document could not be turned into a remote operation."""

    TRANSPORT = "transport"
    REJECTED = "rejected"
    MALFORMED_RESPONSE = "malformed_response"


class SubmissionError(Exception):
    """The provider did not accept the document.

    Args:
        kind: Failure classification
        message: Human-readable description
        status: HTTP status returned by the provider, if any
        body: Truncated response body, if any
    """

    def __init__(
        self,
        kind: SubmissionKind,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.body = body

    def to_details(self) -> dict[str, Any]:
        details: dict[str, Any] = {"kind": self.kind.value, "detail": self.message}
        if self.status is not None:
            details["provider_status"] = self.status
        if self.body:
            details["provider_body"] = self.body
        return details


class PollTransportError(Exception):
    """Status of a submitted operation could not be read.

    Raised once the consecutive-failure budget is spent or the provider
    answers a status query with a non-transient client error. This is not a
    provider-reported job failure.
    """

    def __init__(
        self,
        operation_id: str,
        attempts: int,
        reason: str,
        status: Optional[int] = None,
    ):
        super().__init__(f"Polling operation {operation_id} failed: {reason}")
        self.operation_id = operation_id
        self.attempts = attempts
        self.reason = reason
        self.status = status

    def to_details(self) -> dict[str, Any]:
        details: dict[str, Any] = {
            "detail": self.reason,
            "operation_id": self.operation_id,
            "attempts": self.attempts,
        }
        if self.status is not None:
            details["provider_status"] = self.status
        return details
