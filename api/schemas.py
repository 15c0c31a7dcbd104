"""Pydantic request/response schemas for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://www.rfc-editor.org/rfc/rfc7807
    """

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code for this problem")
    detail: Optional[str] = Field(
        None, description="Human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None,
        description="URI reference identifying this specific occurrence (e.g., request path)",
    )

    # Extension members (allowed by RFC 7807)
    code: str = Field(..., description="Application-specific error code")
    category: str = Field(
        ..., description="Error category (client_error, server_error, etc.)"
    )
    retryable: bool = Field(
        default=False, description="Whether the request can be retried"
    )
    details: Optional[dict[str, Any]] = Field(
        None, description="Structured context, e.g. the provider's own error object"
    )
    trace_id: Optional[str] = Field(
        None, description="Distributed tracing ID for correlation across services"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "/errors/PROCESSING_TIMEOUT",
                "title": "Document processing did not finish in time",
                "status": 504,
                "detail": "No result after 120 status checks",
                "instance": "/api/ocr",
                "code": "PROCESSING_TIMEOUT",
                "category": "external_service",
                "retryable": True,
                "details": {"reason": "max_attempts", "attempts": 120},
                "trace_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
            }
        }
    )


class OcrResponse(BaseModel):
    """Text extracted from an uploaded document."""

    success: bool = Field(True, description="Always true; failures use ProblemDetail")
    text: str = Field(..., description="Recognized document text")
    filename: Optional[str] = Field(None, description="Original upload filename")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "text": "Page 1:\nPATIENT: Jane Doe (34 years)\nAMH 1.2 ng/mL",
                "filename": "referral.pdf",
            }
        }
    )


class AnalyzeRequest(BaseModel):
    """Report generation request.

    ``apiKey`` is optional when the server has an LLM key configured.
    """

    text: Optional[str] = Field(None, description="Extracted document text")
    api_key: Optional[str] = Field(None, alias="apiKey", description="LLM API key")

    model_config = ConfigDict(populate_by_name=True)


class AnalyzeResponse(BaseModel):
    success: bool = Field(True)
    report: str = Field(..., description="Generated first-visit note")


class HealthResponse(BaseModel):
    """Service health status response."""

    status: str = Field(..., description="Overall status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    provider_configured: bool = Field(
        ..., description="Whether the analysis provider endpoint and key are set"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "service": "fertility-docs-api",
                "version": "1.0.0",
                "provider_configured": True,
            }
        }
    )
