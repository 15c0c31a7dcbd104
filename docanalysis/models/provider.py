"""Pydantic models for the provider's analyze-operation response body."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from docanalysis.models.operation import (
    OperationFailed,
    OperationRunning,
    OperationStatus,
    OperationSucceeded,
)

SUCCEEDED_STATUS = "succeeded"
FAILED_STATUS = "failed"


class DocumentLine(BaseModel):
    content: str = ""


class DocumentPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_number: Optional[int] = Field(None, alias="pageNumber")
    lines: list[DocumentLine] = Field(default_factory=list)


class AnalyzeResult(BaseModel):
    """Recognized content of a finished operation."""

    content: Optional[str] = None
    pages: list[DocumentPage] = Field(default_factory=list)

    def text(self) -> str:
        """Return the recognized text.

        The provider's flattened ``content`` wins; without it, pages are
        rendered one block each as ``Page N:`` followed by their lines.
        """
        if self.content:
            return self.content

        blocks = []
        for idx, page in enumerate(self.pages, start=1):
            lines = "\n".join(line.content for line in page.lines if line.content)
            if lines:
                blocks.append(f"Page {page.page_number or idx}:\n{lines}")
        return "\n\n".join(blocks)


class AnalyzeOperationResponse(BaseModel):
    """Body of ``GET <Operation-Location>``.

    Only ``status`` decides the classification. ``error`` is kept exactly as
    sent, and ``analyzeResult`` is read only once the operation succeeded.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: Any = None
    analyze_result: Any = Field(None, alias="analyzeResult")
    error: Any = None

    def to_status(self) -> OperationStatus:
        raw_status = "" if self.status is None else str(self.status)
        normalized = raw_status.strip().lower()

        if normalized == SUCCEEDED_STATUS:
            result = AnalyzeResult.model_validate(self.analyze_result or {})
            return OperationSucceeded(text=result.text())

        if normalized == FAILED_STATUS:
            return OperationFailed(detail=self.error if self.error is not None else {})

        # running, notStarted and anything unrecognized keep the loop going
        return OperationRunning(raw_status=raw_status)


def parse_operation_status(body: Any) -> OperationStatus:
    """Validate a decoded JSON body and classify it.

    Raises:
        pydantic.ValidationError: If the body is not a JSON object, or a
            succeeded body carries an unreadable ``analyzeResult``
    """
    return AnalyzeOperationResponse.model_validate(body).to_status()
