"""Document text extraction endpoint."""

import logging
import time

from fastapi import APIRouter, Depends, File, Request, UploadFile

from api.file_validation import read_upload_file
from api.schemas import OcrResponse, ProblemDetail
from core.dependencies import get_analysis_service, get_settings
from core.settings import AppSettings
from docanalysis.core.exceptions import AnalysisFailedError, NoTextExtractedError
from services.analysis_service import AnalysisError, DocumentAnalysisService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/api/ocr",
    response_model=OcrResponse,
    tags=["ocr"],
    responses={
        400: {"description": "Missing file or no text extracted", "model": ProblemDetail},
        413: {"description": "File too large", "model": ProblemDetail},
        500: {"description": "Submission or transport failure", "model": ProblemDetail},
        502: {"description": "Provider could not process the document", "model": ProblemDetail},
        504: {"description": "Processing did not finish in time", "model": ProblemDetail},
    },
)
async def extract_text(
    request: Request,
    file: UploadFile = File(..., description="Document to analyze (PDF or image)"),
    service: DocumentAnalysisService = Depends(get_analysis_service),
    settings: AppSettings = Depends(get_settings),
):
    start_time = time.time()
    trace_id = getattr(request.state, "trace_id", None)

    content = await read_upload_file(file, settings.MAX_UPLOAD_SIZE_MB)

    outcome = await service.run_analysis(
        content,
        file.content_type,
        filename=file.filename,
        deadline_seconds=settings.REQUEST_DEADLINE_SECONDS,
    )

    if isinstance(outcome, AnalysisError):
        raise AnalysisFailedError(
            message=outcome.message,
            error_code=outcome.error,
            http_status=outcome.status,
            details=outcome.details,
        )

    if len(outcome.text) < settings.MIN_EXTRACTED_TEXT_CHARS:
        raise NoTextExtractedError(
            extracted_chars=len(outcome.text),
            min_chars=settings.MIN_EXTRACTED_TEXT_CHARS,
        )

    logger.info(
        "Successfully extracted %d characters in %.2fs",
        len(outcome.text),
        time.time() - start_time,
        extra={"trace_id": trace_id},
    )
    return OcrResponse(success=True, text=outcome.text, filename=file.filename)
