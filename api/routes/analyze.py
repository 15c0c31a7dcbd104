"""Report generation endpoint."""

import logging

from fastapi import APIRouter, Depends, Request

from api.schemas import AnalyzeRequest, AnalyzeResponse, ProblemDetail
from core.dependencies import get_llm_client
from core.settings import get_llm_settings
from docanalysis.clients.llm_client import LLMClient
from docanalysis.core.exceptions import MissingInputError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    tags=["analyze"],
    responses={
        400: {"description": "Missing text or API key", "model": ProblemDetail},
        502: {"description": "LLM error", "model": ProblemDetail},
    },
)
async def analyze_document(
    request: Request,
    body: AnalyzeRequest,
    llm_client: LLMClient = Depends(get_llm_client),
):
    if not body.text:
        raise MissingInputError("No text provided", field="text")

    api_key = body.api_key or get_llm_settings().LLM_API_KEY.get_secret_value()
    if not api_key:
        raise MissingInputError("No API key provided", field="apiKey")

    logger.info(
        "Report requested for %d chars",
        len(body.text),
        extra={"trace_id": getattr(request.state, "trace_id", None)},
    )
    report = await llm_client.generate_report(body.text, api_key)
    return AnalyzeResponse(success=True, report=report)
