"""FastAPI dependency injection functions.

Routes receive the long-lived clients built in the lifespan through these
helpers, which keeps them replaceable in tests.
"""

from fastapi import HTTPException, Request, status

from core.settings import AppSettings, get_app_settings
from docanalysis.clients.llm_client import LLMClient
from services.analysis_service import DocumentAnalysisService


async def get_analysis_service(request: Request) -> DocumentAnalysisService:
    """Get the analysis service from app state.

    Raises:
        HTTPException: 503 if the service was not initialized
    """
    service = getattr(request.app.state, "analysis_service", None)

    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analysis service unavailable",
        )

    return service


async def get_llm_client(request: Request) -> LLMClient:
    """Get the LLM client from app state.

    Raises:
        HTTPException: 503 if the client was not initialized
    """
    llm_client = getattr(request.app.state, "llm_client", None)

    if llm_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM client unavailable",
        )

    return llm_client


def get_settings() -> AppSettings:
    return get_app_settings()
