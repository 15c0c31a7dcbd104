from contextlib import asynccontextmanager
import logging

import httpx
from fastapi import FastAPI

from core.settings import get_llm_settings, get_provider_settings
from docanalysis.clients.llm_client import LLMClient
from services.analysis_service import DocumentAnalysisService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks.

    Owns the single outbound connection pool shared by every request.
    """
    provider_config = get_provider_settings().to_operation_config()
    llm_config = get_llm_settings().to_client_config()

    logger.info("Initializing outbound HTTP client...")
    http_client = httpx.AsyncClient(
        timeout=provider_config.request_timeout_seconds,
        limits=httpx.Limits(max_connections=provider_config.max_concurrent_operations * 2 + 4),
    )
    app.state.http_client = http_client
    app.state.analysis_service = DocumentAnalysisService.from_config(provider_config, http_client)
    app.state.llm_client = LLMClient(llm_config, http_client)
    logger.info(
        "Analysis service ready: interval=%.2fs max_attempts=%d max_concurrent=%d",
        provider_config.poll_interval_seconds,
        provider_config.max_poll_attempts,
        provider_config.max_concurrent_operations,
    )

    try:
        yield
    finally:
        logger.info("Closing outbound HTTP client...")
        await http_client.aclose()
