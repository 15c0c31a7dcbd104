from fastapi import APIRouter

from api.schemas import HealthResponse
from core.settings import get_provider_settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    provider = get_provider_settings()
    configured = bool(
        provider.PROVIDER_ENDPOINT.strip() and provider.PROVIDER_API_KEY.get_secret_value()
    )
    return HealthResponse(
        status="ok",
        service="fertility-docs-api",
        version="1.0.0",
        provider_configured=configured,
    )
