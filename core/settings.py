"""
Centralized application settings using Pydantic.

All environment variables are read once at startup and validated, then
handed to the clients as immutable config objects. Nothing below the HTTP
layer reads the environment.
"""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from docanalysis.clients.llm_client import LLMClientConfig
from docanalysis.clients.operation_config import OperationClientConfig
from docanalysis.core import config as defaults


class ProviderSettings(BaseSettings):
    """Document analysis provider configuration."""

    PROVIDER_ENDPOINT: str = ""
    PROVIDER_API_KEY: SecretStr = SecretStr("")
    PROVIDER_MODEL_ID: str = defaults.PROVIDER_MODEL_ID
    PROVIDER_API_VERSION: str = defaults.PROVIDER_API_VERSION
    PROVIDER_POLL_INTERVAL_SECONDS: float = defaults.POLL_INTERVAL_SECONDS
    PROVIDER_MAX_POLL_ATTEMPTS: int = defaults.MAX_POLL_ATTEMPTS
    PROVIDER_POLL_TRANSPORT_RETRIES: int = defaults.POLL_TRANSPORT_RETRIES
    PROVIDER_REQUEST_TIMEOUT_SECONDS: float = defaults.PROVIDER_REQUEST_TIMEOUT_SECONDS
    PROVIDER_MAX_CONCURRENT_OPERATIONS: int = defaults.MAX_CONCURRENT_OPERATIONS

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}

    def to_operation_config(self) -> OperationClientConfig:
        return OperationClientConfig(
            endpoint=self.PROVIDER_ENDPOINT,
            api_key=self.PROVIDER_API_KEY.get_secret_value(),
            model_id=self.PROVIDER_MODEL_ID,
            api_version=self.PROVIDER_API_VERSION,
            poll_interval_seconds=self.PROVIDER_POLL_INTERVAL_SECONDS,
            max_poll_attempts=self.PROVIDER_MAX_POLL_ATTEMPTS,
            poll_transport_retries=self.PROVIDER_POLL_TRANSPORT_RETRIES,
            request_timeout_seconds=self.PROVIDER_REQUEST_TIMEOUT_SECONDS,
            max_concurrent_operations=self.PROVIDER_MAX_CONCURRENT_OPERATIONS,
        )


class LLMSettings(BaseSettings):
    """LLM service configuration."""

    LLM_ENDPOINT_URL: str = defaults.LLM_ENDPOINT_URL
    LLM_API_KEY: SecretStr = SecretStr("")
    LLM_MODEL: str = defaults.LLM_MODEL
    LLM_MAX_TOKENS: int = defaults.LLM_MAX_TOKENS
    LLM_API_VERSION: str = defaults.LLM_API_VERSION
    LLM_REQUEST_TIMEOUT_SECONDS: float = defaults.LLM_REQUEST_TIMEOUT_SECONDS

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}

    def to_client_config(self) -> LLMClientConfig:
        return LLMClientConfig(
            endpoint_url=self.LLM_ENDPOINT_URL,
            model=self.LLM_MODEL,
            max_tokens=self.LLM_MAX_TOKENS,
            api_version=self.LLM_API_VERSION,
            timeout_seconds=self.LLM_REQUEST_TIMEOUT_SECONDS,
        )


class AppSettings(BaseSettings):
    """General application settings."""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    MAX_UPLOAD_SIZE_MB: int = defaults.MAX_UPLOAD_SIZE_MB
    MIN_EXTRACTED_TEXT_CHARS: int = defaults.MIN_EXTRACTED_TEXT_CHARS
    REQUEST_DEADLINE_SECONDS: float = defaults.REQUEST_DEADLINE_SECONDS
    CORS_ALLOW_ORIGINS: str = "*"

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_provider_settings() -> ProviderSettings:
    return ProviderSettings()


@lru_cache(maxsize=1)
def get_llm_settings() -> LLMSettings:
    return LLMSettings()


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()
