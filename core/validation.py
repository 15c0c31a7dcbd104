"""Application startup validation checks.

Validates critical settings before the application starts serving.
Settings classes define data, this module validates behavior.
"""

import logging
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def validate_all_settings() -> None:
    """Validate all critical settings at application startup.

    Raises:
        RuntimeError: If any critical setting is missing or invalid
    """
    from core.settings import get_app_settings, get_provider_settings

    provider_settings = get_provider_settings()
    app_settings = get_app_settings()

    critical_checks = [
        (provider_settings.PROVIDER_ENDPOINT, "PROVIDER_ENDPOINT", "Document analysis"),
        (
            provider_settings.PROVIDER_API_KEY.get_secret_value(),
            "PROVIDER_API_KEY",
            "Document analysis",
        ),
    ]

    missing = []
    for value, name, purpose in critical_checks:
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(f"  - {name} (required for {purpose})")

    if missing:
        error_msg = "Missing critical environment variables:\n" + "\n".join(missing)
        logger.critical(error_msg)
        raise RuntimeError(error_msg)

    endpoint = urlsplit(provider_settings.PROVIDER_ENDPOINT)
    if endpoint.scheme not in ("http", "https") or not endpoint.netloc:
        raise RuntimeError(
            f"PROVIDER_ENDPOINT must be an absolute http(s) URL, got {provider_settings.PROVIDER_ENDPOINT!r}"
        )

    try:
        provider_settings.to_operation_config()
    except ValueError as e:
        raise RuntimeError(f"Invalid provider polling settings: {e}") from e

    if app_settings.MAX_UPLOAD_SIZE_MB <= 0:
        raise RuntimeError("MAX_UPLOAD_SIZE_MB must be positive")

    logger.info("All critical settings validated")
