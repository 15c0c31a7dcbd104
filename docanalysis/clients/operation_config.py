from dataclasses import dataclass

from docanalysis.core.config import (
    MAX_CONCURRENT_OPERATIONS,
    MAX_POLL_ATTEMPTS,
    POLL_INTERVAL_SECONDS,
    POLL_TRANSPORT_RETRIES,
    PROVIDER_API_VERSION,
    PROVIDER_MODEL_ID,
    PROVIDER_REQUEST_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class OperationClientConfig:
    """Immutable provider configuration shared by submitter and poller.

    Attributes:
        endpoint: Provider base URL (scheme + host)
        api_key: Credential sent with every provider request
        model_id: Analysis model to run on submitted documents
        api_version: Provider API version query parameter
        poll_interval_seconds: Fixed wait before each status query
        max_poll_attempts: Status queries allowed before giving up
        poll_transport_retries: Consecutive failed queries tolerated
        request_timeout_seconds: Per-request HTTP timeout
        max_concurrent_operations: Operations allowed in flight at once
    """

    endpoint: str
    api_key: str
    model_id: str = PROVIDER_MODEL_ID
    api_version: str = PROVIDER_API_VERSION
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS
    max_poll_attempts: int = MAX_POLL_ATTEMPTS
    poll_transport_retries: int = POLL_TRANSPORT_RETRIES
    request_timeout_seconds: float = PROVIDER_REQUEST_TIMEOUT_SECONDS
    max_concurrent_operations: int = MAX_CONCURRENT_OPERATIONS

    def __post_init__(self) -> None:
        if self.poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds must be >= 0")
        if self.max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be >= 1")
        if self.poll_transport_retries < 0:
            raise ValueError("poll_transport_retries must be >= 0")
        if self.max_concurrent_operations < 1:
            raise ValueError("max_concurrent_operations must be >= 1")
