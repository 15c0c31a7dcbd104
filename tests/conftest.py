import os

# Settings are read on first use; the app refuses to start without these.
os.environ.setdefault("PROVIDER_ENDPOINT", "https://provider.example.com")
os.environ.setdefault("PROVIDER_API_KEY", "test-provider-key")
os.environ.setdefault("LOG_JSON", "false")
os.environ.pop("LLM_API_KEY", None)

import pytest

from docanalysis.clients.operation_config import OperationClientConfig
from tests.fakes import PROVIDER_ENDPOINT, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> OperationClientConfig:
    return OperationClientConfig(
        endpoint=PROVIDER_ENDPOINT,
        api_key="test-provider-key",
        poll_interval_seconds=1.5,
        max_poll_attempts=120,
        poll_transport_retries=3,
    )
