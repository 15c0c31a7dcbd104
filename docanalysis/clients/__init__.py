"""Clients for the external services behind document analysis.

- OperationSubmitter / OperationPoller: the provider's submit-then-poll
  analyze operation
- LLMClient: one-shot report generation
"""

from docanalysis.clients.llm_client import LLMClient, LLMClientConfig
from docanalysis.clients.operation_config import OperationClientConfig
from docanalysis.clients.operation_poller import OperationPoller
from docanalysis.clients.operation_submitter import OperationSubmitter

__all__ = [
    "LLMClient",
    "LLMClientConfig",
    "OperationClientConfig",
    "OperationPoller",
    "OperationSubmitter",
]
