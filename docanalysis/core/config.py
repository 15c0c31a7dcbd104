# =============================================================================
# Document Analysis Provider
# =============================================================================

PROVIDER_MODEL_ID = "prebuilt-read"
PROVIDER_API_VERSION = "2023-07-31"
PROVIDER_ANALYZE_PATH = "/formrecognizer/documentModels/{model_id}:analyze"
PROVIDER_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OPERATION_LOCATION_HEADER = "Operation-Location"
SUBMIT_ACCEPTED_STATUS = 202


# =============================================================================
# Polling (seconds)
# =============================================================================

POLL_INTERVAL_SECONDS = 1.5  # Fixed wait before each status query
MAX_POLL_ATTEMPTS = 120  # 120 x 1.5s = 3 min upper bound
POLL_TRANSPORT_RETRIES = 3  # Consecutive failed queries tolerated
PROVIDER_REQUEST_TIMEOUT_SECONDS = 30.0  # Per-request HTTP timeout
MAX_CONCURRENT_OPERATIONS = 8  # Simultaneous operations toward the provider

# Poll responses worth waiting out rather than aborting on
TRANSIENT_POLL_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


# =============================================================================
# LLM
# =============================================================================

LLM_ENDPOINT_URL = "https://api.anthropic.com/v1/messages"
LLM_MODEL = "claude-sonnet-4-20250514"
LLM_MAX_TOKENS = 4096
LLM_API_VERSION = "2023-06-01"
LLM_REQUEST_TIMEOUT_SECONDS = 120.0


# =============================================================================
# Upload / Output Limits
# =============================================================================

MAX_UPLOAD_SIZE_MB = 10
MIN_EXTRACTED_TEXT_CHARS = 50
REQUEST_DEADLINE_SECONDS = 240.0


# =============================================================================
# Error Handling
# =============================================================================

ERROR_BODY_MAX_CHARS = 200  # Maximum chars from error response bodies
