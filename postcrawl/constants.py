"""PostCrawl API constants."""

DEFAULT_BASE_URL = "https://edge.postcrawl.com"
API_VERSION = "v1"

# Endpoints
SEARCH_ENDPOINT = "/search"
EXTRACT_ENDPOINT = "/extract"
SEARCH_AND_EXTRACT_ENDPOINT = "/search-and-extract"

# Request defaults
DEFAULT_TIMEOUT_MS = 90_000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1_000

API_KEY_PREFIX = "sk_"
API_KEY_ENV = "POSTCRAWL_API_KEY"

# Rate limiting
RATE_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
RETRY_AFTER_HEADER = "Retry-After"

MAX_RESULTS = 100
MAX_URLS = 100
