"""
Shared constants for the page inspector.

Contains the limits and timeouts every inspection honours.
"""

# Default user agent string for all HTTP requests
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Maximum number of resources collected and reported per page
MAX_RESOURCES = 200

# Timeout for fetching the target document, in seconds
MAIN_FETCH_TIMEOUT = 20

# Timeout for fetching a linked stylesheet while crawling, in seconds
STYLESHEET_TIMEOUT = 8

# Timeout for each HEAD/GET probe, in seconds
PROBE_TIMEOUT = 20

# Number of probes run together in one batch
PROBE_CONCURRENCY = 8

# Request body limit for the web API
MAX_REQUEST_BYTES = 2 * 1024 * 1024

# Advisory note attached to every report
RESOURCE_NOTE = (
    "Limited to {max_resources} resources. Dynamic requests (XHR/fetch "
    "inserted by page JS) won't be captured because the tool does not "
    "execute page JS."
)
