"""
Exceptions raised by the page inspector.

Only input validation and the target document fetch can fail a whole
inspection. Failures of individual resources are recorded on their
probe results instead of being raised.
"""


class InspectorError(Exception):
    """Base class for inspection failures."""


class InvalidUrlError(InspectorError):
    """The target URL is missing or malformed. Raised before any network I/O."""


class BlockedUrlError(InvalidUrlError):
    """The target URL is rejected by the URL safety filter."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("URL blocked (private or non-http(s) scheme)")


class MainFetchError(InspectorError):
    """The target document itself could not be fetched."""

    def __init__(self, url: str, detail: str):
        self.url = url
        self.detail = detail
        super().__init__(f"Failed to fetch target URL {url}: {detail}")
