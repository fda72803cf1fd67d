"""
Data models for page inspection.

Holds the discovered resource candidates, the probe results and the
final report returned to callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..utils.constants import MAX_RESOURCES
from .safety import is_blocked_url


class Initiator(str, Enum):
    """The HTML or CSS construct that caused a resource to be discovered."""

    DOCUMENT = 'document'
    SCRIPT = 'script'
    IMG = 'img'
    IMG_SRCSET = 'img-srcset'
    STYLESHEET = 'stylesheet'
    PRELOAD = 'preload'
    IFRAME = 'iframe'
    MEDIA = 'media'
    INLINE_STYLE = 'inline-style'
    STYLE_TAG = 'style-tag'
    CSS_URL = 'css-url'


@dataclass(frozen=True)
class ResourceCandidate:
    """A discovered resource URL and what referenced it."""

    url: str
    initiator: Initiator


class CandidateSet:
    """
    Deduplicated, capped collection of resource candidates.

    Built up during discovery and frozen into an ordered tuple before
    probing starts. Every insertion goes through the URL filter; the
    first initiator recorded for a URL wins.
    """

    def __init__(
        self,
        max_size: int = MAX_RESOURCES,
        url_filter: Callable[[str], bool] = is_blocked_url
    ):
        """
        Initialize an empty candidate set.

        Args:
            max_size: Maximum number of candidates accepted
            url_filter: Callable returning True for URLs that must be rejected
        """
        self.max_size = max_size
        self.url_filter = url_filter
        self._candidates: Dict[str, Initiator] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, url: object) -> bool:
        return url in self._candidates

    @property
    def is_full(self) -> bool:
        """Whether the cap has been reached."""
        return len(self._candidates) >= self.max_size

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, url: Optional[str], initiator: Initiator) -> bool:
        """
        Offer a URL to the set.

        Args:
            url: Absolute URL, or None for an unresolvable reference
            initiator: What referenced the URL

        Returns:
            True if the URL was inserted, False if it was rejected
        """
        if self._frozen:
            raise RuntimeError("Candidate set is frozen; probing has started")

        if not url or url in self._candidates or self.is_full:
            return False

        if self.url_filter(url):
            return False

        self._candidates[url] = Initiator(initiator)
        return True

    def initiator_of(self, url: str) -> Optional[Initiator]:
        """Return the recorded initiator for a URL, if present."""
        return self._candidates.get(url)

    def freeze(self) -> Tuple[ResourceCandidate, ...]:
        """
        Stop accepting candidates and return them in insertion order.

        Returns:
            Tuple of ResourceCandidate objects
        """
        self._frozen = True
        return tuple(
            ResourceCandidate(url, initiator)
            for url, initiator in self._candidates.items()
        )


@dataclass
class ProbeResult:
    """Outcome of probing a single resource."""

    url: str
    status: Optional[int] = None
    ok: bool = False
    content_type: Optional[str] = None
    size: Optional[int] = None
    time_ms: int = 0
    method_tried: Optional[str] = None
    error: Optional[str] = None
    initiator: Optional[Initiator] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the JSON field names of the report."""
        return {
            'url': self.url,
            'status': self.status,
            'ok': self.ok,
            'contentType': self.content_type,
            'size': self.size,
            'timeMs': self.time_ms,
            'methodTried': self.method_tried,
            'error': self.error,
            'initiator': self.initiator.value if self.initiator else None,
        }


@dataclass
class MainDocument:
    """Fetch outcome of the inspected document itself."""

    status: int
    ok: bool
    content_type: Optional[str]
    time_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'ok': self.ok,
            'contentType': self.content_type,
            'timeMs': self.time_ms,
        }


@dataclass
class InspectionReport:
    """Result of inspecting one page."""

    fetched_url: str
    main: Optional[MainDocument]
    resources: List[ProbeResult] = field(default_factory=list)
    note: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the report into JSON-ready primitives."""
        return {
            'fetchedUrl': self.fetched_url,
            'main': self.main.to_dict() if self.main else None,
            'resources': [result.to_dict() for result in self.resources],
            'note': self.note,
        }
