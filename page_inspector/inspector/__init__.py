"""
Inspector module for page resource inspection.

Contains components for URL filtering, resource extraction, stylesheet
crawling, probing, and report assembly.
"""

from .inspector import PageInspector, inspect_page
from .extractor import ResourceExtractor, extract_resources, find_css_urls
from .stylesheets import StylesheetCrawler
from .prober import ResourceProber, batched
from .report import build_report
from .safety import is_blocked_url
from .models import (
    Initiator,
    ResourceCandidate,
    CandidateSet,
    ProbeResult,
    MainDocument,
    InspectionReport,
)

__all__ = [
    "PageInspector",
    "inspect_page",
    "ResourceExtractor",
    "extract_resources",
    "find_css_urls",
    "StylesheetCrawler",
    "ResourceProber",
    "batched",
    "build_report",
    "is_blocked_url",
    "Initiator",
    "ResourceCandidate",
    "CandidateSet",
    "ProbeResult",
    "MainDocument",
    "InspectionReport",
]
