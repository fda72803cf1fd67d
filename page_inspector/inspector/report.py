"""
Report assembly for page inspections.
"""

from typing import Iterable, Optional

from ..utils.constants import MAX_RESOURCES, RESOURCE_NOTE
from .models import InspectionReport, MainDocument, ProbeResult


def build_report(
    fetched_url: str,
    main: Optional[MainDocument],
    results: Iterable[ProbeResult],
    max_resources: int = MAX_RESOURCES
) -> InspectionReport:
    """
    Combine the document fetch and the probe results into a report.

    The inspected document is reported only as ``main``; a probe result
    for the same URL is dropped. Resources are truncated to the cap.

    Args:
        fetched_url: URL of the inspected document
        main: Outcome of the initial document fetch
        results: Probe results in candidate order
        max_resources: Maximum number of resources reported

    Returns:
        InspectionReport ready for serialization
    """
    resources = [r for r in results if r.url != fetched_url][:max_resources]
    return InspectionReport(
        fetched_url=fetched_url,
        main=main,
        resources=resources,
        note=RESOURCE_NOTE.format(max_resources=max_resources),
    )
