"""
Main page inspector module.

Orchestrates the inspection process: document fetch, resource
extraction, stylesheet crawling, probing and report assembly.
"""

import asyncio
import time
from typing import Callable, Optional

import aiohttp
from aiohttp import ClientTimeout, ClientError

from ..errors import BlockedUrlError, InvalidUrlError, MainFetchError
from ..utils.constants import (
    DEFAULT_USER_AGENT,
    MAX_RESOURCES,
    MAIN_FETCH_TIMEOUT,
    STYLESHEET_TIMEOUT,
    PROBE_TIMEOUT,
    PROBE_CONCURRENCY,
)
from ..utils.log import get_logger
from .extractor import ResourceExtractor
from .models import CandidateSet, InspectionReport, MainDocument
from .prober import ResourceProber
from .report import build_report
from .safety import is_blocked_url
from .stylesheets import StylesheetCrawler


class PageInspector:
    """
    Main page inspector class.

    Coordinates all components to inspect the resources of one page.
    Instances hold configuration only; every call to :meth:`inspect`
    starts from scratch.
    """

    def __init__(
        self,
        max_resources: int = MAX_RESOURCES,
        main_timeout: float = MAIN_FETCH_TIMEOUT,
        stylesheet_timeout: float = STYLESHEET_TIMEOUT,
        probe_timeout: float = PROBE_TIMEOUT,
        concurrency: int = PROBE_CONCURRENCY,
        user_agent: str = DEFAULT_USER_AGENT,
        url_filter: Callable[[str], bool] = is_blocked_url
    ):
        """
        Initialize the page inspector.

        Args:
            max_resources: Maximum number of resources collected and reported
            main_timeout: Timeout for the target document fetch in seconds
            stylesheet_timeout: Timeout for each stylesheet fetch in seconds
            probe_timeout: Timeout for each probe request in seconds
            concurrency: Number of probes run together in one batch
            user_agent: User agent string for requests
            url_filter: Callable returning True for URLs that must not be fetched
        """
        self.max_resources = max_resources
        self.main_timeout = main_timeout
        self.stylesheet_timeout = stylesheet_timeout
        self.probe_timeout = probe_timeout
        self.concurrency = concurrency
        self.user_agent = user_agent
        self.url_filter = url_filter
        self.logger = get_logger("inspector")

    def validate_url(self, url: Optional[str]) -> str:
        """
        Validate a target URL before any network activity.

        Args:
            url: Raw target URL

        Returns:
            Stripped URL string

        Raises:
            InvalidUrlError: If the URL is missing
            BlockedUrlError: If the URL is rejected by the URL filter
        """
        url = (url or '').strip()
        if not url:
            raise InvalidUrlError("Missing url")
        if self.url_filter(url):
            raise BlockedUrlError(url)
        return url

    async def inspect(self, url: Optional[str]) -> InspectionReport:
        """
        Inspect a page and probe every resource it references.

        Args:
            url: Absolute http(s) URL of the page

        Returns:
            InspectionReport for the page

        Raises:
            InvalidUrlError: If the URL is missing or blocked
            MainFetchError: If the page itself cannot be fetched
        """
        target = self.validate_url(url)
        start_time = time.monotonic()

        self.logger.info(f"Inspecting {target}")

        async with aiohttp.ClientSession(
            headers={"User-Agent": self.user_agent}
        ) as session:
            html, main = await self._fetch_document(session, target)

            candidates = CandidateSet(
                max_size=self.max_resources,
                url_filter=self.url_filter
            )
            stylesheet_links = ResourceExtractor(candidates).extract(html, target)
            self.logger.info(
                f"Found {len(candidates)} resources, "
                f"{len(stylesheet_links)} linked stylesheets"
            )

            crawler = StylesheetCrawler(
                session,
                timeout=self.stylesheet_timeout,
                url_filter=self.url_filter
            )
            await crawler.crawl(stylesheet_links, candidates)

            to_probe = [c for c in candidates.freeze() if c.url != target]

            prober = ResourceProber(
                session,
                timeout=self.probe_timeout,
                concurrency=self.concurrency
            )
            results = await prober.probe_all(to_probe)

        report = build_report(target, main, results, self.max_resources)

        self.logger.info(
            f"Inspection of {target} complete: {len(report.resources)} "
            f"resources in {time.monotonic() - start_time:.1f}s"
        )

        return report

    async def _fetch_document(self, session: aiohttp.ClientSession, url: str):
        """
        Fetch the target document.

        Args:
            session: aiohttp session
            url: Target URL

        Returns:
            Tuple of (HTML text, MainDocument)

        Raises:
            MainFetchError: On network failure or timeout
        """
        start = time.monotonic()
        try:
            async with session.get(
                url,
                timeout=ClientTimeout(total=self.main_timeout),
                allow_redirects=True
            ) as response:
                html = await response.text(errors='replace')
                status = response.status
                content_type = response.headers.get('Content-Type') or None
        except ClientError as e:
            self.logger.warning(f"Failed to fetch {url}: {e}")
            raise MainFetchError(url, str(e) or e.__class__.__name__) from e
        except asyncio.TimeoutError as e:
            self.logger.warning(f"Timeout fetching {url}")
            raise MainFetchError(url, "Timed out fetching target URL") from e

        main = MainDocument(
            status=status,
            ok=200 <= status < 300,
            content_type=content_type,
            time_ms=round((time.monotonic() - start) * 1000)
        )
        self.logger.debug(f"Fetched {url}: HTTP {status} in {main.time_ms}ms")

        return html, main


async def inspect_page(url: str, **options) -> InspectionReport:
    """
    Inspect a page with a one-off PageInspector.

    Args:
        url: Target URL
        **options: PageInspector constructor arguments

    Returns:
        InspectionReport for the page
    """
    return await PageInspector(**options).inspect(url)
