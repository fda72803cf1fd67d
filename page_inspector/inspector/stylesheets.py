"""
Stylesheet crawler.

Fetches linked stylesheets and adds the url() references found inside
them to the candidate set. This is best-effort enrichment: any failure
simply yields fewer candidates.
"""

import asyncio
from typing import Callable, Iterable

import aiohttp
from aiohttp import ClientTimeout, ClientError

from ..utils.constants import STYLESHEET_TIMEOUT
from ..utils.log import get_logger
from .extractor import find_css_urls
from .models import CandidateSet, Initiator
from .safety import is_blocked_url


class StylesheetCrawler:
    """Discovers additional resources referenced from linked stylesheets."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = STYLESHEET_TIMEOUT,
        url_filter: Callable[[str], bool] = is_blocked_url
    ):
        """
        Initialize the stylesheet crawler.

        Args:
            session: aiohttp session shared by the inspection
            timeout: Timeout for each stylesheet fetch in seconds
            url_filter: Callable returning True for URLs that must not be fetched
        """
        self.session = session
        self.timeout = ClientTimeout(total=timeout)
        self.url_filter = url_filter
        self.logger = get_logger("stylesheets")

    async def crawl(self, links: Iterable[str], candidates: CandidateSet) -> int:
        """
        Fetch each stylesheet in order and collect its url() references.

        Args:
            links: Absolute stylesheet URLs
            candidates: Candidate set to enrich

        Returns:
            Number of candidates added
        """
        added = 0

        for css_url in dict.fromkeys(links):
            if candidates.is_full:
                break
            if self.url_filter(css_url):
                continue

            css_text = await self._fetch_css(css_url)
            if css_text is None:
                continue

            for url in find_css_urls(css_text, css_url):
                if candidates.is_full:
                    break
                if candidates.add(url, Initiator.CSS_URL):
                    added += 1

        if added:
            self.logger.debug(f"Stylesheets contributed {added} candidates")

        return added

    async def _fetch_css(self, css_url: str):
        """
        Fetch a stylesheet body.

        Args:
            css_url: Stylesheet URL

        Returns:
            CSS text, or None if the stylesheet could not be fetched
        """
        try:
            async with self.session.get(
                css_url,
                timeout=self.timeout,
                allow_redirects=True
            ) as response:
                if not 200 <= response.status < 300:
                    self.logger.debug(f"HTTP {response.status} for stylesheet: {css_url}")
                    return None
                return await response.text(errors='replace')
        except ClientError as e:
            self.logger.debug(f"Client error fetching stylesheet {css_url}: {e}")
        except asyncio.TimeoutError:
            self.logger.debug(f"Timeout fetching stylesheet {css_url}")
        return None
