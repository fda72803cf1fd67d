"""
Resource extractor for parsing HTML and CSS and collecting resource URLs.

Uses BeautifulSoup for HTML parsing to find every externally referenced
resource of a page.
"""

import re
from typing import Callable, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup

from ..utils.constants import MAX_RESOURCES
from ..utils.log import get_logger
from ..utils.paths import resolve_url
from .models import CandidateSet, Initiator
from .safety import is_blocked_url


# CSS url() pattern
CSS_URL_PATTERN = re.compile(r'url\(\s*[\'"]?([^\'")]+)[\'"]?\s*\)')


def find_css_urls(css: str, base_url: str) -> Iterator[str]:
    """
    Find url() references in CSS and resolve them.

    Matches are produced lazily, left to right. References that cannot
    be resolved are dropped.

    Args:
        css: CSS text
        base_url: URL the CSS belongs to

    Yields:
        Absolute URLs in order of appearance
    """
    for match in CSS_URL_PATTERN.finditer(css or ''):
        url = resolve_url(base_url, match.group(1))
        if url:
            yield url


def _has_rel(tag, value: str) -> bool:
    """Check whether a <link> tag lists the given rel token."""
    rel_value = tag.get('rel') or []
    # BeautifulSoup returns rel as a list of tokens, but be lenient
    if isinstance(rel_value, str):
        rel_value = rel_value.split()
    return value in (v.lower() for v in rel_value)


class ResourceExtractor:
    """
    Extracts resource candidates from HTML content.

    Walks a fixed sequence of element kinds and offers every resolved
    URL to a shared CandidateSet, which applies the URL filter,
    deduplication and the resource cap.
    """

    def __init__(self, candidates: CandidateSet):
        """
        Initialize the resource extractor.

        Args:
            candidates: Candidate set to fill
        """
        self.candidates = candidates
        self.logger = get_logger("extractor")

    def extract(self, html: str, base_url: str) -> List[str]:
        """
        Extract all resources referenced by an HTML document.

        Args:
            html: HTML content to parse
            base_url: URL of the document (for resolving relative URLs)

        Returns:
            Absolute URLs of linked stylesheets, in document order
        """
        soup = BeautifulSoup(html, 'lxml')

        self._extract_scripts(soup, base_url)
        self._extract_images(soup, base_url)
        stylesheet_links = self._extract_stylesheets(soup, base_url)
        self._extract_preloads(soup, base_url)
        self._extract_iframes(soup, base_url)
        self._extract_media(soup, base_url)
        self._extract_inline_styles(soup, base_url)
        self._extract_style_tags(soup, base_url)

        self.logger.debug(
            f"Extracted from {base_url}: {len(self.candidates)} candidates, "
            f"{len(stylesheet_links)} linked stylesheets"
        )

        return stylesheet_links

    def _add(self, base_url: str, raw: Optional[str], initiator: Initiator) -> None:
        self.candidates.add(resolve_url(base_url, raw), initiator)

    def _extract_scripts(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract script sources."""
        for script in soup.find_all('script', src=True):
            self._add(base_url, script.get('src'), Initiator.SCRIPT)

    def _extract_images(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract image sources including lazy-loading and srcset."""
        for img in soup.find_all('img'):
            src = img.get('src') or img.get('data-src')
            self._add(base_url, src, Initiator.IMG)

            srcset = img.get('srcset')
            if srcset:
                for url in self._parse_srcset(srcset):
                    self._add(base_url, url, Initiator.IMG_SRCSET)

    def _extract_stylesheets(self, soup: BeautifulSoup, base_url: str) -> List[str]:
        """Extract stylesheet links and return them for crawling."""
        links = []
        for link in soup.find_all('link', href=True):
            if not _has_rel(link, 'stylesheet'):
                continue
            url = resolve_url(base_url, link.get('href'))
            self.candidates.add(url, Initiator.STYLESHEET)
            if url:
                links.append(url)
        return links

    def _extract_preloads(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract <link rel="preload"> targets."""
        for link in soup.find_all('link', href=True):
            if _has_rel(link, 'preload'):
                self._add(base_url, link.get('href'), Initiator.PRELOAD)

    def _extract_iframes(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract iframe sources."""
        for iframe in soup.find_all('iframe', src=True):
            self._add(base_url, iframe.get('src'), Initiator.IFRAME)

    def _extract_media(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract audio, video and source element sources."""
        for element in soup.find_all(['audio', 'video', 'source'], src=True):
            self._add(base_url, element.get('src'), Initiator.MEDIA)

    def _extract_inline_styles(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract URLs from inline style attributes."""
        for elem in soup.find_all(style=True):
            for url in find_css_urls(elem.get('style', ''), base_url):
                if self.candidates.is_full:
                    return
                self.candidates.add(url, Initiator.INLINE_STYLE)

    def _extract_style_tags(self, soup: BeautifulSoup, base_url: str) -> None:
        """Extract URLs from <style> element bodies."""
        for style in soup.find_all('style'):
            for url in find_css_urls(style.get_text(), base_url):
                if self.candidates.is_full:
                    return
                self.candidates.add(url, Initiator.STYLE_TAG)

    @staticmethod
    def _parse_srcset(srcset: str) -> List[str]:
        """
        Parse a srcset attribute and extract its URLs.

        Args:
            srcset: srcset attribute value

        Returns:
            List of raw URLs, one per candidate entry
        """
        urls = []
        for part in srcset.split(','):
            tokens = part.split()
            if tokens:
                urls.append(tokens[0])
        return urls


def extract_resources(
    html: str,
    base_url: str,
    max_resources: int = MAX_RESOURCES,
    url_filter: Callable[[str], bool] = is_blocked_url
) -> Tuple[CandidateSet, List[str]]:
    """
    Extract resource candidates and linked stylesheets from HTML.

    Args:
        html: HTML content
        base_url: URL of the document
        max_resources: Candidate cap
        url_filter: Callable returning True for URLs that must be rejected

    Returns:
        Tuple of (candidate set, stylesheet links)
    """
    candidates = CandidateSet(max_size=max_resources, url_filter=url_filter)
    links = ResourceExtractor(candidates).extract(html, base_url)
    return candidates, links
