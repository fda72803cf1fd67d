"""
Resource prober for checking reachability of discovered resources.

Uses aiohttp to probe resources in fixed-size concurrent batches.
"""

import asyncio
import time
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

import aiohttp
from aiohttp import ClientTimeout, ClientError

from ..utils.constants import PROBE_TIMEOUT, PROBE_CONCURRENCY
from ..utils.log import get_logger
from .models import Initiator, ProbeResult, ResourceCandidate

T = TypeVar('T')

# Statuses that make a HEAD probe fall back to GET
HEAD_FALLBACK_STATUSES = (405, 501)


def batched(items: Iterable[T], size: int) -> Iterator[Tuple[T, ...]]:
    """
    Split items into consecutive tuples of at most ``size`` elements.

    Args:
        items: Items to split
        size: Batch size, at least 1

    Yields:
        Batches in input order; only the last one may be shorter
    """
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    iterator = iter(items)
    while True:
        batch = tuple(islice(iterator, size))
        if not batch:
            return
        yield batch


def _error_message(exc: BaseException) -> str:
    # asyncio timeouts carry no message
    return str(exc) or exc.__class__.__name__


def _parse_content_length(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


class ResourceProber:
    """
    Probes resources with HEAD, falling back to GET where HEAD is refused.

    Every probe ends in a ProbeResult; network failures are recorded on
    the result and never affect other probes.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = PROBE_TIMEOUT,
        concurrency: int = PROBE_CONCURRENCY
    ):
        """
        Initialize the resource prober.

        Args:
            session: aiohttp session shared by the inspection
            timeout: Timeout for each HEAD or GET request in seconds
            concurrency: Number of probes run together in one batch
        """
        if concurrency < 1:
            raise ValueError("Concurrency must be at least 1")
        self.session = session
        self.timeout = ClientTimeout(total=timeout)
        self.concurrency = concurrency
        self.logger = get_logger("prober")

    async def probe_all(self, candidates: Sequence[ResourceCandidate]) -> List[ProbeResult]:
        """
        Probe candidates batch by batch.

        Each batch runs concurrently and is awaited as a whole before the
        next one starts.

        Args:
            candidates: Resources to probe

        Returns:
            One ProbeResult per candidate, in input order
        """
        if not candidates:
            return []

        self.logger.info(f"Probing {len(candidates)} resources...")
        results: List[ProbeResult] = []

        for batch in batched(candidates, self.concurrency):
            outcomes = await asyncio.gather(
                *(self.probe(c.url, c.initiator) for c in batch),
                return_exceptions=True
            )
            for candidate, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    self.logger.debug(f"Probe crashed for {candidate.url}: {outcome!r}")
                    outcome = ProbeResult(
                        url=candidate.url,
                        error=_error_message(outcome),
                        initiator=candidate.initiator
                    )
                results.append(outcome)

        failed = sum(1 for r in results if r.error or not r.ok)
        self.logger.info(f"Probed {len(results)} resources, {failed} not ok")

        return results

    async def probe(self, url: str, initiator: Optional[Initiator] = None) -> ProbeResult:
        """
        Probe a single resource.

        Args:
            url: Absolute resource URL
            initiator: What referenced the resource

        Returns:
            ProbeResult with either status or error set
        """
        result = ProbeResult(url=url, initiator=initiator)
        start = time.monotonic()

        try:
            result.method_tried = 'HEAD'
            async with self.session.head(
                url,
                timeout=self.timeout,
                allow_redirects=True
            ) as response:
                if response.status not in HEAD_FALLBACK_STATUSES:
                    self._record(result, response)
                    return result

            result.method_tried = 'GET'
            async with self.session.get(
                url,
                timeout=self.timeout,
                allow_redirects=True
            ) as response:
                self._record(result, response)
                if result.size is None:
                    result.size = await self._read_size(url, response)

        except ClientError as e:
            result.error = _error_message(e)
            self.logger.debug(f"Client error probing {url}: {e}")
        except asyncio.TimeoutError as e:
            result.error = _error_message(e)
            self.logger.debug(f"Timeout probing {url}")
        finally:
            result.time_ms = round((time.monotonic() - start) * 1000)

        return result

    @staticmethod
    def _record(result: ProbeResult, response: aiohttp.ClientResponse) -> None:
        result.status = response.status
        result.ok = 200 <= response.status < 300
        result.content_type = response.headers.get('Content-Type') or None
        result.size = _parse_content_length(response.headers.get('Content-Length'))

    async def _read_size(self, url: str, response: aiohttp.ClientResponse) -> Optional[int]:
        """Measure a GET body whose length was not announced."""
        try:
            body = await response.read()
        except (ClientError, asyncio.TimeoutError) as e:
            self.logger.debug(f"Could not read body of {url}: {e!r}")
            return None
        return len(body)
