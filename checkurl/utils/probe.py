"""
Reachability Probe - Single HTTP GET with redirect following
"""

import time
import asyncio
import logging
import aiohttp
from ..result import ProbeOutcome, UNREACHABLE
from .url import strip_for_comparison

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; CheckURL/1.0) AppleWebKit/537.36'


class ReachabilityProbe:
    """
    Issues reachability requests over a shared aiohttp session

    Certificate verification is disabled for every request so that
    self-signed and misconfigured sites still report a status code.
    """

    def __init__(self, session: aiohttp.ClientSession, timeout: float = 30.0,
                 check_timeout: float = 10.0, user_agent: str = DEFAULT_USER_AGENT):
        self.session = session
        self.timeout = timeout
        self.check_timeout = check_timeout
        self.user_agent = user_agent

    async def check(self, url: str) -> bool:
        """Lightweight check used for protocol detection, True if status < 400"""
        try:
            status, _ = await self._get(url, self.check_timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            logger.debug(f"Check failed for {url}: {e!r}")
            return False
        return status < 400

    async def probe(self, url: str) -> ProbeOutcome:
        """
        Probe a normalized URL

        Args:
            url: Candidate URL produced by the normalizer

        Returns:
            ProbeOutcome with status -1 on any transport failure
        """
        start_time = time.time()

        try:
            status, resolved_url = await self._get(url, self.timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            response_time = time.time() - start_time
            message = str(e) or e.__class__.__name__
            logger.info(f"HTTP request failed for {url}: {message}")
            return ProbeOutcome(
                resolved_url=url,
                status_code=UNREACHABLE,
                was_redirected=False,
                error=message,
                response_time=response_time
            )

        response_time = time.time() - start_time
        was_redirected = strip_for_comparison(resolved_url) != strip_for_comparison(url)
        if was_redirected:
            logger.debug(f"{url} redirected to {resolved_url}")

        return ProbeOutcome(
            resolved_url=resolved_url,
            status_code=status,
            was_redirected=was_redirected,
            response_time=response_time
        )

    async def _get(self, url: str, timeout: float):
        headers = {'User-Agent': self.user_agent}
        client_timeout = aiohttp.ClientTimeout(total=timeout)

        async with self.session.get(url, headers=headers, timeout=client_timeout,
                                    allow_redirects=True, ssl=False) as response:
            return response.status, str(response.url)
