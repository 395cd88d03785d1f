"""
URL Normalizer - Protocol resolution and canonical trailing-slash form
"""

import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

PROTOCOLS = ('http://', 'https://')


def has_protocol(url: str) -> bool:
    """Check whether a URL already carries an http(s) prefix"""
    return url.lower().startswith(PROTOCOLS)


def ensure_trailing_slash(url: str) -> str:
    if url.endswith('/'):
        return url
    return url + '/'


def strip_for_comparison(url: str) -> str:
    """Drop protocol prefix and trailing slashes, lower-cased"""
    url = url.strip().lower()
    for prefix in PROTOCOLS:
        if url.startswith(prefix):
            url = url[len(prefix):]
            break
    return url.rstrip('/')


async def normalize_url(raw: str, check: Callable[[str], Awaitable[bool]]) -> str:
    """
    Resolve a raw input line into a probe candidate

    URLs with a protocol only get a trailing slash. Bare hosts are tried
    over https first, then http. When neither answers, the unprefixed
    string is returned so the caller can still probe it.

    Args:
        raw: URL as supplied by the user
        check: Lightweight reachability check returning True on success

    Returns:
        Candidate URL ending with a trailing slash
    """
    url = raw.strip()

    if has_protocol(url):
        return ensure_trailing_slash(url)

    for prefix in ('https://', 'http://'):
        candidate = ensure_trailing_slash(prefix + url)
        if await check(candidate):
            logger.debug(f"Resolved {url} to {candidate}")
            return candidate

    logger.warning(f"Neither https nor http answered for {url}")
    return ensure_trailing_slash(url)
