"""
Utility modules for URL checking
"""

from .url import normalize_url, strip_for_comparison
from .probe import ReachabilityProbe
from .encoding import read_urls, decode_input, InputDecodeError

__all__ = [
    'normalize_url',
    'strip_for_comparison',
    'ReachabilityProbe',
    'read_urls',
    'decode_input',
    'InputDecodeError'
]
