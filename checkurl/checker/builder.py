"""
Checker Builder - Fluent API for configuring a URL checker
"""

from typing import List, Optional
from .base import URLChecker
from .check_config import CheckConfig
from ..error_handler import RetryConfig


class CheckerBuilder:
    """Builder for creating configured URL checkers"""

    def __init__(self, urls: List[str]):
        self.urls = urls
        self._concurrency = 4
        self._max_attempts = 3
        self._attempt_timeout = 180.0
        self._headless = True
        self._progress_interval: Optional[float] = 30.0

    def concurrency(self, count: int):
        """Set how many URLs are checked at the same time"""
        self._concurrency = count
        return self

    def max_retries(self, count: int):
        """Set the number of attempts per URL"""
        self._max_attempts = count
        return self

    def timeout(self, seconds: float):
        """Set the deadline of a single capture attempt"""
        self._attempt_timeout = seconds
        return self

    def headless(self, enable: bool = True):
        self._headless = enable
        return self

    def with_progress(self, enable: bool = True, interval: float = 30.0):
        """Log progress every `interval` seconds"""
        self._progress_interval = interval if enable else None
        return self

    def build_config(self) -> CheckConfig:
        retry = RetryConfig(
            max_attempts=self._max_attempts,
            attempt_timeout=self._attempt_timeout
        )
        return CheckConfig(
            concurrency=self._concurrency,
            retry=retry,
            headless=self._headless,
            progress_interval=self._progress_interval
        )

    def build(self) -> URLChecker:
        """Build the configured checker"""
        return URLChecker(self.urls, self.build_config())
