"""
URL Checker - Bounded-concurrency scheduler for a batch of URLs
"""

import asyncio
import logging
from typing import Awaitable, Callable, List
import aiohttp
from .check_config import CheckConfig
from ..result import URLTask, CheckResult
from ..error_handler import RetryController
from ..screenshot import ScreenshotCapture
from ..utils.probe import ReachabilityProbe
from ..utils.url import ensure_trailing_slash
from ..monitoring import ProgressReporter

logger = logging.getLogger(__name__)


class URLChecker:
    """
    Checks every URL in a list and returns one result per URL

    Each URL runs through its own retry controller as an asyncio task. A
    semaphore admits at most `concurrency` of them at a time, which bounds
    both outbound connections and open browser contexts. Results come back
    in completion order once every task has finished.
    """

    def __init__(self, urls: List[str], config: CheckConfig = None, probe=None,
                 capture=None, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.urls = list(urls)
        self.config = config or CheckConfig()
        self.probe = probe
        self.capture = capture
        self.sleep = sleep
        self.progress_reporter = None

    def _create_capture(self) -> ScreenshotCapture:
        return ScreenshotCapture(
            headless=self.config.headless,
            viewport_width=self.config.viewport_width,
            viewport_height=self.config.viewport_height,
            load_timeout=self.config.load_timeout,
            stability_polls=self.config.stability_polls,
            stability_interval=self.config.stability_interval,
            user_agent=self.config.user_agent
        )

    def _create_probe(self, session: aiohttp.ClientSession) -> ReachabilityProbe:
        retry = self.config.retry
        return ReachabilityProbe(
            session,
            timeout=retry.probe_timeout,
            check_timeout=retry.check_timeout,
            user_agent=self.config.user_agent
        )

    async def run(self) -> List[CheckResult]:
        """Main checking workflow"""
        tasks = [URLTask(url) for url in self.urls]
        if not tasks:
            logger.warning("No URLs to check")
            return []

        capture = self.capture or self._create_capture()
        owns_capture = self.capture is None

        if self.config.progress_interval:
            self.progress_reporter = ProgressReporter(len(tasks), self.config.progress_interval)

        results: List[CheckResult] = []

        async with aiohttp.ClientSession() as session:
            probe = self.probe or self._create_probe(session)
            controller = RetryController(probe, capture, self.config.retry, sleep=self.sleep)
            semaphore = asyncio.Semaphore(self.config.concurrency)

            logger.info(f"Checking {len(tasks)} URLs with concurrency {self.config.concurrency}")

            if self.progress_reporter:
                await self.progress_reporter.start_reporting()

            pending = [
                asyncio.create_task(self._check(controller, semaphore, task))
                for task in tasks
            ]

            try:
                for finished in asyncio.as_completed(pending):
                    result = await finished
                    results.append(result)
                    if self.progress_reporter:
                        self.progress_reporter.record(result)
            finally:
                for task in pending:
                    if not task.done():
                        task.cancel()

                if self.progress_reporter:
                    await self.progress_reporter.stop_reporting()

                if owns_capture:
                    await capture.close()

        return results

    async def _check(self, controller: RetryController, semaphore: asyncio.Semaphore,
                     task: URLTask) -> CheckResult:
        """Run one URL under the admission bound"""
        async with semaphore:
            candidate = ensure_trailing_slash(task.original_url.strip())
            try:
                candidate = await controller.normalize(task)
                result = await controller.run(task, candidate)
            except Exception as e:
                # Keep one URL's unexpected failure from touching the others
                logger.exception(f"Unexpected error while checking {task.original_url}: {e}")
                return CheckResult.unreachable(task.original_url, candidate)

        status = result.status_code if result.accessible else "unreachable"
        logger.info(f"Checked {task.original_url}: {status} after {result.attempts} attempt(s)")
        return result
