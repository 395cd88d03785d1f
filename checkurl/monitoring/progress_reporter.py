import time
import asyncio
import logging
import psutil
from ..result import CheckResult

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Reports batch progress at a fixed interval"""

    def __init__(self, total: int, report_interval: float = 30.0):
        self.total = total
        self.report_interval = report_interval
        self.completed = 0
        self.accessible = 0
        self.start_time = time.time()
        self.reporting_task = None
        self._process = psutil.Process()

    def record(self, result: CheckResult):
        """Count a finished URL"""
        self.completed += 1
        if result.accessible:
            self.accessible += 1

    async def start_reporting(self):
        """Start periodic progress reporting"""
        self.start_time = time.time()
        self.reporting_task = asyncio.create_task(self._reporting_loop())

    async def stop_reporting(self):
        """Stop progress reporting and log the final line"""
        if self.reporting_task:
            self.reporting_task.cancel()
            try:
                await self.reporting_task
            except asyncio.CancelledError:
                pass
            self.reporting_task = None
        self.log_progress()

    async def _reporting_loop(self):
        while True:
            await asyncio.sleep(self.report_interval)
            self.log_progress()

    def log_progress(self):
        elapsed = time.time() - self.start_time
        memory_mb = self._process.memory_info().rss / (1024 * 1024)
        logger.info(
            f"Progress: {self.completed}/{self.total} checked, "
            f"{self.accessible} accessible, {elapsed:.0f}s elapsed, "
            f"memory {memory_mb:.0f} MB"
        )
