import asyncio
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple
from .result import URLTask, ProbeOutcome, CaptureOutcome, CheckResult
from .utils.url import normalize_url

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of failed attempts"""
    NETWORK_TIMEOUT = "network_timeout"
    CONNECTION_ERROR = "connection_error"
    CAPTURE_TIMEOUT = "capture_timeout"
    SCREENSHOT_ERROR = "screenshot_error"


@dataclass
class RetryConfig:
    """Configuration for retry behavior"""
    max_attempts: int = 3
    base_delay: float = 1.0
    attempt_timeout: float = 180.0
    probe_timeout: float = 30.0
    check_timeout: float = 10.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must not be negative, got {self.base_delay}")

    def delay_for(self, attempt: int) -> float:
        """Linear backoff: the n-th failed attempt waits n * base_delay"""
        return attempt * self.base_delay


def classify_failure(probe: ProbeOutcome, capture: CaptureOutcome) -> ErrorType:
    """Classify why an attempt did not succeed"""
    if not probe.reachable:
        message = (probe.error or "").lower()
        if "timeout" in message or "timed out" in message:
            return ErrorType.NETWORK_TIMEOUT
        return ErrorType.CONNECTION_ERROR

    if capture.error and "timed out" in capture.error.lower():
        return ErrorType.CAPTURE_TIMEOUT
    return ErrorType.SCREENSHOT_ERROR


class RetryController:
    """
    Runs the probe and capture cycle for one URL with bounded retries

    An attempt succeeds when the probe got an HTTP response and the capture
    produced a screenshot. Failed attempts are retried after a linear
    backoff until max_attempts is reached, after which the last attempt is
    reported as is. Per-URL failures never raise.
    """

    def __init__(self, probe, capture, retry_config: RetryConfig = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.probe = probe
        self.capture = capture
        self.retry_config = retry_config or RetryConfig()
        self.sleep = sleep

    async def normalize(self, task: URLTask) -> str:
        """Resolve the probe candidate for a task"""
        return await normalize_url(task.original_url, self.probe.check)

    async def run(self, task: URLTask, candidate: Optional[str] = None) -> CheckResult:
        """Check a single URL and return exactly one result"""
        max_attempts = self.retry_config.max_attempts
        if candidate is None:
            candidate = await self.normalize(task)

        attempt = 0
        probe_outcome: Optional[ProbeOutcome] = None
        capture_outcome = CaptureOutcome()

        while True:
            attempt += 1
            probe_outcome, capture_outcome = await self._attempt(candidate)

            if probe_outcome.reachable and capture_outcome.succeeded:
                break

            error_type = classify_failure(probe_outcome, capture_outcome)
            log_level = logging.WARNING if attempt < max_attempts else logging.ERROR
            logger.log(
                log_level,
                f"Attempt {attempt}/{max_attempts} failed for {candidate}: "
                f"{error_type.value} - {probe_outcome.error or capture_outcome.error or 'empty screenshot'}"
            )

            if attempt >= max_attempts:
                break

            delay = self.retry_config.delay_for(attempt)
            logger.info(f"Retrying {candidate} in {delay:.1f}s (attempt {attempt + 1})")
            await self.sleep(delay)

        return self._build_result(task, candidate, probe_outcome, capture_outcome, attempt)

    async def _attempt(self, candidate: str) -> Tuple[ProbeOutcome, CaptureOutcome]:
        probe_outcome = await self.probe.probe(candidate)
        if not probe_outcome.reachable:
            # No browser session for a host that did not answer
            return probe_outcome, CaptureOutcome()

        try:
            capture_outcome = await self.capture.capture(
                probe_outcome.resolved_url, self.retry_config.attempt_timeout
            )
        except Exception as e:
            # A broken renderer fails this attempt only; the probe result stands
            logger.warning(f"Capture raised for {probe_outcome.resolved_url}: {e!r}")
            capture_outcome = CaptureOutcome(error=str(e) or e.__class__.__name__)
        return probe_outcome, capture_outcome

    @staticmethod
    def _build_result(task: URLTask, candidate: str, probe: ProbeOutcome,
                      capture: CaptureOutcome, attempts: int) -> CheckResult:
        if not probe.reachable:
            return CheckResult.unreachable(task.original_url, candidate, attempts)

        final_url = capture.final_url or probe.resolved_url
        return CheckResult(
            original_url=task.original_url,
            final_url=final_url,
            title=capture.title,
            status_code=probe.status_code,
            screenshot=capture.screenshot,
            was_redirected=final_url != candidate,
            attempts=attempts
        )
