"""Retry controller tests with fake probe, capture and sleep."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from checkurl.error_handler import ErrorType, RetryConfig, RetryController, classify_failure
from checkurl.result import CaptureOutcome, URLTask, UNREACHABLE
from checkurl.screenshot import ScreenshotCapture
from tests.fakes import FakeCapture, FakeProbe, RecordingSleep, captured, reachable, unreachable


def _controller(probe, capture, max_attempts=3, sleep=None):
    config = RetryConfig(max_attempts=max_attempts, attempt_timeout=42.0)
    return RetryController(probe, capture, config, sleep=sleep or RecordingSleep())


@pytest.mark.asyncio
async def test_dead_url_uses_every_attempt_with_linear_backoff():
    probe = FakeProbe([unreachable])
    capture = FakeCapture()
    sleep = RecordingSleep()

    result = await _controller(probe, capture, max_attempts=3, sleep=sleep).run(
        URLTask("https://dead.example"))

    assert len(probe.probed) == 3
    assert sleep.delays == [1.0, 2.0]
    assert capture.calls == []
    assert result.status_code == UNREACHABLE
    assert result.title == ""
    assert result.screenshot == b""
    assert result.was_redirected is False
    assert result.attempts == 3
    assert result.final_url == "https://dead.example/"


@pytest.mark.asyncio
async def test_first_attempt_success_does_not_sleep():
    probe = FakeProbe()
    capture = FakeCapture()
    sleep = RecordingSleep()

    result = await _controller(probe, capture, sleep=sleep).run(URLTask("https://ok.example/"))

    assert sleep.delays == []
    assert result.status_code == 200
    assert result.screenshot
    assert result.title == "Example"
    assert result.attempts == 1
    assert capture.timeouts == [42.0]


@pytest.mark.asyncio
async def test_capture_retried_until_screenshot():
    probe = FakeProbe()
    capture = FakeCapture([CaptureOutcome(error="page crashed"), CaptureOutcome(), captured])
    sleep = RecordingSleep()

    result = await _controller(probe, capture, max_attempts=5, sleep=sleep).run(
        URLTask("https://flaky.example/"))

    assert result.attempts == 3
    assert sleep.delays == [1.0, 2.0]
    assert len(probe.probed) == 3
    assert result.screenshot


@pytest.mark.asyncio
async def test_capture_failure_keeps_status_code():
    probe = FakeProbe([lambda url: reachable(url, status=503)])
    capture = FakeCapture([CaptureOutcome(title="", final_url="")])

    result = await _controller(probe, capture, max_attempts=2).run(URLTask("https://slow.example/"))

    assert result.status_code == 503
    assert result.accessible
    assert result.screenshot == b""
    assert result.attempts == 2
    assert result.final_url == "https://slow.example/"


@pytest.mark.asyncio
async def test_missing_browser_driver_is_retried_without_losing_status():
    playwright = MagicMock()
    playwright.start = AsyncMock(side_effect=FileNotFoundError(2, "No such file or directory"))
    probe = FakeProbe()
    sleep = RecordingSleep()

    with patch("checkurl.screenshot.async_playwright", return_value=playwright):
        result = await _controller(probe, ScreenshotCapture(), max_attempts=3, sleep=sleep).run(
            URLTask("https://example.com/"))

    assert result.status_code == 200
    assert result.accessible
    assert result.screenshot == b""
    assert result.attempts == 3
    assert sleep.delays == [1.0, 2.0]
    assert playwright.start.await_count == 3


@pytest.mark.asyncio
async def test_last_attempt_is_reported():
    probe = FakeProbe([reachable("https://site.example/"), unreachable("https://site.example/")])
    capture = FakeCapture([CaptureOutcome(title="partial")])

    result = await _controller(probe, capture, max_attempts=2).run(URLTask("https://site.example/"))

    assert result.status_code == UNREACHABLE
    assert result.title == ""


@pytest.mark.asyncio
async def test_single_attempt_never_sleeps():
    probe = FakeProbe([unreachable])
    sleep = RecordingSleep()

    result = await _controller(probe, FakeCapture(), max_attempts=1, sleep=sleep).run(
        URLTask("https://dead.example/"))

    assert sleep.delays == []
    assert result.attempts == 1


@pytest.mark.asyncio
async def test_bare_host_is_normalized_once():
    probe = FakeProbe([unreachable], working_protocols=("https://",))

    await _controller(probe, FakeCapture(), max_attempts=3).run(URLTask("example.com"))

    assert probe.checked == ["https://example.com/"]
    assert probe.probed == ["https://example.com/"] * 3


@pytest.mark.asyncio
async def test_redirect_detected_from_rendered_url():
    probe = FakeProbe([lambda url: reachable(url, resolved_url="https://www.example.com/")])
    capture = FakeCapture([lambda url: captured("https://www.example.com/home")])

    result = await _controller(probe, capture).run(URLTask("example.com"))

    assert capture.calls == ["https://www.example.com/"]
    assert result.final_url == "https://www.example.com/home"
    assert result.original_url == "example.com"
    assert result.was_redirected is True


@pytest.mark.asyncio
async def test_no_redirect_when_final_url_matches():
    probe = FakeProbe()
    capture = FakeCapture()

    result = await _controller(probe, capture).run(URLTask("https://example.com"))

    assert result.final_url == "https://example.com/"
    assert result.was_redirected is False


def test_retry_config_rejects_zero_attempts():
    with pytest.raises(ValueError):
        RetryConfig(max_attempts=0)


def test_delay_is_linear():
    config = RetryConfig(base_delay=1.0)
    assert [config.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]


def test_classify_failure():
    assert classify_failure(unreachable("u", "TimeoutError"), CaptureOutcome()) == ErrorType.NETWORK_TIMEOUT
    assert classify_failure(unreachable("u"), CaptureOutcome()) == ErrorType.CONNECTION_ERROR
    assert classify_failure(reachable("u"), CaptureOutcome(error="capture timed out after 180s")) \
        == ErrorType.CAPTURE_TIMEOUT
    assert classify_failure(reachable("u"), CaptureOutcome()) == ErrorType.SCREENSHOT_ERROR
