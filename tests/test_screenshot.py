"""Capture client tests with mocked Playwright objects."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from checkurl.screenshot import ScreenshotCapture


def _page(heights=(100, 100)):
    page = MagicMock()
    page.url = "https://example.com/final"
    page.goto = AsyncMock()
    # height polls, then the close-button dismissal
    page.evaluate = AsyncMock(side_effect=list(heights) + [False])
    page.screenshot = AsyncMock(return_value=b"png")
    page.title = AsyncMock(return_value="Example Domain")
    return page


def _capture_with(page):
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.is_connected.return_value = True
    browser.new_context = AsyncMock(return_value=context)

    capture = ScreenshotCapture(stability_polls=3, stability_interval=0)
    capture.browser = browser
    return capture, browser, context


@pytest.mark.asyncio
async def test_capture_success():
    page = _page()
    capture, browser, context = _capture_with(page)

    outcome = await capture.capture("https://example.com/", timeout=5)

    assert outcome.succeeded
    assert outcome.screenshot == b"png"
    assert outcome.title == "Example Domain"
    assert outcome.final_url == "https://example.com/final"
    assert outcome.error is None
    context.close.assert_awaited_once()

    kwargs = browser.new_context.call_args.kwargs
    assert kwargs["viewport"] == {"width": 1280, "height": 1024}
    assert kwargs["ignore_https_errors"] is True


@pytest.mark.asyncio
async def test_capture_timeout_closes_context():
    async def hang(*args, **kwargs):
        await asyncio.sleep(10)

    page = _page()
    page.goto = AsyncMock(side_effect=hang)
    capture, _, context = _capture_with(page)

    outcome = await capture.capture("https://slow.example/", timeout=0.05)

    assert not outcome.succeeded
    assert "timed out" in outcome.error
    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_navigation_error_is_an_empty_outcome():
    page = _page()
    page.goto = AsyncMock(side_effect=PlaywrightError("net::ERR_CONNECTION_RESET"))
    capture, _, context = _capture_with(page)

    outcome = await capture.capture("https://reset.example/", timeout=5)

    assert outcome.screenshot == b""
    assert "ERR_CONNECTION_RESET" in outcome.error
    context.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_unstable_layout_is_captured_anyway():
    page = _page(heights=(100, 200, 300))
    capture, _, _ = _capture_with(page)

    outcome = await capture.capture("https://growing.example/", timeout=5)

    assert outcome.succeeded
    assert page.evaluate.await_count == 4


@pytest.mark.asyncio
async def test_missing_browser_fails_the_attempt():
    playwright = MagicMock()
    playwright.start = AsyncMock(side_effect=PlaywrightError("Executable doesn't exist"))

    with patch("checkurl.screenshot.async_playwright", return_value=playwright):
        capture = ScreenshotCapture()
        outcome = await capture.capture("https://example.com/", timeout=5)

    assert outcome.screenshot == b""
    assert "Executable" in outcome.error


@pytest.mark.asyncio
async def test_hung_context_creation_is_bounded_by_timeout():
    async def hang(*args, **kwargs):
        await asyncio.sleep(3600)

    capture, browser, _ = _capture_with(_page())
    browser.new_context = AsyncMock(side_effect=hang)

    outcome = await asyncio.wait_for(capture.capture("https://stuck.example/", timeout=0.1), timeout=2)

    assert not outcome.succeeded
    assert "timed out" in outcome.error


@pytest.mark.asyncio
async def test_disconnected_browser_is_closed_before_relaunch():
    stale = MagicMock()
    stale.is_connected.return_value = False
    stale.close = AsyncMock()

    fresh = MagicMock()
    fresh.is_connected.return_value = True
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=fresh)

    capture = ScreenshotCapture()
    capture.playwright = playwright
    capture.browser = stale

    await capture.start()

    stale.close.assert_awaited_once()
    playwright.chromium.launch.assert_awaited_once()
    assert capture.browser is fresh
