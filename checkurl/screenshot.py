import asyncio
import logging
from typing import Optional
from playwright.async_api import async_playwright, Error as PlaywrightError
from .result import CaptureOutcome

logger = logging.getLogger(__name__)

# Clicks the first visible control that looks like a close button
DISMISS_POPUPS_JS = """
() => {
    const buttons = document.querySelectorAll('button, [role="button"]');
    for (const button of buttons) {
        const text = (button.textContent || '').toLowerCase();
        const label = (button.getAttribute('aria-label') || '').toLowerCase();
        if (text.includes('close') || label.includes('close')) {
            button.click();
            return true;
        }
    }
    return false;
}
"""

PAGE_HEIGHT_JS = "() => document.body ? document.body.scrollHeight : 0"


class ScreenshotCapture:
    def __init__(self, headless=True, viewport_width=1280, viewport_height=1024,
                 load_timeout=30.0, stability_polls=6, stability_interval=0.5,
                 user_agent=None):
        self.headless = headless
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.load_timeout = load_timeout
        self.stability_polls = stability_polls
        self.stability_interval = stability_interval
        self.user_agent = user_agent
        self.playwright = None
        self.browser = None
        self._launch_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def start(self):
        """Launch the browser if it is not running yet"""
        async with self._launch_lock:
            if self.browser and self.browser.is_connected():
                return

            if self.browser:
                logger.warning("Browser disconnected, relaunching")
                try:
                    await self.browser.close()
                except PlaywrightError as e:
                    logger.debug(f"Error closing disconnected browser: {e}")
                self.browser = None

            if self.playwright is None:
                self.playwright = await async_playwright().start()

            self.browser = await self.playwright.chromium.launch(
                headless=self.headless,
                args=[
                    '--no-sandbox',
                    '--disable-dev-shm-usage',
                    '--disable-gpu',
                    '--ignore-certificate-errors',
                    '--disable-extensions'
                ]
            )
            logger.info("Browser started for screenshots")

    async def close(self):
        """Clean up browser resources"""
        try:
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()
        except PlaywrightError as e:
            logger.error(f"Error closing browser: {e}")
        finally:
            self.browser = None
            self.playwright = None

    async def capture(self, url: str, timeout: float) -> CaptureOutcome:
        """
        Render a page and capture its title and screenshot

        Every call runs in its own browser context, which is closed on all
        exit paths before returning.

        Args:
            url: URL that answered the reachability probe
            timeout: Overall deadline for the capture in seconds

        Returns:
            CaptureOutcome holding whatever was obtained, empty screenshot on failure
        """
        state = {}

        try:
            await asyncio.wait_for(self._render(url, state), timeout=timeout)
        except asyncio.TimeoutError:
            state['error'] = f"capture timed out after {timeout:.0f}s"
            logger.warning(f"Capture timed out for {url}")
        except PlaywrightError as e:
            state['error'] = str(e)
            logger.warning(f"Failed to capture screenshot or title for {url}: {e}")
        finally:
            context = state.get('context')
            if context:
                await self._close_context(context)

        screenshot = state.get('screenshot', b'')
        if screenshot:
            logger.info(f"Screenshot captured for {url}. Size: {len(screenshot)} bytes")
        else:
            logger.info(f"Screenshot buffer is empty for {url}")

        return CaptureOutcome(
            title=state.get('title', ''),
            screenshot=screenshot,
            final_url=state.get('final_url', ''),
            error=state.get('error')
        )

    async def _render(self, url, state):
        """Launch to capture sequence; fills state as it goes"""
        await self.start()
        context = await self.browser.new_context(
            viewport={'width': self.viewport_width, 'height': self.viewport_height},
            ignore_https_errors=True,
            user_agent=self.user_agent
        )
        state['context'] = context

        # New windows opened by the page are closed straight away
        context.on('page', self._close_popup)

        page = await context.new_page()
        page.on('dialog', self._dismiss_dialog)

        await page.goto(url, wait_until='load', timeout=self.load_timeout * 1000)
        state['final_url'] = page.url

        await self._wait_for_stable_layout(page)
        await self._dismiss_close_buttons(page)

        state['screenshot'] = await page.screenshot(type='png')
        state['title'] = await page.title()
        state['final_url'] = page.url

    async def _wait_for_stable_layout(self, page) -> bool:
        """
        Poll the page height until it stops changing

        Returns:
            bool: True if the layout settled within the poll budget
        """
        last_height: Optional[int] = None

        for _ in range(self.stability_polls):
            try:
                height = await page.evaluate(PAGE_HEIGHT_JS)
            except PlaywrightError as e:
                logger.debug(f"Height check failed on {page.url}: {e}")
                return False

            if height == last_height:
                return True

            last_height = height
            await asyncio.sleep(self.stability_interval)

        logger.debug(f"Layout of {page.url} still changing, capturing anyway")
        return False

    async def _dismiss_close_buttons(self, page):
        try:
            await page.evaluate(DISMISS_POPUPS_JS)
        except PlaywrightError as e:
            logger.debug(f"Popup dismissal failed on {page.url}: {e}")

    @staticmethod
    async def _dismiss_dialog(dialog):
        try:
            await dialog.dismiss()
        except PlaywrightError:
            pass  # dialog already closed

    @staticmethod
    async def _close_popup(page):
        try:
            opener = await page.opener()
        except PlaywrightError:
            return
        if opener is None:
            return
        try:
            await page.close()
        except PlaywrightError:
            pass  # popup already gone

    @staticmethod
    async def _close_context(context):
        try:
            await context.close()
        except PlaywrightError as e:
            logger.warning(f"Error closing browser context: {e}")
