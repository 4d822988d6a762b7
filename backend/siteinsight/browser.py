"""
Headless Chromium lifecycle.

One browser per /analyze request, or one per bulk batch. Every page gets its
own context with stealth evasions applied, and everything is closed on the
way out regardless of how the analysis ended.
"""

from contextlib import asynccontextmanager

from playwright.async_api import async_playwright, Browser
from playwright_stealth import Stealth

from siteinsight.config import Settings
from siteinsight.errors import BrowserLaunchError


LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-blink-features=AutomationControlled",
]

_stealth = Stealth(
    navigator_webdriver=True,
    chrome_runtime=True,
    navigator_plugins=True,
    navigator_permissions=True,
    webgl_vendor=True,
)


class BrowserSession:
    def __init__(self, browser: Browser, settings: Settings):
        self.browser = browser
        self.settings = settings

    @asynccontextmanager
    async def page(self):
        """Fresh page at the desktop viewport, in an isolated context."""
        context = await self.browser.new_context(
            viewport={"width": self.settings.desktop_width, "height": self.settings.desktop_height},
            user_agent=self.settings.user_agent,
            locale="en-US",
            color_scheme="light",
        )
        try:
            # Apply stealth to avoid bot detection
            await _stealth.apply_stealth_async(context)
            page = await context.new_page()
            yield page
        finally:
            await context.close()


@asynccontextmanager
async def browser_session(settings: Settings):
    """Launch Chromium, yield a BrowserSession, always tear it down."""
    try:
        playwright = await async_playwright().start()
    except Exception as e:
        raise BrowserLaunchError(f"Failed to start Playwright: {e}") from e

    browser = None
    try:
        try:
            browser = await playwright.chromium.launch(headless=settings.headless, args=LAUNCH_ARGS)
        except Exception as e:
            raise BrowserLaunchError(f"Failed to launch Chromium: {e}") from e
        print(f"[browser] Launched Chromium (headless={settings.headless})")
        yield BrowserSession(browser, settings)
    finally:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                print(f"[browser] Close failed: {e}")
        try:
            await playwright.stop()
        except Exception as e:
            print(f"[browser] Playwright stop failed: {e}")
