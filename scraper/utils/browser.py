import subprocess
import sys
from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from scraper.errors.exceptions import NetworkError
from scraper.sources.scraper_config import SCRAPER_SETTINGS
from scraper.utils.logging_utils import Logger, _log

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
]

_QUERY_ALL_JS = """
els => els.map(el => ({
    text: (el.textContent || '').replace(/\\u00A0/g, ' ').trim(),
    tagName: el.tagName.toLowerCase(),
}))
"""


# ----------------------------------------------------------
# Page session: the only surface the extraction engine touches
# ----------------------------------------------------------
class PageSession:
    """
    Thin async wrapper around a Playwright page.

    Bounded waits return False on timeout instead of raising; a failed
    navigation raises NetworkError. Anything else Playwright raises is a
    page-level failure and propagates.
    """

    def __init__(self, page: Page):
        self.page = page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        try:
            await self.page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NetworkError(f"timeout loading {url}: {e}") from e
        except PlaywrightError as e:
            raise NetworkError(f"failed loading {url}: {e}") from e

    async def wait_for_condition(self, js: str, timeout_ms: int, arg: Any = None) -> bool:
        try:
            await self.page.wait_for_function(js, arg=arg, timeout=timeout_ms)
            return True
        except PlaywrightTimeoutError:
            return False

    async def wait_for_element(self, selector: str, timeout_ms: int) -> bool:
        try:
            await self.page.wait_for_selector(selector, timeout=timeout_ms)
            return True
        except PlaywrightTimeoutError:
            return False

    async def query_text(self, selector: str) -> Optional[str]:
        el = await self.page.query_selector(selector)
        if el is None:
            return None
        return await el.text_content()

    async def query_all_matching(self, selector: str) -> List[Dict[str, str]]:
        return await self.page.eval_on_selector_all(selector, _QUERY_ALL_JS)

    async def evaluate(self, js: str, arg: Any = None) -> Any:
        return await self.page.evaluate(js, arg)

    async def sleep(self, ms: int) -> None:
        if ms > 0:
            await self.page.wait_for_timeout(ms)


# ----------------------------------------------------------
# Playwright-Browser (Chromium) sicher installieren
# ----------------------------------------------------------
def ensure_browsers_installed(logger: Optional[Logger] = None) -> None:
    _log(
        logger,
        "Looks like the Playwright browser is missing. "
        "Installing Chromium browser (this can take 30–60 seconds on first run)…",
    )

    cmd = [sys.executable, "-m", "playwright", "install", "chromium"]
    try:
        subprocess.run(cmd, check=True)
        _log(logger, "Playwright Chromium installation finished ✅")
    except Exception as e:
        _log(logger, f"❌ Failed to install Playwright browsers automatically: {e}")
        raise


class BrowserFactory:
    """
    async with BrowserFactory() as session:
        await session.navigate(url, 60000)
    """

    def __init__(self, headless=True, settings=None, logger: Optional[Logger] = None):
        self.headless = headless
        self.settings = settings or SCRAPER_SETTINGS
        self.logger = logger
        self.browser = None
        self.pw = None

    async def _launch(self):
        return await self.pw.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)

    async def __aenter__(self) -> PageSession:
        self.pw = await async_playwright().start()

        try:
            self.browser = await self._launch()
        except PlaywrightError as e:
            # "Executable doesn't exist at /home/.../ms-playwright/chromium-..."
            if "Executable doesn't exist" not in str(e):
                await self.pw.stop()
                raise
            ensure_browsers_installed(self.logger)
            self.browser = await self._launch()

        context = await self.browser.new_context(
            viewport=self.settings["VIEWPORT"],
            java_script_enabled=True,
            locale=self.settings["LOCALE"],
            timezone_id=self.settings["TIMEZONE"],
            user_agent=self.settings["USER_AGENT"],
        )

        page = await context.new_page()
        return PageSession(page)

    async def __aexit__(self, exc_type, exc, tb):
        try:
            if self.browser:
                await self.browser.close()
        finally:
            if self.pw:
                await self.pw.stop()
