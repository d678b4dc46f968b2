import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from pydantic import ValidationError

from app.config import Settings
from app.exceptions.custom import ExtractionError, SiteNavigationError
from app.schemas.page import PageSnapshot

logger = logging.getLogger(__name__)

# Runs inside the page; innerText includes descendant text, a.href is resolved
_SNAPSHOT_SCRIPT = """
() => {
  const elements = Array.from(document.querySelectorAll("a, p, span, div, ul, li")).map((el) => ({
    text: el.innerText || "",
    href: el.getAttribute("href") || "",
  }));
  const links = Array.from(document.querySelectorAll("a[href]")).map((a) => a.href || "");
  return { elements, links };
}
"""


class PlaywrightPage:
    def __init__(self, page: Page, settings: Settings):
        self._page = page
        self._timeout = settings.navigation_timeout_ms
        self._settle = settings.settle_delay_ms
        self._url: str | None = None

    async def goto(self, url: str) -> None:
        self._url = url
        try:
            await self._page.goto(url, wait_until="domcontentloaded", timeout=self._timeout)
            if self._settle:
                await self._page.wait_for_timeout(self._settle)
        except PlaywrightError as exc:
            raise SiteNavigationError(exc.message, url=url) from exc

    async def snapshot(self) -> PageSnapshot:
        try:
            raw = await self._page.evaluate(_SNAPSHOT_SCRIPT)
            return PageSnapshot.model_validate(raw)
        except PlaywrightError as exc:
            raise ExtractionError(exc.message, url=self._url) from exc
        except ValidationError as exc:
            raise ExtractionError(f"Unexpected snapshot shape: {exc}", url=self._url) from exc

    async def close(self) -> None:
        try:
            await self._page.close()
        except PlaywrightError:
            logger.debug("Page for %s was already closed", self._url)


class PlaywrightContext:
    def __init__(self, context: BrowserContext, settings: Settings):
        self._context = context
        self._settings = settings

    async def new_page(self) -> PlaywrightPage:
        try:
            page = await self._context.new_page()
        except PlaywrightError as exc:
            raise SiteNavigationError(exc.message) from exc
        return PlaywrightPage(page, self._settings)

    async def close(self) -> None:
        try:
            await self._context.close()
        except PlaywrightError:
            logger.debug("Browser context was already closed")


class PlaywrightRenderer:
    def __init__(self, browser: Browser, settings: Settings):
        self._browser = browser
        self._settings = settings

    async def new_context(self) -> PlaywrightContext:
        context = await self._browser.new_context(
            user_agent=self._settings.user_agent,
            viewport={
                "width": self._settings.viewport_width,
                "height": self._settings.viewport_height,
            },
        )
        return PlaywrightContext(context, self._settings)


@asynccontextmanager
async def launch_browser(settings: Settings) -> AsyncIterator[PlaywrightRenderer]:
    """Launch one headless Chromium for a batch and close it once the batch settles."""
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=settings.headless)
        logger.info("Chromium launched (headless=%s)", settings.headless)
        try:
            yield PlaywrightRenderer(browser, settings)
        finally:
            await browser.close()
            logger.info("Chromium closed")
