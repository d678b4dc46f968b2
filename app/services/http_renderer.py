import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from app.config import Settings
from app.exceptions.custom import ExtractionError, SiteNavigationError
from app.schemas.page import PageElement, PageSnapshot

logger = logging.getLogger(__name__)

_SCANNED_TAGS = ["a", "p", "span", "div", "ul", "li"]


def parse_snapshot(html: str, base_url: str) -> PageSnapshot:
    """Build a page snapshot from static HTML, resolving links against ``base_url``."""
    soup = BeautifulSoup(html, "html.parser")

    elements = [
        PageElement(
            text=" ".join(el.get_text(separator=" ").split()),
            href=(el.get("href") or "").strip(),
        )
        for el in soup.find_all(_SCANNED_TAGS)
    ]
    links = [urljoin(base_url, a["href"].strip()) for a in soup.find_all("a", href=True)]
    return PageSnapshot(elements=elements, links=links)


class HttpPage:
    def __init__(self, client: httpx.AsyncClient, max_body: int):
        self._client = client
        self._max_body = max_body
        self._url: str | None = None
        self._html: str | None = None

    async def goto(self, url: str) -> None:
        self._url = url
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise SiteNavigationError(str(exc) or type(exc).__name__, url=url) from exc

        content_type = resp.headers.get("content-type", "")
        if "text/html" not in content_type:
            raise SiteNavigationError(f"Non-HTML content-type: {content_type}", url=url)

        if len(resp.content) > self._max_body:
            raise SiteNavigationError(f"Oversized page ({len(resp.content)} bytes)", url=url)

        self._url = str(resp.url)
        self._html = resp.text

    async def snapshot(self) -> PageSnapshot:
        if self._html is None or self._url is None:
            raise ExtractionError("No document loaded", url=self._url)
        return parse_snapshot(self._html, self._url)

    async def close(self) -> None:
        self._html = None


class HttpContext:
    """One client, and so one cookie jar, per site."""

    def __init__(self, settings: Settings):
        self._max_body = settings.max_body_bytes
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=settings.navigation_timeout_ms / 1000,
            headers={"User-Agent": settings.user_agent},
        )

    async def new_page(self) -> HttpPage:
        return HttpPage(self._client, self._max_body)

    async def close(self) -> None:
        await self._client.aclose()


class HttpRenderer:
    def __init__(self, settings: Settings):
        self._settings = settings

    async def new_context(self) -> HttpContext:
        return HttpContext(self._settings)


@asynccontextmanager
async def open_http_renderer(settings: Settings) -> AsyncIterator[HttpRenderer]:
    logger.info("Using static HTTP renderer")
    yield HttpRenderer(settings)
