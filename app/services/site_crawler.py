import logging
from urllib.parse import urlparse

from app.exceptions.custom import ExtractionError, SiteNavigationError
from app.mappers.normalizer import normalize
from app.mappers.page_extractor import discover_internal_links, extract_page
from app.schemas.page import AggregatedSiteData, PageSnapshot
from app.schemas.scrape import SiteRecord
from app.services.renderer import RenderContext, Renderer

logger = logging.getLogger(__name__)


def company_name_from_url(url: str) -> str | None:
    """'https://www.acme-labs.com/x' -> 'Acme-labs'."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    name = hostname.removeprefix("www.").split(".")[0]
    return name[:1].upper() + name[1:] if name else None


def contact_page_url(url: str) -> str:
    return url + "contact/" if url.endswith("/") else url + "/contact/"


class SiteCrawler:
    """Visits homepage, matching internal pages and a guessed /contact/ page for one site."""

    def __init__(
        self,
        max_internal_links: int | None = None,
        phone_default_region: str | None = None,
    ):
        self._max_internal_links = max_internal_links
        self._phone_region = phone_default_region

    async def crawl(self, renderer: Renderer, url: str) -> SiteRecord:
        context = await renderer.new_context()
        try:
            site = await self._collect(context, url)
        finally:
            await context.close()

        return SiteRecord(
            url=url,
            company_name=company_name_from_url(url),
            data=normalize(site, self._phone_region),
        )

    async def _collect(self, context: RenderContext, url: str) -> AggregatedSiteData:
        site = AggregatedSiteData()

        # --- Homepage ---
        home, loaded = await self._visit_homepage(context, url)
        if loaded:
            site = site.merged(extract_page(home))
        links = discover_internal_links(home, self._max_internal_links) if home is not None else []

        # --- Internal pages, one at a time ---
        if links:
            logger.debug("Following %d internal links for %s", len(links), url)
        for link in links:
            page = await self._visit(context, link, "internal link")
            if page is not None:
                site = site.merged(extract_page(page))

        # --- Guessed contact page (speculative) ---
        contact = await self._visit(context, contact_page_url(url), None)
        if contact is not None:
            site = site.merged(extract_page(contact))

        return site

    async def _visit_homepage(
        self,
        context: RenderContext,
        url: str,
    ) -> tuple[PageSnapshot | None, bool]:
        """Load the homepage. Returns (snapshot, loaded).

        When navigation fails the partially loaded DOM is still read so its
        links can be followed; its contacts are not used.
        """
        page = None
        loaded = False
        try:
            page = await context.new_page()
            try:
                await page.goto(url)
                loaded = True
            except SiteNavigationError as exc:
                logger.warning("Failed homepage %s: %s", url, exc.message)
            return await page.snapshot(), loaded
        except SiteNavigationError as exc:
            logger.warning("Failed homepage %s: %s", url, exc.message)
            return None, False
        except ExtractionError as exc:
            if loaded:
                logger.warning("Could not read homepage %s: %s", url, exc.message)
            return None, False
        finally:
            if page is not None:
                await page.close()

    async def _visit(
        self,
        context: RenderContext,
        url: str,
        stage: str | None,
    ) -> PageSnapshot | None:
        """Load one page in its own handle. Returns None on failure; logs only when ``stage`` is set."""
        page = None
        try:
            page = await context.new_page()
            await page.goto(url)
            return await page.snapshot()
        except SiteNavigationError as exc:
            if stage:
                logger.warning("Failed %s %s: %s", stage, url, exc.message)
            return None
        except ExtractionError as exc:
            if stage:
                logger.warning("Could not read %s %s: %s", stage, url, exc.message)
            return None
        finally:
            if page is not None:
                await page.close()
