import asyncio
import logging

from app.exceptions.custom import BatchFatalError
from app.mappers.result_aggregator import build_batch_result
from app.schemas.scrape import BatchResult, SiteRecord
from app.services.renderer import Renderer, RendererFactory
from app.services.site_crawler import SiteCrawler

logger = logging.getLogger(__name__)


class ScrapeScheduler:
    """Runs site crawls for a batch of URLs, at most ``concurrency`` at a time.

    One renderer (browser) is launched per batch and torn down once every site
    task has settled. A site that raises is logged and left out of the result.
    """

    def __init__(
        self,
        renderer_factory: RendererFactory,
        crawler: SiteCrawler,
        concurrency: int = 10,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._renderer_factory = renderer_factory
        self._crawler = crawler
        self._concurrency = concurrency

    async def run_batch(self, urls: list[str]) -> BatchResult:
        logger.info("Scrape batch started: %d URLs (concurrency=%d)", len(urls), self._concurrency)
        try:
            async with self._renderer_factory() as renderer:
                records = await self._crawl_all(renderer, urls)
        except Exception as exc:
            logger.exception("Scrape batch aborted")
            raise BatchFatalError(str(exc) or type(exc).__name__) from exc

        result = build_batch_result(records)
        logger.info(
            "Scrape batch finished: %d/%d sites with data",
            len(result.results), len(urls),
        )
        return result

    async def _crawl_all(self, renderer: Renderer, urls: list[str]) -> list[SiteRecord]:
        semaphore = asyncio.Semaphore(self._concurrency)
        records: list[SiteRecord] = []  # completion order

        async def _run(url: str) -> None:
            async with semaphore:
                try:
                    record = await self._crawler.crawl(renderer, url)
                except Exception:
                    logger.exception("Failed scrape for %s", url)
                    return
            records.append(record)

        await asyncio.gather(*(_run(url) for url in urls))
        return records
