import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import BatchFatalError, BatchInputError
from app.exceptions.handlers import batch_fatal_error_handler, batch_input_error_handler
from app.routers.scrape import router as scrape_router
from app.services.renderer import renderer_factory
from app.services.scheduler import ScrapeScheduler
from app.services.site_crawler import SiteCrawler


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    crawler = SiteCrawler(
        max_internal_links=settings.max_internal_links,
        phone_default_region=settings.phone_default_region,
    )
    # The browser itself is launched per batch by the scheduler
    app.state.scheduler = ScrapeScheduler(
        renderer_factory(settings),
        crawler,
        concurrency=settings.concurrency,
    )

    yield


app = FastAPI(title="Contact Crawler", lifespan=lifespan)

app.add_exception_handler(BatchInputError, batch_input_error_handler)
app.add_exception_handler(BatchFatalError, batch_fatal_error_handler)

app.include_router(scrape_router)
