import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import BatchFatalError, BatchInputError

logger = logging.getLogger(__name__)


async def batch_input_error_handler(_request: Request, exc: BatchInputError) -> JSONResponse:
    logger.warning("Rejected scrape request: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"error": exc.message},
    )


async def batch_fatal_error_handler(_request: Request, exc: BatchFatalError) -> JSONResponse:
    logger.error("Scrape batch failed: %s", exc.message)
    return JSONResponse(
        status_code=500,
        content={"error": exc.message},
    )
