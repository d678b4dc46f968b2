import json

from fastapi import APIRouter, Request

from app.dependencies import SchedulerDep
from app.exceptions.custom import BatchInputError
from app.schemas.scrape import BatchResult

router = APIRouter()


async def _read_urls(request: Request) -> list[str]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BatchInputError() from None

    urls = body.get("urls") if isinstance(body, dict) else None
    if not isinstance(urls, list) or not urls:
        raise BatchInputError()

    # Bad entries fail as individual sites, not as a bad batch
    return [u.strip() if isinstance(u, str) else str(u) for u in urls]


@router.post("/api/scrape", response_model=BatchResult)
async def scrape(request: Request, scheduler: SchedulerDep) -> BatchResult:
    urls = await _read_urls(request)
    return await scheduler.run_batch(urls)
