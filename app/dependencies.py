from typing import Annotated

from fastapi import Depends, Request

from app.services.scheduler import ScrapeScheduler


def get_scheduler(request: Request) -> ScrapeScheduler:
    return request.app.state.scheduler


SchedulerDep = Annotated[ScrapeScheduler, Depends(get_scheduler)]
