from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from functools import partial
from typing import Protocol

from app.config import Settings
from app.schemas.page import PageSnapshot


class RenderedPage(Protocol):
    async def goto(self, url: str) -> None: ...

    async def snapshot(self) -> PageSnapshot: ...

    async def close(self) -> None: ...


class RenderContext(Protocol):
    async def new_page(self) -> RenderedPage: ...

    async def close(self) -> None: ...


class Renderer(Protocol):
    async def new_context(self) -> RenderContext: ...


RendererFactory = Callable[[], AbstractAsyncContextManager[Renderer]]


def renderer_factory(settings: Settings) -> RendererFactory:
    """Pick the rendering backend; each call of the result launches one for a batch."""
    if settings.renderer == "http":
        from app.services.http_renderer import open_http_renderer

        return partial(open_http_renderer, settings)

    from app.services.browser import launch_browser

    return partial(launch_browser, settings)
