from typing import Literal

from pydantic_settings import BaseSettings

_CHROME_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    log_level: str = "INFO"
    renderer: Literal["playwright", "http"] = "playwright"
    concurrency: int = 10
    navigation_timeout_ms: int = 420_000  # 7 minutes
    settle_delay_ms: int = 1000
    headless: bool = True
    user_agent: str = _CHROME_USER_AGENT
    viewport_width: int = 1280
    viewport_height: int = 800
    max_internal_links: int | None = None
    phone_default_region: str | None = None
    max_body_bytes: int = 2 * 1024 * 1024  # 2 MB
