from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console


class Config(BaseSettings):
    env: str = "dev"
    api_server_host: str = "0.0.0.0"
    api_server_port: int = Field(
        3000, validation_alias=AliasChoices("api_server_port", "port")
    )

    # what unmatched GET routes get: the static site with an index.html
    # fallback, or a bare 404
    static_dir: str = "public"
    fallback: Literal["static", "not_found"] = "static"

    # Browser
    headless: bool = True
    browser_args: list[str] = ["--no-sandbox"]
    wait_until: str = "networkidle2"
    navigation_timeout_ms: int = Field(30000, gt=0)
    batch_concurrency: int = Field(10, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    @property
    def console(self):
        return Console()


@lru_cache()
def get_config() -> Config:
    """Get cached config instance."""

    config = Config()
    config.console.print(config)
    return config
