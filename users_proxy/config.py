import os
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

DEFAULT_PORT = 10000
DEFAULT_UPSTREAM_URL = "https://fakestoreapi.com"
DEFAULT_TIMEOUT = 5.0


class Settings(BaseModel):
    """Process-wide proxy settings, built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    port: int = DEFAULT_PORT
    upstream_url: str = DEFAULT_UPSTREAM_URL
    timeout_seconds: float = DEFAULT_TIMEOUT

    @property
    def upstream_host(self) -> str:
        return urlsplit(self.upstream_url).hostname or ""


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        port=env.get("PORT", DEFAULT_PORT),
        upstream_url=env.get("UPSTREAM_URL", DEFAULT_UPSTREAM_URL).rstrip("/"),
        timeout_seconds=env.get("UPSTREAM_TIMEOUT", DEFAULT_TIMEOUT),
    )
