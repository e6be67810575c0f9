from __future__ import annotations

import httpx

from .config import Settings, configure_logging, load_settings
from .items import DEFAULT_TIMEOUT, Items


class Client:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.items = Items(base_url, timeout=timeout, transport=transport)

    def __repr__(self) -> str:
        return f"Client({self.base_url!r})"


def create_client(
    base_url: str,
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Client:
    return Client(base_url, timeout=timeout, transport=transport)


def client_from_settings(
    settings: Settings | None = None, *, transport: httpx.AsyncBaseTransport | None = None
) -> Client:
    """Build a client from ``API_BASE_URL`` / ``REQUEST_TIMEOUT`` settings."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    return Client(settings.api_base_url, timeout=settings.request_timeout, transport=transport)
