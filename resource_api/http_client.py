"""HTTP client factory shared by every resource service."""

import httpx

from resource_api.settings import Settings


def create_api_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the AsyncClient the registry's services share.

    Services send absolute URLs, so no ``base_url`` is set here.
    """
    return httpx.AsyncClient(timeout=settings.api_timeout)
