"""Concrete services for the resources exposed by the API."""

import logging

import httpx

from resource_api.errors import ErrorHook, TransportError
from resource_api.services import ModelResourceService, ReadOnlyResourceService, ServiceConfig
from resource_api.settings import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)


class UsersService(ReadOnlyResourceService):
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        error_hook: ErrorHook | None = None,
    ) -> None:
        super().__init__(ServiceConfig(base_url, "users"), client, error_hook=error_hook)


class PostsService(ModelResourceService):
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        error_hook: ErrorHook | None = None,
    ) -> None:
        super().__init__(ServiceConfig(base_url, "posts"), client, error_hook=error_hook)


class AlbumsService(ModelResourceService):
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        error_hook: ErrorHook | None = None,
    ) -> None:
        super().__init__(ServiceConfig(base_url, "albums"), client, error_hook=error_hook)

    async def upload_image(self) -> bool:
        """Stub upload; no request is sent."""
        logger.info("Image has been uploaded successfully!", extra={"resource": self.resource_path})
        return True

    async def trigger_error(self) -> None:
        """Push a synthetic failure through the error hook."""
        try:
            raise TransportError("This error is triggered and handled by api module")
        except TransportError as exc:
            self.handle_error(exc)
