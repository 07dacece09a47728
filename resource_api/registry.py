"""
Registry of the resource services used by application code.

The registry is built once per process and is the single entry point into the
package: ``registry.users``, ``registry["posts"]`` and so on.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType, TracebackType
from typing import Any

import httpx

from resource_api.http_client import create_api_client
from resource_api.resources import AlbumsService, PostsService, UsersService
from resource_api.settings import Settings

logger = logging.getLogger(__name__)


class ApiRegistry(Mapping[str, Any]):
    """Immutable name -> service mapping sharing one AsyncClient."""

    __slots__ = ("_client", "_services")

    def __init__(
        self,
        *,
        users: UsersService,
        posts: PostsService,
        albums: AlbumsService,
        client: httpx.AsyncClient,
    ) -> None:
        self._client = client
        self._services = MappingProxyType(
            {"users": users, "posts": posts, "albums": albums}
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiRegistry":
        """Factory that builds the shared client and every service from Settings.

        Settings are validated on construction, so the client is only opened
        once every service option is known to be usable.
        """
        options = {"base_url": settings.api_base_url, "error_hook": settings.error_hook}
        client = create_api_client(settings)
        registry = cls(
            users=UsersService(client, **options),
            posts=PostsService(client, **options),
            albums=AlbumsService(client, **options),
            client=client,
        )
        logger.info(
            "API registry ready",
            extra={"base_url": settings.api_base_url, "resources": list(registry)},
        )
        return registry

    @property
    def users(self) -> UsersService:
        return self._services["users"]

    @property
    def posts(self) -> PostsService:
        return self._services["posts"]

    @property
    def albums(self) -> AlbumsService:
        return self._services["albums"]

    def __getitem__(self, name: str) -> Any:
        return self._services[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "ApiRegistry":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def build_registry(settings: Settings | None = None) -> ApiRegistry:
    """Build the registry, loading Settings from the environment when none are given."""
    return ApiRegistry.from_settings(settings or Settings.load())
