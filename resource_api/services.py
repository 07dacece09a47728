"""
Resource service building blocks.

``BaseResourceService`` owns the configuration, URL construction, the single
outgoing request per call and the error hook. Read and write operations are
capability mixins layered on top of it; a concrete service combines the
capabilities it exposes with the base.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from resource_api.errors import (
    ConfigurationError,
    ErrorHook,
    ResourceServiceError,
    TransportError,
    ValidationError,
    log_error,
)

logger = logging.getLogger(__name__)

ResourceId = str | int

_SNIPPET_LIMIT = 512


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Where a service sends its requests: ``{base_url}/{resource_path}/``."""

    base_url: str
    resource_path: str

    def __post_init__(self) -> None:
        if not self.resource_path or not self.resource_path.strip():
            raise ConfigurationError("Resource is not provided")
        if not self.base_url or not self.base_url.strip():
            raise ConfigurationError("Base URL is not provided")
        try:
            httpx.URL(self.base_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Base URL is not a valid URL: {exc!s}") from exc


def _require_id(resource_id: ResourceId | None) -> ResourceId:
    """Reject falsy and blank identifiers before any request is made."""
    if isinstance(resource_id, str) and not resource_id.strip():
        raise ValidationError("Id is not provided")
    if not resource_id:
        raise ValidationError("Id is not provided")
    return resource_id


def _extract_id(body: Any, method: str, url: str) -> Any:
    if not isinstance(body, dict) or "id" not in body:
        raise TransportError(
            f"API response did not include an id ({method} {url}).",
            method=method,
            url=url,
        )
    return body["id"]


class BaseResourceService:
    """Shared request builder for a single REST resource."""

    def __init__(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
        *,
        error_hook: ErrorHook | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._error_hook = error_hook or log_error

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def resource_path(self) -> str:
        return self._config.resource_path

    def build_url(self, resource_id: ResourceId | None = None) -> str:
        """Return ``{base_url}/{resource_path}/{id}``; the trailing slash stays when no id is given."""
        suffix = "" if resource_id is None else resource_id
        return f"{self._config.base_url}/{self._config.resource_path}/{suffix}"

    def handle_error(self, err: ResourceServiceError) -> None:
        """Route a failed call to the configured error hook."""
        self._error_hook(err)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        request_options: Mapping[str, Any] | None = None,
        decode: bool = True,
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        ``request_options`` are handed to ``AsyncClient.request`` untouched.
        """

        def _transport_error(
            message: str,
            *,
            exc: Exception | None = None,
            status_code: int | None = None,
        ) -> TransportError:
            logger.warning(
                message,
                extra={"method": method, "url": url},
                exc_info=exc,
            )
            return TransportError(message, method=method, url=url, status_code=status_code)

        logger.debug(
            "Sending %s request",
            method,
            extra={"method": method, "url": url, "resource": self.resource_path},
        )
        try:
            response = await self._client.request(method, url, **(request_options or {}))
        except httpx.TimeoutException as exc:
            raise _transport_error(f"API request timed out ({method} {url}).", exc=exc) from exc
        except httpx.RequestError as exc:
            raise _transport_error(
                f"API request failed ({method} {url}): {exc!s}",
                exc=exc,
            ) from exc
        except httpx.InvalidURL as exc:
            raise _transport_error(
                f"API request URL is invalid ({method} {url}): {exc!s}",
                exc=exc,
            ) from exc

        if response.is_error:
            snippet = response.text.strip()
            if len(snippet) > _SNIPPET_LIMIT:
                snippet = f"{snippet[:_SNIPPET_LIMIT]}..."
            logger.warning(
                "API responded with error",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "content": snippet,
                },
            )
            raise TransportError(
                f"API error ({response.status_code}) during {method} {url}: {snippet or 'no body provided.'}",
                method=method,
                url=url,
                status_code=response.status_code,
            )

        if not decode:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise _transport_error(
                f"API returned invalid JSON during {method} {url}.",
                exc=exc,
            ) from exc


class ReadCapability:
    """``fetch_all`` and ``get_by_id`` for services built on BaseResourceService."""

    async def fetch_all(self, **request_options: Any) -> Any:
        """GET the whole collection; options such as ``params`` go straight to httpx."""
        try:
            return await self._send("GET", self.build_url(), request_options=request_options)
        except TransportError as exc:
            self.handle_error(exc)
            return None

    async def get_by_id(self, resource_id: ResourceId) -> Any:
        resource_id = _require_id(resource_id)
        try:
            return await self._send("GET", self.build_url(resource_id))
        except TransportError as exc:
            self.handle_error(exc)
            return None


class WriteCapability:
    """``create``, ``update`` and ``remove`` for services built on BaseResourceService."""

    async def create(self, payload: dict[str, Any] | None = None) -> Any:
        """POST a new entity and return the id assigned by the API."""
        url = self.build_url()
        try:
            body = await self._send(
                "POST",
                url,
                request_options={"json": payload if payload is not None else {}},
            )
            return _extract_id(body, "POST", url)
        except TransportError as exc:
            self.handle_error(exc)
            return None

    async def update(self, resource_id: ResourceId, payload: dict[str, Any] | None = None) -> Any:
        """PUT the payload over an existing entity and return the id echoed back."""
        resource_id = _require_id(resource_id)
        url = self.build_url(resource_id)
        try:
            body = await self._send(
                "PUT",
                url,
                request_options={"json": payload if payload is not None else {}},
            )
            return _extract_id(body, "PUT", url)
        except TransportError as exc:
            self.handle_error(exc)
            return None

    async def remove(self, resource_id: ResourceId) -> bool | None:
        resource_id = _require_id(resource_id)
        try:
            await self._send("DELETE", self.build_url(resource_id), decode=False)
        except TransportError as exc:
            self.handle_error(exc)
            return None
        return True


class ReadOnlyResourceService(ReadCapability, BaseResourceService):
    """Service exposing list and get-by-id access."""


class ModelResourceService(ReadCapability, WriteCapability, BaseResourceService):
    """Service exposing full CRUD access."""


@runtime_checkable
class ReadableResource(Protocol):
    def build_url(self, resource_id: ResourceId | None = None) -> str: ...

    async def fetch_all(self, **request_options: Any) -> Any: ...

    async def get_by_id(self, resource_id: ResourceId) -> Any: ...


@runtime_checkable
class WritableResource(ReadableResource, Protocol):
    async def create(self, payload: dict[str, Any] | None = None) -> Any: ...

    async def update(self, resource_id: ResourceId, payload: dict[str, Any] | None = None) -> Any: ...

    async def remove(self, resource_id: ResourceId) -> bool | None: ...
