"""
Resource-scoped CRUD services for a JSON REST API.

Application code talks to the API through the registry returned by
:func:`build_registry`, e.g. ``await registry.users.get_by_id(1)``.
"""

from resource_api.errors import (
    ConfigurationError,
    ResourceServiceError,
    TransportError,
    ValidationError,
    log_error,
    raise_error,
)
from resource_api.registry import ApiRegistry, build_registry
from resource_api.resources import AlbumsService, PostsService, UsersService
from resource_api.services import (
    BaseResourceService,
    ModelResourceService,
    ReadableResource,
    ReadOnlyResourceService,
    ServiceConfig,
    WritableResource,
)
from resource_api.settings import Settings

__all__ = [
    "AlbumsService",
    "ApiRegistry",
    "BaseResourceService",
    "ConfigurationError",
    "ModelResourceService",
    "PostsService",
    "ReadOnlyResourceService",
    "ReadableResource",
    "ResourceServiceError",
    "ServiceConfig",
    "Settings",
    "TransportError",
    "UsersService",
    "ValidationError",
    "WritableResource",
    "build_registry",
    "log_error",
    "raise_error",
]
