"""Error taxonomy and the built-in error hooks for resource services."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ResourceServiceError(RuntimeError):
    """Base class for every error raised by the resource services."""


class ConfigurationError(ResourceServiceError, ValueError):
    """A service or the settings were built with missing or invalid values."""


class ValidationError(ResourceServiceError, ValueError):
    """An operation was called without a required argument."""


class TransportError(ResourceServiceError):
    """Represents failures when communicating with the downstream API."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code


ErrorHook = Callable[[ResourceServiceError], None]


def log_error(err: ResourceServiceError) -> None:
    """Default hook: log the failure and let the call resolve to ``None``."""
    logger.error(
        "Error handled by resource service",
        extra={"err": repr(err), "status_code": getattr(err, "status_code", None)},
    )


def raise_error(err: ResourceServiceError) -> None:
    """Hook for callers that want transport failures to propagate."""
    raise err


ERROR_POLICIES: dict[str, ErrorHook] = {
    "log": log_error,
    "raise": raise_error,
}
