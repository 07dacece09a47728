"""Environment-driven configuration utilities for the resource services."""

import os
from dataclasses import dataclass

import httpx
from dotenv import load_dotenv

from resource_api.errors import ERROR_POLICIES, ConfigurationError, ErrorHook

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = 30.0
    error_policy: str = "log"

    def __post_init__(self) -> None:
        if not self.api_base_url or not self.api_base_url.strip():
            raise ConfigurationError("API_BASE_URL must be a non-empty URL.")
        try:
            httpx.URL(self.api_base_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"API_BASE_URL is not a valid URL: {exc!s}") from exc
        if self.api_timeout <= 0:
            raise ConfigurationError("API_TIMEOUT must be greater than zero.")
        if self.error_policy not in ERROR_POLICIES:
            allowed = ", ".join(sorted(ERROR_POLICIES))
            raise ConfigurationError(f"API_ERROR_POLICY must be one of: {allowed}.")

    @property
    def error_hook(self) -> ErrorHook:
        """Hook matching the configured error policy."""
        return ERROR_POLICIES[self.error_policy]

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally. Values are validated on construction.
        """
        load_dotenv()

        api_base_url = os.getenv("API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL
        api_base_url = api_base_url.rstrip("/")

        api_timeout_raw = os.getenv("API_TIMEOUT", "").strip() or "30"
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ConfigurationError("API_TIMEOUT must be a numeric value.") from exc

        error_policy = os.getenv("API_ERROR_POLICY", "").strip().lower() or "log"

        return cls(
            api_base_url=api_base_url,
            api_timeout=api_timeout,
            error_policy=error_policy,
        )
