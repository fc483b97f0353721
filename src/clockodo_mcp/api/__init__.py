"""Clockodo REST API client and resource models."""

from clockodo_mcp.api.client import (
    ClockodoAPIError,
    ClockodoClient,
    ConfigurationError,
    handle_api_errors,
)

__all__ = [
    "ClockodoAPIError",
    "ClockodoClient",
    "ConfigurationError",
    "handle_api_errors",
]
