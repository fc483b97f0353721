"""
Application settings with environment variable support.

All settings can be overridden via CLOCKODO_* environment variables
or a local .env file in the working directory.
"""

from datetime import tzinfo
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://my.clockodo.com/api"
DEFAULT_EXTERNAL_APPLICATION = "ClockodoMCP;support@rconsult.biz"


class ConfigurationError(ValueError):
    """Required configuration is missing or invalid."""
    pass


class Settings(BaseSettings):
    """Clockodo MCP configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CLOCKODO_",
        env_file=".env",
        extra="ignore",
    )

    # Clockodo credentials (both required to start the server)
    api_user: Optional[str] = None
    api_key: Optional[str] = None

    # Remote API
    base_url: str = DEFAULT_BASE_URL
    external_application: str = DEFAULT_EXTERNAL_APPLICATION
    timeout: float = 30.0

    # IANA timezone for date/time input and display, system local if unset
    timezone: Optional[str] = None

    # Transport mode
    transport_mode: Literal["stdio", "http"] = "stdio"
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    # API key protecting the HTTP transport (open if unset)
    server_api_key: Optional[str] = None

    log_level: str = "INFO"

    def get_tzinfo(self) -> Optional[tzinfo]:
        """
        Get timezone used to interpret dates and times entered by the user.

        Returns None when unset, meaning the system zone with its DST rules.

        Raises:
            ConfigurationError: CLOCKODO_TIMEZONE is not a known IANA zone
        """
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigurationError(
                f"CLOCKODO_TIMEZONE '{self.timezone}' is not a known timezone. "
                "Use an IANA name such as 'Europe/Berlin' or leave it unset."
            )

    def has_credentials(self) -> bool:
        """Check whether both Clockodo credentials are configured."""
        return bool(self.api_user and self.api_key)


# Global settings instance
settings = Settings()
