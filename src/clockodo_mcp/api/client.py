"""
Clockodo API client.

Handles:
- Credential headers on every request
- Query/body serialization per HTTP verb (None values are never sent)
- JSON response parsing into resource models
- Non-success responses as ClockodoAPIError
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

import httpx
from fastmcp.exceptions import ToolError

from clockodo_mcp.api.models import (
    ClockStart,
    ClockStop,
    Customer,
    EntryFilter,
    EntryList,
    EntryUpdate,
    NewEntry,
    Project,
    Service,
    TimeEntry,
    User,
)
from clockodo_mcp.settings import (
    ConfigurationError,
    DEFAULT_BASE_URL,
    DEFAULT_EXTERNAL_APPLICATION,
    Settings,
)


logger = logging.getLogger(__name__)


# ============================================================================
# Exceptions
# ============================================================================

class ClockodoAPIError(Exception):
    """Clockodo answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Clockodo API error {status_code}: {body}")


# ============================================================================
# Decorator for MCP Tools
# ============================================================================

def handle_api_errors(func: Callable) -> Callable:
    """
    Decorator turning API and input errors into MCP tool errors.

    The host agent receives an error result with the original message
    (status code and response body for API errors) instead of text output.

    Supports both sync and async functions.
    """
    handled = (ClockodoAPIError, httpx.HTTPError, ValueError)

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except handled as e:
                logger.warning(f"{func.__name__} failed: {e}")
                raise ToolError(str(e)) from e
        return async_wrapper
    else:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except handled as e:
                logger.warning(f"{func.__name__} failed: {e}")
                raise ToolError(str(e)) from e
        return wrapper


# ============================================================================
# Client
# ============================================================================

def _query_value(value: Any) -> str:
    """Convert a query parameter to its string form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ClockodoClient:
    """
    Authenticated client for the Clockodo REST API (v2).

    One instance is created at startup and shared by all tools.
    It holds no state between calls besides credentials and the
    underlying connection pool.
    """

    def __init__(
        self,
        api_user: Optional[str],
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        external_application: str = DEFAULT_EXTERNAL_APPLICATION,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not api_user or not api_key:
            raise ConfigurationError(
                "CLOCKODO_API_USER and CLOCKODO_API_KEY must be set. "
                "Export them or add them to a .env file in the working directory."
            )

        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "X-ClockodoApiUser": api_user,
                "X-ClockodoApiKey": api_key,
                "X-Clockodo-External-Application": external_application,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "ClockodoClient":
        """Create client from application settings."""
        return cls(
            api_user=settings.api_user,
            api_key=settings.api_key,
            base_url=settings.base_url,
            external_application=settings.external_application,
            timeout=settings.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ClockodoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> dict:
        """
        Send one request and return the decoded JSON body.

        GET parameters go to the query string, POST/PUT parameters to a
        JSON body. None values are dropped in both cases.

        Raises:
            ClockodoAPIError: Response status is not 2xx
            httpx.HTTPError: Network or protocol failure
        """
        method = method.upper()
        present = {k: v for k, v in (params or {}).items() if v is not None}

        kwargs: dict[str, Any] = {}
        if method == "GET" and present:
            kwargs["params"] = {k: _query_value(v) for k, v in present.items()}
        elif method in ("POST", "PUT") and params is not None:
            kwargs["json"] = present

        logger.debug(f"{method} {path}")
        response = self._http.request(method, path, **kwargs)

        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise ClockodoAPIError(response.status_code, response.text)

        return response.json()

    # --- Entries ---

    def list_entries(self, query: EntryFilter) -> EntryList:
        data = self.request("GET", "/v2/entries", query.to_params())
        return EntryList.model_validate(data)

    def create_entry(self, entry: NewEntry) -> TimeEntry:
        data = self.request("POST", "/v2/entries", entry.to_params())
        return TimeEntry.model_validate(data["entry"])

    def edit_entry(self, entry_id: int, changes: EntryUpdate) -> TimeEntry:
        data = self.request("PUT", f"/v2/entries/{entry_id}", changes.to_params())
        return TimeEntry.model_validate(data["entry"])

    def delete_entry(self, entry_id: int) -> bool:
        data = self.request("DELETE", f"/v2/entries/{entry_id}")
        return bool(data.get("success", False))

    # --- Reference data ---

    def list_users(self) -> list[User]:
        data = self.request("GET", "/v2/users")
        return [User.model_validate(u) for u in data.get("users", [])]

    def list_customers(self) -> list[Customer]:
        data = self.request("GET", "/v2/customers")
        return [Customer.model_validate(c) for c in data.get("customers", [])]

    def list_projects(self, customers_id: Optional[int] = None) -> list[Project]:
        data = self.request("GET", "/v2/projects", {"customers_id": customers_id})
        return [Project.model_validate(p) for p in data.get("projects", [])]

    def list_services(self) -> list[Service]:
        data = self.request("GET", "/v2/services")
        return [Service.model_validate(s) for s in data.get("services", [])]

    # --- Clock ---

    def get_clock(self) -> Optional[TimeEntry]:
        data = self.request("GET", "/v2/clock")
        running = data.get("running")
        return TimeEntry.model_validate(running) if running else None

    def start_clock(self, clock: ClockStart) -> TimeEntry:
        data = self.request("POST", "/v2/clock", clock.to_params())
        return TimeEntry.model_validate(data["running"])

    def stop_clock(self, entry_id: int) -> ClockStop:
        data = self.request("DELETE", f"/v2/clock/{entry_id}")
        return ClockStop.model_validate(data)
