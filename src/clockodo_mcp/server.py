"""
Clockodo MCP Server.

FastMCP server exposing Clockodo time tracking tools.
Supports both stdio (local) and HTTP (cloud) transport modes.

Tools (11 total):
- entries: clockodo_list_entries, clockodo_create_entry, clockodo_edit_entry, clockodo_delete_entry
- reference: clockodo_list_customers, clockodo_list_projects, clockodo_list_services, clockodo_list_users
- clock: clockodo_get_clock, clockodo_start_clock, clockodo_stop_clock
"""

import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from clockodo_mcp.api.client import ClockodoClient, handle_api_errors
from clockodo_mcp.settings import Settings, settings
from clockodo_mcp.tools import clock, entries, reference


logger = logging.getLogger(__name__)


INSTRUCTIONS = """Clockodo time tracking.

IDS FIRST:
Entries and stopwatches need numeric ids. Look them up before creating anything:
- clockodo_list_customers -> customers_id
- clockodo_list_services -> services_id
- clockodo_list_projects (customer_id=...) -> projects_id
- clockodo_list_users -> users_id (only to book for another user)

ENTRIES:
- clockodo_list_entries: date_from/date_to (default today)
- clockodo_create_entry: date + time_from/time_until in local time
- clockodo_edit_entry: only the given fields change; times need a date
- clockodo_delete_entry: permanent

STOPWATCH:
- clockodo_get_clock: running entry and its id
- clockodo_start_clock / clockodo_stop_clock (entry_id from clockodo_get_clock)

FORMATS: date 'YYYY-MM-DD', time 'HH:MM' (24h, local time). billable defaults to true."""


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{1,2}:\d{2}$"

CustomerId = Annotated[int, Field(description="Customer ID (see clockodo_list_customers)")]
ServiceId = Annotated[int, Field(description="Service ID (see clockodo_list_services)")]
EntryId = Annotated[int, Field(description="Time entry ID")]
OptionalProjectId = Annotated[
    Optional[int], Field(description="Project ID (optional, see clockodo_list_projects)")
]
OptionalText = Annotated[Optional[str], Field(description="Description/comment (optional)")]
OptionalBillable = Annotated[Optional[bool], Field(description="Billable? (default: true)")]


def create_server(
    client: Optional[ClockodoClient] = None,
    config: Optional[Settings] = None,
) -> FastMCP:
    """
    Create the FastMCP server with all Clockodo tools registered.

    Args:
        client: Shared API client. Built from config if not given, which
            raises ConfigurationError when credentials are missing.
            An unknown CLOCKODO_TIMEZONE raises ConfigurationError too.
        config: Settings to use (defaults to the global settings)
    """
    config = config or settings
    tz = config.get_tzinfo()
    if client is None:
        client = ClockodoClient.from_settings(config)

    mcp = FastMCP(name="clockodo", instructions=INSTRUCTIONS)

    # ========== Entries ==========

    @mcp.tool()
    @handle_api_errors
    def clockodo_list_entries(
        date_from: Annotated[
            Optional[str],
            Field(description="Start date YYYY-MM-DD (default: today)", pattern=DATE_PATTERN),
        ] = None,
        date_to: Annotated[
            Optional[str],
            Field(description="End date YYYY-MM-DD, inclusive (default: today)", pattern=DATE_PATTERN),
        ] = None,
        users_id: Annotated[Optional[int], Field(description="Only entries of this user")] = None,
        customers_id: Annotated[Optional[int], Field(description="Only entries of this customer")] = None,
        projects_id: Annotated[Optional[int], Field(description="Only entries of this project")] = None,
        services_id: Annotated[Optional[int], Field(description="Only entries of this service")] = None,
    ) -> str:
        """List time entries for a date range. Shows today's entries by default."""
        return entries.list_entries(
            client, tz,
            date_from=date_from,
            date_to=date_to,
            users_id=users_id,
            customers_id=customers_id,
            projects_id=projects_id,
            services_id=services_id,
        )

    @mcp.tool()
    @handle_api_errors
    def clockodo_create_entry(
        customers_id: CustomerId,
        services_id: ServiceId,
        date: Annotated[str, Field(description="Date YYYY-MM-DD", pattern=DATE_PATTERN)],
        time_from: Annotated[str, Field(description="Start time HH:MM (e.g. 09:00)", pattern=TIME_PATTERN)],
        time_until: Annotated[str, Field(description="End time HH:MM (e.g. 17:00)", pattern=TIME_PATTERN)],
        projects_id: OptionalProjectId = None,
        text: OptionalText = None,
        billable: OptionalBillable = None,
        users_id: Annotated[
            Optional[int], Field(description="Book for this user instead of yourself (optional)")
        ] = None,
    ) -> str:
        """Create a time entry with customer, service, date and start/end time."""
        return entries.create_entry(
            client, tz,
            customers_id=customers_id,
            services_id=services_id,
            date=date,
            time_from=time_from,
            time_until=time_until,
            projects_id=projects_id,
            text=text,
            billable=billable,
            users_id=users_id,
        )

    @mcp.tool()
    @handle_api_errors
    def clockodo_edit_entry(
        entry_id: EntryId,
        customers_id: Annotated[Optional[int], Field(description="New customer ID")] = None,
        services_id: Annotated[Optional[int], Field(description="New service ID")] = None,
        projects_id: Annotated[Optional[int], Field(description="New project ID")] = None,
        date: Annotated[
            Optional[str],
            Field(description="Date for the new start/end time (YYYY-MM-DD)", pattern=DATE_PATTERN),
        ] = None,
        time_from: Annotated[
            Optional[str], Field(description="New start time (HH:MM)", pattern=TIME_PATTERN)
        ] = None,
        time_until: Annotated[
            Optional[str], Field(description="New end time (HH:MM)", pattern=TIME_PATTERN)
        ] = None,
        text: Annotated[Optional[str], Field(description="New description/comment")] = None,
        billable: Annotated[Optional[bool], Field(description="Billable?")] = None,
    ) -> str:
        """Edit an existing time entry. Only the given fields are changed."""
        return entries.edit_entry(
            client, tz, entry_id,
            customers_id=customers_id,
            services_id=services_id,
            projects_id=projects_id,
            date=date,
            time_from=time_from,
            time_until=time_until,
            text=text,
            billable=billable,
        )

    @mcp.tool()
    @handle_api_errors
    def clockodo_delete_entry(
        entry_id: Annotated[int, Field(description="ID of the time entry to delete")],
    ) -> str:
        """Delete a time entry. This cannot be undone."""
        return entries.delete_entry(client, entry_id)

    # ========== Reference data ==========

    @mcp.tool()
    @handle_api_errors
    def clockodo_list_customers() -> str:
        """List all active customers with ID and name. Use it to find customers_id for other tools."""
        return reference.list_customers(client)

    @mcp.tool()
    @handle_api_errors
    def clockodo_list_projects(
        customer_id: Annotated[Optional[int], Field(description="Only projects of this customer (optional)")] = None,
    ) -> str:
        """List all active projects with ID, name and customer. Optionally filtered by customer."""
        return reference.list_projects(client, customer_id)

    @mcp.tool()
    @handle_api_errors
    def clockodo_list_services() -> str:
        """List all active services with ID and name. Use it to find services_id for other tools."""
        return reference.list_services(client)

    @mcp.tool()
    @handle_api_errors
    def clockodo_list_users() -> str:
        """List all active users with ID and name. Use it to find users_id for other tools."""
        return reference.list_users(client)

    # ========== Stopwatch ==========

    @mcp.tool()
    @handle_api_errors
    def clockodo_get_clock() -> str:
        """Show whether a stopwatch is running and which entry it is."""
        return clock.get_clock(client, tz)

    @mcp.tool()
    @handle_api_errors
    def clockodo_start_clock(
        customers_id: CustomerId,
        services_id: ServiceId,
        projects_id: OptionalProjectId = None,
        text: OptionalText = None,
        billable: OptionalBillable = None,
    ) -> str:
        """Start the stopwatch for a customer and service."""
        return clock.start_clock(
            client,
            customers_id=customers_id,
            services_id=services_id,
            projects_id=projects_id,
            text=text,
            billable=billable,
        )

    @mcp.tool()
    @handle_api_errors
    def clockodo_stop_clock(
        entry_id: Annotated[int, Field(description="ID of the running entry (from clockodo_get_clock)")],
    ) -> str:
        """Stop the running stopwatch. Get the entry ID from clockodo_get_clock."""
        return clock.stop_clock(client, tz, entry_id)

    return mcp


def create_http_app(mcp: FastMCP, config: Optional[Settings] = None):
    """
    Create FastAPI app for HTTP transport mode.

    Includes:
    - API key authentication middleware (if server_api_key is set)
    - Health check
    - MCP endpoints under /clockodo
    """
    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse

    config = config or settings

    # Get MCP app first to access its lifespan
    mcp_app = mcp.http_app()

    app = FastAPI(
        title="Clockodo MCP",
        description="MCP server for Clockodo time tracking",
        version="1.0.0",
        lifespan=mcp_app.lifespan,  # Required for FastMCP session management
    )

    @app.middleware("http")
    async def check_auth(request: Request, call_next):
        if request.url.path == "/health" or not config.server_api_key:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            api_key = auth_header[7:]

        if api_key == config.server_api_key:
            return await call_next(request)

        return JSONResponse(
            {"error": "Unauthorized", "message": "Invalid or missing API key"},
            status_code=401,
        )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "transport": "http", "service": "clockodo-mcp"}

    app.mount("/clockodo", mcp_app)

    return app


def configure_logging(config: Settings) -> None:
    """Log to stderr; stdout carries the stdio MCP stream."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def serve(config: Optional[Settings] = None) -> None:
    """Run MCP server with configured transport."""
    config = config or settings
    configure_logging(config)

    mcp = create_server(config=config)
    logger.info(f"Starting Clockodo MCP server ({config.transport_mode})")

    if config.transport_mode == "http":
        import uvicorn

        app = create_http_app(mcp, config)
        uvicorn.run(
            app,
            host=config.http_host,
            port=config.http_port,
            log_level=config.log_level.lower(),
        )
    else:
        mcp.run()


if __name__ == "__main__":
    serve()
