"""
Stopwatch tools: get, start, stop.
"""

import logging
from datetime import tzinfo
from typing import Optional

from clockodo_mcp.api.client import ClockodoClient
from clockodo_mcp.api.models import ClockStart
from clockodo_mcp.utils.formatting import (
    customer_label,
    format_datetime,
    format_duration,
    format_entry_block,
    service_label,
    text_label,
)
from clockodo_mcp.utils.timeutil import billable_flag


logger = logging.getLogger(__name__)


def get_clock(client: ClockodoClient, tz: Optional[tzinfo]) -> str:
    """Show the running stopwatch, if any."""
    entry = client.get_clock()
    if entry is None:
        return "No stopwatch is running."

    return format_entry_block(f"Running stopwatch (ID: {entry.id}):", [
        f"Started: {format_datetime(entry.time_since, tz)}",
        f"Customer: {customer_label(entry)}",
        f"Service: {service_label(entry)}",
        f"Text: {text_label(entry)}",
    ])


def start_clock(
    client: ClockodoClient,
    customers_id: int,
    services_id: int,
    projects_id: Optional[int] = None,
    text: Optional[str] = None,
    billable: Optional[bool] = None,
) -> str:
    """Start the stopwatch for a customer and service."""
    entry = client.start_clock(ClockStart(
        customers_id=customers_id,
        services_id=services_id,
        projects_id=projects_id,
        billable=billable_flag(billable),
        text=text,
    ))
    logger.info(f"Started stopwatch {entry.id}")

    return format_entry_block(f"Stopwatch started (ID: {entry.id}):", [
        f"Customer: {customer_label(entry)}",
        f"Service: {service_label(entry)}",
        f"Text: {text_label(entry)}",
    ])


def stop_clock(client: ClockodoClient, tz: Optional[tzinfo], entry_id: int) -> str:
    """Stop the running stopwatch entry."""
    result = client.stop_clock(entry_id)
    entry = result.stopped
    logger.info(f"Stopped stopwatch {entry.id}")

    lines = [
        f"{format_datetime(entry.time_since, tz)} - {format_datetime(entry.time_until, tz)}",
        f"Duration: {format_duration(entry.duration)}",
        f"Customer: {customer_label(entry)}",
        f"Text: {text_label(entry)}",
    ]
    if result.running is not None:
        lines.append(f"Still running: ID {result.running.id}")

    return format_entry_block(f"Stopwatch stopped (ID: {entry.id}):", lines)
