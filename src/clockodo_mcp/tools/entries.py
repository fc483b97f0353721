"""
Time entry tools: list, create, edit, delete.
"""

import logging
from datetime import tzinfo
from typing import Optional

from clockodo_mcp.api.client import ClockodoClient
from clockodo_mcp.api.models import EntryFilter, EntryUpdate, NewEntry
from clockodo_mcp.utils.formatting import (
    customer_label,
    format_datetime,
    format_entry_block,
    format_entry_line,
    service_label,
    text_label,
)
from clockodo_mcp.utils.timeutil import billable_flag, day_range, to_utc


logger = logging.getLogger(__name__)


def list_entries(
    client: ClockodoClient,
    tz: Optional[tzinfo],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    users_id: Optional[int] = None,
    customers_id: Optional[int] = None,
    projects_id: Optional[int] = None,
    services_id: Optional[int] = None,
) -> str:
    """
    List time entries between two local dates (inclusive).

    Missing dates default to today.
    """
    date_from, date_to, time_since, time_until = day_range(date_from, date_to, tz)

    result = client.list_entries(EntryFilter(
        time_since=time_since,
        time_until=time_until,
        users_id=users_id,
        customers_id=customers_id,
        projects_id=projects_id,
        services_id=services_id,
    ))

    if not result.entries:
        return f"No time entries found for {date_from} to {date_to}."

    lines = [format_entry_line(e, tz) for e in result.entries]
    return f"Time entries ({date_from} to {date_to}):\n\n" + "\n\n".join(lines)


def create_entry(
    client: ClockodoClient,
    tz: Optional[tzinfo],
    customers_id: int,
    services_id: int,
    date: str,
    time_from: str,
    time_until: str,
    projects_id: Optional[int] = None,
    text: Optional[str] = None,
    billable: Optional[bool] = None,
    users_id: Optional[int] = None,
) -> str:
    """Create a time entry for one local date between two times of day."""
    entry = client.create_entry(NewEntry(
        customers_id=customers_id,
        services_id=services_id,
        billable=billable_flag(billable),
        time_since=to_utc(date, time_from, tz),
        time_until=to_utc(date, time_until, tz),
        projects_id=projects_id,
        text=text,
        users_id=users_id,
    ))
    logger.info(f"Created time entry {entry.id}")

    return format_entry_block(f"Time entry created (ID: {entry.id}):", [
        f"Date: {date} | {time_from} - {time_until}",
        f"Customer: {customer_label(entry)}",
        f"Service: {service_label(entry)}",
        f"Text: {text_label(entry)}",
    ])


def build_entry_update(
    tz: Optional[tzinfo],
    customers_id: Optional[int] = None,
    services_id: Optional[int] = None,
    projects_id: Optional[int] = None,
    date: Optional[str] = None,
    time_from: Optional[str] = None,
    time_until: Optional[str] = None,
    text: Optional[str] = None,
    billable: Optional[bool] = None,
) -> EntryUpdate:
    """
    Collect the fields supplied for a partial update.

    Times of day need a date and a date needs at least one time.

    Raises:
        ValueError: Incomplete date/time pair or nothing to change
    """
    if (time_from or time_until) and not date:
        raise ValueError("date is required when changing time_from or time_until")
    if date and not (time_from or time_until):
        raise ValueError("time_from or time_until is required when changing date")

    changes = EntryUpdate(
        customers_id=customers_id,
        services_id=services_id,
        projects_id=projects_id,
        text=text,
        billable=billable_flag(billable) if billable is not None else None,
        time_since=to_utc(date, time_from, tz) if time_from else None,
        time_until=to_utc(date, time_until, tz) if time_until else None,
    )
    if changes.is_empty():
        raise ValueError("No fields to update")
    return changes


def edit_entry(
    client: ClockodoClient,
    tz: Optional[tzinfo],
    entry_id: int,
    **fields,
) -> str:
    """Change only the supplied fields of an existing time entry."""
    changes = build_entry_update(tz, **fields)
    entry = client.edit_entry(entry_id, changes)
    logger.info(f"Updated time entry {entry.id}: {sorted(changes.to_params())}")

    return format_entry_block(f"Time entry {entry.id} updated:", [
        f"{format_datetime(entry.time_since, tz)} - {format_datetime(entry.time_until, tz)}",
        f"Customer: {customer_label(entry)}",
        f"Text: {text_label(entry)}",
    ])


def delete_entry(client: ClockodoClient, entry_id: int) -> str:
    """Delete a time entry permanently."""
    client.delete_entry(entry_id)
    logger.info(f"Deleted time entry {entry_id}")
    return f"Time entry {entry_id} deleted."
