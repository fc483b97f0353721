"""
Text rendering of Clockodo resources for tool output.
"""

from datetime import tzinfo
from typing import Iterable, Optional

from clockodo_mcp.api.models import TimeEntry
from clockodo_mcp.utils.timeutil import parse_timestamp


EMPTY = "-"

DISPLAY_FORMAT = "%d.%m.%Y, %H:%M"


def format_duration(seconds: Optional[int]) -> str:
    """Render seconds as '1h 05min'."""
    if seconds is None:
        return EMPTY
    hours, rest = divmod(int(seconds), 3600)
    return f"{hours}h {rest // 60:02d}min"


def format_datetime(value: Optional[str], tz: Optional[tzinfo]) -> str:
    """Render an API timestamp in tz (system zone if None) as '15.03.2024, 09:00'."""
    if not value:
        return EMPTY
    return parse_timestamp(value).astimezone(tz).strftime(DISPLAY_FORMAT)


def customer_label(entry: TimeEntry) -> str:
    return entry.customers_name or str(entry.customers_id)


def project_label(entry: TimeEntry) -> str:
    if entry.projects_name:
        return entry.projects_name
    return str(entry.projects_id) if entry.projects_id else EMPTY


def service_label(entry: TimeEntry) -> str:
    return entry.services_name or str(entry.services_id)


def text_label(entry: TimeEntry) -> str:
    return entry.text or EMPTY


def format_entry_line(entry: TimeEntry, tz: Optional[tzinfo]) -> str:
    """Three-line summary used in entry listings."""
    since = format_datetime(entry.time_since, tz)
    until = format_datetime(entry.time_until, tz)
    return (
        f"ID: {entry.id} | {since} - {until} | {format_duration(entry.duration)}\n"
        f"  Customer: {customer_label(entry)} | "
        f"Project: {project_label(entry)} | "
        f"Service: {service_label(entry)}\n"
        f"  Text: {text_label(entry)} | Billable: {entry.billable.label}"
    )


def format_entry_block(title: str, lines: Iterable[str]) -> str:
    """Title line followed by indented detail lines."""
    return title + "".join(f"\n  {line}" for line in lines)


def format_named_list(title: str, items: list[str], empty_message: str) -> str:
    """'Title (n):' followed by one indented item per line, or empty_message."""
    if not items:
        return empty_message
    return f"{title} ({len(items)}):\n" + "\n".join(f"  {item}" for item in items)
