"""
Reference data tools: customers, projects, services, users.

Only active records are listed; filtering happens after the fetch.
"""

from typing import Optional

from clockodo_mcp.api.client import ClockodoClient
from clockodo_mcp.utils.formatting import format_named_list


def list_customers(client: ClockodoClient) -> str:
    active = [c for c in client.list_customers() if c.active]
    return format_named_list(
        "Customers",
        [f"{c.id}: {c.name}" for c in active],
        "No active customers found.",
    )


def list_projects(client: ClockodoClient, customer_id: Optional[int] = None) -> str:
    active = [p for p in client.list_projects(customer_id) if p.active]
    return format_named_list(
        "Projects",
        [f"{p.id}: {p.name} (Customer: {p.customers_id})" for p in active],
        "No active projects found.",
    )


def list_services(client: ClockodoClient) -> str:
    active = [s for s in client.list_services() if s.active]
    return format_named_list(
        "Services",
        [f"{s.id}: {s.name}" for s in active],
        "No active services found.",
    )


def list_users(client: ClockodoClient) -> str:
    active = [u for u in client.list_users() if u.active]
    return format_named_list(
        "Users",
        [f"{u.id}: {u.name}" for u in active],
        "No active users found.",
    )
