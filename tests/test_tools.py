"""
Tests for tool functions against the fake API.
"""

from unittest.mock import patch

import pytest

from clockodo_mcp.tools import clock, entries, reference
from conftest import CET, make_entry


class TestListEntries:

    def test_empty_day(self, client, fake_api):
        fake_api.add("GET", "/v2/entries", {"entries": [], "paging": {}})

        with patch("clockodo_mcp.utils.timeutil.today", return_value="2024-03-15"):
            text = entries.list_entries(client, CET)

        assert text == "No time entries found for 2024-03-15 to 2024-03-15."
        assert dict(fake_api.last.url.params) == {
            "time_since": "2024-03-14T23:00:00Z",
            "time_until": "2024-03-15T22:59:59Z",
        }

    def test_lists_entries(self, client, fake_api):
        fake_api.add("GET", "/v2/entries", {"entries": [make_entry(), make_entry(id=43)]})

        text = entries.list_entries(client, CET, "2024-03-15", "2024-03-15", users_id=3)

        assert text.startswith("Time entries (2024-03-15 to 2024-03-15):\n\nID: 42 |")
        assert "\n\nID: 43 |" in text
        assert fake_api.last.url.params["users_id"] == "3"

    def test_invalid_date_rejected_before_request(self, client, fake_api):
        with pytest.raises(ValueError):
            entries.list_entries(client, CET, date_from="yesterday")
        assert fake_api.requests == []


class TestCreateEntry:

    def test_create(self, client, fake_api):
        fake_api.add("POST", "/v2/entries", {"entry": make_entry()})

        text = entries.create_entry(
            client, CET,
            customers_id=1, services_id=7,
            date="2024-03-15", time_from="09:00", time_until="10:30",
            text="Code review",
        )

        assert fake_api.body() == {
            "customers_id": 1,
            "services_id": 7,
            "billable": 1,
            "time_since": "2024-03-15T08:00:00Z",
            "time_until": "2024-03-15T09:30:00Z",
            "text": "Code review",
        }
        assert text == (
            "Time entry created (ID: 42):\n"
            "  Date: 2024-03-15 | 09:00 - 10:30\n"
            "  Customer: ACME GmbH\n"
            "  Service: Development\n"
            "  Text: Code review"
        )

    def test_not_billable(self, client, fake_api):
        fake_api.add("POST", "/v2/entries", {"entry": make_entry(billable=0)})

        entries.create_entry(
            client, CET,
            customers_id=1, services_id=7,
            date="2024-03-15", time_from="09:00", time_until="10:30",
            billable=False, users_id=8,
        )

        assert fake_api.body()["billable"] == 0
        assert fake_api.body()["users_id"] == 8


class TestEditEntry:

    def test_only_supplied_fields(self, client, fake_api):
        fake_api.add("PUT", "/v2/entries/42", {"entry": make_entry(text="Updated")})

        text = entries.edit_entry(client, CET, 42, text="Updated")

        assert fake_api.body() == {"text": "Updated"}
        assert text.startswith("Time entry 42 updated:\n  15.03.2024, 09:00 - 15.03.2024, 10:30")

    def test_time_change_uses_same_conversion(self, client, fake_api):
        fake_api.add("PUT", "/v2/entries/42", {"entry": make_entry()})

        entries.edit_entry(client, CET, 42, date="2024-03-15", time_from="09:00")

        assert fake_api.body() == {"time_since": "2024-03-15T08:00:00Z"}

    def test_billable_false_sent_as_zero(self, client, fake_api):
        fake_api.add("PUT", "/v2/entries/42", {"entry": make_entry(billable=0)})

        entries.edit_entry(client, CET, 42, billable=False)

        assert fake_api.body() == {"billable": 0}

    @pytest.mark.parametrize("fields,match", [
        ({"time_from": "09:00"}, "date is required"),
        ({"date": "2024-03-15"}, "time_from or time_until is required"),
        ({}, "No fields to update"),
    ])
    def test_rejected_before_request(self, client, fake_api, fields, match):
        with pytest.raises(ValueError, match=match):
            entries.edit_entry(client, CET, 42, **fields)
        assert fake_api.requests == []


def test_delete_entry(client, fake_api):
    fake_api.add("DELETE", "/v2/entries/42", {"success": True})
    assert entries.delete_entry(client, 42) == "Time entry 42 deleted."


class TestReference:

    def test_only_active_customers(self, client, fake_api):
        fake_api.add("GET", "/v2/customers", {"customers": [
            {"id": 1, "name": "ACME GmbH", "active": True},
            {"id": 2, "name": "Old Corp", "active": False},
        ]})

        assert reference.list_customers(client) == "Customers (1):\n  1: ACME GmbH"

    @pytest.mark.parametrize("tool,path,key,message", [
        (reference.list_customers, "/v2/customers", "customers", "No active customers found."),
        (reference.list_services, "/v2/services", "services", "No active services found."),
        (reference.list_users, "/v2/users", "users", "No active users found."),
    ])
    def test_all_inactive(self, client, fake_api, tool, path, key, message):
        fake_api.add("GET", path, {key: [{"id": 1, "name": "Gone", "active": False}]})
        assert tool(client) == message

    def test_projects_all_inactive(self, client, fake_api):
        fake_api.add("GET", "/v2/projects", {"projects": [
            {"id": 1, "name": "Gone", "customers_id": 1, "active": False},
        ]})
        assert reference.list_projects(client) == "No active projects found."

    def test_projects_by_customer(self, client, fake_api):
        fake_api.add("GET", "/v2/projects", {"projects": [
            {"id": 5, "name": "Relaunch", "customers_id": 1, "active": True},
        ]})

        text = reference.list_projects(client, customer_id=1)

        assert text == "Projects (1):\n  5: Relaunch (Customer: 1)"
        assert fake_api.last.url.params["customers_id"] == "1"

    def test_services(self, client, fake_api):
        fake_api.add("GET", "/v2/services", {"services": [
            {"id": 7, "name": "Development", "active": True},
        ]})
        assert reference.list_services(client) == "Services (1):\n  7: Development"


class TestClock:

    def test_nothing_running(self, client, fake_api):
        fake_api.add("GET", "/v2/clock", {"running": None})
        assert clock.get_clock(client, CET) == "No stopwatch is running."

    def test_running(self, client, fake_api):
        fake_api.add("GET", "/v2/clock", {"running": make_entry(time_until=None, duration=None)})

        text = clock.get_clock(client, CET)

        assert text.startswith("Running stopwatch (ID: 42):\n  Started: 15.03.2024, 09:00")

    def test_start_defaults_billable(self, client, fake_api):
        fake_api.add("POST", "/v2/clock", {"running": make_entry(time_until=None, duration=None)})

        text = clock.start_clock(client, customers_id=1, services_id=7)

        assert fake_api.body() == {"customers_id": 1, "services_id": 7, "billable": 1}
        assert text.startswith("Stopwatch started (ID: 42):")

    def test_stop_shows_next_running(self, client, fake_api):
        fake_api.add("DELETE", "/v2/clock/42", {
            "stopped": make_entry(),
            "running": make_entry(id=50, time_until=None, duration=None),
        })

        text = clock.stop_clock(client, CET, 42)

        assert "Duration: 1h 30min" in text
        assert text.endswith("Still running: ID 50")
