"""
Clockodo API resources and request parameters.

Resources are transient: parsed from one response, rendered, discarded.
Parameter models serialize through ApiParams.to_params(), which drops
every field left as None so partial updates never overwrite stored values.
"""

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Billable(IntEnum):
    """Billable state of a time entry as encoded by the API."""

    NOT_BILLABLE = 0
    BILLABLE = 1
    ALREADY_BILLED = 2

    @property
    def label(self) -> str:
        return _BILLABLE_LABELS[self]


_BILLABLE_LABELS = {
    Billable.NOT_BILLABLE: "No",
    Billable.BILLABLE: "Yes",
    Billable.ALREADY_BILLED: "Billed",
}


# ============================================================================
# Resources
# ============================================================================

class TimeEntry(BaseModel):
    """Time entry. time_until is None while the stopwatch is running."""

    id: int
    customers_id: int
    projects_id: Optional[int] = None
    services_id: int
    users_id: int
    billable: Billable = Billable.BILLABLE
    text: Optional[str] = None
    time_since: str
    time_until: Optional[str] = None
    duration: Optional[int] = None
    clocked: bool = False
    customers_name: Optional[str] = None
    projects_name: Optional[str] = None
    services_name: Optional[str] = None
    users_name: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self.time_until is None


class Customer(BaseModel):
    id: int
    name: str
    active: bool = True


class Project(BaseModel):
    id: int
    name: str
    customers_id: int
    active: bool = True


class Service(BaseModel):
    id: int
    name: str
    active: bool = True


class User(BaseModel):
    id: int
    name: str
    active: bool = True


class EntryList(BaseModel):
    """Entries of one GET /v2/entries call. Paging is passed through as-is."""

    entries: list[TimeEntry] = Field(default_factory=list)
    paging: Optional[dict[str, Any]] = None


class ClockStop(BaseModel):
    """Result of stopping the stopwatch."""

    stopped: TimeEntry
    running: Optional[TimeEntry] = None


# ============================================================================
# Request parameters
# ============================================================================

class ApiParams(BaseModel):
    """Base for request parameter sets."""

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict[str, Any]:
        """Serialize to wire values, omitting fields that are None."""
        return self.model_dump(mode="json", exclude_none=True)


class EntryFilter(ApiParams):
    time_since: str
    time_until: str
    users_id: Optional[int] = None
    customers_id: Optional[int] = None
    projects_id: Optional[int] = None
    services_id: Optional[int] = None


class NewEntry(ApiParams):
    customers_id: int
    services_id: int
    billable: Billable
    time_since: str
    time_until: str
    projects_id: Optional[int] = None
    text: Optional[str] = None
    users_id: Optional[int] = None


class EntryUpdate(ApiParams):
    customers_id: Optional[int] = None
    services_id: Optional[int] = None
    projects_id: Optional[int] = None
    billable: Optional[Billable] = None
    time_since: Optional[str] = None
    time_until: Optional[str] = None
    text: Optional[str] = None
    duration: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.to_params()


class ClockStart(ApiParams):
    customers_id: int
    services_id: int
    projects_id: Optional[int] = None
    billable: Optional[Billable] = None
    text: Optional[str] = None
