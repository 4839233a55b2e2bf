from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, field_validator

MEMBERSHIP_TYPES = ("Basic", "Premium", "VIP", "Family")
STATUSES = ("Active", "Inactive", "Expired")


def format_date_for_input(value: date | datetime | str | None) -> str:
    """Render a date the way a date input expects it: ``YYYY-MM-DD``.

    Timestamps keep the calendar date they were written with. Unparseable
    values render as an empty string.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        if len(value) > 10:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
        return date.fromisoformat(value).isoformat()
    except ValueError:
        return ""


class Member(BaseModel):
    id: int
    name: str
    email: str
    membership_type: str = "Basic"
    join_date: date
    status: str = "Active"

    @field_validator("join_date", mode="before")
    @classmethod
    def _plain_date(cls, value: Any) -> Any:
        if isinstance(value, (str, datetime)):
            return format_date_for_input(value) or value
        return value

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.name.lower(), self.id)
