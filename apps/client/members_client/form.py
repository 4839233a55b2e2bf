from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from members_client.models import Member, format_date_for_input


def today_for_input() -> str:
    return date.today().isoformat()


@dataclass
class MemberForm:
    """Field values of the add/edit form, as the inputs hold them."""

    name: str = ""
    email: str = ""
    membership_type: str = "Basic"
    join_date: str = field(default_factory=today_for_input)
    status: str = "Active"
    error: str = ""

    def reset(self) -> None:
        self.name = ""
        self.email = ""
        self.membership_type = "Basic"
        self.join_date = today_for_input()
        self.status = "Active"
        self.error = ""

    def load(self, member: Member) -> None:
        self.name = member.name
        self.email = member.email
        self.membership_type = member.membership_type or "Basic"
        self.join_date = format_date_for_input(member.join_date)
        self.status = member.status or "Active"
        self.error = ""

    def is_complete(self) -> bool:
        return bool(self.name.strip() and self.email.strip() and self.join_date.strip())

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "membership_type": self.membership_type,
            "join_date": self.join_date,
            "status": self.status,
        }
