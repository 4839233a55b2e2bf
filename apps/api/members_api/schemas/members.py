from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from members_api.models.entities import MembershipTypeEnum, MemberStatusEnum

PATCH_FIELDS = ("name", "email", "membership_type", "join_date", "status")


def normalize_join_date(value: Any) -> Any:
    """Reduce datetimes and ISO timestamps to the calendar date they name.

    The date is taken as written, so ``2024-03-15T23:30:00-05:00`` stays
    ``2024-03-15`` rather than shifting to UTC.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        if len(value) > 10:
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class MemberCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    membership_type: MembershipTypeEnum = MembershipTypeEnum.basic
    join_date: date
    status: MemberStatusEnum = MemberStatusEnum.active

    @field_validator("membership_type", mode="before")
    @classmethod
    def _default_membership_type(cls, value: Any) -> Any:
        return MembershipTypeEnum.basic if _is_blank(value) else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return MemberStatusEnum.active if _is_blank(value) else value

    @field_validator("join_date", mode="before")
    @classmethod
    def _normalize_join_date(cls, value: Any) -> Any:
        return normalize_join_date(value)


class MemberUpdate(BaseModel):
    """Partial update body. Blank or null values count as not supplied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    membership_type: MembershipTypeEnum | None = None
    join_date: date | None = None
    status: MemberStatusEnum | None = None

    @field_validator(*PATCH_FIELDS, mode="before")
    @classmethod
    def _blank_as_missing(cls, value: Any) -> Any:
        return None if _is_blank(value) else value

    @field_validator("join_date", mode="before")
    @classmethod
    def _normalize_join_date(cls, value: Any) -> Any:
        return normalize_join_date(value)

    def to_patch(self) -> dict[str, Any]:
        return {field: value for field, value in self.model_dump().items() if value is not None}


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    membership_type: MembershipTypeEnum
    join_date: date
    status: MemberStatusEnum


class MemberDeleteResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
