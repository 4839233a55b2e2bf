from datetime import date
from enum import Enum

from sqlalchemy import Date, Enum as SqlEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from members_api.models.base import Base


class MembershipTypeEnum(str, Enum):
    basic = "Basic"
    premium = "Premium"
    vip = "VIP"
    family = "Family"


class MemberStatusEnum(str, Enum):
    active = "Active"
    inactive = "Inactive"
    expired = "Expired"


membership_type_sql_enum = SqlEnum(
    MembershipTypeEnum,
    name="membershiptypeenum",
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)
member_status_sql_enum = SqlEnum(
    MemberStatusEnum,
    name="memberstatusenum",
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    membership_type: Mapped[MembershipTypeEnum] = mapped_column(
        membership_type_sql_enum, nullable=False, default=MembershipTypeEnum.basic
    )
    join_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[MemberStatusEnum] = mapped_column(
        member_status_sql_enum, nullable=False, default=MemberStatusEnum.active
    )
