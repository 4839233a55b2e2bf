"""members table

Revision ID: 0001_members
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_members"
down_revision = None
branch_labels = None
depends_on = None


membership_type_enum = postgresql.ENUM(
    "Basic", "Premium", "VIP", "Family", name="membershiptypeenum", create_type=False
)
member_status_enum = postgresql.ENUM("Active", "Inactive", "Expired", name="memberstatusenum", create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    membership_type_enum.create(bind, checkfirst=True)
    member_status_enum.create(bind, checkfirst=True)

    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("membership_type", membership_type_enum, nullable=False, server_default="Basic"),
        sa.Column("join_date", sa.Date(), nullable=False),
        sa.Column("status", member_status_enum, nullable=False, server_default="Active"),
        sa.UniqueConstraint("email", name="uq_members_email"),
    )
    op.create_index("ix_members_name", "members", ["name"])


def downgrade() -> None:
    op.drop_index("ix_members_name", table_name="members")
    op.drop_table("members")
    bind = op.get_bind()
    member_status_enum.drop(bind, checkfirst=True)
    membership_type_enum.drop(bind, checkfirst=True)
