from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from members_api.core.errors import (
    DuplicateEmailError,
    MemberNotFoundError,
    MemberValidationError,
    StorageFaultError,
)
from members_api.models.entities import Member
from members_api.schemas.members import PATCH_FIELDS, MemberCreate

logger = logging.getLogger(__name__)


def _storage_fault(db: Session, message: str, exc: SQLAlchemyError) -> StorageFaultError:
    logger.exception("%s", message)
    db.rollback()
    return StorageFaultError(message, details=str(exc))


def _is_email_conflict(exc: IntegrityError) -> bool:
    # Only the unique email constraint maps to a conflict; NOT NULL and the like are faults.
    message = str(exc.orig).lower()
    return "email" in message and ("unique" in message or "duplicate" in message)


def _duplicate_email(db: Session, message: str, exc: IntegrityError) -> DuplicateEmailError:
    db.rollback()
    logger.info("rejected duplicate email: %s", exc.orig)
    return DuplicateEmailError(message, details=str(exc.orig))


def list_members(db: Session) -> list[Member]:
    try:
        return list(db.execute(select(Member).order_by(func.lower(Member.name).asc(), Member.id.asc())).scalars())
    except SQLAlchemyError as exc:
        raise _storage_fault(db, "Database query failed", exc) from exc


def create_member(db: Session, payload: MemberCreate) -> Member:
    member = Member(
        name=payload.name,
        email=payload.email,
        membership_type=payload.membership_type,
        join_date=payload.join_date,
        status=payload.status,
    )
    try:
        db.add(member)
        db.commit()
        db.refresh(member)
    except IntegrityError as exc:
        if _is_email_conflict(exc):
            raise _duplicate_email(db, "Email already exists.", exc) from exc
        raise _storage_fault(db, "Failed to add member", exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_fault(db, "Failed to add member", exc) from exc
    logger.info("created member id=%s", member.id)
    return member


def update_member(db: Session, member_id: int, patch: dict[str, Any]) -> Member:
    """Apply ``patch`` to one member and return the stored result.

    Only keys present in ``patch`` are written; everything else on the row is
    left as it was.
    """
    values = {field: patch[field] for field in PATCH_FIELDS if field in patch}
    if not values:
        raise MemberValidationError("No update data provided.")

    try:
        result = db.execute(update(Member).where(Member.id == member_id).values(**values))
        if result.rowcount == 0:
            db.rollback()
            raise MemberNotFoundError("Member not found.")
        db.commit()
        member = db.get(Member, member_id)
    except IntegrityError as exc:
        if _is_email_conflict(exc):
            raise _duplicate_email(db, "Email already exists for another member.", exc) from exc
        raise _storage_fault(db, "Failed to update member", exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_fault(db, "Failed to update member", exc) from exc

    if member is None:
        # Deleted between the update and the read-back.
        raise MemberNotFoundError("Member not found.")
    logger.info("updated member id=%s fields=%s", member_id, sorted(values))
    return member


def delete_member(db: Session, member_id: int) -> None:
    try:
        member = db.get(Member, member_id)
        if member is None:
            raise MemberNotFoundError("Member not found.")
        db.delete(member)
        db.commit()
    except SQLAlchemyError as exc:
        raise _storage_fault(db, "Failed to delete member", exc) from exc
    logger.info("deleted member id=%s", member_id)
