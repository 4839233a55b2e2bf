from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from members_api.core.db import get_db
from members_api.schemas.members import (
    ErrorResponse,
    MemberCreate,
    MemberDeleteResponse,
    MemberResponse,
    MemberUpdate,
)
from members_api.services import members as member_service

router = APIRouter(
    prefix="/api/members",
    tags=["members"],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[MemberResponse])
def list_members(db: Session = Depends(get_db)):
    members = member_service.list_members(db)
    return [MemberResponse.model_validate(item) for item in members]


@router.post(
    "",
    response_model=MemberResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}},
)
def create_member(payload: MemberCreate, db: Session = Depends(get_db)):
    member = member_service.create_member(db, payload)
    return MemberResponse.model_validate(member)


@router.put(
    "/{member_id}",
    response_model=MemberResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_member(member_id: int, payload: MemberUpdate, db: Session = Depends(get_db)):
    member = member_service.update_member(db, member_id, payload.to_patch())
    return MemberResponse.model_validate(member)


@router.delete(
    "/{member_id}",
    response_model=MemberDeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
def delete_member(member_id: int, db: Session = Depends(get_db)):
    member_service.delete_member(db, member_id)
    return MemberDeleteResponse(message="Member deleted successfully")
