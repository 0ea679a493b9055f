"""
Membership API - Member Route Handlers
======================================

What:  CRUD endpoints for club members.
How:   Extracts path/query/body, makes exactly one MemberRepository call,
       returns the result as JSON. Errors are raised as exceptions and
       rendered by the global handlers in main.py.

Routes:
    GET    /members?search=   list (projected to id, name, surname)
    POST   /members           create
    GET    /members/{id}      full record
    PUT    /members/{id}/edit partial update
    DELETE /members/{id}      delete, returns the removed record
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from membership_api.config import Settings, get_settings
from membership_api.database import get_db_session
from membership_api.repositories.members import member_repository
from membership_api.routes.common import (
    NOT_FOUND_RESPONSES,
    SERVER_ERROR_RESPONSES,
    VALIDATION_RESPONSES,
    found_or_404,
)
from membership_api.schemas.member import (
    MemberCreate,
    MemberListItem,
    MemberResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["Members"])


@router.get(
    "",
    response_model=List[MemberListItem],
    responses=SERVER_ERROR_RESPONSES,
    summary="List or search members",
)
async def list_members(
    search: Optional[str] = Query(
        default=None,
        description=(
            "Case-insensitive substring matched against 'name surname' and "
            "'surname name'. Omit or leave empty to list every member."
        ),
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[MemberListItem]:
    return await member_repository.list(db, search=search)


@router.post(
    "",
    response_model=MemberResponse,
    responses={**VALIDATION_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Add a member",
)
async def create_member(
    payload: MemberCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    """
    Store a new member. The id is generated by the server; an `id` sent by
    the client is ignored.
    """
    return await member_repository.create(db, payload)


@router.get(
    "/{member_id}",
    response_model=Optional[MemberResponse],
    responses={**NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Get a member by id",
)
async def get_member(
    member_id: str,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Optional[MemberResponse]:
    member = await member_repository.get(db, member_id)
    return found_or_404(member, "member", member_id, app_settings)


@router.put(
    "/{member_id}/edit",
    response_model=MemberResponse,
    responses={**VALIDATION_RESPONSES, **NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Edit a member",
)
async def update_member(
    member_id: str,
    payload: Dict[str, Any] = Body(
        ...,
        description="Any subset of the member fields (camelCase names, as in MemberUpdate)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    """
    Only the fields present in the body are changed. The body is validated
    by the repository after the member is found, so an unknown id is a 404
    even when the body is invalid.
    """
    return await member_repository.update(db, member_id, payload)


@router.delete(
    "/{member_id}",
    response_model=Optional[MemberResponse],
    responses={**NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Delete a member",
)
async def delete_member(
    member_id: str,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Optional[MemberResponse]:
    """Returns the member as it was before deletion."""
    member = await member_repository.delete(db, member_id)
    return found_or_404(member, "member", member_id, app_settings)
