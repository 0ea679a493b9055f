"""
Membership API - Course Route Handlers
======================================

Routes:
    GET    /courses?search=   list (id, title, instructorName, instructorSurname)
    POST   /courses           create
    GET    /courses/{id}      full record
    PUT    /courses/{id}/edit partial update
    DELETE /courses/{id}      delete, returns the removed record
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from membership_api.config import Settings, get_settings
from membership_api.database import get_db_session
from membership_api.repositories.courses import course_repository
from membership_api.routes.common import (
    NOT_FOUND_RESPONSES,
    SERVER_ERROR_RESPONSES,
    VALIDATION_RESPONSES,
    found_or_404,
)
from membership_api.schemas.course import (
    CourseCreate,
    CourseListItem,
    CourseResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "",
    response_model=List[CourseListItem],
    responses=SERVER_ERROR_RESPONSES,
    summary="List or search courses",
)
async def list_courses(
    search: Optional[str] = Query(
        default=None,
        description=(
            "Case-insensitive substring matched against "
            "'title instructorName instructorSurname' and "
            "'instructorName instructorSurname title'."
        ),
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[CourseListItem]:
    return await course_repository.list(db, search=search)


@router.post(
    "",
    response_model=CourseResponse,
    responses={**VALIDATION_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Add a course",
)
async def create_course(
    payload: CourseCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CourseResponse:
    return await course_repository.create(db, payload)


@router.get(
    "/{course_id}",
    response_model=Optional[CourseResponse],
    responses={**NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Get a course by id",
)
async def get_course(
    course_id: str,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Optional[CourseResponse]:
    course = await course_repository.get(db, course_id)
    return found_or_404(course, "course", course_id, app_settings)


@router.put(
    "/{course_id}/edit",
    response_model=CourseResponse,
    responses={**VALIDATION_RESPONSES, **NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Edit a course",
)
async def update_course(
    course_id: str,
    payload: Dict[str, Any] = Body(
        ...,
        description="Any subset of the course fields (camelCase names, as in CourseUpdate)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> CourseResponse:
    return await course_repository.update(db, course_id, payload)


@router.delete(
    "/{course_id}",
    response_model=Optional[CourseResponse],
    responses={**NOT_FOUND_RESPONSES, **SERVER_ERROR_RESPONSES},
    summary="Delete a course",
)
async def delete_course(
    course_id: str,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Optional[CourseResponse]:
    course = await course_repository.delete(db, course_id)
    return found_or_404(course, "course", course_id, app_settings)
