"""
Membership API - Route Helpers
==============================

Shared OpenAPI response declarations and the missing-record policy used by
the member and course routers.
"""

from typing import Optional, TypeVar

from membership_api.config import Settings
from membership_api.exceptions import NotFoundError
from membership_api.schemas.common import ErrorResponse

T = TypeVar("T")

VALIDATION_RESPONSES = {
    400: {"description": "Payload failed type validation", "model": ErrorResponse},
}
NOT_FOUND_RESPONSES = {
    404: {"description": "No record with this id", "model": ErrorResponse},
}
SERVER_ERROR_RESPONSES = {
    500: {"description": "Database error", "model": ErrorResponse},
}


def found_or_404(
    record: Optional[T],
    resource: str,
    record_id: str,
    app_settings: Settings,
) -> Optional[T]:
    """
    Apply the missing-record policy to a get/delete result.

    A missing record raises NotFoundError (→ 404), unless NULL_ON_MISSING is
    enabled, in which case None is returned and serialized as `null`.
    """
    if record is None and not app_settings.null_on_missing:
        raise NotFoundError(resource=resource, resource_id=record_id)
    return record
