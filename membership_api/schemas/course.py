"""
Membership API - Course Schemas
===============================

What:  Pydantic models validating course payloads and shaping responses.
How:   `schedule` accepts ISO 8601 strings (or unix timestamps); any other
       string is a validation error (400). Every schedule is converted to
       UTC, and a value without an offset is read as UTC, so backends that
       store naive timestamps (SQLite) keep the same instant.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Column size of the `courses` string columns
TEXT_MAX_LENGTH = 255


class CourseFields(BaseModel):
    """Editable course fields shared by create, update and response models."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
        from_attributes=True,
    )

    title: Optional[str] = Field(default=None, max_length=TEXT_MAX_LENGTH, description="Course title")
    description: Optional[str] = Field(default=None, description="Long description")
    instructor_name: Optional[str] = Field(
        default=None,
        max_length=TEXT_MAX_LENGTH,
        validation_alias=AliasChoices("instructorName", "instructor_name"),
        serialization_alias="instructorName",
    )
    instructor_surname: Optional[str] = Field(
        default=None,
        max_length=TEXT_MAX_LENGTH,
        validation_alias=AliasChoices("instructorSurname", "instructor_surname"),
        serialization_alias="instructorSurname",
    )
    schedule: Optional[datetime] = Field(
        default=None,
        description="When the course takes place (ISO 8601), returned in UTC",
    )

    @field_validator("schedule")
    @classmethod
    def schedule_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class CourseCreate(CourseFields):
    """Body of POST /courses."""


class CourseUpdate(CourseFields):
    """Body of PUT /courses/{id}/edit; only the fields sent are applied."""


class CourseResponse(CourseFields):
    """Full course record."""

    id: str = Field(description="Server-assigned course id (uuid4 string)")


class CourseListItem(BaseModel):
    """Projection returned by GET /courses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: Optional[str] = None
    instructor_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("instructorName", "instructor_name"),
        serialization_alias="instructorName",
    )
    instructor_surname: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("instructorSurname", "instructor_surname"),
        serialization_alias="instructorSurname",
    )
