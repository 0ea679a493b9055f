"""
Membership API - Member Schemas
===============================

What:  Pydantic models validating member payloads and shaping responses.
How:   Every field is optional; type coercion follows pydantic's lax mode
       ("30" becomes 30 for age, 42 becomes "42" for name) and anything that
       cannot be coerced is rejected with a 400. Lengths and the age range
       follow the column sizes of the `members` table.

A client-supplied `id` is dropped on input (extra="ignore"): ids are minted
by the server only.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Column bounds of the `members` table (Integer, String(255), String(100))
AGE_MIN = -(2**31)
AGE_MAX = 2**31 - 1
NAME_MAX_LENGTH = 255
MEMBERSHIP_TYPE_MAX_LENGTH = 100


class MemberFields(BaseModel):
    """Editable member fields shared by create, update and response models."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
        from_attributes=True,
    )

    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH, description="First name")
    surname: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH, description="Last name")
    email: Optional[str] = Field(
        default=None, max_length=NAME_MAX_LENGTH, description="Contact email (not format-checked)"
    )
    age: Optional[int] = Field(default=None, ge=AGE_MIN, le=AGE_MAX, description="Age in years")
    membership_type: Optional[str] = Field(
        default=None,
        max_length=MEMBERSHIP_TYPE_MAX_LENGTH,
        validation_alias=AliasChoices("membershipType", "membership_type"),
        serialization_alias="membershipType",
        description="Membership plan, free text (e.g. 'gold')",
    )
    picture: Optional[str] = Field(default=None, description="Picture URL or path")


class MemberCreate(MemberFields):
    """Body of POST /members."""


class MemberUpdate(MemberFields):
    """
    Body of PUT /members/{id}/edit.

    Only the fields the client actually sent are applied
    (model_dump(exclude_unset=True)).
    """


class MemberResponse(MemberFields):
    """Full member record, returned by get/create/update/delete."""

    id: str = Field(description="Server-assigned member id (uuid4 string)")


class MemberListItem(BaseModel):
    """Projection returned by GET /members: id plus display fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    surname: Optional[str] = None
