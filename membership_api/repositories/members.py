"""
Membership API - Member Repository
==================================

Member records: list shows {id, name, surname}; search matches
"name surname" or "surname name".
"""

from membership_api.models.member import Member
from membership_api.repositories.base import RecordRepository
from membership_api.schemas.member import (
    MemberCreate,
    MemberListItem,
    MemberResponse,
    MemberUpdate,
)


class MemberRepository(
    RecordRepository[Member, MemberCreate, MemberUpdate, MemberResponse, MemberListItem]
):
    resource = "member"
    model = Member
    create_schema = MemberCreate
    update_schema = MemberUpdate
    response_schema = MemberResponse
    list_item_schema = MemberListItem
    list_columns = ("id", "name", "surname")
    search_orderings = (
        ("name", "surname"),
        ("surname", "name"),
    )


member_repository = MemberRepository()
