"""
Membership API - Member SQLAlchemy Model
========================================

What:  ORM model representing the `members` table.
Who:   Used by MemberRepository for CRUD operations and by Alembic.

Table Design:
    - id: string form of a uuid4, minted by the repository at creation
    - every profile field is nullable; the API never required any of them
    - created_at: insertion timestamp, only used to order list results
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from membership_api.database import Base


class Member(Base):
    """
    A club member.

    Lifecycle:
        Created by POST /members, edited in place by PUT /members/{id}/edit,
        removed by DELETE /members/{id}. Members have no link to courses.
    """

    __tablename__ = "members"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Server-assigned uuid4 string; never changes after creation",
    )

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    surname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    membership_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # URL or path; stored as given
    picture: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="Insertion time (UTC); defines the natural list order",
    )

    __table_args__ = (
        Index("idx_members_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name='{self.name}', surname='{self.surname}')>"
