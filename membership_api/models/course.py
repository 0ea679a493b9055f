"""
Membership API - Course SQLAlchemy Model
========================================

What:  ORM model representing the `courses` table.
Who:   Used by CourseRepository for CRUD operations and by Alembic.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from membership_api.database import Base


class Course(Base):
    """A course with its instructor and scheduled start."""

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Server-assigned uuid4 string; never changes after creation",
    )

    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    instructor_surname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    schedule: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="Insertion time (UTC); defines the natural list order",
    )

    __table_args__ = (
        Index("idx_courses_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title='{self.title}')>"
