"""Create members and courses tables

Revision ID: 001
Revises: None
Create Date: 2024-06-27 00:00:00.000000+00:00

What:  Creates the `members` and `courses` tables.
How:   String(36) primary keys holding server-minted uuid4 strings; every
       profile column nullable; created_at indexed for list ordering.

Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("surname", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("membership_type", sa.String(100), nullable=True),
        sa.Column("picture", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Insertion time (UTC); defines the natural list order",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_members_created_at", "members", ["created_at"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("instructor_name", sa.String(255), nullable=True),
        sa.Column("instructor_surname", sa.String(255), nullable=True),
        sa.Column("schedule", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Insertion time (UTC); defines the natural list order",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_courses_created_at", "courses", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_courses_created_at", table_name="courses")
    op.drop_table("courses")
    op.drop_index("idx_members_created_at", table_name="members")
    op.drop_table("members")
