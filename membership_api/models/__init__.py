"""
Membership API - ORM Models
===========================

Importing this package registers every table on Base.metadata
(used by Alembic autogenerate and create_tables()).
"""

from membership_api.models.course import Course
from membership_api.models.member import Member

__all__ = ["Course", "Member"]
