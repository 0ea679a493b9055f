"""
Membership API - Course Repository
==================================

Course records: list shows {id, title, instructorName, instructorSurname};
search matches "title instructorName instructorSurname" or
"instructorName instructorSurname title".
"""

from membership_api.models.course import Course
from membership_api.repositories.base import RecordRepository
from membership_api.schemas.course import (
    CourseCreate,
    CourseListItem,
    CourseResponse,
    CourseUpdate,
)


class CourseRepository(
    RecordRepository[Course, CourseCreate, CourseUpdate, CourseResponse, CourseListItem]
):
    resource = "course"
    model = Course
    create_schema = CourseCreate
    update_schema = CourseUpdate
    response_schema = CourseResponse
    list_item_schema = CourseListItem
    list_columns = ("id", "title", "instructor_name", "instructor_surname")
    search_orderings = (
        ("title", "instructor_name", "instructor_surname"),
        ("instructor_name", "instructor_surname", "title"),
    )


course_repository = CourseRepository()
