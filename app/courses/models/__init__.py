"""Course models."""

from app.courses.models.course import Course, CourseStatus, OfferType
from app.courses.models.review import Review

__all__ = [
    "Course",
    "CourseStatus",
    "OfferType",
    "Review",
]
