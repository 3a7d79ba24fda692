"""Catalog listings for the admin dashboard: courses and user accounts."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import (
    CourseInstructor,
    CourseOverview,
    RecentCourse,
    UserSummary,
)
from app.admin.services.statistics.base import aggregation_guard, round_rating
from app.auth.models.user import User, UserRole
from app.core.constants import DEFAULT_PAGE_SIZE, RECENT_COURSES_LIMIT
from app.courses.models.course import Course
from app.courses.models.review import Review


def _course_instructor(user: User | None) -> CourseInstructor | None:
    if user is None:
        return None
    return CourseInstructor(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        profile=user.profile or "",
        name=user.full_name,
    )


class CatalogService:
    """Service for the admin course and user listings."""

    @staticmethod
    @aggregation_guard("recent_courses")
    def get_recent_courses(db: Session, limit: int = RECENT_COURSES_LIMIT) -> list[RecentCourse]:
        """Newest courses first, with the instructor's display name."""
        rows = (
            db.query(Course, User)
            .outerjoin(User, User.id == Course.instructor_id)
            .order_by(Course.created_at.desc(), Course.id)
            .limit(limit)
            .all()
        )
        return [
            RecentCourse(
                id=course.id,
                title=course.title,
                category=course.category,
                status=course.status,
                banner_image=course.banner_image,
                created_at=course.created_at,
                instructor=_course_instructor(instructor),
            )
            for course, instructor in rows
        ]

    @staticmethod
    @aggregation_guard("all_courses")
    def get_all_courses(
        db: Session, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> tuple[list[CourseOverview], int]:
        """List every course, newest first, with review count and mean rating.

        Args:
            db: Database session.
            skip: Courses to skip.
            limit: Maximum number of courses to return.

        Returns:
            Tuple of (courses, total_course_count). Courses without reviews
            have ``total_reviews=0`` and ``average_rating=0.0``.
        """
        reviews = (
            select(
                Review.course_id.label("course_id"),
                func.count(Review.id).label("total_reviews"),
                func.avg(Review.rating).label("average_rating"),
            )
            .group_by(Review.course_id)
            .subquery()
        )

        rows = (
            db.query(
                Course,
                User,
                func.coalesce(reviews.c.total_reviews, 0).label("total_reviews"),
                reviews.c.average_rating,
            )
            .outerjoin(User, User.id == Course.instructor_id)
            .outerjoin(reviews, reviews.c.course_id == Course.id)
            .order_by(Course.created_at.desc(), Course.id)
            .offset(skip)
            .limit(limit)
            .all()
        )
        total = db.query(func.count(Course.id)).scalar() or 0

        courses = [
            CourseOverview(
                id=course.id,
                title=course.title,
                slug=course.slug,
                category=course.category,
                status=course.status,
                offer_type=course.offer_type,
                price=course.price,
                discounted_price=course.discounted_price,
                enrollment_count=course.enrollment_count,
                created_at=course.created_at,
                instructor=_course_instructor(instructor),
                total_reviews=total_reviews,
                average_rating=round_rating(average_rating),
            )
            for course, instructor, total_reviews, average_rating in rows
        ]
        return courses, total

    @staticmethod
    @aggregation_guard("all_users")
    def get_users(
        db: Session,
        role: UserRole | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[UserSummary], int]:
        """List accounts with their role, newest first, optionally for one role."""
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role.value)

        total = query.count()
        users = query.order_by(User.created_at.desc(), User.id).offset(skip).limit(limit).all()
        return [UserSummary.model_validate(user) for user in users], total
