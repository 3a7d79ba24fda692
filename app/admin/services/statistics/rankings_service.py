"""Rankings statistics service."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import (
    CategoryCount,
    CourseState,
    DistributionChartResponse,
    DistributionDataset,
    TopInstructor,
)
from app.admin.services.statistics.base import aggregation_guard, round_rating
from app.auth.models.user import User, UserRole
from app.core.constants import (
    CATEGORY_CHART_COLORS,
    COURSES_STATE_LIMIT,
    TOP_CATEGORIES_LIMIT,
    TOP_INSTRUCTORS_LIMIT,
)
from app.courses.models.course import Course
from app.courses.models.review import Review
from app.orders.models.order import Order, OrderStatus


class RankingsService:
    """Service for instructor, category and course rankings."""

    @staticmethod
    @aggregation_guard("top_instructors")
    def get_top_instructors(db: Session, limit: int = TOP_INSTRUCTORS_LIMIT) -> list[TopInstructor]:
        """Rank instructors by fulfilled orders across all of their courses.

        Instructors without courses, orders or reviews are still ranked with
        zero counts. Ties keep account creation order.

        Args:
            db: Database session.
            limit: Maximum number of instructors to return.

        Returns:
            List of TopInstructor, highest student count first.
        """
        courses = (
            select(
                Course.instructor_id.label("instructor_id"),
                func.count(Course.id).label("course_count"),
            )
            .group_by(Course.instructor_id)
            .subquery()
        )
        students = (
            select(
                Course.instructor_id.label("instructor_id"),
                func.count(Order.id).label("student_count"),
            )
            .join(Order, Order.course_id == Course.id)
            .where(Order.status == OrderStatus.COMPLETED)
            .group_by(Course.instructor_id)
            .subquery()
        )
        reviews = (
            select(
                Course.instructor_id.label("instructor_id"),
                func.count(Review.id).label("review_count"),
                func.avg(Review.rating).label("average_rating"),
            )
            .join(Review, Review.course_id == Course.id)
            .group_by(Course.instructor_id)
            .subquery()
        )

        student_count = func.coalesce(students.c.student_count, 0).label("student_count")
        rows = (
            db.query(
                User.id,
                User.first_name,
                User.last_name,
                User.profile,
                student_count,
                func.coalesce(courses.c.course_count, 0).label("course_count"),
                func.coalesce(reviews.c.review_count, 0).label("review_count"),
                reviews.c.average_rating,
            )
            .outerjoin(courses, courses.c.instructor_id == User.id)
            .outerjoin(students, students.c.instructor_id == User.id)
            .outerjoin(reviews, reviews.c.instructor_id == User.id)
            .filter(User.role == UserRole.INSTRUCTOR.value)
            .order_by(student_count.desc(), User.created_at, User.id)
            .limit(limit)
            .all()
        )

        return [
            TopInstructor(
                id=row.id,
                first_name=row.first_name,
                last_name=row.last_name,
                profile=row.profile or "",
                student_count=row.student_count,
                course_count=row.course_count,
                review_count=row.review_count,
                average_rating=round_rating(row.average_rating),
            )
            for row in rows
        ]

    @staticmethod
    @aggregation_guard("course_distribution")
    def get_category_counts(db: Session, limit: int = TOP_CATEGORIES_LIMIT) -> list[CategoryCount]:
        """Count courses per category, largest categories first."""
        count = func.count(Course.id).label("count")
        rows = (
            db.query(Course.category, count)
            .group_by(Course.category)
            .order_by(count.desc(), Course.category)
            .limit(limit)
            .all()
        )
        return [CategoryCount(category=row.category, count=row.count) for row in rows]

    @staticmethod
    def get_category_chart(db: Session) -> DistributionChartResponse:
        categories = RankingsService.get_category_counts(db)
        return DistributionChartResponse(
            labels=[c.category for c in categories],
            datasets=[
                DistributionDataset(
                    data=[c.count for c in categories],
                    background_color=list(CATEGORY_CHART_COLORS[: len(categories)]),
                )
            ],
        )

    @staticmethod
    @aggregation_guard("courses_state")
    def get_courses_state(db: Session, limit: int = COURSES_STATE_LIMIT) -> list[CourseState]:
        """Rank courses by fulfilled orders, with their average review rating.

        Args:
            db: Database session.
            limit: Maximum number of courses to return.

        Returns:
            List of CourseState, most enrolled first.
        """
        enrolled = (
            select(Order.course_id.label("course_id"), func.count(Order.id).label("enrolled"))
            .where(Order.status == OrderStatus.COMPLETED)
            .group_by(Order.course_id)
            .subquery()
        )
        ratings = (
            select(
                Review.course_id.label("course_id"),
                func.avg(Review.rating).label("average_rating"),
            )
            .group_by(Review.course_id)
            .subquery()
        )

        enrolled_count = func.coalesce(enrolled.c.enrolled, 0).label("enrolled")
        rows = (
            db.query(
                Course.id,
                Course.title,
                Course.instructor_id,
                enrolled_count,
                ratings.c.average_rating,
            )
            .outerjoin(enrolled, enrolled.c.course_id == Course.id)
            .outerjoin(ratings, ratings.c.course_id == Course.id)
            .order_by(enrolled_count.desc(), Course.created_at, Course.id)
            .limit(limit)
            .all()
        )

        return [
            CourseState(
                id=row.id,
                title=row.title,
                instructor_id=row.instructor_id,
                enrolled=row.enrolled,
                average_rating=round_rating(row.average_rating),
            )
            for row in rows
        ]
