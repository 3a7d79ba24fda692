"""
Tests for the admin dashboard statistics services.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.admin.services.statistics import (
    CatalogService,
    DashboardService,
    EnrollmentService,
    OrderStatisticsService,
    RankingsService,
    RevenueService,
    fill_months,
    get_year_boundaries,
    round_rating,
)
from app.auth.models.user import UserRole
from app.core.exceptions import StatisticsError
from app.courses.models.course import CourseStatus
from app.orders.models.order import OrderStatus, PaymentStatus
from tests.utils.factories import (
    create_course_factory,
    create_instructor_factory,
    create_order_factory,
    create_review_factory,
    create_user_factory,
)


def at(year: int, month: int, day: int = 15) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=UTC)


@pytest.fixture
def course(db_session: Session, test_instructor):
    return create_course_factory(db_session, test_instructor)


class TestBaseHelpers:
    def test_year_boundaries_are_half_open(self):
        start, end = get_year_boundaries(2025)

        assert start == datetime(2025, 1, 1, tzinfo=UTC)
        assert end == datetime(2026, 1, 1, tzinfo=UTC)

    def test_fill_months_defaults_missing_months(self):
        assert fill_months([(1, 4), (12, 2)]) == [4] + [0] * 10 + [2]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 0.0), (Decimal("4.25"), 4.3), (4.6666, 4.7), (5, 5.0)],
    )
    def test_round_rating(self, value, expected):
        assert round_rating(value) == expected


class TestEnrollmentTrends:
    def test_counts_fulfilled_orders_per_month(self, db_session: Session, test_user, course):
        for created_at in (at(2025, 1, 3), at(2025, 1, 28), at(2025, 3)):
            create_order_factory(
                db_session, test_user, course, status=OrderStatus.COMPLETED, created_at=created_at
            )
        # Other year, unfulfilled, refunded and cancelled orders do not count
        create_order_factory(
            db_session, test_user, course, status=OrderStatus.COMPLETED, created_at=at(2024, 3)
        )
        create_order_factory(db_session, test_user, course, created_at=at(2025, 2))
        create_order_factory(
            db_session, test_user, course, status=OrderStatus.REFUNDED, created_at=at(2025, 2)
        )
        create_order_factory(
            db_session, test_user, course, status=OrderStatus.CANCELLED, created_at=at(2025, 4)
        )

        data = EnrollmentService.get_monthly_enrollments(db_session, 2025)

        assert data == [2, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0]
        assert sum(data) == 3

    def test_payment_axis_is_ignored(self, db_session: Session, test_user, course):
        create_order_factory(
            db_session,
            test_user,
            course,
            payment_status=PaymentStatus.PENDING,
            status=OrderStatus.COMPLETED,
            created_at=at(2025, 6),
        )

        assert EnrollmentService.get_monthly_enrollments(db_session, 2025)[5] == 1

    def test_year_without_orders_is_twelve_zeros(self, db_session: Session):
        assert EnrollmentService.get_monthly_enrollments(db_session, 2019) == [0] * 12

    def test_chart_shape(self, db_session: Session):
        chart = EnrollmentService.get_enrollment_chart(db_session, 2025)

        assert chart.labels[0] == "Jan"
        assert len(chart.labels) == 12
        assert chart.datasets[0].label == "Course Enrollments"
        assert chart.datasets[0].fill is False


class TestRevenue:
    def test_monthly_revenue_is_platform_share(self, db_session: Session, test_user, course):
        create_order_factory(
            db_session, test_user, course, status=OrderStatus.COMPLETED, created_at=at(2025, 2)
        )
        create_order_factory(
            db_session,
            test_user,
            course,
            discounted_amount=Decimal("60.00"),
            platform=Decimal("30"),
            instructor=Decimal("70"),
            status=OrderStatus.COMPLETED,
            created_at=at(2025, 2, 20),
        )
        create_order_factory(
            db_session, test_user, course, status=OrderStatus.REFUNDED, created_at=at(2025, 2)
        )

        data = RevenueService.get_monthly_revenue(db_session, 2025)

        assert data[1] == Decimal("38.00")
        assert sum(data) == Decimal("38.00")

    def test_completed_totals_need_both_axes(self, db_session: Session, test_user, course):
        create_order_factory(
            db_session,
            test_user,
            course,
            payment_status=PaymentStatus.COMPLETED,
            status=OrderStatus.COMPLETED,
        )
        create_order_factory(
            db_session, test_user, course, payment_status=PaymentStatus.COMPLETED
        )
        create_order_factory(db_session, test_user, course, status=OrderStatus.COMPLETED)

        purchases, revenue = RevenueService.get_completed_totals(db_session)

        assert purchases == 1
        assert revenue == Decimal("20.00")

    def test_fractional_cent_shares_match_settlement_rounding(
        self, db_session: Session, test_user, course
    ):
        orders = [
            create_order_factory(
                db_session,
                test_user,
                course,
                amount=Decimal("10.05"),
                platform=Decimal("50"),
                instructor=Decimal("50"),
                payment_status=PaymentStatus.COMPLETED,
                status=OrderStatus.COMPLETED,
                created_at=at(2025, 3),
            )
            for _ in range(2)
        ]

        _, revenue = RevenueService.get_completed_totals(db_session)
        monthly = RevenueService.get_monthly_revenue(db_session, 2025)

        assert orders[0].platform_share == Decimal("5.03")
        assert orders[0].instructor_share == Decimal("5.03")
        # Each order is rounded before summing: 2 x 5.03, not round(10.05)
        assert revenue == sum(order.platform_share for order in orders) == Decimal("10.06")
        assert monthly[2] == Decimal("10.06")

    def test_completed_totals_are_zero_without_orders(self, db_session: Session):
        assert RevenueService.get_completed_totals(db_session) == (0, Decimal("0.00"))

    def test_unrepresentable_year_raises_statistics_error(self, db_session: Session):
        with pytest.raises(StatisticsError):
            RevenueService.get_monthly_revenue(db_session, 9999)

    def test_database_failure_raises_statistics_error(self):
        db = MagicMock(spec=Session)
        db.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection lost"))

        with pytest.raises(StatisticsError) as exc_info:
            RevenueService.get_monthly_revenue(db, 2025)

        assert exc_info.value.message == "Failed to fetch dashboard statistics"


class TestTopInstructors:
    def test_ranks_top_five_by_fulfilled_orders(self, db_session: Session, test_user):
        base = datetime(2024, 1, 1)
        instructors = [
            create_instructor_factory(db_session, created_at=base + timedelta(minutes=i))
            for i in range(8)
        ]
        for i, instructor in enumerate(instructors):
            course = create_course_factory(db_session, instructor)
            for _ in range(i):
                create_order_factory(db_session, test_user, course, status=OrderStatus.COMPLETED)
            # Unfulfilled orders never count
            create_order_factory(db_session, test_user, course)

        ranked = RankingsService.get_top_instructors(db_session)

        assert [r.id for r in ranked] == [i.id for i in reversed(instructors[3:])]
        assert [r.student_count for r in ranked] == [7, 6, 5, 4, 3]

    def test_ties_keep_creation_order(self, db_session: Session, test_user):
        base = datetime(2024, 1, 1)
        first = create_instructor_factory(db_session, created_at=base)
        second = create_instructor_factory(db_session, created_at=base + timedelta(hours=1))
        for instructor in (second, first):
            create_order_factory(
                db_session,
                test_user,
                create_course_factory(db_session, instructor),
                status=OrderStatus.COMPLETED,
            )

        ranked = RankingsService.get_top_instructors(db_session)

        assert [r.id for r in ranked] == [first.id, second.id]

    def test_instructor_without_courses_has_zero_counts(self, db_session: Session):
        lonely = create_instructor_factory(db_session)

        ranked = RankingsService.get_top_instructors(db_session)

        assert len(ranked) == 1
        assert ranked[0].id == lonely.id
        assert ranked[0].course_count == 0
        assert ranked[0].student_count == 0
        assert ranked[0].review_count == 0
        assert ranked[0].average_rating == 0.0

    def test_counts_courses_and_reviews(self, db_session: Session, test_user, test_instructor):
        first = create_course_factory(db_session, test_instructor)
        second = create_course_factory(db_session, test_instructor)
        for course, rating in ((first, 4), (first, 5), (second, 5)):
            create_review_factory(db_session, course, test_user, rating)
        create_order_factory(db_session, test_user, first, status=OrderStatus.COMPLETED)
        create_order_factory(db_session, test_user, second, status=OrderStatus.COMPLETED)

        [ranked] = RankingsService.get_top_instructors(db_session)

        assert ranked.course_count == 2
        assert ranked.student_count == 2
        assert ranked.review_count == 3
        assert ranked.average_rating == 4.7

    def test_only_instructor_accounts_are_ranked(self, db_session: Session, test_user, test_admin):
        assert RankingsService.get_top_instructors(db_session) == []


class TestCategoryDistribution:
    def test_top_five_categories_by_course_count(self, db_session: Session, test_instructor):
        sizes = {"Development": 4, "Design": 3, "Business": 3, "Music": 2, "Finance": 2, "Art": 1}
        for category, size in sizes.items():
            for _ in range(size):
                create_course_factory(db_session, test_instructor, category=category)

        counts = RankingsService.get_category_counts(db_session)

        assert [(c.category, c.count) for c in counts] == [
            ("Development", 4),
            ("Business", 3),
            ("Design", 3),
            ("Finance", 2),
            ("Music", 2),
        ]

    def test_chart_colors_match_labels(self, db_session: Session, test_instructor):
        create_course_factory(db_session, test_instructor, category="Design")
        create_course_factory(db_session, test_instructor, category="Music")

        chart = RankingsService.get_category_chart(db_session)

        assert chart.labels == ["Design", "Music"]
        assert chart.datasets[0].data == [1, 1]
        assert len(chart.datasets[0].background_color) == 2


class TestCoursesState:
    def test_orders_courses_by_enrollments(self, db_session: Session, test_user, test_instructor):
        quiet = create_course_factory(db_session, test_instructor, title="Quiet")
        busy = create_course_factory(db_session, test_instructor, title="Busy")
        for _ in range(2):
            create_order_factory(db_session, test_user, busy, status=OrderStatus.COMPLETED)
        create_review_factory(db_session, busy, test_user, 3)
        create_review_factory(db_session, busy, test_user, 4)

        state = RankingsService.get_courses_state(db_session)

        assert [c.title for c in state] == ["Busy", "Quiet"]
        assert state[0].enrolled == 2
        assert state[0].average_rating == 3.5
        assert state[1].id == quiet.id
        assert state[1].average_rating == 0.0


class TestRecentPurchases:
    def test_returns_newest_paid_and_fulfilled_orders(
        self, db_session: Session, test_user, test_instructor, course
    ):
        base = datetime(2025, 1, 1, tzinfo=UTC)
        purchases = [
            create_order_factory(
                db_session,
                test_user,
                course,
                payment_status=PaymentStatus.COMPLETED,
                status=OrderStatus.COMPLETED,
                created_at=base + timedelta(days=i),
            )
            for i in range(7)
        ]
        create_order_factory(
            db_session,
            test_user,
            course,
            payment_status=PaymentStatus.COMPLETED,
            created_at=base + timedelta(days=30),
        )

        recent = OrderStatisticsService.get_recent_purchases(db_session)

        assert [p.order_number for p in recent] == [o.order_number for o in purchases[:1:-1]]
        assert recent[0].user.email == test_user.email
        assert recent[0].course.title == course.title
        assert recent[0].instructor.first_name == test_instructor.first_name


class TestDashboardStats:
    def test_summary_counts_and_cards(self, db_session: Session, test_user, test_instructor):
        create_user_factory(db_session)
        published = create_course_factory(db_session, test_instructor)
        create_course_factory(db_session, test_instructor, status=CourseStatus.PENDING)
        create_course_factory(db_session, test_instructor, status=CourseStatus.REJECTED)
        create_order_factory(
            db_session,
            test_user,
            published,
            payment_status=PaymentStatus.COMPLETED,
            status=OrderStatus.COMPLETED,
        )

        stats = DashboardService.get_stats(db_session)

        assert stats.total_courses == 3
        assert stats.active_courses == 1
        assert stats.pending_courses == 1
        assert stats.total_students == 2
        assert stats.total_instructors == 1
        assert stats.total_purchases == 1
        assert stats.total_revenue == Decimal("20.00")
        assert len(stats.recent_purchases) == 1

        assert [card.icon for card in stats.stats] == [
            "book",
            "check-circle",
            "clock",
            "users",
            "user-tie",
            "shopping-cart",
            "money-bill-wave",
        ]
        assert stats.stats[-1].is_money is True
        assert stats.stats[-1].value == 20.0
        assert not any(card.is_money for card in stats.stats[:-1])

    def test_empty_platform(self, db_session: Session):
        stats = DashboardService.get_stats(db_session)

        assert stats.total_courses == 0
        assert stats.total_revenue == Decimal("0")
        assert stats.recent_purchases == []


class TestRecentCourses:
    def test_returns_newest_courses_with_instructor_name(
        self, db_session: Session, test_instructor
    ):
        for month in range(1, 6):
            create_course_factory(
                db_session, test_instructor, title=f"Course {month}", created_at=at(2025, month)
            )

        courses = CatalogService.get_recent_courses(db_session)

        assert [c.title for c in courses] == ["Course 5", "Course 4", "Course 3", "Course 2"]
        assert courses[0].instructor is not None
        assert courses[0].instructor.name == test_instructor.full_name

    def test_limit_is_respected(self, db_session: Session, test_instructor):
        for month in range(1, 4):
            create_course_factory(db_session, test_instructor, created_at=at(2025, month))

        assert len(CatalogService.get_recent_courses(db_session, limit=1)) == 1


class TestAllCourses:
    def test_lists_courses_with_review_summary(
        self, db_session: Session, test_user, test_instructor
    ):
        reviewed = create_course_factory(
            db_session, test_instructor, title="Reviewed", created_at=at(2025, 1)
        )
        create_course_factory(
            db_session, test_instructor, title="Unreviewed", created_at=at(2025, 2)
        )
        create_review_factory(db_session, reviewed, test_user, 4)
        create_review_factory(db_session, reviewed, test_user, 5)

        courses, total = CatalogService.get_all_courses(db_session)

        assert total == 2
        assert [c.title for c in courses] == ["Unreviewed", "Reviewed"]
        assert courses[0].total_reviews == 0
        assert courses[0].average_rating == 0.0
        assert courses[1].total_reviews == 2
        assert courses[1].average_rating == 4.5
        assert courses[1].instructor.name == test_instructor.full_name

    def test_paginates(self, db_session: Session, test_instructor):
        for month in range(1, 4):
            create_course_factory(
                db_session, test_instructor, title=f"Course {month}", created_at=at(2025, month)
            )

        courses, total = CatalogService.get_all_courses(db_session, skip=1, limit=1)

        assert total == 3
        assert [c.title for c in courses] == ["Course 2"]

    def test_empty_catalog(self, db_session: Session):
        assert CatalogService.get_all_courses(db_session) == ([], 0)


class TestUsers:
    def test_lists_users_newest_first_with_role(self, db_session: Session):
        older = create_user_factory(db_session, created_at=at(2024, 1))
        newer = create_instructor_factory(db_session, created_at=at(2025, 1))

        users, total = CatalogService.get_users(db_session)

        assert total == 2
        assert [u.id for u in users] == [newer.id, older.id]
        assert users[0].role == UserRole.INSTRUCTOR
        assert users[1].role == UserRole.STUDENT

    def test_filters_by_role(self, db_session: Session, test_user, test_instructor, test_admin):
        users, total = CatalogService.get_users(db_session, role=UserRole.ADMIN)

        assert total == 1
        assert users[0].email == "admin@example.com"
