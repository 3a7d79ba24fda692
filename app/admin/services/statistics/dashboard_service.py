"""Dashboard statistics service."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import DashboardStatsResponse, StatCard
from app.admin.services.statistics.base import aggregation_guard
from app.admin.services.statistics.order_service import OrderStatisticsService
from app.admin.services.statistics.revenue_service import RevenueService
from app.auth.models.user import User, UserRole
from app.courses.models.course import Course, CourseStatus


class DashboardService:
    """Service for dashboard summary aggregation."""

    @staticmethod
    @aggregation_guard("catalog_counts")
    def get_catalog_counts(db: Session) -> dict[str, int]:
        """Count courses by moderation status and users by role."""
        course_counts = dict(
            db.query(Course.status, func.count(Course.id)).group_by(Course.status).all()
        )
        role_counts = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())

        return {
            "total_courses": sum(course_counts.values()),
            "active_courses": course_counts.get(CourseStatus.PUBLISHED, 0),
            "pending_courses": course_counts.get(CourseStatus.PENDING, 0),
            "total_students": role_counts.get(UserRole.STUDENT.value, 0),
            "total_instructors": role_counts.get(UserRole.INSTRUCTOR.value, 0),
        }

    @staticmethod
    def get_stats(db: Session) -> DashboardStatsResponse:
        """Get the dashboard summary: counters, platform revenue and recent purchases.

        Purchases and revenue only count orders that are both paid and
        fulfilled.

        Args:
            db: Database session.

        Returns:
            DashboardStatsResponse including the ready-to-render stat cards.
        """
        counts = DashboardService.get_catalog_counts(db)
        total_purchases, total_revenue = RevenueService.get_completed_totals(db)
        recent_purchases = OrderStatisticsService.get_recent_purchases(db)

        stats = [
            StatCard(title="Total Courses", value=counts["total_courses"], icon="book"),
            StatCard(title="Active Courses", value=counts["active_courses"], icon="check-circle"),
            StatCard(title="Pending Courses", value=counts["pending_courses"], icon="clock"),
            StatCard(title="Total Students", value=counts["total_students"], icon="users"),
            StatCard(title="Total Instructors", value=counts["total_instructors"], icon="user-tie"),
            StatCard(title="Total Purchases", value=total_purchases, icon="shopping-cart"),
            StatCard(
                title="Platform Revenue",
                value=float(total_revenue),
                icon="money-bill-wave",
                is_money=True,
            ),
        ]

        return DashboardStatsResponse(
            **counts,
            total_purchases=total_purchases,
            total_revenue=total_revenue,
            recent_purchases=recent_purchases,
            stats=stats,
        )
