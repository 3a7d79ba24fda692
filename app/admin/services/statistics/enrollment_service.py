"""Enrollment trend statistics service."""

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import TrendChartResponse, TrendDataset
from app.admin.services.statistics.base import aggregation_guard, fill_months, get_year_boundaries
from app.core.constants import (
    ENROLLMENT_CHART_BACKGROUND,
    ENROLLMENT_CHART_BORDER,
    ENROLLMENT_CHART_LABEL,
    MONTH_LABELS,
)
from app.orders.models.order import Order, OrderStatus


class EnrollmentService:
    """Service for enrollment (fulfilled order) trends."""

    @staticmethod
    @aggregation_guard("enrollment_trends")
    def get_monthly_enrollments(db: Session, year: int) -> list[int]:
        """Count fulfilled orders per calendar month of ``year``.

        Only ``status`` is checked; the payment axis is irrelevant here.

        Args:
            db: Database session.
            year: Calendar year (UTC).

        Returns:
            Twelve counts, January first. Their sum equals the number of
            fulfilled orders created in that year.
        """
        start, end = get_year_boundaries(year)
        month = extract("month", Order.created_at).label("month")
        rows = (
            db.query(month, func.count(Order.id))
            .filter(
                Order.status == OrderStatus.COMPLETED,
                Order.created_at >= start,
                Order.created_at < end,
            )
            .group_by(month)
            .all()
        )
        return [int(count) for count in fill_months(rows)]

    @staticmethod
    def get_enrollment_chart(db: Session, year: int) -> TrendChartResponse:
        data = EnrollmentService.get_monthly_enrollments(db, year)
        return TrendChartResponse(
            labels=list(MONTH_LABELS),
            datasets=[
                TrendDataset(
                    label=ENROLLMENT_CHART_LABEL,
                    data=data,
                    border_color=ENROLLMENT_CHART_BORDER,
                    background_color=ENROLLMENT_CHART_BACKGROUND,
                )
            ],
        )
