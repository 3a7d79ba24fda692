"""Revenue statistics service.

Platform revenue is ``effective_amount * revenue_split_platform / 100`` per order,
rounded to cents before summing, computed in SQL through ``Order.platform_share``.
"""

from decimal import Decimal

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import TrendChartResponse, TrendDataset
from app.admin.services.statistics.base import (
    aggregation_guard,
    fill_months,
    get_year_boundaries,
    round_money,
)
from app.core.constants import (
    MONTH_LABELS,
    REVENUE_CHART_BACKGROUND,
    REVENUE_CHART_BORDER,
    REVENUE_CHART_LABEL,
)
from app.orders.models.order import Order, OrderStatus, PaymentStatus


class RevenueService:
    """Service for revenue-related statistics."""

    @staticmethod
    @aggregation_guard("revenue_trends")
    def get_monthly_revenue(db: Session, year: int) -> list[Decimal]:
        """Sum the platform share of fulfilled orders per month of ``year``.

        Args:
            db: Database session.
            year: Calendar year (UTC).

        Returns:
            Twelve amounts rounded to cents, January first.
        """
        start, end = get_year_boundaries(year)
        month = extract("month", Order.created_at).label("month")
        rows = (
            db.query(month, func.sum(Order.platform_share))
            .filter(
                Order.status == OrderStatus.COMPLETED,
                Order.created_at >= start,
                Order.created_at < end,
            )
            .group_by(month)
            .all()
        )
        return [round_money(value) for value in fill_months(rows)]

    @staticmethod
    @aggregation_guard("total_revenue")
    def get_completed_totals(db: Session) -> tuple[int, Decimal]:
        """Count orders that are both paid and fulfilled, and sum their platform share.

        Returns:
            Tuple of (purchase_count, platform_revenue); revenue is 0 when
            there are no such orders.
        """
        result = (
            db.query(func.count(Order.id), func.sum(Order.platform_share))
            .filter(
                Order.payment_status == PaymentStatus.COMPLETED,
                Order.status == OrderStatus.COMPLETED,
            )
            .first()
        )
        if result is None:
            return 0, round_money(0)
        return result[0] or 0, round_money(result[1])

    @staticmethod
    def get_revenue_chart(db: Session, year: int) -> TrendChartResponse:
        data = RevenueService.get_monthly_revenue(db, year)
        return TrendChartResponse(
            labels=list(MONTH_LABELS),
            datasets=[
                TrendDataset(
                    label=REVENUE_CHART_LABEL,
                    data=data,
                    border_color=REVENUE_CHART_BORDER,
                    background_color=REVENUE_CHART_BACKGROUND,
                    fill=True,
                )
            ],
        )
