"""Order statistics service."""

from sqlalchemy.orm import Session, aliased

from app.admin.schemas.admin_statistics import (
    PurchaseCourse,
    PurchaseInstructor,
    PurchaseUser,
    RecentPurchase,
)
from app.admin.services.statistics.base import aggregation_guard
from app.auth.models.user import User
from app.core.constants import RECENT_PURCHASES_LIMIT
from app.courses.models.course import Course
from app.orders.models.order import Order, OrderStatus, PaymentStatus


class OrderStatisticsService:
    """Service for order-related statistics."""

    @staticmethod
    @aggregation_guard("recent_purchases")
    def get_recent_purchases(
        db: Session, limit: int = RECENT_PURCHASES_LIMIT
    ) -> list[RecentPurchase]:
        """Get the newest orders that are both paid and fulfilled.

        Buyer, course and instructor are resolved in the same query. A party
        that no longer exists is returned as ``None``.

        Args:
            db: Database session.
            limit: Maximum number of purchases to return.

        Returns:
            List of RecentPurchase, newest first.
        """
        student = aliased(User)
        instructor = aliased(User)
        rows = (
            db.query(Order, student, Course, instructor)
            .outerjoin(student, student.id == Order.user_id)
            .outerjoin(Course, Course.id == Order.course_id)
            .outerjoin(instructor, instructor.id == Order.instructor_id)
            .filter(
                Order.payment_status == PaymentStatus.COMPLETED,
                Order.status == OrderStatus.COMPLETED,
            )
            .order_by(Order.created_at.desc())
            .limit(limit)
            .all()
        )

        return [
            RecentPurchase(
                order_number=order.order_number,
                amount=order.amount,
                effective_amount=order.effective_amount,
                currency=order.currency.value,
                created_at=order.created_at,
                user=PurchaseUser.model_validate(buyer) if buyer else None,
                course=PurchaseCourse.model_validate(course) if course else None,
                instructor=PurchaseInstructor.model_validate(owner) if owner else None,
            )
            for order, buyer, course, owner in rows
        ]
