"""Order persistence and filtered queries."""

import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Query, Session

from app.core.exceptions import ValidationError
from app.core.repository import BaseRepository
from app.orders.models.order import Order, OrderStatus, PaymentStatus


@dataclass(frozen=True)
class OrderFilters:
    """Optional filters for order listings. ``None`` means "any"."""

    payment_status: PaymentStatus | None = None
    status: OrderStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    user_id: uuid.UUID | None = None
    course_id: uuid.UUID | None = None
    instructor_id: uuid.UUID | None = None

    def validate(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date", field="start_date")


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: Session):
        super().__init__(db, Order)

    def get_by_order_number(self, order_number: str) -> Order | None:
        return self.db.query(Order).filter(Order.order_number == order_number).first()

    def order_number_taken(self, order_number: str) -> bool:
        match = self.db.query(Order.id).filter(Order.order_number == order_number).first()
        return match is not None

    def filtered(self, filters: OrderFilters) -> Query[Order]:
        """Build a query for the given filters, newest first."""
        filters.validate()

        query = self.db.query(Order)
        if filters.payment_status is not None:
            query = query.filter(Order.payment_status == filters.payment_status)
        if filters.status is not None:
            query = query.filter(Order.status == filters.status)
        if filters.start_date is not None:
            query = query.filter(Order.created_at >= filters.start_date)
        if filters.end_date is not None:
            query = query.filter(Order.created_at <= filters.end_date)
        if filters.user_id is not None:
            query = query.filter(Order.user_id == filters.user_id)
        if filters.course_id is not None:
            query = query.filter(Order.course_id == filters.course_id)
        if filters.instructor_id is not None:
            query = query.filter(Order.instructor_id == filters.instructor_id)

        return query.order_by(Order.created_at.desc())

    def find(
        self, filters: OrderFilters, skip: int = 0, limit: int = 20
    ) -> tuple[list[Order], int]:
        """Return one page of matching orders and the total match count."""
        query = self.filtered(filters)
        total = query.order_by(None).count()
        return query.offset(skip).limit(limit).all(), total
