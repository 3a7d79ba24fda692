"""
Order service: order records, status transitions and their side effects.
"""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.core.datetime_utils import utc_now
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.repository import BaseRepository
from app.courses.models.course import Course
from app.orders.models.order import Order, OrderStatus, PaymentStatus
from app.orders.repository import OrderFilters, OrderRepository
from app.orders.schemas.order import OrderCreate, OrderUpdate
from app.orders.services.settlement_service import SettlementService
from app.orders.utils.order_number import generate_order_number

logger = logging.getLogger(__name__)

_ORDER_NUMBER_ATTEMPTS = 5


class OrderService:
    """Service for creating, updating and querying orders."""

    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.settlement = SettlementService(db)

    def get_order(self, order_number: str) -> Order:
        order = self.orders.get_by_order_number(order_number)
        if order is None:
            raise NotFoundError(f"Order {order_number} not found", resource="order")
        return order

    def list_orders(
        self, filters: OrderFilters, skip: int = 0, limit: int = 20
    ) -> tuple[list[Order], int]:
        return self.orders.find(filters, skip=skip, limit=limit)

    def create_order(self, data: OrderCreate) -> Order:
        """
        Persist a new order.

        Orders that arrive already paid are settled in the same transaction,
        and a fulfilled order refreshes the course's enrollment count.

        Raises:
            ConflictError: The supplied order number is already used.
            NotFoundError: The user, course or instructor does not exist.
            ValidationError: The instructor does not own the course.
        """
        values = data.to_model_kwargs()
        order_number = values.pop("order_number") or self._new_order_number()
        if self.orders.order_number_taken(order_number):
            raise ConflictError(f"Order {order_number} already exists", resource="order")

        self._ensure_parties_exist(data)

        try:
            order = self.orders.add(order_number=order_number, **values)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Order {order_number} already exists", resource="order") from e

        self._commit_transition(order, status_changed=order.status == OrderStatus.COMPLETED)
        logger.info(
            "Created order %s (payment_status=%s, status=%s)",
            order.order_number,
            order.payment_status.value,
            order.status.value,
        )
        return order

    def update_order(self, order_number: str, patch: OrderUpdate) -> Order:
        """
        Apply a partial update.

        When the order ends up with ``payment_status=completed`` the settlement
        runs before commit; if it fails the whole update is rolled back.
        """
        order = self.get_order(order_number)
        changes = patch.changes()
        if not changes:
            return order

        previous_status = order.status
        self.orders.apply(order, changes)
        self._commit_transition(order, status_changed=order.status != previous_status)
        logger.info("Updated order %s: %s", order_number, ", ".join(sorted(changes)))
        return order

    def complete_payment(self, order_number: str, transaction_id: str | None = None) -> Order:
        """Mark the payment as completed. Repeated calls accrue earnings only once."""
        fields: dict[str, object] = {"payment_status": PaymentStatus.COMPLETED}
        if transaction_id is not None:
            fields["transaction_id"] = transaction_id
        return self.update_order(order_number, OrderUpdate.model_validate(fields))

    def refresh_enrollment_count(self, course_id: uuid.UUID) -> None:
        """Recount fulfilled orders for a course in a single statement."""
        fulfilled = (
            select(func.count(Order.id))
            .where(Order.course_id == course_id, Order.status == OrderStatus.COMPLETED)
            .scalar_subquery()
        )
        self.db.execute(
            update(Course)
            .where(Course.id == course_id)
            .values(enrollment_count=fulfilled)
            .execution_options(synchronize_session=False)
        )
        course = self.db.identity_map.get(self.db.identity_key(Course, course_id))
        if course is not None:
            self.db.expire(course, ["enrollment_count"])

    def _stamp_payment_completed(self, order: Order) -> None:
        """Set ``payment_completed_at`` only if the stored row has none yet."""
        self.db.execute(
            update(Order)
            .where(Order.id == order.id, Order.payment_completed_at.is_(None))
            .values(payment_completed_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        self.db.expire(order, ["payment_completed_at"])

    def _commit_transition(self, order: Order, status_changed: bool) -> None:
        order_number = order.order_number
        try:
            if order.payment_status == PaymentStatus.COMPLETED:
                self._stamp_payment_completed(order)
                self.settlement.settle(order)
            if status_changed:
                self.refresh_enrollment_count(order.course_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Order transition failed for %s", order_number)
            raise

    def _ensure_parties_exist(self, data: OrderCreate) -> None:
        users = BaseRepository(self.db, User)
        if not users.exists(data.user_id):
            raise NotFoundError("User not found", resource="user")
        if not users.exists(data.instructor_id):
            raise NotFoundError("Instructor not found", resource="instructor")

        course = BaseRepository(self.db, Course).get_by_id(data.course_id)
        if course is None:
            raise NotFoundError("Course not found", resource="course")
        if course.instructor_id != data.instructor_id:
            raise ValidationError(
                "Instructor does not match the course instructor", field="instructor_id"
            )

    def _new_order_number(self) -> str:
        for _ in range(_ORDER_NUMBER_ATTEMPTS):
            candidate = generate_order_number()
            if not self.orders.order_number_taken(candidate):
                return candidate
        raise ConflictError("Could not allocate a unique order number", resource="order")
