"""Instructor earnings settlement.

Runs whenever an order is (or stays) ``payment_status=completed``. Accrual
happens at most once per order: the order row is claimed with a conditional
UPDATE and only the caller whose UPDATE matched the row credits the
instructor. Both statements run in the caller's transaction; the caller
commits, or rolls back on ``SettlementError``.
"""

import uuid
from dataclasses import dataclass
from decimal import Decimal

import structlog
from sqlalchemy import update
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.core.datetime_utils import utc_now
from app.core.exceptions import SettlementError
from app.core.money import ZERO
from app.orders.models.order import Order, PaymentStatus, PayoutStatus

logger = structlog.get_logger(__name__)

_SETTLEMENT_COLUMNS = ["earnings_accrued", "instructor_earnings", "earnings_accrued_at"]


@dataclass
class SettlementResult:
    """Outcome of a settlement attempt."""

    settled: bool
    order_number: str
    instructor_id: uuid.UUID
    amount: Decimal = ZERO
    reason: str | None = None


class SettlementService:
    """Accrues instructor earnings for paid orders."""

    def __init__(self, db: Session):
        self.db = db

    def settle(self, order: Order) -> SettlementResult:
        """
        Accrue ``effective_amount * revenue_split_instructor / 100`` to the instructor.

        Eligible when payment is completed, the payout is still pending and
        earnings were not accrued yet. ``payout_status`` is left untouched.

        Returns:
            SettlementResult; ``settled`` is False when the order was not
            eligible or another attempt already accrued it.

        Raises:
            SettlementError: The instructor balance could not be credited.
        """
        # Pending attribute changes must reach the database before the
        # conditional UPDATE below evaluates its WHERE clause
        self.db.flush()

        if (
            order.payment_status != PaymentStatus.COMPLETED
            or order.payout_status != PayoutStatus.PENDING
        ):
            return self._skipped(order, "not_eligible")

        earnings = order.instructor_share

        claimed = self.db.execute(
            update(Order)
            .where(
                Order.id == order.id,
                Order.payment_status == PaymentStatus.COMPLETED,
                Order.payout_status == PayoutStatus.PENDING,
                Order.earnings_accrued.is_(False),
            )
            .values(
                earnings_accrued=True,
                instructor_earnings=earnings,
                earnings_accrued_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            self.db.expire(order, _SETTLEMENT_COLUMNS)
            return self._skipped(order, "already_accrued")

        credited = self.db.execute(
            update(User)
            .where(User.id == order.instructor_id)
            .values(
                pending_balance=User.pending_balance + earnings,
                total_earnings=User.total_earnings + earnings,
            )
            .execution_options(synchronize_session=False)
        )
        if credited.rowcount != 1:
            logger.error(
                "instructor_credit_failed",
                order_number=order.order_number,
                instructor_id=str(order.instructor_id),
                amount=str(earnings),
            )
            raise SettlementError(
                "Instructor balance could not be credited", order_number=order.order_number
            )

        self._expire_settled_state(order)

        logger.info(
            "earnings_accrued",
            order_number=order.order_number,
            instructor_id=str(order.instructor_id),
            amount=str(earnings),
        )
        return SettlementResult(
            settled=True,
            order_number=order.order_number,
            instructor_id=order.instructor_id,
            amount=earnings,
        )

    def _skipped(self, order: Order, reason: str) -> SettlementResult:
        logger.debug("settlement_skipped", order_number=order.order_number, reason=reason)
        return SettlementResult(
            settled=False,
            order_number=order.order_number,
            instructor_id=order.instructor_id,
            reason=reason,
        )

    def _expire_settled_state(self, order: Order) -> None:
        """Make loaded objects re-read the columns written by the bulk UPDATEs."""
        self.db.expire(order, _SETTLEMENT_COLUMNS)
        instructor = self.db.identity_map.get(self.db.identity_key(User, order.instructor_id))
        if instructor is not None:
            self.db.expire(instructor, ["pending_balance", "total_earnings"])
