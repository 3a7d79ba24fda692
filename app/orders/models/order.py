import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    ColumnElement,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    case,
    func,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.datetime_utils import utc_now
from app.core.money import percent_of, to_decimal
from app.db.session import Base


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderStatus(str, enum.Enum):
    """Fulfilment (enrollment) state, independent of PaymentStatus."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    REJECTED = "rejected"


class PaymentMethod(str, enum.Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    WALLET = "wallet"
    BANK_TRANSFER = "bank_transfer"


class Currency(str, enum.Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    INR = "INR"
    PKR = "PKR"


def _enum_values(obj: type[enum.Enum]) -> list[str]:
    return [e.value for e in obj]


def _share_in_cents(amount: Any, percent: Any) -> ColumnElement[Decimal]:
    # Same rule as percent_of: each order is rounded before any SUM
    return func.round(amount * percent / 100, 2, type_=Numeric(12, 2))


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_orders_amount_non_negative"),
        CheckConstraint(
            "discounted_amount IS NULL OR discounted_amount >= 0",
            name="ck_orders_discounted_amount_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    order_number: Mapped[str] = mapped_column(unique=True, index=True)  # ORD-1737460000000-A3F9

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
    course_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("courses.id"), index=True)
    instructor_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    discounted_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), default=None)
    currency: Mapped[Currency] = mapped_column(
        Enum(Currency, values_callable=_enum_values), default=Currency.USD
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod, values_callable=_enum_values)
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, values_callable=_enum_values),
        default=PaymentStatus.PENDING,
        index=True,
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, values_callable=_enum_values),
        default=OrderStatus.PENDING,
        index=True,
    )
    payout_status: Mapped[PayoutStatus] = mapped_column(
        Enum(PayoutStatus, values_callable=_enum_values),
        default=PayoutStatus.PENDING,
    )

    # Percentages recorded at purchase time; not required to sum to 100
    revenue_split_platform: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    revenue_split_instructor: Mapped[Decimal] = mapped_column(Numeric(5, 2))

    # Gateway data handed over by the payment collaborator
    transaction_id: Mapped[str | None] = mapped_column(default=None, index=True)
    invoice_url: Mapped[str | None] = mapped_column(default=None)
    coupon_code: Mapped[str | None] = mapped_column(default=None)
    coupon_discount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), default=None)
    gateway_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, default=None
    )
    ip_address: Mapped[str | None] = mapped_column(default=None)
    device_info: Mapped[str | None] = mapped_column(default=None)
    payment_completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    # Payout (handled by the withdrawal process)
    payout_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    payout_transaction_id: Mapped[str | None] = mapped_column(default=None)

    # Settlement bookkeeping, see SettlementService
    earnings_accrued: Mapped[bool] = mapped_column(default=False, index=True)  # Idempotency flag
    instructor_earnings: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), default=None)
    earnings_accrued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    course = relationship("Course")
    instructor = relationship("User", foreign_keys=[instructor_id])

    @hybrid_property
    def effective_amount(self) -> Decimal:
        """Amount actually charged: the discounted price when positive, else the list price."""
        if self.discounted_amount is not None and self.discounted_amount > 0:
            return to_decimal(self.discounted_amount)
        return to_decimal(self.amount)

    @effective_amount.inplace.expression
    @classmethod
    def _effective_amount_expression(cls) -> ColumnElement[Decimal]:
        return case((cls.discounted_amount > 0, cls.discounted_amount), else_=cls.amount)

    @hybrid_property
    def platform_share(self) -> Decimal:
        return percent_of(self.effective_amount, self.revenue_split_platform)

    @platform_share.inplace.expression
    @classmethod
    def _platform_share_expression(cls) -> ColumnElement[Decimal]:
        return _share_in_cents(cls.effective_amount, cls.revenue_split_platform)

    @hybrid_property
    def instructor_share(self) -> Decimal:
        return percent_of(self.effective_amount, self.revenue_split_instructor)

    @instructor_share.inplace.expression
    @classmethod
    def _instructor_share_expression(cls) -> ColumnElement[Decimal]:
        return _share_in_cents(cls.effective_amount, cls.revenue_split_instructor)

    @property
    def revenue_split(self) -> dict[str, Decimal]:
        return {
            "platform": self.revenue_split_platform,
            "instructor": self.revenue_split_instructor,
        }

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, order_number={self.order_number}, "
            f"payment_status={self.payment_status.value}, status={self.status.value})>"
        )
