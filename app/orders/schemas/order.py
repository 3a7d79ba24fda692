"""
Pydantic schemas for orders.

Money and percentages are Decimal in Python and JSON numbers on the wire.
Field names are exposed in camelCase; ``order_number`` is exposed as ``orderId``.
"""

import uuid
from decimal import Decimal
from typing import Annotated, Any

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.functional_serializers import PlainSerializer

from app.core.datetime_utils import UTCDatetime
from app.core.money import Money
from app.core.schemas import CamelModel
from app.orders.models.order import (
    Currency,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    PayoutStatus,
)

Percent = Annotated[
    Decimal,
    Field(ge=0, le=100),
    PlainSerializer(float, return_type=float),
]


class RevenueSplit(CamelModel):
    """Platform and instructor percentages of the effective charged amount.

    The two values are independent and are stored as given.
    """

    platform: Percent
    instructor: Percent


class Coupon(CamelModel):
    code: str
    discount: Money | None = Field(default=None, ge=0)


class OrderCreate(CamelModel):
    """Order handed over by the checkout/payment collaborator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    order_number: str | None = Field(default=None, alias="orderId", min_length=1)
    user_id: uuid.UUID
    course_id: uuid.UUID
    instructor_id: uuid.UUID

    amount: Money = Field(ge=0)
    discounted_amount: Money | None = Field(default=None, ge=0)
    currency: Currency = Currency.USD
    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: OrderStatus = OrderStatus.PENDING
    revenue_split: RevenueSplit

    transaction_id: str | None = None
    invoice_url: str | None = None
    coupon: Coupon | None = None
    gateway_metadata: dict[str, Any] | None = Field(default=None, alias="metadata")
    ip_address: str | None = None
    device_info: str | None = None

    def to_model_kwargs(self) -> dict[str, Any]:
        """Flatten nested input into Order column values."""
        data = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name not in ("revenue_split", "coupon")
        }
        data["revenue_split_platform"] = self.revenue_split.platform
        data["revenue_split_instructor"] = self.revenue_split.instructor
        if self.coupon is not None:
            data["coupon_code"] = self.coupon.code
            data["coupon_discount"] = self.coupon.discount
        return data


class OrderUpdate(CamelModel):
    """Partial update.

    Money, split, parties and timestamps are fixed at creation and are
    rejected here as unknown fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    payment_status: PaymentStatus | None = None
    status: OrderStatus | None = None
    payout_status: PayoutStatus | None = None
    payment_method: PaymentMethod | None = None
    transaction_id: str | None = None
    invoice_url: str | None = None
    payout_date: UTCDatetime | None = None
    payout_transaction_id: str | None = None
    gateway_metadata: dict[str, Any] | None = Field(default=None, alias="metadata")
    ip_address: str | None = None
    device_info: str | None = None

    @field_validator("payment_status", "status", "payout_status", "payment_method")
    @classmethod
    def reject_null_enum(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in the patch, keyed by Order attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class CompletePaymentRequest(CamelModel):
    transaction_id: str | None = None


class OrderResponse(CamelModel):
    """Order response schema."""

    id: uuid.UUID
    order_number: str = Field(alias="orderId")
    user_id: uuid.UUID
    course_id: uuid.UUID
    instructor_id: uuid.UUID

    amount: Money
    discounted_amount: Money | None
    effective_amount: Money
    currency: Currency
    payment_method: PaymentMethod
    revenue_split: RevenueSplit

    payment_status: PaymentStatus
    status: OrderStatus
    payout_status: PayoutStatus

    earnings_accrued: bool
    instructor_earnings: Money | None
    earnings_accrued_at: UTCDatetime | None

    transaction_id: str | None
    invoice_url: str | None
    coupon_code: str | None
    coupon_discount: Money | None
    payment_completed_at: UTCDatetime | None
    payout_date: UTCDatetime | None
    payout_transaction_id: str | None
    created_at: UTCDatetime
    updated_at: UTCDatetime
