from app.orders.schemas.order import (
    CompletePaymentRequest,
    Coupon,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
    RevenueSplit,
)

__all__ = [
    "CompletePaymentRequest",
    "Coupon",
    "OrderCreate",
    "OrderResponse",
    "OrderUpdate",
    "RevenueSplit",
]
