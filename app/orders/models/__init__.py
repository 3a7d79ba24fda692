from app.orders.models.order import (
    Currency,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    PayoutStatus,
)

__all__ = [
    "Order",
    "OrderStatus",
    "PaymentStatus",
    "PayoutStatus",
    "PaymentMethod",
    "Currency",
]
