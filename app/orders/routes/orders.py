"""
Order API endpoints.

Called by the checkout/payment collaborator and the admin panel with an
admin (service) token.
"""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.auth.models.user import User
from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.core.schemas import (
    ApiResponse,
    PaginatedResponse,
    page_offset,
    paginated_response,
    success_response,
)
from app.db.session import get_db
from app.orders.models.order import OrderStatus, PaymentStatus
from app.orders.repository import OrderFilters
from app.orders.schemas.order import (
    CompletePaymentRequest,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
)
from app.orders.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=ApiResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[OrderResponse]:
    """
    Record an order.

    Raises:
        404: User, course or instructor not found
        409: Order number already used
        422: Invalid amount, enum value or missing revenue split
    """
    order = OrderService(db).create_order(data)
    return success_response(OrderResponse.model_validate(order))


@router.get("", response_model=PaginatedResponse[OrderResponse])
def list_orders(
    payment_status: PaymentStatus | None = Query(None, alias="paymentStatus"),
    order_status: OrderStatus | None = Query(None, alias="status"),
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    user_id: uuid.UUID | None = Query(None, alias="userId"),
    course_id: uuid.UUID | None = Query(None, alias="courseId"),
    instructor_id: uuid.UUID | None = Query(None, alias="instructorId"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> PaginatedResponse[OrderResponse]:
    """
    List orders, newest first.

    Raises:
        400: startDate is after endDate
    """
    filters = OrderFilters(
        payment_status=payment_status,
        status=order_status,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        course_id=course_id,
        instructor_id=instructor_id,
    )
    orders, total = OrderService(db).list_orders(
        filters, skip=page_offset(page, limit), limit=limit
    )
    return paginated_response(
        [OrderResponse.model_validate(o) for o in orders], total=total, page=page, limit=limit
    )


@router.get("/{order_number}", response_model=ApiResponse[OrderResponse])
def get_order(
    order_number: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[OrderResponse]:
    order = OrderService(db).get_order(order_number)
    return success_response(OrderResponse.model_validate(order))


@router.patch("/{order_number}", response_model=ApiResponse[OrderResponse])
def update_order(
    order_number: str,
    patch: OrderUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[OrderResponse]:
    """
    Partially update an order.

    Moving ``paymentStatus`` to ``completed`` accrues instructor earnings
    once; if that fails the update is not applied.
    """
    order = OrderService(db).update_order(order_number, patch)
    return success_response(OrderResponse.model_validate(order))


@router.post("/{order_number}/complete-payment", response_model=ApiResponse[OrderResponse])
def complete_payment(
    order_number: str,
    body: CompletePaymentRequest | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[OrderResponse]:
    """Payment confirmation from the gateway collaborator. Safe to retry."""
    transaction_id = body.transaction_id if body else None
    order = OrderService(db).complete_payment(order_number, transaction_id=transaction_id)
    return success_response(OrderResponse.model_validate(order))
