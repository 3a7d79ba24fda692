"""Response envelopes shared by the order and dashboard APIs.

Successful responses are ``{"success": true, "data": ..., "meta": ...}``;
errors use the same envelope and are produced by ``app.core.exceptions``.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for payloads exchanged with the dashboard frontend.

    Attributes stay snake_case in Python and are serialized as camelCase
    (``total_revenue`` -> ``totalRevenue``). Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Single-object envelope (one order, one dashboard view)."""

    success: bool = True
    data: T | None = None
    error: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class PaginationMeta(BaseModel):
    """Page position of an order listing."""

    total: int = Field(..., description="Orders matching the filters")
    page: int = Field(..., ge=1, description="Current page number, 1-indexed")
    limit: int = Field(..., ge=1, le=100, description="Orders per page")
    pages: int = Field(..., ge=0, description="Total number of pages")

    @classmethod
    def from_query(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(total=total, page=page, limit=limit, pages=pages)


class PaginatedResponse(BaseModel, Generic[T]):
    """List envelope; ``meta`` always carries the page position."""

    success: bool = True
    data: list[T]
    meta: PaginationMeta


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-indexed page."""
    return (page - 1) * limit


def success_response(data: T, meta: dict[str, Any] | None = None) -> ApiResponse[T]:
    return ApiResponse(success=True, data=data, meta=meta)


def paginated_response(
    data: list[T],
    total: int,
    page: int,
    limit: int,
) -> PaginatedResponse[T]:
    """Wrap one page of results.

    Args:
        data: Items on the current page.
        total: Items matching the query across all pages.
        page: Current page number.
        limit: Items per page.
    """
    return PaginatedResponse(
        data=data,
        meta=PaginationMeta.from_query(total, page, limit),
    )
