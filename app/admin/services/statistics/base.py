"""Base utilities and helpers for statistics services."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StatisticsError
from app.core.money import round_cents, to_decimal

logger = structlog.get_logger(__name__)

ONE_DECIMAL = Decimal("0.1")


def current_year() -> int:
    return datetime.now(UTC).year


def get_year_boundaries(year: int) -> tuple[datetime, datetime]:
    """Get the half-open UTC range ``[Jan 1 year, Jan 1 year+1)``.

    Raises:
        ValueError: The year cannot be represented as a datetime range.
    """
    return datetime(year, 1, 1, tzinfo=UTC), datetime(year + 1, 1, 1, tzinfo=UTC)


def fill_months(rows: Iterable[tuple[Any, Any]], default: Any = 0) -> list[Any]:
    """Spread ``(month, value)`` rows over a 12-slot list, January first.

    Months without a row keep ``default``.
    """
    buckets = [default] * 12
    for month, value in rows:
        buckets[int(month) - 1] = value if value is not None else default
    return buckets


def round_rating(value: Decimal | float | None) -> float:
    """Round an average rating to one decimal; no reviews counts as 0."""
    if value is None:
        return 0.0
    return float(to_decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def round_money(value: Decimal | float | int | None) -> Decimal:
    """Sums are already per-order cents; this only normalises the scale and ``None``."""
    return round_cents(value)


@contextmanager
def aggregation_guard(view: str) -> Iterator[None]:
    """Turn database and range failures into ``StatisticsError``.

    Usable as a decorator. The cause is logged here and the client only
    receives the generic message.
    """
    try:
        yield
    except (SQLAlchemyError, ValueError, OverflowError) as e:
        logger.exception("statistics_query_failed", view=view, error=str(e))
        raise StatisticsError() from e
