"""Statistics schemas for the admin dashboard.

Chart payloads follow the Chart.js ``{labels, datasets}`` shape.
"""

import uuid

from pydantic import Field

from app.auth.models.user import UserRole
from app.core.datetime_utils import UTCDatetime
from app.core.money import Money
from app.core.schemas import CamelModel
from app.courses.models.course import CourseStatus, OfferType

# ============ Charts ============


class TrendDataset(CamelModel):
    """One line of a monthly trend chart (12 values, January first)."""

    label: str
    data: list[int | Money] = Field(min_length=12, max_length=12)
    border_color: str
    background_color: str
    fill: bool = False


class TrendChartResponse(CamelModel):
    labels: list[str]
    datasets: list[TrendDataset]


class DistributionDataset(CamelModel):
    data: list[int]
    background_color: list[str]


class DistributionChartResponse(CamelModel):
    labels: list[str]
    datasets: list[DistributionDataset]


# ============ Rankings ============


class CategoryCount(CamelModel):
    category: str
    count: int


class TopInstructor(CamelModel):
    """Instructor ranked by fulfilled enrollments across all of their courses."""

    id: uuid.UUID
    first_name: str
    last_name: str
    profile: str
    student_count: int
    course_count: int
    review_count: int
    average_rating: float = Field(description="Mean review rating, one decimal, 0 without reviews")


class CourseState(CamelModel):
    id: uuid.UUID
    title: str
    instructor_id: uuid.UUID
    enrolled: int
    average_rating: float


# ============ Catalog ============


class CourseInstructor(CamelModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    profile: str
    name: str = Field(description="Display name, first and last name")


class RecentCourse(CamelModel):
    id: uuid.UUID
    title: str
    category: str
    status: CourseStatus
    banner_image: str | None = None
    created_at: UTCDatetime
    instructor: CourseInstructor | None = None


class CourseOverview(CamelModel):
    """A course as listed in the admin catalog, with its review summary."""

    id: uuid.UUID
    title: str
    slug: str
    category: str
    status: CourseStatus
    offer_type: OfferType
    price: Money
    discounted_price: Money | None = None
    enrollment_count: int
    created_at: UTCDatetime
    instructor: CourseInstructor | None = None
    total_reviews: int
    average_rating: float = Field(description="Mean review rating, one decimal, 0 without reviews")


class UserSummary(CamelModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    role: UserRole
    profile: str
    is_active: bool
    created_at: UTCDatetime


# ============ Recent Purchases ============


class PurchaseUser(CamelModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str


class PurchaseCourse(CamelModel):
    id: uuid.UUID
    title: str


class PurchaseInstructor(CamelModel):
    id: uuid.UUID
    first_name: str
    last_name: str


class RecentPurchase(CamelModel):
    order_number: str = Field(alias="orderId")
    amount: Money
    effective_amount: Money
    currency: str
    created_at: UTCDatetime
    user: PurchaseUser | None = None
    course: PurchaseCourse | None = None
    instructor: PurchaseInstructor | None = None


# ============ Dashboard Summary ============


class StatCard(CamelModel):
    """Labelled metric rendered as a dashboard tile."""

    title: str
    value: int | float
    icon: str
    is_money: bool = False


class DashboardStatsResponse(CamelModel):
    total_courses: int
    active_courses: int
    pending_courses: int
    total_students: int
    total_instructors: int
    total_purchases: int
    total_revenue: Money
    recent_purchases: list[RecentPurchase]
    stats: list[StatCard]
