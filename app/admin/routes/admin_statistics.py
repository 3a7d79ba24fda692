"""Statistics routes for the admin dashboard."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.admin.schemas.admin_statistics import (
    CourseOverview,
    CourseState,
    DashboardStatsResponse,
    DistributionChartResponse,
    RecentCourse,
    TopInstructor,
    TrendChartResponse,
    UserSummary,
)
from app.admin.services.statistics import (
    CatalogService,
    DashboardService,
    EnrollmentService,
    RankingsService,
    RevenueService,
    current_year,
)
from app.auth.dependencies import require_admin
from app.auth.models.user import User, UserRole
from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, RECENT_COURSES_LIMIT
from app.core.schemas import (
    ApiResponse,
    PaginatedResponse,
    page_offset,
    paginated_response,
    success_response,
)
from app.db.session import get_db

router = APIRouter(prefix="/dashboard", tags=["admin-statistics"])


@router.get("/stats", response_model=ApiResponse[DashboardStatsResponse])
async def get_dashboard_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[DashboardStatsResponse]:
    """
    Get the dashboard summary.

    Returns:
    - Course counters (total, published, pending)
    - Student and instructor counters
    - Purchases and platform revenue (paid and fulfilled orders)
    - Five most recent purchases
    - Stat cards ready for rendering
    """
    return success_response(DashboardService.get_stats(db))


@router.get("/enrollment-trends", response_model=ApiResponse[TrendChartResponse])
async def get_enrollment_trends(
    year: int | None = Query(None, description="Calendar year, defaults to the current year"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[TrendChartResponse]:
    """Get fulfilled orders per month as a line chart."""
    if year is None:
        year = current_year()
    return success_response(EnrollmentService.get_enrollment_chart(db, year))


@router.get("/revenue", response_model=ApiResponse[TrendChartResponse])
async def get_revenue_trends(
    year: int | None = Query(None, description="Calendar year, defaults to the current year"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[TrendChartResponse]:
    """Get platform revenue per month as a line chart."""
    if year is None:
        year = current_year()
    return success_response(RevenueService.get_revenue_chart(db, year))


@router.get("/course-distribution", response_model=ApiResponse[DistributionChartResponse])
async def get_course_distribution(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[DistributionChartResponse]:
    """Get the five largest course categories as a pie chart."""
    return success_response(RankingsService.get_category_chart(db))


@router.get("/top-instructors", response_model=ApiResponse[list[TopInstructor]])
async def get_top_instructors(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[list[TopInstructor]]:
    """Get the five instructors with the most fulfilled enrollments."""
    return success_response(RankingsService.get_top_instructors(db))


@router.get("/courses-state", response_model=ApiResponse[list[CourseState]])
async def get_courses_state(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[list[CourseState]]:
    """Get the most enrolled courses with their average rating."""
    return success_response(RankingsService.get_courses_state(db))


@router.get("/courses/recent", response_model=ApiResponse[list[RecentCourse]])
async def get_recent_courses(
    limit: int = Query(RECENT_COURSES_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ApiResponse[list[RecentCourse]]:
    """Get the newest courses with their instructor's name."""
    return success_response(CatalogService.get_recent_courses(db, limit=limit))


@router.get("/courses", response_model=PaginatedResponse[CourseOverview])
async def list_courses(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> PaginatedResponse[CourseOverview]:
    """List all courses, newest first, with review count and average rating."""
    courses, total = CatalogService.get_all_courses(
        db, skip=page_offset(page, limit), limit=limit
    )
    return paginated_response(courses, total=total, page=page, limit=limit)


@router.get("/users", response_model=PaginatedResponse[UserSummary])
async def list_users(
    role: UserRole | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> PaginatedResponse[UserSummary]:
    """List user accounts with their role, newest first."""
    users, total = CatalogService.get_users(
        db, role=role, skip=page_offset(page, limit), limit=limit
    )
    return paginated_response(users, total=total, page=page, limit=limit)
