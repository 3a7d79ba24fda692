"""Statistics module for the admin dashboard.

This module is split into domain-specific services for better maintainability:
- base: Year ranges, rounding helpers, error translation
- catalog_service: Recent courses, course catalog and user listings
- dashboard_service: Dashboard counters and stat cards
- enrollment_service: Monthly enrollment trends
- revenue_service: Monthly and total platform revenue
- order_service: Recent purchases
- rankings_service: Instructor, category and course rankings
"""

from app.admin.services.statistics.base import (
    aggregation_guard,
    current_year,
    fill_months,
    get_year_boundaries,
    round_rating,
)
from app.admin.services.statistics.catalog_service import CatalogService
from app.admin.services.statistics.dashboard_service import DashboardService
from app.admin.services.statistics.enrollment_service import EnrollmentService
from app.admin.services.statistics.order_service import OrderStatisticsService
from app.admin.services.statistics.rankings_service import RankingsService
from app.admin.services.statistics.revenue_service import RevenueService

__all__ = [
    # Base utilities
    "aggregation_guard",
    "current_year",
    "fill_months",
    "get_year_boundaries",
    "round_rating",
    # Services
    "CatalogService",
    "DashboardService",
    "EnrollmentService",
    "OrderStatisticsService",
    "RankingsService",
    "RevenueService",
]
