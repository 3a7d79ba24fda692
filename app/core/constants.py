"""Application-wide constants.

This module centralizes magic numbers and configuration constants
that are used across multiple modules. For environment-specific
configuration, see config.py.
"""

# =============================================================================
# Pagination Defaults
# =============================================================================

# Default page size for list endpoints
DEFAULT_PAGE_SIZE: int = 20

# Maximum page size to prevent abuse
MAX_PAGE_SIZE: int = 100

# =============================================================================
# Dashboard Limits
# =============================================================================

# Top instructors ranked by enrollments
TOP_INSTRUCTORS_LIMIT: int = 5

# Categories shown in the distribution chart
TOP_CATEGORIES_LIMIT: int = 5

# Recent purchases feed length
RECENT_PURCHASES_LIMIT: int = 5

# Courses listed in the course performance table
COURSES_STATE_LIMIT: int = 20

# Newest courses shown on the dashboard
RECENT_COURSES_LIMIT: int = 4

# =============================================================================
# Chart Formatting
# =============================================================================

MONTH_LABELS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

ENROLLMENT_CHART_LABEL: str = "Course Enrollments"
ENROLLMENT_CHART_BORDER: str = "#5F2DED"
ENROLLMENT_CHART_BACKGROUND: str = "rgba(95, 45, 237, 0.1)"

REVENUE_CHART_LABEL: str = "Platform Revenue"
REVENUE_CHART_BORDER: str = "#4BC0C0"
REVENUE_CHART_BACKGROUND: str = "rgba(75, 192, 192, 0.1)"

CATEGORY_CHART_COLORS: tuple[str, ...] = (
    "#5F2DED",
    "#4BC0C0",
    "#FFCE56",
    "#FF6384",
    "#36A2EB",
)
