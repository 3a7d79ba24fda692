"""
Database base module - imports all models for Alembic migration detection.

This module imports all SQLAlchemy models to ensure they are registered
with Alembic for automatic migration generation. While the imports appear
unused, they are essential for the migration system to work properly.
"""

from app.auth.models.user import User
from app.courses.models.course import Course
from app.courses.models.review import Review
from app.db.session import Base
from app.orders.models.order import Order

# Export all models for Alembic
__all__ = [
    "Base",
    "User",
    "Course",
    "Review",
    "Order",
]
