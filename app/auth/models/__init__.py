from app.auth.models.user import User, UserRole

__all__ = ["User", "UserRole"]
