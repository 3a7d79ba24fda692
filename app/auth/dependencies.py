import logging
import uuid
from typing import Annotated, cast

from fastapi import Cookie, Depends, Header
from sqlalchemy.orm import Session

from app.auth.models.user import User, UserRole
from app.core import security
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.db.session import get_db

logger = logging.getLogger(__name__)


async def get_access_token(
    access_token: Annotated[str | None, Cookie()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Access token from the httpOnly cookie, or a Bearer header for service callers"""
    if access_token:
        return access_token
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    raise UnauthorizedError("Not authenticated")


async def get_validated_token_payload(token: str, expected_type: str = "access") -> dict:
    """Decode and validate JWT token"""
    payload = security.decode_token(token)

    if payload is None:
        raise UnauthorizedError("Could not validate credentials")

    if payload.get("type") != expected_type:
        raise UnauthorizedError(f"Invalid token type, expected {expected_type}")

    return payload


async def get_current_user(
    access_token: str = Depends(get_access_token),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user from access token"""
    payload = await get_validated_token_payload(access_token, expected_type="access")

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedError("Could not validate credentials") from None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthorizedError("User not found")

    if not user.is_active:
        raise ForbiddenError("Account is inactive")

    return cast(User, user)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ADMIN.value:
        logger.warning("Non-admin user %s attempted an admin endpoint", current_user.id)
        raise ForbiddenError("Admin privileges required")
    return current_user
