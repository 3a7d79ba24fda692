import enum
import uuid
from sqlalchemy import Boolean, Column, DateTime, Numeric, String
from sqlalchemy.dialects.postgresql import UUID

from app.core.datetime_utils import utc_now
from app.db.session import Base


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    STUDENT = "student"
    INSTRUCTOR = "instructor"


class User(Base):
    """
    User model shared by students, instructors and admins.

    Attributes:
        id: Unique UUID primary key
        first_name: Given name
        last_name: Family name
        email: Unique email address (indexed for fast lookups)
        role: "admin", "student" or "instructor"
        profile: Avatar URL
        is_active: Whether the user account is active
        total_earnings: Lifetime accrued instructor earnings (after platform cut)
        pending_balance: Accrued earnings not yet paid out
        created_at: Account creation timestamp
        updated_at: Last update timestamp

    The two balance fields are only changed by
    ``SettlementService`` through a single atomic UPDATE; payouts
    decrement ``pending_balance`` elsewhere.
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    profile = Column(String(500), nullable=False, default="")

    role = Column(String(50), nullable=False, default=UserRole.STUDENT.value, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Instructor balances
    total_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    pending_balance = Column(Numeric(12, 2), nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
