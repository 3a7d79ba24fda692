import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.datetime_utils import utc_now
from app.db.session import Base


class CourseStatus(str, enum.Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


class OfferType(str, enum.Enum):
    FREE = "free"
    PREMIUM = "premium"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    instructor_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column()
    slug: Mapped[str] = mapped_column(unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    discounted_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), default=None)
    category: Mapped[str] = mapped_column(default="All", index=True)
    offer_type: Mapped[OfferType] = mapped_column(
        Enum(OfferType, values_callable=lambda obj: [e.value for e in obj]),
        default=OfferType.PREMIUM,
    )
    description: Mapped[str | None] = mapped_column(default=None)
    language: Mapped[str] = mapped_column(default="English")
    banner_image: Mapped[str | None] = mapped_column(default=None)
    # Denormalised count of fulfilled orders, see OrderService.refresh_enrollment_count
    enrollment_count: Mapped[int] = mapped_column(default=0)
    status: Mapped[CourseStatus] = mapped_column(
        Enum(CourseStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=CourseStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    instructor = relationship("User", foreign_keys=[instructor_id])
    reviews = relationship("Review", back_populates="course", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, slug={self.slug}, title={self.title})>"
