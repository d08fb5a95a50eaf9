"""SQLAlchemy model for tracked activities."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ActivityModel(Base):
    """Database representation of a 5W2H activity."""

    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    area = Column(String(100), nullable=False, index=True)
    priority = Column(Integer, nullable=False, default=1)
    status = Column(String(20), nullable=False, default="pending", index=True)
    responsible = Column(String(100), nullable=True)
    deadline = Column(String(50), nullable=True)
    location = Column(String(200), nullable=True)
    how = Column(Text, nullable=True)
    cost = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    deleted_at = Column(DateTime, nullable=True, index=True)

    user = relationship("UserModel", lazy="joined")
    comments = relationship(
        "CommentModel",
        back_populates="activity",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        # Only one active (title, area) pair per owner; soft-deleted rows are exempt.
        Index(
            "uq_activity_owner_title_area_active",
            user_id,
            func.lower(title),
            func.lower(area),
            unique=True,
            sqlite_where=deleted_at.is_(None),
            postgresql_where=deleted_at.is_(None),
        ),
    )


__all__ = ["ActivityModel"]
