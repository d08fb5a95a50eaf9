"""SQLAlchemy model for email delivery attempts."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class EmailLogModel(Base):
    """Database representation of a single email send attempt."""

    __tablename__ = "email_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    email_type = Column(String(30), nullable=False)
    activity_id = Column(Integer, nullable=True)
    sent_to = Column(String(120), nullable=False)
    subject = Column(String(255), nullable=False)
    status = Column(String(10), nullable=False)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["EmailLogModel"]
