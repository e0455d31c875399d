# storefront/data/models/user_session.py
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from storefront.data.database import Base


class UserSessionModel(Base):
    """Server-side session row, keyed by the value of the session cookie."""

    __tablename__ = "user_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
