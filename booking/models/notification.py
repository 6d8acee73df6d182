"""Notification model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from booking.database import Base


class Notification(Base):
    """An in-app notification addressed to a provider."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    content = Column(String, nullable=False)
    user = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
