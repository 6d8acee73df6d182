"""Appointment model definitions."""

from datetime import datetime, timedelta

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, func
from sqlalchemy.orm import relationship

from booking.core.config import CANCELLATION_WINDOW_HOURS
from booking.database import Base
from booking.models.user import User


class Appointment(Base):
    """A booking of a provider's hour by a user.

    ``canceled_at`` is null while the appointment is active. At most one
    active appointment may exist per provider and hour.
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    canceled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship(User, foreign_keys=[user_id])
    provider = relationship(User, foreign_keys=[provider_id])

    __table_args__ = (
        Index(
            "uq_appointments_active_slot",
            "provider_id",
            "date",
            unique=True,
            sqlite_where=canceled_at.is_(None),
            postgresql_where=canceled_at.is_(None),
        ),
        Index("idx_appointments_user_date", "user_id", "date"),
    )

    @property
    def past(self) -> bool:
        return self.date < datetime.now()

    @property
    def cancelable(self) -> bool:
        if self.canceled_at is not None:
            return False
        return datetime.now() < self.date - timedelta(hours=CANCELLATION_WINDOW_HOURS)
