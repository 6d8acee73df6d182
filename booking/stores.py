"""Query helpers over the SQLAlchemy session used by the appointment workflow."""

from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from booking.core import errors
from booking.models.appointment import Appointment
from booking.models.notification import Notification
from booking.models.user import User


class AppointmentStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_active_for_user(self, user_id: int, limit: int, offset: int) -> list[Appointment]:
        """Active appointments of ``user_id`` with provider and avatar loaded."""
        return (
            self.db.query(Appointment)
            .options(joinedload(Appointment.provider).joinedload(User.avatar))
            .filter(
                Appointment.user_id == user_id,
                Appointment.canceled_at.is_(None),
            )
            .order_by(Appointment.date.asc(), Appointment.id.asc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def find_active_at(self, provider_id: int, date: datetime) -> Appointment | None:
        return self.db.query(Appointment).filter(
            Appointment.provider_id == provider_id,
            Appointment.canceled_at.is_(None),
            Appointment.date == date,
        ).first()

    def find_with_parties(self, appointment_id: int) -> Appointment | None:
        """Appointment with provider name/email and requester name loaded."""
        return (
            self.db.query(Appointment)
            .options(
                joinedload(Appointment.provider),
                joinedload(Appointment.user),
            )
            .filter(Appointment.id == appointment_id)
            .first()
        )

    def create(self, user_id: int, provider_id: int, date: datetime) -> Appointment:
        appointment = Appointment(user_id=user_id, provider_id=provider_id, date=date)
        self.db.add(appointment)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost the race for the slot between the availability read and this insert.
            self.db.rollback()
            raise errors.unavailable() from exc
        self.db.refresh(appointment)
        return appointment

    def save(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment


class ProviderDirectory:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_provider(self, provider_id: int) -> User | None:
        return self.db.query(User).filter(
            User.id == provider_id,
            User.provider.is_(True),
        ).first()

    def find_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)


class NotificationSink:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, content: str, recipient_id: int) -> Notification:
        notification = Notification(content=content, user=recipient_id)
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification
