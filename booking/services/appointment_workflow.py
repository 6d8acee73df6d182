"""
Appointment workflow: listing, booking and cancelling appointments.

Each operation re-reads committed state through the injected stores and
applies its guard clauses in a fixed order; the first failing rule is
raised as an ``AppointmentError``.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError

from booking.core import errors
from booking.core.config import APPOINTMENTS_PAGE_SIZE, CANCELLATION_WINDOW_HOURS
from booking.core.dates import format_date_pt, start_of_hour
from booking.dispatch import CANCELLATION_MAIL_JOB, JobDispatcher
from booking.models.appointment import Appointment
from booking.schemas import CanceledAppointmentResponse, CreateAppointmentRequest
from booking.stores import AppointmentStore, NotificationSink, ProviderDirectory

logger = logging.getLogger(__name__)


def parse_create_request(payload: Mapping[str, Any] | CreateAppointmentRequest) -> CreateAppointmentRequest:
    if isinstance(payload, CreateAppointmentRequest):
        return payload
    try:
        return CreateAppointmentRequest.model_validate(payload)
    except ValidationError as exc:
        raise errors.ValidationFailed() from exc


def build_cancellation_payload(appointment: Appointment) -> dict[str, Any]:
    return {
        'appointment': CanceledAppointmentResponse.model_validate(appointment).model_dump(mode='json'),
    }


class AppointmentWorkflow:
    def __init__(
        self,
        appointments: AppointmentStore,
        providers: ProviderDirectory,
        notifications: NotificationSink,
        dispatcher: JobDispatcher,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.appointments = appointments
        self.providers = providers
        self.notifications = notifications
        self.dispatcher = dispatcher
        self.clock = clock

    def list_appointments(self, acting_user_id: int, page: int = 1) -> list[Appointment]:
        offset = (page - 1) * APPOINTMENTS_PAGE_SIZE
        return self.appointments.list_active_for_user(
            acting_user_id,
            limit=APPOINTMENTS_PAGE_SIZE,
            offset=offset,
        )

    def create_appointment(
        self,
        acting_user_id: int,
        payload: Mapping[str, Any] | CreateAppointmentRequest,
    ) -> Appointment:
        data = parse_create_request(payload)

        if acting_user_id == data.provider_id:
            raise errors.self_booking()

        if self.providers.find_provider(data.provider_id) is None:
            raise errors.not_a_provider()

        hour_start = start_of_hour(data.date)
        if hour_start < self.clock():
            raise errors.past_date()

        if self.appointments.find_active_at(data.provider_id, hour_start) is not None:
            raise errors.unavailable()

        appointment = self.appointments.create(
            user_id=acting_user_id,
            provider_id=data.provider_id,
            date=hour_start,
        )
        logger.info('Appointment %s booked with provider %s', appointment.id, data.provider_id)

        requester = self.providers.find_user(acting_user_id)
        self.notifications.create(
            content=f'Novo agendamento de {requester.name} para {format_date_pt(hour_start)}',
            recipient_id=data.provider_id,
        )

        return appointment

    def _cancel_and_build_payload(self, acting_user_id: int, appointment_id: int) -> tuple[Appointment, dict[str, Any]]:
        appointment = self.appointments.find_with_parties(appointment_id)

        if appointment is None:
            raise errors.appointment_not_found()

        if appointment.canceled_at is not None:
            raise errors.already_canceled()

        if appointment.user_id != acting_user_id:
            raise errors.no_permission()

        now = self.clock()
        if appointment.date - timedelta(hours=CANCELLATION_WINDOW_HOURS) < now:
            raise errors.too_late_to_cancel(CANCELLATION_WINDOW_HOURS)

        appointment.canceled_at = now
        appointment = self.appointments.save(appointment)
        logger.info('Appointment %s canceled by user %s', appointment.id, acting_user_id)

        return appointment, build_cancellation_payload(appointment)

    async def cancel_appointment(self, acting_user_id: int, appointment_id: int) -> Appointment:
        """Cancel in a worker thread, then submit the mail job on the event loop."""
        appointment, payload = await asyncio.to_thread(
            self._cancel_and_build_payload,
            acting_user_id,
            appointment_id,
        )

        await self.dispatcher.enqueue(CANCELLATION_MAIL_JOB, payload)

        return appointment
