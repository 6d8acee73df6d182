"""Errors raised by the appointment workflow.

Every error carries a machine-readable ``kind`` and a human-readable
``message``; the HTTP layer renders them with ``status_code``.
"""

from fastapi import status


class AppointmentError(Exception):
    kind = 'appointment_error'
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, kind: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'error': self.message, 'kind': self.kind}


class ValidationFailed(AppointmentError):
    kind = 'validation_fails'

    def __init__(self, message: str = 'Validation fails') -> None:
        super().__init__(message)


class PolicyViolation(AppointmentError):
    """A business rule rejected the request."""


class NotFound(AppointmentError):
    status_code = status.HTTP_404_NOT_FOUND


class DependencyFailure(AppointmentError):
    kind = 'dependency_failure'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class DispatchFailure(DependencyFailure):
    """The background job could not be submitted to the queue."""


def self_booking() -> PolicyViolation:
    return PolicyViolation(
        'Cannot create appointments for yourself',
        kind='self_booking',
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


def not_a_provider() -> PolicyViolation:
    return PolicyViolation(
        'We can only create appointments with providers',
        kind='not_a_provider',
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


def past_date() -> PolicyViolation:
    return PolicyViolation('Past dates are not permitted', kind='past_date')


def unavailable() -> PolicyViolation:
    return PolicyViolation('Appointment date is not available', kind='unavailable')


def appointment_not_found() -> NotFound:
    return NotFound('Appointment does not exist', kind='not_found')


def already_canceled() -> PolicyViolation:
    return PolicyViolation('Appointment already canceled', kind='already_canceled')


def no_permission() -> PolicyViolation:
    return PolicyViolation(
        "You don't have permission to cancel this appointment",
        kind='no_permission',
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


def too_late_to_cancel(window_hours: int) -> PolicyViolation:
    return PolicyViolation(
        f'You can only cancel appointments {window_hours} hours in advance',
        kind='too_late_to_cancel',
    )
