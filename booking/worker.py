"""
arq worker for appointment side effects.

Run with:
    arq booking.worker.WorkerSettings
"""

import asyncio
import logging
from datetime import datetime

from booking.core import config
from booking.core.dates import format_date_pt
from booking.mail import send_mail
from booking.dispatch import get_redis_settings

logger = logging.getLogger(__name__)

CANCELLATION_SUBJECT = 'Agendamento cancelado'


def build_cancellation_mail(appointment: dict) -> tuple[str, str, str]:
    """Return ``(to, subject, body)`` for a canceled appointment payload."""
    provider = appointment['provider']
    user = appointment['user']
    date = datetime.fromisoformat(appointment['date'])

    to = f"{provider['name']} <{provider['email']}>"
    body = (
        f"Olá, {provider['name']}\n\n"
        "Houve um cancelamento de horário, confira os detalhes abaixo:\n\n"
        f"Cliente: {user['name']}\n"
        f"Data/Hora: {format_date_pt(date)}\n\n"
        "O horário está novamente disponível para novos agendamentos.\n"
    )
    return to, CANCELLATION_SUBJECT, body


async def send_cancellation_mail_task(_ctx, appointment: dict) -> None:
    """
    Notify the provider by email that an appointment was canceled.

    Args:
        _ctx: arq context
        appointment: canceled appointment with nested ``provider`` and ``user``
    """
    to, subject, body = build_cancellation_mail(appointment)
    await asyncio.to_thread(send_mail, to, subject, body)
    logger.info('Sent cancellation mail for appointment %s', appointment['id'])


class WorkerSettings:
    functions = [send_cancellation_mail_task]
    redis_settings = get_redis_settings()
    max_jobs = config.ARQ_MAX_JOBS
    job_timeout = config.ARQ_JOB_TIMEOUT
    max_tries = 3
