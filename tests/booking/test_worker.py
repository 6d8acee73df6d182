import asyncio

import pytest

from booking import worker
from booking.dispatch import CANCELLATION_MAIL_JOB

APPOINTMENT_PAYLOAD = {
    'id': 3,
    'date': '2025-06-01T10:00:00',
    'user_id': 1,
    'provider_id': 2,
    'canceled_at': '2025-06-01T07:59:00',
    'past': False,
    'cancelable': False,
    'created_at': None,
    'updated_at': None,
    'provider': {'name': 'Paula', 'email': 'paula@example.com'},
    'user': {'name': 'Ana'},
}


def test_worker_registers_cancellation_mail_task() -> None:
    assert [function.__name__ for function in worker.WorkerSettings.functions] == [CANCELLATION_MAIL_JOB]


def test_build_cancellation_mail_addresses_provider() -> None:
    to, subject, body = worker.build_cancellation_mail(APPOINTMENT_PAYLOAD)

    assert to == 'Paula <paula@example.com>'
    assert subject == 'Agendamento cancelado'
    assert 'Olá, Paula' in body
    assert 'Cliente: Ana' in body
    assert 'Data/Hora: dia 01 de junho, às 10:00h' in body


def test_send_cancellation_mail_task_delivers_mail(monkeypatch: pytest.MonkeyPatch) -> None:
    sent = []
    monkeypatch.setattr(worker, 'send_mail', lambda to, subject, body: sent.append((to, subject, body)))

    asyncio.run(worker.send_cancellation_mail_task({}, appointment=APPOINTMENT_PAYLOAD))

    assert len(sent) == 1
    assert sent[0][0] == 'Paula <paula@example.com>'
    assert sent[0][1] == 'Agendamento cancelado'
