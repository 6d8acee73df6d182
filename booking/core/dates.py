from datetime import datetime

MONTHS_PT = [
    'janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho',
    'julho', 'agosto', 'setembro', 'outubro', 'novembro', 'dezembro',
]


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def start_of_hour(value: datetime) -> datetime:
    return value.replace(minute=0, second=0, microsecond=0)


def format_date_pt(value: datetime) -> str:
    """Format as e.g. ``dia 01 de junho, às 10:00h``."""
    return f'dia {value.day:02d} de {MONTHS_PT[value.month - 1]}, às {value.hour}:{value.minute:02d}h'
