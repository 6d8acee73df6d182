import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from booking.database import Base  # noqa: E402
from booking.models.appointment import Appointment  # noqa: E402
from booking.models.file import File  # noqa: E402
from booking.models.notification import Notification  # noqa: E402
from booking.models.user import User  # noqa: E402


class FakeDispatcher:
    def __init__(self):
        self.jobs = []

    async def enqueue(self, job_kind, payload):
        self.jobs.append((job_kind, payload))


@pytest.fixture
def session_factory():
    # One shared connection so worker threads see the same in-memory database.
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield testing_session_local
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def appointment_db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def make_user(appointment_db):
    def _make_user(name: str, provider: bool = False, avatar_path: str | None = None) -> User:
        avatar = File(name=f'{name}.png', path=avatar_path) if avatar_path else None
        user = User(
            name=name,
            email=f'{name.lower()}@example.com',
            provider=provider,
            avatar=avatar,
        )
        appointment_db.add(user)
        appointment_db.commit()
        appointment_db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_appointment(appointment_db):
    def _make_appointment(user: User, provider: User, date, canceled_at=None) -> Appointment:
        appointment = Appointment(
            user_id=user.id,
            provider_id=provider.id,
            date=date,
            canceled_at=canceled_at,
        )
        appointment_db.add(appointment)
        appointment_db.commit()
        appointment_db.refresh(appointment)
        return appointment

    return _make_appointment


@pytest.fixture
def notifications_for(appointment_db):
    def _notifications_for(user: User) -> list[Notification]:
        return appointment_db.query(Notification).filter(Notification.user == user.id).all()

    return _notifications_for
