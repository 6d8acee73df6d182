from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from booking.auth import jwt_handler
from booking.auth.dependencies import get_current_user_id
from booking.core import config


@pytest.fixture(autouse=True)
def use_test_sessions(session_factory, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('booking.auth.dependencies.SessionLocal', session_factory)


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def test_create_access_token_uses_user_id_as_subject() -> None:
    token = jwt_handler.create_access_token(42)

    payload = jwt_handler.decode_access_token(token)

    assert payload['sub'] == '42'
    assert payload['exp'] > payload['iat']


def test_get_current_user_id_resolves_token_subject(make_user) -> None:
    user = make_user('Ana')

    assert get_current_user_id(bearer(jwt_handler.create_access_token(user.id))) == user.id


def test_get_current_user_id_rejects_invalid_token() -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(bearer('not-a-jwt'))

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid token'


def test_get_current_user_id_rejects_expired_token(make_user) -> None:
    user = make_user('Ana')
    token = jwt.encode(
        {'sub': str(user.id), 'exp': datetime.now(timezone.utc) - timedelta(minutes=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(bearer(token))

    assert exception_info.value.detail == 'Invalid token'


def test_get_current_user_id_rejects_non_numeric_subject() -> None:
    token = jwt.encode({'sub': 'ana@example.com'}, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)

    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(bearer(token))

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid token subject'


def test_get_current_user_id_rejects_unknown_user(appointment_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_current_user_id(bearer(jwt_handler.create_access_token(404)))

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'User not found'
