import pytest

from booking import issue_token
from booking.auth import jwt_handler


@pytest.fixture(autouse=True)
def use_test_sessions(session_factory, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('booking.issue_token.SessionLocal', session_factory)


def test_main_prints_token_for_existing_user(make_user, capsys: pytest.CaptureFixture[str]) -> None:
    user = make_user('Ana')

    issue_token.main([str(user.id), '15'])

    token = capsys.readouterr().out.strip()
    payload = jwt_handler.decode_access_token(token)
    assert payload['sub'] == str(user.id)
    assert abs(payload['exp'] - payload['iat'] - 15 * 60) <= 1


def test_main_exits_when_user_is_missing(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exit_info:
        issue_token.main(['404'])

    assert exit_info.value.code == 1
    assert 'User 404 not found' in capsys.readouterr().err


@pytest.mark.parametrize('argv', [[], ['ana'], ['1', 'soon']])
def test_main_rejects_bad_arguments(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exit_info:
        issue_token.main(argv)

    assert exit_info.value.code == 2
