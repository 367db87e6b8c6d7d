import pytest

from creative_lab.errors import AuthError
from creative_lab.services import Authenticator, StaticCredentialStore


@pytest.fixture
def authenticator():
    return Authenticator(StaticCredentialStore({"Jatin@MegaTech.com": "simran12"}))


def test_login_normalizes_email(authenticator):
    session = authenticator.login("  JATIN@megatech.com ", "simran12")

    assert session.user.email == "jatin@megatech.com"
    assert authenticator.current_user(session.token) == session.user


@pytest.mark.parametrize("email,password", [
    ("jatin@megatech.com", "wrong"),
    ("hari@megatech.com", "simran12"),
    ("", ""),
])
def test_bad_credentials(authenticator, email, password):
    with pytest.raises(AuthError):
        authenticator.login(email, password)


def test_logout_ends_session(authenticator):
    session = authenticator.login("jatin@megatech.com", "simran12")
    authenticator.logout(session.token)

    assert authenticator.current_user(session.token) is None
    with pytest.raises(AuthError):
        authenticator.require_user(session.token)


def test_sessions_are_distinct(authenticator):
    first = authenticator.login("jatin@megatech.com", "simran12")
    second = authenticator.login("jatin@megatech.com", "simran12")

    assert first.token != second.token
    assert authenticator.current_user(None) is None
