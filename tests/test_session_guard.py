"""Tests for credential checks and the in-memory session table."""

from __future__ import annotations

import threading

import pytest

from talent_api.errors import InvalidCredentials, Unauthenticated
from talent_api.services.account_service import DEFAULT_ACCOUNTS, CredentialStore
from talent_api.services.session_service import SessionGuard


class FakeClock:
    def __init__(self, start: int = 1_700_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now


@pytest.fixture(scope="module")
def credentials() -> CredentialStore:
    return CredentialStore.from_plaintext(DEFAULT_ACCOUNTS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def guard(credentials, clock) -> SessionGuard:
    return SessionGuard(credentials, ttl_seconds=3600, clock=clock)


def test_passwords_are_stored_hashed(credentials):
    account = credentials.find("admin")
    assert account is not None
    assert account.password_hash != "admin123"
    assert account.role == "admin"


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        CredentialStore.from_plaintext([("ops", "ops@example.com", "pw", "superuser")])


def test_login_by_username_and_email(guard):
    by_name = guard.login("hr", "hr123")
    by_email = guard.login("admin@ittalentsolution.com", "admin123")

    assert by_name.user_dict() == {
        "id": 2,
        "username": "hr",
        "email": "hr@ittalentsolution.com",
        "role": "hr",
    }
    assert by_email.username == "admin"
    assert by_name.token != by_email.token
    assert guard.validate(by_name.token) == by_name
    assert len(guard) == 2


@pytest.mark.parametrize(
    "identifier, password",
    [("hr", "wrong"), ("nobody", "hr123"), ("", ""), ("hr", "")],
)
def test_bad_credentials_create_no_session(guard, identifier, password):
    with pytest.raises(InvalidCredentials):
        guard.login(identifier, password)
    assert len(guard) == 0


def test_session_expires_after_ttl(guard, clock):
    session = guard.login("hr", "hr123")
    assert session.expires_at == session.created_at + 3600

    clock.now += 3599
    assert guard.validate(session.token) is not None

    clock.now += 1
    assert guard.validate(session.token) is None
    assert len(guard) == 0


def test_destroy_is_idempotent(guard):
    session = guard.login("admin", "admin123")

    guard.destroy(session.token)
    guard.destroy(session.token)
    guard.destroy(None)

    assert guard.validate(session.token) is None


def test_require_session(guard, clock):
    with pytest.raises(Unauthenticated):
        guard.require_session(None)
    with pytest.raises(Unauthenticated):
        guard.require_session("sess_made_up")

    session = guard.login("hr", "hr123")
    assert guard.require_session(session.token) == session

    clock.now += 3600
    with pytest.raises(Unauthenticated):
        guard.require_session(session.token)


def test_prune_expired_only_drops_stale_sessions(guard, clock):
    old = guard.login("hr", "hr123")
    clock.now += 1800
    fresh = guard.login("admin", "admin123")
    clock.now += 1800

    assert guard.prune_expired() == 1
    assert guard.validate(old.token) is None
    assert guard.validate(fresh.token) == fresh


def test_tokens_in_other_shards_are_not_blocked(guard):
    held = guard.login("hr", "hr123")
    other = guard.login("admin", "admin123")
    while guard.shard_for(other.token) is guard.shard_for(held.token):
        other = guard.login("admin", "admin123")

    lock, _ = guard.shard_for(held.token)
    results = []
    with lock:
        worker = threading.Thread(target=lambda: results.append(guard.validate(other.token)))
        worker.start()
        worker.join(timeout=2)
        assert not worker.is_alive()

    assert results == [other]
    assert guard.validate(held.token) == held
