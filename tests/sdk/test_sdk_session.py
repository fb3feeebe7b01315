from __future__ import annotations

import time

from barbearia_sdk.auth_store import AuthStore
from barbearia_sdk.clients import AppointmentsClient
from barbearia_sdk.models import AuthSession, AuthUser, SessionData
from barbearia_sdk.session import ApiSession

from factories import CLIENT_ID


def _user() -> AuthUser:
    return AuthUser(id=CLIENT_ID, email="joao@example.com")


def test_auth_store_round_trip(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="a", refresh_token="r", expires_at=10, user=_user(), env_name="test"))

    loaded = store.load()

    assert loaded.access_token == "a"
    assert loaded.user.id == CLIENT_ID
    assert (tmp_path / "session.json").stat().st_mode & 0o777 == 0o600

    store.clear()
    assert store.load() is None


def test_auth_store_discards_corrupt_file(tmp_path) -> None:
    (tmp_path / "session.json").write_text("{not json")
    store = AuthStore(base_dir=tmp_path)

    assert store.load() is None
    assert not (tmp_path / "session.json").exists()


def test_session_restores_matching_environment(client_config, tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="a", refresh_token="r", expires_at=None, user=_user(), env_name="test"))

    session = ApiSession(config=client_config, auth_store=store)

    assert session.token == "a"
    assert session.is_authenticated
    assert not session.is_expired()
    client = session.appointments_client()
    assert isinstance(client, AppointmentsClient)
    assert client.access_token == "a"


def test_session_ignores_other_environment(client_config, tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="a", user=_user(), env_name="prod"))

    session = ApiSession(config=client_config, auth_store=store)

    assert session.token is None
    assert session.is_expired()


def test_establish_computes_expiry_and_persists(client_config, tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    session = ApiSession(config=client_config, auth_store=store)
    before = int(time.time())

    session.establish(AuthSession(access_token="a", refresh_token="r", expires_in=3600, user=_user()))

    assert before + 3600 <= session.expires_at <= int(time.time()) + 3600
    assert session.is_expired(now=session.expires_at)
    assert not session.is_expired(now=session.expires_at - 1)
    assert store.load().env_name == "test"

    session.clear()

    assert session.token is None
    assert session.user is None
    assert store.load() is None
