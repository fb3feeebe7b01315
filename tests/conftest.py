from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
SRC_DIR = TESTS_DIR.parent / "src"

for path in (SRC_DIR, TESTS_DIR):
    sys.path.insert(0, str(path))

from barbearia_sdk.config import ClientConfig  # noqa: E402
from barbearia_sdk.http_client import HttpClient  # noqa: E402
from barbearia_sdk.tracing import TraceContext  # noqa: E402

from factories import BASE_URL  # noqa: E402

_ENV_KEYS = (
    "BARBEARIA_ENV",
    "BARBEARIA_BACKEND_URL",
    "BARBEARIA_BACKEND_URL_DEV",
    "BARBEARIA_BACKEND_URL_PROD",
    "BARBEARIA_ANON_KEY",
    "BARBEARIA_TIMEOUT_SECONDS",
    "BARBEARIA_CONNECT_TIMEOUT_SECONDS",
    "BARBEARIA_READ_TIMEOUT_SECONDS",
    "BARBEARIA_RETRIES",
    "BARBEARIA_RETRY_BACKOFF_SECONDS",
    "BARBEARIA_MAX_CONNECTIONS",
    "BARBEARIA_VERIFY_SSL",
    "BARBEARIA_LOG_LEVEL",
    "BARBEARIA_SESSION_APP_NAME",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in _ENV_KEYS:
        # setenv first so values loaded from .env files during a test are undone too.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    # No .env files in reach.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(
        env_name="test",
        backend_url=BASE_URL,
        anon_key="anon-key",
        retries=1,
        retry_backoff_seconds=0,
    )


@pytest.fixture
def http(client_config: ClientConfig) -> HttpClient:
    return HttpClient(client_config, trace=TraceContext())
