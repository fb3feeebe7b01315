from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    backend_url: str
    anon_key: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load backend config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("BARBEARIA_ENV") or "dev").strip()
    env_key = env_name.upper()

    backend_url = (
        (os.getenv(f"BARBEARIA_BACKEND_URL_{env_key}") or "").strip()
        or (os.getenv("BARBEARIA_BACKEND_URL") or "").strip()
    )
    anon_key = (os.getenv("BARBEARIA_ANON_KEY") or "").strip()

    timeout_seconds = _read_float("BARBEARIA_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid BARBEARIA_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "BARBEARIA_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid BARBEARIA_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "BARBEARIA_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid BARBEARIA_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    retries = _read_int("BARBEARIA_RETRIES", "2")
    _validate(retries >= 0, f"Invalid BARBEARIA_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("BARBEARIA_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        (
            "Invalid BARBEARIA_RETRY_BACKOFF_SECONDS: "
            f"expected >= 0, got {retry_backoff_seconds}"
        ),
    )

    max_connections = _read_int("BARBEARIA_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid BARBEARIA_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    verify_ssl = _coerce_bool(os.getenv("BARBEARIA_VERIFY_SSL"), True)

    values = {"BARBEARIA_BACKEND_URL": backend_url, "BARBEARIA_ANON_KEY": anon_key}
    _require(values, ["BARBEARIA_BACKEND_URL", "BARBEARIA_ANON_KEY"])

    return ClientConfig(
        env_name=env_name,
        backend_url=backend_url.rstrip("/"),
        anon_key=anon_key,
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
    )
