from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from barbearia_sdk import ClientConfig, ConfigError, load_config

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    client: ClientConfig
    log_level: int = logging.INFO
    session_app_name: str = "barbearia"


def load_app_config(env_file: str | None = None) -> AppConfig:
    load_dotenv(env_file)
    client = load_config(env_file)

    level_name = os.getenv("BARBEARIA_LOG_LEVEL", "INFO").strip().upper()
    if level_name not in _LOG_LEVELS:
        raise ConfigError(f"Invalid BARBEARIA_LOG_LEVEL: expected one of {', '.join(_LOG_LEVELS)}")

    app_name = os.getenv("BARBEARIA_SESSION_APP_NAME", "barbearia").strip()
    if not app_name:
        raise ConfigError("Invalid BARBEARIA_SESSION_APP_NAME: expected a non-empty name")

    return AppConfig(
        client=client,
        log_level=getattr(logging, level_name),
        session_app_name=app_name,
    )
