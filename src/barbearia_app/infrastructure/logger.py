from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ACTION_LOGGER = "barbearia_app.actions"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def get_logger(name: str = ACTION_LOGGER) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    trace_id: str | None,
    outcome: str,
) -> None:
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": module,
                "action": action,
                "actor_role": actor_role,
                "trace_id": trace_id,
                "outcome": outcome,
            },
            ensure_ascii=False,
        )
    )
