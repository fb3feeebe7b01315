from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError

from .models import SessionData

logger = logging.getLogger(__name__)


@dataclass
class AuthStore:
    """Keeps the signed-in session between runs in the per-user data dir."""

    app_name: str = "barbearia"
    app_author: str = "BarbeariaMaster"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, self.app_author))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, session: SessionData) -> None:
        path = self._path()
        path.write_text(json.dumps(session.model_dump(mode="json"), indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            logger.warning("session_file_chmod_failed", extra={"path": str(path)})

    def load(self) -> SessionData | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
            return SessionData.model_validate(data)
        except (json.JSONDecodeError, ValidationError):
            logger.warning("session_file_discarded", extra={"path": str(path)})
            self.clear()
            return None

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
