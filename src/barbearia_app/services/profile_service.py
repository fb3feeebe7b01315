from __future__ import annotations

import logging
from typing import Iterable

from barbearia_sdk import ApiSession
from barbearia_sdk.models import Profile, UserRole

from barbearia_app.services.errors import normalize_error

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_NAME = "Desconhecido"


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self, user_id: str) -> Profile | None:
        try:
            return self.session.profiles_client().get(user_id)
        except Exception as exc:
            logger.exception("profile_load_failure", extra={"user_id": user_id})
            raise normalize_error(exc, "Erro ao carregar perfil") from exc

    def load_role(self, user_id: str) -> UserRole:
        try:
            role = self.session.roles_client().get_role(user_id)
        except Exception as exc:
            logger.exception("role_load_failure", extra={"user_id": user_id})
            raise normalize_error(exc, "Erro ao carregar perfil") from exc
        if role is None:
            logger.info("role_missing_defaults_to_client", extra={"user_id": user_id})
            return UserRole.CLIENT
        return role

    def list_profiles(self) -> list[Profile]:
        try:
            return self.session.profiles_client().list(order_by_created_desc=True)
        except Exception as exc:
            logger.exception("profiles_list_failure")
            raise normalize_error(exc, "Erro ao carregar clientes") from exc

    def profiles_by_id(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return {}
        try:
            profiles = self.session.profiles_client().list_by_ids(ids)
        except Exception as exc:
            logger.exception("profiles_lookup_failure", extra={"count": len(ids)})
            raise normalize_error(exc, "Erro ao carregar clientes") from exc
        return {profile.id: profile for profile in profiles}
