from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import AuthSession, AuthUser
from .base import BaseClient


@dataclass
class AuthClient(BaseClient):
    def sign_in(self, email: str, password: str) -> AuthSession:
        data = self.http.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json_body={"email": email, "password": password},
            module="auth",
            operation="sign_in",
        )
        return AuthSession.model_validate(data)

    def sign_up(self, email: str, password: str, name: str, phone: str | None = None) -> AuthSession | AuthUser:
        """Register an account; the profile row is created server-side from ``data``.

        Returns a session when the backend logs the user in straight away, or
        only the user when e-mail confirmation is pending.
        """
        metadata: dict[str, Any] = {"name": name}
        if phone:
            metadata["phone"] = phone
        data = self.http.request(
            "POST",
            "/auth/v1/signup",
            json_body={"email": email, "password": password, "data": metadata},
            module="auth",
            operation="sign_up",
        )
        if not isinstance(data, dict):
            raise ValueError("Expected signup response to be a JSON object")
        if data.get("access_token"):
            return AuthSession.model_validate(data)
        return AuthUser.model_validate(data.get("user") or data)

    def sign_out(self, access_token: str | None = None) -> None:
        token = access_token or self.access_token
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.http.request("POST", "/auth/v1/logout", headers=headers, module="auth", operation="sign_out")

    def get_user(self) -> AuthUser:
        data = self._request("GET", "/auth/v1/user", module="auth", operation="get_user")
        return AuthUser.model_validate(data)

    def refresh(self, refresh_token: str) -> AuthSession:
        data = self.http.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json_body={"refresh_token": refresh_token},
            module="auth",
            operation="refresh",
        )
        return AuthSession.model_validate(data)
