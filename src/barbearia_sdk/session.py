from __future__ import annotations

import time
from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.appointments import AppointmentsClient
from .clients.auth import AuthClient
from .clients.blocks import BlocksClient
from .clients.product_sales import ProductSalesClient
from .clients.products import ProductsClient
from .clients.profiles import ProfilesClient
from .clients.roles import RolesClient
from .clients.settings import SettingsClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import AuthSession, AuthUser, SessionData
from .tracing import TraceContext


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    user: AuthUser | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        stored = self.auth_store.load()
        if stored and not self.token and stored.env_name in (None, self.config.env_name):
            self.token = stored.access_token
            self.refresh_token = stored.refresh_token
            self.expires_at = stored.expires_at
            self.user = stored.user

    def _http(self) -> HttpClient:
        return HttpClient(config=self.config, trace=self.trace)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http(), access_token=self.token)

    def profiles_client(self) -> ProfilesClient:
        return ProfilesClient(http=self._http(), access_token=self.token)

    def roles_client(self) -> RolesClient:
        return RolesClient(http=self._http(), access_token=self.token)

    def appointments_client(self) -> AppointmentsClient:
        return AppointmentsClient(http=self._http(), access_token=self.token)

    def blocks_client(self) -> BlocksClient:
        return BlocksClient(http=self._http(), access_token=self.token)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self._http(), access_token=self.token)

    def product_sales_client(self) -> ProductSalesClient:
        return ProductSalesClient(http=self._http(), access_token=self.token)

    def settings_client(self) -> SettingsClient:
        return SettingsClient(http=self._http(), access_token=self.token)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    def is_expired(self, now: float | None = None) -> bool:
        if not self.token:
            return True
        if self.expires_at is None:
            return False
        current = time.time() if now is None else now
        return current >= self.expires_at

    def establish(self, auth: AuthSession, user: AuthUser | None = None) -> None:
        self.token = auth.access_token
        self.refresh_token = auth.refresh_token
        self.expires_at = auth.expires_at
        if self.expires_at is None and auth.expires_in is not None:
            self.expires_at = int(time.time()) + auth.expires_in
        self.user = user or auth.user
        self.auth_store.save(
            SessionData(
                access_token=self.token,
                refresh_token=self.refresh_token,
                expires_at=self.expires_at,
                user=self.user,
                env_name=self.config.env_name,
            )
        )

    def clear(self) -> None:
        self.token = None
        self.refresh_token = None
        self.expires_at = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
