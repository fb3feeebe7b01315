from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from barbearia_sdk.models import AuthUser, UserRole


class Route(str, Enum):
    HOME = "/"
    AUTH = "/auth"
    MANAGER_DASHBOARD = "/painel-gerente"
    CLIENT_DASHBOARD = "/painel-cliente"
    CLIENTS_MANAGEMENT = "/gerenciar-clientes"
    SCHEDULE_BLOCKS = "/bloqueios-horarios"
    NOT_FOUND = "*"


class SessionStatus(str, Enum):
    LOADING = "loading"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class SessionContext:
    user: AuthUser | None = None
    role: UserRole | None = None
    display_name: str | None = None


@dataclass
class AppState:
    status: SessionStatus = SessionStatus.LOADING
    route: Route = Route.HOME
    path: str = Route.HOME.value
    error_message: str | None = None
    status_message: str = "Carregando..."
    session: SessionContext = field(default_factory=SessionContext)

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED and self.session.user is not None
