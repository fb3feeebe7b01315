"""Role-gated routing.

The backend enforces row access; these checks only decide which screen a
signed-in user lands on.
"""

from __future__ import annotations

from dataclasses import dataclass

from barbearia_sdk.models import UserRole

from barbearia_app.app.state import AppState, Route


@dataclass(frozen=True)
class RouteSpec:
    route: Route
    label: str
    protected: bool = False
    required_role: UserRole | None = None


ROUTE_SPECS: tuple[RouteSpec, ...] = (
    RouteSpec(Route.HOME, "Início"),
    RouteSpec(Route.AUTH, "Entrar"),
    RouteSpec(Route.MANAGER_DASHBOARD, "Painel do Gerente", True, UserRole.MANAGER),
    RouteSpec(Route.CLIENT_DASHBOARD, "Meus Agendamentos", True, UserRole.CLIENT),
    RouteSpec(Route.CLIENTS_MANAGEMENT, "Gerenciar Clientes", True, UserRole.MANAGER),
    RouteSpec(Route.SCHEDULE_BLOCKS, "Bloqueios de Horários", True, UserRole.MANAGER),
)

_SPECS_BY_PATH = {spec.route.value: spec for spec in ROUTE_SPECS}


@dataclass(frozen=True)
class RouteDecision:
    route: Route
    path: str
    redirected: bool = False
    loading: bool = False

    @property
    def not_found(self) -> bool:
        return self.route is Route.NOT_FOUND


def spec_for_path(path: str) -> RouteSpec | None:
    normalized = "/" + path.strip().strip("/") if path.strip() not in ("", "/") else "/"
    return _SPECS_BY_PATH.get(normalized)


def home_route_for(role: UserRole | None) -> Route | None:
    if role is UserRole.MANAGER:
        return Route.MANAGER_DASHBOARD
    if role is UserRole.CLIENT:
        return Route.CLIENT_DASHBOARD
    return None


def _redirect(route: Route) -> RouteDecision:
    return RouteDecision(route=route, path=route.value, redirected=True)


def resolve_route(path: str, state: AppState) -> RouteDecision:
    spec = spec_for_path(path)
    if spec is None:
        return RouteDecision(route=Route.NOT_FOUND, path=path)
    if state.is_loading:
        return RouteDecision(route=spec.route, path=spec.route.value, loading=True)

    role = state.session.role if state.is_authenticated else None
    if spec.protected:
        if not state.is_authenticated:
            return _redirect(Route.AUTH)
        if spec.required_role is not None and role is not spec.required_role:
            return _redirect(home_route_for(role) or Route.CLIENT_DASHBOARD)
        return RouteDecision(route=spec.route, path=spec.route.value)

    own_home = home_route_for(role)
    if own_home is not None:
        return _redirect(own_home)
    return RouteDecision(route=spec.route, path=spec.route.value)


def visible_routes(role: UserRole | None) -> list[RouteSpec]:
    return [spec for spec in ROUTE_SPECS if spec.protected and spec.required_role is role]
