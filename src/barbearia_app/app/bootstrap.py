from __future__ import annotations

import logging
from dataclasses import dataclass, field

from barbearia_sdk import ApiSession, AuthStore, ChangeFeed
from barbearia_sdk.models import AuthSession, AuthUser, UserRole
from barbearia_sdk.validation import LoginForm, SignupForm, validate_form

from barbearia_app.app.navigation import home_route_for, resolve_route
from barbearia_app.app.state import AppState, Route, SessionStatus
from barbearia_app.config import AppConfig, load_app_config
from barbearia_app.infrastructure.logger import get_logger, log_action
from barbearia_app.services.auth_service import AuthService
from barbearia_app.services.errors import ServiceError
from barbearia_app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    status: SessionStatus
    error_message: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    notice: str | None = None


class AppBootstrap:
    """Owns the session lifecycle: loading, then anonymous or authenticated."""

    def __init__(
        self,
        config: AppConfig | None = None,
        session: ApiSession | None = None,
        feed: ChangeFeed | None = None,
    ) -> None:
        if session is None:
            config = config or load_app_config()
            session = ApiSession(config.client, auth_store=AuthStore(app_name=config.session_app_name))
        self.config = config
        self.session = session
        self.feed = feed or ChangeFeed()
        self.state = AppState()
        self.auth_service = AuthService(session)
        self.profile_service = ProfileService(session)
        self._audit = get_logger()

    @property
    def role(self) -> UserRole | None:
        return self.state.session.role

    @property
    def user(self) -> AuthUser | None:
        return self.state.session.user

    def start(self, path: str = Route.HOME.value) -> BootstrapResult:
        self.state.status = SessionStatus.LOADING
        self.state.status_message = "Carregando..."
        try:
            user = self.auth_service.restore()
        except Exception:
            logger.exception("session_restore_failure")
            self._become_anonymous()
            self.state.error_message = "Não foi possível validar a sessão"
            return self.navigate(path)
        if user is None:
            self._become_anonymous()
            return self.navigate(path)
        self._become_authenticated(user)
        return self.navigate(path)

    def sign_in(self, email: str, password: str) -> BootstrapResult:
        result = validate_form(LoginForm, {"email": email, "password": password})
        if not result.is_valid:
            return self._result(self.state.route, error=result.first_error, field_errors=result.field_errors)
        self.state.error_message = None
        try:
            auth = self.auth_service.sign_in(result.form)  # type: ignore[arg-type]
        except ServiceError as exc:
            self._audit_action("sign_in", exc.trace_id, "failure")
            return self._result(self.state.route, error=exc.message)
        self._become_authenticated(self._user_from(auth))
        self._audit_action("sign_in", None, "success")
        target = home_route_for(self.role) or Route.HOME
        return self._result(self.navigate(target.value).route, notice="Login realizado com sucesso!")

    def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: str | None = None,
    ) -> BootstrapResult:
        result = validate_form(
            SignupForm,
            {"name": name, "email": email, "password": password, "confirm_password": confirm_password},
        )
        if not result.is_valid:
            return self._result(self.state.route, error=result.first_error, field_errors=result.field_errors)
        self.state.error_message = None
        try:
            outcome = self.auth_service.sign_up(result.form, phone)  # type: ignore[arg-type]
        except ServiceError as exc:
            self._audit_action("sign_up", exc.trace_id, "failure")
            return self._result(self.state.route, error=exc.message)
        self._audit_action("sign_up", None, "success")
        if isinstance(outcome, AuthSession):
            self._become_authenticated(self._user_from(outcome))
            target = home_route_for(self.role) or Route.HOME
            return self._result(self.navigate(target.value).route, notice="Cadastro realizado com sucesso!")
        return self._result(
            self.navigate(Route.AUTH.value).route,
            notice="Cadastro realizado! Verifique seu e-mail para confirmar a conta.",
        )

    def sign_out(self) -> BootstrapResult:
        role = self.role.value if self.role else None
        self.auth_service.sign_out()
        self._become_anonymous()
        log_action(self._audit, "auth", "sign_out", role, None, "success")
        return self._result(self.navigate(Route.AUTH.value).route, notice="Logout realizado com sucesso!")

    def navigate(self, path: str) -> BootstrapResult:
        decision = resolve_route(path, self.state)
        logger.info(
            "navigation",
            extra={"requested": path, "route": decision.route.value, "redirected": decision.redirected},
        )
        self.state.route = decision.route
        self.state.path = decision.path
        self.state.status_message = "Carregando..." if decision.loading else "Pronto"
        return self._result(decision.route)

    def _become_authenticated(self, user: AuthUser | None) -> None:
        if user is None:
            self._become_anonymous()
            return
        self.state.session.user = user
        self.state.status = SessionStatus.AUTHENTICATED
        self.state.error_message = None
        try:
            self.state.session.role = self.profile_service.load_role(user.id)
        except ServiceError as exc:
            self.state.session.role = None
            self.state.error_message = exc.message
        try:
            profile = self.profile_service.load_profile(user.id)
        except ServiceError:
            profile = None
        metadata_name = user.user_metadata.get("name") if user.user_metadata else None
        self.state.session.display_name = (profile.name if profile else None) or metadata_name or user.email
        logger.info(
            "session_authenticated",
            extra={"user_id": user.id, "role": self.role.value if self.role else None},
        )

    def _become_anonymous(self) -> None:
        self.state.status = SessionStatus.ANONYMOUS
        self.state.session.user = None
        self.state.session.role = None
        self.state.session.display_name = None

    def _user_from(self, auth: AuthSession) -> AuthUser | None:
        if auth.user is not None:
            return auth.user
        return self.auth_service.restore()

    def _audit_action(self, action: str, trace_id: str | None, outcome: str) -> None:
        role = self.role.value if self.role else None
        log_action(self._audit, "auth", action, role, trace_id, outcome)

    def _result(
        self,
        route: Route,
        *,
        error: str | None = None,
        field_errors: dict[str, str] | None = None,
        notice: str | None = None,
    ) -> BootstrapResult:
        if error is not None:
            self.state.error_message = error
        return BootstrapResult(
            route=route,
            status=self.state.status,
            error_message=error if error is not None else self.state.error_message,
            field_errors=dict(field_errors or {}),
            notice=notice,
        )
