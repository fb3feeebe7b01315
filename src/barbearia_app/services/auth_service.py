from __future__ import annotations

import logging

from barbearia_sdk import ApiSession
from barbearia_sdk.exceptions import ApiError, AuthError, ConflictError
from barbearia_sdk.models import AuthSession, AuthUser
from barbearia_sdk.validation import LoginForm, SignupForm

from barbearia_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def sign_in(self, form: LoginForm) -> AuthSession:
        logger.info("sign_in_attempt", extra={"email": form.email})
        try:
            auth = self.session.auth_client().sign_in(form.email, form.password)
        except AuthError as exc:
            logger.warning("sign_in_rejected", extra={"email": form.email, "trace_id": exc.trace_id})
            raise ServiceError(
                message="E-mail ou senha incorretos",
                details=exc.message,
                trace_id=exc.trace_id,
                code=f"HTTP_{exc.status_code}",
            ) from exc
        except ApiError as exc:
            if exc.status_code == 400:
                logger.warning("sign_in_rejected", extra={"email": form.email, "trace_id": exc.trace_id})
                raise ServiceError("E-mail ou senha incorretos", exc.message, exc.trace_id, f"HTTP_{exc.status_code}") from exc
            logger.exception("sign_in_failure", extra={"email": form.email})
            raise normalize_error(exc, "Erro ao fazer login") from exc
        except Exception as exc:
            logger.exception("sign_in_failure", extra={"email": form.email})
            raise normalize_error(exc, "Erro ao fazer login") from exc
        self.session.establish(auth)
        logger.info("sign_in_success", extra={"user_id": auth.user.id if auth.user else None})
        return auth

    def sign_up(self, form: SignupForm, phone: str | None = None) -> AuthSession | AuthUser:
        logger.info("sign_up_attempt", extra={"email": form.email})
        try:
            result = self.session.auth_client().sign_up(form.email, form.password, form.name, phone)
        except ConflictError as exc:
            logger.warning("sign_up_duplicate", extra={"email": form.email})
            raise ServiceError("Este e-mail já está cadastrado", exc.message, exc.trace_id, f"HTTP_{exc.status_code}") from exc
        except ApiError as exc:
            if "already" in exc.message.lower():
                logger.warning("sign_up_duplicate", extra={"email": form.email})
                raise ServiceError("Este e-mail já está cadastrado", exc.message, exc.trace_id, f"HTTP_{exc.status_code}") from exc
            logger.exception("sign_up_failure", extra={"email": form.email})
            raise normalize_error(exc, "Erro ao criar conta") from exc
        except Exception as exc:
            logger.exception("sign_up_failure", extra={"email": form.email})
            raise normalize_error(exc, "Erro ao criar conta") from exc
        if isinstance(result, AuthSession):
            self.session.establish(result)
        logger.info("sign_up_success", extra={"email": form.email, "signed_in": isinstance(result, AuthSession)})
        return result

    def restore(self) -> AuthUser | None:
        """Validate the stored session, refreshing it once when it has expired."""
        if not self.session.token:
            return None
        if self.session.is_expired():
            if not self.session.refresh_token:
                logger.info("session_expired")
                self.session.clear()
                return None
            try:
                refreshed = self.session.auth_client().refresh(self.session.refresh_token)
            except ApiError:
                logger.warning("session_refresh_failed")
                self.session.clear()
                return None
            self.session.establish(refreshed)
        try:
            user = self.session.auth_client().get_user()
        except AuthError:
            logger.info("session_rejected")
            self.session.clear()
            return None
        self.session.user = user
        return user

    def sign_out(self) -> None:
        logger.info("sign_out")
        token = self.session.token
        try:
            if token:
                self.session.auth_client().sign_out(token)
        except ApiError:
            logger.warning("sign_out_remote_failed")
        finally:
            self.session.clear()
