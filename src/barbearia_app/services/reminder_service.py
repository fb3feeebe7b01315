from __future__ import annotations

import logging
from dataclasses import dataclass

from barbearia_sdk import ApiSession, build_whatsapp_link, render_template
from barbearia_sdk.models import Appointment
from barbearia_sdk.reminders import DEFAULT_TEMPLATE, TEMPLATE_DESCRIPTION, TEMPLATE_KEY

from barbearia_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageTemplate:
    value: str
    setting_id: str | None = None

    @property
    def is_default(self) -> bool:
        return self.value == DEFAULT_TEMPLATE


class ReminderService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_template(self) -> MessageTemplate:
        try:
            setting = self.session.settings_client().get(TEMPLATE_KEY)
        except Exception as exc:
            logger.exception("reminder_template_load_failure")
            raise normalize_error(exc, "Erro ao carregar configurações") from exc
        if setting is None:
            return MessageTemplate(value=DEFAULT_TEMPLATE)
        return MessageTemplate(value=setting.value, setting_id=setting.id)

    def save_template(self, value: str, setting_id: str | None = None) -> MessageTemplate:
        if not value.strip():
            raise ServiceError(message="A mensagem não pode estar vazia", code="EMPTY_TEMPLATE")
        try:
            client = self.session.settings_client()
            if setting_id:
                saved = client.update(setting_id, value)
            else:
                saved = client.create(TEMPLATE_KEY, value, TEMPLATE_DESCRIPTION)
        except Exception as exc:
            logger.exception("reminder_template_save_failure", extra={"setting_id": setting_id})
            raise normalize_error(exc, "Erro ao salvar mensagem") from exc
        logger.info("reminder_template_saved", extra={"setting_id": saved.id})
        return MessageTemplate(value=saved.value, setting_id=saved.id)

    def build_link(
        self,
        appointment: Appointment,
        client_name: str,
        phone: str | None,
        *,
        mobile: bool = False,
        template: str | None = None,
    ) -> str:
        message = render_template(template or DEFAULT_TEMPLATE, appointment, client_name)
        try:
            link = build_whatsapp_link(phone, message, mobile)
        except Exception as exc:
            raise normalize_error(exc, "Telefone inválido") from exc
        logger.info("reminder_link_built", extra={"appointment_id": appointment.id, "mobile": mobile})
        return link
