from __future__ import annotations

import re
from urllib.parse import quote

from .availability import normalize_time
from .models import Appointment

TEMPLATE_KEY = "whatsapp_message_template"
TEMPLATE_DESCRIPTION = (
    "Template da mensagem de lembrete via WhatsApp. "
    "Use {{nome}}, {{data}}, {{hora}}, {{servico}}, {{barbeiro}} como variáveis."
)

DEFAULT_TEMPLATE = """Olá {{nome}}! 👋

Este é um lembrete do seu agendamento na *Innovation Barbershop*:

📅 *Data:* {{data}}
🕐 *Horário:* {{hora}}
✂️ *Serviço:* {{servico}}
💈 *Barbeiro:* {{barbeiro}}

Contamos com sua presença!

Se precisar reagendar, entre em contato conosco."""

PHONE_DIGITS = 11
COUNTRY_CODE = "55"

_MOBILE_AGENT = re.compile(r"iPhone|iPad|iPod|Android", re.IGNORECASE)


class ReminderError(ValueError):
    pass


def render_template(template: str, appointment: Appointment, client_name: str) -> str:
    values = {
        "nome": client_name,
        "data": appointment.scheduled_date.strftime("%d/%m/%Y"),
        "hora": normalize_time(appointment.scheduled_time) or "",
        "servico": appointment.service,
        "barbeiro": appointment.barber,
    }
    message = template
    for placeholder, value in values.items():
        message = message.replace("{{" + placeholder + "}}", value)
    return message


def normalize_phone(raw: str | None) -> str:
    if not raw or not raw.strip():
        raise ReminderError("Cliente não possui telefone cadastrado")
    digits = re.sub(r"\D", "", raw)
    if len(digits) != PHONE_DIGITS:
        raise ReminderError("Telefone inválido")
    return digits


def is_mobile_user_agent(user_agent: str | None) -> bool:
    return bool(user_agent and _MOBILE_AGENT.search(user_agent))


def build_whatsapp_link(phone: str | None, message: str, mobile: bool) -> str:
    digits = normalize_phone(phone)
    text = quote(message, safe="")
    if mobile:
        return f"https://wa.me/{COUNTRY_CODE}{digits}?text={text}"
    return f"https://web.whatsapp.com/send?phone={COUNTRY_CODE}{digits}&text={text}"
