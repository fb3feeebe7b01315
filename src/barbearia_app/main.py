from __future__ import annotations

import argparse
import getpass
import json
import sys
from datetime import date
from typing import Sequence

from barbearia_sdk import BARBERS, BillingPeriod, ConfigError

from barbearia_app.app.bootstrap import AppBootstrap
from barbearia_app.app.state import SessionStatus
from barbearia_app.config import load_app_config
from barbearia_app.infrastructure.logger import configure_logging
from barbearia_app.services.appointment_service import AppointmentService
from barbearia_app.services.billing_service import BillingService
from barbearia_app.services.errors import ServiceError
from barbearia_app.ui.manager.billing_report_view import BillingReportView

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="barbearia", description="Barbearia Master command line client")
    parser.add_argument("--env-file", default=None, help="Path to a .env file with BARBEARIA_* settings")
    commands = parser.add_subparsers(dest="command", required=True)

    slots = commands.add_parser("slots", help="Show the free/busy grid for a barber on a day")
    slots.add_argument("--barber", required=True, choices=BARBERS)
    slots.add_argument("--date", required=True, type=_parse_date)

    billing = commands.add_parser("billing", help="Show the billing report (manager only)")
    billing.add_argument("--period", default=BillingPeriod.CURRENT.value, choices=[period.value for period in BillingPeriod])

    commands.add_parser("whoami", help="Show the signed-in user and role")

    login = commands.add_parser("login", help="Sign in and keep the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", default=None, help="Prompted when omitted")

    commands.add_parser("logout", help="Sign out and forget the stored session")
    return parser


def _print(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return EXIT_FAILURE


def _cmd_slots(bootstrap: AppBootstrap, args: argparse.Namespace) -> int:
    if bootstrap.state.status is not SessionStatus.AUTHENTICATED:
        return _fail("Faça login para consultar horários")
    service = AppointmentService(bootstrap.session, bootstrap.feed)
    try:
        grid = service.slot_grid(args.barber, args.date)
    except ServiceError as exc:
        return _fail(exc.message)
    _print({"barber": args.barber, "date": args.date.isoformat(), "available": grid.available, "slots": grid.render()})
    return EXIT_OK


def _cmd_billing(bootstrap: AppBootstrap, args: argparse.Namespace) -> int:
    view = BillingReportView(BillingService(bootstrap.session), bootstrap.role)
    if not view.can_view():
        return _fail("Acesso restrito ao gerente")
    if not view.select_period(args.period):
        last = view.notifications.last()
        return _fail(last["message"] if last else "Erro ao carregar relatório de faturamento")
    _print(view.render())
    return EXIT_OK


def _cmd_whoami(bootstrap: AppBootstrap, args: argparse.Namespace) -> int:
    if bootstrap.state.status is not SessionStatus.AUTHENTICATED or bootstrap.user is None:
        return _fail("Nenhuma sessão ativa")
    _print(
        {
            "id": bootstrap.user.id,
            "email": bootstrap.user.email,
            "name": bootstrap.state.session.display_name,
            "role": bootstrap.role.value if bootstrap.role else None,
            "route": bootstrap.state.route.value,
        }
    )
    return EXIT_OK


def _cmd_login(bootstrap: AppBootstrap, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Senha: ")
    result = bootstrap.sign_in(args.email, password)
    if result.status is not SessionStatus.AUTHENTICATED or (result.error_message and not result.notice):
        return _fail(result.error_message or "Erro ao fazer login")
    _print({"route": result.route.value, "message": result.notice})
    return EXIT_OK


def _cmd_logout(bootstrap: AppBootstrap, args: argparse.Namespace) -> int:
    result = bootstrap.sign_out()
    _print({"route": result.route.value, "message": result.notice})
    return EXIT_OK


COMMANDS = {
    "slots": _cmd_slots,
    "billing": _cmd_billing,
    "whoami": _cmd_whoami,
    "login": _cmd_login,
    "logout": _cmd_logout,
}


def run(argv: Sequence[str] | None = None, bootstrap: AppBootstrap | None = None) -> int:
    args = build_parser().parse_args(argv)
    if bootstrap is None:
        try:
            config = load_app_config(args.env_file)
        except ConfigError as exc:
            print(f"Configuração inválida: {exc}", file=sys.stderr)
            return EXIT_CONFIG
        configure_logging(config.log_level)
        bootstrap = AppBootstrap(config=config)
    bootstrap.start()
    return COMMANDS[args.command](bootstrap, args)


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
