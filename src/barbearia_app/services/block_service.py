from __future__ import annotations

import logging
from typing import Iterable, Sequence

from barbearia_sdk import BARBERS, ApiSession, ChangeFeed
from barbearia_sdk.models import BarberBlock, BarberBlockCreate
from barbearia_sdk.validation import BlockForm

from barbearia_app.services.errors import normalize_error

logger = logging.getLogger(__name__)

TABLE = "barber_blocks"


def group_by_barber(blocks: Iterable[BarberBlock], barbers: Sequence[str] = BARBERS) -> dict[str, list[BarberBlock]]:
    """Every known barber gets a bucket, even with no blocks; order inside follows the input."""
    grouped: dict[str, list[BarberBlock]] = {barber: [] for barber in barbers}
    for block in blocks:
        grouped.setdefault(block.barber, []).append(block)
    return grouped


class BlockService:
    def __init__(self, session: ApiSession, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed

    def list_blocks(self) -> list[BarberBlock]:
        try:
            return self.session.blocks_client().list()
        except Exception as exc:
            logger.exception("blocks_list_failure")
            raise normalize_error(exc, "Erro ao carregar bloqueios") from exc

    def create(self, form: BlockForm) -> BarberBlock:
        payload = BarberBlockCreate(
            barber=form.barber,
            block_date=form.date,
            is_full_day=form.is_full_day,
            start_time=None if form.is_full_day else form.start_time,
            end_time=None if form.is_full_day else form.end_time,
            reason=form.reason,
        )
        logger.info("block_create_attempt", extra={"barber": form.barber, "date": form.date.isoformat()})
        try:
            created = self.session.blocks_client().create(payload)
        except Exception as exc:
            logger.exception("block_create_failure", extra={"barber": form.barber})
            raise normalize_error(exc, "Erro ao criar bloqueio") from exc
        logger.info("block_create_success", extra={"block_id": created.id})
        if self.feed:
            self.feed.publish(TABLE, "INSERT", created.model_dump(mode="json"))
        return created

    def delete(self, block_id: str) -> None:
        try:
            self.session.blocks_client().delete(block_id)
        except Exception as exc:
            logger.exception("block_delete_failure", extra={"block_id": block_id})
            raise normalize_error(exc, "Erro ao remover bloqueio") from exc
        logger.info("block_delete_success", extra={"block_id": block_id})
        if self.feed:
            self.feed.publish(TABLE, "DELETE", {"id": block_id})
