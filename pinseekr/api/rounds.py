from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from pinseekr.api.errors import validation_error
from pinseekr.api.schemas import RoundWagersRequest
from pinseekr.domain import DomainValidationError, process_round_wagers
from pinseekr.storage.codec import dump_payables

router = APIRouter(prefix="/rounds", tags=["rounds"])
logger = structlog.get_logger(__name__)


@router.post("/wagers", summary="Score a round under several wager formats and net the result")
def round_wagers(payload: RoundWagersRequest) -> dict:
    try:
        round_ = payload.round.to_domain()
        wagers = process_round_wagers(round_, [game.to_domain() for game in payload.games])
    except DomainValidationError as exc:
        raise validation_error(exc) from exc

    logger.info(
        "round_wagers_scored",
        games=list(wagers.results),
        players=len(round_.players),
        transfers=len(wagers.settlement.transfers),
    )
    return {
        "results": jsonable_encoder(wagers.results),
        "balances": wagers.settlement.balances,
        "transfers": dump_payables(wagers.settlement.transfers),
    }
