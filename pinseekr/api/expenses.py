from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from pinseekr.api.errors import validation_error
from pinseekr.api.schemas import ExpenseSplitRequest, ExpenseSplitResponse
from pinseekr.domain import DomainValidationError, rate_converter, split_expenses

router = APIRouter(prefix="/expenses", tags=["expenses"])
logger = structlog.get_logger(__name__)


@router.post("/split", response_model=ExpenseSplitResponse, summary="Split shared expenses and settle them")
def split(payload: ExpenseSplitRequest) -> ExpenseSplitResponse:
    players = {player.player_id.strip(): player.name or player.player_id.strip() for player in payload.players}
    try:
        expenses = [expense.to_domain() for expense in payload.expenses]
        report = split_expenses(expenses, players, rate_converter(payload.rates))
    except DomainValidationError as exc:
        raise validation_error(exc) from exc

    if report.warnings:
        logger.warning("expense_split_warnings", warnings=report.warnings)
    return ExpenseSplitResponse(**jsonable_encoder(report))
