from __future__ import annotations

from fastapi import APIRouter

from pinseekr.api.schemas import NetSettlementRequest, SettlementResponse
from pinseekr.domain import settle
from pinseekr.storage.codec import dump_payables

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post("/net", response_model=SettlementResponse, summary="Net payables into the fewest transfers")
def net_settlement(payload: NetSettlementRequest) -> SettlementResponse:
    result = settle([payable.to_domain() for payable in payload.payables], payload.players)
    return SettlementResponse(balances=result.balances, transfers=dump_payables(result.transfers))
