from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder

from pinseekr.api.errors import cup_conflict, cup_not_found, validation_error
from pinseekr.api.schemas import (
    CreateCupRequest,
    CupResponse,
    CupResultsResponse,
    ErrorResponse,
    PlayRoundRequest,
    PlayRoundResponse,
    RoundResultOut,
)
from pinseekr.domain import CupConfig, DomainValidationError
from pinseekr.runtime import cup_service
from pinseekr.service import CupService
from pinseekr.storage.codec import dump_cup
from pinseekr.storage.repository import ConcurrentUpdateError, CupNotFoundError

router = APIRouter(prefix="/cups", tags=["cups"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
}


def get_cup_service() -> CupService:
    return cup_service()


def _cup_response(cup_id: str, cup: CupConfig) -> CupResponse:
    return CupResponse(id=cup_id, version=cup.version, **dump_cup(cup))


@router.post("", response_model=CupResponse, status_code=status.HTTP_201_CREATED, summary="Create a cup")
def create_cup(payload: CreateCupRequest, service: CupService = Depends(get_cup_service)) -> CupResponse:
    try:
        cup_id, cup = service.create_cup(
            [player.to_domain() for player in payload.players],
            name=payload.name,
            total_points_to_win=payload.total_points_to_win,
        )
    except DomainValidationError as exc:
        raise validation_error(exc) from exc
    return _cup_response(cup_id, cup)


@router.get("/{id}", response_model=CupResponse, summary="Get a cup")
def get_cup(id: str, service: CupService = Depends(get_cup_service)) -> CupResponse:
    try:
        cup = service.get_cup(id)
    except CupNotFoundError as exc:
        raise cup_not_found(id) from exc
    return _cup_response(id, cup)


@router.post(
    "/{id}/rounds/{round_id}",
    response_model=PlayRoundResponse,
    summary="Play one cup round",
    responses=ERROR_RESPONSES,
)
def play_round(
    id: str,
    round_id: str,
    payload: PlayRoundRequest,
    service: CupService = Depends(get_cup_service),
) -> PlayRoundResponse:
    try:
        cup, result = service.play_round(id, round_id, payload.scores)
    except CupNotFoundError as exc:
        raise cup_not_found(id) from exc
    except DomainValidationError as exc:
        raise validation_error(exc, details={"id": id, "round_id": round_id}) from exc
    except ConcurrentUpdateError as exc:
        raise cup_conflict(exc, id) from exc
    return PlayRoundResponse(cup=_cup_response(id, cup), result=RoundResultOut(**jsonable_encoder(result)))


@router.get("/{id}/results", response_model=CupResultsResponse, summary="Standings, winner and MVP")
def cup_results(id: str, service: CupService = Depends(get_cup_service)) -> CupResultsResponse:
    try:
        results = service.get_results(id)
    except CupNotFoundError as exc:
        raise cup_not_found(id) from exc
    return CupResultsResponse(id=id, **jsonable_encoder(results))
