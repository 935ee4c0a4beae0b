from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from pinseekr.config import DEFAULT_CUP_NAME
from pinseekr.domain import CupConfig, CupPlayer, CupResults, RoundResult, create_cup, get_results, play_round
from pinseekr.domain.cup import DEFAULT_POINTS_TO_WIN
from pinseekr.storage.repository import ConcurrentUpdateError, CupRepository

logger = structlog.get_logger(__name__)


class CupService:
    def __init__(self, repo: CupRepository, default_name: str = DEFAULT_CUP_NAME) -> None:
        self.repo = repo
        self.default_name = default_name

    def create_cup(
        self,
        players: Sequence[CupPlayer],
        name: str | None = None,
        total_points_to_win: float | None = None,
    ) -> tuple[str, CupConfig]:
        cup = create_cup(
            players,
            name=name or self.default_name,
            total_points_to_win=total_points_to_win or DEFAULT_POINTS_TO_WIN,
        )
        cup_id, cup = self.repo.create(cup)
        logger.info("cup_created", cup_id=cup_id, name=cup.name, players=len(cup.players))
        return cup_id, cup

    def get_cup(self, cup_id: str) -> CupConfig:
        return self.repo.get(cup_id)

    def play_round(
        self,
        cup_id: str,
        round_id: str,
        scores: Mapping[str, Sequence[int]],
    ) -> tuple[CupConfig, RoundResult]:
        cup = self.repo.get(cup_id)
        updated, result = play_round(cup, round_id, scores)
        try:
            saved = self.repo.save(cup_id, updated, result)
        except ConcurrentUpdateError:
            logger.warning("cup_update_conflict", cup_id=cup_id, round_id=round_id, version=cup.version)
            raise

        logger.info(
            "cup_round_played",
            cup_id=cup_id,
            round_id=round_id,
            game_mode=result.game_mode.value,
            points={team.value: points for team, points in result.points_awarded.items()},
            version=saved.version,
        )
        return saved, result

    def get_results(self, cup_id: str) -> CupResults:
        return get_results(self.repo.get(cup_id))
