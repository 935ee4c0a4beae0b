from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from pinseekr.domain import CupConfig, RoundResult, Team
from pinseekr.storage.codec import dump_cup, load_cup
from pinseekr.storage.models import Cup, CupRoundResult


class CupNotFoundError(LookupError):
    pass


class ConcurrentUpdateError(RuntimeError):
    """Raised when a cup changed between being loaded and being saved."""


class CupRepository:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def create(self, cup: CupConfig) -> tuple[str, CupConfig]:
        cup_id = str(uuid4())
        with self._session_factory() as db:
            row = Cup(id=cup_id, name=cup.name, payload=dump_cup(cup))
            db.add(row)
            db.commit()
            return cup_id, replace(cup, version=row.version)

    def get(self, cup_id: str) -> CupConfig:
        with self._session_factory() as db:
            row = db.get(Cup, cup_id)
            if row is None:
                raise CupNotFoundError(cup_id)
            return load_cup(row.payload, row.version)

    def save(self, cup_id: str, cup: CupConfig, result: RoundResult | None = None) -> CupConfig:
        """Persist ``cup`` if it is still at the version it was loaded with.

        The version check runs twice: against the row read here, and in the
        UPDATE itself through the mapper's version column.
        """
        with self._session_factory() as db:
            row = db.get(Cup, cup_id)
            if row is None:
                raise CupNotFoundError(cup_id)
            if row.version != cup.version:
                raise ConcurrentUpdateError(f"cup {cup_id} is at version {row.version}, not {cup.version}")

            row.name = cup.name
            row.payload = dump_cup(cup)
            if result is not None:
                db.add(
                    CupRoundResult(
                        cup_id=cup_id,
                        round_id=result.round_id,
                        game_mode=result.game_mode.value,
                        team_a_points=result.points_awarded.get(Team.A, 0.0),
                        team_b_points=result.points_awarded.get(Team.B, 0.0),
                        summary=result.summary,
                    )
                )
            try:
                db.commit()
            except (StaleDataError, IntegrityError) as exc:
                db.rollback()
                raise ConcurrentUpdateError(f"cup {cup_id} was updated concurrently") from exc
            return replace(cup, version=row.version)

