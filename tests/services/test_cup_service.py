import pytest
from conftest import GOLDEN_SCORES
from sqlalchemy import select
from structlog.testing import capture_logs

from pinseekr.domain import CupConfig, CupPlayer, DomainValidationError, Team, play_round
from pinseekr.service import CupService
from pinseekr.storage.database import create_db_engine, init_db, make_session_factory
from pinseekr.storage.models import CupRoundResult
from pinseekr.storage.repository import ConcurrentUpdateError, CupNotFoundError, CupRepository


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return make_session_factory(engine)


@pytest.fixture
def repo(session_factory) -> CupRepository:
    return CupRepository(session_factory)


@pytest.fixture
def service(repo: CupRepository) -> CupService:
    return CupService(repo, default_name="Club Cup")


def _players() -> list[CupPlayer]:
    return [CupPlayer(player_id) for player_id in GOLDEN_SCORES]


def test_created_cup_is_stored_at_version_one(service: CupService) -> None:
    with capture_logs() as logs:
        cup_id, cup = service.create_cup(_players())

    assert cup.version == 1
    assert cup.name == "Club Cup"
    stored = service.get_cup(cup_id)
    assert stored == cup
    assert logs == [
        {"event": "cup_created", "log_level": "info", "cup_id": cup_id, "name": "Club Cup", "players": 4}
    ]


def test_playing_a_round_bumps_the_version_and_records_the_result(service: CupService, session_factory) -> None:
    cup_id, _ = service.create_cup(_players())

    with capture_logs() as logs:
        cup, result = service.play_round(cup_id, "round-1", GOLDEN_SCORES)

    assert cup.version == 2
    assert service.get_cup(cup_id).round("round-1").completed
    assert [entry["event"] for entry in logs] == ["cup_round_played"]
    assert logs[0]["points"] == {"Team A": 4.0, "Team B": 0.0}

    with session_factory() as db:
        rows = db.scalars(select(CupRoundResult).where(CupRoundResult.cup_id == cup_id)).all()
    assert [(row.round_id, row.team_a_points, row.team_b_points) for row in rows] == [("round-1", 4.0, 0.0)]
    assert rows[0].summary == result.summary


def test_results_follow_the_stored_rounds(service: CupService) -> None:
    cup_id, _ = service.create_cup(_players())
    service.play_round(cup_id, "round-1", GOLDEN_SCORES)
    service.play_round(cup_id, "round-2", GOLDEN_SCORES)

    results = service.get_results(cup_id)

    assert results.winner is Team.A
    assert results.mvp is not None


def test_saving_a_stale_cup_is_a_conflict(service: CupService, repo: CupRepository) -> None:
    cup_id, _ = service.create_cup(_players())
    stale = repo.get(cup_id)
    service.play_round(cup_id, "round-2", GOLDEN_SCORES)

    updated, result = play_round(stale, "round-1", GOLDEN_SCORES)

    with pytest.raises(ConcurrentUpdateError, match="version 2, not 1"):
        repo.save(cup_id, updated, result)


def test_replayed_result_is_rejected_by_the_store(service: CupService, repo: CupRepository) -> None:
    cup_id, _ = service.create_cup(_players())
    cup, result = service.play_round(cup_id, "round-1", GOLDEN_SCORES)

    with pytest.raises(ConcurrentUpdateError):
        repo.save(cup_id, cup, result)


class _StaleRepository(CupRepository):
    """Hands out the cup as first loaded, like a reader that raced a writer."""

    def __init__(self, session_factory, cup_id: str) -> None:
        super().__init__(session_factory)
        self._stale = CupRepository(session_factory).get(cup_id)

    def get(self, cup_id: str) -> CupConfig:
        return self._stale


def test_service_logs_and_reraises_conflicts(service: CupService, session_factory) -> None:
    cup_id, _ = service.create_cup(_players())
    racing = CupService(_StaleRepository(session_factory, cup_id))
    service.play_round(cup_id, "round-1", GOLDEN_SCORES)

    with capture_logs() as logs, pytest.raises(ConcurrentUpdateError):
        racing.play_round(cup_id, "round-2", GOLDEN_SCORES)

    assert logs == [
        {
            "event": "cup_update_conflict",
            "log_level": "warning",
            "cup_id": cup_id,
            "round_id": "round-2",
            "version": 1,
        }
    ]


def test_unknown_cup(service: CupService) -> None:
    with pytest.raises(CupNotFoundError):
        service.get_cup("missing")
    with pytest.raises(CupNotFoundError):
        service.play_round("missing", "round-1", GOLDEN_SCORES)


def test_domain_errors_leave_the_cup_untouched(service: CupService) -> None:
    cup_id, _ = service.create_cup(_players())

    with pytest.raises(DomainValidationError):
        service.play_round(cup_id, "round-1", {"alice": [4] * 18})

    assert service.get_cup(cup_id).version == 1
