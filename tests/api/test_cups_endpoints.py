import pytest
from conftest import GOLDEN_SCORES
from fastapi.testclient import TestClient

from pinseekr.api.cups import get_cup_service
from pinseekr.main import app
from pinseekr.service import CupService
from pinseekr.storage.database import create_db_engine, init_db, make_session_factory
from pinseekr.storage.repository import CupRepository


@pytest.fixture
def client() -> TestClient:
    engine = create_db_engine("sqlite://")
    init_db(engine)
    service = CupService(CupRepository(make_session_factory(engine)))
    app.dependency_overrides[get_cup_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create(client: TestClient) -> dict:
    response = client.post("/cups", json={"players": [{"player_id": player_id} for player_id in GOLDEN_SCORES]})
    assert response.status_code == 201
    return response.json()


def test_create_and_fetch_cup(client: TestClient) -> None:
    created = _create(client)

    assert created["name"] == "Pinseekr Cup"
    assert created["version"] == 1
    assert [player["team"] for player in created["players"]] == ["Team A", "Team B", "Team A", "Team B"]
    assert [r["round_id"] for r in created["rounds"]] == ["round-1", "round-2", "round-3", "round-4"]

    fetched = client.get(f"/cups/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_play_rounds_until_a_team_wins(client: TestClient) -> None:
    cup_id = _create(client)["id"]

    first = client.post(f"/cups/{cup_id}/rounds/round-1", json={"scores": GOLDEN_SCORES})
    assert first.status_code == 200
    body = first.json()
    assert body["result"]["points_awarded"] == {"Team A": 4.0, "Team B": 0.0}
    assert body["cup"]["version"] == 2
    assert body["cup"]["rounds"][0]["completed"] is True

    client.post(f"/cups/{cup_id}/rounds/round-2", json={"scores": GOLDEN_SCORES})
    results = client.get(f"/cups/{cup_id}/results")

    assert results.status_code == 200
    data = results.json()
    assert data["is_complete"] is True
    assert data["winner"] == "Team A"
    assert data["standings"] == {"Team A": 10.0, "Team B": 0.0}
    assert data["mvp"]["player_id"] == "charlie"
    assert len(data["completed_rounds"]) == 2


def test_replaying_a_round_is_a_validation_error(client: TestClient) -> None:
    cup_id = _create(client)["id"]
    client.post(f"/cups/{cup_id}/rounds/round-1", json={"scores": GOLDEN_SCORES})

    response = client.post(f"/cups/{cup_id}/rounds/round-1", json={"scores": GOLDEN_SCORES})

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "code": "validation_error",
        "message": "round round-1 has already been completed",
        "details": {"id": cup_id, "round_id": "round-1"},
    }


def test_odd_player_count_is_rejected(client: TestClient) -> None:
    response = client.post("/cups", json={"players": [{"player_id": p} for p in ("a", "b", "c")]})

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Pinseekr Cup requires an even number of players (minimum 4)"


@pytest.mark.parametrize(
    "method, path",
    [("get", "/cups/missing"), ("get", "/cups/missing/results")],
    ids=["cup", "results"],
)
def test_unknown_cup_is_404(client: TestClient, method: str, path: str) -> None:
    response = getattr(client, method)(path)

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "cup_not_found"


def test_play_round_on_unknown_cup_is_404(client: TestClient) -> None:
    response = client.post("/cups/missing/rounds/round-1", json={"scores": GOLDEN_SCORES})

    assert response.status_code == 404
