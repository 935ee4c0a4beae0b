import pytest

from pinseekr.domain import Player, Round, new_round
from pinseekr.domain.round import default_holes

GOLDEN_SCORES = {
    "alice": [4, 3, 5, 4, 4, 3, 4, 5, 4, 4, 3, 5, 4, 4, 3, 4, 5, 4],
    "bob": [5, 4, 6, 5, 5, 4, 5, 6, 5, 5, 4, 6, 5, 5, 4, 5, 6, 5],
    "charlie": [3, 4, 4, 3, 3, 4, 3, 4, 3, 3, 4, 4, 3, 3, 4, 3, 4, 3],
    "dave": [5, 4, 5, 5, 4, 5, 4, 5, 4, 5, 4, 5, 4, 5, 4, 5, 5, 5],
}
GOLDEN_HANDICAPS = {"alice": 10, "bob": 18, "charlie": 2, "dave": 12}


def make_round(scores: dict[str, list[int]], handicaps: dict[str, int] | None = None, holes: int = 18) -> Round:
    handicaps = handicaps or {}
    players = [
        Player(player_id=player_id, handicap=handicaps.get(player_id, 0), scores=tuple(card))
        for player_id, card in scores.items()
    ]
    return new_round(players, holes=default_holes(holes))


@pytest.fixture
def golden_round() -> Round:
    return make_round(GOLDEN_SCORES, GOLDEN_HANDICAPS)
