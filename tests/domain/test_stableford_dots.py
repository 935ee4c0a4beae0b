import pytest
from conftest import make_round

from pinseekr.domain import DotsConfig, HoleDetail, Player, StablefordConfig, new_round, score_dots, score_stableford
from pinseekr.domain.dots import estimate_detail, with_estimated_details
from pinseekr.domain.round import default_holes
from pinseekr.domain.stableford import MODIFIED_POINTS, hole_points


@pytest.mark.parametrize(
    "strokes, par, expected",
    [(1, 4, 5), (1, 5, 5), (2, 4, 4), (3, 4, 3), (4, 4, 2), (5, 4, 1), (6, 4, 0), (9, 4, 0)],
    ids=["ace", "beyond_albatross", "eagle", "birdie", "par", "bogey", "double", "blow_up"],
)
def test_standard_points_table(strokes: int, par: int, expected: int) -> None:
    assert hole_points(strokes, par) == expected


def test_modified_table_penalises_bad_holes() -> None:
    round_ = make_round({"alice": [3, 4, 5, 6, 7]}, holes=5)

    standard = score_stableford(round_)
    modified = score_stableford(round_, StablefordConfig(modified=True))

    assert standard.totals == {"alice": 6}
    assert modified.totals == {"alice": 2 + 0 - 1 - 3 - 3}
    assert hole_points(7, 4, MODIFIED_POINTS) == -3


def test_points_leaderboard_highest_first_with_shared_positions() -> None:
    round_ = make_round({"alice": [4, 4], "bob": [3, 4], "charlie": [4, 3]}, holes=2)

    result = score_stableford(round_, StablefordConfig(unit_sats=50))

    assert [(entry.player_id, entry.position) for entry in result.leaderboard] == [
        ("bob", 1),
        ("charlie", 1),
        ("alice", 3),
    ]
    assert [(p.from_player, p.to_player, p.amount) for p in result.payables] == [
        ("alice", "bob", 50),
        ("alice", "charlie", 50),
    ]


def test_dots_award_recorded_achievements() -> None:
    alice = Player(
        "alice",
        scores=(3, 6),
        details={1: HoleDetail(putts=1, fairway_hit=True, green_in_regulation=True)},
    )
    bob = Player("bob", scores=(4, 4))
    round_ = new_round([alice, bob], holes=default_holes(2))

    result = score_dots(round_)

    first = result.hole_by_hole[0].breakdown["alice"]
    assert (first.fairway, first.gir, first.one_putt, first.birdie) == (1, 1, 1, 2)
    assert result.hole_by_hole[1].breakdown["alice"].penalty == -1
    assert result.total_dots == {"alice": 4, "bob": 0}
    assert [(p.from_player, p.to_player, p.amount, p.memo) for p in result.payables] == [
        ("bob", "alice", 400, "Dots difference: 4"),
    ]


def test_eagle_and_no_wager() -> None:
    round_ = make_round({"alice": [2], "bob": [4]}, holes=1)

    result = score_dots(round_, DotsConfig(wager_per_dot=0))

    assert result.totals["alice"].eagle == 5
    assert result.totals["alice"].birdie == 0
    assert result.payables == []


@pytest.mark.parametrize(
    "strokes, putts, gir",
    [(3, 1, True), (4, 2, True), (5, 3, False), (8, 4, False), (2, 1, True)],
    ids=["birdie", "par", "bogey", "clamped_high", "clamped_low"],
)
def test_estimated_detail_follows_score_to_par(strokes: int, putts: int, gir: bool) -> None:
    detail = estimate_detail(strokes, 4)

    assert detail.putts == putts
    assert detail.green_in_regulation is gir
    assert detail.fairway_hit is None


def test_estimates_never_replace_recorded_details() -> None:
    recorded = HoleDetail(putts=3, fairway_hit=True, green_in_regulation=False)
    round_ = new_round([Player("alice", scores=(3, 4), details={1: recorded})], holes=default_holes(2))

    estimated = with_estimated_details(round_).player("alice").details

    assert estimated[1] == recorded
    assert estimated[2] == HoleDetail(putts=2, green_in_regulation=True)
