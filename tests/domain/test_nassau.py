import pytest
from conftest import make_round

from pinseekr.domain import DomainValidationError, NassauConfig, NassauScoring, score_nassau
from pinseekr.domain.nassau import PENDING, PUSH, WON


def _segments(result) -> dict[str, tuple[str, str | None]]:
    return {segment.key: (segment.status, segment.winner) for segment in result.segments}


def test_lowest_segment_total_wins_each_bet(golden_round) -> None:
    result = score_nassau(golden_round, NassauConfig(unit_sats=1000))

    assert _segments(result) == {
        "front": (WON, "charlie"),
        "back": (WON, "charlie"),
        "overall": (WON, "charlie"),
    }
    assert [segment.name for segment in result.segments] == ["Front 9", "Back 9", "Overall"]
    front = result.segments[0]
    assert front.totals == {"alice": 36, "bob": 45, "charlie": 31, "dave": 41}
    assert len(result.payables) == 9
    assert {p.to_player for p in result.payables} == {"charlie"}
    assert result.payables[0].memo == "Front 9 - Nassau"


def test_tied_segment_is_a_push_with_no_payment() -> None:
    round_ = make_round({"alice": [4] * 9 + [3] * 9, "bob": [4] * 18})

    result = score_nassau(round_, NassauConfig(unit_sats=500))

    assert _segments(result) == {
        "front": (PUSH, None),
        "back": (WON, "alice"),
        "overall": (WON, "alice"),
    }
    assert [(p.from_player, p.to_player, p.amount) for p in result.payables] == [
        ("bob", "alice", 500),
        ("bob", "alice", 500),
    ]


def test_unfinished_segments_stay_pending() -> None:
    round_ = make_round({"alice": [3] * 9, "bob": [4] * 12})

    result = score_nassau(round_, NassauConfig(unit_sats=100))

    assert _segments(result) == {
        "front": (WON, "alice"),
        "back": (PENDING, None),
        "overall": (PENDING, None),
    }
    assert len(result.payables) == 1


def test_segment_stakes_override_the_unit() -> None:
    round_ = make_round({"alice": [3] * 18, "bob": [4] * 18})
    config = NassauConfig(unit_sats=100, overall_sats=1000)

    result = score_nassau(round_, config)

    assert [p.amount for p in result.payables] == [100, 100, 1000]


def test_match_scoring_counts_holes_won() -> None:
    round_ = make_round({"alice": [3, 5, 5, 5, 5, 5, 5, 5, 5] + [4] * 9, "bob": [4] * 18})
    config = NassauConfig(unit_sats=100, scoring=NassauScoring.MATCH)

    result = score_nassau(round_, config)

    front = result.segments[0]
    assert front.totals == {"alice": 1, "bob": 8}
    assert front.winner == "bob"
    assert result.segments[1].status == PUSH


def test_match_scoring_needs_two_players(golden_round) -> None:
    with pytest.raises(DomainValidationError, match="exactly 2 players"):
        score_nassau(golden_round, NassauConfig(scoring=NassauScoring.MATCH))
