import pytest
from conftest import make_round

from pinseekr.domain import DomainValidationError, SkinsConfig, net_balances, score_skins


def _assert_conserved(result) -> None:
    assert sum(p.amount for p in result.payables) == sum(result.amount_won.values())
    assert sum(result.amount_won.values()) + result.voided_value == result.total_value


def test_sole_low_score_wins_and_losers_share_the_cost(golden_round) -> None:
    result = score_skins(golden_round, SkinsConfig(unit_sats=600))

    assert result.skins_won == {"alice": 4, "bob": 0, "charlie": 14, "dave": 0}
    assert [hole.hole for hole in result.holes if hole.winner == "alice"] == [2, 6, 11, 15]
    assert net_balances(result.payables) == {"alice": -400, "bob": -3600, "charlie": 7600, "dave": -3600}
    assert result.voided_skins == 0
    _assert_conserved(result)


def test_ties_carry_into_the_next_hole() -> None:
    round_ = make_round({"a": [4, 4, 3], "b": [4, 4, 4], "c": [4, 4, 5]}, holes=3)

    result = score_skins(round_, SkinsConfig(unit_sats=300))

    last = result.holes[-1]
    assert (last.winner, last.skins, last.value) == ("a", 3, 900)
    assert [hole.carry for hole in result.holes[:2]] == [1, 2]
    assert [(p.from_player, p.amount, p.memo) for p in result.payables] == [
        ("b", 450, "Hole 3 - 3 skins"),
        ("c", 450, "Hole 3 - 3 skins"),
    ]
    _assert_conserved(result)


def test_carry_reaching_the_cap_is_voided() -> None:
    round_ = make_round({"a": [4, 4, 3], "b": [4, 4, 4], "c": [4, 4, 5]}, holes=3)

    result = score_skins(round_, SkinsConfig(unit_sats=300, carry_cap=2))

    assert result.holes[1].voided == 2
    assert result.skins_won["a"] == 1
    assert result.voided_skins == 2
    assert result.voided_value == 600
    _assert_conserved(result)


def test_carry_left_after_the_last_hole_is_voided() -> None:
    round_ = make_round({"a": [3, 4, 4], "b": [4, 4, 4]}, holes=3)

    result = score_skins(round_, SkinsConfig(unit_sats=100))

    assert result.skins_won == {"a": 1, "b": 0}
    assert result.unclaimed_carry == 2
    assert result.voided_skins == 2
    assert net_balances(result.payables) == {"b": -100, "a": 100}
    _assert_conserved(result)


def test_only_holes_everyone_played_are_contested() -> None:
    round_ = make_round({"a": [3, 3, 3], "b": [4]}, holes=3)

    result = score_skins(round_, SkinsConfig(unit_sats=100))

    assert len(result.holes) == 1
    assert result.total_value == 100


def test_net_skins_use_handicap_strokes() -> None:
    round_ = make_round({"a": [4, 4], "b": [5, 4]}, {"b": 1}, holes=2)

    result = score_skins(round_, SkinsConfig(use_net=True, unit_sats=100))

    assert result.holes[0].winner is None
    assert result.holes[1].winner is None


def test_skins_need_two_players() -> None:
    with pytest.raises(DomainValidationError):
        score_skins(make_round({"a": [4]}, holes=1))
