import pytest

from pinseekr.domain import (
    DomainValidationError,
    NassauConfig,
    SkinsConfig,
    StrokeConfig,
    net_settlement,
    process_round_wagers,
)


def test_nassau_and_skins_settle_as_one_ledger(golden_round) -> None:
    wagers = process_round_wagers(golden_round, [NassauConfig(unit_sats=1000), SkinsConfig(unit_sats=600)])

    assert list(wagers.results) == ["nassau", "skins"]
    assert wagers.settlement.balances == {"alice": -3400, "bob": -6600, "charlie": 16600, "dave": -6600}
    assert [(t.from_player, t.to_player, t.amount) for t in wagers.settlement.transfers] == [
        ("bob", "charlie", 6600),
        ("dave", "charlie", 6600),
        ("alice", "charlie", 3400),
    ]
    assert len(wagers.payables) == len(wagers.results["nassau"].payables) + len(wagers.results["skins"].payables)
    assert net_settlement(wagers.results) == wagers.settlement.transfers


def test_formats_without_money_leave_everyone_level(golden_round) -> None:
    wagers = process_round_wagers(golden_round, [StrokeConfig(use_net=True)])

    assert wagers.results["stroke-play"].leaderboard[0].player_id == "charlie"
    assert set(wagers.settlement.balances.values()) == {0}
    assert wagers.settlement.transfers == []


def test_each_format_runs_once(golden_round) -> None:
    with pytest.raises(DomainValidationError, match="duplicate game config: skins"):
        process_round_wagers(golden_round, [SkinsConfig(), SkinsConfig(unit_sats=10)])


def test_at_least_one_format_is_required(golden_round) -> None:
    with pytest.raises(DomainValidationError):
        process_round_wagers(golden_round, [])
