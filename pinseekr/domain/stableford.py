from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .configs import StablefordConfig
from .round import Round
from .settlement import Payable

# score relative to par -> points; the -3 and +2 entries cover everything beyond them
STANDARD_POINTS: Mapping[int, int] = {-3: 5, -2: 4, -1: 3, 0: 2, 1: 1, 2: 0}
MODIFIED_POINTS: Mapping[int, int] = {-3: 8, -2: 5, -1: 2, 0: 0, 1: -1, 2: -3}


@dataclass(frozen=True)
class PointsEntry:
    player_id: str
    position: int
    points: int


@dataclass
class StablefordResult:
    name: str
    hole_points: dict[str, list[int]]
    totals: dict[str, int]
    leaderboard: list[PointsEntry]
    payables: list[Payable] = field(default_factory=list)


def hole_points(strokes: int, par: int, table: Mapping[int, int] = STANDARD_POINTS) -> int:
    relative = max(-3, min(2, strokes - par))
    return table[relative]


def score_stableford(round_: Round, config: StablefordConfig | None = None) -> StablefordResult:
    config = config or StablefordConfig()
    table = MODIFIED_POINTS if config.modified else STANDARD_POINTS

    points: dict[str, list[int]] = {}
    for player in round_.players:
        scores = round_.hole_scores(player, config.use_net)
        points[player.player_id] = [
            hole_points(score, round_.holes[idx].par, table) for idx, score in enumerate(scores)
        ]

    totals = {player_id: sum(values) for player_id, values in points.items()}
    return StablefordResult(
        name="Stableford",
        hole_points=points,
        totals=totals,
        leaderboard=rank_descending(totals),
        payables=pairwise_payables(totals, config.unit_sats, "Stableford"),
    )


def rank_descending(totals: Mapping[str, int]) -> list[PointsEntry]:
    """Highest total first; equal totals share a position."""
    ordered = sorted(totals.items(), key=lambda item: -item[1])
    entries: list[PointsEntry] = []
    position = 1
    for idx, (player_id, total) in enumerate(ordered):
        if idx > 0 and total != ordered[idx - 1][1]:
            position = idx + 1
        entries.append(PointsEntry(player_id=player_id, position=position, points=total))
    return entries


def pairwise_payables(totals: Mapping[str, int], unit: int, label: str) -> list[Payable]:
    """Every pair settles ``unit`` per point of difference, lower total paying."""
    if unit <= 0:
        return []

    players = list(totals)
    payables: list[Payable] = []
    for idx, first in enumerate(players):
        for second in players[idx + 1:]:
            diff = totals[first] - totals[second]
            if diff > 0:
                payables.append(Payable(second, first, diff * unit, f"{label} difference: {diff}"))
            elif diff < 0:
                payables.append(Payable(first, second, -diff * unit, f"{label} difference: {-diff}"))
    return payables
