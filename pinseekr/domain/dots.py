from __future__ import annotations

from dataclasses import dataclass, field, replace

from .configs import DotsConfig
from .round import HoleDetail, Round
from .settlement import Payable
from .stableford import PointsEntry, pairwise_payables, rank_descending


@dataclass(frozen=True)
class DotsBreakdown:
    fairway: int = 0
    gir: int = 0
    one_putt: int = 0
    birdie: int = 0
    eagle: int = 0
    penalty: int = 0

    @property
    def total(self) -> int:
        return self.fairway + self.gir + self.one_putt + self.birdie + self.eagle + self.penalty


@dataclass(frozen=True)
class DotsHoleResult:
    hole: int
    breakdown: dict[str, DotsBreakdown]


@dataclass
class DotsResult:
    name: str
    hole_by_hole: list[DotsHoleResult]
    totals: dict[str, DotsBreakdown]
    leaderboard: list[PointsEntry]
    payables: list[Payable] = field(default_factory=list)

    @property
    def total_dots(self) -> dict[str, int]:
        return {player_id: breakdown.total for player_id, breakdown in self.totals.items()}


def score_dots(round_: Round, config: DotsConfig | None = None) -> DotsResult:
    config = config or DotsConfig()
    totals = {player_id: DotsBreakdown() for player_id in round_.player_ids}
    hole_results: list[DotsHoleResult] = []

    for idx, hole in enumerate(round_.holes):
        breakdown: dict[str, DotsBreakdown] = {}
        for player in round_.players:
            if idx >= player.holes_played:
                continue
            detail = player.details.get(hole.number) or HoleDetail()
            breakdown[player.player_id] = hole_dots(player.scores[idx], hole.par, detail, config)
        if not breakdown:
            break

        for player_id, dots in breakdown.items():
            totals[player_id] = _add(totals[player_id], dots)
        hole_results.append(DotsHoleResult(hole=hole.number, breakdown=breakdown))

    total_dots = {player_id: breakdown.total for player_id, breakdown in totals.items()}
    return DotsResult(
        name="Dots",
        hole_by_hole=hole_results,
        totals=totals,
        leaderboard=rank_descending(total_dots),
        payables=pairwise_payables(total_dots, config.wager_per_dot, "Dots"),
    )


def hole_dots(strokes: int, par: int, detail: HoleDetail, config: DotsConfig) -> DotsBreakdown:
    return DotsBreakdown(
        fairway=config.fairway_dots if detail.fairway_hit else 0,
        gir=config.gir_dots if detail.green_in_regulation else 0,
        one_putt=config.one_putt_dots if detail.putts == 1 else 0,
        birdie=config.birdie_dots if strokes == par - 1 else 0,
        eagle=config.eagle_dots if strokes <= par - 2 else 0,
        penalty=config.double_bogey_penalty if strokes >= par + 2 else 0,
    )


def estimate_detail(strokes: int, par: int) -> HoleDetail:
    """Deterministic stand-in for a hole with no recorded detail.

    Putts follow the score relative to par (par two-putts, each stroke over
    adds a putt), clamped to 1..4. Par or better counts as a green in
    regulation. Fairways stay unknown.
    """
    putts = max(1, min(4, strokes - par + 2))
    return HoleDetail(putts=putts, green_in_regulation=strokes <= par)


def with_estimated_details(round_: Round) -> Round:
    players = []
    for player in round_.players:
        details = dict(player.details)
        for idx, strokes in enumerate(player.scores):
            number = round_.holes[idx].number
            if number not in details:
                details[number] = estimate_detail(strokes, round_.holes[idx].par)
        players.append(replace(player, details=details))
    return replace(round_, players=tuple(players))


def _add(left: DotsBreakdown, right: DotsBreakdown) -> DotsBreakdown:
    return DotsBreakdown(
        fairway=left.fairway + right.fairway,
        gir=left.gir + right.gir,
        one_putt=left.one_putt + right.one_putt,
        birdie=left.birdie + right.birdie,
        eagle=left.eagle + right.eagle,
        penalty=left.penalty + right.penalty,
    )
