from __future__ import annotations

from dataclasses import dataclass, field

from .configs import StrokeConfig
from .round import Hole, Player, Round
from .settlement import Payable


@dataclass(frozen=True)
class PlayerTotals:
    gross: int
    net: int


@dataclass(frozen=True)
class HoleBreakdown:
    hole: int
    gross: int
    net: int


@dataclass(frozen=True)
class LeaderboardEntry:
    player_id: str
    position: int
    score: int
    score_type: str
    gross: int
    net: int
    holes_played: int
    incomplete: bool = False


@dataclass
class StrokeResult:
    name: str
    totals: dict[str, PlayerTotals]
    leaderboard: list[LeaderboardEntry]
    hole_by_hole: dict[str, list[HoleBreakdown]]
    warnings: list[str] = field(default_factory=list)
    payables: list[Payable] = field(default_factory=list)


@dataclass(frozen=True)
class RoundStats:
    player_id: str
    gross_total: int
    net_total: int
    birdies_or_better: int
    pars: int
    bogeys: int
    double_bogey_or_worse: int
    average_score: float


def score_stroke_play(round_: Round, config: StrokeConfig | None = None) -> StrokeResult:
    config = config or StrokeConfig()
    totals: dict[str, PlayerTotals] = {}
    hole_by_hole: dict[str, list[HoleBreakdown]] = {}
    warnings: list[str] = []

    for player in round_.players:
        breakdown = _player_breakdown(round_, player, config)
        hole_by_hole[player.player_id] = breakdown
        totals[player.player_id] = PlayerTotals(
            gross=sum(item.gross for item in breakdown),
            net=sum(item.net for item in breakdown),
        )
        if player.holes_played < round_.hole_count:
            warnings.append(
                f"{player.player_id} has {player.holes_played} of {round_.hole_count} holes recorded"
            )

    holes_played = {player.player_id: player.holes_played for player in round_.players}
    leaderboard = rank_players(totals, config.use_net, holes_played, round_.hole_count)
    return StrokeResult(
        name="Stroke Play",
        totals=totals,
        leaderboard=leaderboard,
        hole_by_hole=hole_by_hole,
        warnings=warnings,
    )


def rank_players(
    totals: dict[str, PlayerTotals],
    use_net: bool,
    holes_played: dict[str, int],
    hole_count: int,
) -> list[LeaderboardEntry]:
    """Rank lowest score first; equal scores share a position.

    Players who have not finished every hole are placed after all finished
    players, ordered by holes played and then score, and share the position
    right after the last finished player.
    """
    score_type = "net" if use_net else "gross"

    def entry(player_id: str, position: int) -> LeaderboardEntry:
        player_totals = totals[player_id]
        return LeaderboardEntry(
            player_id=player_id,
            position=position,
            score=player_totals.net if use_net else player_totals.gross,
            score_type=score_type,
            gross=player_totals.gross,
            net=player_totals.net,
            holes_played=holes_played[player_id],
            incomplete=holes_played[player_id] < hole_count,
        )

    def score_of(player_id: str) -> int:
        return totals[player_id].net if use_net else totals[player_id].gross

    complete = sorted(
        (player_id for player_id in totals if holes_played[player_id] >= hole_count),
        key=score_of,
    )
    incomplete = sorted(
        (player_id for player_id in totals if holes_played[player_id] < hole_count),
        key=lambda player_id: (-holes_played[player_id], score_of(player_id)),
    )

    leaderboard: list[LeaderboardEntry] = []
    position = 1
    for idx, player_id in enumerate(complete):
        if idx > 0 and score_of(player_id) != score_of(complete[idx - 1]):
            position = idx + 1
        leaderboard.append(entry(player_id, position))

    for player_id in incomplete:
        leaderboard.append(entry(player_id, len(complete) + 1))
    return leaderboard


def round_stats(round_: Round, player: Player) -> RoundStats:
    birdies = pars = bogeys = doubles = 0
    for hole, score in zip(round_.holes, player.scores):
        to_par = score - hole.par
        if to_par <= -1:
            birdies += 1
        elif to_par == 0:
            pars += 1
        elif to_par == 1:
            bogeys += 1
        else:
            doubles += 1

    return RoundStats(
        player_id=player.player_id,
        gross_total=player.total,
        net_total=round_.net_total(player),
        birdies_or_better=birdies,
        pars=pars,
        bogeys=bogeys,
        double_bogey_or_worse=doubles,
        average_score=player.total / player.holes_played if player.holes_played else 0.0,
    )


def _player_breakdown(round_: Round, player: Player, config: StrokeConfig) -> list[HoleBreakdown]:
    net_scores = round_.net_scores(player)
    breakdown: list[HoleBreakdown] = []
    for idx, gross in enumerate(player.scores):
        hole: Hole = round_.holes[idx]
        net = net_scores[idx]
        if config.max_score is not None:  # caps net only
            net = config.max_score.cap(net, hole.par)
        breakdown.append(HoleBreakdown(hole=hole.number, gross=gross, net=net))
    return breakdown
