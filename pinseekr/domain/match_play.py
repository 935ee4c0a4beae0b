from __future__ import annotations

from dataclasses import dataclass, field

from .configs import MatchConfig
from .round import DomainValidationError, Round
from .settlement import Payable, split_amount


@dataclass(frozen=True)
class MatchHoleResult:
    hole: int
    winner: str | None
    margin: int
    scores: dict[str, int]


@dataclass(frozen=True)
class SideTotals:
    holes_won: int
    holes_lost: int
    holes_tied: int
    status: str
    margin: int


@dataclass(frozen=True)
class MatchStatus:
    leader: str | None
    margin: int
    holes_played: int
    holes_remaining: int
    is_complete: bool
    winner: str | None
    closed_out: bool = False
    dormie: bool = False


@dataclass
class MatchResult:
    name: str
    sides: tuple[str, str]
    members: dict[str, tuple[str, ...]]
    hole_by_hole: list[MatchHoleResult]
    totals: dict[str, SideTotals]
    final_status: MatchStatus
    match_summary: str
    payables: list[Payable] = field(default_factory=list)


def score_match_play(round_: Round, config: MatchConfig | None = None) -> MatchResult:
    config = config or MatchConfig()
    first, second = _resolve_sides(round_, config)
    labels = (side_label(first), side_label(second))

    hole_results: list[MatchHoleResult] = []
    won = {labels[0]: 0, labels[1]: 0}
    tied = 0
    closed_out = False

    for idx, hole in enumerate(round_.holes):
        first_score = _side_score(round_, first, idx, config.use_net)
        second_score = _side_score(round_, second, idx, config.use_net)
        if first_score is None or second_score is None:
            break

        winner: str | None = None
        if first_score < second_score:
            winner = labels[0]
        elif second_score < first_score:
            winner = labels[1]

        if winner is None:
            tied += 1
        else:
            won[winner] += 1

        hole_results.append(
            MatchHoleResult(
                hole=hole.number,
                winner=winner,
                margin=abs(first_score - second_score),
                scores={labels[0]: first_score, labels[1]: second_score},
            )
        )

        remaining = round_.hole_count - (idx + 1)
        if abs(won[labels[0]] - won[labels[1]]) > remaining:
            closed_out = remaining > 0
            break

    status = match_status(labels, won, len(hole_results), round_.hole_count, closed_out)
    totals = {
        labels[0]: _side_totals(won[labels[0]], won[labels[1]], tied),
        labels[1]: _side_totals(won[labels[1]], won[labels[0]], tied),
    }
    return MatchResult(
        name="Match Play",
        sides=labels,
        members={labels[0]: first, labels[1]: second},
        hole_by_hole=hole_results,
        totals=totals,
        final_status=status,
        match_summary=format_match_status(status),
        payables=_match_payables(status, {labels[0]: first, labels[1]: second}, config.unit_sats),
    )


def match_status(
    labels: tuple[str, str],
    won: dict[str, int],
    holes_played: int,
    hole_count: int,
    closed_out: bool = False,
) -> MatchStatus:
    margin = abs(won[labels[0]] - won[labels[1]])
    leader: str | None = None
    if won[labels[0]] > won[labels[1]]:
        leader = labels[0]
    elif won[labels[1]] > won[labels[0]]:
        leader = labels[1]

    remaining = hole_count - holes_played
    is_complete = closed_out or remaining == 0
    return MatchStatus(
        leader=leader,
        margin=margin,
        holes_played=holes_played,
        holes_remaining=remaining,
        is_complete=is_complete,
        winner=leader if is_complete else None,
        closed_out=closed_out,
        dormie=not is_complete and leader is not None and margin == remaining,
    )


def format_match_status(status: MatchStatus) -> str:
    if status.is_complete:
        if status.winner is None:
            return "Match tied"
        if status.closed_out:
            return f"{status.winner} wins {status.margin} up with {status.holes_remaining} to play"
        return f"{status.winner} wins {status.margin} up"
    if status.leader is None:
        return f"All square with {status.holes_remaining} to play"
    if status.dormie:
        return f"{status.leader} dormie {status.margin}"
    return f"{status.leader} {status.margin} up with {status.holes_remaining} to play"


def side_label(side: tuple[str, ...]) -> str:
    return " & ".join(side)


def _resolve_sides(round_: Round, config: MatchConfig) -> tuple[tuple[str, ...], tuple[str, ...]]:
    if config.sides is None:
        if len(round_.players) != 2:
            raise DomainValidationError(
                f"match play requires exactly 2 sides, got {len(round_.players)} players"
            )
        return (round_.players[0].player_id,), (round_.players[1].player_id,)

    for side in config.sides:
        for player_id in side:
            round_.player(player_id)
    return config.sides


def _side_score(round_: Round, side: tuple[str, ...], idx: int, use_net: bool) -> int | None:
    scores: list[int] = []
    for player_id in side:
        player = round_.player(player_id)
        if idx >= player.holes_played:
            return None
        scores.append(round_.hole_scores(player, use_net)[idx])
    # best ball
    return min(scores)


def _side_totals(won: int, lost: int, tied: int) -> SideTotals:
    margin = won - lost
    status = "up" if margin > 0 else "down" if margin < 0 else "tied"
    return SideTotals(holes_won=won, holes_lost=lost, holes_tied=tied, status=status, margin=margin)


def _match_payables(
    status: MatchStatus,
    members: dict[str, tuple[str, ...]],
    unit_sats: int,
) -> list[Payable]:
    if status.winner is None or unit_sats <= 0:
        return []

    winners = members[status.winner]
    losers = next(side for label, side in members.items() if label != status.winner)
    payables: list[Payable] = []
    for loser in losers:
        for winner, amount in zip(winners, split_amount(unit_sats, len(winners))):
            if amount:
                payables.append(Payable(from_player=loser, to_player=winner, amount=amount, memo="Match play"))
    return payables
