from __future__ import annotations

from dataclasses import dataclass, field

from .configs import NassauConfig, NassauScoring
from .round import DomainValidationError, Round
from .settlement import Payable

WON = "won"
PUSH = "push"
PENDING = "pending"


@dataclass(frozen=True)
class NassauSegment:
    key: str
    name: str
    holes: tuple[int, ...]
    status: str
    totals: dict[str, int]
    winner: str | None = None
    stake: int = 0


@dataclass
class NassauResult:
    name: str
    segments: list[NassauSegment]
    payables: list[Payable] = field(default_factory=list)


def nassau_segments(hole_count: int) -> list[tuple[str, str, tuple[int, ...]]]:
    """Front half, back half and the whole round, as (key, label, hole numbers)."""
    if hole_count < 2 or hole_count % 2:
        raise DomainValidationError("nassau needs an even number of holes")
    half = hole_count // 2
    return [
        ("front", f"Front {half}", tuple(range(1, half + 1))),
        ("back", f"Back {half}", tuple(range(half + 1, hole_count + 1))),
        ("overall", "Overall", tuple(range(1, hole_count + 1))),
    ]


def score_nassau(round_: Round, config: NassauConfig | None = None) -> NassauResult:
    config = config or NassauConfig()
    if len(round_.players) < 2:
        raise DomainValidationError("nassau requires at least 2 players")
    if config.scoring is NassauScoring.MATCH and len(round_.players) != 2:
        raise DomainValidationError("match-scored nassau requires exactly 2 players")

    segments: list[NassauSegment] = []
    payables: list[Payable] = []
    for key, label, holes in nassau_segments(round_.hole_count):
        stake = config.stake(key)
        segment = _score_segment(round_, config, key, label, holes, stake)
        segments.append(segment)
        if segment.winner is None or stake <= 0:
            continue
        for player_id in round_.player_ids:
            if player_id != segment.winner:
                payables.append(
                    Payable(
                        from_player=player_id,
                        to_player=segment.winner,
                        amount=stake,
                        memo=f"{label} - Nassau",
                    )
                )

    return NassauResult(name="Nassau", segments=segments, payables=payables)


def _score_segment(
    round_: Round,
    config: NassauConfig,
    key: str,
    label: str,
    holes: tuple[int, ...],
    stake: int,
) -> NassauSegment:
    last_hole = holes[-1]
    if any(player.holes_played < last_hole for player in round_.players):
        return NassauSegment(key=key, name=label, holes=holes, status=PENDING, totals={}, stake=stake)

    if config.scoring is NassauScoring.MATCH:
        totals = _holes_won(round_, holes, config.use_net)
        winner = _unique_best(totals, lower_is_better=False)
    else:
        totals = {
            player.player_id: sum(round_.hole_scores(player, config.use_net)[hole - 1] for hole in holes)
            for player in round_.players
        }
        winner = _unique_best(totals, lower_is_better=True)

    return NassauSegment(
        key=key,
        name=label,
        holes=holes,
        status=WON if winner else PUSH,
        totals=totals,
        winner=winner,
        stake=stake,
    )


def _holes_won(round_: Round, holes: tuple[int, ...], use_net: bool) -> dict[str, int]:
    first, second = round_.players
    first_scores = round_.hole_scores(first, use_net)
    second_scores = round_.hole_scores(second, use_net)
    won = {first.player_id: 0, second.player_id: 0}
    for hole in holes:
        if first_scores[hole - 1] < second_scores[hole - 1]:
            won[first.player_id] += 1
        elif second_scores[hole - 1] < first_scores[hole - 1]:
            won[second.player_id] += 1
    return won


def _unique_best(totals: dict[str, int], lower_is_better: bool) -> str | None:
    best = min(totals.values()) if lower_is_better else max(totals.values())
    leaders = [player_id for player_id, total in totals.items() if total == best]
    return leaders[0] if len(leaders) == 1 else None
