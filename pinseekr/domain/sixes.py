from __future__ import annotations

from dataclasses import dataclass, field

from .configs import SixesConfig
from .round import DomainValidationError, Round
from .settlement import Payable
from .stableford import pairwise_payables

SEGMENT_LENGTH = 6

# partner rotations by seat, one entry per six-hole segment
_THREE_PLAYER_ROTATIONS = (((0, 1), (2,)), ((0, 2), (1,)), ((1, 2), (0,)))
_FOUR_PLAYER_ROTATIONS = (((0, 1), (2, 3)), ((0, 2), (1, 3)), ((0, 3), (1, 2)))


@dataclass(frozen=True)
class SixesTeam:
    players: tuple[str, ...]
    best_ball_total: int | None = None


@dataclass(frozen=True)
class SixesSegment:
    holes: tuple[int, ...]
    teams: tuple[SixesTeam, SixesTeam]
    status: str
    winner: str | None = None


@dataclass
class SixesResult:
    name: str
    segments: list[SixesSegment]
    player_totals: dict[str, int]
    winners: list[str]
    payables: list[Payable] = field(default_factory=list)


def score_sixes(round_: Round, config: SixesConfig | None = None) -> SixesResult:
    """Rotating partners every six holes, best ball per side.

    The winning side of a fully scored segment earns each member a point.
    A tied segment earns nobody anything and an unfinished one stays pending.
    """
    config = config or SixesConfig()
    if len(round_.players) < 3:
        raise DomainValidationError("sixes requires at least 3 players")
    if round_.hole_count % SEGMENT_LENGTH:
        raise DomainValidationError(f"sixes needs a multiple of {SEGMENT_LENGTH} holes")

    player_ids = round_.player_ids
    totals = {player_id: 0 for player_id in player_ids}
    segments: list[SixesSegment] = []

    for index in range(round_.hole_count // SEGMENT_LENGTH):
        holes = tuple(range(index * SEGMENT_LENGTH + 1, (index + 1) * SEGMENT_LENGTH + 1))
        sides = rotation(player_ids, index)
        segment = _score_segment(round_, sides, holes, config.use_net)
        segments.append(segment)
        if segment.winner is not None:
            for player_id in sides[0] if segment.winner == _label(sides[0]) else sides[1]:
                totals[player_id] += 1

    best = max(totals.values())
    winners = [player_id for player_id, total in totals.items() if total == best] if best > 0 else []
    return SixesResult(
        name="Sixes",
        segments=segments,
        player_totals=totals,
        winners=winners,
        payables=pairwise_payables(totals, config.unit_sats, "Sixes"),
    )


def rotation(player_ids: list[str], segment_index: int) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """The two sides for a segment.

    Three and four players rotate through fixed pairings. Larger groups
    shift the seating by one per segment and split it in half, the first
    side taking the odd player.
    """
    count = len(player_ids)
    if count in (3, 4):
        table = _THREE_PLAYER_ROTATIONS if count == 3 else _FOUR_PLAYER_ROTATIONS
        first, second = table[segment_index % len(table)]
        return tuple(player_ids[i] for i in first), tuple(player_ids[i] for i in second)

    shift = segment_index % count
    seated = player_ids[shift:] + player_ids[:shift]
    cut = count // 2 + count % 2
    return tuple(seated[:cut]), tuple(seated[cut:])


def _score_segment(
    round_: Round,
    sides: tuple[tuple[str, ...], tuple[str, ...]],
    holes: tuple[int, ...],
    use_net: bool,
) -> SixesSegment:
    members = {player_id for side in sides for player_id in side}
    if any(round_.player(player_id).holes_played < holes[-1] for player_id in members):
        teams = (SixesTeam(players=sides[0]), SixesTeam(players=sides[1]))
        return SixesSegment(holes=holes, teams=teams, status="pending")

    first = _best_ball_total(round_, sides[0], holes, use_net)
    second = _best_ball_total(round_, sides[1], holes, use_net)
    teams = (SixesTeam(players=sides[0], best_ball_total=first), SixesTeam(players=sides[1], best_ball_total=second))
    if first == second:
        return SixesSegment(holes=holes, teams=teams, status="push")
    winner = _label(sides[0]) if first < second else _label(sides[1])
    return SixesSegment(holes=holes, teams=teams, status="won", winner=winner)


def _best_ball_total(round_: Round, side: tuple[str, ...], holes: tuple[int, ...], use_net: bool) -> int:
    scores = [round_.hole_scores(round_.player(player_id), use_net) for player_id in side]
    return sum(min(player_scores[hole - 1] for player_scores in scores) for hole in holes)


def _label(side: tuple[str, ...]) -> str:
    return " & ".join(side)
