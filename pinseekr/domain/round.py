from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

MAX_HANDICAP = 54
DEFAULT_HOLE_COUNT = 18
DEFAULT_PAR = 4


class DomainValidationError(ValueError):
    """Raised when a scoring rule or precondition is violated."""


class InvariantViolation(RuntimeError):
    """Raised when an engine produces a result that breaks its own contract."""


class GameMode(str, Enum):
    STROKE_PLAY = "stroke-play"
    MATCH_PLAY = "match-play"
    NASSAU = "nassau"
    SKINS = "skins"
    POINTS = "points"
    DOTS = "dots"
    SNAKE = "snake"
    SIXES = "sixes"


class RoundStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Hole:
    number: int
    par: int = DEFAULT_PAR
    stroke_index: int | None = None
    yardage: int | None = None

    def __post_init__(self) -> None:
        if self.number < 1:
            raise DomainValidationError("hole number must be 1-based")
        if self.par not in (3, 4, 5):
            raise DomainValidationError(f"hole {self.number}: par must be 3, 4 or 5")
        if self.yardage is not None and self.yardage <= 0:
            raise DomainValidationError(f"hole {self.number}: yardage must be positive")


@dataclass(frozen=True)
class HoleDetail:
    putts: int | None = None
    fairway_hit: bool | None = None
    green_in_regulation: bool | None = None

    def __post_init__(self) -> None:
        if self.putts is not None and self.putts < 0:
            raise DomainValidationError("putts must be non-negative")


@dataclass(frozen=True)
class Player:
    player_id: str
    name: str = ""
    handicap: int = 0
    scores: tuple[int, ...] = ()
    details: Mapping[int, HoleDetail] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_id", normalize_player(self.player_id))
        object.__setattr__(self, "scores", tuple(self.scores))
        if not self.name:
            object.__setattr__(self, "name", self.player_id)
        if not 0 <= self.handicap <= MAX_HANDICAP:
            raise DomainValidationError(f"handicap must be between 0 and {MAX_HANDICAP}")
        if any(score < 1 for score in self.scores):
            raise DomainValidationError(f"{self.player_id}: strokes must be positive")

    @property
    def holes_played(self) -> int:
        return len(self.scores)

    @property
    def total(self) -> int:
        return sum(self.scores)


@dataclass(frozen=True)
class Round:
    holes: tuple[Hole, ...]
    players: tuple[Player, ...]
    game_mode: GameMode = GameMode.STROKE_PLAY
    status: RoundStatus = RoundStatus.ACTIVE
    round_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "holes", tuple(self.holes))
        object.__setattr__(self, "players", tuple(self.players))
        if not self.holes:
            raise DomainValidationError("round must have at least one hole")
        numbers = [hole.number for hole in self.holes]
        if numbers != list(range(1, len(self.holes) + 1)):
            raise DomainValidationError("holes must be numbered 1..N in order")
        _ensure_stroke_index_permutation(self.holes)

        ids = [player.player_id for player in self.players]
        if len(set(ids)) != len(ids):
            raise DomainValidationError("players must be unique")
        for player in self.players:
            if player.holes_played > len(self.holes):
                raise DomainValidationError(
                    f"{player.player_id}: {player.holes_played} scores for a {len(self.holes)}-hole round"
                )

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def player_ids(self) -> list[str]:
        return [player.player_id for player in self.players]

    def player(self, player_id: str) -> Player:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise DomainValidationError(f"unknown player: {player_id}")

    def strokes_received(self, player: Player) -> tuple[int, ...]:
        return tuple(strokes_received(player.handicap, hole, self.hole_count) for hole in self.holes)

    def net_scores(self, player: Player) -> tuple[int, ...]:
        pops = self.strokes_received(player)
        return tuple(score - pops[idx] for idx, score in enumerate(player.scores))

    def allowance_strokes(self, player: Player) -> int:
        return sum(self.strokes_received(player)[: player.holes_played])

    def net_total(self, player: Player) -> int:
        return player.total - self.allowance_strokes(player)

    def hole_scores(self, player: Player, use_net: bool) -> tuple[int, ...]:
        return self.net_scores(player) if use_net else player.scores


def normalize_player(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player id must be non-empty")
    return value


def strokes_received(handicap: int, hole: Hole, hole_count: int) -> int:
    """Handicap strokes a player gets on ``hole``.

    Strokes are spread over the holes by stroke index: every hole gets
    ``handicap // hole_count`` and the hardest ``handicap % hole_count`` holes
    get one more. Holes without a stroke index fall back to their number.
    """
    stroke_index = hole.stroke_index or hole.number
    base, extra = divmod(handicap, hole_count)
    return base + (1 if stroke_index <= extra else 0)


def default_holes(count: int = DEFAULT_HOLE_COUNT, par: int = DEFAULT_PAR) -> tuple[Hole, ...]:
    return tuple(Hole(number=number, par=par) for number in range(1, count + 1))


def new_round(
    players: Sequence[Player],
    holes: Sequence[Hole] | None = None,
    game_mode: GameMode = GameMode.STROKE_PLAY,
    round_id: str | None = None,
) -> Round:
    return Round(
        holes=tuple(holes) if holes else default_holes(),
        players=tuple(players),
        game_mode=game_mode,
        round_id=round_id,
    )


def record_score(
    round_: Round,
    player_id: str,
    hole_number: int,
    strokes: int,
    detail: HoleDetail | None = None,
) -> Round:
    """Return a new round with ``strokes`` recorded for one player on one hole."""
    _ensure_active(round_)
    if not 1 <= hole_number <= round_.hole_count:
        raise DomainValidationError(f"unknown hole: {hole_number}")

    player = round_.player(player_id)
    if hole_number > player.holes_played + 1:
        raise DomainValidationError(
            f"{player.player_id}: hole {player.holes_played + 1} must be scored before hole {hole_number}"
        )

    scores = list(player.scores)
    if hole_number == player.holes_played + 1:
        scores.append(strokes)
    else:
        scores[hole_number - 1] = strokes

    details = dict(player.details)
    if detail is not None:
        details[hole_number] = detail

    updated = replace(player, scores=tuple(scores), details=details)
    players = tuple(updated if p.player_id == player.player_id else p for p in round_.players)
    return replace(round_, players=players)


def complete_round(round_: Round) -> Round:
    _ensure_active(round_)
    return replace(round_, status=RoundStatus.COMPLETED)


def cancel_round(round_: Round) -> Round:
    _ensure_active(round_)
    return replace(round_, status=RoundStatus.CANCELLED)


def _ensure_active(round_: Round) -> None:
    if round_.status is not RoundStatus.ACTIVE:
        raise DomainValidationError(f"round is {round_.status.value}")


def _ensure_stroke_index_permutation(holes: Sequence[Hole]) -> None:
    indexes = [hole.stroke_index for hole in holes if hole.stroke_index is not None]
    if not indexes:
        return
    if len(indexes) != len(holes) or sorted(indexes) != list(range(1, len(holes) + 1)):
        raise DomainValidationError("stroke indexes must be a permutation of 1..N")
