"""Per-format wager configuration.

Every game format gets its own frozen config carrying only the fields that
format understands; ``GameConfig`` is the union of all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .round import DomainValidationError, GameMode


class MaxScoreType(str, Enum):
    DOUBLE_BOGEY = "double-bogey"
    TRIPLE_BOGEY = "triple-bogey"
    PAR_PLUS = "par-plus"
    FIXED = "fixed"


class NassauScoring(str, Enum):
    STROKE = "stroke"
    MATCH = "match"


@dataclass(frozen=True)
class MaxScoreRule:
    type: MaxScoreType
    value: int | None = None

    def __post_init__(self) -> None:
        if self.value is not None and self.value <= 0:
            raise DomainValidationError("max score value must be positive")

    def cap(self, score: int, par: int) -> int:
        if self.type is MaxScoreType.DOUBLE_BOGEY:
            return min(score, par + 2)
        if self.type is MaxScoreType.TRIPLE_BOGEY:
            return min(score, par + 3)
        if self.type is MaxScoreType.PAR_PLUS:
            return min(score, par + (self.value or 2))
        return min(score, self.value or 10)


def _ensure_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise DomainValidationError(f"{name} must be non-negative")


@dataclass(frozen=True)
class StrokeConfig:
    mode: ClassVar[GameMode] = GameMode.STROKE_PLAY

    use_net: bool = False
    max_score: MaxScoreRule | None = None


@dataclass(frozen=True)
class MatchConfig:
    mode: ClassVar[GameMode] = GameMode.MATCH_PLAY

    use_net: bool = False
    unit_sats: int = 0
    sides: tuple[tuple[str, ...], tuple[str, ...]] | None = None

    def __post_init__(self) -> None:
        _ensure_non_negative(unit_sats=self.unit_sats)
        if self.sides is not None:
            sides = tuple(tuple(side) for side in self.sides)
            if len(sides) != 2:
                raise DomainValidationError("match play requires exactly two sides")
            if not all(sides):
                raise DomainValidationError("each side needs at least one player")
            if set(sides[0]) & set(sides[1]):
                raise DomainValidationError("a player cannot be on both sides")
            object.__setattr__(self, "sides", sides)


@dataclass(frozen=True)
class NassauConfig:
    mode: ClassVar[GameMode] = GameMode.NASSAU

    use_net: bool = False
    unit_sats: int = 0
    scoring: NassauScoring = NassauScoring.STROKE
    front_sats: int | None = None
    back_sats: int | None = None
    overall_sats: int | None = None

    def __post_init__(self) -> None:
        _ensure_non_negative(unit_sats=self.unit_sats)
        for name in ("front_sats", "back_sats", "overall_sats"):
            value = getattr(self, name)
            if value is not None:
                _ensure_non_negative(**{name: value})

    def stake(self, segment: str) -> int:
        override = getattr(self, f"{segment}_sats")
        return self.unit_sats if override is None else override


@dataclass(frozen=True)
class SkinsConfig:
    mode: ClassVar[GameMode] = GameMode.SKINS

    use_net: bool = False
    unit_sats: int = 0
    carry_cap: int | None = None

    def __post_init__(self) -> None:
        _ensure_non_negative(unit_sats=self.unit_sats)
        if self.carry_cap is not None and self.carry_cap < 1:
            raise DomainValidationError("carry_cap must be at least 1")


@dataclass(frozen=True)
class StablefordConfig:
    mode: ClassVar[GameMode] = GameMode.POINTS

    use_net: bool = False
    modified: bool = False
    unit_sats: int = 0

    def __post_init__(self) -> None:
        _ensure_non_negative(unit_sats=self.unit_sats)


@dataclass(frozen=True)
class DotsConfig:
    mode: ClassVar[GameMode] = GameMode.DOTS

    wager_per_dot: int = 100
    fairway_dots: int = 1
    gir_dots: int = 1
    one_putt_dots: int = 1
    birdie_dots: int = 2
    eagle_dots: int = 5
    double_bogey_penalty: int = -1

    def __post_init__(self) -> None:
        _ensure_non_negative(
            wager_per_dot=self.wager_per_dot,
            fairway_dots=self.fairway_dots,
            gir_dots=self.gir_dots,
            one_putt_dots=self.one_putt_dots,
            birdie_dots=self.birdie_dots,
            eagle_dots=self.eagle_dots,
        )
        if self.double_bogey_penalty > 0:
            raise DomainValidationError("double_bogey_penalty must be zero or negative")


@dataclass(frozen=True)
class SnakeConfig:
    mode: ClassVar[GameMode] = GameMode.SNAKE

    penalty_amount: int = 500
    three_putt_threshold: int = 3
    distribute_to_group: bool = True
    recipient: str | None = None
    repeat_counts_as_pass: bool = False

    def __post_init__(self) -> None:
        _ensure_non_negative(penalty_amount=self.penalty_amount)
        if self.three_putt_threshold < 2:
            raise DomainValidationError("three_putt_threshold must be at least 2")
        if not self.distribute_to_group and not self.recipient:
            raise DomainValidationError("recipient is required when the penalty is not distributed")


@dataclass(frozen=True)
class SixesConfig:
    mode: ClassVar[GameMode] = GameMode.SIXES

    use_net: bool = False
    unit_sats: int = 0

    def __post_init__(self) -> None:
        _ensure_non_negative(unit_sats=self.unit_sats)


GameConfig = Union[
    StrokeConfig,
    MatchConfig,
    NassauConfig,
    SkinsConfig,
    StablefordConfig,
    DotsConfig,
    SnakeConfig,
    SixesConfig,
]
