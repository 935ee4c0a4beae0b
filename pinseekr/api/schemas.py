from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

from pinseekr.domain import (
    CupPlayer,
    Currency,
    CustomSplit,
    DotsConfig,
    Expense,
    ExpenseCategory,
    Hole,
    HoleDetail,
    MatchConfig,
    MaxScoreRule,
    MaxScoreType,
    NassauConfig,
    NassauScoring,
    Payable,
    Player,
    Round,
    SixesConfig,
    SkinsConfig,
    SnakeConfig,
    SplitMode,
    StablefordConfig,
    StrokeConfig,
    Team,
)
from pinseekr.domain.round import default_holes


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class HoleIn(BaseModel):
    number: int = Field(..., ge=1)
    par: int = Field(4, ge=3, le=5)
    stroke_index: int | None = Field(None, ge=1)
    yardage: int | None = Field(None, gt=0)


class HoleDetailIn(BaseModel):
    putts: int | None = Field(None, ge=0)
    fairway_hit: bool | None = None
    green_in_regulation: bool | None = None


class PlayerIn(BaseModel):
    player_id: str = Field(..., min_length=1, examples=["alice"])
    name: str = ""
    handicap: int = Field(0, ge=0, le=54)
    scores: list[int] = Field(default_factory=list, description="Gross strokes per hole played, in order")
    details: dict[int, HoleDetailIn] = Field(default_factory=dict, description="Per-hole detail keyed by hole number")


class RoundIn(BaseModel):
    holes: list[HoleIn] | None = Field(None, description="Defaults to 18 par-4 holes")
    players: list[PlayerIn] = Field(..., min_length=1)

    def to_domain(self) -> Round:
        holes = (
            tuple(Hole(**hole.model_dump()) for hole in self.holes) if self.holes else default_holes()
        )
        players = tuple(
            Player(
                player_id=player.player_id,
                name=player.name,
                handicap=player.handicap,
                scores=tuple(player.scores),
                details={number: HoleDetail(**detail.model_dump()) for number, detail in player.details.items()},
            )
            for player in self.players
        )
        return Round(holes=holes, players=players)


class MaxScoreIn(BaseModel):
    type: MaxScoreType
    value: int | None = Field(None, gt=0)


class StrokeConfigIn(BaseModel):
    mode: Literal["stroke-play"]
    use_net: bool = False
    max_score: MaxScoreIn | None = None

    def to_domain(self) -> StrokeConfig:
        rule = MaxScoreRule(self.max_score.type, self.max_score.value) if self.max_score else None
        return StrokeConfig(use_net=self.use_net, max_score=rule)


class MatchConfigIn(BaseModel):
    mode: Literal["match-play"]
    use_net: bool = False
    unit_sats: int = Field(0, ge=0)
    sides: list[list[str]] | None = None

    def to_domain(self) -> MatchConfig:
        sides = tuple(tuple(side) for side in self.sides) if self.sides is not None else None
        return MatchConfig(use_net=self.use_net, unit_sats=self.unit_sats, sides=sides)


class NassauConfigIn(BaseModel):
    mode: Literal["nassau"]
    use_net: bool = False
    unit_sats: int = Field(0, ge=0)
    scoring: NassauScoring = NassauScoring.STROKE
    front_sats: int | None = Field(None, ge=0)
    back_sats: int | None = Field(None, ge=0)
    overall_sats: int | None = Field(None, ge=0)

    def to_domain(self) -> NassauConfig:
        return NassauConfig(**self.model_dump(exclude={"mode"}))


class SkinsConfigIn(BaseModel):
    mode: Literal["skins"]
    use_net: bool = False
    unit_sats: int = Field(0, ge=0)
    carry_cap: int | None = Field(None, ge=1)

    def to_domain(self) -> SkinsConfig:
        return SkinsConfig(**self.model_dump(exclude={"mode"}))


class StablefordConfigIn(BaseModel):
    mode: Literal["points"]
    use_net: bool = False
    modified: bool = False
    unit_sats: int = Field(0, ge=0)

    def to_domain(self) -> StablefordConfig:
        return StablefordConfig(**self.model_dump(exclude={"mode"}))


class DotsConfigIn(BaseModel):
    mode: Literal["dots"]
    wager_per_dot: int = Field(100, ge=0)
    fairway_dots: int = Field(1, ge=0)
    gir_dots: int = Field(1, ge=0)
    one_putt_dots: int = Field(1, ge=0)
    birdie_dots: int = Field(2, ge=0)
    eagle_dots: int = Field(5, ge=0)
    double_bogey_penalty: int = Field(-1, le=0)

    def to_domain(self) -> DotsConfig:
        return DotsConfig(**self.model_dump(exclude={"mode"}))


class SnakeConfigIn(BaseModel):
    mode: Literal["snake"]
    penalty_amount: int = Field(500, ge=0)
    three_putt_threshold: int = Field(3, ge=2)
    distribute_to_group: bool = True
    recipient: str | None = None
    repeat_counts_as_pass: bool = False

    def to_domain(self) -> SnakeConfig:
        return SnakeConfig(**self.model_dump(exclude={"mode"}))


class SixesConfigIn(BaseModel):
    mode: Literal["sixes"]
    use_net: bool = False
    unit_sats: int = Field(0, ge=0)

    def to_domain(self) -> SixesConfig:
        return SixesConfig(**self.model_dump(exclude={"mode"}))


GameConfigIn = Annotated[
    Union[
        StrokeConfigIn,
        MatchConfigIn,
        NassauConfigIn,
        SkinsConfigIn,
        StablefordConfigIn,
        DotsConfigIn,
        SnakeConfigIn,
        SixesConfigIn,
    ],
    Field(discriminator="mode"),
]


class RoundWagersRequest(BaseModel):
    round: RoundIn
    games: list[GameConfigIn] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "round": {
                        "players": [
                            {"player_id": "alice", "handicap": 10, "scores": [4, 3, 5, 4]},
                            {"player_id": "bob", "handicap": 18, "scores": [5, 4, 6, 5]},
                        ],
                        "holes": [{"number": n} for n in range(1, 5)],
                    },
                    "games": [{"mode": "skins", "unit_sats": 100}, {"mode": "nassau", "unit_sats": 1000}],
                }
            ]
        }
    }


class PayableModel(BaseModel):
    from_player: str = Field(..., min_length=1)
    to_player: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)
    memo: str = ""

    @model_validator(mode="after")
    def validate_parties(self) -> "PayableModel":
        if self.from_player == self.to_player:
            raise ValueError("a payable needs two different players")
        return self

    def to_domain(self) -> Payable:
        return Payable(**self.model_dump())


class NetSettlementRequest(BaseModel):
    payables: list[PayableModel]
    players: list[str] = Field(default_factory=list, description="Players to report even with a zero balance")


class SettlementResponse(BaseModel):
    balances: dict[str, int]
    transfers: list[PayableModel]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "balances": {"alice": -500, "bob": 500},
                    "transfers": [{"from_player": "alice", "to_player": "bob", "amount": 500, "memo": "Net settlement"}],
                }
            ]
        }
    }


class CustomSplitIn(BaseModel):
    player_id: str = Field(..., min_length=1)
    value: float = Field(..., ge=0)


class ExpenseIn(BaseModel):
    expense_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    currency: Currency = Currency.SATS
    amount_sats: int | None = Field(None, ge=0, description="Pre-converted amount; skips conversion")
    paid_by: str = Field(..., min_length=1)
    split_between: list[str] = Field(default_factory=list)
    split_mode: SplitMode = SplitMode.EQUAL
    custom_splits: list[CustomSplitIn] = Field(default_factory=list)
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: str = ""

    def to_domain(self) -> Expense:
        return Expense(
            expense_id=self.expense_id,
            amount=self.amount,
            paid_by=self.paid_by,
            split_between=tuple(self.split_between),
            currency=self.currency,
            category=self.category,
            description=self.description,
            split_mode=self.split_mode,
            custom_splits=tuple(CustomSplit(split.player_id, split.value) for split in self.custom_splits),
            amount_sats=self.amount_sats,
        )


class ExpensePlayerIn(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str = ""


class ExpenseSplitRequest(BaseModel):
    expenses: list[ExpenseIn]
    players: list[ExpensePlayerIn] = Field(..., min_length=1)
    rates: dict[str, float] = Field(
        default_factory=dict,
        description="Sats per unit of each fiat currency",
        examples=[{"USD": 1500.0}],
    )

    @model_validator(mode="after")
    def validate_players(self) -> "ExpenseSplitRequest":
        ids = [player.player_id for player in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("players must be unique")
        return self


class ExpenseSplitOut(BaseModel):
    player_id: str
    name: str
    total_paid: int
    total_owed: int
    net_balance: int


class ExpenseSplitResponse(BaseModel):
    splits: list[ExpenseSplitOut]
    transfers: list[PayableModel]
    warnings: list[str]


class CupPlayerIn(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str = ""
    handicap: int = Field(0, ge=0, le=54)
    team: Team | None = None

    def to_domain(self) -> CupPlayer:
        return CupPlayer(player_id=self.player_id, name=self.name, handicap=self.handicap, team=self.team)


class CreateCupRequest(BaseModel):
    players: list[CupPlayerIn] = Field(..., min_length=1)
    name: str | None = None
    total_points_to_win: float | None = Field(None, gt=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Pinseekr Cup 2025",
                    "players": [
                        {"player_id": "alice", "handicap": 10},
                        {"player_id": "bob", "handicap": 18},
                        {"player_id": "charlie", "handicap": 2},
                        {"player_id": "dave", "handicap": 12},
                    ],
                }
            ]
        }
    }


class PlayRoundRequest(BaseModel):
    scores: dict[str, list[int]] = Field(..., description="18 gross scores per cup player")


class RoundResultOut(BaseModel):
    round_id: str
    game_mode: str
    points_awarded: dict[str, float]
    summary: str
    contributions: dict[str, float]


class CupRoundOut(BaseModel):
    round_id: str
    name: str
    game_mode: str
    format: str
    points_available: float
    completed: bool
    result: RoundResultOut | None = None


class CupPlayerOut(BaseModel):
    player_id: str
    name: str
    handicap: int
    team: str | None


class CupResponse(BaseModel):
    id: str
    name: str
    version: int
    total_points_to_win: float
    players: list[CupPlayerOut]
    rounds: list[CupRoundOut]


class PlayRoundResponse(BaseModel):
    cup: CupResponse
    result: RoundResultOut


class TeamStandingOut(BaseModel):
    team: str
    points: float
    rounds_won: int


class MvpOut(BaseModel):
    player_id: str
    name: str
    points_contributed: float


class CupResultsResponse(BaseModel):
    id: str
    name: str
    standings: dict[str, float]
    leaderboard: list[TeamStandingOut]
    completed_rounds: list[RoundResultOut]
    is_complete: bool
    winner: str | None = None
    mvp: MvpOut | None = None
