"""Pinseekr Cup: a four-round, two-team competition.

The cup is a value. ``play_round`` returns a new cup with the round marked
completed next to the round's result; nothing here holds state between
calls. Callers that share a cup must serialize ``play_round`` per cup.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from .configs import DotsConfig, MatchConfig, SnakeConfig, StrokeConfig
from .dots import score_dots, with_estimated_details
from .match_play import score_match_play, side_label
from .round import (
    DEFAULT_HOLE_COUNT,
    MAX_HANDICAP,
    DomainValidationError,
    GameMode,
    Player,
    Round,
    default_holes,
    normalize_player,
)
from .snake import score_snake
from .stroke_play import score_stroke_play

DEFAULT_CUP_NAME = "Pinseekr Cup"
DEFAULT_POINTS_TO_WIN = 9
MIN_PLAYERS = 4


class Team(str, Enum):
    A = "Team A"
    B = "Team B"

    @property
    def other(self) -> Team:
        return Team.B if self is Team.A else Team.A


class CupGameMode(str, Enum):
    STROKE = "stroke"
    MATCH = "match"
    DOTS = "dots"
    SNAKE = "snake"


class CupFormat(str, Enum):
    INDIVIDUAL = "individual"
    PAIRS = "pairs"
    TEAM = "team"


@dataclass(frozen=True)
class CupPlayer:
    player_id: str
    name: str = ""
    handicap: int = 0
    team: Team | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_id", normalize_player(self.player_id))
        if not self.name:
            object.__setattr__(self, "name", self.player_id)
        if not 0 <= self.handicap <= MAX_HANDICAP:
            raise DomainValidationError(f"{self.player_id}: handicap must be between 0 and {MAX_HANDICAP}")


@dataclass(frozen=True)
class RoundResult:
    round_id: str
    game_mode: CupGameMode
    points_awarded: dict[Team, float]
    summary: str
    contributions: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CupRound:
    round_id: str
    name: str
    game_mode: CupGameMode
    format: CupFormat
    points_available: float
    completed: bool = False
    result: RoundResult | None = None


@dataclass(frozen=True)
class CupConfig:
    name: str
    players: tuple[CupPlayer, ...]
    rounds: tuple[CupRound, ...]
    total_points_to_win: float = DEFAULT_POINTS_TO_WIN
    version: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "rounds", tuple(self.rounds))

    def team(self, team: Team) -> list[CupPlayer]:
        return [player for player in self.players if player.team is team]

    def round(self, round_id: str) -> CupRound:
        for cup_round in self.rounds:
            if cup_round.round_id == round_id:
                return cup_round
        raise DomainValidationError(f"round {round_id} not found")

    @property
    def total_points_available(self) -> float:
        return sum(cup_round.points_available for cup_round in self.rounds)

    @property
    def completed_results(self) -> list[RoundResult]:
        return [cup_round.result for cup_round in self.rounds if cup_round.completed and cup_round.result]


@dataclass(frozen=True)
class TeamStanding:
    team: Team
    points: float
    rounds_won: int


@dataclass(frozen=True)
class MvpPlayer:
    player_id: str
    name: str
    points_contributed: float


@dataclass
class CupResults:
    name: str
    completed_rounds: list[RoundResult]
    standings: dict[Team, float]
    leaderboard: list[TeamStanding]
    is_complete: bool
    winner: Team | None = None
    mvp: MvpPlayer | None = None


DEFAULT_ROUNDS: tuple[CupRound, ...] = (
    CupRound("round-1", "Team Stroke Play Championship", CupGameMode.STROKE, CupFormat.TEAM, 4),
    CupRound("round-2", "Singles Match Play", CupGameMode.MATCH, CupFormat.INDIVIDUAL, 6),
    CupRound("round-3", "Dots Championship", CupGameMode.DOTS, CupFormat.INDIVIDUAL, 4),
    CupRound("round-4", "Snake Challenge", CupGameMode.SNAKE, CupFormat.TEAM, 2),
)


def create_cup(
    players: Sequence[CupPlayer],
    name: str = DEFAULT_CUP_NAME,
    total_points_to_win: float = DEFAULT_POINTS_TO_WIN,
) -> CupConfig:
    """New cup on the default template.

    A complete 50/50 team assignment is kept as given; anything else is
    replaced by alternating players between the teams in list order.
    """
    if len(players) < MIN_PLAYERS or len(players) % 2:
        raise DomainValidationError(
            f"Pinseekr Cup requires an even number of players (minimum {MIN_PLAYERS})"
        )
    ids = [player.player_id for player in players]
    if len(set(ids)) != len(ids):
        raise DomainValidationError("players must be unique")
    if total_points_to_win <= 0:
        raise DomainValidationError("total_points_to_win must be positive")

    if not _balanced(players):
        players = [
            replace(player, team=Team.A if idx % 2 == 0 else Team.B) for idx, player in enumerate(players)
        ]

    return CupConfig(
        name=name,
        players=tuple(players),
        rounds=DEFAULT_ROUNDS,
        total_points_to_win=total_points_to_win,
    )


def play_round(
    cup: CupConfig,
    round_id: str,
    scores: Mapping[str, Sequence[int]],
) -> tuple[CupConfig, RoundResult]:
    """Score one cup round and return the updated cup with its result.

    Every cup player needs a full card of gross scores.
    """
    cup_round = cup.round(round_id)
    if cup_round.completed:
        raise DomainValidationError(f"round {round_id} has already been completed")
    golf_round = _golf_round(cup, cup_round, scores)

    if cup_round.game_mode is CupGameMode.STROKE:
        result = _stroke_round(cup, cup_round, golf_round)
    elif cup_round.game_mode is CupGameMode.MATCH and cup_round.format is CupFormat.INDIVIDUAL:
        result = _singles_round(cup, cup_round, golf_round)
    elif cup_round.game_mode is CupGameMode.MATCH:
        result = _team_match_round(cup, cup_round, golf_round)
    elif cup_round.game_mode is CupGameMode.DOTS:
        result = _dots_round(cup, cup_round, golf_round)
    else:
        result = _snake_round(cup, cup_round, golf_round)

    completed = replace(cup_round, completed=True, result=result)
    rounds = tuple(completed if r.round_id == round_id else r for r in cup.rounds)
    return replace(cup, rounds=rounds), result


def get_results(cup: CupConfig, results: Sequence[RoundResult] | None = None) -> CupResults:
    """Standings, winner and MVP over ``results`` (the cup's completed rounds by default).

    The winner is the first team to reach the threshold, walking the
    results in order. If one result takes both teams over it, the higher
    total wins; an exact tie completes the cup with no winner.
    """
    results = list(cup.completed_results if results is None else results)
    standings = {Team.A: 0.0, Team.B: 0.0}
    winner: Team | None = None
    is_complete = False

    for result in results:
        for team in Team:
            standings[team] += result.points_awarded.get(team, 0.0)
        if is_complete:
            continue
        reached = [team for team in Team if standings[team] >= cup.total_points_to_win]
        if reached:
            is_complete = True
            if len(reached) == 1:
                winner = reached[0]
            elif standings[Team.A] != standings[Team.B]:
                winner = max(reached, key=lambda team: standings[team])

    leaderboard = sorted(
        (TeamStanding(team, standings[team], _rounds_won(results, team)) for team in Team),
        key=lambda standing: -standing.points,
    )
    return CupResults(
        name=cup.name,
        completed_rounds=results,
        standings=standings,
        leaderboard=leaderboard,
        is_complete=is_complete,
        winner=winner,
        mvp=_mvp(cup, results),
    )


def leading_team(points: Mapping[Team, float]) -> str:
    if points[Team.A] > points[Team.B]:
        return Team.A.value
    if points[Team.B] > points[Team.A]:
        return Team.B.value
    return "Teams tied"


def _balanced(players: Sequence[CupPlayer]) -> bool:
    if any(player.team is None for player in players):
        return False
    return sum(1 for player in players if player.team is Team.A) * 2 == len(players)


def _golf_round(cup: CupConfig, cup_round: CupRound, scores: Mapping[str, Sequence[int]]) -> Round:
    known = {player.player_id for player in cup.players}
    normalized: dict[str, Sequence[int]] = {}
    for player_id, card in scores.items():
        key = normalize_player(player_id)
        if key in normalized:
            raise DomainValidationError(f"duplicate scores for {key}")
        normalized[key] = card
    unknown = sorted(set(normalized) - known)
    if unknown:
        raise DomainValidationError(f"scores for unknown players: {', '.join(unknown)}")

    players: list[Player] = []
    for cup_player in cup.players:
        card = normalized.get(cup_player.player_id)
        if card is None:
            raise DomainValidationError(f"missing scores for {cup_player.player_id}")
        if len(card) != DEFAULT_HOLE_COUNT:
            raise DomainValidationError(
                f"{cup_player.player_id}: expected {DEFAULT_HOLE_COUNT} scores, got {len(card)}"
            )
        players.append(
            Player(
                player_id=cup_player.player_id,
                name=cup_player.name,
                handicap=cup_player.handicap,
                scores=tuple(card),
            )
        )

    mode = {
        CupGameMode.STROKE: GameMode.STROKE_PLAY,
        CupGameMode.MATCH: GameMode.MATCH_PLAY,
        CupGameMode.DOTS: GameMode.DOTS,
        CupGameMode.SNAKE: GameMode.SNAKE,
    }[cup_round.game_mode]
    return Round(holes=default_holes(), players=tuple(players), game_mode=mode, round_id=cup_round.round_id)


def _stroke_round(cup: CupConfig, cup_round: CupRound, golf_round: Round) -> RoundResult:
    stroke = score_stroke_play(golf_round, StrokeConfig(use_net=True))
    net = {player_id: totals.net for player_id, totals in stroke.totals.items()}
    average = {
        team: sum(net[player.player_id] for player in cup.team(team)) / len(cup.team(team)) for team in Team
    }
    points = _award(cup_round.points_available, {team: -value for team, value in average.items()})
    return RoundResult(
        round_id=cup_round.round_id,
        game_mode=cup_round.game_mode,
        points_awarded=points,
        summary=f"Stroke Play: {leading_team(points)} dominated with superior team scoring",
        contributions=_contributions(cup, points, {pid: -score for pid, score in net.items()}),
    )


def _singles_round(cup: CupConfig, cup_round: CupRound, golf_round: Round) -> RoundResult:
    pairings = list(zip(cup.team(Team.A), cup.team(Team.B)))
    per_match = cup_round.points_available / len(pairings)
    points = {Team.A: 0.0, Team.B: 0.0}
    contributions = {player.player_id: 0.0 for player in cup.players}

    for player_a, player_b in pairings:
        config = MatchConfig(use_net=True, sides=((player_a.player_id,), (player_b.player_id,)))
        winner = score_match_play(golf_round, config).final_status.winner
        if winner == player_a.player_id:
            points[Team.A] += per_match
            contributions[player_a.player_id] += per_match
        elif winner == player_b.player_id:
            points[Team.B] += per_match
            contributions[player_b.player_id] += per_match
        else:
            points[Team.A] += per_match / 2
            points[Team.B] += per_match / 2
            contributions[player_a.player_id] += per_match / 2
            contributions[player_b.player_id] += per_match / 2

    return RoundResult(
        round_id=cup_round.round_id,
        game_mode=cup_round.game_mode,
        points_awarded=points,
        summary=f"Singles Matches: Team A {points[Team.A]:g} - {points[Team.B]:g} Team B",
        contributions=contributions,
    )


def _team_match_round(cup: CupConfig, cup_round: CupRound, golf_round: Round) -> RoundResult:
    sides = tuple(tuple(player.player_id for player in cup.team(team)) for team in Team)
    match = score_match_play(golf_round, MatchConfig(use_net=True, sides=sides))
    winner = match.final_status.winner
    higher = {Team.A: 0.0, Team.B: 0.0}
    if winner is not None:
        higher[Team.A if winner == side_label(sides[0]) else Team.B] = 1.0
    points = _award(cup_round.points_available, higher)
    net = {player.player_id: golf_round.net_total(player) for player in golf_round.players}
    return RoundResult(
        round_id=cup_round.round_id,
        game_mode=cup_round.game_mode,
        points_awarded=points,
        summary=f"Match Play: {leading_team(points)} won the team battle",
        contributions=_contributions(cup, points, {pid: -score for pid, score in net.items()}),
    )


def _dots_round(cup: CupConfig, cup_round: CupRound, golf_round: Round) -> RoundResult:
    dots = score_dots(with_estimated_details(golf_round), DotsConfig(wager_per_dot=0)).total_dots
    team_dots = {team: float(sum(dots[player.player_id] for player in cup.team(team))) for team in Team}
    points = _award(cup_round.points_available, team_dots)
    return RoundResult(
        round_id=cup_round.round_id,
        game_mode=cup_round.game_mode,
        points_awarded=points,
        summary=f"Dots Championship: {leading_team(points)} accumulated more achievement points",
        contributions=_contributions(cup, points, dots),
    )


def _snake_round(cup: CupConfig, cup_round: CupRound, golf_round: Round) -> RoundResult:
    snake = score_snake(with_estimated_details(golf_round), SnakeConfig(penalty_amount=0))
    holder = snake.final_snake_holder
    safe = {Team.A: 1.0, Team.B: 1.0}
    if holder is not None:
        holding_team = next(player.team for player in cup.players if player.player_id == holder)
        safe[holding_team] = 0.0
    points = _award(cup_round.points_available, safe)
    return RoundResult(
        round_id=cup_round.round_id,
        game_mode=cup_round.game_mode,
        points_awarded=points,
        summary=f"Snake Challenge: {leading_team(points)} avoided the three-putt penalties",
        contributions=_contributions(
            cup, points, {pid: -count for pid, count in snake.three_putt_summary.items()}
        ),
    )


def _award(available: float, scores: Mapping[Team, float]) -> dict[Team, float]:
    """All points to the team with the higher score, split evenly on a tie."""
    if scores[Team.A] > scores[Team.B]:
        return {Team.A: float(available), Team.B: 0.0}
    if scores[Team.B] > scores[Team.A]:
        return {Team.A: 0.0, Team.B: float(available)}
    return {Team.A: available / 2, Team.B: available / 2}


def _contributions(
    cup: CupConfig,
    points: Mapping[Team, float],
    performance: Mapping[str, float],
) -> dict[str, float]:
    """Share each team's points between its members by individual performance.

    Higher performance is better. Weights are shifted so the weakest member
    of a team still gets a weight of 1.
    """
    contributions: dict[str, float] = {}
    for team in Team:
        members = [player.player_id for player in cup.team(team)]
        floor = min(performance[player_id] for player_id in members)
        weights = {player_id: performance[player_id] - floor + 1 for player_id in members}
        total = sum(weights.values())
        for player_id in members:
            contributions[player_id] = points[team] * weights[player_id] / total
    return contributions


def _rounds_won(results: Sequence[RoundResult], team: Team) -> int:
    return sum(
        1 for result in results if result.points_awarded.get(team, 0) > result.points_awarded.get(team.other, 0)
    )


def _mvp(cup: CupConfig, results: Sequence[RoundResult]) -> MvpPlayer | None:
    if not results:
        return None

    totals = {player.player_id: 0.0 for player in cup.players}
    for result in results:
        for player_id, value in result.contributions.items():
            if player_id in totals:
                totals[player_id] += value

    best = max(cup.players, key=lambda player: totals[player.player_id])
    return MvpPlayer(
        player_id=best.player_id,
        name=best.name,
        points_contributed=round(totals[best.player_id], 1),
    )
