from __future__ import annotations

from dataclasses import dataclass, field

from .configs import SnakeConfig
from .round import DomainValidationError, Round
from .settlement import Payable, split_amount


@dataclass(frozen=True)
class SnakeHoleResult:
    hole: int
    putts: dict[str, int]
    three_putters: list[str]
    snake_holder: str | None


@dataclass(frozen=True)
class SnakePenalty:
    loser: str
    amount: int
    recipients: dict[str, int]


@dataclass
class SnakeResult:
    name: str
    hole_by_hole: list[SnakeHoleResult]
    three_putt_summary: dict[str, int]
    snake_passes: int
    final_snake_holder: str | None
    holder_history: list[str]
    penalty: SnakePenalty | None = None
    payables: list[Payable] = field(default_factory=list)


def score_snake(round_: Round, config: SnakeConfig | None = None) -> SnakeResult:
    """Track the snake through three-putts in play order.

    Holes are played in order and, within a hole, players in round order.
    The first three-putt picks up the snake without counting as a pass.
    A three-putt by anyone else passes it; the holder three-putting again
    keeps it and only counts as a pass with ``repeat_counts_as_pass``.
    """
    config = config or SnakeConfig()
    if config.recipient is not None:
        round_.player(config.recipient)

    summary = {player_id: 0 for player_id in round_.player_ids}
    holder: str | None = None
    history: list[str] = []
    passes = 0
    hole_results: list[SnakeHoleResult] = []

    for hole in round_.holes:
        putts: dict[str, int] = {}
        three_putters: list[str] = []
        for player in round_.players:
            detail = player.details.get(hole.number)
            if detail is None or detail.putts is None:
                continue
            putts[player.player_id] = detail.putts
            if detail.putts < config.three_putt_threshold:
                continue

            three_putters.append(player.player_id)
            summary[player.player_id] += 1
            if holder is None:
                holder = player.player_id
                history.append(holder)
            elif holder != player.player_id:
                holder = player.player_id
                history.append(holder)
                passes += 1
            elif config.repeat_counts_as_pass:
                passes += 1

        hole_results.append(
            SnakeHoleResult(hole=hole.number, putts=putts, three_putters=three_putters, snake_holder=holder)
        )

    penalty = _penalty(round_, holder, config)
    payables = []
    if penalty is not None:
        payables = [
            Payable(from_player=penalty.loser, to_player=recipient, amount=amount, memo="Snake penalty")
            for recipient, amount in penalty.recipients.items()
            if amount
        ]

    return SnakeResult(
        name="Snake",
        hole_by_hole=hole_results,
        three_putt_summary=summary,
        snake_passes=passes,
        final_snake_holder=holder,
        holder_history=history,
        penalty=penalty,
        payables=payables,
    )


def snake_status(result: SnakeResult) -> str:
    if result.final_snake_holder is None:
        return "No three-putts this round - no snake penalty!"
    if result.penalty is not None:
        return f"{result.final_snake_holder} holds the snake and owes {result.penalty.amount} sats!"
    return f"{result.final_snake_holder} holds the snake"


def _penalty(round_: Round, holder: str | None, config: SnakeConfig) -> SnakePenalty | None:
    if holder is None or config.penalty_amount <= 0:
        return None

    if not config.distribute_to_group and config.recipient != holder:
        recipients = {config.recipient: config.penalty_amount}
    else:
        # a recipient holding the snake cannot pay itself, so the group shares it
        others = [player_id for player_id in round_.player_ids if player_id != holder]
        if not others:
            raise DomainValidationError("snake penalty needs at least one other player")
        recipients = dict(zip(others, split_amount(config.penalty_amount, len(others))))

    return SnakePenalty(loser=holder, amount=config.penalty_amount, recipients=recipients)
