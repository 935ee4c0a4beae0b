"""Run several wager formats over one round and net the combined ledger."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .configs import GameConfig
from .dots import score_dots
from .match_play import score_match_play
from .nassau import score_nassau
from .round import DomainValidationError, GameMode, Round
from .settlement import Payable, SettlementResult, net_payables, settle
from .sixes import score_sixes
from .skins import score_skins
from .snake import score_snake
from .stableford import score_stableford
from .stroke_play import score_stroke_play

ENGINES: Mapping[GameMode, Callable[[Round, Any], Any]] = {
    GameMode.STROKE_PLAY: score_stroke_play,
    GameMode.MATCH_PLAY: score_match_play,
    GameMode.NASSAU: score_nassau,
    GameMode.SKINS: score_skins,
    GameMode.POINTS: score_stableford,
    GameMode.DOTS: score_dots,
    GameMode.SNAKE: score_snake,
    GameMode.SIXES: score_sixes,
}


@dataclass
class RoundWagers:
    results: dict[str, Any]
    settlement: SettlementResult
    payables: list[Payable] = field(default_factory=list)


def score_game(round_: Round, config: GameConfig) -> Any:
    return ENGINES[config.mode](round_, config)


def process_round_wagers(round_: Round, configs: Sequence[GameConfig]) -> RoundWagers:
    """Score every configured format and settle all of their payables together.

    Results are keyed by game mode value; each format may appear once.
    """
    if not configs:
        raise DomainValidationError("at least one game config is required")

    results: dict[str, Any] = {}
    for config in configs:
        key = config.mode.value
        if key in results:
            raise DomainValidationError(f"duplicate game config: {key}")
        results[key] = score_game(round_, config)

    payables = combined_payables(results.values())
    return RoundWagers(
        results=results,
        settlement=settle(payables, round_.player_ids),
        payables=payables,
    )


def combined_payables(results: Iterable[Any]) -> list[Payable]:
    payables: list[Payable] = []
    for result in results:
        payables.extend(result.payables)
    return payables


def net_settlement(results: Mapping[str, Any]) -> list[Payable]:
    return net_payables(combined_payables(results.values()))
