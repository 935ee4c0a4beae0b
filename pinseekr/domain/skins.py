from __future__ import annotations

from dataclasses import dataclass, field

from .configs import SkinsConfig
from .round import DomainValidationError, InvariantViolation, Round
from .settlement import Payable, split_amount


@dataclass(frozen=True)
class SkinHole:
    hole: int
    scores: dict[str, int]
    winner: str | None = None
    skins: int = 0
    value: int = 0
    carry: int = 0
    voided: int = 0


@dataclass
class SkinsResult:
    name: str
    holes: list[SkinHole]
    skins_won: dict[str, int]
    amount_won: dict[str, int]
    voided_skins: int
    unclaimed_carry: int
    total_value: int
    unit_sats: int = 0
    payables: list[Payable] = field(default_factory=list)

    @property
    def voided_value(self) -> int:
        return self.voided_skins * self.unit_sats


def score_skins(round_: Round, config: SkinsConfig | None = None) -> SkinsResult:
    """Sole low score on a hole wins the skin plus everything carried into it.

    Ties carry the skin to the next hole. When a tie leaves the carry at or
    above ``carry_cap`` the carried skins are voided. Whatever is still
    carried after the last contested hole is voided as well.
    """
    config = config or SkinsConfig()
    if len(round_.players) < 2:
        raise DomainValidationError("skins requires at least 2 players")

    player_ids = round_.player_ids
    hole_scores = {player.player_id: round_.hole_scores(player, config.use_net) for player in round_.players}
    contested = min(player.holes_played for player in round_.players)

    holes: list[SkinHole] = []
    payables: list[Payable] = []
    skins_won = {player_id: 0 for player_id in player_ids}
    amount_won = {player_id: 0 for player_id in player_ids}
    voided = 0
    carry = 0

    for idx in range(contested):
        hole_number = round_.holes[idx].number
        carry += 1
        scores = {player_id: hole_scores[player_id][idx] for player_id in player_ids}
        winner = unique_low(scores)

        if winner is None:
            voided_here = 0
            if config.carry_cap is not None and carry >= config.carry_cap:
                voided_here, carry = carry, 0
                voided += voided_here
            holes.append(SkinHole(hole=hole_number, scores=scores, carry=carry, voided=voided_here))
            continue

        value = carry * config.unit_sats
        skins_won[winner] += carry
        amount_won[winner] += value
        losers = [player_id for player_id in player_ids if player_id != winner]
        memo = f"Hole {hole_number} - {carry} skin{'s' if carry > 1 else ''}"
        for loser, amount in zip(losers, split_amount(value, len(losers))):
            if amount:
                payables.append(Payable(from_player=loser, to_player=winner, amount=amount, memo=memo))

        holes.append(SkinHole(hole=hole_number, scores=scores, winner=winner, skins=carry, value=value))
        carry = 0

    result = SkinsResult(
        name="Skins",
        holes=holes,
        skins_won=skins_won,
        amount_won=amount_won,
        voided_skins=voided + carry,
        unclaimed_carry=carry,
        total_value=contested * config.unit_sats,
        unit_sats=config.unit_sats,
        payables=payables,
    )
    _ensure_conserved(result)
    return result


def unique_low(scores: dict[str, int]) -> str | None:
    best = min(scores.values())
    leaders = [player_id for player_id, score in scores.items() if score == best]
    return leaders[0] if len(leaders) == 1 else None


def _ensure_conserved(result: SkinsResult) -> None:
    paid = sum(payable.amount for payable in result.payables)
    won = sum(result.amount_won.values())
    if paid != won:
        raise InvariantViolation(f"skins paid {paid} but won {won}")
    if won + result.voided_value != result.total_value:
        raise InvariantViolation("skins value is not conserved")
