"""Monetary obligations and least-transaction settlement between players."""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .round import InvariantViolation

NET_SETTLEMENT_MEMO = "Net settlement"


@dataclass(frozen=True)
class Payable:
    from_player: str
    to_player: str
    amount: int
    memo: str = ""

    def __post_init__(self) -> None:
        if self.from_player == self.to_player:
            raise InvariantViolation(f"payable from {self.from_player} to itself")
        if self.amount < 0:
            raise InvariantViolation(f"negative payable amount: {self.amount}")


@dataclass
class SettlementResult:
    balances: dict[str, int]
    transfers: list[Payable] = field(default_factory=list)


def split_amount(amount: int, parts: int) -> list[int]:
    """Split ``amount`` into ``parts`` integer shares that add up exactly.

    The remainder goes one unit at a time to the first shares.
    """
    if parts <= 0:
        return []
    share, remainder = divmod(amount, parts)
    return [share + (1 if idx < remainder else 0) for idx in range(parts)]


def net_balances(payables: Iterable[Payable], players: Sequence[str] = ()) -> dict[str, int]:
    """Signed balance per player: received minus paid.

    Players passed explicitly appear even with a zero balance, in that order.
    """
    balances: dict[str, int] = {player: 0 for player in players}
    for payable in payables:
        balances[payable.from_player] = balances.get(payable.from_player, 0) - payable.amount
        balances[payable.to_player] = balances.get(payable.to_player, 0) + payable.amount
    return balances


def build_transfers(net: Mapping[str, int], memo: str = NET_SETTLEMENT_MEMO) -> list[Payable]:
    """Greedily pair the largest debtor with the largest creditor until all balances are zero."""
    total = sum(net.values())
    if total != 0:
        raise InvariantViolation(f"balances must sum to zero, got {total}")

    creditors = [(-amount, name) for name, amount in net.items() if amount > 0]
    debtors = [(amount, name) for name, amount in net.items() if amount < 0]
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    transfers: list[Payable] = []
    while creditors and debtors:
        credit, creditor = heapq.heappop(creditors)
        debt, debtor = heapq.heappop(debtors)
        credit, debt = -credit, -debt

        amount = min(credit, debt)
        transfers.append(Payable(from_player=debtor, to_player=creditor, amount=amount, memo=memo))

        if credit > amount:
            heapq.heappush(creditors, (amount - credit, creditor))
        if debt > amount:
            heapq.heappush(debtors, (amount - debt, debtor))

    _ensure_minimal(net, transfers)
    return transfers


def settle(payables: Iterable[Payable], players: Sequence[str] = ()) -> SettlementResult:
    balances = net_balances(payables, players)
    return SettlementResult(balances=balances, transfers=build_transfers(balances))


def net_payables(payables: Iterable[Payable]) -> list[Payable]:
    return settle(payables).transfers


def _ensure_minimal(net: Mapping[str, int], transfers: Sequence[Payable]) -> None:
    non_zero = sum(1 for amount in net.values() if amount != 0)
    if non_zero and len(transfers) > non_zero - 1:
        raise InvariantViolation(f"{len(transfers)} transfers for {non_zero} non-zero balances")
    if any(transfer.amount <= 0 for transfer in transfers):
        raise InvariantViolation("transfers must be positive")
