"""Shared round expenses (green fees, carts, food) split between players.

All shares are integer sats. Conversion from fiat is injected as a
``(amount, currency) -> sats`` callable so the core never fetches rates.
Malformed splits are reported as warnings; the payer absorbs whatever the
splits leave unallocated, which keeps the transfers balanced.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .round import DomainValidationError, normalize_player
from .settlement import Payable, build_transfers, split_amount

PERCENT_TOLERANCE = 0.01


class Currency(str, Enum):
    SATS = "sats"
    USD = "USD"
    CAD = "CAD"
    EUR = "EUR"
    GBP = "GBP"
    AUD = "AUD"
    MXN = "MXN"


class ExpenseCategory(str, Enum):
    GREEN_FEES = "green-fees"
    CART_RENTAL = "cart-rental"
    CLUB_RENTAL = "club-rental"
    FOOD = "food"
    DRINKS = "drinks"
    PRO_SHOP = "pro-shop"
    CADDIE = "caddie"
    RANGE_BALLS = "range-balls"
    OTHER = "other"


class SplitMode(str, Enum):
    EQUAL = "equal"
    PERCENTAGE = "percentage"
    FIXED = "fixed"


Converter = Callable[[float, Currency], int]


@dataclass(frozen=True)
class CustomSplit:
    player_id: str
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_id", normalize_player(self.player_id))
        if self.value < 0:
            raise DomainValidationError(f"{self.player_id}: split value must be non-negative")


@dataclass(frozen=True)
class Expense:
    expense_id: str
    amount: float
    paid_by: str
    split_between: tuple[str, ...]
    currency: Currency = Currency.SATS
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: str = ""
    split_mode: SplitMode = SplitMode.EQUAL
    custom_splits: tuple[CustomSplit, ...] = ()
    amount_sats: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "paid_by", normalize_player(self.paid_by))
        object.__setattr__(self, "split_between", tuple(normalize_player(p) for p in self.split_between))
        object.__setattr__(self, "custom_splits", tuple(self.custom_splits))
        if self.amount < 0:
            raise DomainValidationError(f"expense {self.expense_id}: amount must be non-negative")
        if self.amount_sats is not None and self.amount_sats < 0:
            raise DomainValidationError(f"expense {self.expense_id}: amount_sats must be non-negative")
        if self.split_mode is SplitMode.EQUAL and not self.split_between:
            raise DomainValidationError(f"expense {self.expense_id}: nobody to split between")
        if self.split_mode is not SplitMode.EQUAL and not self.custom_splits:
            raise DomainValidationError(
                f"expense {self.expense_id}: {self.split_mode.value} split needs custom splits"
            )


@dataclass(frozen=True)
class ExpenseSplit:
    player_id: str
    name: str
    total_paid: int
    total_owed: int
    net_balance: int


@dataclass
class ExpenseReport:
    splits: list[ExpenseSplit]
    transfers: list[Payable]
    warnings: list[str] = field(default_factory=list)


def rate_converter(sats_per_unit: Mapping[str, float]) -> Converter:
    """Converter backed by a fixed table of sats per unit of each currency."""

    def convert(amount: float, currency: Currency) -> int:
        if currency is Currency.SATS:
            return round(amount)
        rate = sats_per_unit.get(currency.value)
        if rate is None:
            raise DomainValidationError(f"no exchange rate for {currency.value}")
        return round(amount * rate)

    return convert


def expense_amount_sats(expense: Expense, converter: Converter | None = None) -> int:
    if expense.amount_sats is not None:
        return expense.amount_sats
    if expense.currency is Currency.SATS:
        return round(expense.amount)
    if converter is None:
        raise DomainValidationError(
            f"expense {expense.expense_id}: {expense.currency.value} amount needs a converter"
        )
    return converter(expense.amount, expense.currency)


def expense_shares(expense: Expense, amount: int) -> tuple[dict[str, int], list[str]]:
    """Sats owed by each participant of one expense, plus any warnings."""
    if expense.split_mode is SplitMode.EQUAL:
        return dict(zip(expense.split_between, split_amount(amount, len(expense.split_between)))), []

    if expense.split_mode is SplitMode.PERCENTAGE:
        percent = sum(split.value for split in expense.custom_splits)
        if abs(percent - 100) <= PERCENT_TOLERANCE:
            return _largest_remainder(amount, expense.custom_splits, percent), []
        shares = {split.player_id: round(amount * split.value / 100) for split in expense.custom_splits}
        return shares, [f"expense {expense.expense_id}: percentages sum to {percent:g}, not 100"]

    shares = {split.player_id: round(split.value) for split in expense.custom_splits}
    allocated = sum(shares.values())
    if allocated != amount:
        return shares, [f"expense {expense.expense_id}: fixed splits total {allocated} of {amount}"]
    return shares, []


def split_expenses(
    expenses: Sequence[Expense],
    players: Mapping[str, str],
    converter: Converter | None = None,
) -> ExpenseReport:
    """Per-player totals and the transfers that settle every expense.

    ``players`` maps player id to display name. Totals report what each
    player actually paid and was assigned; transfers credit a payer only
    with what the splits allocated.
    """
    paid = {player_id: 0 for player_id in players}
    owed = {player_id: 0 for player_id in players}
    ledger = {player_id: 0 for player_id in players}
    warnings: list[str] = []

    for expense in expenses:
        _ensure_known(expense, players)
        amount = expense_amount_sats(expense, converter)
        shares, expense_warnings = expense_shares(expense, amount)
        warnings.extend(expense_warnings)

        allocated = sum(shares.values())
        if allocated < amount:
            warnings.append(
                f"expense {expense.expense_id}: {amount - allocated} sats unallocated, absorbed by {expense.paid_by}"
            )
        elif allocated > amount:
            warnings.append(
                f"expense {expense.expense_id}: {allocated - amount} sats over-allocated, absorbed by {expense.paid_by}"
            )

        paid[expense.paid_by] += amount
        ledger[expense.paid_by] += allocated
        for player_id, share in shares.items():
            owed[player_id] += share
            ledger[player_id] -= share

    splits = [
        ExpenseSplit(
            player_id=player_id,
            name=name,
            total_paid=paid[player_id],
            total_owed=owed[player_id],
            net_balance=paid[player_id] - owed[player_id],
        )
        for player_id, name in players.items()
    ]
    return ExpenseReport(splits=splits, transfers=build_transfers(ledger, memo="Expenses"), warnings=warnings)


def _largest_remainder(amount: int, splits: Sequence[CustomSplit], percent: float) -> dict[str, int]:
    exact = [amount * split.value / percent for split in splits]
    shares = [math.floor(value) for value in exact]
    leftover = max(0, amount - sum(shares))
    order = sorted(range(len(splits)), key=lambda idx: -(exact[idx] - shares[idx]))
    for idx in order[:leftover]:
        shares[idx] += 1

    result: dict[str, int] = {}
    for split, share in zip(splits, shares):
        result[split.player_id] = result.get(split.player_id, 0) + share
    return result


def _ensure_known(expense: Expense, players: Mapping[str, str]) -> None:
    involved = [expense.paid_by, *expense.split_between, *(split.player_id for split in expense.custom_splits)]
    for player_id in involved:
        if player_id not in players:
            raise DomainValidationError(f"expense {expense.expense_id}: unknown player {player_id}")
