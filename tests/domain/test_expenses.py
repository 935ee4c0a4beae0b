import pytest

from pinseekr.domain import DomainValidationError
from pinseekr.domain.expenses import (
    Currency,
    CustomSplit,
    Expense,
    ExpenseCategory,
    SplitMode,
    expense_amount_sats,
    rate_converter,
    split_expenses,
)

PLAYERS = {"alice": "Alice", "bob": "Bob", "charlie": "Charlie"}


def _transfers(report) -> list[tuple[str, str, int]]:
    return [(t.from_player, t.to_player, t.amount) for t in report.transfers]


def test_equal_split_gives_remainder_to_first_share() -> None:
    expense = Expense(
        "e1",
        amount=1000,
        paid_by="alice",
        split_between=("alice", "bob", "charlie"),
        category=ExpenseCategory.GREEN_FEES,
    )

    report = split_expenses([expense], PLAYERS)

    assert [(s.player_id, s.total_paid, s.total_owed, s.net_balance) for s in report.splits] == [
        ("alice", 1000, 334, 666),
        ("bob", 0, 333, -333),
        ("charlie", 0, 333, -333),
    ]
    assert _transfers(report) == [("bob", "alice", 333), ("charlie", "alice", 333)]
    assert {t.memo for t in report.transfers} == {"Expenses"}
    assert report.warnings == []


def test_fiat_amounts_convert_through_injected_rates() -> None:
    expense = Expense("cart", amount=50, paid_by="bob", split_between=("alice", "bob"), currency=Currency.USD)

    report = split_expenses([expense], PLAYERS, converter=rate_converter({"USD": 1000}))

    assert report.splits[1].total_paid == 50_000
    assert _transfers(report) == [("alice", "bob", 25_000)]


def test_missing_rate_or_converter_is_an_error() -> None:
    euros = Expense("food", amount=20, paid_by="bob", split_between=("bob",), currency=Currency.EUR)

    with pytest.raises(DomainValidationError, match="no exchange rate for EUR"):
        expense_amount_sats(euros, rate_converter({"USD": 1000}))
    with pytest.raises(DomainValidationError, match="needs a converter"):
        expense_amount_sats(euros)


def test_recorded_sats_amount_wins_over_conversion() -> None:
    expense = Expense(
        "drinks",
        amount=12,
        paid_by="bob",
        split_between=("bob",),
        currency=Currency.CAD,
        amount_sats=9_000,
    )

    assert expense_amount_sats(expense) == 9_000


def test_percentage_split_uses_largest_remainder() -> None:
    expense = Expense(
        "e2",
        amount=999,
        paid_by="alice",
        split_between=(),
        split_mode=SplitMode.PERCENTAGE,
        custom_splits=(CustomSplit("alice", 50), CustomSplit("bob", 30), CustomSplit("charlie", 20)),
    )

    report = split_expenses([expense], PLAYERS)

    assert [s.total_owed for s in report.splits] == [499, 300, 200]
    assert report.warnings == []


def test_percentages_off_100_warn_and_payer_absorbs_the_rest() -> None:
    expense = Expense(
        "e3",
        amount=1000,
        paid_by="alice",
        split_between=(),
        split_mode=SplitMode.PERCENTAGE,
        custom_splits=(CustomSplit("alice", 60), CustomSplit("bob", 30)),
    )

    report = split_expenses([expense], PLAYERS)

    assert report.warnings == [
        "expense e3: percentages sum to 90, not 100",
        "expense e3: 100 sats unallocated, absorbed by alice",
    ]
    assert report.splits[0].net_balance == 400
    assert _transfers(report) == [("bob", "alice", 300)]


def test_fixed_splits_over_the_amount_warn() -> None:
    expense = Expense(
        "e4",
        amount=1000,
        paid_by="alice",
        split_between=(),
        split_mode=SplitMode.FIXED,
        custom_splits=(CustomSplit("alice", 700), CustomSplit("bob", 400)),
    )

    report = split_expenses([expense], PLAYERS)

    assert report.warnings == [
        "expense e4: fixed splits total 1100 of 1000",
        "expense e4: 100 sats over-allocated, absorbed by alice",
    ]
    assert _transfers(report) == [("bob", "alice", 400)]


def test_expenses_net_across_payers() -> None:
    expenses = [
        Expense("fees", amount=900, paid_by="alice", split_between=("alice", "bob", "charlie")),
        Expense("lunch", amount=600, paid_by="bob", split_between=("alice", "bob", "charlie")),
    ]

    report = split_expenses(expenses, PLAYERS)

    assert [s.net_balance for s in report.splits] == [400, 100, -500]
    assert _transfers(report) == [("charlie", "alice", 400), ("charlie", "bob", 100)]


def test_unknown_player_is_rejected() -> None:
    expense = Expense("e5", amount=100, paid_by="zed", split_between=("alice",))

    with pytest.raises(DomainValidationError, match="unknown player zed"):
        split_expenses([expense], PLAYERS)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"amount": -1, "split_between": ("alice",)}, "amount must be non-negative"),
        ({"amount": 100, "split_between": ()}, "nobody to split between"),
        ({"amount": 100, "split_between": (), "split_mode": SplitMode.FIXED}, "fixed split needs custom splits"),
    ],
    ids=["negative_amount", "empty_equal_split", "fixed_without_splits"],
)
def test_invalid_expenses(kwargs: dict, message: str) -> None:
    with pytest.raises(DomainValidationError, match=message):
        Expense("bad", paid_by="alice", **kwargs)
