"""JSON round-trip for domain values stored or sent over the wire."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from pinseekr.domain import CupConfig, Payable, Round

CUP_ADAPTER = TypeAdapter(CupConfig)
ROUND_ADAPTER = TypeAdapter(Round)
PAYABLES_ADAPTER = TypeAdapter(list[Payable])


def dump_cup(cup: CupConfig) -> dict[str, Any]:
    # the version lives in its own column
    return CUP_ADAPTER.dump_python(cup, mode="json", exclude={"version"})


def load_cup(payload: dict[str, Any], version: int = 0) -> CupConfig:
    return CUP_ADAPTER.validate_python({**payload, "version": version})


def dump_round(round_: Round) -> dict[str, Any]:
    return ROUND_ADAPTER.dump_python(round_, mode="json")


def load_round(payload: dict[str, Any]) -> Round:
    return ROUND_ADAPTER.validate_python(payload)


def dump_payables(payables: list[Payable]) -> list[dict[str, Any]]:
    return PAYABLES_ADAPTER.dump_python(payables, mode="json")


def load_payables(payload: list[dict[str, Any]]) -> list[Payable]:
    return PAYABLES_ADAPTER.validate_python(payload)
