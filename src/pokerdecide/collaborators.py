"""Contracts for the external equity function and hand evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence


class EquityFunction(Protocol):
    """Estimates hero's chance of beating random holdings (0-1)."""

    def __call__(
        self,
        hole_cards: Sequence[str],
        board_cards: Sequence[str],
        num_opponents: int,
    ) -> float: ...


@dataclass(frozen=True)
class EvaluatedHand:
    """Result of a hand evaluation, e.g. EvaluatedHand("Full House")."""

    label: str


class HandEvaluator(Protocol):
    """Names hero's best hand from hole + board cards.

    The result may also be a mapping with a ``"label"`` key.
    """

    def evaluate7(
        self, cards: Sequence[str]
    ) -> EvaluatedHand | Mapping[str, Any] | None: ...


def constant_equity(value: float) -> EquityFunction:
    """Equity function that always answers ``value``.

    Handy when the equity comes from elsewhere (a solver, a HUD, the user).
    """
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Equity must be between 0 and 1, got {value}")

    def equity(hole_cards: Sequence[str], board_cards: Sequence[str], num_opponents: int) -> float:
        return value

    return equity
