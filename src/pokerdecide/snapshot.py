"""Read-only game snapshot consumed by the decision engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Self, Sequence

from .action import ActionCapabilities, ActionKind


class Street(Enum):
    """Betting street, inferred from the number of board cards."""

    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


_STREETS_BY_BOARD_SIZE = {0: Street.PREFLOP, 3: Street.FLOP, 4: Street.TURN, 5: Street.RIVER}

# Canonical key first, then accepted aliases in order of precedence.
_ACTING_KEYS: dict[str, tuple[str, ...]] = {
    "capabilities": ("capabilities", "optAction"),
    "call_amount": ("call_amount", "optCoin", "callAmount"),
    "min_bet": ("min_bet", "minBetCoin", "minBet"),
    "max_bet": ("max_bet", "maxBetCoin", "maxBet"),
    "stack": ("stack", "deskCoin"),
}

_SNAPSHOT_KEYS: dict[str, tuple[str, ...]] = {
    "is_hero_turn": ("is_hero_turn", "isHeroTurn"),
    "acting": ("acting", "currentAct"),
    "hole_cards": ("hole_cards", "holeCardStrings", "holeCards"),
    "board_cards": ("board_cards", "boardCardStrings", "boardCards"),
    "total_pot": ("total_pot", "totalPot"),
    "big_blind": ("big_blind", "bb", "bigBlind"),
    "active_seat_count": ("active_seat_count", "activeSeatCount", "activePlayers"),
}


def _lookup(data: Mapping[str, Any], keys: tuple[str, ...], default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _amount(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"{name} must be a finite non-negative number, got {value!r}")
    return amount


def parse_card_strings(value: str | Sequence[str] | None) -> tuple[str, ...]:
    """Normalise cards given as 'As Kh', 'As,Kh' or ['As', 'Kh'].

    Card tokens are passed through untouched; validating them is up to the
    equity function and hand evaluator.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(p for p in value.replace(",", " ").split() if p)
    return tuple(str(c) for c in value)


def _capabilities(value: Any) -> ActionCapabilities:
    if isinstance(value, ActionCapabilities):
        return value
    if isinstance(value, str):
        return ActionCapabilities.parse(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return ActionCapabilities(value)
    if isinstance(value, Sequence):
        return ActionCapabilities.of(
            *(k if isinstance(k, ActionKind) else ActionKind.parse(str(k)) for k in value)
        )
    raise ValueError(f"Cannot read action capabilities from {value!r}")


@dataclass(frozen=True)
class ActingContext:
    """The legal-action envelope for hero's current turn.

    All monetary values are in chips.
    """

    capabilities: ActionCapabilities
    call_amount: float = 0.0
    min_bet: float = 0.0
    max_bet: float = 0.0
    stack: float = 0.0  # most hero can still commit this street

    def __post_init__(self) -> None:
        # Accept a raw mask, "check,bet" or a list of names.
        object.__setattr__(self, "capabilities", _capabilities(self.capabilities))
        for name in ("call_amount", "min_bet", "max_bet", "stack"):
            _amount(getattr(self, name), name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build from canonical keys or the aliases listed in _ACTING_KEYS."""
        caps = _lookup(data, _ACTING_KEYS["capabilities"])
        if caps is None:
            raise ValueError("Acting context is missing its action capabilities")
        return cls(
            capabilities=_capabilities(caps),
            call_amount=_amount(_lookup(data, _ACTING_KEYS["call_amount"], 0), "call_amount"),
            min_bet=_amount(_lookup(data, _ACTING_KEYS["min_bet"], 0), "min_bet"),
            max_bet=_amount(_lookup(data, _ACTING_KEYS["max_bet"], 0), "max_bet"),
            stack=_amount(_lookup(data, _ACTING_KEYS["stack"], 0), "stack"),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """Snapshot of the hand at decision time, as seen by hero."""

    is_hero_turn: bool
    acting: ActingContext | None = None
    hole_cards: tuple[str, ...] = ()
    board_cards: tuple[str, ...] = ()
    total_pot: float = 0.0
    big_blind: float = 0.0  # advisory
    active_seat_count: int = 2

    @property
    def street(self) -> Street | None:
        """Street implied by the board, or None for an impossible board size."""
        return _STREETS_BY_BOARD_SIZE.get(len(self.board_cards))

    @property
    def num_opponents(self) -> int:
        return max(1, self.active_seat_count - 1)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build a snapshot from a JSON-like mapping.

        Canonical snake_case keys win over the camelCase aliases used by
        table readers (see _SNAPSHOT_KEYS). Unrecognised keys are ignored.
        """
        acting_data = _lookup(data, _SNAPSHOT_KEYS["acting"])
        if acting_data is None:
            acting = None
        elif isinstance(acting_data, ActingContext):
            acting = acting_data
        elif isinstance(acting_data, Mapping):
            acting = ActingContext.from_dict(acting_data)
        else:
            raise ValueError(f"Acting context must be a mapping, got {acting_data!r}")

        board = parse_card_strings(_lookup(data, _SNAPSHOT_KEYS["board_cards"]))
        if len(board) not in _STREETS_BY_BOARD_SIZE:
            raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(board)}")

        seats = _lookup(data, _SNAPSHOT_KEYS["active_seat_count"], 2)
        if isinstance(seats, bool) or not isinstance(seats, int) or seats < 1:
            raise ValueError(f"active_seat_count must be a positive integer, got {seats!r}")

        hero_turn = _lookup(data, _SNAPSHOT_KEYS["is_hero_turn"], False)
        if not isinstance(hero_turn, bool):
            raise ValueError(f"is_hero_turn must be true or false, got {hero_turn!r}")

        return cls(
            is_hero_turn=hero_turn,
            acting=acting,
            hole_cards=parse_card_strings(_lookup(data, _SNAPSHOT_KEYS["hole_cards"])),
            board_cards=board,
            total_pot=_amount(_lookup(data, _SNAPSHOT_KEYS["total_pot"], 0), "total_pot"),
            big_blind=_amount(_lookup(data, _SNAPSHOT_KEYS["big_blind"], 0), "big_blind"),
            active_seat_count=seats,
        )
