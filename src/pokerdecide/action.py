"""Action vocabulary, capability masks and the decision output."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Self


class ActionKind(IntEnum):
    """Possible actions. The value doubles as the bit index in a capability mask."""

    NONE = 0
    CHECK = 1
    CALL = 2
    BET = 3
    FOLD = 4
    RAISE = 5
    ALL_IN = 6

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse an action name like 'raise', 'ALL_IN' or 'all-in'."""
        key = text.strip().upper().replace("-", "_")
        if key == "ALLIN":
            key = "ALL_IN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown action: {text!r}") from None

    @property
    def label(self) -> str:
        """Human-readable name (e.g. 'All-in')."""
        if self is ActionKind.ALL_IN:
            return "All-in"
        return self.name.capitalize()


def allows(mask: int, kind: ActionKind | int) -> bool:
    """True if bit ``kind`` is set in ``mask``."""
    return bool((mask >> int(kind)) & 1)


@dataclass(frozen=True, slots=True)
class ActionCapabilities:
    """The set of actions legal in the current turn, stored as a bitmask."""

    mask: int = 0

    def __post_init__(self) -> None:
        if self.mask < 0:
            raise ValueError(f"Capability mask must be non-negative, got {self.mask}")

    @classmethod
    def of(cls, *kinds: ActionKind) -> Self:
        mask = 0
        for kind in kinds:
            mask |= 1 << int(kind)
        return cls(mask)

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse comma or space separated action names, e.g. 'check,bet,fold'."""
        parts = text.replace(",", " ").split()
        return cls.of(*(ActionKind.parse(p) for p in parts))

    def allows(self, kind: ActionKind) -> bool:
        return allows(self.mask, kind)

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, int):
            return False
        return self.allows(ActionKind(kind)) if 0 <= kind < len(ActionKind) else False

    def __int__(self) -> int:
        return self.mask

    @property
    def kinds(self) -> tuple[ActionKind, ...]:
        """Legal actions in enum order."""
        return tuple(k for k in ActionKind if self.allows(k))

    def __str__(self) -> str:
        return ",".join(k.name.lower() for k in self.kinds) or "none"


@dataclass(frozen=True)
class Decision:
    """The engine's recommended action with reasoning.

    Attributes:
        action: The recommended action.
        amount: Chips to put in (call, bet or raise size), 0 otherwise.
        name: Upper-case action name, or "WAIT" when there is nothing to do.
        reason: Human-readable explanation.
        equity: Equity used for the decision (0-1).
        confidence: Distance of equity from a coin flip, scaled to 0-1.
        hand_label: Name of hero's made hand, or a generic label for the branch.
    """

    action: ActionKind
    amount: float
    name: str
    reason: str
    equity: float
    confidence: float
    hand_label: str | None = None

    def __str__(self) -> str:
        if self.action is ActionKind.NONE:
            return "Wait"
        if self.amount > 0:
            return f"{self.action.label} {self.amount:.2f}"
        return self.action.label

    def to_dict(self) -> dict:
        """JSON-ready representation with the action as its name."""
        data = asdict(self)
        data["action"] = self.action.name
        return data
