"""Decision engine: turns equity, pot odds and legality into one action."""

from __future__ import annotations

import logging
import math
import numbers
import random
from dataclasses import dataclass
from typing import Mapping, Protocol

from .action import ActionCapabilities, ActionKind, Decision
from .collaborators import EquityFunction, HandEvaluator
from .snapshot import GameSnapshot

logger = logging.getLogger("pokerdecide.engine")

NEUTRAL_EQUITY = 0.5


class RandomSource(Protocol):
    """Anything with a ``random()`` returning a float in [0, 1)."""

    def random(self) -> float: ...


@dataclass(frozen=True)
class EngineConfig:
    """Tunable knobs for the engine's play-style.

    Attributes:
        aggression: 0 = tight, 1 = loose.  Scales the equity needed to
            continue with marginal hands preflop.
        vpip: Equity floor below which preflop hands are never played voluntarily.
        pfr: Probability of turning a qualifying preflop call into a raise.
        seed: RNG seed for reproducible decisions.
    """

    aggression: float = 0.35
    vpip: float = 0.25
    pfr: float = 0.18
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in ("aggression", "vpip", "pfr"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")


@dataclass(frozen=True, slots=True)
class _Spot:
    """Everything the rule trees look at, derived once per decision."""

    free: bool
    can_call: bool
    can_bet: bool
    can_raise: bool
    can_fold: bool
    can_all_in: bool
    capabilities: ActionCapabilities
    call_amount: float
    min_bet: float
    max_bet: float
    stack: float
    pot: float
    pot_odds: float
    stack_to_pot: float  # not used by the trees yet
    equity: float
    equity_known: bool
    hand_label: str | None


def size_bet(base: float, pot_fraction: float, stack: float) -> float:
    """Larger of the floor and the pot-based size, capped at the stack."""
    return min(stack, max(0.0, base, pot_fraction))


def confidence_for(equity: float) -> float:
    """0 at a coin flip, 1 at a lock either way."""
    return max(0.0, min(1.0, abs(equity - NEUTRAL_EQUITY) * 2))


def _pct(value: float) -> str:
    return f"{value:.0%}"


def _wait(reason: str) -> Decision:
    return Decision(
        action=ActionKind.NONE,
        amount=0.0,
        name="WAIT",
        reason=reason,
        equity=NEUTRAL_EQUITY,
        confidence=0.0,
        hand_label=None,
    )


def _valid_equity(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    equity = float(value)
    if not math.isfinite(equity) or not 0.0 <= equity <= 1.0:
        return None
    return equity


class DecisionEngine:
    """Rule-based action recommender.

    Usage:
        engine = DecisionEngine(EngineConfig(aggression=0.4))
        decision = engine.decide(snapshot, equity_fn)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        evaluator: HandEvaluator | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._cfg = config or EngineConfig()
        self._evaluator = evaluator
        self._rng = rng if rng is not None else random.Random(self._cfg.seed)

    @property
    def config(self) -> EngineConfig:
        return self._cfg

    def decide(
        self, snapshot: GameSnapshot, equity_fn: EquityFunction | None = None
    ) -> Decision:
        """Recommend an action for hero. Never raises."""
        try:
            return self._decide(snapshot, equity_fn)
        except Exception as exc:
            logger.exception("Decision failed, returning wait")
            return _wait(f"Engine error ({type(exc).__name__})")

    def _decide(
        self, snapshot: GameSnapshot, equity_fn: EquityFunction | None
    ) -> Decision:
        if not snapshot.is_hero_turn:
            return _wait("Not hero turn")
        act = snapshot.acting
        if act is None:
            return _wait("No action data")

        caps = act.capabilities
        equity, equity_known, hand_label = self._estimate(snapshot, equity_fn)

        pot = max(1.0, snapshot.total_pot)
        call = act.call_amount
        spot = _Spot(
            free=caps.allows(ActionKind.CHECK),
            can_call=caps.allows(ActionKind.CALL),
            can_bet=caps.allows(ActionKind.BET),
            can_raise=caps.allows(ActionKind.RAISE),
            can_fold=caps.allows(ActionKind.FOLD),
            can_all_in=caps.allows(ActionKind.ALL_IN),
            capabilities=caps,
            call_amount=call,
            min_bet=act.min_bet,
            max_bet=act.max_bet,
            stack=act.stack,
            pot=pot,
            pot_odds=call / (pot + call) if call > 0 else 0.0,
            stack_to_pot=act.stack / max(1.0, pot),
            equity=equity,
            equity_known=equity_known,
            hand_label=hand_label,
        )

        if not snapshot.board_cards:
            street = "preflop"
            decision = self._preflop(spot)
        else:
            street = "postflop"
            decision = self._postflop(spot)

        logger.debug(
            "%s -> %s %.2f (equity=%.2f, pot_odds=%.2f, spr=%.1f, opp=%d)",
            street,
            decision.name,
            decision.amount,
            equity,
            spot.pot_odds,
            spot.stack_to_pot,
            snapshot.num_opponents,
        )
        return decision

    # ── Equity ───────────────────────────────────────────────

    def _estimate(
        self, snapshot: GameSnapshot, equity_fn: EquityFunction | None
    ) -> tuple[float, bool, str | None]:
        """Ask the collaborators for equity and a hand name.

        Returns (equity, equity_known, hand_label). Any collaborator failure
        degrades to neutral equity and no label.
        """
        if equity_fn is None or len(snapshot.hole_cards) < 2:
            return NEUTRAL_EQUITY, False, None

        try:
            raw = equity_fn(snapshot.hole_cards, snapshot.board_cards, snapshot.num_opponents)
        except Exception:
            logger.debug("Equity function failed, using neutral equity", exc_info=True)
            return NEUTRAL_EQUITY, False, None

        equity = _valid_equity(raw)
        if equity is None:
            logger.debug("Equity function returned %r, using neutral equity", raw)
            return NEUTRAL_EQUITY, False, None

        return equity, True, self._hand_label(snapshot)

    def _hand_label(self, snapshot: GameSnapshot) -> str | None:
        if self._evaluator is None or len(snapshot.board_cards) < 3:
            return None
        try:
            result = self._evaluator.evaluate7([*snapshot.hole_cards, *snapshot.board_cards])
        except Exception:
            logger.debug("Hand evaluator failed, no hand label", exc_info=True)
            return None
        if isinstance(result, Mapping):
            label = result.get("label")
        else:
            label = getattr(result, "label", None)
        if isinstance(label, str) and label:
            return label
        return None

    # ── Preflop ──────────────────────────────────────────────

    def _preflop(self, s: _Spot) -> Decision:
        eq = _pct(s.equity)

        if s.free:
            if s.equity > 0.72 and s.can_raise:
                size = size_bet(s.min_bet, s.pot * 2.5, s.stack)
                return self._make(
                    ActionKind.RAISE, size, s, f"Strong preflop ({eq}), raising", "Strong hand raise"
                )
            return self._make(ActionKind.CHECK, 0.0, s, "Free check preflop", "Free check")

        if s.equity > 0.70:
            if s.can_raise:
                size = size_bet(s.min_bet, s.call_amount * 3, s.stack)
                return self._make(
                    ActionKind.RAISE, size, s, f"Premium hand 3-bet ({eq})", "3-bet premium"
                )
            if s.can_call:
                return self._make(
                    ActionKind.CALL, s.call_amount, s, f"Calling premium ({eq})", "Call premium"
                )

        if s.equity > self._cfg.vpip:
            min_calling_equity = s.pot_odds * (1 + self._cfg.aggression)
            if s.equity >= min_calling_equity:
                odds = _pct(s.pot_odds)
                if s.can_raise and s.equity > 0.55 and self._rng.random() < self._cfg.pfr:
                    size = size_bet(s.min_bet, s.call_amount * 2.5, s.stack)
                    return self._make(
                        ActionKind.RAISE, size, s, f"PFR spot ({eq} vs {odds} odds)", "Standard raise"
                    )
                if s.can_call:
                    return self._make(
                        ActionKind.CALL, s.call_amount, s, f"+EV call ({eq} vs {odds} odds)", "Standard call"
                    )

        if s.can_fold:
            return self._make(
                ActionKind.FOLD, 0.0, s, f"Fold: weak hand ({eq}), price too high", "Fold weak hand"
            )
        if s.can_call:
            return self._make(ActionKind.CALL, s.call_amount, s, "Forced call", "Forced call")
        return self._default_check(s, "Default check")

    # ── Postflop ─────────────────────────────────────────────

    def _postflop(self, s: _Spot) -> Decision:
        eq = _pct(s.equity)
        odds = _pct(s.pot_odds)
        made = s.hand_label

        if s.equity > 0.65:
            if s.free and (s.can_bet or s.can_raise):
                # Some tables only offer RAISE for an opening bet
                kind = ActionKind.BET if s.can_bet else ActionKind.RAISE
                size = size_bet(s.min_bet, s.pot * 0.6, s.stack)
                return self._make(
                    kind, size, s, f"Value bet with {made or 'strong hand'} ({eq})", "Strong made hand"
                )
            if s.can_raise:
                size = size_bet(s.call_amount * 2, s.pot * 0.7, s.stack)
                return self._make(
                    ActionKind.RAISE, size, s, f"Raise {made or 'strong'} ({eq})", "Value raise"
                )
            if s.can_call:
                return self._make(
                    ActionKind.CALL, s.call_amount, s, f"Call with {made or 'strong'} ({eq})", "Call strong"
                )

        if s.equity > 0.40:
            if s.free:
                return self._make(
                    ActionKind.CHECK, 0.0, s, f"Check with {made or 'decent hand'} ({eq})", "Check"
                )
            if s.equity > s.pot_odds * 1.15 and s.can_call:
                return self._make(
                    ActionKind.CALL, s.call_amount, s, f"+EV call: {eq} > {odds} odds", "Pot odds call"
                )
            if s.can_fold:
                return self._make(
                    ActionKind.FOLD, 0.0, s, f"Fold: bad price ({eq} vs {odds} odds)", "Bad price fold"
                )

        if s.free:
            return self._make(ActionKind.CHECK, 0.0, s, "Weak hand, checking free", "Check weak")
        if s.can_fold:
            return self._make(
                ActionKind.FOLD, 0.0, s, f"Weak hand: {made or 'low equity'} ({eq})", "Fold weak"
            )
        if s.can_call:
            return self._make(ActionKind.CALL, s.call_amount, s, "Forced call", "Forced")
        return self._default_check(s, "Default")

    # ── Helpers ───────────────────────────────────────────────

    def _default_check(self, s: _Spot, reason: str) -> Decision:
        if not s.free:
            logger.warning(
                "No check, call or fold offered (legal: %s), defaulting to check",
                s.capabilities,
            )
        return self._make(ActionKind.CHECK, 0.0, s, reason, "Default")

    @staticmethod
    def _make(
        action: ActionKind, amount: float, s: _Spot, reason: str, label: str
    ) -> Decision:
        """Assemble a decision.

        Calls are capped at the stack like bets are. The branch label stands
        in for the evaluator's hand name, but only when equity was actually
        read; a neutral fallback carries no label. Amounts are rounded to
        cents, downwards where rounding would pass the stack.
        """
        if action is ActionKind.CALL:
            amount = min(amount, s.stack)
        if s.hand_label:
            hand_label: str | None = s.hand_label
        elif s.equity_known:
            hand_label = label
        else:
            hand_label = None
        amount = round(max(0.0, amount), 2)
        if amount > s.stack:
            amount = math.floor(s.stack * 100) / 100
        return Decision(
            action=action,
            amount=amount,
            name=action.name,
            reason=reason,
            equity=s.equity,
            confidence=confidence_for(s.equity),
            hand_label=hand_label,
        )
