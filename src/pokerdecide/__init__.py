"""pokerdecide - Rule-based poker action advisor."""

__version__ = "0.1.0"

from .action import ActionCapabilities, ActionKind, Decision, allows
from .collaborators import EquityFunction, EvaluatedHand, HandEvaluator, constant_equity
from .config import Config, LoggingConfig
from .engine import DecisionEngine, EngineConfig, confidence_for, size_bet
from .snapshot import ActingContext, GameSnapshot, Street, parse_card_strings

__all__ = [
    "ActingContext",
    "ActionCapabilities",
    "ActionKind",
    "Config",
    "Decision",
    "DecisionEngine",
    "EngineConfig",
    "EquityFunction",
    "EvaluatedHand",
    "GameSnapshot",
    "HandEvaluator",
    "LoggingConfig",
    "Street",
    "allows",
    "confidence_for",
    "constant_equity",
    "parse_card_strings",
    "size_bet",
]
