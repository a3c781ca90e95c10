"""
Rule violations raised by the engine.

Every engine entry point validates before it mutates, so catching one of these
means the game state was left exactly as it was.
"""
from __future__ import annotations


class EuchreError(Exception):
    """Base class for every rejected action."""


class InvalidActionError(EuchreError):
    """Malformed payload, unknown action kind, or an actor without a seat."""


class InvalidPhaseError(EuchreError):
    """Action issued outside the phase where it is legal."""


class InvalidTurnError(EuchreError):
    """Actor is not the seat the current phase is waiting on."""


class InvalidCardError(EuchreError):
    """Card absent from hand, fails follow-suit, or cannot be discarded."""


class InvalidSuitError(EuchreError):
    """Suit cannot be named (unknown, or the turned-down suit in round 2)."""


__all__ = [
    "EuchreError",
    "InvalidActionError",
    "InvalidPhaseError",
    "InvalidTurnError",
    "InvalidCardError",
    "InvalidSuitError",
]
