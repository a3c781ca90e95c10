"""
Inbound actions as a closed set of small frozen dataclasses.

``parse_action`` turns the transport's ``(kind, payload)`` pair into one of
them, so nothing loosely typed reaches the phase machine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Union

from .deck import Card, Suit, card_from_ref, parse_suit
from .errors import InvalidActionError
from .phases import ActionKind


@dataclass(frozen=True)
class StartGame:
    kind: ClassVar[ActionKind] = ActionKind.REQUEST_START_GAME


@dataclass(frozen=True)
class NewGame:
    kind: ClassVar[ActionKind] = ActionKind.REQUEST_NEW_GAME


@dataclass(frozen=True)
class OrderUp:
    decision: bool
    kind: ClassVar[ActionKind] = ActionKind.ORDER_UP


@dataclass(frozen=True)
class DealerDiscard:
    card: Card
    kind: ClassVar[ActionKind] = ActionKind.DEALER_DISCARD


@dataclass(frozen=True)
class CallTrump:
    suit: Optional[Suit]  # None = pass
    kind: ClassVar[ActionKind] = ActionKind.CALL_TRUMP


@dataclass(frozen=True)
class GoAlone:
    decision: bool
    kind: ClassVar[ActionKind] = ActionKind.GO_ALONE


@dataclass(frozen=True)
class PlayCard:
    card: Card
    kind: ClassVar[ActionKind] = ActionKind.PLAY_CARD


Action = Union[StartGame, NewGame, OrderUp, DealerDiscard, CallTrump, GoAlone, PlayCard]


def _require(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    raise InvalidActionError(f"Missing payload field {keys[0]!r}")


def _decision(payload: Mapping[str, Any]) -> bool:
    value = _require(payload, "decision")
    if not isinstance(value, bool):
        raise InvalidActionError(f"'decision' must be true or false, got {value!r}")
    return value


def parse_action(kind: Union[str, ActionKind], payload: Optional[Mapping[str, Any]] = None) -> Action:
    """Validate an inbound message shape. Raises ``InvalidActionError``."""
    try:
        kind = ActionKind(kind)
    except ValueError:
        raise InvalidActionError(f"Unknown action: {kind!r}") from None
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise InvalidActionError(f"Payload must be an object, got {type(payload).__name__}")

    if kind == ActionKind.REQUEST_START_GAME:
        return StartGame()
    if kind == ActionKind.REQUEST_NEW_GAME:
        return NewGame()
    if kind == ActionKind.ORDER_UP:
        return OrderUp(decision=_decision(payload))
    if kind == ActionKind.DEALER_DISCARD:
        return DealerDiscard(card=card_from_ref(_require(payload, "cardToDiscard", "card_to_discard", "card")))
    if kind == ActionKind.CALL_TRUMP:
        suit = _require(payload, "suit")
        return CallTrump(suit=None if suit is None else parse_suit(suit))
    if kind == ActionKind.GO_ALONE:
        return GoAlone(decision=_decision(payload))
    return PlayCard(card=card_from_ref(_require(payload, "card")))


__all__ = [
    "Action",
    "StartGame",
    "NewGame",
    "OrderUp",
    "DealerDiscard",
    "CallTrump",
    "GoAlone",
    "PlayCard",
    "parse_action",
]
