"""
Phase state machine: which action is legal in which phase, and from whom.

LOBBY -> DEALING -> ORDER_UP_ROUND1
  -> AWAITING_DEALER_DISCARD -> AWAITING_GO_ALONE      (ordered up)
  -> ORDER_UP_ROUND2 -> AWAITING_GO_ALONE              (turned down, suit called)
  -> ORDER_UP_ROUND2 -> DEALING                        (everyone passed: redeal)
AWAITING_GO_ALONE -> PLAYING_TRICKS -> HAND_COMPLETE -> DEALING | GAME_OVER

All phase/turn checks go through ``check_action`` and the ``EXPECTED_ACTOR``
table; handlers never repeat them.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import InvalidPhaseError, InvalidTurnError


class Phase(str, Enum):
    LOBBY = "LOBBY"
    DEALING = "DEALING"
    ORDER_UP_ROUND1 = "ORDER_UP_ROUND1"
    AWAITING_DEALER_DISCARD = "AWAITING_DEALER_DISCARD"
    ORDER_UP_ROUND2 = "ORDER_UP_ROUND2"
    AWAITING_GO_ALONE = "AWAITING_GO_ALONE"
    PLAYING_TRICKS = "PLAYING_TRICKS"
    HAND_COMPLETE = "HAND_COMPLETE"
    GAME_OVER = "GAME_OVER"

    def __str__(self) -> str:
        return self.value


class ActionKind(str, Enum):
    REQUEST_START_GAME = "request_start_game"
    REQUEST_NEW_GAME = "request_new_game"
    ORDER_UP = "action_order_up"
    DEALER_DISCARD = "action_dealer_discard"
    CALL_TRUMP = "action_call_trump"
    GO_ALONE = "action_go_alone"
    PLAY_CARD = "action_play_card"

    def __str__(self) -> str:
        return self.value


# Human wording used in diagnostics ("Invalid order up attempt by north").
ACTION_LABELS = {
    ActionKind.REQUEST_START_GAME: "start game",
    ActionKind.REQUEST_NEW_GAME: "new game",
    ActionKind.ORDER_UP: "order up",
    ActionKind.DEALER_DISCARD: "discard",
    ActionKind.CALL_TRUMP: "call trump",
    ActionKind.GO_ALONE: "go alone",
    ActionKind.PLAY_CARD: "play",
}

Actor = Callable[[Any], Optional[str]]


def _anyone(state: Any) -> Optional[str]:
    return None


def _current_player(state: Any) -> Optional[str]:
    return state.current_player


def _dealer(state: Any) -> Optional[str]:
    return state.dealer


def _caller(state: Any) -> Optional[str]:
    return state.player_who_called_trump


# (phase, action) -> expected actor. ``None`` from the actor function means any seated player.
EXPECTED_ACTOR: Dict[Tuple[Phase, ActionKind], Actor] = {
    (Phase.LOBBY, ActionKind.REQUEST_START_GAME): _anyone,
    (Phase.LOBBY, ActionKind.REQUEST_NEW_GAME): _anyone,
    (Phase.GAME_OVER, ActionKind.REQUEST_NEW_GAME): _anyone,
    (Phase.ORDER_UP_ROUND1, ActionKind.ORDER_UP): _current_player,
    (Phase.AWAITING_DEALER_DISCARD, ActionKind.DEALER_DISCARD): _dealer,
    (Phase.ORDER_UP_ROUND2, ActionKind.CALL_TRUMP): _current_player,
    (Phase.AWAITING_GO_ALONE, ActionKind.GO_ALONE): _caller,
    (Phase.PLAYING_TRICKS, ActionKind.PLAY_CARD): _current_player,
}


def legal_phases(kind: ActionKind) -> list[Phase]:
    return [phase for phase, k in EXPECTED_ACTOR if k == kind]


def expected_actor(state: Any, kind: ActionKind) -> Optional[str]:
    actor = EXPECTED_ACTOR.get((state.phase, kind))
    return actor(state) if actor is not None else None


def check_action(state: Any, kind: ActionKind, role: str) -> None:
    """Raise unless ``role`` may issue ``kind`` in the current phase."""
    actor = EXPECTED_ACTOR.get((state.phase, kind))
    if actor is None:
        allowed = ", ".join(p.value for p in legal_phases(kind))
        raise InvalidPhaseError(
            f"Cannot {ACTION_LABELS[kind]} during {state.phase.value} (allowed in {allowed})"
        )
    expected = actor(state)
    if expected is not None and role != expected:
        raise InvalidTurnError(f"It is {expected}'s turn to {ACTION_LABELS[kind]}, not {role}'s")


def is_allowed(state: Any, kind: ActionKind, role: str) -> bool:
    try:
        check_action(state, kind, role)
    except (InvalidPhaseError, InvalidTurnError):
        return False
    return True


__all__ = [
    "Phase",
    "ActionKind",
    "ACTION_LABELS",
    "EXPECTED_ACTOR",
    "legal_phases",
    "expected_actor",
    "check_action",
    "is_allowed",
]
