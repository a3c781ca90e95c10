"""
Game orchestration: start and reset a game, route a parsed action to its engine
handler, and list the legal actions for a seat.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional

from .actions import (
    Action,
    CallTrump,
    DealerDiscard,
    GoAlone,
    NewGame,
    OrderUp,
    PlayCard,
    StartGame,
)
from .bidding import call_trump, dealer_discard, go_alone, order_up
from .deal import start_new_hand
from .deck import SUITS
from .errors import InvalidActionError
from .phases import ActionKind, Phase, check_action
from .play import legal_plays, play_card
from .players import SEATS, is_seat
from .state import GameState, new_game_id

logger = logging.getLogger(__name__)

PLAYERS_REQUIRED = 4


def start_game(
    state: GameState,
    role: str,
    rng: random.Random | None = None,
    first_dealer: Optional[str] = None,
) -> None:
    """Leave the lobby: pick the first dealer and deal the first hand."""
    check_action(state, ActionKind.REQUEST_START_GAME, role)
    if state.players.seated_count() < PLAYERS_REQUIRED:
        raise InvalidActionError(f"Need {PLAYERS_REQUIRED} players to start.")
    if first_dealer is not None and not is_seat(first_dealer):
        raise InvalidActionError(f"Unknown seat for first dealer: {first_dealer!r}")

    if rng is None:
        rng = random.Random()
    state.dealer = first_dealer if first_dealer is not None else rng.choice(SEATS)
    state.initial_dealer_for_session = None
    state.add_message(f"Game started by {state.name(role)}.", important=True)
    logger.info("Game %s started; first dealer %s", state.game_id, state.dealer)
    start_new_hand(state, rng)


def reset_game(state: GameState, role: str) -> None:
    """
    Full reset back to the lobby. Seats (and their connections) and the
    running ``match_stats`` are kept; scores, the hand and
    ``initial_dealer_for_session`` are cleared.
    """
    check_action(state, ActionKind.REQUEST_NEW_GAME, role)
    state.reset_hand()
    state.game_id = new_game_id()
    state.team1_score = 0
    state.team2_score = 0
    state.winning_team = None
    state.initial_dealer_for_session = None
    state.hand_number = 0
    state.messages = []
    state.set_phase(Phase.LOBBY)
    state.add_message(f"New game requested by {state.name(role)}.", important=True)
    logger.info("Game reset by %s; new game id %s", role, state.game_id)


def apply_action(
    state: GameState,
    role: str,
    action: Action,
    rng: random.Random | None = None,
    first_dealer: Optional[str] = None,
) -> None:
    """Run ``action`` for ``role``. Raises a ``EuchreError`` subclass with no mutation on rejection."""
    if isinstance(action, StartGame):
        start_game(state, role, rng, first_dealer)
    elif isinstance(action, NewGame):
        reset_game(state, role)
    elif isinstance(action, OrderUp):
        order_up(state, role, action.decision)
    elif isinstance(action, DealerDiscard):
        dealer_discard(state, role, action.card)
    elif isinstance(action, CallTrump):
        call_trump(state, role, action.suit, rng)
    elif isinstance(action, GoAlone):
        go_alone(state, role, action.decision)
    elif isinstance(action, PlayCard):
        play_card(state, role, action.card, rng)
    else:
        raise InvalidActionError(f"Unsupported action: {action!r}")


def legal_actions(state: GameState, role: str) -> List[Action]:
    """
    Actions ``role`` may take right now to advance play. Empty when the seat is
    not being waited on. Session requests (new game) are not listed.
    """
    phase = state.phase
    if phase == Phase.LOBBY:
        seated = state.players[role].is_seated
        ready = state.players.seated_count() == PLAYERS_REQUIRED
        return [StartGame()] if seated and ready else []
    if phase == Phase.ORDER_UP_ROUND1 and role == state.current_player:
        return [OrderUp(decision=True), OrderUp(decision=False)]
    if phase == Phase.AWAITING_DEALER_DISCARD and role == state.dealer:
        return [DealerDiscard(card=c) for c in state.players[role].hand]
    if phase == Phase.ORDER_UP_ROUND2 and role == state.current_player:
        turned_down = state.turned_down_card.suit if state.turned_down_card else None
        calls: List[Action] = [CallTrump(suit=s) for s in SUITS if s != turned_down]
        calls.append(CallTrump(suit=None))
        return calls
    if phase == Phase.AWAITING_GO_ALONE and role == state.player_who_called_trump:
        return [GoAlone(decision=True), GoAlone(decision=False)]
    if phase == Phase.PLAYING_TRICKS and role == state.current_player:
        hand = state.players[role].hand
        return [PlayCard(card=c) for c in legal_plays(hand, state.current_trick_plays, state.trump)]
    return []


__all__ = ["PLAYERS_REQUIRED", "start_game", "reset_game", "apply_action", "legal_actions"]
