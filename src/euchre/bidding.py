"""
Bidding: round 1 (order up the up-card), dealer discard, round 2 (call any
other suit), and the go-alone decision.

Each handler checks phase and turn through ``check_action``, validates its
argument, and only then mutates the state.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from .deck import Card, Suit, sort_hand
from .errors import InvalidCardError, InvalidSuitError
from .deal import start_new_hand
from .phases import ActionKind, Phase, check_action
from .players import next_seat, partner, team_of
from .state import GameState

logger = logging.getLogger(__name__)

DEALER_HAND_AFTER_PICKUP = 6


def _name_trump(state: GameState, role: str, suit: Suit) -> None:
    state.trump = suit
    state.maker = team_of(role)
    state.player_who_called_trump = role
    for seat in state.players:
        seat.hand = sort_hand(seat.hand, suit)
    state.add_message(
        f"Trump is {suit.value}! Called by Team {int(state.maker)} ({state.name(role)}).",
        important=True,
    )
    logger.info("Trump set to %s by Team %d (%s)", suit.value, state.maker, role)


def _ask_go_alone(state: GameState) -> None:
    caller = state.player_who_called_trump
    state.set_phase(Phase.AWAITING_GO_ALONE)
    state.current_player = caller
    state.add_message(f"{state.name(caller)}, do you want to go alone?")


def order_up(state: GameState, role: str, decision: bool) -> None:
    """Round 1. Ordering up makes the up-card's suit trump and hands the card to the dealer."""
    check_action(state, ActionKind.ORDER_UP, role)

    if decision:
        state.add_message(f"{state.name(role)} ordered up.")
        up = state.up_card
        _name_trump(state, role, up.suit)
        state.kitty.remove(up)
        state.players[state.dealer].hand = sort_hand(
            state.players[state.dealer].hand + [up], state.trump
        )
        state.up_card = None
        state.dealer_has_discarded = False
        state.set_phase(Phase.AWAITING_DEALER_DISCARD)
        state.current_player = state.dealer
        state.add_message(f"{state.name(state.dealer)} (dealer) must discard a card.")
        return

    state.add_message(f"{state.name(role)} passed.")
    logger.info("%s passed in round 1", role)
    if role == state.dealer:
        state.turned_down_card = state.up_card
        state.up_card = None
        state.order_up_round = 2
        state.current_player = next_seat(state.dealer)
        state.set_phase(Phase.ORDER_UP_ROUND2)
        state.add_message(f"Up-card {state.turned_down_card} turned down. Round 2 of bidding.")
        state.add_message(f"{state.name(state.current_player)}'s turn to call trump or pass.")
    else:
        state.current_player = next_seat(role)
        state.add_message(f"{state.name(state.current_player)}'s turn to order up or pass.")


def dealer_discard(state: GameState, role: str, card: Card) -> None:
    """Dealer drops one card from a 6-card hand after being ordered up."""
    check_action(state, ActionKind.DEALER_DISCARD, role)
    hand = state.players[role].hand
    if len(hand) != DEALER_HAND_AFTER_PICKUP:
        raise InvalidCardError(f"Dealer must hold {DEALER_HAND_AFTER_PICKUP} cards to discard")
    if card not in hand:
        raise InvalidCardError(f"{role} does not hold {card}")

    hand.remove(card)
    state.discard_pile.append(card)
    state.dealer_has_discarded = True
    state.add_message(f"{state.name(role)} discarded a card.")
    logger.info("%s discarded %s", role, card)
    _ask_go_alone(state)


def call_trump(
    state: GameState,
    role: str,
    suit: Optional[Suit],
    rng: random.Random | None = None,
) -> None:
    """Round 2. ``suit=None`` passes; the dealer passing last forces a redeal."""
    check_action(state, ActionKind.CALL_TRUMP, role)
    turned_down = state.turned_down_card.suit if state.turned_down_card else None

    if suit is not None:
        if suit == turned_down:
            raise InvalidSuitError(f"Cannot call {suit.value}: it is the turned-down suit")
        _name_trump(state, role, suit)
        _ask_go_alone(state)
        return

    state.add_message(f"{state.name(role)} passed.")
    logger.info("%s passed in round 2", role)
    if role == state.dealer:
        state.add_message("All players passed in the second round. Redealing.", important=True)
        logger.info("All players passed in round 2. Redealing.")
        start_new_hand(state, rng)
    else:
        state.current_player = next_seat(role)
        state.add_message(f"{state.name(state.current_player)}'s turn to call trump or pass.")


def go_alone(state: GameState, role: str, decision: bool) -> None:
    """The caller decides to play solo. The partner then sits out every trick."""
    check_action(state, ActionKind.GO_ALONE, role)

    if decision:
        state.going_alone = True
        state.player_going_alone = role
        state.partner_sitting_out = partner(role)
        state.add_message(
            f"{state.name(role)} is GOING ALONE! Partner "
            f"{state.name(state.partner_sitting_out)} sits out.",
            important=True,
        )
        logger.info("%s goes alone; %s sits out", role, state.partner_sitting_out)
    else:
        state.going_alone = False
        state.player_going_alone = None
        state.partner_sitting_out = None
        state.add_message(f"{state.name(role)} will play with their partner.")

    leader = next_seat(state.dealer, skip=state.partner_sitting_out)
    state.trick_leader = leader
    state.current_player = leader
    state.set_phase(Phase.PLAYING_TRICKS)
    state.add_message(f"Hand begins. {state.name(leader)} leads the first trick.")


__all__ = ["order_up", "dealer_discard", "call_trump", "go_alone"]
