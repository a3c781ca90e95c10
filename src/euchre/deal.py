"""
Distribution for one hand: 5 cards to each seat, one at a time, starting left
of the dealer and ending with the dealer. The 4 leftover cards form the kitty;
its top card is the up-card.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, NamedTuple

from .deck import Card, create_deck, shuffle_deck, sort_hand
from .phases import Phase
from .players import next_seat, seats_from
from .state import GameState

logger = logging.getLogger(__name__)

HAND_SIZE = 5
KITTY_SIZE = 4
DECK_SIZE = 24


class Deal(NamedTuple):
    """Result of a deal. Hands and kitty are fresh lists owned by the caller."""
    hands: Dict[str, list[Card]]
    kitty: list[Card]
    dealer: str

    @property
    def up_card(self) -> Card:
        return self.kitty[0]


def next_dealer(dealer: str) -> str:
    """Deal passes clockwise."""
    return next_seat(dealer)


def first_to_bid(dealer: str) -> str:
    """Seat left of the dealer speaks first and leads the first trick."""
    return next_seat(dealer)


def deal_order(dealer: str) -> list[str]:
    return seats_from(next_seat(dealer))


def deal_hand(
    dealer: str,
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """
    Deal from ``deck`` (a fresh shuffled deck if omitted). The passed deck is
    consumed in order and left empty.
    """
    if deck is None:
        deck = create_deck()
        shuffle_deck(deck, rng)
    if len(deck) != DECK_SIZE:
        raise ValueError(f"Expected a {DECK_SIZE}-card deck, got {len(deck)}")

    order = deal_order(dealer)
    hands: Dict[str, list[Card]] = {role: [] for role in order}
    idx = 0
    for _ in range(HAND_SIZE):
        for role in order:
            hands[role].append(deck[idx])
            idx += 1
    kitty = deck[idx:]
    del deck[:]
    return Deal(hands=hands, kitty=kitty, dealer=dealer)


def start_new_hand(state: GameState, rng: random.Random | None = None) -> None:
    """
    Begin a hand. The first call of a session pins ``initial_dealer_for_session``
    to the current dealer; every later call passes the deal one seat clockwise.
    Scores and seats are kept.
    """
    state.add_message("Starting new hand...")
    state.set_phase(Phase.DEALING)
    state.reset_hand()

    if state.initial_dealer_for_session is None:
        state.initial_dealer_for_session = state.dealer
    else:
        state.dealer = next_dealer(state.dealer)
    state.hand_number += 1
    state.add_message(f"{state.name(state.dealer)} ({state.dealer}) is the dealer.")
    logger.info("Hand %d: dealer assigned: %s", state.hand_number, state.dealer)

    state.deck = create_deck()
    shuffle_deck(state.deck, rng)
    deal = deal_hand(state.dealer, state.deck)
    for role, hand in deal.hands.items():
        state.players[role].hand = sort_hand(hand)
    state.kitty = deal.kitty
    state.up_card = deal.up_card
    state.add_message(f"Cards dealt. Up-card is {state.up_card}.")
    logger.info("Up-card: %s", state.up_card)

    state.current_player = first_to_bid(state.dealer)
    state.set_phase(Phase.ORDER_UP_ROUND1)
    state.add_message(f"{state.name(state.current_player)}'s turn to order up or pass.")


__all__ = [
    "HAND_SIZE",
    "KITTY_SIZE",
    "DECK_SIZE",
    "Deal",
    "deal_hand",
    "deal_order",
    "next_dealer",
    "first_to_bid",
    "start_new_hand",
]
