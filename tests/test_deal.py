"""Dealing and hand boundaries."""
import random
from collections import Counter

from euchre.deal import deal_hand, deal_order, start_new_hand
from euchre.deck import create_deck
from euchre.phases import Phase
from euchre.players import EAST, NORTH, SEATS, SOUTH, WEST, next_seat
from euchre.state import GameState


def seated_state() -> GameState:
    state = GameState()
    for i, role in enumerate(SEATS):
        state.players.seat_player(role, f"p{i}", f"c{i}", f"Player {i}")
    return state


def test_deal_hand_sizes_and_order():
    deck = create_deck()
    expected = list(deck)
    deal = deal_hand(SOUTH, deck)
    assert deck == []
    assert deal_order(SOUTH) == [WEST, NORTH, EAST, SOUTH]
    assert all(len(hand) == 5 for hand in deal.hands.values())
    assert len(deal.kitty) == 4
    # One card at a time, starting left of the dealer.
    assert deal.hands[WEST][0] == expected[0]
    assert deal.hands[NORTH][0] == expected[1]
    assert deal.hands[SOUTH][0] == expected[3]
    assert deal.kitty == expected[20:]
    assert deal.up_card == expected[20]


def test_first_hand_pins_initial_dealer():
    state = seated_state()
    state.dealer = EAST
    start_new_hand(state, random.Random(1))
    assert state.initial_dealer_for_session == EAST
    assert state.dealer == EAST
    assert state.deck == []
    assert len(state.kitty) == 4
    assert state.up_card == state.kitty[0]
    assert state.phase == Phase.ORDER_UP_ROUND1
    assert state.current_player == next_seat(EAST)
    assert state.hand_number == 1
    assert any("is the dealer" in m.text for m in state.messages)


def test_dealer_rotates_one_seat_per_hand_without_drift():
    state = seated_state()
    state.dealer = NORTH
    rng = random.Random(2)
    start_new_hand(state, rng)
    dealers = [state.dealer]
    for _ in range(11):
        start_new_hand(state, rng)
        dealers.append(state.dealer)
    assert dealers == [SEATS[i % 4] for i in range(12)]
    assert state.initial_dealer_for_session == NORTH
    assert state.hand_number == 12


def test_new_hand_resets_hand_fields_and_keeps_scores():
    state = seated_state()
    start_new_hand(state, random.Random(3))
    state.team1_score = 4
    state.team2_score = 7
    state.going_alone = True
    state.order_up_round = 2
    state.players[NORTH].tricks_taken = 3
    start_new_hand(state, random.Random(4))
    assert (state.team1_score, state.team2_score) == (4, 7)
    assert state.trump is None and state.maker is None
    assert state.going_alone is False
    assert state.order_up_round == 1
    assert state.tricks == [] and state.current_trick_plays == []
    assert state.players[NORTH].tricks_taken == 0
    cards = state.all_cards()
    assert len(cards) == 24
    assert Counter(cards) == Counter(create_deck())
