"""Order up, dealer discard, call trump and go alone."""
import copy
import random

import pytest

import euchre.bidding as bidding
from euchre.bidding import call_trump, dealer_discard, go_alone, order_up
from euchre.deal import start_new_hand
from euchre.deck import SUITS, is_trump, sort_hand
from euchre.errors import InvalidCardError, InvalidPhaseError, InvalidSuitError, InvalidTurnError
from euchre.phases import Phase
from euchre.players import EAST, NORTH, SEATS, SOUTH, WEST, next_seat, partner, team_of
from euchre.state import GameState


def new_hand(dealer: str = SOUTH, seed: int = 11) -> GameState:
    state = GameState()
    for i, role in enumerate(SEATS):
        state.players.seat_player(role, f"p{i}", f"c{i}", role.capitalize())
    state.dealer = dealer
    start_new_hand(state, random.Random(seed))
    return state


def pass_round_one(state: GameState) -> None:
    for _ in range(4):
        order_up(state, state.current_player, False)


def test_order_up_gives_dealer_the_up_card():
    state = new_hand(SOUTH)
    up = state.up_card
    caller = state.current_player
    assert caller == WEST
    order_up(state, caller, True)
    assert state.trump == up.suit
    assert state.maker == team_of(WEST)
    assert state.player_who_called_trump == WEST
    assert up in state.players[SOUTH].hand
    assert len(state.players[SOUTH].hand) == 6
    assert len(state.kitty) == 3
    assert state.up_card is None
    assert state.phase == Phase.AWAITING_DEALER_DISCARD
    assert state.current_player == SOUTH
    assert len(state.all_cards()) == 24


def test_out_of_turn_order_up_changes_nothing():
    state = new_hand(SOUTH)
    before = copy.deepcopy(state)
    with pytest.raises(InvalidTurnError):
        order_up(state, NORTH, True)
    assert state == before


def test_action_outside_phase_is_rejected():
    state = new_hand(SOUTH)
    before = copy.deepcopy(state)
    with pytest.raises(InvalidPhaseError):
        call_trump(state, state.current_player, SUITS[0])
    with pytest.raises(InvalidPhaseError):
        go_alone(state, state.current_player, True)
    assert state == before


def test_dealer_discard():
    state = new_hand(SOUTH)
    order_up(state, WEST, True)
    dealer_hand = state.players[SOUTH].hand
    missing = next(card for card in state.all_cards() if card not in dealer_hand)
    before = copy.deepcopy(state)
    with pytest.raises(InvalidCardError):
        dealer_discard(state, SOUTH, missing)
    assert state == before
    with pytest.raises(InvalidTurnError):
        dealer_discard(state, WEST, dealer_hand[0])

    card = dealer_hand[-1]
    dealer_discard(state, SOUTH, card)
    assert card not in state.players[SOUTH].hand
    assert len(state.players[SOUTH].hand) == 5
    assert state.discard_pile == [card]
    assert state.dealer_has_discarded
    assert state.phase == Phase.AWAITING_GO_ALONE
    assert state.current_player == WEST
    assert len(state.all_cards()) == 24


def test_all_pass_round_one_turns_down_up_card():
    state = new_hand(SOUTH)
    up = state.up_card
    pass_round_one(state)
    assert state.phase == Phase.ORDER_UP_ROUND2
    assert state.order_up_round == 2
    assert state.turned_down_card == up
    assert state.up_card is None
    assert state.current_player == WEST
    assert len(state.kitty) == 4


def test_calling_turned_down_suit_is_rejected():
    state = new_hand(SOUTH)
    pass_round_one(state)
    banned = state.turned_down_card.suit
    before = copy.deepcopy(state)
    with pytest.raises(InvalidSuitError, match="turned-down"):
        call_trump(state, WEST, banned)
    assert state.trump is None and state.maker is None
    assert state.phase == Phase.ORDER_UP_ROUND2
    assert state == before


def test_round_two_call():
    state = new_hand(SOUTH)
    pass_round_one(state)
    call_trump(state, WEST, None)
    suit = next(s for s in SUITS if s != state.turned_down_card.suit)
    call_trump(state, NORTH, suit)
    assert state.trump == suit
    assert state.maker == team_of(NORTH)
    assert state.player_who_called_trump == NORTH
    assert state.phase == Phase.AWAITING_GO_ALONE
    assert state.current_player == NORTH
    assert any(m.text.startswith(f"Trump is {suit.value}!") for m in state.messages)


def test_all_pass_round_two_redeals_once(monkeypatch):
    state = new_hand(SOUTH)
    pass_round_one(state)
    calls = []
    real = bidding.start_new_hand

    def counting(st, rng=None):
        calls.append(st.hand_number)
        real(st, rng)

    monkeypatch.setattr(bidding, "start_new_hand", counting)
    for _ in range(4):
        call_trump(state, state.current_player, None)
    assert len(calls) == 1
    assert any("Redealing" in m.text for m in state.messages)
    assert state.phase == Phase.ORDER_UP_ROUND1
    assert state.dealer == WEST
    assert state.hand_number == 2
    assert state.initial_dealer_for_session == SOUTH


def test_go_alone_skips_sitting_out_partner_when_leading():
    # Dealer north: east would lead, but east sits out for west.
    state = new_hand(NORTH)
    pass_round_one(state)
    call_trump(state, EAST, None)
    call_trump(state, SOUTH, None)
    suit = next(s for s in SUITS if s != state.turned_down_card.suit)
    call_trump(state, WEST, suit)
    go_alone(state, WEST, True)
    assert state.going_alone
    assert state.player_going_alone == WEST
    assert state.partner_sitting_out == partner(WEST) == EAST
    assert state.trick_leader == SOUTH
    assert state.current_player == SOUTH
    assert state.phase == Phase.PLAYING_TRICKS
    assert state.active_player_count() == 3


def test_go_alone_declined():
    state = new_hand(NORTH)
    order_up(state, EAST, True)
    dealer_discard(state, NORTH, state.players[NORTH].hand[0])
    go_alone(state, EAST, False)
    assert not state.going_alone
    assert state.partner_sitting_out is None
    assert state.trick_leader == next_seat(NORTH) == EAST
    assert state.phase == Phase.PLAYING_TRICKS


def test_hands_sorted_with_trump_first_after_call():
    state = new_hand(SOUTH)
    order_up(state, WEST, True)
    for seat in state.players:
        assert seat.hand == sort_hand(seat.hand, state.trump)
        flags = [is_trump(card, state.trump) for card in seat.hand]
        assert flags == sorted(flags, reverse=True)
