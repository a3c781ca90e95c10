"""Action parsing, the phase table and legal action lists."""
import random

import pytest

from euchre.actions import CallTrump, DealerDiscard, GoAlone, NewGame, OrderUp, PlayCard, StartGame, parse_action
from euchre.bidding import order_up
from euchre.deck import Suit, card_from_ref
from euchre.errors import InvalidActionError, InvalidPhaseError, InvalidTurnError
from euchre.game import apply_action, legal_actions, start_game
from euchre.phases import EXPECTED_ACTOR, ActionKind, Phase, check_action, is_allowed, legal_phases
from euchre.players import EAST, NORTH, SEATS, SOUTH, WEST
from euchre.state import GameState


def seated(count: int = 4) -> GameState:
    state = GameState()
    for i, role in enumerate(SEATS[:count]):
        state.players.seat_player(role, f"p{i}", f"c{i}")
    return state


def test_parse_action_shapes():
    assert parse_action("request_start_game") == StartGame()
    assert parse_action(ActionKind.REQUEST_NEW_GAME, {}) == NewGame()
    assert parse_action("action_order_up", {"decision": False}) == OrderUp(decision=False)
    assert parse_action("action_dealer_discard", {"cardToDiscard": {"id": "9-clubs"}}) == DealerDiscard(
        card=card_from_ref("9-clubs")
    )
    assert parse_action("action_call_trump", {"suit": None}) == CallTrump(suit=None)
    assert parse_action("action_call_trump", {"suit": "Hearts"}) == CallTrump(suit=Suit.HEARTS)
    assert parse_action("action_go_alone", {"decision": True}) == GoAlone(decision=True)
    assert parse_action("action_play_card", {"card": {"rank": "A", "suit": "spades"}}) == PlayCard(
        card=card_from_ref("A-spades")
    )


@pytest.mark.parametrize(
    "kind, payload",
    [
        ("action_go_alone", {"decision": 1}),
        ("action_call_trump", {}),
        ("action_dealer_discard", {"card": 7}),
        ("action_play_card", ["A-spades"]),
        ("nope", None),
    ],
)
def test_parse_action_rejects(kind, payload):
    with pytest.raises(InvalidActionError):
        parse_action(kind, payload)


def test_every_action_kind_has_a_legal_phase():
    for kind in ActionKind:
        assert legal_phases(kind)
    assert (Phase.PLAYING_TRICKS, ActionKind.PLAY_CARD) in EXPECTED_ACTOR


def test_check_action_phase_and_turn():
    state = seated()
    state.phase = Phase.ORDER_UP_ROUND1
    state.current_player = EAST
    check_action(state, ActionKind.ORDER_UP, EAST)
    with pytest.raises(InvalidTurnError):
        check_action(state, ActionKind.ORDER_UP, NORTH)
    with pytest.raises(InvalidPhaseError):
        check_action(state, ActionKind.PLAY_CARD, EAST)
    assert is_allowed(state, ActionKind.ORDER_UP, EAST)
    assert not is_allowed(state, ActionKind.REQUEST_START_GAME, EAST)


def test_start_game_needs_four_seated():
    state = seated(3)
    with pytest.raises(InvalidActionError):
        start_game(state, NORTH, random.Random(0))
    assert state.phase == Phase.LOBBY
    assert legal_actions(state, NORTH) == []


def test_legal_actions_follow_the_hand():
    state = seated()
    assert legal_actions(state, WEST) == [StartGame()]
    apply_action(state, WEST, StartGame(), random.Random(8), first_dealer=NORTH)
    assert state.dealer == NORTH
    assert legal_actions(state, EAST) == [OrderUp(decision=True), OrderUp(decision=False)]
    assert legal_actions(state, SOUTH) == []

    for role in (EAST, SOUTH, WEST, NORTH):
        order_up(state, role, False)
    banned = state.turned_down_card.suit
    calls = legal_actions(state, EAST)
    assert CallTrump(suit=banned) not in calls
    assert CallTrump(suit=None) in calls
    assert len(calls) == 4

    suit = next(a.suit for a in calls if a.suit is not None)
    apply_action(state, EAST, CallTrump(suit=suit))
    assert legal_actions(state, EAST) == [GoAlone(decision=True), GoAlone(decision=False)]
    apply_action(state, EAST, GoAlone(decision=False))
    leader = state.current_player
    plays = legal_actions(state, leader)
    assert {a.card for a in plays} == set(state.players[leader].hand)
    for action in plays:
        assert isinstance(action, PlayCard)


def test_every_listed_action_is_accepted():
    for seed in range(5):
        state = seated()
        rng = random.Random(seed)
        apply_action(state, NORTH, StartGame(), rng)
        for _ in range(60):
            role = state.current_player
            options = legal_actions(state, role)
            if not options:
                break
            apply_action(state, role, rng.choice(options), rng)
