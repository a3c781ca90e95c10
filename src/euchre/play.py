"""
Trick-taking: legal moves, winner, trick resolution.
Follow the led (effective) suit if you can; otherwise play anything. Highest trump
wins, else highest card of the led suit.
"""
from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from .deck import Card, Suit, effective_rank, effective_suit
from .errors import InvalidCardError
from .phases import ActionKind, Phase, check_action
from .players import next_seat
from .scoring import TRICKS_PER_HAND, score_hand
from .state import GameState, Trick, TrickPlay

logger = logging.getLogger(__name__)


def led_suit(plays: Sequence[TrickPlay], trump: Optional[Suit]) -> Optional[Suit]:
    """Effective suit of the first card of the trick; None when leading."""
    if not plays:
        return None
    return effective_suit(plays[0].card, trump)


def legal_plays(
    hand: Sequence[Card],
    plays: Sequence[TrickPlay],
    trump: Optional[Suit],
) -> list[Card]:
    """
    Cards that may be played from ``hand`` given the trick so far.
    A left bower follows trump, never its printed suit.
    """
    led = led_suit(plays, trump)
    if led is None:
        return list(hand)
    following = [c for c in hand if effective_suit(c, trump) == led]
    return following if following else list(hand)


def is_valid_play(state: GameState, role: str, card: Card) -> bool:
    hand = state.players[role].hand
    if card not in hand:
        return False
    return card in legal_plays(hand, state.current_trick_plays, state.trump)


def trick_winner(plays: Sequence[TrickPlay], trump: Optional[Suit]) -> TrickPlay:
    """The winning play. Ties are impossible: every card is distinct."""
    led = led_suit(plays, trump)
    return max(plays, key=lambda p: effective_rank(p.card, trump, led))


def _resolve_trick(state: GameState, rng: random.Random | None) -> None:
    plays = list(state.current_trick_plays)
    best = trick_winner(plays, state.trump)
    winner = best.role
    state.players[winner].tricks_taken += 1
    state.tricks.append(Trick(plays=plays, winner=winner))
    state.current_trick_plays = []
    state.add_message(f"{state.name(winner)} wins the trick with {best.card}.")
    logger.info("Trick %d won by %s with %s", len(state.tricks), winner, best.card)

    if len(state.tricks) >= TRICKS_PER_HAND:
        state.trick_leader = None
        state.current_player = None
        state.set_phase(Phase.HAND_COMPLETE)
        score_hand(state, rng)
        return

    state.trick_leader = winner
    state.current_player = winner
    state.add_message(f"{state.name(winner)} leads the next trick.")


def play_card(
    state: GameState,
    role: str,
    card: Card,
    rng: random.Random | None = None,
) -> None:
    """Play one card for the current player; resolves the trick once every active seat has played."""
    check_action(state, ActionKind.PLAY_CARD, role)
    hand = state.players[role].hand
    if card not in hand:
        raise InvalidCardError(f"{role} does not hold {card}")
    if not is_valid_play(state, role, card):
        led = led_suit(state.current_trick_plays, state.trump)
        raise InvalidCardError(f"Must follow {led.value}: {card} is not a legal play")

    hand.remove(card)
    state.current_trick_plays.append(TrickPlay(role=role, card=card))
    state.add_message(f"{state.name(role)} played {card}.")

    if len(state.current_trick_plays) >= state.active_player_count():
        _resolve_trick(state, rng)
    else:
        state.current_player = next_seat(role, skip=state.partner_sitting_out)


__all__ = ["led_suit", "legal_plays", "is_valid_play", "trick_winner", "play_card"]
