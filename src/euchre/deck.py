"""
Euchre deck: 24 cards (9, 10, J, Q, K, A in four suits).

Bowers: once trump is named, the jack of trump (right bower) and the jack of the
other suit of the same colour (left bower) both belong to the trump suit, for
following suit as well as for ranking. ``effective_suit`` and ``effective_rank``
are the only places that know this.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from .errors import InvalidActionError

logger = logging.getLogger(__name__)


class Suit(str, Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def color(self) -> str:
        return "red" if self in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def __str__(self) -> str:
        return self.value


class Rank(str, Enum):
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


SUITS = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)
RANKS = (Rank.NINE, Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE)

# Natural order inside a plain (non-trump) suit, low to high.
NATURAL_ORDER = {rank: i for i, rank in enumerate(RANKS, start=1)}

# Trump order, low to high, excluding the bowers.
TRUMP_ORDER = {Rank.NINE: 1, Rank.TEN: 2, Rank.QUEEN: 3, Rank.KING: 4, Rank.ACE: 5}
LEFT_BOWER_RANK = 6
RIGHT_BOWER_RANK = 7
TRUMP_BASE = 100

SAME_COLOR = {
    Suit.HEARTS: Suit.DIAMONDS,
    Suit.DIAMONDS: Suit.HEARTS,
    Suit.CLUBS: Suit.SPADES,
    Suit.SPADES: Suit.CLUBS,
}

RANK_NAMES = {
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}


@dataclass(frozen=True)
class Card:
    """A single card. Identity is ``id`` (``"J-hearts"``)."""

    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        return f"{self.rank.value}-{self.suit.value}"

    def is_jack(self) -> bool:
        return self.rank == Rank.JACK

    def __str__(self) -> str:
        return f"{RANK_NAMES[self.rank]} of {self.suit.value}"

    def __repr__(self) -> str:
        return self.id


def create_deck() -> list[Card]:
    """Build the 24-card deck in suit-major order."""
    deck = [Card(rank=rank, suit=suit) for suit in SUITS for rank in RANKS]
    logger.debug("Created a new deck of %d cards", len(deck))
    return deck


def shuffle_deck(deck: list[Card], rng: random.Random | None = None) -> None:
    """Uniform in-place shuffle (Fisher-Yates via ``Random.shuffle``)."""
    if rng is None:
        rng = random.Random()
    rng.shuffle(deck)
    logger.debug("Deck shuffled")


def left_bower_suit(trump: Suit) -> Suit:
    return SAME_COLOR[trump]


def is_right_bower(card: Card, trump: Optional[Suit]) -> bool:
    return trump is not None and card.is_jack() and card.suit == trump


def is_left_bower(card: Card, trump: Optional[Suit]) -> bool:
    return trump is not None and card.is_jack() and card.suit == SAME_COLOR[trump]


def is_trump(card: Card, trump: Optional[Suit]) -> bool:
    return trump is not None and effective_suit(card, trump) == trump


def effective_suit(card: Card, trump: Optional[Suit]) -> Suit:
    """Suit the card belongs to for follow-suit and ranking (left bower -> trump)."""
    if is_left_bower(card, trump):
        return trump  # type: ignore[return-value]
    return card.suit


def effective_rank(card: Card, trump: Optional[Suit], led_suit: Optional[Suit]) -> int:
    """
    Strength of a card inside one trick. Higher wins.

    Trump cards score above ``TRUMP_BASE``: right bower > left bower > A > K > Q > 10 > 9.
    Cards of the led suit use natural order A > K > Q > J > 10 > 9.
    Anything else is 0 and can never win.
    """
    if is_right_bower(card, trump):
        return TRUMP_BASE + RIGHT_BOWER_RANK
    if is_left_bower(card, trump):
        return TRUMP_BASE + LEFT_BOWER_RANK
    if trump is not None and card.suit == trump:
        return TRUMP_BASE + TRUMP_ORDER[card.rank]
    if led_suit is not None and card.suit == led_suit:
        return NATURAL_ORDER[card.rank]
    return 0


def sort_hand(hand: Iterable[Card], trump: Optional[Suit] = None) -> list[Card]:
    """Display order: trump (bowers first) then the other suits, high to low."""

    def key(card: Card) -> tuple[int, int, int]:
        if is_trump(card, trump):
            return (0, 0, -effective_rank(card, trump, None))
        return (1, SUITS.index(card.suit), -NATURAL_ORDER[card.rank])

    return sorted(hand, key=key)


def parse_suit(value: Any) -> Suit:
    if isinstance(value, Suit):
        return value
    try:
        return Suit(str(value).lower())
    except ValueError:
        raise InvalidActionError(f"Unknown suit: {value!r}") from None


def _parse_rank(value: Any) -> Rank:
    if isinstance(value, Rank):
        return value
    text = str(value).upper()
    try:
        return Rank(text)
    except ValueError:
        raise InvalidActionError(f"Unknown rank: {value!r}") from None


def card_from_ref(ref: Any) -> Card:
    """
    Resolve an inbound card reference.

    Accepts a ``Card``, an id string (``"10-spades"``), or a mapping carrying
    ``id`` or ``rank``/``value`` plus ``suit``.
    """
    if isinstance(ref, Card):
        return ref
    if isinstance(ref, str):
        rank, sep, suit = ref.partition("-")
        if not sep:
            raise InvalidActionError(f"Malformed card id: {ref!r}")
        return Card(rank=_parse_rank(rank), suit=parse_suit(suit))
    if isinstance(ref, dict):
        if ref.get("id"):
            return card_from_ref(ref["id"])
        rank = ref.get("rank", ref.get("value"))
        if rank is None or ref.get("suit") is None:
            raise InvalidActionError(f"Card reference needs rank and suit: {ref!r}")
        return Card(rank=_parse_rank(rank), suit=parse_suit(ref["suit"]))
    raise InvalidActionError(f"Malformed card reference: {ref!r}")


__all__ = [
    "Suit",
    "Rank",
    "Card",
    "SUITS",
    "RANKS",
    "create_deck",
    "shuffle_deck",
    "left_bower_suit",
    "is_right_bower",
    "is_left_bower",
    "is_trump",
    "effective_suit",
    "effective_rank",
    "sort_hand",
    "parse_suit",
    "card_from_ref",
]
