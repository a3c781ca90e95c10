"""
The single mutable aggregate for one game.

Session-scoped fields (scores, ``initial_dealer_for_session``, seats) survive
``reset_hand``; hand-scoped fields are cleared by it.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .deck import Card, Suit
from .phases import Phase
from .players import SEATS, SOUTH, PlayerDirectory, Team

logger = logging.getLogger(__name__)


def new_game_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TrickPlay:
    role: str
    card: Card


@dataclass
class Trick:
    plays: List[TrickPlay]
    winner: str


@dataclass
class GameMessage:
    text: str
    important: bool = False
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass
class MatchStats:
    """Running results across games at one table. Survives a full reset."""

    games_played: int = 0
    team1_wins: int = 0
    team2_wins: int = 0
    last_updated: Optional[str] = None

    def wins(self, team: Team) -> int:
        return self.team1_wins if team == Team.TEAM1 else self.team2_wins

    def record_win(self, team: Team) -> None:
        self.games_played += 1
        if team == Team.TEAM1:
            self.team1_wins += 1
        else:
            self.team2_wins += 1
        self.last_updated = datetime.now(timezone.utc).isoformat()


@dataclass
class GameState:
    game_id: str = field(default_factory=new_game_id)
    phase: Phase = Phase.LOBBY
    players: PlayerDirectory = field(default_factory=PlayerDirectory)

    deck: List[Card] = field(default_factory=list)
    kitty: List[Card] = field(default_factory=list)
    up_card: Optional[Card] = None
    turned_down_card: Optional[Card] = None
    discard_pile: List[Card] = field(default_factory=list)

    dealer: str = SOUTH
    initial_dealer_for_session: Optional[str] = None
    current_player: Optional[str] = None
    hand_number: int = 0

    trump: Optional[Suit] = None
    maker: Optional[Team] = None
    player_who_called_trump: Optional[str] = None
    order_up_round: int = 1
    dealer_has_discarded: bool = False

    going_alone: bool = False
    player_going_alone: Optional[str] = None
    partner_sitting_out: Optional[str] = None

    current_trick_plays: List[TrickPlay] = field(default_factory=list)
    tricks: List[Trick] = field(default_factory=list)
    trick_leader: Optional[str] = None

    team1_score: int = 0
    team2_score: int = 0
    winning_score: int = 10
    winning_team: Optional[Team] = None
    match_stats: MatchStats = field(default_factory=MatchStats)
    messages: List[GameMessage] = field(default_factory=list)

    @property
    def player_order(self) -> tuple[str, ...]:
        return SEATS

    def set_phase(self, phase: Phase) -> None:
        if phase != self.phase:
            logger.info("Game phase changed to %s", phase.value)
        self.phase = phase

    def add_message(self, text: str, important: bool = False) -> GameMessage:
        """Append to the human-readable event log."""
        msg = GameMessage(text=text, important=important)
        self.messages.append(msg)
        logger.debug("[GAME MSG] %s", text)
        return msg

    def name(self, role: str) -> str:
        return self.players[role].name

    def score(self, team: Team) -> int:
        return self.team1_score if team == Team.TEAM1 else self.team2_score

    def add_score(self, team: Team, points: int) -> None:
        if team == Team.TEAM1:
            self.team1_score += points
        else:
            self.team2_score += points

    def team_tricks(self, team: Team) -> int:
        return sum(seat.tricks_taken for seat in self.players if seat.team == team)

    def active_player_count(self) -> int:
        return 3 if self.going_alone else 4

    def all_cards(self) -> List[Card]:
        """Every card in play this hand; a full 24 during an active hand."""
        cards = list(self.deck) + list(self.kitty) + list(self.discard_pile)
        for seat in self.players:
            cards.extend(seat.hand)
        for play in self.current_trick_plays:
            cards.append(play.card)
        for trick in self.tricks:
            cards.extend(p.card for p in trick.plays)
        return cards

    def reset_hand(self) -> None:
        self.deck = []
        self.kitty = []
        self.up_card = None
        self.turned_down_card = None
        self.discard_pile = []
        self.trump = None
        self.maker = None
        self.player_who_called_trump = None
        self.order_up_round = 1
        self.dealer_has_discarded = False
        self.going_alone = False
        self.player_going_alone = None
        self.partner_sitting_out = None
        self.current_trick_plays = []
        self.tricks = []
        self.trick_leader = None
        self.current_player = None
        for seat in self.players:
            seat.hand = []
            seat.tricks_taken = 0


__all__ = ["GameState", "GameMessage", "MatchStats", "Trick", "TrickPlay", "new_game_id"]
