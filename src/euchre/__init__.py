"""Euchre rules engine (server side, four players, partnerships)."""

__version__ = "0.1.0"

from .errors import (
    EuchreError,
    InvalidActionError,
    InvalidPhaseError,
    InvalidTurnError,
    InvalidCardError,
    InvalidSuitError,
)
from .deck import Card, Rank, Suit, create_deck, shuffle_deck, effective_suit, effective_rank, sort_hand
from .players import NORTH, EAST, SOUTH, WEST, SEATS, Team, next_seat, partner, team_of
from .phases import ActionKind, Phase, check_action
from .actions import (
    Action,
    StartGame,
    NewGame,
    OrderUp,
    DealerDiscard,
    CallTrump,
    GoAlone,
    PlayCard,
    parse_action,
)
from .state import GameState, GameMessage, Trick, TrickPlay
from .deal import deal_hand, start_new_hand
from .bidding import order_up, dealer_discard, call_trump, go_alone
from .play import is_valid_play, legal_plays, play_card, trick_winner
from .scoring import hand_points, score_hand, winning_team
from .game import apply_action, legal_actions, reset_game, start_game
from .config import EuchreConfig
from .session import ActionResult, Broadcaster, GameSession
from .agents import Policy, RandomAgent
