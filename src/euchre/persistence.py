"""
GameState serialization and per-seat views.

``state_to_dict`` / ``state_from_dict`` are a full snapshot (every hand and the
deck included) for saving a table and restoring it later. ``view_for_seat`` is
what a connected seat is sent after every mutation: its own hand only.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .deck import Card, card_from_ref, parse_suit
from .phases import Phase
from .players import SEATS, PlayerDirectory, PlayerSeat, Team
from .state import GameMessage, GameState, MatchStats, Trick, TrickPlay

SCHEMA_VERSION = 1
DEFAULT_MESSAGE_LIMIT = 15


def _card_to_dict(card: Card) -> Dict[str, str]:
    return {"id": card.id, "rank": card.rank.value, "suit": card.suit.value}


def _cards(cards: List[Card]) -> List[Dict[str, str]]:
    return [_card_to_dict(c) for c in cards]


def _opt_card(card: Optional[Card]) -> Optional[Dict[str, str]]:
    return _card_to_dict(card) if card is not None else None


def _play_to_dict(play: TrickPlay) -> Dict[str, Any]:
    return {"player": play.role, "card": _card_to_dict(play.card)}


def _play_from_dict(d: Dict[str, Any]) -> TrickPlay:
    return TrickPlay(role=d["player"], card=card_from_ref(d["card"]))


def _message_to_dict(msg: GameMessage) -> Dict[str, Any]:
    return {"text": msg.text, "important": msg.important, "timestamp": msg.timestamp}


def _stats_to_dict(stats: MatchStats) -> Dict[str, Any]:
    return {
        "games_played": stats.games_played,
        "team1_wins": stats.team1_wins,
        "team2_wins": stats.team2_wins,
        "last_updated": stats.last_updated,
    }


def _stats_from_dict(d: Dict[str, Any]) -> MatchStats:
    return MatchStats(
        games_played=int(d.get("games_played", 0)),
        team1_wins=int(d.get("team1_wins", 0)),
        team2_wins=int(d.get("team2_wins", 0)),
        last_updated=d.get("last_updated"),
    )


def _seat_to_dict(seat: PlayerSeat) -> Dict[str, Any]:
    return {
        "role": seat.role,
        "name": seat.name,
        "team": int(seat.team),
        "player_id": seat.player_id,
        "connection": seat.connection,
        "hand": _cards(seat.hand),
        "tricks_taken": seat.tricks_taken,
    }


def _seat_from_dict(d: Dict[str, Any]) -> PlayerSeat:
    return PlayerSeat(
        role=d["role"],
        name=d["name"],
        team=Team(int(d["team"])),
        player_id=d.get("player_id"),
        connection=d.get("connection"),
        hand=[card_from_ref(c) for c in d.get("hand", [])],
        tricks_taken=int(d.get("tricks_taken", 0)),
    )


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """
    Serialize a GameState to a JSON-compatible dict.

    Returns:
        Dict with schema_version, exported_at and every GameState field.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "game_id": state.game_id,
        "phase": state.phase.value,
        "players": [_seat_to_dict(seat) for seat in state.players],
        "deck": _cards(state.deck),
        "kitty": _cards(state.kitty),
        "up_card": _opt_card(state.up_card),
        "turned_down_card": _opt_card(state.turned_down_card),
        "discard_pile": _cards(state.discard_pile),
        "dealer": state.dealer,
        "initial_dealer_for_session": state.initial_dealer_for_session,
        "current_player": state.current_player,
        "hand_number": state.hand_number,
        "trump": state.trump.value if state.trump else None,
        "maker": int(state.maker) if state.maker else None,
        "player_who_called_trump": state.player_who_called_trump,
        "order_up_round": state.order_up_round,
        "dealer_has_discarded": state.dealer_has_discarded,
        "going_alone": state.going_alone,
        "player_going_alone": state.player_going_alone,
        "partner_sitting_out": state.partner_sitting_out,
        "current_trick_plays": [_play_to_dict(p) for p in state.current_trick_plays],
        "tricks": [
            {"plays": [_play_to_dict(p) for p in t.plays], "winner": t.winner}
            for t in state.tricks
        ],
        "trick_leader": state.trick_leader,
        "team1_score": state.team1_score,
        "team2_score": state.team2_score,
        "winning_score": state.winning_score,
        "winning_team": int(state.winning_team) if state.winning_team else None,
        "match_stats": _stats_to_dict(state.match_stats),
        "messages": [_message_to_dict(m) for m in state.messages],
    }


def state_from_dict(d: Dict[str, Any]) -> GameState:
    """Deserialize a GameState from a dict produced by ``state_to_dict``."""
    version = d.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema_version {version!r}")

    seats = {s["role"]: _seat_from_dict(s) for s in d["players"]}
    missing = [role for role in SEATS if role not in seats]
    if missing:
        raise ValueError(f"Snapshot is missing seats: {', '.join(missing)}")

    def opt_card(value: Any) -> Optional[Card]:
        return card_from_ref(value) if value is not None else None

    return GameState(
        game_id=d["game_id"],
        phase=Phase(d["phase"]),
        players=PlayerDirectory(seats),
        deck=[card_from_ref(c) for c in d.get("deck", [])],
        kitty=[card_from_ref(c) for c in d.get("kitty", [])],
        up_card=opt_card(d.get("up_card")),
        turned_down_card=opt_card(d.get("turned_down_card")),
        discard_pile=[card_from_ref(c) for c in d.get("discard_pile", [])],
        dealer=d["dealer"],
        initial_dealer_for_session=d.get("initial_dealer_for_session"),
        current_player=d.get("current_player"),
        hand_number=int(d.get("hand_number", 0)),
        trump=parse_suit(d["trump"]) if d.get("trump") else None,
        maker=Team(int(d["maker"])) if d.get("maker") else None,
        player_who_called_trump=d.get("player_who_called_trump"),
        order_up_round=int(d.get("order_up_round", 1)),
        dealer_has_discarded=bool(d.get("dealer_has_discarded", False)),
        going_alone=bool(d.get("going_alone", False)),
        player_going_alone=d.get("player_going_alone"),
        partner_sitting_out=d.get("partner_sitting_out"),
        current_trick_plays=[_play_from_dict(p) for p in d.get("current_trick_plays", [])],
        tricks=[
            Trick(plays=[_play_from_dict(p) for p in t["plays"]], winner=t["winner"])
            for t in d.get("tricks", [])
        ],
        trick_leader=d.get("trick_leader"),
        team1_score=int(d.get("team1_score", 0)),
        team2_score=int(d.get("team2_score", 0)),
        winning_score=int(d.get("winning_score", 10)),
        winning_team=Team(int(d["winning_team"])) if d.get("winning_team") else None,
        match_stats=_stats_from_dict(d.get("match_stats", {})),
        messages=[
            GameMessage(text=m["text"], important=bool(m.get("important", False)), timestamp=m["timestamp"])
            for m in d.get("messages", [])
        ],
    )


def state_to_json(state: GameState) -> str:
    """Serialize a GameState to a JSON string."""
    return json.dumps(state_to_dict(state), indent=2)


def state_from_json(s: str) -> GameState:
    """Deserialize a GameState from a JSON string."""
    return state_from_dict(json.loads(s))


def view_for_seat(
    state: GameState,
    role: Optional[str],
    limit: int = DEFAULT_MESSAGE_LIMIT,
) -> Dict[str, Any]:
    """
    Redacted state for one seat. Other seats' hands, the kitty and the discard
    pile are reduced to counts; the deck is omitted. ``role=None`` is a spectator.
    """
    players: Dict[str, Any] = {}
    for seat in state.players:
        entry: Dict[str, Any] = {
            "name": seat.name,
            "team": int(seat.team),
            "connected": seat.is_connected,
            "seated": seat.is_seated,
            "tricksTaken": seat.tricks_taken,
            "cardCount": len(seat.hand),
        }
        if seat.role == role:
            entry["hand"] = _cards(seat.hand)
        players[seat.role] = entry

    messages = state.messages[-limit:] if limit > 0 else []
    return {
        "gameId": state.game_id,
        "myRole": role,
        "phase": state.phase.value,
        "playerOrder": list(state.player_order),
        "players": players,
        "handNumber": state.hand_number,
        "dealer": state.dealer,
        "initialDealerForSession": state.initial_dealer_for_session,
        "currentPlayer": state.current_player,
        "upCard": _opt_card(state.up_card),
        "turnedDownCard": _opt_card(state.turned_down_card),
        "kittyCount": len(state.kitty),
        "discardCount": len(state.discard_pile),
        "trump": state.trump.value if state.trump else None,
        "maker": int(state.maker) if state.maker else None,
        "playerWhoCalledTrump": state.player_who_called_trump,
        "orderUpRound": state.order_up_round,
        "dealerHasDiscarded": state.dealer_has_discarded,
        "goingAlone": state.going_alone,
        "playerGoingAlone": state.player_going_alone,
        "partnerSittingOut": state.partner_sitting_out,
        "currentTrickPlays": [_play_to_dict(p) for p in state.current_trick_plays],
        "tricks": [
            {"plays": [_play_to_dict(p) for p in t.plays], "winner": t.winner}
            for t in state.tricks
        ],
        "trickLeader": state.trick_leader,
        "team1Score": state.team1_score,
        "team2Score": state.team2_score,
        "winningScore": state.winning_score,
        "winningTeam": int(state.winning_team) if state.winning_team else None,
        "matchStats": {
            "gamesPlayed": state.match_stats.games_played,
            "teamWins": {"1": state.match_stats.team1_wins, "2": state.match_stats.team2_wins},
            "lastUpdated": state.match_stats.last_updated,
        },
        "messages": [_message_to_dict(m) for m in messages],
    }


__all__ = [
    "SCHEMA_VERSION",
    "DEFAULT_MESSAGE_LIMIT",
    "state_to_dict",
    "state_from_dict",
    "state_to_json",
    "state_from_json",
    "view_for_seat",
]
