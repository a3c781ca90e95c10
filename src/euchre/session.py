"""
One table: a GameState plus the entry points the transport layer calls.

Every entry point runs under one re-entrant lock, so concurrent inbound
messages are applied one at a time. A rejected action changes nothing, is
logged as a warning and is reported to the offending seat only.
"""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from .actions import Action, parse_action
from .config import EuchreConfig
from .errors import EuchreError, InvalidActionError
from .game import apply_action, legal_actions
from .persistence import state_to_dict, view_for_seat
from .phases import ACTION_LABELS, ActionKind, Phase
from .players import is_seat
from .state import GameMessage, GameState

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    """Outbound side of the transport."""

    def send_state(self, role: str, view: Dict[str, Any]) -> None:
        """Deliver a seat's redacted view."""

    def send_error(self, role: Optional[str], message: str) -> None:
        """Deliver a rejection to one seat only."""


@dataclass
class ActionResult:
    ok: bool
    error: Optional[str] = None
    messages: List[GameMessage] = field(default_factory=list)


def _require_player_id(player_id: object) -> None:
    if not isinstance(player_id, str) or not player_id.strip():
        raise InvalidActionError(f"A non-empty player id is required, got {player_id!r}")


class GameSession:
    """
    Owns one GameState. Seats are keyed by a stable ``player_id``; the
    ``connection`` handle is only used to find the seat of an inbound message.

    Usage:
        session = GameSession(EuchreConfig(seed=1), broadcaster=my_transport)
        session.join("p1", "conn-1", "Ann")
        ...
        session.dispatch("conn-1", "request_start_game")
    """

    def __init__(
        self,
        config: EuchreConfig | None = None,
        rng: random.Random | None = None,
        broadcaster: Broadcaster | None = None,
    ) -> None:
        self.config = config or EuchreConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.broadcaster = broadcaster
        self.state = GameState(winning_score=self.config.winning_score)
        self._lock = threading.RLock()

    # -- seating ---------------------------------------------------------

    def join(self, player_id: str, connection: str, name: Optional[str] = None) -> str:
        """
        Seat ``player_id`` in the first free seat (lobby only), or re-bind a
        returning player to the seat they already hold. Raises
        ``InvalidActionError`` when the table is full or the game is running.
        """
        with self._lock:
            _require_player_id(player_id)
            if self.state.players.role_for_player(player_id) is not None:
                return self.reconnect(player_id, connection)
            if self.state.phase != Phase.LOBBY:
                raise InvalidActionError("Game in progress; no free seat.")
            role = self.state.players.first_free_seat()
            if role is None:
                raise InvalidActionError("Table is full.")
            self._release_elsewhere(connection)
            seat = self.state.players.seat_player(role, player_id, connection, name)
            self.state.add_message(f"{seat.name} joined as {role}.")
            self._broadcast()
            return role

    def reconnect(self, player_id: str, connection: str) -> str:
        """Re-bind a held seat to a new connection and send that seat a fresh view."""
        with self._lock:
            _require_player_id(player_id)
            role = self.state.players.bind_connection(player_id, connection)
            if role is None:
                raise InvalidActionError(f"Unknown player {player_id!r}")
            self._send_state(role)
            return role

    def disconnect(self, connection: str) -> Optional[str]:
        """Drop a connection. The seat, hand and scores are held for reconnection."""
        with self._lock:
            role = self.state.players.release_connection(connection)
            if role is not None:
                self.state.add_message(f"{self.state.name(role)} disconnected. Seat held.")
                self._broadcast()
            return role

    def role_for_connection(self, connection: str) -> Optional[str]:
        with self._lock:
            return self.state.players.role_for_connection(connection)

    def _release_elsewhere(self, connection: str) -> None:
        for seat in self.state.players:
            if seat.connection == connection:
                seat.connection = None

    # -- actions ---------------------------------------------------------

    def dispatch(
        self,
        connection: str,
        kind: Union[str, ActionKind],
        payload: Optional[Mapping[str, Any]] = None,
    ) -> ActionResult:
        """Transport entry point: resolve the seat, parse the payload, apply it."""
        with self._lock:
            role = self.state.players.role_for_connection(connection)
            if role is None:
                return self._reject(None, kind, InvalidActionError("Connection is not seated"))
            try:
                action = parse_action(kind, payload)
            except EuchreError as exc:
                return self._reject(role, kind, exc)
            return self.handle_action(role, action)

    def handle_action(self, role: str, action: Action) -> ActionResult:
        """Apply ``action`` for ``role`` and broadcast, or reject with no mutation."""
        with self._lock:
            if not is_seat(role) or not self.state.players[role].is_seated:
                return self._reject(role, action.kind, InvalidActionError(f"{role!r} is not a seated player"))

            game_id = self.state.game_id
            before = len(self.state.messages)
            try:
                apply_action(self.state, role, action, self.rng, self.config.first_dealer)
            except EuchreError as exc:
                return self._reject(role, action.kind, exc)

            if self.state.game_id != game_id:
                before = 0
            new_messages = list(self.state.messages[before:])
            self._broadcast()
            return ActionResult(ok=True, messages=new_messages)

    def _reject(self, role: Optional[str], kind: Any, exc: EuchreError) -> ActionResult:
        try:
            label = ACTION_LABELS[ActionKind(kind)]
        except ValueError:
            label = str(kind)
        logger.warning("Invalid %s attempt by %s: %s", label, role, exc)
        if self.broadcaster is not None:
            self.broadcaster.send_error(role, str(exc))
        return ActionResult(ok=False, error=str(exc))

    # -- views -----------------------------------------------------------

    def view_for(self, role: Optional[str]) -> Dict[str, Any]:
        with self._lock:
            return view_for_seat(self.state, role, self.config.message_view_limit)

    def legal_actions(self, role: str) -> List[Action]:
        with self._lock:
            return legal_actions(self.state, role)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return state_to_dict(self.state)

    def _send_state(self, role: str) -> None:
        if self.broadcaster is not None and self.state.players[role].is_connected:
            self.broadcaster.send_state(role, self.view_for(role))

    def _broadcast(self) -> None:
        for seat in self.state.players:
            self._send_state(seat.role)


__all__ = ["GameSession", "ActionResult", "Broadcaster"]
