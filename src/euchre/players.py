"""
Seats, partnerships and turn order.

Seats are fixed roles in clockwise order: north, east, south, west.
North/South are Team 1, East/West are Team 2.

A seat is owned by a stable ``player_id``; the transport connection is only a
back-reference that changes on reconnect and is never used for bookkeeping.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, Optional

from .deck import Card

logger = logging.getLogger(__name__)

NORTH = "north"
EAST = "east"
SOUTH = "south"
WEST = "west"

SEATS = (NORTH, EAST, SOUTH, WEST)

PARTNERS = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}


class Team(IntEnum):
    TEAM1 = 1  # North/South
    TEAM2 = 2  # East/West

    @property
    def label(self) -> str:
        members = "North/South" if self == Team.TEAM1 else "East/West"
        return f"Team {int(self)} ({members})"

    @property
    def other(self) -> "Team":
        return Team.TEAM2 if self == Team.TEAM1 else Team.TEAM1


TEAM_OF = {NORTH: Team.TEAM1, SOUTH: Team.TEAM1, EAST: Team.TEAM2, WEST: Team.TEAM2}


def is_seat(role: object) -> bool:
    return isinstance(role, str) and role in PARTNERS


def partner(role: str) -> str:
    return PARTNERS[role]


def team_of(role: str) -> Team:
    return TEAM_OF[role]


def next_seat(role: str, skip: Optional[str] = None) -> str:
    """Clockwise successor of ``role``, passing over ``skip`` (the sitting-out partner)."""
    idx = SEATS.index(role)
    nxt = SEATS[(idx + 1) % len(SEATS)]
    if skip is not None and nxt == skip:
        nxt = SEATS[(idx + 2) % len(SEATS)]
    return nxt


def seats_from(start: str, skip: Optional[str] = None) -> list[str]:
    """All active seats in turn order, beginning with ``start``."""
    order = [start]
    role = next_seat(start, skip)
    while role != start:
        order.append(role)
        role = next_seat(role, skip)
    return order


@dataclass
class PlayerSeat:
    """One seat at the table. ``tricks_taken`` is hand-scoped."""

    role: str
    name: str
    team: Team
    player_id: Optional[str] = None
    connection: Optional[str] = None
    hand: list[Card] = field(default_factory=list)
    tricks_taken: int = 0

    @property
    def is_seated(self) -> bool:
        return self.player_id is not None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None


def default_seats() -> Dict[str, PlayerSeat]:
    return {
        role: PlayerSeat(role=role, name=role.capitalize(), team=team_of(role))
        for role in SEATS
    }


class PlayerDirectory:
    """Identity-to-seat mapping plus connection back-references."""

    def __init__(self, seats: Dict[str, PlayerSeat] | None = None) -> None:
        self.seats: Dict[str, PlayerSeat] = seats if seats is not None else default_seats()

    def __getitem__(self, role: str) -> PlayerSeat:
        return self.seats[role]

    def __iter__(self) -> Iterator[PlayerSeat]:
        for role in SEATS:
            yield self.seats[role]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerDirectory):
            return NotImplemented
        return self.seats == other.seats

    def seated_count(self) -> int:
        return sum(1 for s in self if s.is_seated)

    def connected_count(self) -> int:
        return sum(1 for s in self if s.is_connected)

    def role_for_player(self, player_id: Optional[str]) -> Optional[str]:
        if player_id is None:
            return None
        for seat in self:
            if seat.player_id == player_id:
                return seat.role
        return None

    def role_for_connection(self, connection: str) -> Optional[str]:
        if connection is None:
            return None
        for seat in self:
            if seat.connection == connection:
                return seat.role
        return None

    def first_free_seat(self) -> Optional[str]:
        for seat in self:
            if not seat.is_seated:
                return seat.role
        return None

    def seat_player(
        self,
        role: str,
        player_id: str,
        connection: Optional[str],
        name: Optional[str] = None,
    ) -> PlayerSeat:
        seat = self.seats[role]
        seat.player_id = player_id
        seat.connection = connection
        if name:
            seat.name = name
        logger.info("%s (%s) seated as player %s", seat.name, role, player_id)
        return seat

    def bind_connection(self, player_id: str, connection: str) -> Optional[str]:
        """Point ``player_id``'s seat at a new connection. Hands and scores are untouched."""
        role = self.role_for_player(player_id)
        if role is None:
            return None
        # A connection handle belongs to at most one seat.
        for seat in self:
            if seat.connection == connection and seat.role != role:
                seat.connection = None
        self.seats[role].connection = connection
        logger.info("Player %s re-bound to %s", player_id, role)
        return role

    def release_connection(self, connection: str) -> Optional[str]:
        role = self.role_for_connection(connection)
        if role is not None:
            self.seats[role].connection = None
            logger.info("%s (%s) disconnected; seat held", self.seats[role].name, role)
        return role


__all__ = [
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "SEATS",
    "Team",
    "is_seat",
    "partner",
    "team_of",
    "next_seat",
    "seats_from",
    "PlayerSeat",
    "PlayerDirectory",
    "default_seats",
]
