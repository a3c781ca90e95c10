"""Seats, partners, turn order and the player directory."""
from euchre.players import (
    EAST,
    NORTH,
    SOUTH,
    WEST,
    PlayerDirectory,
    Team,
    next_seat,
    is_seat,
    partner,
    seats_from,
    team_of,
)


def test_next_seat_cycles_clockwise():
    assert [next_seat(r) for r in (NORTH, EAST, SOUTH, WEST)] == [EAST, SOUTH, WEST, NORTH]


def test_next_seat_skips_sitting_out_partner():
    assert next_seat(NORTH, skip=EAST) == SOUTH
    assert next_seat(WEST, skip=NORTH) == EAST
    assert seats_from(WEST, skip=EAST) == [WEST, NORTH, SOUTH]


def test_partners_and_teams():
    assert partner(NORTH) == SOUTH and partner(EAST) == WEST
    assert team_of(NORTH) == team_of(SOUTH) == Team.TEAM1
    assert team_of(EAST) == team_of(WEST) == Team.TEAM2
    assert Team.TEAM1.other == Team.TEAM2
    assert Team.TEAM1.label == "Team 1 (North/South)"


def test_directory_seating_and_rebinding():
    players = PlayerDirectory()
    assert players.first_free_seat() == NORTH
    players.seat_player(NORTH, "p1", "c1", "Ann")
    players.seat_player(EAST, "p2", "c2")
    assert players.seated_count() == 2
    assert players[EAST].name == "East"
    assert players.role_for_connection("c1") == NORTH

    assert players.release_connection("c1") == NORTH
    assert players[NORTH].is_seated and not players[NORTH].is_connected
    assert players.role_for_connection("c1") is None

    # A reused connection handle moves to the returning player's seat.
    assert players.bind_connection("p1", "c2") == NORTH
    assert players[NORTH].connection == "c2"
    assert players[EAST].connection is None
    assert players.bind_connection("ghost", "c9") is None


def test_unset_player_id_matches_no_seat():
    players = PlayerDirectory()
    assert players.role_for_player(None) is None
    assert players.bind_connection(None, "c1") is None
    assert players.role_for_connection("c1") is None
    players.seat_player(NORTH, "p1", "c1", "Ann")
    assert players.role_for_player(None) is None


def test_is_seat_rejects_non_strings():
    assert is_seat(NORTH)
    assert not is_seat("centre")
    assert not is_seat(None)
    assert not is_seat([NORTH])
    assert not is_seat({NORTH: 1})
