"""
Hand scoring: march (all five), made (3 or 4), euchre (2 or fewer).
Maker +2 on a march, +4 on a loner march, +1 when made; defenders +2 on a euchre.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .deal import start_new_hand
from .phases import Phase
from .players import Team
from .state import GameState

logger = logging.getLogger(__name__)

MARCH_POINTS = 2
LONER_MARCH_POINTS = 4
MADE_POINTS = 1
EUCHRE_POINTS = 2
WINNING_SCORE = 10
TRICKS_PER_HAND = 5
TRICKS_TO_MAKE = 3


@dataclass(frozen=True)
class HandResult:
    maker: Team
    maker_tricks: int
    scoring_team: Team
    points: int
    march: bool
    euchred: bool


def hand_points(maker_tricks: int, going_alone: bool) -> tuple[bool, int]:
    """
    (maker_scores, points) for a hand.
    maker_scores False means the defenders take the points.
    """
    if maker_tricks == TRICKS_PER_HAND:
        return True, LONER_MARCH_POINTS if going_alone else MARCH_POINTS
    if maker_tricks >= TRICKS_TO_MAKE:
        return True, MADE_POINTS
    return False, EUCHRE_POINTS


def hand_result(maker: Team, maker_tricks: int, going_alone: bool) -> HandResult:
    maker_scores, points = hand_points(maker_tricks, going_alone)
    return HandResult(
        maker=maker,
        maker_tricks=maker_tricks,
        scoring_team=maker if maker_scores else maker.other,
        points=points,
        march=maker_tricks == TRICKS_PER_HAND,
        euchred=not maker_scores,
    )


def winning_team(team1_score: int, team2_score: int, target: int = WINNING_SCORE) -> Optional[Team]:
    """Team that reached ``target``; the higher score if both did."""
    if team1_score < target and team2_score < target:
        return None
    return Team.TEAM1 if team1_score >= team2_score else Team.TEAM2


def score_hand(state: GameState, rng: random.Random | None = None) -> HandResult:
    """Apply the hand result, then either end the game or deal the next hand."""
    maker = state.maker
    maker_tricks = state.team_tricks(maker)
    result = hand_result(maker, maker_tricks, state.going_alone)

    state.add_message(
        f"Hand ended. {maker.label} (makers) took {maker_tricks} trick(s).", important=True
    )
    if result.euchred:
        state.add_message(f"{maker.label} euchred!", important=True)
    elif result.march:
        state.add_message(
            f"{state.name(state.player_who_called_trump)}'s team takes all five tricks!",
            important=True,
        )

    state.add_score(result.scoring_team, result.points)
    state.add_message(
        f"Team {int(result.scoring_team)} scores {result.points} point(s). "
        f"Total: Team 1 {state.team1_score} - Team 2 {state.team2_score}.",
        important=True,
    )
    logger.info(
        "Hand %d scored: %s +%d (Team 1 %d, Team 2 %d)",
        state.hand_number,
        result.scoring_team.label,
        result.points,
        state.team1_score,
        state.team2_score,
    )

    winner = winning_team(state.team1_score, state.team2_score, state.winning_score)
    if winner is not None:
        state.winning_team = winner
        state.match_stats.record_win(winner)
        state.current_player = None
        state.set_phase(Phase.GAME_OVER)
        state.add_message(
            f"GAME OVER! Team {int(winner)} wins! "
            f"Final score: Team 1 {state.team1_score} - Team 2 {state.team2_score}.",
            important=True,
        )
        logger.info("Game over: %s wins", winner.label)
        return result

    state.add_message("Preparing for next hand...")
    start_new_hand(state, rng)
    return result


__all__ = [
    "MARCH_POINTS",
    "LONER_MARCH_POINTS",
    "MADE_POINTS",
    "EUCHRE_POINTS",
    "WINNING_SCORE",
    "TRICKS_PER_HAND",
    "HandResult",
    "hand_points",
    "hand_result",
    "winning_team",
    "score_hand",
]
