"""
Tiny CLI to play complete random games through a GameSession.

Usage (from project root, after installing in editable mode):
    python -m euchre.play_random --games 3 --seed 42
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

from .actions import NewGame
from .agents import RandomAgent
from .config import EuchreConfig
from .phases import Phase
from .players import SEATS
from .persistence import state_to_json
from .session import GameSession

logger = logging.getLogger(__name__)

MAX_ACTIONS_PER_GAME = 100_000


def seat_random_agents(session: GameSession, seed: int) -> Dict[str, RandomAgent]:
    agents: Dict[str, RandomAgent] = {}
    for i, role in enumerate(SEATS):
        session.join(f"bot-{role}", f"conn-{role}", f"Random {role.capitalize()}")
        agents[role] = RandomAgent(seed=seed + i)
    return agents


def run_random_game(session: GameSession, agents: Dict[str, RandomAgent]) -> int:
    """
    Play one game to GAME_OVER. Returns the number of actions applied.
    The session must be in LOBBY with every seat taken.
    """
    steps = 0
    while session.state.phase != Phase.GAME_OVER:
        if steps >= MAX_ACTIONS_PER_GAME:
            raise RuntimeError(f"Game did not finish within {MAX_ACTIONS_PER_GAME} actions")
        for role in SEATS:
            legal = session.legal_actions(role)
            if legal:
                break
        else:
            raise RuntimeError(f"No seat can act during {session.state.phase.value}")
        result = session.handle_action(role, agents[role].act(legal))
        if not result.ok:
            raise RuntimeError(f"Legal action rejected for {role}: {result.error}")
        steps += 1
    return steps


def run_games(
    games: int,
    config: EuchreConfig,
    dump_state: Optional[Path] = None,
) -> GameSession:
    seed = config.seed if config.seed is not None else 0
    session = GameSession(config)
    agents = seat_random_agents(session, seed)

    for game_no in range(1, games + 1):
        if game_no > 1:
            session.handle_action(SEATS[0], NewGame())
        steps = run_random_game(session, agents)
        state = session.state
        print(
            f"game={game_no} winner=Team {int(state.winning_team)} "
            f"score={state.team1_score}-{state.team2_score} "
            f"hands={state.hand_number} actions={steps}"
        )

    if dump_state is not None:
        dump_state.write_text(state_to_json(session.state), encoding="utf-8")
        logger.info("Final state written to %s", dump_state)
    return session


def main(argv: list[str] | None = None) -> None:
    # Defaults come from EUCHRE_* variables (and .env); flags override them.
    base = EuchreConfig.from_env()
    parser = argparse.ArgumentParser(description="Play random Euchre games through a GameSession.")
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of complete games to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=base.seed if base.seed is not None else 42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--winning-score",
        type=int,
        default=base.winning_score,
        help="Points needed to win a game.",
    )
    parser.add_argument(
        "--log-level",
        default=base.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for engine diagnostics.",
    )
    parser.add_argument(
        "--dump-state",
        type=Path,
        default=None,
        help="Write the final GameState snapshot as JSON to this path.",
    )
    args = parser.parse_args(argv)

    config = EuchreConfig(
        winning_score=args.winning_score,
        first_dealer=base.first_dealer,
        message_view_limit=base.message_view_limit,
        seed=args.seed,
        log_level=args.log_level,
    )
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.numeric_log_level,
    )
    run_games(args.games, config, args.dump_state)


if __name__ == "__main__":
    main()
