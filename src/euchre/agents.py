"""
Simple baseline agents and the generic policy interface.

A ``Policy`` receives the list produced by ``legal_actions`` for its seat and
returns one of them. ``RandomAgent`` picks uniformly, which is enough to drive
complete games through a ``GameSession`` for smoke tests and the CLI.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence

from .actions import Action


class Policy(Protocol):
    """Decision policy for one seat."""

    def act(self, legal_actions: Sequence[Action]) -> Action:
        """
        Choose one of ``legal_actions``.

        Implementations must return an element of the sequence; the session
        rejects anything else without mutating the game.
        """


@dataclass
class RandomAgent:
    """
    Baseline policy that samples uniformly among legal actions.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(session.legal_actions("north"))
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, legal_actions: Sequence[Action]) -> Action:
        if not legal_actions:
            raise ValueError("No legal actions available for RandomAgent")
        return self._rng.choice(list(legal_actions))


__all__ = ["Policy", "RandomAgent"]
