"""
Table configuration.

``EuchreConfig.from_env`` reads ``EUCHRE_*`` variables, after loading a ``.env``
file from the working directory if one exists.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .players import is_seat

ENV_PREFIX = "EUCHRE_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EuchreConfig:
    """Settings for one GameSession."""

    winning_score: int = 10
    # None picks a random seat at game start
    first_dealer: Optional[str] = None
    message_view_limit: int = 15
    seed: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.winning_score < 1:
            raise ValueError(f"winning_score must be positive, got {self.winning_score}")
        if self.first_dealer is not None and not is_seat(self.first_dealer):
            raise ValueError(f"first_dealer must be a seat role, got {self.first_dealer!r}")
        if self.message_view_limit < 0:
            raise ValueError(f"message_view_limit must be >= 0, got {self.message_view_limit}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | os.PathLike[str] | None = None,
    ) -> "EuchreConfig":
        """
        Build a config from ``EUCHRE_WINNING_SCORE``, ``EUCHRE_FIRST_DEALER`` and friends.

        With no ``environ`` mapping, a ``.env`` file (``dotenv_path`` or the nearest
        one from the working directory) is loaded into ``os.environ`` first.
        Existing environment variables win over the file.
        """
        if environ is None:
            load_dotenv(dotenv_path or find_dotenv(usecwd=True))
            environ = os.environ
        env = environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value is not None and value.strip() else None

        def get_int(name: str, default: Optional[int]) -> Optional[int]:
            raw = get(name)
            if raw is None:
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None

        first_dealer = get("FIRST_DEALER")
        return cls(
            winning_score=get_int("WINNING_SCORE", 10),
            first_dealer=first_dealer.lower() if first_dealer else None,
            message_view_limit=get_int("MESSAGE_VIEW_LIMIT", 15),
            seed=get_int("SEED", None),
            log_level=get("LOG_LEVEL") or "INFO",
        )


__all__ = ["EuchreConfig", "ENV_PREFIX"]
