"""
GameState model for the Rotation Timer application.

This module contains the GameState dataclass which represents the round and
game clock state of a session: phase, configuration, elapsed time, the round
countdown and the near-expiry notification latch.
"""
from dataclasses import dataclass
from enum import Enum

from ..utils import (
    DEFAULT_ROUND_SECONDS, DEFAULT_GAME_SECONDS, DEFAULT_SUBSTITUTIONS_PER_ROUND,
)


class GamePhase(Enum):
    """Phases of the game clock state machine."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass
class GameState:
    """
    Represents the round/game state of one session.

    Attributes:
        phase: Current phase of the state machine
        round_duration_seconds: Configured length of a round
        game_duration_limit_seconds: Configured length of the game
        game_elapsed_seconds: Seconds the clock has run (pauses excluded)
        round_time_left_seconds: Countdown within the current round
        substitutions_per_round: Target number of players rotated per round
        notification_sent: True once the near-expiry signal fired this round
    """
    phase: GamePhase = GamePhase.IDLE
    round_duration_seconds: int = DEFAULT_ROUND_SECONDS
    game_duration_limit_seconds: int = DEFAULT_GAME_SECONDS
    game_elapsed_seconds: int = 0
    round_time_left_seconds: int = DEFAULT_ROUND_SECONDS
    substitutions_per_round: int = DEFAULT_SUBSTITUTIONS_PER_ROUND
    notification_sent: bool = False

    @property
    def is_running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    @property
    def round_elapsed_seconds(self) -> int:
        """Portion of the current round already played."""
        return max(0, self.round_duration_seconds - self.round_time_left_seconds)

    @property
    def game_time_remaining_seconds(self) -> int:
        return max(0, self.game_duration_limit_seconds - self.game_elapsed_seconds)

    def reset_round_clock(self) -> None:
        """Restart the round countdown and clear the notification latch."""
        self.round_time_left_seconds = self.round_duration_seconds
        self.notification_sent = False

    def to_json(self) -> dict:
        """
        Convert GameState to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "phase": self.phase.value,
            "round_duration_seconds": self.round_duration_seconds,
            "game_duration_limit_seconds": self.game_duration_limit_seconds,
            "game_elapsed_seconds": self.game_elapsed_seconds,
            "round_time_left_seconds": self.round_time_left_seconds,
            "substitutions_per_round": self.substitutions_per_round,
            "notification_sent": self.notification_sent,
        }

    @staticmethod
    def from_json(data: dict) -> "GameState":
        """
        Create GameState from JSON dictionary.

        Args:
            data: Dictionary with game state data

        Returns:
            New GameState instance
        """
        gs = GameState()
        try:
            gs.phase = GamePhase(data.get("phase", GamePhase.IDLE.value))
        except ValueError:
            gs.phase = GamePhase.IDLE
        gs.round_duration_seconds = int(
            data.get("round_duration_seconds", DEFAULT_ROUND_SECONDS)
        )
        gs.game_duration_limit_seconds = int(
            data.get("game_duration_limit_seconds", DEFAULT_GAME_SECONDS)
        )
        gs.game_elapsed_seconds = max(0, int(data.get("game_elapsed_seconds", 0)))
        gs.round_time_left_seconds = max(
            0, int(data.get("round_time_left_seconds", gs.round_duration_seconds))
        )
        gs.substitutions_per_round = int(
            data.get("substitutions_per_round", DEFAULT_SUBSTITUTIONS_PER_ROUND)
        )
        gs.notification_sent = bool(data.get("notification_sent", False))
        return gs
