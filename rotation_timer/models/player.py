"""
Player model for the Rotation Timer application.

This module contains the Player dataclass which represents an individual
player and their per-game rotation state: accumulated playtime, whether they
are on the field, sit-out bookkeeping and exclusion.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class PlayerRole(Enum):
    """Mutually exclusive roles derived from ``is_active`` and ``excluded``."""
    ACTIVE = "active"
    RESERVE = "reserve"
    EXCLUDED = "excluded"


@dataclass
class Player:
    """
    Represents a player in the rotation.

    Attributes:
        id: Stable positive identifier assigned at roster creation
        name: Display name
        play_time_seconds: Total seconds played in the current game
        is_active: Whether the player is currently on the field
        last_sub_time: Game-clock seconds when the player last came on
        sit_out_rounds: Upcoming rounds the player may not be brought on
        just_subbed: True for the round right after the player was taken off
        excluded: Excluded players are never active and never reserves
    """
    id: int
    name: str
    play_time_seconds: int = 0
    is_active: bool = False
    last_sub_time: int = 0
    sit_out_rounds: int = 0
    just_subbed: bool = False
    excluded: bool = False

    def update_play_time(self) -> None:
        """Add one second of playtime if the player is on the field."""
        if self.is_active:
            self.play_time_seconds += 1

    def can_play(self) -> bool:
        """
        Check whether the player may be brought on.

        Returns:
            True if the player is neither excluded nor sitting out
        """
        return self.sit_out_rounds == 0 and not self.excluded

    @property
    def sitting_out(self) -> bool:
        return self.sit_out_rounds > 0

    @property
    def role(self) -> PlayerRole:
        if self.excluded:
            return PlayerRole.EXCLUDED
        if self.is_active:
            return PlayerRole.ACTIVE
        return PlayerRole.RESERVE

    def continuous_seconds(self, game_elapsed_seconds: int) -> int:
        """
        Seconds since the player last came on, or 0 when off the field.

        Args:
            game_elapsed_seconds: Current game clock value
        """
        if not self.is_active:
            return 0
        return max(0, game_elapsed_seconds - self.last_sub_time)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "play_time_seconds": self.play_time_seconds,
            "is_active": self.is_active,
            "last_sub_time": self.last_sub_time,
            "sit_out_rounds": self.sit_out_rounds,
            "just_subbed": self.just_subbed,
            "excluded": self.excluded,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        excluded = bool(data.get("excluded", False))
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            play_time_seconds=int(data.get("play_time_seconds", 0)),
            is_active=bool(data.get("is_active", False)) and not excluded,
            last_sub_time=int(data.get("last_sub_time", 0)),
            sit_out_rounds=max(0, int(data.get("sit_out_rounds", 0))),
            just_subbed=bool(data.get("just_subbed", False)),
            excluded=excluded,
        )
