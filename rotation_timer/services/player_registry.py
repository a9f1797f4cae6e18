"""
Player registry for the Rotation Timer application.

This module owns the roster of players for one session and the in-memory
mutations the rotation needs: activating, excluding, sit-out cycling,
renaming and per-second playtime accrual. Every mutator is a no-op for an
unknown player id.
"""
from typing import Dict, Iterable, List, Optional, Set

from ..models import Player
from ..utils import MAX_SIT_OUT_ROUNDS, PLACEHOLDER_NAME


def normalize_name(name: Optional[str]) -> str:
    """
    Clean a display name.

    Args:
        name: Raw user input

    Returns:
        Stripped name, or the placeholder when the input is blank
    """
    cleaned = (name or "").strip()
    return cleaned or PLACEHOLDER_NAME


class PlayerRegistry:
    """
    Roster of players keyed by id, in roster order.

    Persistence is not triggered here; the session saves names and
    exclusions after it mutates the registry.
    """

    def __init__(self, players: Optional[Iterable[Player]] = None):
        self._players: Dict[int, Player] = {}
        for player in players or []:
            self._players[player.id] = player

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        excluded_ids: Optional[Set[int]] = None,
    ) -> "PlayerRegistry":
        """
        Build a registry from an ordered list of names.

        Ids are assigned 1..N in list order. When ``excluded_ids`` is None the
        placeholder-name convention decides who starts excluded.

        Args:
            names: Ordered player names
            excluded_ids: Persisted exclusions, or None if never saved

        Returns:
            New PlayerRegistry
        """
        players = []
        for index, raw_name in enumerate(names, start=1):
            name = normalize_name(raw_name)
            if excluded_ids is None:
                excluded = name == PLACEHOLDER_NAME
            else:
                excluded = index in excluded_ids
            players.append(Player(id=index, name=name, excluded=excluded))
        return cls(players)

    # ---------- Queries ---------- #

    def get(self, player_id: int) -> Optional[Player]:
        return self._players.get(player_id)

    def __contains__(self, player_id: int) -> bool:
        return player_id in self._players

    def __iter__(self):
        return iter(self._players.values())

    def __len__(self) -> int:
        return len(self._players)

    def all_players(self) -> List[Player]:
        return list(self._players.values())

    def active_players(self) -> List[Player]:
        return [p for p in self._players.values() if p.is_active]

    def reserve_players(self) -> List[Player]:
        """Players off the field and not excluded (sitting out included)."""
        return [p for p in self._players.values() if not p.is_active and not p.excluded]

    def eligible_reserves(self) -> List[Player]:
        """Players that may be brought on right now."""
        return [p for p in self._players.values() if not p.is_active and p.can_play()]

    def excluded_players(self) -> List[Player]:
        return [p for p in self._players.values() if p.excluded]

    def names(self) -> List[str]:
        return [p.name for p in self._players.values()]

    def excluded_ids(self) -> Set[int]:
        return {p.id for p in self._players.values() if p.excluded}

    # ---------- Mutations ---------- #

    def activate(self, player_id: int) -> bool:
        """
        Put a player on the field.

        Returns:
            True if the player's state changed
        """
        player = self._players.get(player_id)
        if player is None or player.excluded or player.is_active:
            return False
        player.is_active = True
        return True

    def deactivate(self, player_id: int) -> bool:
        player = self._players.get(player_id)
        if player is None or not player.is_active:
            return False
        player.is_active = False
        return True

    def set_excluded(self, player_id: int, excluded: bool) -> bool:
        """
        Exclude or re-include a player. Excluding also takes them off the field.

        Returns:
            True if the player exists
        """
        player = self._players.get(player_id)
        if player is None:
            return False
        player.excluded = bool(excluded)
        if player.excluded:
            player.is_active = False
        return True

    def cycle_sit_out(self, player_id: int) -> Optional[int]:
        """
        Rotate a player's sit-out rounds 0 -> 1 -> ... -> MAX -> 0.

        Returns:
            The new sit-out count, or None for an unknown id
        """
        player = self._players.get(player_id)
        if player is None:
            return None
        player.sit_out_rounds = (player.sit_out_rounds + 1) % (MAX_SIT_OUT_ROUNDS + 1)
        return player.sit_out_rounds

    def rename(self, player_id: int, name: Optional[str]) -> Optional[str]:
        player = self._players.get(player_id)
        if player is None:
            return None
        player.name = normalize_name(name)
        return player.name

    def tick_playtime(self) -> None:
        """Add one second of playtime to every active player."""
        for player in self._players.values():
            player.update_play_time()

    def decrement_sit_outs(self) -> None:
        for player in self._players.values():
            if player.sit_out_rounds > 0:
                player.sit_out_rounds -= 1

    def clear_just_subbed(self) -> None:
        for player in self._players.values():
            player.just_subbed = False
