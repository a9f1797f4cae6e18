"""Substitution plan model for the Rotation Timer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .player import Player


@dataclass(eq=False)
class SubstitutionPlan:
    """
    Players coming on and going off at the next round boundary.

    ``players_out[i]`` is replaced by ``players_in[i]``. Two plans are equal
    when both id sequences match element for element, in order; the players'
    live playtime does not take part in the comparison.
    """
    players_in: List[Player] = field(default_factory=list)
    players_out: List[Player] = field(default_factory=list)

    @property
    def in_ids(self) -> List[int]:
        return [p.id for p in self.players_in]

    @property
    def out_ids(self) -> List[int]:
        return [p.id for p in self.players_out]

    @property
    def is_empty(self) -> bool:
        return not self.players_in and not self.players_out

    def pairs(self) -> List[Tuple[Player, Player]]:
        """Return (out, in) pairs in plan order."""
        return list(zip(self.players_out, self.players_in))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubstitutionPlan):
            return NotImplemented
        return self.in_ids == other.in_ids and self.out_ids == other.out_ids

    def __len__(self) -> int:
        return len(self.pairs())

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "players_in": [{"id": p.id, "name": p.name} for p in self.players_in],
            "players_out": [{"id": p.id, "name": p.name} for p in self.players_out],
        }
