"""Dataclasses representing playtime reports for the rotation timer."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class PlayerTimeSummary:
    """Playing time information for a single player."""

    id: int
    name: str
    role: str
    play_time_seconds: int
    continuous_seconds: int
    target_seconds: int
    delta_seconds: int
    target_share: float
    sit_out_rounds: int
    fairness: str


@dataclass
class PlaytimeReport:
    """Snapshot of playing time distribution for the current game."""

    generated_ts: float
    roster_size: int
    eligible_count: int
    elapsed_seconds: int
    target_seconds_per_player: int
    players: List[PlayerTimeSummary] = field(default_factory=list)
    average_seconds: float = 0.0
    min_seconds: int = 0
    max_seconds: int = 0
    fairness_counts: Dict[str, int] = field(default_factory=dict)
