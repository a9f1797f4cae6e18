"""
Rotation Timer

Keeps playing time fair for a fixed-duration team game: tracks who is on
the field, accumulates individual playtime and decides, round by round, who
comes off and who goes on.

This package provides a desktop (Tkinter) window and a web (Flask) JSON API
on top of the same rotation engine.
"""
from .models import Player, PlayerRole, GameState, GamePhase, SubstitutionPlan
from .services import GameSession, PlayerRegistry, ServiceFactory, compute_plan
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Player", "PlayerRole", "GameState", "GamePhase", "SubstitutionPlan",
    "GameSession", "PlayerRegistry", "ServiceFactory", "compute_plan",
    "fmt_mmss", "now_ts", "APP_TITLE",
]
