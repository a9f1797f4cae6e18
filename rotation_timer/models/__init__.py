"""
Models package for the Rotation Timer.

This package contains the core data models used throughout the application.
"""
from .player import Player, PlayerRole
from .game_state import GameState, GamePhase
from .substitution_plan import SubstitutionPlan
from .game_report import PlaytimeReport, PlayerTimeSummary

__all__ = [
    "Player", "PlayerRole", "GameState", "GamePhase", "SubstitutionPlan",
    "PlaytimeReport", "PlayerTimeSummary",
]
