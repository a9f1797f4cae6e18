"""
Utilities package for the Rotation Timer.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts
from .constants import (
    APP_TITLE, DEFAULT_ROUND_SECONDS, DEFAULT_GAME_SECONDS,
    ROUND_TIME_OPTIONS, GAME_TIME_OPTIONS,
    DEFAULT_SUBSTITUTIONS_PER_ROUND, MIN_SUBSTITUTIONS_PER_ROUND,
    MAX_SUBSTITUTIONS_PER_ROUND, MAX_SIT_OUT_ROUNDS, ACTIVE_SLOT_COUNT,
    MANDATORY_ROTATION_ROUNDS, SUB_NOTIFICATION_THRESHOLD,
    SUBSTITUTION_COOLDOWN_SECONDS, PLACEHOLDER_NAME, DEFAULT_PLAYER_NAMES,
    FAIRNESS_THRESHOLD_SECONDS,
)

__all__ = [
    "fmt_mmss", "now_ts", "APP_TITLE", "DEFAULT_ROUND_SECONDS",
    "DEFAULT_GAME_SECONDS", "ROUND_TIME_OPTIONS", "GAME_TIME_OPTIONS",
    "DEFAULT_SUBSTITUTIONS_PER_ROUND", "MIN_SUBSTITUTIONS_PER_ROUND",
    "MAX_SUBSTITUTIONS_PER_ROUND", "MAX_SIT_OUT_ROUNDS", "ACTIVE_SLOT_COUNT",
    "MANDATORY_ROTATION_ROUNDS", "SUB_NOTIFICATION_THRESHOLD",
    "SUBSTITUTION_COOLDOWN_SECONDS", "PLACEHOLDER_NAME", "DEFAULT_PLAYER_NAMES",
    "FAIRNESS_THRESHOLD_SECONDS",
]
