"""
Constants for the Rotation Timer application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Rotation Timer"

# Round and game timing defaults (seconds)
DEFAULT_ROUND_SECONDS = 240
DEFAULT_GAME_SECONDS = 2400

# Options the UI cycles through
ROUND_TIME_OPTIONS = [180, 240, 300, 480, 600]  # seconds
GAME_TIME_OPTIONS = [20, 30, 40, 45, 60, 90]  # minutes

# Substitutions per round cycle 1..4
DEFAULT_SUBSTITUTIONS_PER_ROUND = 2
MIN_SUBSTITUTIONS_PER_ROUND = 1
MAX_SUBSTITUTIONS_PER_ROUND = 4

# Sit-out button cycles 0..4 rounds
MAX_SIT_OUT_ROUNDS = 4

# On-field slots assumed by the fair-share target
ACTIVE_SLOT_COUNT = 5

# A player on for this many rounds in a row must come off
MANDATORY_ROTATION_ROUNDS = 3

# Near-expiry notification fires when the round countdown reaches this
SUB_NOTIFICATION_THRESHOLD = 5

# Planner stays quiet this long after a substitution is executed
SUBSTITUTION_COOLDOWN_SECONDS = 5

# Roster used when nothing (valid) has been persisted
PLACEHOLDER_NAME = "Player"
DEFAULT_PLAYER_NAMES = [
    "Alfie", "Amos", "Asher", "Bentis", "Elias",
    "Mattia", "Ollie", "Solly", "William", PLACEHOLDER_NAME,
]

# +/- 2 minutes regarded as notable variance in the playtime report
FAIRNESS_THRESHOLD_SECONDS = 120
