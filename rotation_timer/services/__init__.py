"""
Services package for the Rotation Timer.

This package contains the rotation engine (registry, clock, planner,
executor, session) and the collaborators it talks to.
"""
from .persistence_service import (
    RosterStore, RosterStoreError, JsonRosterStore, MemoryRosterStore,
)
from .player_registry import PlayerRegistry, normalize_name
from .timer_service import GameClock, CooldownLatch
from .rotation_planner import compute_plan, plan_changed
from .notification_service import (
    SubstitutionNotifier, AudioCue, NullNotifier, NullAudioCue,
    LoggingNotifier, EventQueue, QueuedNotifier, QueuedAudioCue,
)
from .substitution_executor import execute_substitution
from .game_session import GameSession
from .analytics_service import AnalyticsService, PlaytimeReportExporter
from .service_factory import ServiceFactory

__all__ = [
    "RosterStore", "RosterStoreError", "JsonRosterStore", "MemoryRosterStore",
    "PlayerRegistry", "normalize_name", "GameClock", "CooldownLatch",
    "compute_plan", "plan_changed", "SubstitutionNotifier", "AudioCue",
    "NullNotifier", "NullAudioCue", "LoggingNotifier", "EventQueue",
    "QueuedNotifier", "QueuedAudioCue", "execute_substitution", "GameSession",
    "AnalyticsService", "PlaytimeReportExporter", "ServiceFactory",
]
