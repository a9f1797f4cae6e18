"""
Service factory for the Rotation Timer.

Builds a :class:`GameSession` with its collaborators wired in, so the UI
layers never construct stores or notifiers themselves.
"""
from typing import Optional

from .analytics_service import AnalyticsService, PlaytimeReportExporter
from .game_session import GameSession
from .notification_service import (
    AudioCue, EventQueue, LoggingNotifier, NullAudioCue, QueuedAudioCue,
    QueuedNotifier, SubstitutionNotifier,
)
from .persistence_service import JsonRosterStore, MemoryRosterStore, RosterStore


class ServiceFactory:
    """
    Factory for sessions and the services that read them.

    Args:
        data_file: JSON file for names/exclusions; in-memory when omitted
    """

    def __init__(self, data_file: Optional[str] = None):
        self.data_file = data_file
        self._store: Optional[RosterStore] = None
        self._export_service: Optional[PlaytimeReportExporter] = None

    def create_session(
        self,
        notifier: Optional[SubstitutionNotifier] = None,
        audio: Optional[AudioCue] = None,
    ) -> GameSession:
        """
        Create a session bound to the configured roster store.

        Args:
            notifier: Near-expiry hook, logs by default
            audio: Substitution sound hook, silent by default

        Returns:
            New GameSession
        """
        return GameSession(
            store=self._get_store(),
            notifier=notifier or LoggingNotifier(),
            audio=audio or NullAudioCue(),
        )

    def create_queued_session(self, queue: EventQueue) -> GameSession:
        """Create a session whose notifications and sounds go to ``queue``."""
        return self.create_session(
            notifier=QueuedNotifier(queue),
            audio=QueuedAudioCue(queue),
        )

    def create_analytics_service(self, session: GameSession) -> AnalyticsService:
        return AnalyticsService(session, export_service=self._get_export_service())

    def _get_store(self) -> RosterStore:
        """Get the shared roster store."""
        if self._store is None:
            if self.data_file:
                self._store = JsonRosterStore(self.data_file)
            else:
                self._store = MemoryRosterStore()
        return self._store

    def _get_export_service(self) -> PlaytimeReportExporter:
        if self._export_service is None:
            self._export_service = PlaytimeReportExporter()
        return self._export_service
