"""
Notification and audio collaborators for the Rotation Timer.

The session only needs two fire-and-forget hooks: a near-expiry notification
listing the upcoming substitution, and a sound when a substitution happens.
Callers go through :func:`notify_safely` and :func:`play_safely` so a failing
collaborator can never break the rotation.
"""
import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, List, Protocol, Sequence

from ..models import Player
from ..utils import SUB_NOTIFICATION_THRESHOLD, now_ts

logger = logging.getLogger(__name__)


class SubstitutionNotifier(Protocol):
    """Interface for near-expiry notifications."""

    def notify_upcoming_substitution(
        self, players_in: Sequence[Player], players_out: Sequence[Player]
    ) -> None:
        ...


class AudioCue(Protocol):
    """Interface for the substitution sound."""

    def play_substitution_sound(self) -> None:
        ...


class NullNotifier:
    def notify_upcoming_substitution(self, players_in, players_out) -> None:
        pass


class NullAudioCue:
    def play_substitution_sound(self) -> None:
        pass


class LoggingNotifier:
    """Writes upcoming substitutions to the application log."""

    def notify_upcoming_substitution(self, players_in, players_out) -> None:
        logger.info(
            "Sub in %d seconds! ON: %s OFF: %s",
            SUB_NOTIFICATION_THRESHOLD,
            ", ".join(p.name for p in players_in),
            ", ".join(p.name for p in players_out),
        )


class EventQueue:
    """
    Bounded, thread-safe queue of UI events.

    The web client drains it by polling; older events are dropped when the
    client stops polling.
    """

    def __init__(self, max_events: int = 50):
        self._events: Deque[Dict[str, Any]] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def push(self, kind: str, **payload: Any) -> None:
        event = {"type": kind, "ts": now_ts()}
        event.update(payload)
        with self._lock:
            self._events.append(event)

    def drain(self) -> List[Dict[str, Any]]:
        with self._lock:
            events = list(self._events)
            self._events.clear()
        return events

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class QueuedNotifier:
    """Publishes upcoming substitutions to an :class:`EventQueue`."""

    def __init__(self, queue: EventQueue):
        self.queue = queue

    def notify_upcoming_substitution(self, players_in, players_out) -> None:
        self.queue.push(
            "upcoming_substitution",
            title=f"Sub in {SUB_NOTIFICATION_THRESHOLD} seconds!",
            players_in=[{"id": p.id, "name": p.name} for p in players_in],
            players_out=[{"id": p.id, "name": p.name} for p in players_out],
        )


class QueuedAudioCue:
    """Asks the client to play the substitution sound."""

    def __init__(self, queue: EventQueue):
        self.queue = queue

    def play_substitution_sound(self) -> None:
        self.queue.push("substitution_sound")


def notify_safely(
    notifier: SubstitutionNotifier,
    players_in: Sequence[Player],
    players_out: Sequence[Player],
) -> None:
    try:
        notifier.notify_upcoming_substitution(list(players_in), list(players_out))
    except Exception:
        logger.warning("Substitution notification failed", exc_info=True)


def play_safely(audio: AudioCue) -> None:
    try:
        audio.play_substitution_sound()
    except Exception:
        logger.warning("Substitution sound failed", exc_info=True)
