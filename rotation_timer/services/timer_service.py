"""Timer service for the Rotation Timer application."""

from typing import Optional

from ..utils import now_ts


class GameClock:
    """
    Wall-clock game timer that excludes paused time.

    Elapsed seconds are derived from ``now_ts()`` minus the accumulated
    paused duration rather than from a tick counter, so a tick source that
    misses beats can catch up later.
    """

    def __init__(self):
        self.start_ts: Optional[float] = None
        self.pause_started_ts: Optional[float] = None
        self.paused_seconds: float = 0.0

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start the clock from zero."""

        self.start_ts = now_ts()
        self.pause_started_ts = None
        self.paused_seconds = 0.0

    def pause(self) -> None:
        """Freeze elapsed time until :meth:`resume`."""

        if self.start_ts is None or self.pause_started_ts is not None:
            return
        self.pause_started_ts = now_ts()

    def resume(self) -> None:
        """Resume after a pause, discarding the paused duration."""

        if self.pause_started_ts is None:
            return
        self.paused_seconds += max(0.0, now_ts() - self.pause_started_ts)
        self.pause_started_ts = None

    def stop(self) -> None:
        """Stop and clear all timing state."""

        self.start_ts = None
        self.pause_started_ts = None
        self.paused_seconds = 0.0

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    @property
    def is_started(self) -> bool:
        return self.start_ts is not None

    @property
    def is_paused(self) -> bool:
        return self.pause_started_ts is not None

    def elapsed_seconds(self) -> int:
        """Whole seconds the clock has run, excluding pauses."""

        if self.start_ts is None:
            return 0
        end = self.pause_started_ts if self.pause_started_ts is not None else now_ts()
        return max(0, int(end - self.start_ts - self.paused_seconds))


class CooldownLatch:
    """
    Count-down latch that suppresses plan recomputation.

    Armed for N seconds after a substitution; each tick consumes one second.
    """

    def __init__(self):
        self.remaining_seconds = 0

    def arm(self, seconds: int) -> None:
        self.remaining_seconds = max(0, int(seconds))

    def clear(self) -> None:
        self.remaining_seconds = 0

    @property
    def active(self) -> bool:
        return self.remaining_seconds > 0

    def tick(self) -> bool:
        """
        Consume one second.

        Returns:
            True if the latch was armed when the tick arrived
        """
        if self.remaining_seconds <= 0:
            return False
        self.remaining_seconds -= 1
        return True
