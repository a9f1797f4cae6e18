"""Playtime report helpers for the Rotation Timer."""

from __future__ import annotations

import csv
import io
import statistics
from collections import Counter
from typing import List, Optional, Protocol

from ..models import PlaytimeReport, PlayerRole, PlayerTimeSummary
from ..utils import FAIRNESS_THRESHOLD_SECONDS, now_ts
from .game_session import GameSession
from .rotation_planner import target_play_time_seconds

FAIRNESS_ORDER = {"under": 0, "ok": 1, "over": 2}


class ExportServiceInterface(Protocol):
    """Interface for report export."""

    def export_to_csv(self, report: PlaytimeReport) -> str:
        """Export report to CSV format."""
        ...


class PlaytimeReportExporter:
    """Writes a :class:`PlaytimeReport` as CSV."""

    HEADER = ["Name", "Role", "Playing Time (min)", "Target Time (min)", "Delta (min)", "Fairness"]

    def export_to_csv(self, report: PlaytimeReport) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.HEADER)
        for summary in report.players:
            writer.writerow([
                summary.name,
                summary.role,
                f"{summary.play_time_seconds / 60:.1f}",
                f"{summary.target_seconds / 60:.1f}",
                f"{summary.delta_seconds / 60:+.1f}",
                summary.fairness,
            ])
        return buffer.getvalue()


class AnalyticsService:
    """
    Generate reports describing playing time distribution in the current game.

    The per-player target is the same fair share the rotation planner uses.
    Excluded players are listed but left out of the aggregates.
    """

    def __init__(
        self,
        session: GameSession,
        export_service: Optional[ExportServiceInterface] = None,
    ) -> None:
        self.session = session
        self.export_service = export_service or PlaytimeReportExporter()

    def generate_report(self) -> PlaytimeReport:
        """Build a :class:`PlaytimeReport` snapshot for the current game."""

        elapsed, players = self.session.playtime_view()
        roster_size = len(players)
        target = int(round(
            target_play_time_seconds(elapsed, roster_size, self.session.active_slot_count)
        ))

        summaries: List[PlayerTimeSummary] = []
        for player in players:
            delta = player.play_time_seconds - target
            summaries.append(
                PlayerTimeSummary(
                    id=player.id,
                    name=player.name,
                    role=player.role.value,
                    play_time_seconds=player.play_time_seconds,
                    continuous_seconds=player.continuous_seconds(elapsed),
                    target_seconds=target,
                    delta_seconds=delta,
                    target_share=(player.play_time_seconds / target) if target > 0 else 0.0,
                    sit_out_rounds=player.sit_out_rounds,
                    fairness=self._classify_fairness(delta),
                )
            )

        summaries.sort(key=lambda s: (FAIRNESS_ORDER[s.fairness], s.delta_seconds, s.name.lower()))

        eligible = [s for s in summaries if s.role != PlayerRole.EXCLUDED.value]
        seconds = [s.play_time_seconds for s in eligible]

        return PlaytimeReport(
            generated_ts=now_ts(),
            roster_size=roster_size,
            eligible_count=len(eligible),
            elapsed_seconds=elapsed,
            target_seconds_per_player=target,
            players=summaries,
            average_seconds=statistics.mean(seconds) if seconds else 0.0,
            min_seconds=min(seconds) if seconds else 0,
            max_seconds=max(seconds) if seconds else 0,
            fairness_counts=dict(Counter(s.fairness for s in eligible)),
        )

    def export_report_csv(self) -> str:
        return self.export_service.export_to_csv(self.generate_report())

    @staticmethod
    def _classify_fairness(delta_seconds: int) -> str:
        if delta_seconds < -FAIRNESS_THRESHOLD_SECONDS:
            return "under"
        if delta_seconds > FAIRNESS_THRESHOLD_SECONDS:
            return "over"
        return "ok"
