"""
Web application module for the Rotation Timer.

This module contains the Flask server exposing the game session as a JSON
API. A background :class:`SessionTicker` drives the clock once per second,
and every request also catches the session up with the wall clock before
answering, so a stalled ticker never leaves the client with stale times.
"""
import logging
import threading
from dataclasses import asdict
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from ..services import EventQueue, GameSession, ServiceFactory
from ..utils import APP_TITLE

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for one web application instance.

    Owns the session, the event queue the browser drains for notifications
    and sounds, and the analytics service.
    """

    def __init__(self, data_file: Optional[str] = None):
        self.service_factory = ServiceFactory(data_file)
        self.events = EventQueue()
        self.session = self.service_factory.create_queued_session(self.events)
        self.analytics_service = self.service_factory.create_analytics_service(self.session)

    def sync(self) -> None:
        self.session.catch_up()


class SessionTicker(threading.Thread):
    """Daemon thread calling ``session.catch_up()`` every ``interval`` seconds."""

    def __init__(self, session: GameSession, interval: float = 1.0):
        super().__init__(name="session-ticker", daemon=True)
        self.session = session
        self.interval = interval
        self._stop_event = threading.Event()

    def run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.session.catch_up()
            except Exception:
                logger.exception("Session tick failed")

    def stop(self) -> None:
        self._stop_event.set()


def _error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def _int_field(data: Dict[str, Any], key: str) -> Optional[int]:
    """Read an optional integer field, raising ValueError on bad input."""
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer")
    return int(value)


def create_app(data_file: Optional[str] = None, app_state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        data_file: JSON file for persisted names/exclusions
        app_state: Pre-built state (tests); created from ``data_file`` otherwise

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    state = app_state or WebAppState(data_file)
    app.config["APP_STATE"] = state

    def _body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _state_response(**extra):
        payload = {"success": True}
        payload.update(extra)
        payload["game"] = state.session.snapshot()
        return jsonify(payload)

    @app.before_request
    def _catch_up():
        state.sync()

    # ==================== Game flow ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current session snapshot for the client to render."""
        return _state_response(title=APP_TITLE)

    @app.route("/api/game/start", methods=["POST"])
    def start_game():
        if not state.session.start():
            return _error("Game can only be started from idle")
        return _state_response(message="Game started")

    @app.route("/api/game/toggle", methods=["POST"])
    def toggle_game():
        phase = state.session.toggle_game()
        return _state_response(message=f"Game {phase.value}")

    @app.route("/api/game/pause", methods=["POST"])
    def pause_game():
        phase = state.session.toggle_pause()
        if phase is None:
            return _error("Game is not in progress")
        return _state_response(message=f"Game {phase.value}")

    @app.route("/api/game/reset", methods=["POST"])
    def reset_game():
        state.session.reset_game()
        state.events.drain()
        return _state_response(message="Game reset")

    @app.route("/api/game/reset-round", methods=["POST"])
    def reset_round():
        if not state.session.reset_round():
            return _error("Round can only be reset while the game is running")
        return _state_response(message="Round reset")

    # ==================== Configuration ==================== #

    @app.route("/api/config/round", methods=["POST"])
    def configure_round():
        """Set the round length in seconds, or cycle it when none is given."""
        try:
            seconds = _int_field(_body(), "seconds")
        except (TypeError, ValueError) as e:
            return _error(str(e))
        if seconds is None:
            state.session.cycle_round_duration()
        elif not state.session.set_round_duration(seconds):
            return _error("Round length not accepted")
        return _state_response()

    @app.route("/api/config/game-limit", methods=["POST"])
    def configure_game_limit():
        """Set the game length in minutes, or cycle it when none is given."""
        try:
            minutes = _int_field(_body(), "minutes")
        except (TypeError, ValueError) as e:
            return _error(str(e))
        if minutes is None:
            state.session.cycle_game_duration_limit()
        elif not state.session.set_game_duration_limit(minutes * 60):
            return _error("Game length not accepted")
        return _state_response()

    @app.route("/api/config/substitutions", methods=["POST"])
    def configure_substitutions():
        try:
            count = _int_field(_body(), "count")
        except (TypeError, ValueError) as e:
            return _error(str(e))
        if count is None:
            state.session.cycle_substitutions_per_round()
        elif not state.session.set_substitutions_per_round(count):
            return _error("Substitutions per round must be between 1 and 4")
        return _state_response()

    # ==================== Players ==================== #

    @app.route("/api/players/<int:player_id>/select", methods=["POST"])
    def select_player(player_id: int):
        if player_id not in state.session.registry:
            return _error("Player not found", 404)
        from_role = _body().get("from_role", "")
        moved = state.session.select_player(player_id, from_role)
        return _state_response(moved=moved)

    @app.route("/api/players/<int:player_id>/exclude", methods=["POST"])
    def toggle_exclusion(player_id: int):
        excluded = state.session.toggle_exclusion(player_id)
        if excluded is None:
            return _error("Player not found", 404)
        return _state_response(excluded=excluded)

    @app.route("/api/players/<int:player_id>/sit-out", methods=["POST"])
    def cycle_sit_out(player_id: int):
        if player_id not in state.session.registry:
            return _error("Player not found", 404)
        rounds = state.session.cycle_sit_out(player_id)
        if rounds is None:
            return _error("Players on the field cannot sit out")
        return _state_response(sit_out_rounds=rounds)

    @app.route("/api/players/<int:player_id>/rename", methods=["POST"])
    def rename_player(player_id: int):
        raw = _body().get("name")
        name = state.session.rename(player_id, raw if isinstance(raw, str) else None)
        if name is None:
            return _error("Player not found", 404)
        return _state_response(name=name)

    # ==================== Events & reports ==================== #

    @app.route("/api/events", methods=["GET"])
    def get_events():
        """Notifications and sound cues raised since the last poll."""
        return jsonify({"success": True, "events": state.events.drain()})

    @app.route("/api/report", methods=["GET"])
    def get_report():
        report = state.analytics_service.generate_report()
        return jsonify({
            "success": True,
            "report": {
                "generated_ts": report.generated_ts,
                "roster_size": report.roster_size,
                "eligible_count": report.eligible_count,
                "elapsed_seconds": report.elapsed_seconds,
                "target_seconds_per_player": report.target_seconds_per_player,
                "average_seconds": report.average_seconds,
                "min_seconds": report.min_seconds,
                "max_seconds": report.max_seconds,
                "fairness_counts": report.fairness_counts,
                "players": [asdict(summary) for summary in report.players],
            },
        })

    @app.route("/api/report/export", methods=["GET"])
    def export_report():
        csv_data = state.analytics_service.export_report_csv()
        return Response(
            csv_data,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=playtime_report.csv"},
        )

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122, data_file: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        data_file: JSON file for persisted names/exclusions
    """
    state = WebAppState(data_file)
    app = create_app(app_state=state)
    ticker = SessionTicker(state.session)
    ticker.start()
    try:
        app.run(host=host, port=port, debug=False)
    finally:
        ticker.stop()
