"""
Game session for the Rotation Timer application.

A :class:`GameSession` owns everything one game needs: the player registry,
the round/game state, the wall clock, the cooldown latch and the last
computed substitution plan. The UI layers call its public methods; a tick
source calls :meth:`GameSession.tick` (or :meth:`GameSession.catch_up`) once
per second.

Every public method runs under one re-entrant lock, so a tick can never
interleave with a user action even when the tick source is a thread.
"""
import functools
import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models import GamePhase, GameState, Player, PlayerRole, SubstitutionPlan
from ..utils import (
    ACTIVE_SLOT_COUNT, GAME_TIME_OPTIONS, MAX_SUBSTITUTIONS_PER_ROUND,
    MIN_SUBSTITUTIONS_PER_ROUND, ROUND_TIME_OPTIONS, SUB_NOTIFICATION_THRESHOLD,
    SUBSTITUTION_COOLDOWN_SECONDS, fmt_mmss,
)
from .notification_service import (
    AudioCue, NullAudioCue, NullNotifier, SubstitutionNotifier, notify_safely,
)
from .persistence_service import MemoryRosterStore, RosterStore
from .player_registry import PlayerRegistry
from .rotation_planner import compute_plan, plan_changed
from .substitution_executor import execute_substitution
from .timer_service import CooldownLatch, GameClock

logger = logging.getLogger(__name__)


def synchronized(method):
    """Run a session method under the session lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class GameSession:
    """
    One game of rotations.

    Args:
        store: Roster persistence; defaults to an in-memory store
        notifier: Near-expiry notification hook
        audio: Substitution sound hook
        active_slot_count: On-field slots used for the fair-share target
    """

    def __init__(
        self,
        store: Optional[RosterStore] = None,
        notifier: Optional[SubstitutionNotifier] = None,
        audio: Optional[AudioCue] = None,
        active_slot_count: int = ACTIVE_SLOT_COUNT,
    ):
        self._lock = threading.RLock()
        self.store = store or MemoryRosterStore()
        self.notifier = notifier or NullNotifier()
        self.audio = audio or NullAudioCue()
        self.active_slot_count = active_slot_count

        self.state = GameState()
        self.clock = GameClock()
        self.cooldown = CooldownLatch()
        self.registry = self._load_registry()
        self.plan = SubstitutionPlan()
        self._plan_changed = True

    # ---------- Game flow ---------- #

    @synchronized
    def start(self) -> bool:
        """
        Start the game from Idle.

        With nobody on the field, the first eligible players in roster order
        are put on, up to the number of on-field slots.

        Returns:
            True if the game started
        """
        if self.state.phase is not GamePhase.IDLE:
            return False

        if not self.registry.active_players():
            for player in self.registry.eligible_reserves()[: self.active_slot_count]:
                self.registry.activate(player.id)

        self.state.phase = GamePhase.RUNNING
        self.state.notification_sent = False
        self.clock.start()
        self.recompute_plan()
        logger.info("Game started with %d active players", len(self.registry.active_players()))
        return True

    @synchronized
    def toggle_pause(self) -> Optional[GamePhase]:
        """
        Pause a running game or resume a paused one.

        Returns:
            The new phase, or None when neither Running nor Paused
        """
        if self.state.phase is GamePhase.RUNNING:
            self.clock.pause()
            self.state.phase = GamePhase.PAUSED
        elif self.state.phase is GamePhase.PAUSED:
            self.clock.resume()
            self.state.phase = GamePhase.RUNNING
        else:
            return None
        logger.info("Game %s at %ss", self.state.phase.value, self.state.game_elapsed_seconds)
        return self.state.phase

    @synchronized
    def toggle_game(self) -> GamePhase:
        """Start button: start when Idle, otherwise pause/resume."""
        if self.state.phase is GamePhase.IDLE:
            self.start()
        else:
            self.toggle_pause()
        return self.state.phase

    @synchronized
    def tick(self) -> None:
        """Advance the game by one second. Ignored unless Running."""
        state = self.state
        if state.phase is not GamePhase.RUNNING:
            return

        state.game_elapsed_seconds += 1
        state.round_time_left_seconds = max(0, state.round_time_left_seconds - 1)
        self.registry.tick_playtime()

        if not self.cooldown.tick():
            self.recompute_plan()

        if (
            0 < state.round_time_left_seconds <= SUB_NOTIFICATION_THRESHOLD
            and not state.notification_sent
        ):
            notify_safely(self.notifier, self.plan.players_in, self.plan.players_out)
            state.notification_sent = True

        if state.game_elapsed_seconds >= state.game_duration_limit_seconds:
            self._end_game()
            return

        if state.round_time_left_seconds <= 0:
            self._execute_plan()

    @synchronized
    def catch_up(self) -> int:
        """
        Replay ticks until the game clock matches the wall clock.

        Returns:
            Number of ticks applied
        """
        ticks = 0
        while (
            self.state.phase is GamePhase.RUNNING
            and self.state.game_elapsed_seconds < self.clock.elapsed_seconds()
        ):
            self.tick()
            ticks += 1
        return ticks

    @synchronized
    def reset_round(self) -> bool:
        """
        Restart the current round without counting its partial time.

        The part of the round already played is taken back off every active
        player's playtime. Ignored unless Running.
        """
        if self.state.phase is not GamePhase.RUNNING:
            return False

        played = self.state.round_elapsed_seconds
        for player in self.registry.active_players():
            player.play_time_seconds = max(0, player.play_time_seconds - played)

        self.state.reset_round_clock()
        self.recompute_plan()
        logger.info("Round reset, %ss removed from active players", played)
        return True

    @synchronized
    def reset_game(self) -> None:
        """Return to a fresh Idle session, reloading names from the store."""
        self.clock.stop()
        self.cooldown.clear()
        self.state = GameState()
        self.registry = self._load_registry()
        self.plan = SubstitutionPlan()
        self._plan_changed = True
        logger.info("Game reset")

    # ---------- Configuration ---------- #

    @synchronized
    def set_round_duration(self, seconds: int) -> bool:
        """Set the round length to one of ROUND_TIME_OPTIONS (not while Running)."""
        if self.state.is_running or seconds not in ROUND_TIME_OPTIONS:
            return False
        self.state.round_duration_seconds = seconds
        self.state.reset_round_clock()
        self.recompute_plan()
        return True

    @synchronized
    def cycle_round_duration(self) -> int:
        next_value = _next_option(ROUND_TIME_OPTIONS, self.state.round_duration_seconds)
        self.set_round_duration(next_value)
        return self.state.round_duration_seconds

    @synchronized
    def set_game_duration_limit(self, seconds: int) -> bool:
        """Set the game length; only GAME_TIME_OPTIONS minutes are accepted."""
        options = [minutes * 60 for minutes in GAME_TIME_OPTIONS]
        if self.state.is_running or seconds not in options:
            return False
        self.state.game_duration_limit_seconds = seconds
        return True

    @synchronized
    def cycle_game_duration_limit(self) -> int:
        options = [minutes * 60 for minutes in GAME_TIME_OPTIONS]
        next_value = _next_option(options, self.state.game_duration_limit_seconds)
        self.set_game_duration_limit(next_value)
        return self.state.game_duration_limit_seconds

    @synchronized
    def set_substitutions_per_round(self, count: int) -> bool:
        if not MIN_SUBSTITUTIONS_PER_ROUND <= count <= MAX_SUBSTITUTIONS_PER_ROUND:
            return False
        self.state.substitutions_per_round = count
        self.recompute_plan()
        return True

    @synchronized
    def cycle_substitutions_per_round(self) -> int:
        current = self.state.substitutions_per_round
        if current >= MAX_SUBSTITUTIONS_PER_ROUND:
            next_value = MIN_SUBSTITUTIONS_PER_ROUND
        else:
            next_value = current + 1
        self.set_substitutions_per_round(next_value)
        return self.state.substitutions_per_round

    # ---------- Player actions ---------- #

    @synchronized
    def select_player(self, player_id: int, from_role: Union[str, PlayerRole]) -> bool:
        """
        Move a player between the field and the bench by hand.

        Only allowed while the clock is not running. Selecting a reserve
        brings them on and starts their stint at the current game clock;
        selecting an active player takes them off.

        Args:
            player_id: Player to move
            from_role: The list the player was picked from

        Returns:
            True if the player moved
        """
        if self.state.is_running:
            return False
        try:
            role = PlayerRole(from_role)
        except ValueError:
            return False

        if role is PlayerRole.RESERVE:
            changed = self.registry.activate(player_id)
            if changed:
                # A hand substitution starts a new stint
                player = self.registry.get(player_id)
                player.last_sub_time = self.state.game_elapsed_seconds
                player.just_subbed = False
        elif role is PlayerRole.ACTIVE:
            changed = self.registry.deactivate(player_id)
        else:
            changed = False

        self.recompute_plan()
        return changed

    @synchronized
    def set_excluded(self, player_id: int, excluded: bool) -> bool:
        if not self.registry.set_excluded(player_id, excluded):
            return False
        self._save_exclusions()
        self.recompute_plan()
        return True

    @synchronized
    def toggle_exclusion(self, player_id: int) -> Optional[bool]:
        """
        Flip a player's exclusion.

        Returns:
            The new excluded flag, or None for an unknown id
        """
        player = self.registry.get(player_id)
        if player is None:
            return None
        self.set_excluded(player_id, not player.excluded)
        return player.excluded

    @synchronized
    def cycle_sit_out(self, player_id: int) -> Optional[int]:
        """Cycle sit-out rounds for a player off the field."""
        player = self.registry.get(player_id)
        if player is None or player.is_active:
            return None
        rounds = self.registry.cycle_sit_out(player_id)
        self.recompute_plan()
        return rounds

    @synchronized
    def rename(self, player_id: int, text: Optional[str]) -> Optional[str]:
        name = self.registry.rename(player_id, text)
        if name is not None:
            self._save_names()
        return name

    # ---------- Planning ---------- #

    @synchronized
    def recompute_plan(self) -> SubstitutionPlan:
        """Recompute the plan and record whether it changed."""
        new_plan = compute_plan(
            self.registry.active_players(),
            self.registry.eligible_reserves(),
            self.state.game_elapsed_seconds,
            self.state.round_duration_seconds,
            self.state.substitutions_per_round,
            len(self.registry),
            self.active_slot_count,
        )
        self._plan_changed = plan_changed(self.plan, new_plan)
        if self._plan_changed:
            logger.debug("Plan changed: ON %s OFF %s", new_plan.in_ids, new_plan.out_ids)
        self.plan = new_plan
        return new_plan

    @property
    def plan_changed(self) -> bool:
        """Whether the last recomputation produced a different plan."""
        return self._plan_changed

    # ---------- Observables ---------- #

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def round_time_display(self) -> str:
        return fmt_mmss(self.state.round_time_left_seconds)

    @property
    def game_time_remaining_display(self) -> str:
        return fmt_mmss(self.state.game_time_remaining_seconds)

    def active_players(self) -> List[Player]:
        return self.registry.active_players()

    def reserve_players(self) -> List[Player]:
        return self.registry.reserve_players()

    def excluded_players(self) -> List[Player]:
        return self.registry.excluded_players()

    @synchronized
    def playtime_view(self) -> Tuple[int, List[Player]]:
        """
        Consistent copy of the clock and roster for reporting.

        Returns:
            (game elapsed seconds, detached copies of every player)
        """
        players = [replace(p) for p in self.registry.all_players()]
        return self.state.game_elapsed_seconds, players

    @synchronized
    def snapshot(self) -> Dict[str, Any]:
        """
        Build a JSON-ready view of the session for the UI layers.

        UI flags (preview visibility, warning, sit-out minutes) are derived
        here rather than stored on the players.
        """
        state = self.state
        in_game = state.phase in (GamePhase.RUNNING, GamePhase.PAUSED)
        warning = in_game and state.round_time_left_seconds <= SUB_NOTIFICATION_THRESHOLD

        players = []
        for player in self._display_order():
            data = player.to_dict()
            data["play_time_display"] = fmt_mmss(player.play_time_seconds)
            data["sit_out_minutes"] = round(
                player.sit_out_rounds * state.round_duration_seconds / 60
            )
            players.append(data)

        return {
            "state": state.to_json(),
            "phase": state.phase.value,
            "round_time_display": self.round_time_display,
            "game_time_remaining_display": self.game_time_remaining_display,
            "round_minutes": state.round_duration_seconds // 60,
            "game_limit_minutes": state.game_duration_limit_seconds // 60,
            "active_count": len(self.registry.active_players()),
            "reserve_count": len(self.registry.reserve_players()),
            "cooldown_seconds": self.cooldown.remaining_seconds,
            "plan": self.plan.to_dict(),
            "plan_changed": self._plan_changed,
            "show_preview": in_game and bool(self.plan.players_in),
            "warning": warning,
            "players": players,
        }

    # ---------- Internal helpers ---------- #

    def _display_order(self) -> List[Player]:
        """Active first, then reserves, then excluded players."""
        rank = {PlayerRole.ACTIVE: 0, PlayerRole.RESERVE: 1, PlayerRole.EXCLUDED: 2}
        return sorted(self.registry.all_players(), key=lambda p: rank[p.role])

    def _load_registry(self) -> PlayerRegistry:
        try:
            names = self.store.load_names()
            excluded_ids = self.store.load_excluded_ids()
        except Exception:
            logger.warning("Roster store failed to load, using defaults", exc_info=True)
            names, excluded_ids = MemoryRosterStore().load_names(), None
        return PlayerRegistry.from_names(names, excluded_ids)

    def _save_names(self) -> None:
        try:
            self.store.save_names(self.registry.names())
        except Exception:
            logger.warning("Could not save player names", exc_info=True)

    def _save_exclusions(self) -> None:
        try:
            self.store.save_excluded_ids(self.registry.excluded_ids())
        except Exception:
            logger.warning("Could not save excluded players", exc_info=True)

    def _execute_plan(self) -> None:
        execute_substitution(self.plan, self.registry, self.state, self.audio)
        self.plan = SubstitutionPlan()
        self._plan_changed = True
        self.cooldown.arm(SUBSTITUTION_COOLDOWN_SECONDS)

    def _end_game(self) -> None:
        self.clock.pause()
        self.state.phase = GamePhase.ENDED
        logger.info("Game ended after %ss", self.state.game_elapsed_seconds)


def _next_option(options: List[int], current: int) -> int:
    """Next value in a cyclic option list; unknown values restart the cycle."""
    try:
        index = options.index(current)
    except ValueError:
        index = -1
    return options[(index + 1) % len(options)]
