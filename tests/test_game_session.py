"""
Unit tests for GameSession.

Drives the session tick by tick through start, pause, notification,
substitution, cooldown, resets and configuration.
"""
import unittest
from unittest.mock import Mock, patch

from rotation_timer.models import GamePhase, GameState
from rotation_timer.services.game_session import GameSession
from rotation_timer.services.persistence_service import MemoryRosterStore
from rotation_timer.services.rotation_planner import must_sub_out


def ids(players):
    return [p.id for p in players]


class TestGameSession(unittest.TestCase):
    """Test cases for GameSession."""

    def setUp(self) -> None:
        self.store = MemoryRosterStore()
        self.notifier = Mock()
        self.audio = Mock()
        self.session = GameSession(store=self.store, notifier=self.notifier, audio=self.audio)

    def run_ticks(self, count: int) -> None:
        for _ in range(count):
            self.session.tick()

    # ---------- Start and pause ---------- #

    def test_initial_state(self) -> None:
        self.assertEqual(self.session.phase, GamePhase.IDLE)
        self.assertEqual(len(self.session.registry), 10)
        self.assertEqual(ids(self.session.excluded_players()), [10])
        self.assertEqual(self.session.round_time_display, "4:00")
        self.assertEqual(self.session.game_time_remaining_display, "40:00")

    def test_start_fills_the_field(self) -> None:
        self.assertTrue(self.session.start())

        self.assertEqual(self.session.phase, GamePhase.RUNNING)
        self.assertEqual(ids(self.session.active_players()), [1, 2, 3, 4, 5])
        self.assertEqual(self.session.plan.in_ids, [6, 7])
        self.assertFalse(self.session.start())

    def test_start_keeps_hand_picked_players(self) -> None:
        self.session.select_player(7, "reserve")
        self.session.start()

        self.assertEqual(ids(self.session.active_players()), [7])

    def test_pause_freezes_everything(self) -> None:
        self.session.start()
        self.run_ticks(10)

        self.assertEqual(self.session.toggle_pause(), GamePhase.PAUSED)
        self.run_ticks(5)

        self.assertEqual(self.session.state.game_elapsed_seconds, 10)
        self.assertEqual(self.session.state.round_time_left_seconds, 230)
        self.assertTrue(all(p.play_time_seconds == 10 for p in self.session.active_players()))

        self.assertEqual(self.session.toggle_pause(), GamePhase.RUNNING)
        self.session.tick()
        self.assertEqual(self.session.state.game_elapsed_seconds, 11)

    def test_toggle_pause_when_idle(self) -> None:
        self.assertIsNone(self.session.toggle_pause())

    def test_toggle_game(self) -> None:
        self.assertEqual(self.session.toggle_game(), GamePhase.RUNNING)
        self.assertEqual(self.session.toggle_game(), GamePhase.PAUSED)
        self.assertEqual(self.session.toggle_game(), GamePhase.RUNNING)

    def test_tick_ignored_when_idle(self) -> None:
        self.session.tick()
        self.assertEqual(self.session.state, GameState())

    # ---------- Round expiry ---------- #

    def test_notification_fires_once_per_round(self) -> None:
        self.session.start()
        self.run_ticks(234)
        self.notifier.notify_upcoming_substitution.assert_not_called()

        self.session.tick()
        self.notifier.notify_upcoming_substitution.assert_called_once()
        players_in, players_out = self.notifier.notify_upcoming_substitution.call_args[0]
        self.assertEqual(ids(players_in), [6, 7])
        self.assertEqual(ids(players_out), [1, 2])
        self.assertTrue(self.session.state.notification_sent)

        self.run_ticks(4)
        self.notifier.notify_upcoming_substitution.assert_called_once()

    def test_substitution_at_round_expiry(self) -> None:
        self.session.cycle_sit_out(8)
        self.session.cycle_sit_out(9)
        self.session.start()

        self.run_ticks(240)

        state = self.session.state
        self.assertEqual(ids(self.session.active_players()), [3, 4, 5, 6, 7])
        self.assertTrue(self.session.registry.get(1).just_subbed)
        self.assertTrue(self.session.registry.get(2).just_subbed)
        self.assertEqual(self.session.registry.get(6).last_sub_time, 240)
        self.assertEqual(self.session.registry.get(8).sit_out_rounds, 0)
        self.assertEqual(self.session.registry.get(9).sit_out_rounds, 0)
        self.assertEqual(state.round_time_left_seconds, 240)
        self.assertFalse(state.notification_sent)
        self.audio.play_substitution_sound.assert_called_once_with()

        active = set(ids(self.session.active_players()))
        reserves = set(ids(self.session.reserve_players()))
        self.assertFalse(active & reserves)
        self.assertEqual(active | reserves, set(range(1, 10)))

    def test_cooldown_holds_plan_after_substitution(self) -> None:
        self.session.start()
        self.run_ticks(240)

        self.assertTrue(self.session.plan.is_empty)
        self.assertTrue(self.session.plan_changed)

        self.run_ticks(5)
        self.assertTrue(self.session.plan.is_empty)
        self.assertEqual(self.session.snapshot()["cooldown_seconds"], 0)

        self.session.tick()
        self.assertFalse(self.session.plan.is_empty)

    def test_plan_unchanged_between_ticks(self) -> None:
        self.session.start()
        self.session.tick()

        self.assertFalse(self.session.plan_changed)

    def test_notification_still_fires_on_final_tick(self) -> None:
        self.session.start()
        self.session.state.game_elapsed_seconds = 2399
        self.session.state.round_time_left_seconds = 6

        self.session.tick()

        self.assertEqual(self.session.phase, GamePhase.ENDED)
        self.notifier.notify_upcoming_substitution.assert_called_once()

    def test_playtime_view_is_detached(self) -> None:
        self.session.start()
        self.run_ticks(3)

        elapsed, players = self.session.playtime_view()
        self.run_ticks(2)

        self.assertEqual(elapsed, 3)
        self.assertEqual(len(players), 10)
        self.assertEqual(players[0].play_time_seconds, 3)
        self.assertEqual(self.session.registry.get(1).play_time_seconds, 5)

    def test_game_ends_at_limit(self) -> None:
        self.session.set_game_duration_limit(1200)
        self.session.start()
        self.run_ticks(1200)

        self.assertEqual(self.session.phase, GamePhase.ENDED)
        self.assertEqual(self.session.game_time_remaining_display, "0:00")

        self.session.tick()
        self.assertEqual(self.session.state.game_elapsed_seconds, 1200)
        self.assertIsNone(self.session.toggle_pause())

    def test_failing_notifier_does_not_stop_the_game(self) -> None:
        self.notifier.notify_upcoming_substitution.side_effect = RuntimeError("boom")
        self.session.start()

        with self.assertLogs("rotation_timer.services.notification_service", level="WARNING"):
            self.run_ticks(235)
        self.run_ticks(5)

        self.assertEqual(ids(self.session.active_players()), [3, 4, 5, 6, 7])

    def test_catch_up_follows_wall_clock(self) -> None:
        with patch("rotation_timer.services.timer_service.now_ts", return_value=1000):
            self.session.start()
        with patch("rotation_timer.services.timer_service.now_ts", return_value=1003):
            self.assertEqual(self.session.catch_up(), 3)
            self.assertEqual(self.session.catch_up(), 0)

        self.assertEqual(self.session.state.game_elapsed_seconds, 3)

    # ---------- Resets ---------- #

    def test_reset_round_takes_back_partial_round(self) -> None:
        self.session.start()
        self.run_ticks(40)

        self.assertTrue(self.session.reset_round())

        self.assertTrue(all(p.play_time_seconds == 0 for p in self.session.active_players()))
        self.assertEqual(self.session.state.round_time_left_seconds, 240)
        self.assertEqual(self.session.state.game_elapsed_seconds, 40)

    def test_reset_round_only_while_running(self) -> None:
        self.assertFalse(self.session.reset_round())
        self.session.start()
        self.session.toggle_pause()
        self.assertFalse(self.session.reset_round())

    def test_reset_game_keeps_persisted_roster(self) -> None:
        self.session.rename(1, "Zed")
        self.session.set_excluded(2, True)
        self.session.start()
        self.run_ticks(30)

        self.session.reset_game()

        self.assertEqual(self.session.state, GameState())
        self.assertTrue(self.session.plan.is_empty)
        self.assertEqual(self.session.registry.get(1).name, "Zed")
        self.assertEqual(self.session.registry.excluded_ids(), {2, 10})
        self.assertEqual(self.session.active_players(), [])
        self.assertTrue(all(p.play_time_seconds == 0 for p in self.session.registry))

    # ---------- Configuration ---------- #

    def test_round_duration(self) -> None:
        self.assertEqual(self.session.cycle_round_duration(), 300)
        self.assertEqual(self.session.state.round_time_left_seconds, 300)
        self.assertFalse(self.session.set_round_duration(250))

        self.assertTrue(self.session.set_round_duration(600))
        self.assertEqual(self.session.cycle_round_duration(), 180)

        self.session.start()
        self.assertFalse(self.session.set_round_duration(240))
        self.assertEqual(self.session.cycle_round_duration(), 180)

    def test_game_duration_limit(self) -> None:
        self.assertEqual(self.session.cycle_game_duration_limit(), 2700)
        self.assertTrue(self.session.set_game_duration_limit(1200))
        self.assertFalse(self.session.set_game_duration_limit(1000))

        self.session.start()
        self.assertFalse(self.session.set_game_duration_limit(3600))

    def test_substitutions_per_round(self) -> None:
        values = [self.session.cycle_substitutions_per_round() for _ in range(3)]
        self.assertEqual(values, [3, 4, 1])
        self.assertFalse(self.session.set_substitutions_per_round(0))
        self.assertFalse(self.session.set_substitutions_per_round(5))

        self.session.start()
        self.assertTrue(self.session.set_substitutions_per_round(3))
        self.assertEqual(len(self.session.plan), 3)

    # ---------- Player actions ---------- #

    def test_select_player(self) -> None:
        self.assertTrue(self.session.select_player(6, "reserve"))
        self.assertTrue(self.session.registry.get(6).is_active)
        self.assertTrue(self.session.select_player(6, "active"))
        self.assertFalse(self.session.registry.get(6).is_active)

        self.assertFalse(self.session.select_player(10, "reserve"))
        self.assertFalse(self.session.select_player(6, "bench"))
        self.assertFalse(self.session.select_player(99, "reserve"))

    def test_hand_substitution_starts_new_stint(self) -> None:
        session = GameSession(store=MemoryRosterStore(names=["A", "B", "C", "D", "E", "F"]))
        for _ in range(4):
            session.cycle_sit_out(6)
        session.start()
        for _ in range(730):
            session.tick()
        session.toggle_pause()

        self.assertTrue(session.select_player(1, "active"))
        self.assertTrue(session.select_player(6, "reserve"))

        player = session.registry.get(6)
        self.assertEqual(player.last_sub_time, 730)
        self.assertFalse(player.just_subbed)
        self.assertEqual(ids(must_sub_out(session.active_players(), 730, 240)), [2, 3, 4, 5])
        self.assertNotIn(6, session.plan.out_ids)
        self.assertEqual(session.plan.in_ids, [1])

    def test_select_player_blocked_while_running(self) -> None:
        self.session.start()
        self.assertFalse(self.session.select_player(6, "reserve"))

        self.session.toggle_pause()
        self.assertTrue(self.session.select_player(6, "reserve"))

    def test_exclusion_updates_plan_and_store(self) -> None:
        self.session.start()
        self.assertIn(6, self.session.plan.in_ids)

        self.assertTrue(self.session.toggle_exclusion(6))

        self.assertNotIn(6, self.session.plan.in_ids)
        self.assertEqual(self.store.load_excluded_ids(), {6, 10})

        self.assertFalse(self.session.toggle_exclusion(6))
        self.assertIsNone(self.session.toggle_exclusion(99))

    def test_excluding_active_player_takes_them_off(self) -> None:
        self.session.start()
        self.session.set_excluded(1, True)

        self.assertNotIn(1, ids(self.session.active_players()))
        self.assertNotIn(1, self.session.plan.out_ids)

    def test_cycle_sit_out(self) -> None:
        self.assertEqual(self.session.cycle_sit_out(6), 1)
        self.session.start()

        self.assertNotIn(6, self.session.plan.in_ids)
        self.assertIsNone(self.session.cycle_sit_out(1))
        self.assertIsNone(self.session.cycle_sit_out(99))

    def test_rename_persists(self) -> None:
        self.assertEqual(self.session.rename(3, "  Zed "), "Zed")
        self.assertEqual(self.store.load_names()[2], "Zed")
        self.assertIsNone(self.session.rename(99, "Nobody"))

    def test_store_failure_is_logged(self) -> None:
        store = Mock()
        store.load_names.return_value = ["A", "B", "C"]
        store.load_excluded_ids.return_value = None
        store.save_names.side_effect = OSError("read-only")
        session = GameSession(store=store)

        with self.assertLogs("rotation_timer.services.game_session", level="WARNING"):
            self.assertEqual(session.rename(1, "Zed"), "Zed")

        self.assertEqual(session.registry.get(1).name, "Zed")

    def test_store_load_failure_uses_defaults(self) -> None:
        store = Mock()
        store.load_names.side_effect = OSError("gone")

        with self.assertLogs("rotation_timer.services.game_session", level="WARNING"):
            session = GameSession(store=store)

        self.assertEqual(len(session.registry), 10)

    # ---------- Snapshot ---------- #

    def test_snapshot(self) -> None:
        self.session.cycle_sit_out(9)
        self.session.start()
        self.run_ticks(236)

        snap = self.session.snapshot()

        self.assertEqual(snap["phase"], "running")
        self.assertEqual(snap["round_time_display"], "0:04")
        self.assertEqual(snap["active_count"], 5)
        self.assertEqual(snap["reserve_count"], 4)
        self.assertTrue(snap["warning"])
        self.assertTrue(snap["show_preview"])
        self.assertEqual([p["role"] for p in snap["players"]][:5], ["active"] * 5)
        self.assertEqual(snap["players"][-1]["role"], "excluded")

        sitting = next(p for p in snap["players"] if p["id"] == 9)
        self.assertEqual(sitting["sit_out_minutes"], 4)
        self.assertEqual(snap["players"][0]["play_time_display"], "3:56")


if __name__ == "__main__":
    unittest.main()
