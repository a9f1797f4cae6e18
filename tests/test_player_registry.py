"""
Unit tests for PlayerRegistry.

Tests roster creation, role partitions and the no-op behaviour of every
mutator for unknown ids.
"""
import unittest

from rotation_timer.services.player_registry import PlayerRegistry, normalize_name
from rotation_timer.utils import DEFAULT_PLAYER_NAMES, PLACEHOLDER_NAME


class TestPlayerRegistry(unittest.TestCase):
    """Test cases for PlayerRegistry."""

    def setUp(self) -> None:
        self.registry = PlayerRegistry.from_names(["Alfie", "Amos", "Asher", PLACEHOLDER_NAME])

    def test_ids_follow_name_order(self) -> None:
        self.assertEqual([p.id for p in self.registry], [1, 2, 3, 4])
        self.assertEqual(self.registry.names(), ["Alfie", "Amos", "Asher", PLACEHOLDER_NAME])

    def test_placeholder_excluded_by_convention(self) -> None:
        self.assertEqual(self.registry.excluded_ids(), {4})

        default = PlayerRegistry.from_names(DEFAULT_PLAYER_NAMES)
        self.assertEqual(len(default), 10)
        self.assertEqual(default.excluded_ids(), {10})

    def test_persisted_exclusions_override_convention(self) -> None:
        registry = PlayerRegistry.from_names(["Alfie", "Amos", PLACEHOLDER_NAME], excluded_ids={2})
        self.assertEqual(registry.excluded_ids(), {2})
        self.assertFalse(registry.get(3).excluded)

    def test_blank_names_become_placeholder(self) -> None:
        self.assertEqual(normalize_name("   "), PLACEHOLDER_NAME)
        self.assertEqual(normalize_name(None), PLACEHOLDER_NAME)
        self.assertEqual(normalize_name("  Ollie "), "Ollie")

        registry = PlayerRegistry.from_names(["Alfie", ""])
        self.assertEqual(registry.get(2).name, PLACEHOLDER_NAME)

    def test_activate_and_deactivate(self) -> None:
        self.assertTrue(self.registry.activate(1))
        self.assertFalse(self.registry.activate(1))
        self.assertEqual([p.id for p in self.registry.active_players()], [1])

        self.assertTrue(self.registry.deactivate(1))
        self.assertFalse(self.registry.deactivate(1))
        self.assertEqual(self.registry.active_players(), [])

    def test_excluded_player_cannot_be_activated(self) -> None:
        self.assertFalse(self.registry.activate(4))
        self.assertFalse(self.registry.get(4).is_active)

    def test_excluding_takes_player_off_the_field(self) -> None:
        self.registry.activate(2)
        self.assertTrue(self.registry.set_excluded(2, True))

        player = self.registry.get(2)
        self.assertTrue(player.excluded)
        self.assertFalse(player.is_active)

        self.registry.set_excluded(2, False)
        self.assertFalse(player.excluded)
        self.assertFalse(player.is_active)

    def test_cycle_sit_out_wraps_after_four(self) -> None:
        values = [self.registry.cycle_sit_out(1) for _ in range(5)]
        self.assertEqual(values, [1, 2, 3, 4, 0])

    def test_rename(self) -> None:
        self.assertEqual(self.registry.rename(1, " Bentis "), "Bentis")
        self.assertEqual(self.registry.rename(1, ""), PLACEHOLDER_NAME)

    def test_unknown_ids_are_no_ops(self) -> None:
        before = [p.to_dict() for p in self.registry]

        self.assertFalse(self.registry.activate(99))
        self.assertFalse(self.registry.deactivate(99))
        self.assertFalse(self.registry.set_excluded(99, True))
        self.assertIsNone(self.registry.cycle_sit_out(99))
        self.assertIsNone(self.registry.rename(99, "Nobody"))
        self.assertIsNone(self.registry.get(99))

        self.assertEqual([p.to_dict() for p in self.registry], before)

    def test_tick_playtime_only_for_active(self) -> None:
        self.registry.activate(1)
        self.registry.activate(3)
        for _ in range(3):
            self.registry.tick_playtime()

        seconds = {p.id: p.play_time_seconds for p in self.registry}
        self.assertEqual(seconds, {1: 3, 2: 0, 3: 3, 4: 0})

    def test_partitions(self) -> None:
        self.registry.activate(1)
        self.registry.cycle_sit_out(2)

        self.assertEqual([p.id for p in self.registry.active_players()], [1])
        self.assertEqual([p.id for p in self.registry.reserve_players()], [2, 3])
        self.assertEqual([p.id for p in self.registry.eligible_reserves()], [3])
        self.assertEqual([p.id for p in self.registry.excluded_players()], [4])

    def test_decrement_sit_outs_floors_at_zero(self) -> None:
        self.registry.cycle_sit_out(1)
        self.registry.cycle_sit_out(1)
        self.registry.decrement_sit_outs()
        self.registry.decrement_sit_outs()
        self.registry.decrement_sit_outs()

        self.assertEqual(self.registry.get(1).sit_out_rounds, 0)
        self.assertEqual(self.registry.get(2).sit_out_rounds, 0)


if __name__ == "__main__":
    unittest.main()
