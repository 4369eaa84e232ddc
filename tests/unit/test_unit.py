"""
Unit tests for the Unit entity.
"""
import pytest

from tactics.core.data import Vector2, Team
from tactics.core.exceptions import InvalidArgumentError
from tactics.game.entities.skills import SkillData
from tactics.game.entities.unit import Unit, MovementStats, CombatStats


class TestUnitCreation:
    """Test unit construction and stat access."""

    def test_defaults(self):
        unit = Unit("Knight", Team.PLAYER)

        assert unit.movement_points == 4
        assert unit.jump_height == 1
        assert unit.fall_height == 10
        assert unit.hp_current == unit.hp_max == 20
        assert unit.current_tile is None
        assert unit.unit_id.startswith("knight_")

    def test_explicit_stats(self):
        unit = Unit(
            "Scout", Team.ENEMY,
            MovementStats(movement_points=6, jump_height=3, fall_height=5),
            CombatStats(hp_max=12, attack=7, defense=1),
            unit_id="scout-1",
        )

        assert (unit.movement_points, unit.jump_height, unit.fall_height) == (6, 3, 5)
        assert (unit.hp_max, unit.attack, unit.defense) == (12, 7, 1)
        assert unit.unit_id == "scout-1"

    @pytest.mark.parametrize("stats", [
        {"movement_points": -1},
        {"jump_height": -1},
        {"fall_height": -2},
    ])
    def test_negative_movement_stats_rejected(self, stats):
        with pytest.raises(InvalidArgumentError):
            MovementStats(**stats)

    def test_position_requires_tile(self):
        with pytest.raises(InvalidArgumentError):
            _ = Unit("Ghost", Team.PLAYER).position

    def test_position_follows_tile(self, small_game_map):
        unit = Unit("Knight", Team.PLAYER)
        small_game_map.place_unit(unit, Vector2(3, 1))

        assert unit.position == Vector2(3, 1)


class TestTurnFlags:
    """Test per-turn flag handling."""

    def test_end_turn_is_idempotent(self):
        unit = Unit("Knight", Team.PLAYER)

        assert unit.end_turn() is True
        assert unit.turn_ended
        assert unit.end_turn() is False
        assert unit.turn_ended

    def test_reset_turn_flags(self):
        unit = Unit("Knight", Team.PLAYER)
        unit.turn_ended = unit.movement_done = unit.action_done = True

        unit.reset_turn_flags()

        assert not (unit.turn_ended or unit.movement_done or unit.action_done)

    def test_remaining_actions(self):
        unit = Unit("Knight", Team.PLAYER)
        assert unit.has_remaining_actions

        unit.movement_done = True
        assert unit.has_remaining_actions

        unit.action_done = True
        assert not unit.has_remaining_actions


class TestCombat:
    """Test HP changes and skill lookup."""

    def test_damage_stops_at_zero(self):
        unit = Unit("Knight", Team.PLAYER, combat=CombatStats(hp_max=10))

        assert unit.take_damage(4) == 4
        assert unit.take_damage(50) == 6
        assert unit.hp_current == 0
        assert not unit.is_alive

    def test_heal_stops_at_max(self):
        unit = Unit("Knight", Team.PLAYER, combat=CombatStats(hp_max=10))
        unit.take_damage(3)

        assert unit.heal(10) == 3
        assert unit.hp_current == 10

    def test_get_skill_by_index(self):
        slash = SkillData("Slash")
        unit = Unit("Knight", Team.PLAYER, skills=[slash])

        assert unit.get_skill_by_index(0) is slash
        with pytest.raises(InvalidArgumentError):
            unit.get_skill_by_index(1)
        with pytest.raises(InvalidArgumentError):
            unit.get_skill_by_index(-1)
