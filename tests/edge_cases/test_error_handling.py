"""
Edge case tests for error handling.

Bad player input is logged and absorbed by the turn states; broken
configuration and broken invariants raise.
"""
import pytest

from tactics.core.data import Vector2, Team
from tactics.core.exceptions import (
    TacticsError, GridConfigurationError, InvalidArgumentError, InvariantViolationError,
)
from tactics.core.input import InputEvent
from tactics.game.controller import BattleController
from tactics.game.entities.skills import SkillData
from tactics.game.entities.unit import Unit
from tactics.game.input_dispatcher import InputDispatcher
from tactics.game.log_manager import LogCategory
from tactics.game.map import GameMap
from tactics.game.menu import MenuOption
from tactics.game.pathfinding import Pathfinder, PathResult
from tactics.game.states import TacticalStateId
from tests.test_utils import MapTestBuilder, unit_at


class TestExceptionHierarchy:
    """Test that every error shares the base class."""

    @pytest.mark.parametrize("error_class", [
        GridConfigurationError, InvalidArgumentError, InvariantViolationError,
    ])
    def test_subclasses(self, error_class):
        assert issubclass(error_class, TacticsError)

    def test_invalid_argument_is_value_error(self):
        assert issubclass(InvalidArgumentError, ValueError)

    def test_configuration_error_keeps_source(self):
        error = GridConfigurationError("bad map", "maps/broken")

        assert error.source == "maps/broken"
        assert "maps/broken" in str(error)


class TestGridConfiguration:
    """Test grid construction errors."""

    def test_negative_size(self):
        with pytest.raises(ValueError):
            GameMap(-1, 3)

    def test_empty_grid_is_allowed(self):
        game_map = GameMap(0, 0)
        assert list(game_map.iter_tiles()) == []

    @pytest.mark.parametrize("heights", [
        [],
        [[]],
        [[0, 0], [0]],
        [[0, "high"]],
    ])
    def test_bad_height_rows(self, heights):
        with pytest.raises(GridConfigurationError):
            GameMap.from_rows(heights)

    def test_terrain_size_mismatch(self):
        with pytest.raises(GridConfigurationError):
            GameMap.from_rows([[0, 0]], [["g"]])

    def test_uninitialized_grid(self):
        game_map = GameMap(2, 2)
        game_map.tiles = None

        with pytest.raises(InvariantViolationError):
            game_map.tile_at(Vector2(0, 0))


class TestInvalidInputIsAbsorbed:
    """Out-of-range indices are logged and ignored."""

    @pytest.fixture
    def battle(self, event_manager, fast_config, log_manager):
        game_map = (MapTestBuilder(4, 4)
                    .with_unit("Knight", Team.PLAYER, 0, 0, skills=[SkillData("Slash")])
                    .with_unit("Peasant", Team.PLAYER, 1, 0)
                    .with_unit("Raider", Team.ENEMY, 3, 3)
                    .build())
        controller = BattleController(game_map, event_manager, fast_config)
        controller.start_battle(Team.PLAYER)
        return controller, InputDispatcher(controller)

    def warnings(self, log_manager):
        return log_manager.get_messages(categories={LogCategory.WARNING})

    def test_bad_menu_index(self, battle, log_manager):
        controller, dispatcher = battle
        dispatcher.dispatch(InputEvent.confirm())

        dispatcher.dispatch(InputEvent.button(9))

        assert controller.current_state_id == TacticalStateId.MAIN_MENU
        assert any("does not exist" in m.text for m in self.warnings(log_manager))

    def test_bad_skill_index(self, battle, log_manager):
        controller, dispatcher = battle
        dispatcher.dispatch(InputEvent.confirm())
        dispatcher.dispatch(InputEvent.button(MenuOption.SKILLS.value))

        dispatcher.dispatch(InputEvent.button(5))

        assert controller.current_state_id == TacticalStateId.SKILL_MENU
        assert controller.selected_skill is None
        assert self.warnings(log_manager)

    def test_skills_refused_without_skills(self, battle):
        controller, dispatcher = battle
        dispatcher.dispatch(InputEvent.tile_clicked(Vector2(0, 1)))

        dispatcher.dispatch(InputEvent.button(MenuOption.SKILLS.value))

        assert controller.current_state_id == TacticalStateId.MAIN_MENU

    def test_items_and_status_do_not_change_state(self, battle, log_manager):
        controller, dispatcher = battle
        dispatcher.dispatch(InputEvent.confirm())

        dispatcher.dispatch(InputEvent.button(MenuOption.ITEMS.value))
        dispatcher.dispatch(InputEvent.button(MenuOption.STATUS.value))

        assert controller.current_state_id == TacticalStateId.MAIN_MENU
        assert any("HP 20/20" in m.text for m in log_manager.get_messages())


class TestInvariantViolations:
    """Programming errors raise instead of being absorbed."""

    def test_path_from_wrong_tile(self, skirmish):
        knight = unit_at(skirmish.game_map, 0, 0)
        other_start = skirmish.game_map.get_tile(Vector2(2, 2))
        path = PathResult(other_start, (other_start,), (0,))

        with pytest.raises(InvariantViolationError):
            skirmish.move_unit_path(knight, path)

    def test_second_move_in_one_turn(self, skirmish):
        knight = unit_at(skirmish.game_map, 0, 0)
        knight.movement_done = True
        path = Pathfinder(skirmish.game_map).find_path(knight.current_tile, Vector2(1, 0), knight)

        with pytest.raises(InvariantViolationError):
            skirmish.move_unit_path(knight, path)

    def test_skill_without_selected_unit(self, skirmish):
        with pytest.raises(InvariantViolationError):
            skirmish.select_skill(SkillData("Slash"))

    def test_cursor_outside_grid(self, skirmish):
        with pytest.raises(InvalidArgumentError):
            skirmish.set_cursor(Vector2(10, 10))

    def test_move_unit_not_on_map(self, small_game_map):
        with pytest.raises(InvariantViolationError):
            small_game_map.move_unit(Unit("Ghost", Team.PLAYER), small_game_map.get_tile(Vector2(0, 0)))
