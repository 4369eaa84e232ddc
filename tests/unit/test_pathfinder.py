"""
Unit tests for the path search.

Covers reachability on flat and uneven maps, the jump-fall expansion rule,
path reconstruction and deterministic tie-breaking.
"""
import pytest

from tactics.core.data import Vector2, Team
from tactics.core.exceptions import InvalidArgumentError
from tactics.game.entities.unit import Unit, MovementStats
from tactics.game.map import GameMap
from tactics.game.pathfinding import Pathfinder, PathResult
from tests.test_utils import MapTestBuilder, positions_of, assert_path_is_consistent


def make_unit(movement_points=4, jump_height=1, fall_height=10, team=Team.PLAYER):
    return Unit("Mover", team, MovementStats(movement_points, jump_height, fall_height))


class TestReachableTiles:
    """Test the exhaustive reachability search."""

    def test_flat_map_manhattan_ball(self, flat_map, walker):
        """Every tile within the budget is reachable, the start included."""
        pathfinder = Pathfinder(flat_map)
        start = flat_map.get_tile(Vector2(0, 0))

        reachable = pathfinder.get_reachable_tiles(start, walker)

        assert positions_of(reachable) == {(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (2, 0)}

    def test_center_reaches_whole_small_map(self, flat_map, walker):
        pathfinder = Pathfinder(flat_map)
        reachable = pathfinder.get_reachable_tiles(Vector2(1, 1), walker)
        assert len(reachable) == 9

    def test_zero_movement_points(self, small_game_map):
        """A unit with no movement can only stay where it is."""
        unit = make_unit(movement_points=0)
        start = small_game_map.get_tile(Vector2(2, 2))

        reachable = Pathfinder(small_game_map).get_reachable_tiles(start, unit)

        assert reachable == {start}

    def test_search_is_repeatable(self, cliff_map):
        """Running the same query twice gives the same answer."""
        pathfinder = Pathfinder(cliff_map)
        unit = make_unit(movement_points=3, jump_height=2, fall_height=4)
        start = cliff_map.get_tile(Vector2(2, 1))

        first = pathfinder.get_reachable_tiles(start, unit)
        second = pathfinder.get_reachable_tiles(start, unit)

        assert first == second

    def test_occupied_tiles_block(self):
        game_map = (MapTestBuilder(3, 1)
                    .with_unit("Blocker", Team.ENEMY, 1, 0)
                    .build())
        unit = make_unit(movement_points=4)

        pathfinder = Pathfinder(game_map)
        occupied = game_map.get_tile(Vector2(0, 1))

        reachable = pathfinder.get_reachable_tiles(Vector2(0, 0), unit)

        assert positions_of(reachable) == {(0, 0)}
        assert occupied not in pathfinder.get_all_paths_from(Vector2(0, 0), unit)
        assert not pathfinder.find_path(Vector2(0, 0), occupied, unit).is_valid
        assert not pathfinder.find_path(Vector2(0, 0), Vector2(0, 2), unit).is_valid

    def test_water_blocks(self):
        game_map = MapTestBuilder.from_heights([[0, 0, 0]], [["g", "w", "g"]]).build()
        unit = make_unit(movement_points=5)

        reachable = Pathfinder(game_map).get_reachable_tiles(Vector2(0, 0), unit)

        assert positions_of(reachable) == {(0, 0)}

    def test_terrain_cost_is_charged(self):
        """Sand costs two points to enter."""
        game_map = MapTestBuilder.from_heights([[0, 0, 0]], [["g", "s", "g"]]).build()
        unit = make_unit(movement_points=2)

        reachable = Pathfinder(game_map).get_reachable_tiles(Vector2(0, 0), unit)

        assert positions_of(reachable) == {(0, 0), (0, 1)}

    def test_unknown_start_position_raises(self, small_game_map):
        with pytest.raises(InvalidArgumentError):
            Pathfinder(small_game_map).get_reachable_tiles(Vector2(9, 9), make_unit())


class TestVerticalMovement:
    """Test climbing, dropping and jumping between heights."""

    def test_high_jump_unit_crosses_cliff(self, cliff_map):
        unit = make_unit(movement_points=4, jump_height=2, fall_height=4)
        start = cliff_map.get_tile(Vector2(2, 1))

        reachable = positions_of(Pathfinder(cliff_map).get_reachable_tiles(start, unit))

        assert (2, 2) in reachable
        assert (2, 4) in reachable

    def test_grounded_unit_stays_on_plateau(self, cliff_map):
        unit = make_unit(movement_points=4, jump_height=0, fall_height=0)
        start = cliff_map.get_tile(Vector2(2, 1))

        pathfinder = Pathfinder(cliff_map)
        below = cliff_map.get_tile(Vector2(2, 2))

        reachable = positions_of(pathfinder.get_reachable_tiles(start, unit))

        assert all(x <= 1 for _, x in reachable)
        assert (0, 0) in reachable
        assert below not in pathfinder.get_all_paths_from(start, unit)
        assert not pathfinder.find_path(start, below, unit).is_valid

    def test_climb_limited_by_jump_height(self, cliff_map):
        """From the lowland a 3-unit plateau needs jump height 3."""
        start = cliff_map.get_tile(Vector2(2, 2))
        pathfinder = Pathfinder(cliff_map)

        low = positions_of(pathfinder.get_reachable_tiles(start, make_unit(jump_height=2)))
        high = positions_of(pathfinder.get_reachable_tiles(start, make_unit(jump_height=3)))

        assert (2, 1) not in low
        assert (2, 1) in high

    def test_jump_across_chasm(self):
        """A unit on a ledge jumps over an impassable gap to the far side."""
        game_map = MapTestBuilder.from_heights([[2, 0, 2]], [["g", "w", "g"]]).build()
        unit = make_unit(movement_points=2, jump_height=2, fall_height=0)
        pathfinder = Pathfinder(game_map)

        path = pathfinder.find_path(Vector2(0, 0), Vector2(0, 2), unit)

        assert path.is_valid
        assert positions_of(path.tiles) == {(0, 0), (0, 2)}
        assert path.costs == (0, 2)

    def test_jump_costs_one_per_cell_crossed(self):
        game_map = MapTestBuilder.from_heights([[2, 0, 2]], [["g", "w", "g"]]).build()
        unit = make_unit(movement_points=1, jump_height=2, fall_height=0)

        reachable = Pathfinder(game_map).get_reachable_tiles(Vector2(0, 0), unit)

        assert positions_of(reachable) == {(0, 0)}

    def test_shallow_drop_is_not_a_cliff_lip(self):
        """A gap whose first cell is only one unit lower cannot be jumped."""
        game_map = MapTestBuilder.from_heights([[1, 0, 1]], [["g", "w", "g"]]).build()
        unit = make_unit(movement_points=4, jump_height=2, fall_height=4)

        reachable = Pathfinder(game_map).get_reachable_tiles(Vector2(0, 0), unit)

        assert positions_of(reachable) == {(0, 0)}

    def test_jump_range_limited_by_jump_height(self):
        game_map = MapTestBuilder.from_heights([[3, 0, 0, 3]], [["g", "w", "w", "g"]]).build()
        pathfinder = Pathfinder(game_map)

        short = pathfinder.get_reachable_tiles(Vector2(0, 0), make_unit(movement_points=5, jump_height=2))
        long = pathfinder.get_reachable_tiles(Vector2(0, 0), make_unit(movement_points=5, jump_height=3))

        assert (0, 3) not in positions_of(short)
        assert (0, 3) in positions_of(long)


class TestFindPath:
    """Test the single-target A* search."""

    def test_straight_path(self, small_game_map):
        unit = make_unit(movement_points=4)
        pathfinder = Pathfinder(small_game_map)

        path = pathfinder.find_path(Vector2(0, 0), Vector2(0, 3), unit)

        assert_path_is_consistent(path, unit.movement_points)
        assert [t.position for t in path.tiles] == [Vector2(0, x) for x in range(4)]
        assert path.costs == (0, 1, 2, 3)
        assert path.length == 3
        assert path.contains_tile(small_game_map.get_tile(Vector2(0, 2)))
        assert not path.contains_tile(small_game_map.get_tile(Vector2(1, 2)))

    def test_start_equals_target(self, small_game_map):
        pathfinder = Pathfinder(small_game_map)
        tile = small_game_map.get_tile(Vector2(1, 1))

        path = pathfinder.find_path(tile, tile, make_unit())

        assert path.is_valid
        assert path.tiles == (tile,)
        assert path.cost == 0

    def test_out_of_budget_is_invalid(self, small_game_map):
        path = Pathfinder(small_game_map).find_path(Vector2(0, 0), Vector2(4, 4), make_unit(movement_points=3))

        assert not path.is_valid
        assert path.destination is None
        assert path.tiles == ()

    def test_unreachable_target_is_invalid(self):
        game_map = MapTestBuilder.from_heights([[0, 0, 0]], [["g", "w", "g"]]).build()

        path = Pathfinder(game_map).find_path(Vector2(0, 0), Vector2(0, 2), make_unit())

        assert path == PathResult.invalid()

    def test_path_goes_around_obstacles(self):
        game_map = (MapTestBuilder(3, 3)
                    .with_water([(1, 0), (1, 1)])
                    .build())
        unit = make_unit(movement_points=6)

        path = Pathfinder(game_map).find_path(Vector2(0, 0), Vector2(0, 2), unit)

        assert_path_is_consistent(path, unit.movement_points)
        assert path.cost == 6
        assert (1, 2) in positions_of(path.tiles)

    def test_tie_break_is_deterministic(self):
        """Equal-cost routes resolve the same way on every map instance."""
        routes = []
        for _ in range(3):
            game_map = GameMap(3, 3)
            path = Pathfinder(game_map).find_path(Vector2(0, 0), Vector2(1, 1), make_unit())
            routes.append([t.position.to_tuple() for t in path.tiles])

        assert routes[0] == routes[1] == routes[2]
        assert routes[0] == [(0, 0), (0, 1), (1, 1)]

    def test_prefers_cheaper_terrain(self):
        game_map = MapTestBuilder.from_heights(
            [[0, 0, 0, 0], [0, 0, 0, 0]],
            [["g", "m", "m", "g"], ["g", "g", "g", "g"]],
        ).build()
        unit = make_unit(movement_points=8)

        path = Pathfinder(game_map).find_path(Vector2(0, 0), Vector2(0, 3), unit)

        assert path.cost == 5
        assert (0, 1) not in positions_of(path.tiles)


class TestAllPaths:
    """Test the per-destination path map."""

    def test_excludes_start_tile(self, small_game_map):
        start = small_game_map.get_tile(Vector2(2, 2))
        paths = Pathfinder(small_game_map).get_all_paths_from(start, make_unit(movement_points=2))

        assert start not in paths
        assert len(paths) == 12

    def test_paths_are_consistent(self, cliff_map):
        unit = make_unit(movement_points=4, jump_height=2, fall_height=4)
        start = cliff_map.get_tile(Vector2(2, 1))

        paths = Pathfinder(cliff_map).get_all_paths_from(start, unit)

        assert paths
        for destination, path in paths.items():
            assert path.destination is destination
            assert path.start is start
            assert_path_is_consistent(path, unit.movement_points)

    def test_matches_reachable_tiles(self, cliff_map):
        unit = make_unit(movement_points=3, jump_height=1, fall_height=4)
        start = cliff_map.get_tile(Vector2(0, 0))
        pathfinder = Pathfinder(cliff_map)

        paths = pathfinder.get_all_paths_from(start, unit)
        reachable = pathfinder.get_reachable_tiles(start, unit)

        assert set(paths) | {start} == reachable

    def test_costs_match_find_path(self, small_game_map):
        unit = make_unit(movement_points=3)
        pathfinder = Pathfinder(small_game_map)
        start = small_game_map.get_tile(Vector2(0, 0))

        for destination, path in pathfinder.get_all_paths_from(start, unit).items():
            assert pathfinder.find_path(start, destination, unit).cost == path.cost
