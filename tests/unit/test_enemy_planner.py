"""
Unit tests for enemy movement planning.
"""
from tactics.core.data import Vector2, Team
from tactics.game.ai import EnemyPlanner
from tactics.game.pathfinding import Pathfinder
from tests.test_utils import MapTestBuilder, unit_at


class TestEnemyPlanner:
    """Test unit ordering, target choice and destination choice."""

    def test_next_unit_skips_finished(self):
        game_map = (MapTestBuilder(3, 1)
                    .with_unit("A", Team.ENEMY, 0, 0)
                    .with_unit("B", Team.ENEMY, 2, 0)
                    .build())
        first, second = game_map.get_units_by_team(Team.ENEMY)

        assert EnemyPlanner.next_unit([first, second]) is first
        first.end_turn()
        assert EnemyPlanner.next_unit([first, second]) is second
        second.end_turn()
        assert EnemyPlanner.next_unit([first, second]) is None

    def test_nearest_target(self):
        game_map = (MapTestBuilder(6, 1)
                    .with_unit("Raider", Team.ENEMY, 3, 0)
                    .with_unit("Far", Team.PLAYER, 0, 0)
                    .with_unit("Near", Team.PLAYER, 5, 0)
                    .build())
        raider = unit_at(game_map, 3, 0)

        target = EnemyPlanner.nearest_target(raider, game_map.get_units_by_team(Team.PLAYER))

        assert target.name == "Near"

    def test_moves_toward_target(self):
        game_map = (MapTestBuilder(7, 1)
                    .with_unit("Raider", Team.ENEMY, 6, 0, movement_points=3)
                    .with_unit("Knight", Team.PLAYER, 0, 0)
                    .build())
        raider = unit_at(game_map, 6, 0)
        paths = Pathfinder(game_map).get_all_paths_from(raider.current_tile, raider)

        decision = EnemyPlanner().decide(raider, game_map.get_units_by_team(Team.PLAYER), paths)

        assert decision.moves
        assert decision.target.name == "Knight"
        assert decision.path.destination.position == Vector2(0, 3)

    def test_stays_when_already_adjacent(self):
        game_map = (MapTestBuilder(3, 1)
                    .with_unit("Raider", Team.ENEMY, 1, 0)
                    .with_unit("Knight", Team.PLAYER, 0, 0)
                    .build())
        raider = unit_at(game_map, 1, 0)
        paths = Pathfinder(game_map).get_all_paths_from(raider.current_tile, raider)

        decision = EnemyPlanner().decide(raider, game_map.get_units_by_team(Team.PLAYER), paths)

        assert not decision.moves
        assert "cannot get closer" in decision.reasoning

    def test_equally_distant_tile_is_not_taken(self):
        game_map = (MapTestBuilder(3, 2)
                    .with_unit("Raider", Team.ENEMY, 1, 0)
                    .with_unit("Knight", Team.PLAYER, 0, 0)
                    .build())
        raider = unit_at(game_map, 1, 0)
        paths = Pathfinder(game_map).get_all_paths_from(raider.current_tile, raider)
        assert game_map.get_tile(Vector2(1, 0)) in paths

        decision = EnemyPlanner().decide(raider, game_map.get_units_by_team(Team.PLAYER), paths)

        assert not decision.moves

    def test_no_opponents(self):
        game_map = MapTestBuilder(2, 1).with_unit("Raider", Team.ENEMY, 0, 0).build()
        raider = unit_at(game_map, 0, 0)

        decision = EnemyPlanner().decide(raider, [], {})

        assert not decision.moves
        assert decision.target is None
