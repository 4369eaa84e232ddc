"""
Basic test fixtures for the tactics test suite.

Provides maps, units, an event bus and ready-to-play controllers.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from tactics.core.config import BattleConfig
from tactics.core.data import Vector2, Team
from tactics.core.events import EventManager
from tactics.game.controller import BattleController
from tactics.game.entities.unit import Unit, MovementStats
from tactics.game.log_manager import LogManager, LogLevel
from tactics.game.map import GameMap
from tactics.game.pathfinding.pathfinder import Pathfinder
from tests.test_utils import MapTestBuilder, EventRecorder


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def log_manager(event_manager):
    """Log manager that keeps every level."""
    return LogManager(event_manager, default_level=LogLevel.DEBUG)


@pytest.fixture
def recorder(event_manager):
    """Records every processed event."""
    return EventRecorder(event_manager)


@pytest.fixture
def fast_config():
    """Config with instant skills and fast movement."""
    return BattleConfig(move_speed=100.0, skill_duration=0.0)


@pytest.fixture
def flat_map():
    """A 3x3 map with every height at 0."""
    return GameMap(width=3, height=3)


@pytest.fixture
def small_game_map():
    """Create a small 5x5 flat map for testing."""
    return GameMap(width=5, height=5)


@pytest.fixture
def cliff_map():
    """5x5 map whose two left columns are a plateau 3 units high."""
    return MapTestBuilder.from_heights([
        [3, 3, 0, 0, 0],
        [3, 3, 0, 0, 0],
        [3, 3, 0, 0, 0],
        [3, 3, 0, 0, 0],
        [3, 3, 0, 0, 0],
    ]).build()


@pytest.fixture
def walker():
    """A unit with two movement points that cannot climb or drop."""
    return Unit("Walker", Team.PLAYER, MovementStats(movement_points=2, jump_height=0, fall_height=0))


@pytest.fixture
def pathfinder(small_game_map):
    return Pathfinder(small_game_map)


@pytest.fixture
def skirmish(event_manager, fast_config):
    """Controller on a flat 5x5 map with two players and one enemy."""
    builder = (MapTestBuilder(5, 5)
               .with_unit("Knight", Team.PLAYER, 0, 0, movement_points=3)
               .with_unit("Archer", Team.PLAYER, 1, 0, movement_points=3)
               .with_unit("Brute", Team.ENEMY, 4, 4, movement_points=3))
    game_map = builder.build()
    controller = BattleController(game_map, event_manager, fast_config)
    controller.start_battle(Team.PLAYER)
    return controller


@pytest.fixture
def sample_positions():
    """Create a list of sample positions for testing."""
    return [
        Vector2(0, 0),
        Vector2(1, 1),
        Vector2(2, 2),
        Vector2(3, 4),
    ]
