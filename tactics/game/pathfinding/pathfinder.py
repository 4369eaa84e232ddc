"""Path search over the battle grid.

One search core serves three queries:
- find_path: A* toward a single target with a Manhattan heuristic
- get_reachable_tiles: exhaustive search (no heuristic) bounded by the
  unit's movement points
- get_all_paths_from: the same exhaustive search, returning one
  reconstructed path per reachable destination

Each dequeued tile is expanded with two rules. A standard step moves to an
orthogonal neighbour and costs that neighbour's step cost. A jump-fall step
scans up to `jump_height` cells in a straight line from a cliff lip and
lands on any cell that passes the landing rule, costing one point per cell
crossed. Both rules share the same relaxation: a tile is only (re)queued
when the new cost is within budget and no more expensive than what is known.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union, TYPE_CHECKING

from ...core.data import Vector2, Direction
from ...core.exceptions import InvalidArgumentError
from .movement_rules import can_traverse, step_cost, is_cliff_lip, can_land
from .path_result import PathResult
from .priority_queue import PriorityQueue

if TYPE_CHECKING:
    from ..map import GameMap
    from ..tile import Tile
    from ..entities.unit import Unit


TileOrPosition = Union["Tile", Vector2]


@dataclass
class TileNode:
    """Search bookkeeping for one tile within a single search call."""
    tile: "Tile"
    g: int
    h: int = 0
    parent: Optional["TileNode"] = None

    @property
    def f(self) -> int:
        return self.g + self.h


@dataclass
class SearchOutcome:
    """Closed set of a finished search, in dequeue order."""
    closed: dict["Tile", TileNode]
    goal: Optional[TileNode] = None


class Pathfinder:
    """Movement search for units on one GameMap."""

    def __init__(self, game_map: "GameMap"):
        self.game_map = game_map

    # ============== Public queries ==============

    def find_path(self, start: TileOrPosition, target: TileOrPosition, unit: "Unit") -> PathResult:
        """Cheapest legal path from `start` to `target`, or an invalid result."""
        start_tile = self._resolve(start)
        target_tile = self._resolve(target)

        if start_tile is target_tile:
            return PathResult(start_tile, (start_tile,), (0,))

        def manhattan(tile: "Tile") -> int:
            return tile.position.manhattan_distance_to(target_tile.position)

        outcome = self._search(start_tile, unit, manhattan, target_tile)
        if outcome.goal is None:
            return PathResult.invalid()
        return self._reconstruct(outcome.goal)

    def get_reachable_tiles(self, start: TileOrPosition, unit: "Unit") -> set["Tile"]:
        """Every tile the unit can stand on this turn, the start tile included."""
        start_tile = self._resolve(start)
        outcome = self._search(start_tile, unit, _no_heuristic)
        return set(outcome.closed)

    def get_all_paths_from(self, start: TileOrPosition, unit: "Unit") -> dict["Tile", PathResult]:
        """One cheapest path per reachable destination, the start tile excluded."""
        start_tile = self._resolve(start)
        outcome = self._search(start_tile, unit, _no_heuristic)
        return {
            tile: self._reconstruct(node)
            for tile, node in outcome.closed.items()
            if tile is not start_tile
        }

    # ============== Search core ==============

    def _search(
        self,
        start: "Tile",
        unit: "Unit",
        heuristic: Callable[["Tile"], int],
        target: Optional["Tile"] = None,
    ) -> SearchOutcome:
        frontier: PriorityQueue["Tile"] = PriorityQueue()
        best: dict["Tile", TileNode] = {}
        closed: dict["Tile", TileNode] = {}

        start_node = TileNode(start, 0, heuristic(start))
        best[start] = start_node
        frontier.enqueue(start, start_node.f, start_node.h)

        while frontier:
            tile = frontier.dequeue()
            node = best[tile]
            closed[tile] = node

            if target is not None and tile is target:
                return SearchOutcome(closed, node)

            for candidate, cost in self._expand(node, unit):
                if candidate in closed or cost > unit.movement_points:
                    continue
                known = best.get(candidate)
                if known is not None and known.g < cost:
                    continue

                successor = TileNode(candidate, cost, heuristic(candidate), node)
                best[candidate] = successor
                frontier.enqueue_or_update(candidate, successor.f, successor.h)

        return SearchOutcome(closed)

    def _expand(self, node: TileNode, unit: "Unit") -> Iterator[tuple["Tile", int]]:
        """Candidate (tile, cost) pairs from both expansion rules."""
        yield from self._standard_steps(node, unit)
        yield from self._jump_fall_steps(node, unit)

    def _standard_steps(self, node: TileNode, unit: "Unit") -> Iterator[tuple["Tile", int]]:
        origin = node.tile
        for direction in Direction:
            neighbor = self.game_map.neighbor(origin, direction)
            if can_traverse(origin, neighbor, unit):
                yield neighbor, node.g + step_cost(neighbor)

    def _jump_fall_steps(self, node: TileNode, unit: "Unit") -> Iterator[tuple["Tile", int]]:
        origin = node.tile
        for direction in Direction:
            if not is_cliff_lip(origin, self.game_map.neighbor(origin, direction)):
                continue

            for distance in range(1, unit.jump_height + 1):
                cost = node.g + distance
                if cost > unit.movement_points:
                    break
                candidate = self.game_map.neighbor(origin, direction, distance)
                if candidate is None:
                    break
                if can_land(origin, candidate, unit):
                    yield candidate, cost

    # ============== Helpers ==============

    def _resolve(self, tile_or_position: TileOrPosition) -> "Tile":
        if isinstance(tile_or_position, Vector2):
            tile = self.game_map.tile_at(tile_or_position)
            if tile is None:
                raise InvalidArgumentError(f"No tile at {tile_or_position}")
            return tile
        if tile_or_position is None:
            raise InvalidArgumentError("Path search needs a start and target tile")
        return tile_or_position

    @staticmethod
    def _reconstruct(goal: TileNode) -> PathResult:
        chain = []
        node: Optional[TileNode] = goal
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return PathResult(
            destination=goal.tile,
            tiles=tuple(n.tile for n in chain),
            costs=tuple(n.g for n in chain),
        )


def _no_heuristic(tile: "Tile") -> int:
    return 0
