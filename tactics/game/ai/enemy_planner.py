"""
Enemy movement planning.

The enemy side acts one unit at a time. For the acting unit the planner finds
the nearest opposing unit by Manhattan distance and picks the reachable
destination that ends closest to it.

Design Principles:
- Deterministic: ties are broken by path cost, then by the order the path
  search discovered the destination
- A unit that cannot get any closer stays put and ends its turn, rather
  than walking to an equally distant tile
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from ..entities.unit import Unit
    from ..tile import Tile
    from ..pathfinding.path_result import PathResult


@dataclass
class AIDecision:
    """Represents an AI movement decision with reasoning."""
    unit: "Unit"
    path: Optional["PathResult"] = None
    target: Optional["Unit"] = None
    reasoning: str = ""

    @property
    def moves(self) -> bool:
        return self.path is not None and self.path.is_valid


class EnemyPlanner:
    """Chooses which enemy acts next and where it moves."""

    @staticmethod
    def next_unit(enemies: Sequence["Unit"]) -> Optional["Unit"]:
        """First enemy, in registry order, that has not ended its turn."""
        for unit in enemies:
            if not unit.turn_ended and unit.current_tile is not None:
                return unit
        return None

    @staticmethod
    def nearest_target(unit: "Unit", opponents: Sequence["Unit"]) -> Optional["Unit"]:
        best: Optional["Unit"] = None
        best_distance = 0
        for opponent in opponents:
            if opponent.current_tile is None:
                continue
            distance = unit.position.manhattan_distance_to(opponent.position)
            if best is None or distance < best_distance:
                best, best_distance = opponent, distance
        return best

    def decide(
        self,
        unit: "Unit",
        opponents: Sequence["Unit"],
        paths: dict["Tile", "PathResult"],
    ) -> AIDecision:
        """Pick the path that brings `unit` closest to its nearest opponent."""
        target = self.nearest_target(unit, opponents)
        if target is None:
            return AIDecision(unit, reasoning="no opponents left")
        if not paths:
            return AIDecision(unit, target=target, reasoning="no reachable tiles")

        goal = target.position
        current_distance = unit.position.manhattan_distance_to(goal)

        best_path: Optional["PathResult"] = None
        best_key: tuple[int, int] = (current_distance, 0)
        for destination, path in paths.items():
            key = (destination.position.manhattan_distance_to(goal), path.cost)
            if key[0] < current_distance and (best_path is None or key < best_key):
                best_path, best_key = path, key

        if best_path is None:
            return AIDecision(unit, target=target, reasoning=f"cannot get closer to {target.name}")
        return AIDecision(
            unit,
            path=best_path,
            target=target,
            reasoning=f"closing on {target.name} (distance {current_distance} -> {best_key[0]})",
        )
