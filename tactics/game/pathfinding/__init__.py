"""Path search.

This package contains the movement planner used by the turn states and AI:
- movement_rules.py: Step legality, step cost and jump/landing rules
- priority_queue.py: Deterministic min-heap used by the search
- path_result.py: Immutable search results
- pathfinder.py: A* and exhaustive searches over the grid
"""

from .movement_rules import can_traverse, step_cost, is_cliff_lip, can_land
from .path_result import PathResult
from .priority_queue import PriorityQueue
from .pathfinder import Pathfinder, TileNode

__all__ = [
    "can_traverse",
    "step_cost",
    "is_cliff_lip",
    "can_land",
    "PathResult",
    "PriorityQueue",
    "Pathfinder",
    "TileNode",
]
