"""Enemy decision making.

- enemy_planner.py: Chooses the acting enemy and the path it takes
"""

from .enemy_planner import AIDecision, EnemyPlanner

__all__ = [
    "AIDecision",
    "EnemyPlanner",
]
