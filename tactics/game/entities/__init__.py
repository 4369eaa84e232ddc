"""Battle entities.

This package contains the units and the skills they carry:
- unit.py: Units with movement stats, combat stats and per-turn flags
- skills.py: Skill range patterns, skill data and skill resolution
"""

from .unit import Unit, MovementStats, CombatStats
from .skills import SkillArea, SkillData, SkillContext, SkillOutcome

__all__ = [
    "Unit",
    "MovementStats",
    "CombatStats",
    "SkillArea",
    "SkillData",
    "SkillContext",
    "SkillOutcome",
]
