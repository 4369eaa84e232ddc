"""Core data structures and definitions.

This package contains fundamental data types and battle definitions:
- data_structures.py: Vector2 and VectorArray for grid positions
- game_enums.py: Centralized enums for teams, terrain, directions and skills
- game_info.py: Static terrain data and lookup tables
"""

from .data_structures import Vector2, VectorArray
from .game_enums import (
    Team,
    TerrainType,
    Direction,
    HighlightColor,
    SkillType,
    TargetType,
    AreaShape,
    TEAM_NAMES,
    TERRAIN_NAMES,
    SKILL_TYPE_NAMES,
)
from .game_info import TerrainInfo, TERRAIN_DATA, TERRAIN_CODES, get_terrain_info

__all__ = [
    "Vector2",
    "VectorArray",
    "Team",
    "TerrainType",
    "Direction",
    "HighlightColor",
    "SkillType",
    "TargetType",
    "AreaShape",
    "TEAM_NAMES",
    "TERRAIN_NAMES",
    "SKILL_TYPE_NAMES",
    "TerrainInfo",
    "TERRAIN_DATA",
    "TERRAIN_CODES",
    "get_terrain_info",
]
