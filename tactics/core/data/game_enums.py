"""Centralized game enums and constants.

This module contains all core battle enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class Team(Enum):
    """Team affiliations for units."""
    PLAYER = 0
    ENEMY = 1

    @property
    def opponent(self) -> "Team":
        """The side that acts after this one."""
        return Team.ENEMY if self is Team.PLAYER else Team.PLAYER


class TerrainType(Enum):
    """Types of terrain with different properties."""
    GRASS = auto()
    WATER = auto()
    MOUNTAIN = auto()
    SAND = auto()
    VOID = auto()


class Direction(Enum):
    """Orthogonal grid directions as (dy, dx) steps."""
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)


class HighlightColor(Enum):
    """Highlight colours the battle layer asks tiles to show."""
    NONE = "none"
    MOVE = "blue"
    PATH = "cyan"
    CURSOR = "white"
    RANGE = "yellow"
    EFFECT = "red"
    SELECTED = "green"


class SkillType(Enum):
    """How a skill resolves against its targets."""
    PHYSICAL_ATTACK = auto()
    MAGICAL_ATTACK = auto()
    HEAL = auto()


class TargetType(Enum):
    """Which units a skill is meant to be used on."""
    ENEMY = auto()
    ALLY = auto()
    ANY = auto()


class AreaShape(Enum):
    """Range and area-of-effect patterns for skills."""
    CIRCLE = "circle"    # Manhattan distance
    SQUARE = "square"    # Chebyshev distance
    CROSS = "cross"      # Straight lines along both axes


# Convenience mappings for display
TEAM_NAMES = {
    Team.PLAYER: "Player",
    Team.ENEMY: "Enemy",
}

TERRAIN_NAMES = {
    TerrainType.GRASS: "Grass",
    TerrainType.WATER: "Water",
    TerrainType.MOUNTAIN: "Mountain",
    TerrainType.SAND: "Sand",
    TerrainType.VOID: "Void",
}

SKILL_TYPE_NAMES = {
    SkillType.PHYSICAL_ATTACK: "Physical Attack",
    SkillType.MAGICAL_ATTACK: "Magical Attack",
    SkillType.HEAL: "Heal",
}
