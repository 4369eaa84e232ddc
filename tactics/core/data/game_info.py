"""Static terrain data and lookup tables."""

from dataclasses import dataclass
from typing import Dict

from .game_enums import TerrainType, TERRAIN_NAMES


@dataclass(frozen=True)
class TerrainInfo:
    """Static information about terrain types."""
    name: str
    symbol: str
    move_cost: int
    walkable: bool = True


TERRAIN_DATA: Dict[TerrainType, TerrainInfo] = {
    TerrainType.GRASS: TerrainInfo(
        TERRAIN_NAMES[TerrainType.GRASS], ".", 1
    ),
    TerrainType.SAND: TerrainInfo(
        TERRAIN_NAMES[TerrainType.SAND], ":", 2
    ),
    TerrainType.MOUNTAIN: TerrainInfo(
        TERRAIN_NAMES[TerrainType.MOUNTAIN], "^", 3
    ),
    TerrainType.WATER: TerrainInfo(
        TERRAIN_NAMES[TerrainType.WATER], "~", 1, walkable=False
    ),
    TerrainType.VOID: TerrainInfo(
        TERRAIN_NAMES[TerrainType.VOID], " ", 1, walkable=False
    ),
}

# Single-character codes accepted in terrain layers
TERRAIN_CODES: Dict[str, TerrainType] = {
    "g": TerrainType.GRASS,
    "s": TerrainType.SAND,
    "m": TerrainType.MOUNTAIN,
    "w": TerrainType.WATER,
    "v": TerrainType.VOID,
}


def get_terrain_info(terrain_type: TerrainType) -> TerrainInfo:
    """Look up static terrain data, defaulting to grass."""
    return TERRAIN_DATA.get(terrain_type, TERRAIN_DATA[TerrainType.GRASS])
