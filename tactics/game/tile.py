import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..core.data import Vector2, TerrainType, HighlightColor, get_terrain_info

if TYPE_CHECKING:
    from .entities.unit import Unit


@dataclass(eq=False)
class Tile:
    """One grid cell.

    Tiles compare and hash by identity; the map creates exactly one Tile per
    position. The occupying unit is held through a weak reference so the grid
    never keeps a defeated unit alive.
    """
    position: Vector2
    terrain_type: TerrainType = TerrainType.GRASS
    height: int = 0
    walkable_override: Optional[bool] = None
    move_cost_override: Optional[int] = None
    highlight: Optional[str] = field(default=None, init=False)
    _occupant: Optional["weakref.ReferenceType[Unit]"] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self._info = get_terrain_info(self.terrain_type)

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def symbol(self) -> str:
        return self._info.symbol

    @property
    def walkable(self) -> bool:
        if self.walkable_override is not None:
            return self.walkable_override
        return self._info.walkable

    @property
    def move_cost(self) -> int:
        if self.move_cost_override is not None:
            return self.move_cost_override
        return self._info.move_cost

    @property
    def occupying_unit(self) -> Optional["Unit"]:
        if self._occupant is None:
            return None
        unit = self._occupant()
        if unit is None:
            self._occupant = None
        return unit

    @occupying_unit.setter
    def occupying_unit(self, unit: Optional["Unit"]) -> None:
        self._occupant = weakref.ref(unit) if unit is not None else None

    @property
    def is_occupied(self) -> bool:
        return self.occupying_unit is not None

    def is_walkable_for(self, unit: Optional["Unit"] = None) -> bool:
        """True if the tile can be stood on and nobody other than `unit` is on it."""
        if not self.walkable:
            return False
        occupant = self.occupying_unit
        return occupant is None or occupant is unit

    def illuminate(self, color: HighlightColor | str) -> None:
        """Ask the renderer to tint this tile. Fire and forget."""
        self.highlight = color.value if isinstance(color, HighlightColor) else color

    def reset_illumination(self) -> None:
        self.highlight = None

    def __repr__(self) -> str:
        return f"Tile({self.position.y}, {self.position.x}, h={self.height}, {self.terrain_type.name})"
