import csv
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from ..core.data import Vector2, VectorArray, Team, TerrainType, Direction, TERRAIN_CODES
from ..core.exceptions import GridConfigurationError, InvalidArgumentError, InvariantViolationError
from .tile import Tile
from .entities.unit import Unit


PositionLike = Union[Vector2, tuple[int, int]]


@dataclass
class GameMap:
    """Rectangular grid of tiles plus the registry of units standing on it.

    The map is the only owner of Tile objects: one Tile per position, created
    once and kept for the lifetime of the map. Unit occupancy is changed only
    through place_unit, move_unit and remove_unit.
    """
    width: int
    height: int
    tiles: Optional[np.ndarray] = field(init=False, default=None)
    units: list[Unit] = field(default_factory=list, init=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Map size cannot be negative: {self.width}x{self.height}")

        # Object array so every position maps to one persistent Tile
        self.tiles = np.empty((self.height, self.width), dtype=object)
        for y in range(self.height):
            for x in range(self.width):
                self.tiles[y, x] = Tile(Vector2(y, x))

    # ============== Construction ==============

    @classmethod
    def from_rows(
        cls,
        heights: Sequence[Sequence[int]],
        terrain: Optional[Sequence[Sequence[Union[str, TerrainType]]]] = None,
    ) -> "GameMap":
        """Build a map from height rows and optional terrain rows.

        Terrain cells may be TerrainType members, terrain names ("grass") or
        single-letter codes ("g", "s", "m", "w", "v").
        """
        height_grid = cls._validate_layer(heights, "heights")
        try:
            height_array = np.array([[int(cell) for cell in row] for row in height_grid], dtype=np.int16)
        except (TypeError, ValueError) as e:
            raise GridConfigurationError(f"Heights must be integers: {e}") from e

        rows, cols = height_array.shape
        game_map = cls(cols, rows)

        terrain_grid = None
        if terrain is not None:
            terrain_grid = cls._validate_layer(terrain, "terrain")
            if len(terrain_grid) != rows or len(terrain_grid[0]) != cols:
                raise GridConfigurationError(
                    f"Terrain layer is {len(terrain_grid[0])}x{len(terrain_grid)}, "
                    f"expected {cols}x{rows}"
                )

        for y in range(rows):
            for x in range(cols):
                terrain_type = TerrainType.GRASS
                if terrain_grid is not None:
                    terrain_type = parse_terrain(terrain_grid[y][x])
                game_map.set_tile(Vector2(y, x), terrain_type, int(height_array[y, x]))

        return game_map

    @classmethod
    def from_csv_layers(cls, map_directory: str) -> "GameMap":
        """Load a map from CSV layers.

        Expected directory structure:
        map_directory/
        ├── heights.csv (required - integer height per cell)
        └── terrain.csv (optional - terrain code per cell, grass if absent)
        """
        map_dir = os.path.abspath(map_directory)
        heights_csv = os.path.join(map_dir, "heights.csv")
        terrain_csv = os.path.join(map_dir, "terrain.csv")

        if not os.path.exists(heights_csv):
            raise GridConfigurationError("Required heights.csv not found", map_dir)

        heights = _read_csv(heights_csv)
        terrain = _read_csv(terrain_csv) if os.path.exists(terrain_csv) else None

        return cls.from_rows(heights, terrain)

    @staticmethod
    def _validate_layer(rows: Sequence[Sequence], name: str) -> list[list]:
        grid = [list(row) for row in rows]
        if not grid or not grid[0]:
            raise GridConfigurationError(f"No data found in {name} layer")
        width = len(grid[0])
        for index, row in enumerate(grid):
            if len(row) != width:
                raise GridConfigurationError(
                    f"Row {index} of {name} layer has {len(row)} cells, expected {width}"
                )
        return grid

    # ============== Tile access ==============

    def _require_grid(self) -> np.ndarray:
        if self.tiles is None:
            raise InvariantViolationError("Grid queried before it was initialized")
        return self.tiles

    def is_valid_position(self, position: Vector2) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def tile_at(self, position: PositionLike) -> Optional[Tile]:
        """Get the tile at position, or None when it lies outside the grid."""
        tiles = self._require_grid()
        if not isinstance(position, Vector2):
            position = Vector2.from_tuple(position)
        if not self.is_valid_position(position):
            return None
        return tiles[position.y, position.x]

    def get_tile(self, position: PositionLike) -> Tile:
        """Get the tile at position, raising InvalidArgumentError when out of bounds."""
        tile = self.tile_at(position)
        if tile is None:
            raise InvalidArgumentError(f"Position {position} is outside the {self.width}x{self.height} grid")
        return tile

    def neighbor(self, tile: Tile, direction: Direction, distance: int = 1) -> Optional[Tile]:
        """Tile `distance` cells away from `tile` in `direction`, if on the grid."""
        return self.tile_at(tile.position.step(direction, distance))

    def iter_tiles(self) -> Iterator[Tile]:
        """Iterate over all tiles in row-major order."""
        tiles = self._require_grid()
        for tile in tiles.flat:
            yield tile

    def set_tile(
        self,
        position: Vector2,
        terrain_type: TerrainType,
        height: Optional[int] = None,
    ) -> Tile:
        """Change terrain (and optionally height) of an unoccupied tile in place."""
        tile = self.get_tile(position)
        if tile.is_occupied:
            raise InvariantViolationError(f"Cannot reshape occupied tile at {position}")
        replacement = Tile(position, terrain_type, tile.height if height is None else height)
        self.tiles[position.y, position.x] = replacement
        return replacement

    # ============== Numpy views ==============

    def get_height_map(self) -> NDArray[np.int16]:
        """Heights of every cell as a (height, width) array."""
        tiles = self._require_grid()
        return np.vectorize(lambda t: t.height, otypes=[np.int16])(tiles)

    def get_walkable_mask(self) -> NDArray[np.bool_]:
        """Boolean mask of cells whose terrain can be stood on."""
        tiles = self._require_grid()
        return np.vectorize(lambda t: t.walkable, otypes=[np.bool_])(tiles)

    def get_occupied_mask(self) -> NDArray[np.bool_]:
        """Boolean mask of all occupied positions."""
        mask = np.zeros((self.height, self.width), dtype=np.bool_)
        for unit in self.units:
            mask[unit.position.y, unit.position.x] = True
        return mask

    def get_team_mask(self, team: Team) -> NDArray[np.bool_]:
        """Boolean mask of positions occupied by a specific team."""
        mask = np.zeros((self.height, self.width), dtype=np.bool_)
        for unit in self.units:
            if unit.team == team:
                mask[unit.position.y, unit.position.x] = True
        return mask

    # ============== Units ==============

    def place_unit(self, unit: Unit, position: PositionLike) -> Tile:
        """Add a unit to the registry and stand it on `position`."""
        tile = self.get_tile(position)
        if tile.is_occupied:
            raise InvariantViolationError(f"Tile {tile.position} is already occupied")
        if not tile.walkable:
            raise InvalidArgumentError(f"Tile {tile.position} cannot be stood on")

        tile.occupying_unit = unit
        unit.current_tile = tile
        unit.previous_tile = None
        if unit not in self.units:
            self.units.append(unit)
        return tile

    def move_unit(self, unit: Unit, destination: Tile) -> Tile:
        """Swap occupancy from the unit's current tile to `destination`.

        Returns the tile the unit left.
        """
        origin = unit.current_tile
        if origin is None:
            raise InvariantViolationError(f"{unit.name} is not on the map")
        if destination is origin:
            return origin
        if destination.is_occupied:
            raise InvariantViolationError(f"Tile {destination.position} is already occupied")

        origin.occupying_unit = None
        destination.occupying_unit = unit
        unit.current_tile = destination
        return origin

    def remove_unit(self, unit: Unit) -> Optional[Unit]:
        """Take a unit off the grid and out of the registry."""
        if unit not in self.units:
            return None
        if unit.current_tile is not None and unit.current_tile.occupying_unit is unit:
            unit.current_tile.occupying_unit = None
        self.units.remove(unit)
        return unit

    def get_unit_at(self, position: PositionLike) -> Optional[Unit]:
        tile = self.tile_at(position)
        return tile.occupying_unit if tile is not None else None

    def get_units_by_team(self, team: Team) -> list[Unit]:
        """Units of one team, in registry order."""
        return [unit for unit in self.units if unit.team == team]

    # ============== Highlights and areas ==============

    def reset_all_tiles(self) -> None:
        """Clear every tile highlight."""
        for tile in self.iter_tiles():
            tile.reset_illumination()

    def calculate_area_tiles(self, center: Vector2, offsets: VectorArray) -> list[Tile]:
        """Tiles covered by `offsets` placed around `center`, clipped to the grid."""
        positions = offsets.translated(center).filter_by_bounds(0, self.height - 1, 0, self.width - 1)
        return [self.tiles[p.y, p.x] for p in positions]


def parse_terrain(value: Union[str, TerrainType]) -> TerrainType:
    """Parse a terrain code or name."""
    if isinstance(value, TerrainType):
        return value
    text = str(value).strip().lower()
    if text in TERRAIN_CODES:
        return TERRAIN_CODES[text]
    try:
        return TerrainType[text.upper()]
    except KeyError:
        raise GridConfigurationError(f"Unknown terrain '{value}'") from None


def _read_csv(path: str) -> list[list[str]]:
    with open(path, "r", encoding="utf-8") as f:
        reader = csv.reader(f)
        return [[cell.strip() for cell in row] for row in reader if row]
