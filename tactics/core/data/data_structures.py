"""Grid coordinate types.

Vector2 addresses a single grid cell; VectorArray holds batches of cells as a
numpy array so range patterns and area queries can be computed in one pass.
"""

from dataclasses import dataclass
from typing import Optional, Union
import numpy as np
from numpy.typing import NDArray

from .game_enums import Direction


@dataclass
class Vector2:
    """2D vector for grid coordinates.

    Uses (y, x) ordering for direct alignment with 2D array access patterns.
    First parameter is row (y-coordinate), second is column (x-coordinate).
    """
    y: int
    x: int

    def __add__(self, other: "Vector2") -> "Vector2":
        """Vector addition."""
        return Vector2(self.y + other.y, self.x + other.x)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return False
        return self.y == other.y and self.x == other.x

    def __hash__(self) -> int:
        return hash((self.y, self.x))

    def __iter__(self):
        """Make Vector2 iterable for unpacking (y, x order)."""
        yield self.y
        yield self.x

    def __repr__(self) -> str:
        return f"Vector2({self.y}, {self.x})"

    def manhattan_distance_to(self, other: "Vector2") -> int:
        """Calculate Manhattan distance to another vector."""
        return abs(self.y - other.y) + abs(self.x - other.x)

    def step(self, direction: Direction, distance: int = 1) -> "Vector2":
        """Return the cell `distance` cells away in `direction`."""
        dy, dx = direction.value
        return Vector2(self.y + dy * distance, self.x + dx * distance)

    @classmethod
    def from_tuple(cls, coords: tuple[int, int]) -> "Vector2":
        """Create Vector2 from coordinate tuple (y, x order)."""
        return cls(coords[0], coords[1])

    def to_tuple(self) -> tuple[int, int]:
        """Convert to coordinate tuple (y, x order)."""
        return (self.y, self.x)


class VectorArray:
    """Collection of grid positions backed by an (N, 2) numpy array.

    Used for skill range patterns and area lookups where a whole set of
    offsets is translated and bounds-checked at once.
    """

    def __init__(self, vectors: Optional[Union[list[Vector2], NDArray[np.int16]]] = None):
        """Initialize VectorArray from list of Vector2 objects or numpy array.

        Args:
            vectors: List of Vector2 objects or numpy array of shape (N, 2).
                    If None, creates an empty VectorArray.
        """
        if vectors is None:
            self._data = np.empty((0, 2), dtype=np.int16)
        elif isinstance(vectors, list):
            if not vectors:
                self._data = np.empty((0, 2), dtype=np.int16)
            else:
                self._data = np.array([[v.y, v.x] for v in vectors], dtype=np.int16)
        else:
            if vectors.ndim != 2 or vectors.shape[-1] != 2:
                raise ValueError("Numpy array must have shape (N, 2)")
            self._data = vectors.astype(np.int16)

    @property
    def data(self) -> NDArray[np.int16]:
        """Get the underlying numpy array (N, 2) shape."""
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        for row in self._data:
            yield Vector2(int(row[0]), int(row[1]))

    def translated(self, origin: Vector2) -> "VectorArray":
        """Return these offsets shifted so they are relative to `origin`."""
        return VectorArray(self._data + np.array([origin.y, origin.x], dtype=np.int16))

    def filter_by_bounds(self, min_y: int, max_y: int, min_x: int, max_x: int) -> "VectorArray":
        """Filter vectors by rectangular bounds (inclusive)."""
        mask = ((self._data[:, 0] >= min_y) & (self._data[:, 0] <= max_y) &
                (self._data[:, 1] >= min_x) & (self._data[:, 1] <= max_x))
        return VectorArray(self._data[mask])

    def contains(self, vector: Vector2) -> bool:
        """Check if array contains a specific vector."""
        target = np.array([vector.y, vector.x], dtype=np.int16)
        return bool(np.any(np.all(self._data == target, axis=1)))
