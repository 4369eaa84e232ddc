from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..tile import Tile


@dataclass(frozen=True)
class PathResult:
    """A computed route to one destination tile.

    `tiles` runs from the start tile to the destination (both inclusive) and
    `costs` holds the cumulative movement cost at each of those tiles. A
    search that finds nothing returns PathResult.invalid() rather than
    raising.
    """
    destination: Optional["Tile"]
    tiles: tuple["Tile", ...] = ()
    costs: tuple[int, ...] = ()

    @classmethod
    def invalid(cls) -> "PathResult":
        return cls(destination=None)

    @property
    def is_valid(self) -> bool:
        return self.destination is not None and bool(self.tiles) and self.tiles[-1] is self.destination

    @property
    def start(self) -> Optional["Tile"]:
        return self.tiles[0] if self.tiles else None

    @property
    def cost(self) -> int:
        """Total movement cost of the path."""
        return self.costs[-1] if self.costs else 0

    @property
    def length(self) -> int:
        """Number of moves (tiles after the start)."""
        return max(len(self.tiles) - 1, 0)

    def contains_tile(self, tile: "Tile") -> bool:
        return any(t is tile for t in self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)
