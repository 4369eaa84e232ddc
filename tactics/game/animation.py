"""Resumable animation cursors.

Movement and skill resolution take time on screen. Instead of suspending,
each animation is a cursor that the tick driver advances with the frame's
delta time until it reports DONE.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..core.data import Vector2
from ..core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .tile import Tile
    from .pathfinding.path_result import PathResult


class AnimationStatus(Enum):
    IN_PROGRESS = auto()
    DONE = auto()


@dataclass
class MovementAnimation:
    """Walks a path one tile at a time.

    `path_index` is the tile the unit last reached and `fraction` is how far
    it is along the segment to the next one.
    """
    path: "PathResult"
    speed: float = 6.0  # tiles per second
    path_index: int = 0
    fraction: float = 0.0

    def __post_init__(self):
        if not self.path.is_valid:
            raise InvalidArgumentError("Cannot animate an invalid path")
        if self.speed <= 0:
            raise InvalidArgumentError(f"Animation speed must be positive, got {self.speed}")

    @property
    def is_done(self) -> bool:
        return self.path_index >= len(self.path.tiles) - 1

    @property
    def current_tile(self) -> "Tile":
        return self.path.tiles[self.path_index]

    def advance(self, delta_time: float) -> AnimationStatus:
        if self.is_done:
            return AnimationStatus.DONE

        self.fraction += max(delta_time, 0.0) * self.speed
        while self.fraction >= 1.0 and not self.is_done:
            self.fraction -= 1.0
            self.path_index += 1

        if self.is_done:
            self.fraction = 0.0
            return AnimationStatus.DONE
        return AnimationStatus.IN_PROGRESS

    def interpolated_position(self) -> tuple[float, float]:
        """Fractional (y, x) position between the current and next tile."""
        here = self.current_tile.position
        if self.is_done:
            return (float(here.y), float(here.x))
        there: Vector2 = self.path.tiles[self.path_index + 1].position
        return (here.y + (there.y - here.y) * self.fraction,
                here.x + (there.x - here.x) * self.fraction)


@dataclass
class SkillAnimation:
    """Fixed-duration animation for a skill being resolved."""
    duration: float = 0.5
    target: Optional["Tile"] = None
    elapsed: float = field(default=0.0, init=False)

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidArgumentError(f"Animation duration cannot be negative, got {self.duration}")

    @property
    def is_done(self) -> bool:
        return self.elapsed >= self.duration

    def advance(self, delta_time: float) -> AnimationStatus:
        self.elapsed += max(delta_time, 0.0)
        return AnimationStatus.DONE if self.is_done else AnimationStatus.IN_PROGRESS
