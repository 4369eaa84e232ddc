"""Movement legality and cost rules.

Pure functions over tiles and a unit's movement stats. Nothing here mutates
the grid, so any number of searches may call them.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..tile import Tile
    from ..entities.unit import Unit


DEFAULT_STEP_COST = 1

# A jump is only considered when the first cell in the jump direction drops
# by more than this many height units.
CLIFF_LIP_DROP = 1


def can_traverse(from_tile: "Tile", to_tile: Optional["Tile"], unit: "Unit") -> bool:
    """Whether `unit` may take a single orthogonal step from one tile to another."""
    if to_tile is None:
        return False
    if not to_tile.is_walkable_for(unit):
        return False

    height_delta = to_tile.height - from_tile.height
    return -unit.fall_height <= height_delta <= unit.jump_height


def step_cost(tile: "Tile") -> int:
    """Movement points spent entering `tile` with a standard step."""
    cost = tile.move_cost
    return DEFAULT_STEP_COST if cost is None else cost


def is_cliff_lip(origin: "Tile", first: Optional["Tile"]) -> bool:
    """Whether the cell next to `origin` is low enough to jump off from."""
    if first is None:
        return False
    return origin.height - first.height > CLIFF_LIP_DROP


def can_land(origin: "Tile", candidate: "Tile", unit: "Unit") -> bool:
    """Whether `unit` may land on `candidate` when jumping from `origin`."""
    if not candidate.is_walkable_for(unit):
        return False

    drop = origin.height - candidate.height
    rise = -drop
    return drop <= unit.fall_height and rise <= unit.jump_height
