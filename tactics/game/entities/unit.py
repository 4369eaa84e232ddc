"""Battle unit.

A Unit carries its movement budget, vertical traversal limits, combat stats,
skills and per-turn flags. Position is derived from the tile it stands on;
the grid owns tiles and only holds a weak reference back to the unit.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import uuid

from ...core.data import Team, Vector2
from ...core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ..tile import Tile
    from ..pathfinding.path_result import PathResult
    from .skills import SkillData


@dataclass
class MovementStats:
    """Per-unit traversal budget used by the path search."""
    movement_points: int = 4
    jump_height: int = 1
    fall_height: int = 10

    def __post_init__(self):
        if self.movement_points < 0 or self.jump_height < 0 or self.fall_height < 0:
            raise InvalidArgumentError(f"Movement stats cannot be negative: {self}")


@dataclass
class CombatStats:
    """Statistics used when skills resolve."""
    hp_max: int = 20
    attack: int = 5
    defense: int = 3


class Unit:
    """A unit taking part in a battle.

    Property Access Patterns:
    1. **Movement** (read by the path search): unit.movement_points,
       unit.jump_height, unit.fall_height
    2. **Turn flags** (driven by the turn states): unit.turn_ended,
       unit.movement_done, unit.action_done
    3. **Combat**: unit.hp_current, unit.attack, unit.defense
    """

    def __init__(
        self,
        name: str,
        team: Team,
        movement: Optional[MovementStats] = None,
        combat: Optional[CombatStats] = None,
        skills: Optional[list["SkillData"]] = None,
        unit_id: Optional[str] = None,
    ):
        """Initialize a unit that is not yet on a map.

        Args:
            name: Display name
            team: Team affiliation
            movement: Movement budget and jump/fall limits
            combat: HP, attack and defense
            skills: Skills in menu order
            unit_id: Optional stable identifier (generated when omitted)
        """
        self.name = name
        self.team = team
        self.unit_id = unit_id or f"{name.lower()}_{uuid.uuid4().hex[:8]}"
        self.movement = movement or MovementStats()
        self.combat = combat or CombatStats()
        self.skills: list["SkillData"] = list(skills or [])

        self.hp_current = self.combat.hp_max

        self.current_tile: Optional["Tile"] = None
        # Tile the unit stood on before an unconfirmed move
        self.previous_tile: Optional["Tile"] = None

        self.turn_ended = False
        self.movement_done = False
        self.action_done = False

        self.available_paths: dict["Tile", "PathResult"] = {}

    # ============== Core Properties ==============

    @property
    def position(self) -> Vector2:
        if self.current_tile is None:
            raise InvalidArgumentError(f"{self.name} is not on the map")
        return self.current_tile.position

    @property
    def movement_points(self) -> int:
        return self.movement.movement_points

    @property
    def jump_height(self) -> int:
        return self.movement.jump_height

    @property
    def fall_height(self) -> int:
        return self.movement.fall_height

    @property
    def hp_max(self) -> int:
        return self.combat.hp_max

    @property
    def attack(self) -> int:
        return self.combat.attack

    @property
    def defense(self) -> int:
        return self.combat.defense

    @property
    def is_alive(self) -> bool:
        return self.hp_current > 0

    @property
    def has_remaining_actions(self) -> bool:
        return not (self.movement_done and self.action_done)

    # ============== Turn flags ==============

    def reset_turn_flags(self) -> None:
        """Clear per-turn flags at the start of the unit's side turn."""
        self.turn_ended = False
        self.movement_done = False
        self.action_done = False
        self.previous_tile = None

    def end_turn(self) -> bool:
        """Mark the unit done for this turn.

        Returns:
            False if the unit had already ended its turn
        """
        if self.turn_ended:
            return False
        self.turn_ended = True
        self.previous_tile = None
        return True

    # ============== Combat ==============

    def take_damage(self, amount: int) -> int:
        """Apply damage and return the HP actually lost."""
        lost = min(max(amount, 0), self.hp_current)
        self.hp_current -= lost
        return lost

    def heal(self, amount: int) -> int:
        """Restore HP up to the maximum and return the HP actually gained."""
        gained = min(max(amount, 0), self.hp_max - self.hp_current)
        self.hp_current += gained
        return gained

    # ============== Skills ==============

    def get_skill_by_index(self, index: int) -> "SkillData":
        if not 0 <= index < len(self.skills):
            raise InvalidArgumentError(
                f"{self.name} has no skill at index {index} ({len(self.skills)} skills)"
            )
        return self.skills[index]

    def __repr__(self) -> str:
        where = self.current_tile.position if self.current_tile is not None else "off-map"
        return f"Unit({self.name}, {self.team.name}, {where})"
