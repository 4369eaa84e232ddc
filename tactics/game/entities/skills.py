"""Skill definitions and resolution.

SkillArea describes a range pattern as grid offsets, SkillData is the static
description of a skill, and SkillContext applies a skill to the units standing
on the affected tiles.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

import numpy as np

from ...core.data import Vector2, VectorArray, AreaShape, SkillType, TargetType
from ...core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ..tile import Tile
    from .unit import Unit


@dataclass(frozen=True)
class SkillArea:
    """Offsets covered by a skill around an origin tile.

    Distances strictly greater than `min_range` and up to `max_range`
    (inclusive) are part of the area, so `min_range=0` excludes only the
    origin itself.
    """
    shape: AreaShape = AreaShape.CIRCLE
    min_range: int = 0
    max_range: int = 1

    def __post_init__(self):
        if self.min_range < 0 or self.max_range < 0:
            raise InvalidArgumentError(f"Skill ranges cannot be negative: {self}")

    def get_offsets(self) -> VectorArray:
        """Offsets (dy, dx) of every cell inside the pattern."""
        span = np.arange(-self.max_range, self.max_range + 1, dtype=np.int16)
        dy, dx = np.meshgrid(span, span, indexing="ij")
        manhattan = np.abs(dy) + np.abs(dx)

        if self.shape == AreaShape.CIRCLE:
            distance = manhattan
            mask = np.ones_like(distance, dtype=np.bool_)
        elif self.shape == AreaShape.SQUARE:
            distance = np.maximum(np.abs(dy), np.abs(dx))
            mask = np.ones_like(distance, dtype=np.bool_)
        else:
            distance = manhattan
            mask = (dy == 0) | (dx == 0)

        mask &= (distance > self.min_range) & (distance <= self.max_range)
        return VectorArray(np.column_stack((dy[mask], dx[mask])))


@dataclass(frozen=True)
class SkillData:
    """Static description of a skill."""
    name: str
    skill_type: SkillType = SkillType.PHYSICAL_ATTACK
    target_type: TargetType = TargetType.ENEMY
    power: int = 0
    sp_cost: int = 0
    area_of_effect: SkillArea = field(default_factory=SkillArea)
    effect_area: Optional[SkillArea] = None
    can_target_self: bool = False
    description: str = ""

    def get_effect_offsets(self) -> VectorArray:
        """Offsets hit around the targeted cell, always including the cell itself."""
        if self.effect_area is None:
            return VectorArray(np.zeros((1, 2), dtype=np.int16))
        offsets = self.effect_area.get_offsets()
        if offsets.contains(Vector2(0, 0)):
            return offsets
        return VectorArray(np.vstack((np.zeros((1, 2), dtype=np.int16), offsets.data)))


@dataclass(frozen=True)
class SkillOutcome:
    """Effect of a skill on one target."""
    target: "Unit"
    amount: int
    defeated: bool = False


@dataclass
class SkillContext:
    """A skill being used by one unit against a set of tiles."""
    user: "Unit"
    skill: SkillData
    affected_tiles: list["Tile"]
    targets: list["Unit"] = field(init=False)

    def __post_init__(self):
        self.targets = []
        for tile in self.affected_tiles:
            occupant = tile.occupying_unit
            if occupant is None or occupant in self.targets:
                continue
            if occupant is self.user and not self.skill.can_target_self:
                continue
            self.targets.append(occupant)

    def resolve(self) -> list[SkillOutcome]:
        """Apply the skill to every target and report what happened."""
        if self.skill.skill_type == SkillType.HEAL:
            return [
                SkillOutcome(target, target.heal(self.skill.power))
                for target in self.targets
            ]

        power = self.skill.power + self.user.attack
        outcomes = []
        for target in self.targets:
            damage = max(power - target.defense, 1)
            lost = target.take_damage(damage)
            outcomes.append(SkillOutcome(target, lost, defeated=not target.is_alive))
        return outcomes
