"""Scenario loading.

A scenario YAML file describes the map (inline rows or a directory of CSV
layers), the skills available in the battle and the units with their stats.
Bad data raises GridConfigurationError before any battle state is built.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.config import BattleConfig
from ..core.data import Team, AreaShape, SkillType, TargetType
from ..core.exceptions import GridConfigurationError, TacticsError
from .entities.skills import SkillArea, SkillData
from .entities.unit import Unit, MovementStats, CombatStats
from .map import GameMap


@dataclass
class Scenario:
    """A fully built battle setup."""
    name: str
    game_map: GameMap
    description: str = ""
    starting_team: Team = Team.PLAYER
    skills: dict[str, SkillData] = field(default_factory=dict)

    @property
    def units(self) -> list[Unit]:
        return self.game_map.units


class ScenarioLoader:
    """Handles loading scenarios from YAML files."""

    def __init__(self, config: Optional[BattleConfig] = None):
        self.config = config or BattleConfig()

    def load_from_file(self, file_path: str) -> Scenario:
        """Load a scenario from a YAML file."""
        path_obj = Path(file_path)

        try:
            with open(path_obj, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise GridConfigurationError("Scenario file not found", str(path_obj)) from None
        except yaml.YAMLError as e:
            raise GridConfigurationError(f"Failed to parse YAML scenario: {e}", str(path_obj)) from e

        if not isinstance(data, dict):
            raise GridConfigurationError("Scenario file must contain a mapping", str(path_obj))

        return self.parse(data, str(path_obj.parent))

    def parse(self, data: dict[str, Any], base_dir: str = "") -> Scenario:
        """Build a scenario from already-parsed data."""
        game_map = self._parse_map(data.get("map"), base_dir)
        skills = {skill.name: skill for skill in (self._parse_skill(s) for s in data.get("skills", []) or [])}

        scenario = Scenario(
            name=data.get("name", "Unnamed Scenario"),
            description=data.get("description", ""),
            game_map=game_map,
            starting_team=_parse_enum(Team, data.get("starting_team", "PLAYER"), "starting_team"),
            skills=skills,
        )

        for unit_data in data.get("units", []) or []:
            self._place_unit(scenario, unit_data)

        return scenario

    def _parse_map(self, map_data: Any, base_dir: str) -> GameMap:
        if not isinstance(map_data, dict):
            raise GridConfigurationError("Scenario needs a 'map' section")

        if "source" in map_data:
            map_path = map_data["source"]
            if not os.path.isabs(map_path) and not os.path.exists(map_path):
                map_path = os.path.join(base_dir, map_path)
            return GameMap.from_csv_layers(map_path)

        if "heights" in map_data:
            return GameMap.from_rows(map_data["heights"], map_data.get("terrain"))

        raise GridConfigurationError("Map must give inline 'heights' rows or a 'source' directory")

    def _parse_skill(self, skill_data: dict[str, Any]) -> SkillData:
        try:
            return SkillData(
                name=skill_data["name"],
                skill_type=_parse_enum(SkillType, skill_data.get("type", "PHYSICAL_ATTACK"), "skill type"),
                target_type=_parse_enum(TargetType, skill_data.get("target", "ENEMY"), "target type"),
                power=int(skill_data.get("power", 0)),
                sp_cost=int(skill_data.get("sp_cost", 0)),
                area_of_effect=_parse_area(skill_data.get("range")) or SkillArea(),
                effect_area=_parse_area(skill_data.get("effect")),
                can_target_self=bool(skill_data.get("can_target_self", False)),
                description=skill_data.get("description", ""),
            )
        except KeyError as e:
            raise GridConfigurationError(f"Skill is missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise GridConfigurationError(f"Invalid skill data {skill_data!r}: {e}") from e

    def _place_unit(self, scenario: Scenario, unit_data: dict[str, Any]) -> Unit:
        try:
            name = unit_data["name"]
            x, y = unit_data["position"]
        except (KeyError, TypeError, ValueError) as e:
            raise GridConfigurationError(f"Unit needs a name and an [x, y] position: {unit_data!r}") from e

        missing = [s for s in unit_data.get("skills", []) or [] if s not in scenario.skills]
        if missing:
            raise GridConfigurationError(f"Unit {name} uses unknown skills: {', '.join(missing)}")

        try:
            unit = Unit(
                name=name,
                team=_parse_enum(Team, unit_data.get("team", "PLAYER"), "team"),
                movement=MovementStats(
                    movement_points=int(unit_data.get("movement_points", self.config.default_movement_points)),
                    jump_height=int(unit_data.get("jump_height", self.config.default_jump_height)),
                    fall_height=int(unit_data.get("fall_height", self.config.default_fall_height)),
                ),
                combat=CombatStats(
                    hp_max=int(unit_data.get("hp", 20)),
                    attack=int(unit_data.get("attack", 5)),
                    defense=int(unit_data.get("defense", 3)),
                ),
                skills=[scenario.skills[s] for s in unit_data.get("skills", []) or []],
                unit_id=unit_data.get("id"),
            )
            scenario.game_map.place_unit(unit, (int(y), int(x)))
        except (TacticsError, TypeError, ValueError) as e:
            raise GridConfigurationError(f"Cannot place unit {name}: {e}") from e
        return unit


def _parse_enum(enum_class, value: Any, what: str):
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class[str(value).upper()]
    except KeyError:
        raise GridConfigurationError(f"Unknown {what} '{value}'") from None


def _parse_area(area_data: Optional[dict[str, Any]]) -> Optional[SkillArea]:
    if area_data is None:
        return None
    return SkillArea(
        shape=_parse_enum(AreaShape, area_data.get("shape", "CIRCLE"), "area shape"),
        min_range=int(area_data.get("min", 0)),
        max_range=int(area_data.get("max", 1)),
    )
