"""
Battle controller.

Owns everything one battle needs and wires it together at construction:
the map (which also holds the unit registry), the pathfinder, the event bus,
the turn state machine and the menu model. Turn states reach the rest of the
battle only through this object.

Tick model: tick(delta_time) runs the active state's update() to completion,
then its transition() check, then drains the event queue.
"""

from typing import Optional, Union, TYPE_CHECKING

from ..core.config import BattleConfig
from ..core.data import Vector2, Team, TEAM_NAMES
from ..core.events import (
    EventManager,
    GameEvent,
    UnitSelected,
    SkillSelected,
    TurnChanged,
    MovementComplete,
    ActionComplete,
    UnitMoved,
    UnitDefeated,
    SkillResolved,
    LogMessage,
)
from ..core.exceptions import InvalidArgumentError, InvariantViolationError
from .animation import MovementAnimation, SkillAnimation
from .entities.skills import SkillContext
from .log_manager import LogLevel
from .menu import TacticalMenu
from .pathfinding.pathfinder import Pathfinder
from .states.base import TacticalStateId
from .states.state_machine import TacticalStateMachine

if TYPE_CHECKING:
    from .entities.skills import SkillData
    from .entities.unit import Unit
    from .map import GameMap
    from .pathfinding.path_result import PathResult
    from .tile import Tile


class BattleController:
    """Coordinates turn flow, movement and skills for one battle."""

    def __init__(
        self,
        game_map: "GameMap",
        event_manager: EventManager,
        config: Optional[BattleConfig] = None,
        pathfinder: Optional[Pathfinder] = None,
    ):
        """Initialize the controller.

        Args:
            game_map: Grid and unit registry (required)
            event_manager: Event bus for lifecycle and log events (required)
            config: Battle settings, defaults when omitted
            pathfinder: Search engine, built over game_map when omitted
        """
        self.game_map = game_map
        self.event_manager = event_manager
        self.config = config or BattleConfig()
        self.pathfinder = pathfinder or Pathfinder(game_map)
        self.menu = TacticalMenu()

        self.current_team = Team.PLAYER
        self.round_number = 1
        self.delta_time = 0.0
        self.cursor = Vector2(0, 0)

        self.selected_unit: Optional["Unit"] = None
        self.selected_skill: Optional["SkillData"] = None

        self.active_animation: Optional[Union[MovementAnimation, SkillAnimation]] = None
        self._acting_unit: Optional["Unit"] = None
        self._pending_skill: Optional[SkillContext] = None

        self.state_machine = TacticalStateMachine(self)

    # ============== Lifecycle ==============

    def start_battle(self, first_team: Team = Team.PLAYER) -> None:
        """Reset all units and hand control to `first_team`."""
        self.current_team = first_team
        self.round_number = 1
        for unit in self.game_map.units:
            unit.reset_turn_flags()
        self.refresh_available_paths()

        self.emit_log(
            f"Battle started with {len(self.game_map.units)} units, {TEAM_NAMES[first_team]} moves first",
            "SYSTEM", "INFO",
        )
        self.publish(TurnChanged(turn=self.round_number, team=first_team))
        self.state_machine.enter_state(self._turn_state_for(first_team))
        self.flush_events()

    def tick(self, delta_time: float) -> None:
        """Advance the battle by one frame."""
        self.delta_time = delta_time
        self.state_machine.update()
        self.flush_events()

    def run_until_player_turn(self, delta_time: float = 0.1, max_ticks: int = 10000) -> int:
        """Tick until the player is choosing a unit again. Returns ticks used."""
        for ticks in range(1, max_ticks + 1):
            self.tick(delta_time)
            if (self.current_team == Team.PLAYER
                    and self.state_machine.current_id == TacticalStateId.UNIT_CHOICE) or self.is_battle_over:
                return ticks
        raise InvariantViolationError(f"Enemy turn did not finish within {max_ticks} ticks")

    @property
    def current_state_id(self) -> Optional[TacticalStateId]:
        return self.state_machine.current_id

    @property
    def winner(self) -> Optional[Team]:
        teams = {unit.team for unit in self.game_map.units}
        if len(teams) == 1:
            return teams.pop()
        return None

    @property
    def is_battle_over(self) -> bool:
        teams = {unit.team for unit in self.game_map.units}
        return len(teams) < 2

    # ============== Events and logging ==============

    def publish(self, event: GameEvent) -> None:
        self.event_manager.publish(event, source="BattleController")

    def flush_events(self) -> int:
        if not self.event_manager.has_queued_events():
            return 0
        return self.event_manager.process_events()

    def emit_log(
        self,
        message: str,
        category: str = "SYSTEM",
        level: Optional[Union[str, LogLevel]] = None,
        source: str = "BattleController",
    ) -> None:
        """Emit a log message event."""
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.event_manager.publish(
            LogMessage(
                turn=self.round_number,
                message=message,
                category=category,
                level=level,
                source=source,
            ),
            source=source,
        )

    # ============== State and cursor ==============

    def change_state(self, state_id: TacticalStateId) -> None:
        self.state_machine.enter_state(state_id)

    def _turn_state_for(self, team: Team) -> TacticalStateId:
        return TacticalStateId.UNIT_CHOICE if team == Team.PLAYER else TacticalStateId.ENEMY_TURN

    def set_cursor(self, position: Vector2) -> None:
        if not self.game_map.is_valid_position(position):
            raise InvalidArgumentError(f"Cursor position {position} is outside the grid")
        self.cursor = position

    def move_cursor(self, delta: Vector2) -> bool:
        """Move the cursor by `delta`, clamped to the grid."""
        target = self.cursor + delta
        clamped = Vector2(
            min(max(target.y, 0), self.game_map.height - 1),
            min(max(target.x, 0), self.game_map.width - 1),
        )
        if clamped == self.cursor:
            return False
        self.cursor = clamped
        return True

    def ready_units(self) -> list["Unit"]:
        """Units of the active side that have not ended their turn."""
        return [
            unit for unit in self.game_map.get_units_by_team(self.current_team)
            if not unit.turn_ended and unit.current_tile is not None
        ]

    # ============== Selection ==============

    def select_unit(self, unit: "Unit") -> None:
        self.selected_unit = unit
        self.selected_skill = None
        self.refresh_unit_paths(unit)
        self.publish(UnitSelected(turn=self.round_number, unit=unit))
        self.emit_log(f"{unit.name} selected", "INPUT")

    def select_skill(self, skill: "SkillData") -> None:
        if self.selected_unit is None:
            raise InvariantViolationError("Skill selected without a selected unit")
        self.selected_skill = skill
        self.publish(SkillSelected(turn=self.round_number, unit=self.selected_unit, skill=skill))
        self.emit_log(f"{self.selected_unit.name} readies {skill.name}", "BATTLE", "DEBUG")

    def clear_selection(self) -> None:
        self.selected_unit = None
        self.selected_skill = None

    # ============== Paths ==============

    def refresh_unit_paths(self, unit: "Unit") -> dict["Tile", "PathResult"]:
        if unit.current_tile is None:
            unit.available_paths = {}
        else:
            unit.available_paths = self.pathfinder.get_all_paths_from(unit.current_tile, unit)
        return unit.available_paths

    def refresh_available_paths(self) -> None:
        for unit in self.game_map.units:
            self.refresh_unit_paths(unit)

    # ============== Movement ==============

    def move_unit_path(self, unit: "Unit", path: "PathResult") -> None:
        """Start walking `unit` along `path` and hand over to ActingUnit."""
        if not path.is_valid or path.start is not unit.current_tile:
            raise InvariantViolationError(f"Path does not start at {unit.name}'s tile")
        if unit.movement_done:
            raise InvariantViolationError(f"{unit.name} has already moved this turn")

        self._acting_unit = unit
        self._pending_skill = None
        self.active_animation = MovementAnimation(path, self.config.move_speed)
        self.emit_log(
            f"{unit.name} moves to {path.destination.position} (cost {path.cost})", "MOVEMENT", "INFO"
        )
        self.change_state(TacticalStateId.ACTING_UNIT)

    def revert_movement(self, unit: "Unit") -> None:
        """Put a unit back on the tile it stood on before an unconfirmed move."""
        if unit.previous_tile is None:
            return
        origin = self.game_map.move_unit(unit, unit.previous_tile)
        unit.previous_tile = None
        unit.movement_done = False
        self.refresh_unit_paths(unit)
        self.publish(UnitMoved(turn=self.round_number, unit=unit, from_position=origin.position))
        self.emit_log(f"{unit.name} returns to {unit.position}", "MOVEMENT", "INFO")

    def handle_movement_complete(self, unit: "Unit") -> None:
        unit.movement_done = True
        self.publish(MovementComplete(turn=self.round_number, unit=unit))

        if unit.team == Team.PLAYER and unit.has_remaining_actions:
            self.change_state(TacticalStateId.MAIN_MENU)
        else:
            self.end_turn()

    # ============== Skills ==============

    def skill_range_tiles(self, unit: "Unit", skill: "SkillData") -> list["Tile"]:
        """Tiles `unit` may target with `skill` from where it stands."""
        tiles = self.game_map.calculate_area_tiles(unit.position, skill.area_of_effect.get_offsets())
        if skill.can_target_self and unit.current_tile not in tiles:
            tiles.insert(0, unit.current_tile)
        return tiles

    def skill_effect_tiles(self, skill: "SkillData", target: "Tile") -> list["Tile"]:
        return self.game_map.calculate_area_tiles(target.position, skill.get_effect_offsets())

    def execute_skill(self, unit: "Unit", skill: "SkillData", target: "Tile") -> None:
        """Start resolving `skill` on `target` and hand over to ActingUnit."""
        if unit.action_done:
            raise InvariantViolationError(f"{unit.name} has already acted this turn")

        self._acting_unit = unit
        self._pending_skill = SkillContext(unit, skill, self.skill_effect_tiles(skill, target))
        self.active_animation = SkillAnimation(self.config.skill_duration, target=target)
        self.emit_log(f"{unit.name} uses {skill.name} on {target.position}", "BATTLE", "INFO")
        self.change_state(TacticalStateId.ACTING_UNIT)

    def handle_action_complete(self, unit: "Unit") -> None:
        unit.action_done = True
        unit.previous_tile = None
        self.publish(ActionComplete(turn=self.round_number, unit=unit))

        if unit.team == Team.PLAYER and unit.has_remaining_actions and unit.current_tile is not None:
            self.change_state(TacticalStateId.MAIN_MENU)
        else:
            self.end_turn()

    # ============== Acting ==============

    def finish_action(self) -> None:
        """Commit the finished animation and run the matching completion callback."""
        unit = self._acting_unit
        animation = self.active_animation
        skill_context = self._pending_skill
        self._acting_unit = None
        self.active_animation = None
        self._pending_skill = None

        if unit is None:
            raise InvariantViolationError("Action finished with no acting unit")

        if isinstance(animation, MovementAnimation):
            destination = animation.path.destination
            unit.previous_tile = unit.current_tile
            origin = self.game_map.move_unit(unit, destination)
            self.publish(UnitMoved(turn=self.round_number, unit=unit, from_position=origin.position))
            self.handle_movement_complete(unit)
            return

        if skill_context is not None:
            self._resolve_skill(skill_context)
        self.handle_action_complete(unit)

    def _resolve_skill(self, context: SkillContext) -> None:
        outcomes = context.resolve()
        self.publish(SkillResolved(
            turn=self.round_number, unit=context.user, skill=context.skill, outcomes=tuple(outcomes)
        ))
        for outcome in outcomes:
            self.emit_log(f"{context.skill.name} hits {outcome.target.name} for {outcome.amount}", "BATTLE", "INFO")
            if outcome.defeated:
                self.game_map.remove_unit(outcome.target)
                self.publish(UnitDefeated(turn=self.round_number, unit=outcome.target))
                self.emit_log(f"{outcome.target.name} is defeated", "BATTLE", "INFO")

    # ============== Turn flow ==============

    def end_turn(self) -> None:
        """End the selected unit's turn and pick what happens next.

        Calling this again for a unit that has already ended its turn does
        not change that unit.
        """
        unit = self.selected_unit
        if unit is not None and unit.end_turn():
            self.emit_log(f"{unit.name} ends its turn", "TURN", "DEBUG")
        self.clear_selection()
        self.refresh_available_paths()

        if self.is_battle_over:
            winner = self.winner
            self.emit_log(
                f"Battle over: {TEAM_NAMES[winner] + ' wins' if winner else 'no units left'}", "SYSTEM", "INFO"
            )
            self.menu.hide()
            return

        if self.ready_units():
            self.change_state(self._turn_state_for(self.current_team))
            return

        opponent = self.current_team.opponent
        for other in self.game_map.get_units_by_team(opponent):
            other.reset_turn_flags()

        self.current_team = opponent
        if opponent == Team.PLAYER:
            self.round_number += 1

        self.publish(TurnChanged(turn=self.round_number, team=opponent))
        self.emit_log(f"{TEAM_NAMES[opponent]} turn (round {self.round_number})", "TURN", "INFO")
        self.change_state(self._turn_state_for(opponent))
