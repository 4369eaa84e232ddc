"""Battle events and their payloads.

This module defines the events that the battle controller, turn states and
managers publish through the EventManager.

Event Design Principles:
- Events are immutable dataclasses with rich object payloads
- All events carry the battle round they were raised in
- Events use proper enums instead of magic strings
- Lifecycle events (selection, movement, actions, turn changes) are the
  contract with presentation collaborators
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from ..data import Team

if TYPE_CHECKING:
    from ..data.data_structures import Vector2
    from ...game.entities.unit import Unit
    from ...game.entities.skills import SkillData, SkillOutcome
    from ...game.log_manager import LogLevel
    from ...game.states.base import TacticalStateId


class EventType(Enum):
    """Types of battle events that managers can subscribe to."""
    # Lifecycle events
    UNIT_SELECTED = auto()
    SKILL_SELECTED = auto()
    TURN_CHANGED = auto()
    MOVEMENT_COMPLETE = auto()
    ACTION_COMPLETE = auto()

    # Unit events
    UNIT_MOVED = auto()
    UNIT_DEFEATED = auto()
    SKILL_RESOLVED = auto()

    # State machine
    STATE_CHANGED = auto()

    # Logging events
    LOG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all battle events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class UnitSelected(GameEvent):
    """Event emitted when the player picks a unit to act with."""
    unit: "Unit"

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.UNIT_SELECTED)


@dataclass(frozen=True)
class SkillSelected(GameEvent):
    """Event emitted when a skill is chosen from the skill menu."""
    unit: "Unit"
    skill: "SkillData"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SKILL_SELECTED)


@dataclass(frozen=True)
class TurnChanged(GameEvent):
    """Event emitted when control passes to the other team."""
    team: Team

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_CHANGED)


@dataclass(frozen=True)
class MovementComplete(GameEvent):
    """Event emitted when a unit finishes walking its path."""
    unit: "Unit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MOVEMENT_COMPLETE)


@dataclass(frozen=True)
class ActionComplete(GameEvent):
    """Event emitted when a unit finishes resolving a skill."""
    unit: "Unit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTION_COMPLETE)


@dataclass(frozen=True)
class UnitMoved(GameEvent):
    """Event emitted when a unit's logical tile changes."""
    unit: "Unit"  # unit.position contains destination after movement
    from_position: "Vector2"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_MOVED)


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Event emitted when a unit is removed from the battle."""
    unit: "Unit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class SkillResolved(GameEvent):
    """Event emitted after a skill has been applied to its targets."""
    unit: "Unit"
    skill: "SkillData"
    outcomes: tuple["SkillOutcome", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SKILL_RESOLVED)


@dataclass(frozen=True)
class StateChanged(GameEvent):
    """Event emitted after the turn state machine enters a new state."""
    previous_state: Optional["TacticalStateId"]
    new_state: "TacticalStateId"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.STATE_CHANGED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: "LogLevel"
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event emitted when the log should be written to disk."""
    directory: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
