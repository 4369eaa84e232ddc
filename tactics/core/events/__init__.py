"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing of the battle core:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Lifecycle, unit, state and logging event definitions
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    UnitSelected,
    SkillSelected,
    TurnChanged,
    MovementComplete,
    ActionComplete,
    UnitMoved,
    UnitDefeated,
    SkillResolved,
    StateChanged,
    LogMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "UnitSelected",
    "SkillSelected",
    "TurnChanged",
    "MovementComplete",
    "ActionComplete",
    "UnitMoved",
    "UnitDefeated",
    "SkillResolved",
    "StateChanged",
    "LogMessage",
    "LogSaveRequested",
]
