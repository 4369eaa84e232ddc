"""Turn states.

This package contains the turn flow of a battle:
- base.py: TacticalStateId and the shared TacticalState contract
- unit_choice.py, main_menu.py, unit_movement.py, skill_menu.py,
  targeting.py, acting_unit.py, enemy_turn.py: one class per state
- state_machine.py: Dispatch table and ordered enter/exit transitions
"""

from .base import TacticalState, TacticalStateId
from .unit_choice import UnitChoiceState
from .main_menu import MainMenuState
from .unit_movement import UnitMovementState
from .skill_menu import SkillMenuState
from .targeting import TargetingState
from .acting_unit import ActingUnitState
from .enemy_turn import EnemyTurnState
from .state_machine import TacticalStateMachine, STATE_CLASSES

__all__ = [
    "TacticalState",
    "TacticalStateId",
    "UnitChoiceState",
    "MainMenuState",
    "UnitMovementState",
    "SkillMenuState",
    "TargetingState",
    "ActingUnitState",
    "EnemyTurnState",
    "TacticalStateMachine",
    "STATE_CLASSES",
]
