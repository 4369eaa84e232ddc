"""
Turn state machine.

Holds one instance of every turn state in a dispatch table keyed by
TacticalStateId. Exactly one state is active. A transition always calls the
old state's exit() before the new state's enter(previous); transitions
requested while another one is running (for example from inside enter())
are queued and applied in order once the current one finishes.
"""

from collections import deque
from typing import Optional, TYPE_CHECKING

from ...core.events import StateChanged
from ...core.exceptions import InvariantViolationError
from .base import TacticalState, TacticalStateId
from .unit_choice import UnitChoiceState
from .main_menu import MainMenuState
from .unit_movement import UnitMovementState
from .skill_menu import SkillMenuState
from .targeting import TargetingState
from .acting_unit import ActingUnitState
from .enemy_turn import EnemyTurnState

if TYPE_CHECKING:
    from ..controller import BattleController


STATE_CLASSES: dict[TacticalStateId, type[TacticalState]] = {
    TacticalStateId.UNIT_CHOICE: UnitChoiceState,
    TacticalStateId.MAIN_MENU: MainMenuState,
    TacticalStateId.UNIT_MOVEMENT: UnitMovementState,
    TacticalStateId.SKILL_MENU: SkillMenuState,
    TacticalStateId.TARGETING: TargetingState,
    TacticalStateId.ACTING_UNIT: ActingUnitState,
    TacticalStateId.ENEMY_TURN: EnemyTurnState,
}


class TacticalStateMachine:
    """Owns the turn states and the single active one."""

    def __init__(self, controller: "BattleController", history_size: int = 100):
        self.controller = controller
        self.states: dict[TacticalStateId, TacticalState] = {
            state_id: state_class(controller) for state_id, state_class in STATE_CLASSES.items()
        }
        self.current_id: Optional[TacticalStateId] = None
        self.history: deque[TacticalStateId] = deque(maxlen=history_size)
        self._pending: deque[TacticalStateId] = deque()
        self._transitioning = False

    @property
    def current_state(self) -> TacticalState:
        if self.current_id is None:
            raise InvariantViolationError("State machine has not been started")
        return self.states[self.current_id]

    @property
    def is_started(self) -> bool:
        return self.current_id is not None

    def enter_state(self, state_id: TacticalStateId) -> None:
        """Switch to `state_id`, or queue the switch if one is in progress."""
        if state_id not in self.states:
            raise InvariantViolationError(f"Unknown state {state_id}")

        if self._transitioning:
            self._pending.append(state_id)
            return

        self._transitioning = True
        try:
            self._switch(state_id)
            while self._pending:
                self._switch(self._pending.popleft())
        finally:
            self._transitioning = False
            self._pending.clear()

    def _switch(self, state_id: TacticalStateId) -> None:
        previous = self.current_id
        if previous is not None:
            self.states[previous].exit()

        self.current_id = state_id
        self.history.append(state_id)
        self.controller.emit_log(
            f"State {previous.name if previous else 'None'} -> {state_id.name}", "STATE",
            source="TacticalStateMachine",
        )
        self.controller.publish(StateChanged(
            turn=self.controller.round_number,
            previous_state=previous,
            new_state=state_id,
        ))
        self.states[state_id].enter(previous)

    def update(self) -> None:
        """Run one tick: the active state's update, then its transition check."""
        state = self.current_state
        state.update()
        # update() may have switched states through a controller callback
        self.current_state.transition()
