from typing import Optional

from ..animation import AnimationStatus
from .base import TacticalState, TacticalStateId


class ActingUnitState(TacticalState):
    """Plays the active movement or skill animation. Input is ignored."""

    state_id = TacticalStateId.ACTING_UNIT

    def __init__(self, controller):
        super().__init__(controller)
        self.status = AnimationStatus.IN_PROGRESS

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        self.status = AnimationStatus.IN_PROGRESS
        self.clear_highlights()
        self.controller.menu.hide()

    def update(self) -> None:
        animation = self.controller.active_animation
        if animation is None:
            return
        self.status = animation.advance(self.controller.delta_time)

    def transition(self) -> None:
        if self.status == AnimationStatus.DONE:
            self.status = AnimationStatus.IN_PROGRESS
            self.controller.finish_action()
