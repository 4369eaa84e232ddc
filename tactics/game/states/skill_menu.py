from typing import Optional

from ...core.exceptions import InvalidArgumentError
from .base import TacticalState, TacticalStateId


class SkillMenuState(TacticalState):
    """Lists the selected unit's skills."""

    state_id = TacticalStateId.SKILL_MENU

    def __init__(self, controller):
        super().__init__(controller)
        self.index = 0

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        self.controller.menu.show_skill_menu(self.unit)
        self.index = 0

    def exit(self) -> None:
        self.controller.menu.hide()

    def vertical_key(self, direction: int) -> None:
        if self.unit.skills:
            self.index = (self.index + direction) % len(self.unit.skills)

    def confirm_key(self) -> None:
        self.on_click_button(self.index)

    def cancel_key(self) -> None:
        self.controller.change_state(TacticalStateId.MAIN_MENU)

    def on_click_button(self, index: int) -> None:
        try:
            skill = self.unit.get_skill_by_index(index)
        except InvalidArgumentError as e:
            self.log(str(e), "WARNING", "WARNING")
            return

        self.index = index
        self.controller.select_skill(skill)
        self.controller.change_state(TacticalStateId.TARGETING)
