from typing import Optional

from ...core.data import HighlightColor
from ..menu import MenuOption
from .base import TacticalState, TacticalStateId


class MainMenuState(TacticalState):
    """Per-unit action menu: Move, Skills, Items, Status, End Turn."""

    state_id = TacticalStateId.MAIN_MENU

    def __init__(self, controller):
        super().__init__(controller)
        self.index = 0

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        unit = self.unit
        if unit is None:
            self.log("Main menu entered without a selected unit", "ERROR", "ERROR")
            self.controller.change_state(TacticalStateId.UNIT_CHOICE)
            return

        self.controller.menu.show_main_menu(unit)
        self.index = 0 if not unit.movement_done else MenuOption.SKILLS.value
        self.controller.set_cursor(unit.position)
        self.update_rendering()

    def exit(self) -> None:
        self.controller.menu.hide()
        self.clear_highlights()

    def vertical_key(self, direction: int) -> None:
        self.index = (self.index + direction) % len(MenuOption)

    def confirm_key(self) -> None:
        self.on_click_button(self.index)

    def cancel_key(self) -> None:
        unit = self.unit
        if unit is None:
            return
        if unit.action_done:
            self.log(f"{unit.name} has already acted; cannot undo", "INPUT")
            return
        if unit.movement_done:
            self.controller.revert_movement(unit)
        self.controller.change_state(TacticalStateId.UNIT_CHOICE)

    def on_click_button(self, index: int) -> None:
        try:
            option = MenuOption(index)
        except ValueError:
            self.log(f"Menu option {index} does not exist", "WARNING", "WARNING")
            return

        self.index = option.value
        unit = self.unit

        if option == MenuOption.MOVE:
            if unit.movement_done:
                self.log(f"{unit.name} has already moved", "INPUT")
                return
            self.controller.change_state(TacticalStateId.UNIT_MOVEMENT)
        elif option == MenuOption.SKILLS:
            if unit.action_done:
                self.log(f"{unit.name} has already acted", "INPUT")
                return
            if not unit.skills:
                self.log(f"{unit.name} has no skills", "INPUT")
                return
            self.controller.change_state(TacticalStateId.SKILL_MENU)
        elif option == MenuOption.ITEMS:
            self.log("Items are not available in this battle", "SYSTEM", "INFO")
        elif option == MenuOption.STATUS:
            self.log(
                f"{unit.name}: HP {unit.hp_current}/{unit.hp_max} "
                f"ATK {unit.attack} DEF {unit.defense} MOV {unit.movement_points}",
                "SYSTEM", "INFO",
            )
        elif option == MenuOption.END_TURN:
            self.controller.end_turn()

    def update_rendering(self) -> None:
        self.clear_highlights()
        if self.unit is not None:
            self.illuminate([self.unit.current_tile], HighlightColor.SELECTED)
