"""Passive model of the battle menus.

The turn states fill this in; a UI collaborator reads it to draw buttons.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .entities.unit import Unit


class MenuKind(Enum):
    NONE = auto()
    MAIN = auto()
    SKILLS = auto()


class MenuOption(Enum):
    """Main menu buttons, in display order."""
    MOVE = 0
    SKILLS = 1
    ITEMS = 2
    STATUS = 3
    END_TURN = 4


MENU_OPTION_LABELS = {
    MenuOption.MOVE: "Move",
    MenuOption.SKILLS: "Skills",
    MenuOption.ITEMS: "Items",
    MenuOption.STATUS: "Status",
    MenuOption.END_TURN: "End Turn",
}


@dataclass
class MenuItem:
    label: str
    enabled: bool = True


@dataclass
class TacticalMenu:
    kind: MenuKind = MenuKind.NONE
    items: list[MenuItem] = field(default_factory=list)
    unit: Optional["Unit"] = None

    @property
    def is_visible(self) -> bool:
        return self.kind != MenuKind.NONE

    def show_main_menu(self, unit: "Unit") -> None:
        self.kind = MenuKind.MAIN
        self.unit = unit
        enabled = {
            MenuOption.MOVE: not unit.movement_done,
            MenuOption.SKILLS: not unit.action_done and bool(unit.skills),
        }
        self.items = [
            MenuItem(MENU_OPTION_LABELS[option], enabled.get(option, True))
            for option in MenuOption
        ]

    def show_skill_menu(self, unit: "Unit") -> None:
        self.kind = MenuKind.SKILLS
        self.unit = unit
        self.items = [MenuItem(skill.name) for skill in unit.skills]

    def hide(self) -> None:
        self.kind = MenuKind.NONE
        self.items = []
        self.unit = None

    def labels(self) -> list[str]:
        return [item.label for item in self.items]
