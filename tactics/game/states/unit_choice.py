from typing import Optional, TYPE_CHECKING

from ...core.data import HighlightColor
from .base import TacticalState, TacticalStateId

if TYPE_CHECKING:
    from ..tile import Tile


class UnitChoiceState(TacticalState):
    """The player moves a cursor over the grid and picks a unit to act with."""

    state_id = TacticalStateId.UNIT_CHOICE

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        self.controller.menu.hide()
        self.controller.clear_selection()

        first_ready = next(iter(self.controller.ready_units()), None)
        if previous in (None, TacticalStateId.ENEMY_TURN, TacticalStateId.ACTING_UNIT) and first_ready is not None:
            self.controller.set_cursor(first_ready.position)
        self.update_rendering()

    def exit(self) -> None:
        self.clear_highlights()

    def horizontal_key(self, direction: int) -> None:
        self.move_cursor(0, direction)

    def vertical_key(self, direction: int) -> None:
        self.move_cursor(direction, 0)

    def confirm_key(self) -> None:
        tile = self.cursor_tile
        unit = tile.occupying_unit if tile is not None else None

        if unit is None:
            self.log(f"No unit at {self.controller.cursor}", "INPUT")
            return
        if unit.team != self.controller.current_team:
            self.log(f"{unit.name} is not on the active side", "INPUT")
            return
        if unit.turn_ended:
            self.log(f"{unit.name} has already ended its turn", "INPUT")
            return

        self.controller.select_unit(unit)
        self.controller.change_state(TacticalStateId.MAIN_MENU)

    def on_tile_clicked(self, tile: "Tile") -> None:
        self.place_cursor(tile)
        self.confirm_key()

    def on_tile_hovered(self, tile: "Tile") -> None:
        self.place_cursor(tile)

    def update_rendering(self) -> None:
        self.clear_highlights()
        ready = [unit.current_tile for unit in self.controller.ready_units()]
        self.illuminate(ready, HighlightColor.SELECTED)
        tile = self.cursor_tile
        if tile is not None:
            self.illuminate([tile], HighlightColor.CURSOR)
