from typing import Optional, TYPE_CHECKING

from ...core.data import HighlightColor
from .base import TacticalState, TacticalStateId

if TYPE_CHECKING:
    from ..tile import Tile


class TargetingState(TacticalState):
    """Cursor plus skill range and area-of-effect highlight."""

    state_id = TacticalStateId.TARGETING

    def __init__(self, controller):
        super().__init__(controller)
        self.range_tiles: list["Tile"] = []

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        self.range_tiles = self.controller.skill_range_tiles(self.unit, self.controller.selected_skill)
        self.controller.set_cursor(self.unit.position)
        self.update_rendering()

    def exit(self) -> None:
        self.range_tiles = []
        self.clear_highlights()

    def horizontal_key(self, direction: int) -> None:
        self.move_cursor(0, direction)

    def vertical_key(self, direction: int) -> None:
        self.move_cursor(direction, 0)

    def confirm_key(self) -> None:
        tile = self.cursor_tile
        if tile is None or not self.in_range(tile):
            self.log(f"{self.controller.cursor} is out of range", "INPUT")
            return
        self.controller.execute_skill(self.unit, self.controller.selected_skill, tile)

    def cancel_key(self) -> None:
        self.controller.change_state(TacticalStateId.SKILL_MENU)

    def on_tile_clicked(self, tile: "Tile") -> None:
        self.place_cursor(tile)
        self.confirm_key()

    def on_tile_hovered(self, tile: "Tile") -> None:
        self.place_cursor(tile)

    def in_range(self, tile: "Tile") -> bool:
        return any(t is tile for t in self.range_tiles)

    def update_rendering(self) -> None:
        self.clear_highlights()
        self.illuminate(self.range_tiles, HighlightColor.RANGE)
        tile = self.cursor_tile
        if tile is not None and self.in_range(tile):
            effect = self.controller.skill_effect_tiles(self.controller.selected_skill, tile)
            self.illuminate(effect, HighlightColor.EFFECT)
        if tile is not None:
            self.illuminate([tile], HighlightColor.CURSOR)
