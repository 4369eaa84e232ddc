from typing import Optional, TYPE_CHECKING

from ...core.data import HighlightColor
from .base import TacticalState, TacticalStateId

if TYPE_CHECKING:
    from ..pathfinding.path_result import PathResult
    from ..tile import Tile


class UnitMovementState(TacticalState):
    """Cursor over the selected unit's reachable tiles; confirm moves the unit."""

    state_id = TacticalStateId.UNIT_MOVEMENT

    def __init__(self, controller):
        super().__init__(controller)
        self.selected_path: Optional["PathResult"] = None

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        unit = self.unit
        if not unit.available_paths:
            self.controller.refresh_unit_paths(unit)
        self.controller.set_cursor(unit.position)
        self.selected_path = None
        self.update_rendering()

    def exit(self) -> None:
        self.selected_path = None
        self.clear_highlights()

    def horizontal_key(self, direction: int) -> None:
        self.move_cursor(0, direction)

    def vertical_key(self, direction: int) -> None:
        self.move_cursor(direction, 0)

    def confirm_key(self) -> None:
        if self.selected_path is None or not self.selected_path.is_valid:
            self.log(f"No path to {self.controller.cursor}", "INPUT")
            return
        self.controller.move_unit_path(self.unit, self.selected_path)

    def cancel_key(self) -> None:
        self.controller.change_state(TacticalStateId.MAIN_MENU)

    def on_tile_clicked(self, tile: "Tile") -> None:
        self.place_cursor(tile)
        self.confirm_key()

    def on_tile_hovered(self, tile: "Tile") -> None:
        self.place_cursor(tile)

    def on_tile_hover_exited(self) -> None:
        self.selected_path = None
        self._draw_highlights()

    def update_rendering(self) -> None:
        self.selected_path = self.unit.available_paths.get(self.cursor_tile)
        self._draw_highlights()

    def _draw_highlights(self) -> None:
        self.clear_highlights()
        self.illuminate(self.unit.available_paths.keys(), HighlightColor.MOVE)
        if self.selected_path is not None:
            self.illuminate(self.selected_path.tiles, HighlightColor.PATH)
        tile = self.cursor_tile
        if tile is not None:
            self.illuminate([tile], HighlightColor.CURSOR)
