"""Shared contract for the turn states.

Every state gets the same set of hooks. The state machine calls enter/exit
around each transition and update/transition once per tick; the input
dispatcher calls the key, button and tile handlers of whichever state is
active. Handlers a state does not care about are no-ops.
"""

from enum import Enum, auto
from typing import Iterable, Optional, TYPE_CHECKING

from ...core.data import Vector2, HighlightColor

if TYPE_CHECKING:
    from ..controller import BattleController
    from ..entities.unit import Unit
    from ..tile import Tile


class TacticalStateId(Enum):
    UNIT_CHOICE = auto()
    MAIN_MENU = auto()
    UNIT_MOVEMENT = auto()
    SKILL_MENU = auto()
    TARGETING = auto()
    ACTING_UNIT = auto()
    ENEMY_TURN = auto()


class TacticalState:
    """Base class for the turn states."""

    state_id: TacticalStateId

    def __init__(self, controller: "BattleController"):
        self.controller = controller

    # ============== Lifecycle ==============

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        pass

    def exit(self) -> None:
        pass

    def update(self) -> None:
        pass

    def transition(self) -> None:
        pass

    # ============== Input ==============

    def horizontal_key(self, direction: int) -> None:
        pass

    def vertical_key(self, direction: int) -> None:
        pass

    def confirm_key(self) -> None:
        pass

    def cancel_key(self) -> None:
        pass

    def on_click_button(self, index: int) -> None:
        pass

    def on_tile_clicked(self, tile: "Tile") -> None:
        pass

    def on_tile_hovered(self, tile: "Tile") -> None:
        pass

    def on_tile_hover_exited(self) -> None:
        pass

    def update_rendering(self) -> None:
        pass

    # ============== Helpers ==============

    @property
    def unit(self) -> Optional["Unit"]:
        return self.controller.selected_unit

    @property
    def cursor_tile(self) -> Optional["Tile"]:
        return self.controller.game_map.tile_at(self.controller.cursor)

    def move_cursor(self, dy: int, dx: int) -> bool:
        """Shift the cursor, clamped to the grid. Returns True if it moved."""
        moved = self.controller.move_cursor(Vector2(dy, dx))
        if moved:
            self.update_rendering()
        return moved

    def place_cursor(self, tile: "Tile") -> None:
        self.controller.set_cursor(tile.position)
        self.update_rendering()

    def illuminate(self, tiles: Iterable["Tile"], highlight: HighlightColor) -> None:
        color = self.controller.config.color_for(highlight)
        for tile in tiles:
            tile.illuminate(color)

    def clear_highlights(self) -> None:
        self.controller.game_map.reset_all_tiles()

    def log(self, message: str, category: str = "STATE", level: Optional[str] = None) -> None:
        self.controller.emit_log(message, category, level, source=type(self).__name__)
