"""Routes input to the active turn state.

Each InputEvent is delivered straight to one handler of the state that is
active right now; there is no broadcast. Positions carried by tile events are
resolved against the map before the state sees them. Queued battle events
are drained after every delivery so subscribers see the effects at once.
"""

from typing import TYPE_CHECKING

from ..core.input import InputEvent, InputType

if TYPE_CHECKING:
    from .controller import BattleController


class InputDispatcher:
    """Delivers discrete input events to the controller's active state."""

    def __init__(self, controller: "BattleController"):
        self.controller = controller
        self.quit_requested = False

    def dispatch(self, event: InputEvent) -> bool:
        """Deliver one input event.

        Returns:
            True if the event was routed to a state handler
        """
        if event.event_type == InputType.QUIT:
            self.quit_requested = True
            return False

        state = self.controller.state_machine.current_state
        handled = True

        if event.event_type == InputType.HORIZONTAL:
            state.horizontal_key(event.direction)
        elif event.event_type == InputType.VERTICAL:
            state.vertical_key(event.direction)
        elif event.event_type == InputType.CONFIRM:
            state.confirm_key()
        elif event.event_type == InputType.CANCEL:
            state.cancel_key()
        elif event.event_type == InputType.BUTTON:
            state.on_click_button(event.button_index if event.button_index is not None else -1)
        elif event.event_type == InputType.TILE_HOVER_EXITED:
            state.on_tile_hover_exited()
        elif event.event_type in (InputType.TILE_CLICKED, InputType.TILE_HOVERED):
            tile = self.controller.game_map.tile_at(event.position) if event.position is not None else None
            if tile is None:
                self.controller.emit_log(f"Ignored input on {event.position}: outside the grid", "INPUT",
                                         source="InputDispatcher")
                handled = False
            elif event.event_type == InputType.TILE_CLICKED:
                state.on_tile_clicked(tile)
            else:
                state.on_tile_hovered(tile)
        else:
            handled = False

        self.controller.flush_events()
        return handled
