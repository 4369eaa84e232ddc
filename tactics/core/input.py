from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Any

from .data import Vector2


class InputType(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()
    CONFIRM = auto()
    CANCEL = auto()
    BUTTON = auto()
    TILE_CLICKED = auto()
    TILE_HOVERED = auto()
    TILE_HOVER_EXITED = auto()
    QUIT = auto()


class Key(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    SPACE = auto()
    ESCAPE = auto()

    W = auto()
    A = auto()
    S = auto()
    D = auto()
    Q = auto()
    X = auto()
    Z = auto()

    NUM_1 = auto()
    NUM_2 = auto()
    NUM_3 = auto()
    NUM_4 = auto()
    NUM_5 = auto()

    UNKNOWN = auto()


# (input type, direction) produced by each directional key
DIRECTIONAL_KEYS = {
    Key.LEFT: (InputType.HORIZONTAL, -1),
    Key.A: (InputType.HORIZONTAL, -1),
    Key.RIGHT: (InputType.HORIZONTAL, 1),
    Key.D: (InputType.HORIZONTAL, 1),
    Key.UP: (InputType.VERTICAL, -1),
    Key.W: (InputType.VERTICAL, -1),
    Key.DOWN: (InputType.VERTICAL, 1),
    Key.S: (InputType.VERTICAL, 1),
}

NUMBER_KEYS = {
    Key.NUM_1: 0,
    Key.NUM_2: 1,
    Key.NUM_3: 2,
    Key.NUM_4: 3,
    Key.NUM_5: 4,
}


@dataclass
class InputEvent:
    event_type: InputType
    direction: int = 0
    button_index: Optional[int] = None
    position: Optional[Vector2] = None
    raw_data: Optional[Any] = None

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def horizontal(cls, direction: int) -> "InputEvent":
        return cls(event_type=InputType.HORIZONTAL, direction=direction)

    @classmethod
    def vertical(cls, direction: int) -> "InputEvent":
        return cls(event_type=InputType.VERTICAL, direction=direction)

    @classmethod
    def confirm(cls) -> "InputEvent":
        return cls(event_type=InputType.CONFIRM)

    @classmethod
    def cancel(cls) -> "InputEvent":
        return cls(event_type=InputType.CANCEL)

    @classmethod
    def button(cls, index: int) -> "InputEvent":
        return cls(event_type=InputType.BUTTON, button_index=index)

    @classmethod
    def tile_clicked(cls, position: Vector2) -> "InputEvent":
        return cls(event_type=InputType.TILE_CLICKED, position=position)

    @classmethod
    def tile_hovered(cls, position: Vector2) -> "InputEvent":
        return cls(event_type=InputType.TILE_HOVERED, position=position)

    @classmethod
    def tile_hover_exited(cls) -> "InputEvent":
        return cls(event_type=InputType.TILE_HOVER_EXITED)

    @classmethod
    def from_key(cls, key: Key) -> Optional["InputEvent"]:
        if key in DIRECTIONAL_KEYS:
            event_type, direction = DIRECTIONAL_KEYS[key]
            return cls(event_type=event_type, direction=direction, raw_data=key)
        if key in {Key.ENTER, Key.SPACE, Key.Z}:
            return cls(event_type=InputType.CONFIRM, raw_data=key)
        if key in {Key.ESCAPE, Key.X}:
            return cls(event_type=InputType.CANCEL, raw_data=key)
        if key in NUMBER_KEYS:
            return cls(event_type=InputType.BUTTON, button_index=NUMBER_KEYS[key], raw_data=key)
        if key == Key.Q:
            return cls.quit_event()
        return None

    def is_directional(self) -> bool:
        return self.event_type in {InputType.HORIZONTAL, InputType.VERTICAL}
