"""
Input Events

Discrete player inputs, independent of whether they came from a physical
keyboard, the on-screen keyboard or a click on the board.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

LETTER_PATTERN = re.compile(r"[a-z]")


class EventType(Enum):
    LETTER = "letter"
    BACKSPACE = "backspace"
    ENTER = "enter"
    CURSOR_LEFT = "cursor-left"
    CURSOR_RIGHT = "cursor-right"
    SELECT_CELL = "select-cell"
    CHOOSE_MODE = "choose-mode"
    RESTART = "restart"


class InvalidEventError(ValueError):
    """Raised when an event payload cannot be understood."""


@dataclass(frozen=True)
class InputEvent:
    type: EventType
    value: Optional[object] = None

    @classmethod
    def from_payload(cls, data: dict) -> "InputEvent":
        """
        Build an event from a JSON payload such as ``{"type": "letter", "value": "a"}``.

        Raises:
            InvalidEventError: If the type is unknown or a required value is missing
        """
        if not isinstance(data, dict):
            raise InvalidEventError("Event payload must be an object")

        try:
            event_type = EventType(str(data.get("type", "")).lower())
        except ValueError:
            raise InvalidEventError(f"Unknown event type: {data.get('type')!r}")

        value = data.get("value")
        if event_type == EventType.LETTER:
            if not isinstance(value, str):
                raise InvalidEventError("Letter events require a string value")
            # str.lower maps some non-ASCII letters (the Kelvin sign) into a-z
            if value.isascii():
                value = value.lower()
        elif event_type == EventType.SELECT_CELL:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidEventError("Cell selection requires an integer value")
        elif event_type == EventType.CHOOSE_MODE:
            if not value:
                raise InvalidEventError("Mode selection requires a mode name")

        return cls(event_type, value)


_NAMED_KEYS = {
    "Enter": EventType.ENTER,
    "enter": EventType.ENTER,
    "Backspace": EventType.BACKSPACE,
    "backspace": EventType.BACKSPACE,
    "ArrowLeft": EventType.CURSOR_LEFT,
    "ArrowRight": EventType.CURSOR_RIGHT,
}


def parse_key(key: str, ctrl: bool = False, meta: bool = False, alt: bool = False) -> Optional[InputEvent]:
    """
    Translate a raw browser key name into an input event.

    Keys pressed together with a modifier are ignored so browser shortcuts
    keep working. Returns None for keys the game does not use.
    """
    if ctrl or meta or alt or not key or not isinstance(key, str):
        return None

    if key in _NAMED_KEYS:
        return InputEvent(_NAMED_KEYS[key])

    if len(key) == 1 and key.isascii():
        letter = key.lower()
        if LETTER_PATTERN.fullmatch(letter):
            return InputEvent(EventType.LETTER, letter)

    return None
