"""Key events read from the terminal.

click.getchar() returns one keypress per call, with escape sequences for the
arrow keys delivered as a single string. Those are mapped to CodedKeyEvent;
everything printable becomes a CharKeyEvent.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

import click


class KeyCode(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    BACKSPACE = "backspace"
    ESC = "esc"


@dataclass(frozen=True)
class CharKeyEvent:
    char: str
    ctrl: bool = False


@dataclass(frozen=True)
class CodedKeyEvent:
    code: KeyCode


KeyEvent = Union[CharKeyEvent, CodedKeyEvent]

_CODED: Dict[str, KeyCode] = {
    "\x1b[A": KeyCode.UP,
    "\x1b[B": KeyCode.DOWN,
    "\x1b[C": KeyCode.RIGHT,
    "\x1b[D": KeyCode.LEFT,
    "\x1bOA": KeyCode.UP,
    "\x1bOB": KeyCode.DOWN,
    "\x1bOC": KeyCode.RIGHT,
    "\x1bOD": KeyCode.LEFT,
    # Windows console scan codes
    "\xe0H": KeyCode.UP,
    "\xe0P": KeyCode.DOWN,
    "\xe0M": KeyCode.RIGHT,
    "\xe0K": KeyCode.LEFT,
    "\x00H": KeyCode.UP,
    "\x00P": KeyCode.DOWN,
    "\x00M": KeyCode.RIGHT,
    "\x00K": KeyCode.LEFT,
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
    "\x1b": KeyCode.ESC,
}


def parse_key(raw: str) -> KeyEvent:
    if raw in _CODED:
        return CodedKeyEvent(_CODED[raw])
    if len(raw) == 1 and ord(raw) < 32:
        # control characters arrive as 0x01..0x1a; report the letter
        return CharKeyEvent(chr(ord(raw) + 96), ctrl=True)
    return CharKeyEvent(raw)


def read_key() -> KeyEvent:
    """Block until the next keypress.

    Ctrl-C and Ctrl-D surface as KeyboardInterrupt / EOFError from click.
    """
    return parse_key(click.getchar())
