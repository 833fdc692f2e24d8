"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to the 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Column/primary palette overridable via KANBAN_PRIMARY, KANBAN_TODO,
  KANBAN_INPROGRESS environment variables (hex, e.g. #476EAE).
- Tag colors are picked by crc32 of the tag so a tag keeps its color.
"""
from __future__ import annotations
import os, sys, zlib
from typing import Dict, Tuple

from models import TodoType, TodoUrgency

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

RGB = Tuple[int, int, int]


def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''


def _hex_to_rgb(hex_code: str) -> RGB:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _to_256(r: int, g: int, b: int) -> int:
    """Approximate RGB to the xterm 256-color cube index."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)


def fg(rgb: RGB) -> str:
    if not _ENABLE:
        return ''
    r, g, b = rgb
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return f"\033[38;5;{_to_256(r, g, b)}m"


def bg(rgb: RGB) -> str:
    if not _ENABLE:
        return ''
    r, g, b = rgb
    if _USE_TRUECOLOR:
        return f"\033[48;2;{r};{g};{b}m"
    return f"\033[48;5;{_to_256(r, g, b)}m"


def _env_hex(name: str, default: str) -> str:
    value = os.environ.get(name, '').lstrip('#')
    if len(value) == 6 and all(c in '0123456789abcdefABCDEF' for c in value):
        return '#' + value
    return default


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
UNDERLINE = _code('4')

HEX_PRIMARY = _env_hex('KANBAN_PRIMARY', '#476EAE')
HEX_TODO = _env_hex('KANBAN_TODO', '#48B3AF')
HEX_INPROGRESS = _env_hex('KANBAN_INPROGRESS', '#F6FF99')

PRIMARY = fg(_hex_to_rgb(HEX_PRIMARY))
HEADER_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
LABEL_COLOR = fg((100, 150, 200))
TEXT_COLOR = fg((255, 255, 255))
ACTIVE_BG = bg((33, 37, 41))

COLUMN_COLOR: Dict[TodoType, str] = {
    TodoType.TODO: fg(_hex_to_rgb(HEX_TODO)),
    TodoType.IN_PROGRESS: fg(_hex_to_rgb(HEX_INPROGRESS)),
    TodoType.DONE: fg((167, 227, 153)),
}

URGENCY_COLOR: Dict[TodoUrgency, str] = {
    TodoUrgency.URGENT: fg((220, 53, 69)),
    TodoUrgency.IMPORTANT: fg((255, 193, 7)),
    TodoUrgency.NORMAL: fg((46, 197, 70)),
    TodoUrgency.LOW: fg((164, 208, 216)),
}

TAG_PALETTE: Tuple[RGB, ...] = (
    (0, 150, 255),    # blue
    (46, 197, 70),    # green
    (255, 193, 7),    # yellow
    (220, 53, 69),    # red
    (138, 43, 226),   # purple
    (255, 127, 80),   # coral
    (32, 178, 170),   # teal
    (255, 105, 180),  # pink
)


def tag_rgb(tag: str) -> RGB:
    return TAG_PALETTE[zlib.crc32(tag.encode('utf-8')) % len(TAG_PALETTE)]


def tag_color(tag: str) -> str:
    return fg(tag_rgb(tag))


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'fg', 'bg', 'tag_color', 'tag_rgb',
    'RESET', 'BOLD', 'DIM', 'UNDERLINE', 'HEADER_COLOR', 'EMPTY_COLOR', 'LABEL_COLOR',
    'TEXT_COLOR', 'ACTIVE_BG', 'COLUMN_COLOR', 'URGENCY_COLOR', 'TAG_PALETTE',
]
