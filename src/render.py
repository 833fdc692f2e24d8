"""Text layout for the board: cards, columns, wrapping and padding.

Everything returns lists of already-colored lines; widths are measured on
the visible text (ANSI sequences stripped).
"""
import re
from datetime import datetime
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from cursor import Cursor
from models import DATE_FORMAT, Todo, TodoType
from pagination import Page
from theme import (
    ACTIVE_BG, BOLD, COLUMN_COLOR, EMPTY_COLOR, HEADER_COLOR, LABEL_COLOR, RESET,
    TEXT_COLOR, URGENCY_COLOR, color, tag_color,
)

SEP = " | "
MIN_COL_WIDTH = 24
MAX_DESCRIPTION_LENGTH = 100
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
ACTIVE_MARKER = "> "
IDLE_MARKER = "  "


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def pad(line: str, width: int) -> str:
    gap = width - visible_len(line)
    return line + ' ' * gap if gap > 0 else line


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ''
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[:width - 3] + '...'


def wrap(text: str, width: int) -> List[str]:
    """Greedy word wrap; words longer than the width are hard-split."""
    width = max(1, width)
    lines: List[str] = []
    current = ''
    for word in text.split():
        while len(word) > width:
            if current:
                lines.append(current)
                current = ''
            lines.append(word[:width])
            word = word[width:]
        candidate = word if not current else current + ' ' + word
        if len(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def humanize(then: datetime, now: datetime) -> str:
    """Relative time such as "3 minutes ago" or "2 days from now"."""
    seconds = int((now - then).total_seconds())
    suffix = 'ago' if seconds >= 0 else 'from now'
    seconds = abs(seconds)
    for unit, size in (('year', 31536000), ('month', 2592000), ('week', 604800),
                       ('day', 86400), ('hour', 3600), ('minute', 60)):
        if seconds >= size:
            amount = seconds // size
            return f"{amount} {unit}{'s' if amount != 1 else ''} {suffix}"
    return f"{seconds} second{'s' if seconds != 1 else ''} {suffix}"


def format_created(todo: Todo, tz: ZoneInfo, human_readable: bool = True,
                   now: Optional[datetime] = None) -> str:
    moment = todo.created_datetime(tz)
    if moment is None:
        return todo.created_at or 'unknown'
    if not human_readable:
        return moment.strftime(DATE_FORMAT)
    return humanize(moment, now or datetime.now(tz))


def tag_badges(tags: Sequence[str]) -> str:
    if not tags:
        return color('[No Tags]', TEXT_COLOR)
    return ' '.join(color(f'[{tag}]', tag_color(tag)) for tag in tags)


def column_title(todo_type: TodoType, cursor: Cursor, page: Page[Todo]) -> str:
    title = todo_type.header
    if cursor.is_active():
        current = cursor.index() + 1 + (cursor.page() - 1) * page.per_page
        title = f"{title} - {current}/{page.total}"
    return title


def render_card(todo: Todo, width: int, active: bool, tz: ZoneInfo,
                human_readable: bool = True, now: Optional[datetime] = None) -> List[str]:
    marker = ACTIVE_MARKER if active else IDLE_MARKER
    inner = max(1, width - len(marker))
    created = 'Created: ' + format_created(todo, tz, human_readable, now)
    urgency = todo.urgency.label()
    gap = max(1, inner - len(urgency) - len(created))
    header = color(urgency, URGENCY_COLOR[todo.urgency], BOLD) + ' ' * gap + color(created, TEXT_COLOR)
    if len(urgency) + 1 + len(created) > inner:
        header = color(truncate(urgency, inner), URGENCY_COLOR[todo.urgency], BOLD)

    description = truncate(' '.join(todo.description.split()), MAX_DESCRIPTION_LENGTH)
    body = [color(line, TEXT_COLOR) for line in wrap(description, inner)[:2]] or ['']
    tags_line = color('Tags: ', LABEL_COLOR) + tag_badges(todo.tags)
    if visible_len(tags_line) > inner:
        tags_line = color(truncate('Tags: ' + ' '.join(f'[{t}]' for t in todo.tags), inner), LABEL_COLOR)

    lines = [header] + body + [tags_line]
    rendered = []
    for line in lines:
        line = marker + pad(line, inner)
        if active and ACTIVE_BG:
            line = ACTIVE_BG + line.replace(RESET, RESET + ACTIVE_BG) + RESET
        rendered.append(line)
    rendered.append(color('-' * width, EMPTY_COLOR))
    return rendered


def render_column(todo_type: TodoType, page: Page[Todo], cursor: Cursor, width: int,
                  tz: ZoneInfo, human_readable: bool = True,
                  now: Optional[datetime] = None) -> List[str]:
    lines = [color(column_title(todo_type, cursor, page), HEADER_COLOR, COLUMN_COLOR[todo_type]),
             color('=' * width, HEADER_COLOR)]
    if page.count == 0:
        lines.append(color('(empty)', EMPTY_COLOR))
        return lines
    for index, todo in enumerate(page):
        active = cursor.is_active() and cursor.index() == index
        lines.extend(render_card(todo, width, active, tz, human_readable, now))
    if page.last_page > 1:
        lines.append(color(f"Page {page.current_page}/{page.last_page}", EMPTY_COLOR))
    return lines


def column_widths(term_width: int, columns: int) -> List[int]:
    """Split the terminal width evenly, never below MIN_COL_WIDTH."""
    sep_total = len(SEP) * (columns - 1)
    each = max(MIN_COL_WIDTH, (term_width - sep_total) // columns)
    return [each] * columns


def join_columns(columns: Sequence[List[str]], widths: Sequence[int]) -> List[str]:
    rows = max((len(c) for c in columns), default=0)
    out: List[str] = []
    for r in range(rows):
        cells = []
        for col, width in zip(columns, widths):
            cells.append(pad(col[r], width) if r < len(col) else ' ' * width)
        out.append(SEP.join(cells).rstrip())
    return out
