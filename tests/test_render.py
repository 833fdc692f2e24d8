"""Tests for text layout helpers."""
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from cursor import Cursor
from models import Todo, TodoType, TodoUrgency
from pagination import paginate
from render import (
    ANSI_RE, column_title, column_widths, format_created, humanize, join_columns, pad,
    render_card, render_column, tag_badges, truncate, visible_len, wrap,
)

UTC = ZoneInfo("UTC")
NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)


def plain(lines):
    return [ANSI_RE.sub('', line) for line in lines]


def todos(n):
    return [Todo(id=str(i), tags=[f"tag{i}"], description=f"Item {i}",
                 created_at="2025-06-01 11:00:00") for i in range(1, n + 1)]


def test_visible_len_and_pad_ignore_escape_codes():
    s = "\x1b[1mbold\x1b[0m"
    assert visible_len(s) == 4
    assert visible_len(pad(s, 10)) == 10


@pytest.mark.parametrize("text,width,expected", [
    ("short", 10, "short"),
    ("exactly10!", 10, "exactly10!"),
    ("a longer piece of text", 10, "a longe..."),
    ("abcdef", 3, "abc"),
    ("abc", 0, ""),
])
def test_truncate(text, width, expected):
    assert truncate(text, width) == expected


def test_wrap():
    assert wrap("the quick brown fox", 10) == ["the quick", "brown fox"]
    assert wrap("abcdefghijkl", 5) == ["abcde", "fghij", "kl"]
    assert wrap("", 5) == []


@pytest.mark.parametrize("delta,expected", [
    (timedelta(seconds=1), "1 second ago"),
    (timedelta(seconds=30), "30 seconds ago"),
    (timedelta(minutes=3), "3 minutes ago"),
    (timedelta(hours=1), "1 hour ago"),
    (timedelta(days=2), "2 days ago"),
    (timedelta(days=400), "1 year ago"),
    (-timedelta(days=1), "1 day from now"),
])
def test_humanize(delta, expected):
    assert humanize(NOW - delta, NOW) == expected


def test_format_created():
    todo = Todo(id="1", created_at="2025-06-01 11:00:00")
    assert format_created(todo, UTC, human_readable=True, now=NOW) == "1 hour ago"
    assert format_created(todo, UTC, human_readable=False) == "2025-06-01 11:00:00"
    assert format_created(Todo(id="2", created_at=""), UTC) == "unknown"


def test_tag_badges():
    assert ANSI_RE.sub('', tag_badges([])) == "[No Tags]"
    assert ANSI_RE.sub('', tag_badges(["a", "b"])) == "[a] [b]"


def test_column_title_shows_position_when_active():
    page = paginate(todos(13), 6, 3)
    assert column_title(TodoType.TODO, Cursor(0, 3), page) == "TODO - 13/13"
    assert column_title(TodoType.IN_PROGRESS, Cursor(), page) == "IN PROGRESS"


def test_render_card_marks_active_item():
    todo = Todo(id="1", tags=["x"], description="Fix it", urgency=TodoUrgency.URGENT,
                created_at="2025-06-01 11:00:00")
    lines = plain(render_card(todo, 50, True, UTC, now=NOW))
    assert lines[0].startswith("> URGENT")
    assert lines[0].rstrip().endswith("Created: 1 hour ago")
    assert "Fix it" in lines[1]
    assert "Tags: [x]" in lines[2]
    assert all(visible_len(line) <= 50 for line in lines)
    assert plain(render_card(todo, 50, False, UTC, now=NOW))[0].startswith("  URGENT")


def test_render_card_truncates_long_description():
    todo = Todo(id="1", description="word " * 60, created_at="2025-06-01 11:00:00")
    body = " ".join(line.strip() for line in plain(render_card(todo, 40, False, UTC, now=NOW))[1:3])
    assert len(body) <= 2 * 40


def test_render_empty_column():
    lines = plain(render_column(TodoType.TODO, paginate([], 6, 1), Cursor(), 30, UTC))
    assert lines[0] == "TODO"
    assert lines[2] == "(empty)"


def test_render_column_with_pages():
    page = paginate(todos(8), 6, 2)
    lines = plain(render_column(TodoType.TODO, page, Cursor(1, 2), 40, UTC, now=NOW))
    assert lines[0] == "TODO - 8/8"
    assert lines[-1] == "Page 2/2"
    assert sum(1 for line in lines if line.startswith("> ")) >= 1


def test_column_widths_and_join():
    assert column_widths(83, 2) == [40, 40]
    assert column_widths(20, 2) == [24, 24]
    rows = join_columns([["a", "b"], ["c"]], [3, 3])
    assert rows == ["a   | c", "b   |"]
