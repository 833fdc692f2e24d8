"""Screens shown by the app.

Each screen implements the AppWidget interface: render, footer_text,
handle_char_key and handle_coded_key. Key handlers return a Response telling
the event loop what to do next:

- Signal.CONTINUE: keep looping
- Signal.QUIT: leave the app
- Signal.BACK: return to the main board
- SwitchTo(widget): show another screen
- Action(run): run a prompt flow with the terminal restored, then refresh
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Union

from context import Context
from keys import CharKeyEvent, CodedKeyEvent, KeyCode
from models import Todo, TodoType
from navigation import Navigator
from render import (
    column_widths, format_created, join_columns, render_column, tag_badges, wrap,
)
from theme import BOLD, HEADER_COLOR, LABEL_COLOR, TEXT_COLOR, color


class Signal(Enum):
    CONTINUE = "continue"
    QUIT = "quit"
    BACK = "back"


@dataclass
class SwitchTo:
    widget: "AppWidget"


@dataclass
class Action:
    run: Callable[[], object]
    label: str = ""


Response = Union[Signal, SwitchTo, Action]


class AppWidget(ABC):
    @abstractmethod
    def render(self, width: int, height: int) -> List[str]:
        ...

    @abstractmethod
    def footer_text(self) -> str:
        ...

    @abstractmethod
    def handle_char_key(self, event: CharKeyEvent) -> Response:
        ...

    @abstractmethod
    def handle_coded_key(self, event: CodedKeyEvent) -> Response:
        ...


class MainWidget(AppWidget):
    """The two-column board (TODO and IN PROGRESS)."""

    def __init__(self, navigator: Navigator, context: Context, prompter, version: str = ""):
        self.navigator = navigator
        self.context = context
        self.prompter = prompter
        self.version = version

    def title(self) -> str:
        title = f"Kanban: v{self.version} | Context: {self.context}"
        description = self.navigator.search_filter.description()
        if description:
            title += f" | Filtered: {description}"
        return title

    def render(self, width: int, height: int) -> List[str]:
        widths = column_widths(width, 2)
        tz = self.context.timezone()
        human = self.context.config.human_readable_date
        columns = [
            render_column(t, self.navigator.page_for(t), self.navigator.cursor(t), w, tz, human)
            for t, w in zip((TodoType.TODO, TodoType.IN_PROGRESS), widths)
        ]
        return [color(self.title(), HEADER_COLOR), ''] + join_columns(columns, widths)

    def footer_text(self) -> str:
        return '  ? (help) | q (quit)'

    def handle_char_key(self, event: CharKeyEvent) -> Response:
        if event.ctrl:
            return Signal.CONTINUE
        nav = self.navigator
        char = event.char
        if char == 'q':
            return Signal.QUIT
        if char == 'n':
            return Action(lambda: nav.create(self.prompter), "create")
        if char == 'e' and nav.active_todo() is not None:
            return Action(lambda: nav.edit(self.prompter), "edit")
        if char == '/':
            return Action(self._search, "search")
        if char == 'f':
            return Action(self._filter_by_urgency, "filter")
        if char == '?':
            return SwitchTo(HelpWidget(show_reorder_bindings=not nav.search_filter.is_active()))
        if char == 'i':
            todo = nav.active_todo()
            if todo is not None:
                return SwitchTo(TodoDetailWidget(todo, self.context))
            return Signal.CONTINUE
        handlers = {
            'j': nav.move_down,
            'k': nav.move_up,
            'h': nav.move_left,
            'l': nav.move_right,
            '[': lambda: nav.reorder(-1),
            ']': lambda: nav.reorder(1),
            'x': nav.delete_active,
            'c': nav.clear_filters,
        }
        handler = handlers.get(char)
        if handler is not None:
            handler()
        return Signal.CONTINUE

    def handle_coded_key(self, event: CodedKeyEvent) -> Response:
        nav = self.navigator
        handlers = {
            KeyCode.DOWN: nav.move_down,
            KeyCode.UP: nav.move_up,
            KeyCode.LEFT: nav.move_left,
            KeyCode.RIGHT: nav.move_right,
            KeyCode.ENTER: nav.progress,
            KeyCode.BACKSPACE: nav.regress,
        }
        handler = handlers.get(event.code)
        if handler is not None:
            handler()
        return Signal.CONTINUE

    def _search(self) -> None:
        query = self.prompter.ask_search(self.navigator.search_filter.search_query)
        self.navigator.apply_search(query)

    def _filter_by_urgency(self) -> None:
        urgency = self.prompter.ask_urgency_filter(self.navigator.search_filter.urgency_filter)
        self.navigator.apply_urgency_filter(urgency)


def _centered(lines: List[str], width: int) -> List[str]:
    margin = ' ' * (width // 10)
    return [margin + line for line in lines]


class HelpWidget(AppWidget):
    """Keybinding reference; closes on ?, q or ESC."""

    SECTIONS = (
        ('NAVIGATION', (
            ('j or ↓', 'Move cursor down'),
            ('k or ↑', 'Move cursor up'),
            ('h or ←', 'Move to the TODO column'),
            ('l or →', 'Move to the IN PROGRESS column'),
        )),
        ('ITEM ACTIONS', (
            ('ENTER', 'Progress item to next status'),
            ('BACKSPACE', 'Move item back to previous status'),
            ('n', 'Create new todo item'),
            ('e', 'Edit selected item'),
            ('x', 'Delete selected item'),
            ('i', 'View full todo details'),
        )),
        ('FILTERING & SEARCH', (
            ('/', 'Search/filter todos'),
            ('f', 'Filter by urgency'),
            ('c', 'Clear all active filters'),
        )),
        ('APPLICATION', (
            ('?', 'Toggle this help dialog'),
            ('q', 'Quit application/Close help dialog'),
        )),
    )
    REORDER_SECTION = ('ITEM REORDERING', (
        ('[', 'Move item up in list'),
        (']', 'Move item down in list'),
    ))

    def __init__(self, show_reorder_bindings: bool = True):
        self.show_reorder_bindings = show_reorder_bindings

    def sections(self):
        sections = list(self.SECTIONS)
        if self.show_reorder_bindings:
            sections.append(self.REORDER_SECTION)
        return sections

    def help_lines(self) -> List[str]:
        lines = ['']
        for name, bindings in self.sections():
            lines.append(f"  {name}")
            lines.append('  ' + '─' * 50)
            for key, description in bindings:
                lines.append(f"    {key:<15}  {description}")
            lines.append('')
        return lines

    def render(self, width: int, height: int) -> List[str]:
        title = color('Available Keybindings Help - Press ? or ESC to close', HEADER_COLOR, BOLD)
        return _centered([title] + self.help_lines(), width)

    def footer_text(self) -> str:
        return ''

    def handle_char_key(self, event: CharKeyEvent) -> Response:
        if not event.ctrl and event.char in ('q', '?'):
            return Signal.BACK
        return Signal.CONTINUE

    def handle_coded_key(self, event: CodedKeyEvent) -> Response:
        if event.code is KeyCode.ESC:
            return Signal.BACK
        return Signal.CONTINUE


class TodoDetailWidget(AppWidget):
    """Full view of one todo; closes on i or ESC."""

    LABEL_WIDTH = 13
    WRAP_AT = 70

    def __init__(self, todo: Todo, context: Context):
        self.todo = todo
        self.context = context

    def _row(self, label: str, value: str) -> str:
        return '  ' + color(f"{label + ':':<{self.LABEL_WIDTH}}", LABEL_COLOR) + value

    def detail_lines(self) -> List[str]:
        todo = self.todo
        tz = self.context.timezone()
        absolute = format_created(todo, tz, human_readable=False)
        relative = format_created(todo, tz, human_readable=True)
        lines = [
            '',
            self._row('Urgency', color(todo.urgency.label(), TEXT_COLOR)),
            self._row('Created', color(f"{absolute} ({relative})", TEXT_COLOR)),
            self._row('Type', color(todo.type.value, TEXT_COLOR)),
            self._row('ID', color(todo.id, TEXT_COLOR)),
            '',
            self._row('Tags', tag_badges(todo.tags)),
            '',
            '',
            '  ' + color('Description:', LABEL_COLOR),
            '  ' + '─' * self.WRAP_AT,
        ]
        for paragraph in todo.description.split('\n'):
            wrapped = wrap(paragraph, self.WRAP_AT) or ['']
            lines.extend('  ' + color(line, TEXT_COLOR) for line in wrapped)
        return lines

    def render(self, width: int, height: int) -> List[str]:
        title = color('Todo Details - Press i or ESC to close', HEADER_COLOR, BOLD)
        return _centered([title] + self.detail_lines(), width)

    def footer_text(self) -> str:
        return ''

    def handle_char_key(self, event: CharKeyEvent) -> Response:
        if not event.ctrl and event.char == 'i':
            return Signal.BACK
        return Signal.CONTINUE

    def handle_coded_key(self, event: CodedKeyEvent) -> Response:
        if event.code is KeyCode.ESC:
            return Signal.BACK
        return Signal.CONTINUE
