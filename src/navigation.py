"""Keyboard navigation state: per-column cursors plus the active column.

Every input handled here is either applied or silently ignored; moving past
the edges of a page, column or board is a no-op, never an error. After any
structural change (delete, move, reposition, edit, filter change) the active
cursor is re-derived so that, while a column is active, its cursor points at
an existing item on the current page.

Only the TODO and IN_PROGRESS columns are navigable; DONE is a sink.
"""
import logging
from typing import Dict, Optional

from cursor import Cursor, INACTIVE, INITIAL_PAGE
from data_manager import DataManager
from models import Todo, TodoType, TodoUrgency
from pagination import PAGE_SIZE, Page
from search_filter import SearchFilter

logger = logging.getLogger(__name__)

BOARD_COLUMNS = (TodoType.TODO, TodoType.IN_PROGRESS)


class Navigator:
    def __init__(self, manager: DataManager, delete_done: Optional[bool] = None):
        self.manager = manager
        if delete_done is None:
            delete_done = manager.context.config.delete_done
        self.delete_done = delete_done
        self.cursors: Dict[TodoType, Cursor] = {t: Cursor(INACTIVE, INITIAL_PAGE) for t in TodoType}
        self.active_type: Optional[TodoType] = None

    @property
    def search_filter(self) -> SearchFilter:
        return self.manager.search_filter

    # -------------------- views --------------------
    def cursor(self, todo_type: TodoType) -> Cursor:
        return self.cursors[todo_type]

    def page_for(self, todo_type: TodoType) -> Page[Todo]:
        return self.manager.get_by_type(todo_type, self.cursors[todo_type])

    def active_todo(self) -> Optional[Todo]:
        if self.active_type is None:
            return None
        return self.manager.active_item(self.page_for(self.active_type), self.cursors[self.active_type])

    # -------------------- cursor movement --------------------
    def move_down(self) -> None:
        if self.active_type is None:
            self._enter()
            return
        cursor = self.cursors[self.active_type]
        items = self.page_for(self.active_type)
        if items.count == 0:
            return
        if not cursor.is_active():
            cursor.set_index(0)
        elif cursor.index() < items.count - 1:
            cursor.increment()
        elif items.has_more_pages:
            cursor.set_page(cursor.next_page()).set_index(0)

    def move_up(self) -> None:
        if self.active_type is None:
            return
        cursor = self.cursors[self.active_type]
        items = self.page_for(self.active_type)
        if items.count == 0 or not cursor.is_active():
            return
        if cursor.index() > 0:
            cursor.decrement()
        elif cursor.page() > INITIAL_PAGE:
            cursor.set_page(cursor.previous_page())
            cursor.set_index(self.page_for(self.active_type).count - 1)

    def move_left(self) -> None:
        if self.active_type is not TodoType.IN_PROGRESS:
            return
        if self._total(TodoType.TODO) == 0:
            return
        self.swap_cursor(TodoType.TODO)

    def move_right(self) -> None:
        if self.active_type is not TodoType.TODO:
            return
        if self._total(TodoType.IN_PROGRESS) == 0:
            return
        self.swap_cursor(TodoType.IN_PROGRESS)

    def swap(self, focus_last: bool = False) -> None:
        """Toggle between the TODO and IN_PROGRESS columns."""
        if self.active_type is None:
            return
        self.swap_cursor(self.active_type.opposite(), focus_last=focus_last)

    def swap_cursor(self, target: TodoType, focus_last: bool = False) -> None:
        """Deactivate the current column and activate ``target``.

        The target keeps its page (clamped to what still exists) and focuses
        its first item, or its very last item when ``focus_last`` is set. An
        empty target leaves the board with no active column.
        """
        if self.active_type is not None:
            self.cursors[self.active_type].set_index(INACTIVE)
        self.active_type = target
        cursor = self.cursors[target]
        if focus_last:
            self.focus_last(target)
        else:
            cursor.set_index(0)
            self._clamp_page(target)
        if self._total(target) == 0:
            self.reset_cursor(target)
            self.active_type = None

    def focus_last(self, todo_type: TodoType) -> None:
        last = self.manager.get_last_page_items(todo_type)
        index = last.count - 1 if last.count else INACTIVE
        self.cursors[todo_type].set_page(last.current_page).set_index(index)

    def reset_cursor(self, todo_type: TodoType, index: int = INACTIVE, page: int = INITIAL_PAGE) -> None:
        self.cursors[todo_type].set_index(index).set_page(page)

    # -------------------- item actions --------------------
    def progress(self) -> None:
        """ENTER: TODO -> IN_PROGRESS, IN_PROGRESS -> DONE (or deleted)."""
        todo = self.active_todo()
        if todo is None:
            return
        if todo.type is TodoType.TODO:
            self.manager.move(todo, TodoType.IN_PROGRESS)
            self.swap_cursor(TodoType.IN_PROGRESS, focus_last=True)
            return
        if todo.type is not TodoType.IN_PROGRESS:
            return
        if self.delete_done:
            self.manager.delete(todo)
        else:
            self.manager.move(todo, TodoType.DONE)
        self.reset_cursor(TodoType.IN_PROGRESS, index=0, page=INITIAL_PAGE)
        if self._total(TodoType.IN_PROGRESS) == 0:
            self.swap_cursor(TodoType.TODO)

    def regress(self) -> None:
        """BACKSPACE: send an in-progress item back to the end of TODO."""
        if self.active_type is not TodoType.IN_PROGRESS:
            return
        todo = self.active_todo()
        if todo is None:
            return
        self.manager.move(todo, TodoType.TODO)
        self.reset_cursor(TodoType.IN_PROGRESS)
        self.active_type = TodoType.TODO
        self.focus_last(TodoType.TODO)
        if not self.cursors[TodoType.TODO].is_active():
            self.active_type = None

    def delete_active(self) -> None:
        if self.active_type is None:
            return
        cursor = self.cursors[self.active_type]
        todo = self.active_todo()
        if todo is None:
            return
        last_index = cursor.index()
        self.manager.delete(todo)
        self.adjust_after_deletion(last_index, cursor, self.page_for(self.active_type))

    def adjust_after_deletion(self, last_index: int, cursor: Cursor, items: Page[Todo]) -> None:
        """Re-derive the active cursor after its item was removed.

        Rules are checked in order and the first match wins.
        """
        todo_type = self.active_type
        if todo_type is None:
            return
        if last_index == 0 and cursor.page() == INITIAL_PAGE and items.count == 0:
            self._deactivate(todo_type)
        elif last_index == 0 and items.count > 0:
            self.reset_cursor(todo_type, index=0, page=cursor.page())
        elif items.total == 0:
            self._deactivate(todo_type)
        elif items.count == 0:
            self.reset_cursor(todo_type, index=PAGE_SIZE - 1, page=cursor.page() - 1)
        else:
            self.reset_cursor(todo_type, index=last_index - 1, page=cursor.page())

    def reorder(self, offset: int) -> None:
        """Swap the active item with a neighbour; the cursor follows it.

        Disabled while a search or urgency filter is active, since filtered
        positions do not match stored positions.
        """
        if self.active_type is None or self.search_filter.is_active():
            return
        todo = self.active_todo()
        if todo is None:
            return
        new_index = self.manager.reposition(todo, offset)
        if new_index is None:
            return
        self.reset_cursor(self.active_type, index=new_index % PAGE_SIZE, page=new_index // PAGE_SIZE + 1)

    def create(self, prompter) -> Optional[Todo]:
        todo = self.manager.create_interactively(prompter)
        if todo is None:
            return None
        self.swap_cursor(TodoType.TODO, focus_last=True)
        return todo

    def edit(self, prompter) -> bool:
        todo = self.active_todo()
        if todo is None:
            return False
        changed = self.manager.edit_interactively(todo, prompter)
        if changed:
            self.clamp()
        return changed

    # -------------------- filtering --------------------
    def apply_search(self, query: Optional[str]) -> None:
        self.search_filter.set_search_query(query)
        self._restart_from_top()

    def apply_urgency_filter(self, urgency: Optional[TodoUrgency]) -> None:
        self.search_filter.set_urgency_filter(urgency)
        self._restart_from_top()

    def clear_filters(self) -> bool:
        if not self.search_filter.is_active():
            return False
        self.search_filter.clear()
        self._restart_from_top()
        return True

    # -------------------- invariants --------------------
    def clamp(self) -> None:
        """Pull the active cursor back onto an existing item."""
        if self.active_type is None:
            return
        todo_type = self.active_type
        if self._total(todo_type) == 0:
            self._deactivate(todo_type)
            return
        self._clamp_page(todo_type)
        cursor = self.cursors[todo_type]
        count = self.page_for(todo_type).count
        if not cursor.is_active() or cursor.index() < 0:
            cursor.set_index(0)
        elif cursor.index() >= count:
            cursor.set_index(count - 1)

    def refresh(self) -> None:
        """Reload data from disk and keep the cursor state in range."""
        self.manager.reload()
        for todo_type in BOARD_COLUMNS:
            if todo_type is not self.active_type:
                self._clamp_page(todo_type)
        self.clamp()

    def _enter(self) -> None:
        for todo_type in BOARD_COLUMNS:
            if self._total(todo_type) > 0:
                self.active_type = todo_type
                self.reset_cursor(todo_type, index=0, page=INITIAL_PAGE)
                return

    def _restart_from_top(self) -> None:
        for todo_type in TodoType:
            self.reset_cursor(todo_type)
        if self.active_type is not None:
            self.swap_cursor(self.active_type)

    def _deactivate(self, todo_type: TodoType) -> None:
        self.reset_cursor(todo_type)
        if self.active_type is todo_type:
            self.active_type = None

    def _clamp_page(self, todo_type: TodoType) -> None:
        cursor = self.cursors[todo_type]
        items = self.page_for(todo_type)
        if items.count == 0 and items.total > 0:
            cursor.set_page(items.last_page)
        elif cursor.page() < INITIAL_PAGE:
            cursor.set_page(INITIAL_PAGE)

    def _total(self, todo_type: TodoType) -> int:
        return self.manager.get_by_type(todo_type, Cursor(INACTIVE, INITIAL_PAGE)).total
