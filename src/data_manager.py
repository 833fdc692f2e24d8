"""Data manager: owns the three ordered columns and keeps data.json in sync.

Every structural mutation (create, delete, move, reposition, edit) is written
to disk before the call returns. Write failures propagate as StorageError.

Lookups by id go through a per-column id -> index cache that is marked stale
after any structural change and rebuilt lazily on the next lookup.
"""
import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from context import Context
from cursor import Cursor, INACTIVE
from models import Todo, TodoType, TodoUrgency, format_timestamp
from pagination import PAGE_SIZE, Page, paginate
from prompts import PromptCancelled, TodoFields
from search_filter import SearchFilter
from storage import Storage, TodosDict

logger = logging.getLogger(__name__)


class DataManager:
    def __init__(self, context: Context, search_filter: Optional[SearchFilter] = None):
        self.context = context
        self.search_filter = search_filter if search_filter is not None else SearchFilter()
        self._columns: TodosDict = {t: [] for t in TodoType}
        self._index_cache: Dict[TodoType, Dict[str, int]] = {}
        self._cache_needs_rebuild = True
        self.reload()

    # -------------------- loading / persistence --------------------
    def reload(self) -> None:
        """Re-read the data file; raises StorageError on malformed data."""
        self._columns = Storage.load_todos(self.context.data_path)
        self._rebuild_index_cache()

    def write_todos(self) -> None:
        Storage.save_todos(self.context.data_path, self._columns)
        if self._cache_needs_rebuild:
            self._rebuild_index_cache()

    # -------------------- queries --------------------
    def todos(self, todo_type: TodoType) -> List[Todo]:
        return list(self._columns[todo_type])

    def counts(self) -> Dict[TodoType, int]:
        return {t: len(todos) for t, todos in self._columns.items()}

    def find(self, todo_id: str) -> Optional[Todo]:
        for todo_type in TodoType:
            index = self._find_index(todo_id, todo_type)
            if index is not None:
                return self._columns[todo_type][index]
        return None

    def get_by_type(self, todo_type: TodoType, cursor: Cursor) -> Page[Todo]:
        """Filtered page of a column; only cursor.page() is used for slicing."""
        todos = self._columns[todo_type]
        if self.search_filter.is_active():
            todos = [t for t in todos if self.search_filter.matches(t)]
        return paginate(todos, PAGE_SIZE, cursor.page())

    def get_last_page_items(self, todo_type: TodoType) -> Page[Todo]:
        last_page = self.get_by_type(todo_type, Cursor(INACTIVE, 1)).last_page
        return self.get_by_type(todo_type, Cursor(INACTIVE, last_page))

    @staticmethod
    def active_item(page: Page[Todo], cursor: Cursor) -> Optional[Todo]:
        """The todo under the cursor on an already computed page, if any."""
        if not cursor.is_active():
            return None
        return page.get(cursor.index())

    def find_index(self, todo: Todo) -> Optional[int]:
        """Real position of a todo within its unfiltered column."""
        return self._find_index(todo.id, todo.type)

    # -------------------- mutations --------------------
    def reposition(self, todo: Todo, offset: int) -> Optional[int]:
        """Swap a todo with the entry ``offset`` places away in its column.

        Returns the new index, or None when the move would leave the column
        (a no-op that does not touch the file).
        """
        current = self.find_index(todo)
        if current is None:
            return None
        column = self._columns[todo.type]
        new_index = current + offset
        if new_index < 0 or new_index >= len(column):
            return None
        column[current], column[new_index] = column[new_index], column[current]
        self._cache_needs_rebuild = True
        self.write_todos()
        logger.debug("repositioned %s %d -> %d", todo.id, current, new_index)
        return new_index

    def move(self, todo: Todo, target: TodoType) -> None:
        """Move a todo to the end of another column."""
        if not self._remove(todo):
            logger.warning("move: todo %s not found in %s", todo.id, todo.type.value)
            return
        todo.type = target
        self._columns[target].append(todo)
        self.write_todos()
        logger.debug("moved %s to %s", todo.id, target.value)

    def delete(self, todo: Todo) -> None:
        if not self._remove(todo):
            logger.warning("delete: todo %s not found in %s", todo.id, todo.type.value)
            return
        self.write_todos()
        logger.debug("deleted %s", todo.id)

    def create(
        self,
        tags: List[str],
        description: str,
        urgency: TodoUrgency = TodoUrgency.NORMAL,
    ) -> Todo:
        """Append a new todo to the end of the TODO column."""
        todo = Todo(
            id=str(uuid.uuid4()),
            type=TodoType.TODO,
            tags=list(tags),
            description=description,
            urgency=urgency,
            created_at=format_timestamp(datetime.now(self.context.timezone())),
        )
        self._columns[TodoType.TODO].append(todo)
        self._cache_needs_rebuild = True
        self.write_todos()
        logger.info("created todo %s", todo.id)
        return todo

    def edit(self, todo: Todo, tags: List[str], description: str, urgency: TodoUrgency) -> None:
        todo.tags = list(tags)
        todo.description = description
        todo.urgency = urgency
        self.write_todos()
        logger.debug("edited %s", todo.id)

    def create_interactively(self, prompter) -> Optional[Todo]:
        """Run the create prompt flow; None when the user cancels."""
        try:
            fields = prompter.ask_todo("Create a new todo:")
        except PromptCancelled:
            return None
        return self.create(fields.tags, fields.description, fields.urgency)

    def edit_interactively(self, todo: Optional[Todo], prompter) -> bool:
        if todo is None:
            return False
        try:
            fields = prompter.ask_todo("Edit the todo:", TodoFields.from_todo(todo))
        except PromptCancelled:
            return False
        self.edit(todo, fields.tags, fields.description, fields.urgency)
        return True

    # -------------------- index cache --------------------
    def _remove(self, todo: Todo) -> bool:
        index = self.find_index(todo)
        if index is None:
            return False
        del self._columns[todo.type][index]
        self._cache_needs_rebuild = True
        return True

    def _rebuild_index_cache(self) -> None:
        self._index_cache = {
            todo_type: {todo.id: index for index, todo in enumerate(todos)}
            for todo_type, todos in self._columns.items()
        }
        self._cache_needs_rebuild = False

    def _find_index(self, todo_id: str, todo_type: TodoType) -> Optional[int]:
        if self._cache_needs_rebuild:
            self._rebuild_index_cache()
        return self._index_cache.get(todo_type, {}).get(todo_id)

    def __str__(self) -> str:
        counts = self.counts()
        return (f'Todo: {counts[TodoType.TODO]} tasks, '
                f'In-Progress: {counts[TodoType.IN_PROGRESS]} tasks, '
                f'Done: {counts[TodoType.DONE]} tasks')
