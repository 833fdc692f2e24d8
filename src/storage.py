"""Persistence helpers (load/save) for the todo board.

File layout: one JSON object with the keys "todo", "in_progress" and "done",
each an array of todo entries in display order. The array key decides the
column; a redundant "type" field inside an entry is ignored.
"""
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from models import Todo, TodoType

logger = logging.getLogger(__name__)

DATA_FILE_MODE = 0o644

TodosDict = Dict[TodoType, List[Todo]]
RawDict = Dict[str, List[Dict[str, Any]]]


class StorageError(RuntimeError):
    """The data file could not be read, parsed or written."""


class Storage:
    @staticmethod
    def default_data() -> RawDict:
        return {t.value: [] for t in TodoType}

    @staticmethod
    def load_todos(path: Path) -> TodosDict:
        """Load todos from disk into per-column lists.

        Missing file -> empty structure. Anything unreadable or malformed
        raises StorageError; nothing is partially loaded.
        """
        columns: TodosDict = {t: [] for t in TodoType}
        if not path.exists():
            return columns
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise StorageError(f"Failed to read todos from data file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in data file {path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Data file {path} must contain a JSON object")
        seen = set()
        for key, entries in data.items():
            try:
                todo_type = TodoType(key)
            except ValueError:
                raise StorageError(f"Unknown column '{key}' in data file {path}") from None
            if not isinstance(entries, list):
                raise StorageError(f"Column '{key}' in data file {path} must be an array")
            try:
                columns[todo_type] = [Todo.from_dict(raw, todo_type) for raw in entries]
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise StorageError(f"Malformed todo in column '{key}' of {path}: {e!r}") from e
            for todo in columns[todo_type]:
                if todo.id in seen:
                    raise StorageError(f"Duplicate todo id '{todo.id}' in {path}")
                seen.add(todo.id)
        logger.debug("loaded %s", {t.value: len(v) for t, v in columns.items()})
        return columns

    @staticmethod
    def dump(columns: TodosDict) -> RawDict:
        data = Storage.default_data()
        for todo_type, todos in columns.items():
            data[todo_type.value] = [todo.to_dict() for todo in todos]
        return data

    @staticmethod
    def save_todos(path: Path, columns: TodosDict) -> None:
        """Persist all three columns (pretty-printed).

        Written to a sibling temp file then renamed over the target so a
        failed write never truncates the existing data. Raises StorageError.
        """
        Storage.save_raw(path, Storage.dump(columns))

    @staticmethod
    def save_raw(path: Path, data: RawDict) -> None:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".data-", suffix=".json", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4)
            # mkstemp creates 0600; keep the target's mode, else 0644
            mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else DATA_FILE_MODE
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write todos to data file {path}: {e}") from e
        logger.debug("wrote %s", path)
