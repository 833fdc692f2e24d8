"""Named workspaces: each context has its own data file and optional config."""
import logging
import os
import re
from pathlib import Path
from zoneinfo import ZoneInfo

from config import BoardConfig, load_config
from paths import CONFIG_FILE_NAME, DATA_FILE_NAME, get_contexts_dir, get_global_config_path
from storage import Storage, StorageError

logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
DEFAULT_CONTEXT = "default"


class ContextError(RuntimeError):
    """Invalid context name or an unusable context directory."""


class Context:
    def __init__(self, name: str, load: bool = True):
        self._validate_name(name)
        self.name = name
        self.config = BoardConfig()
        if load:
            self.load_config()

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name:
            raise ContextError("Context name cannot be empty")
        if not NAME_RE.match(name):
            raise ContextError(
                "Context name can only contain alphanumeric characters, hyphens, and underscores"
            )

    def __str__(self) -> str:
        return self.name

    def path(self, relative: str = "") -> Path:
        base = get_contexts_dir() / self.name
        return base / relative if relative else base

    @property
    def data_path(self) -> Path:
        return self.path(DATA_FILE_NAME)

    @property
    def config_path(self) -> Path:
        return self.path(CONFIG_FILE_NAME)

    def load_config(self) -> BoardConfig:
        self.config = load_config(self.config_path, get_global_config_path())
        return self.config

    def timezone(self) -> ZoneInfo:
        return self.config.zone()

    def ensure_defaults(self) -> None:
        """Create the context directory and an empty data file if missing."""
        directory = self.path()
        if not directory.is_dir():
            old_umask = os.umask(0o022)
            try:
                directory.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as e:
                raise ContextError(f"Failed to create context directory {directory}: {e}") from e
            finally:
                os.umask(old_umask)
            logger.info("created context directory %s", directory)
        if not self.data_path.is_file():
            try:
                Storage.save_raw(self.data_path, Storage.default_data())
            except StorageError as e:
                raise ContextError(f"Failed to create default data file: {e}") from e
