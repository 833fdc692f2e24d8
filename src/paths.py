"""Path helpers for the kanban home directory.

All state lives under one base directory, overridable with KANBAN_HOME.

Default locations:
- Linux/macOS: ~/.kanban
- Windows: %USERPROFILE%\\.kanban
"""
import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "KANBAN_HOME"
CONFIG_FILE_NAME = "config.json"
DATA_FILE_NAME = "data.json"
LOG_FILE_NAME = "kanban.log"


@lru_cache(maxsize=1)
def get_kanban_home() -> Path:
    """Resolve the base directory.

    Resolution order:
    1. KANBAN_HOME environment variable (if set)
    2. ~/.kanban
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".kanban"


def get_contexts_dir() -> Path:
    return get_kanban_home() / "contexts"


def get_global_config_path() -> Path:
    return get_kanban_home() / CONFIG_FILE_NAME


def get_log_path() -> Path:
    return get_kanban_home() / LOG_FILE_NAME


def get_system_timezone() -> str:
    """Detect the system IANA zone, falling back to UTC.

    Resolution order:
    1. TZ environment variable
    2. /etc/timezone (Debian/Ubuntu)
    3. /etc/localtime symlink target
    4. UTC
    """
    if tz := os.environ.get("TZ"):
        return tz.lstrip(":")

    try:
        tz = Path("/etc/timezone").read_text().strip()
        if tz:
            return tz
    except (FileNotFoundError, PermissionError, OSError):
        pass

    try:
        link = Path("/etc/localtime").resolve()
        parts = str(link).split("zoneinfo/")
        if len(parts) > 1:
            return parts[1]
    except (FileNotFoundError, PermissionError, OSError):
        pass

    return "UTC"
