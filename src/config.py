"""Board configuration: schema, validation and loading.

config.json is optional. The context's own file wins over the global one in
the kanban home; without either, defaults apply. Only the keys declared on
BoardConfig are recognised and any other key is a fatal error.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError, field_validator

from paths import get_system_timezone

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Configuration could not be read or failed validation."""


class BoardConfig(BaseModel):
    """Settings recognised in config.json."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timezone: Optional[StrictStr] = None
    # completing an in-progress todo deletes it instead of moving it to done
    delete_done: StrictBool = True
    human_readable_date: StrictBool = True

    @field_validator("timezone", mode="before")
    @classmethod
    def _reject_null_timezone(cls, value: Any) -> Any:
        # omitting the key selects the system zone; an explicit null is an error
        if value is None:
            raise ValueError("must be of type string, but got null")
        return value

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Invalid timezone '{value}': {e}") from e
        return value

    def zone(self) -> ZoneInfo:
        """Configured zone, else the system zone, else UTC."""
        name = self.timezone or get_system_timezone()
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("unknown system timezone %r, using UTC", name)
            return ZoneInfo("UTC")


def valid_keys() -> List[str]:
    return list(BoardConfig.model_fields)


def validate_config(raw: Any, source: str = "config") -> BoardConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"{source}: configuration must be a JSON object")
    try:
        return BoardConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(_describe(e, source)) from e


def load_config(context_path: Path, global_path: Optional[Path] = None) -> BoardConfig:
    """Load the first config file found: context first, then global.

    Raises ConfigError for unreadable files, malformed JSON, unknown keys,
    wrong value types and invalid timezones.
    """
    for path in (context_path, global_path):
        if path is None or not path.is_file():
            continue
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return validate_config(raw, str(path))
    return BoardConfig()


def _describe(error: ValidationError, source: str) -> str:
    messages: List[str] = []
    for item in error.errors():
        key = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        kind = item.get("type", "")
        if kind == "extra_forbidden":
            messages.append(f"Unknown configuration key: '{key}'.")
        elif kind.endswith("_type"):
            expected = _EXPECTED_TYPES.get(key, kind[: -len("_type")])
            got = type(item.get("input")).__name__
            messages.append(f"Configuration key '{key}' must be of type {expected}, but got {got}")
        else:
            messages.append(f"Configuration key '{key}': {item.get('msg', '')}")
    return f"{source}: " + "; ".join(messages)


_EXPECTED_TYPES: Dict[str, str] = {
    "timezone": "string",
    "delete_done": "boolean",
    "human_readable_date": "boolean",
}
