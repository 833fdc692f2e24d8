"""Tests for contexts and kanban home resolution."""
import json
import os
import stat

import pytest

from config import ConfigError
from context import DEFAULT_CONTEXT, Context, ContextError
from paths import get_contexts_dir, get_global_config_path, get_kanban_home, get_log_path


def test_home_follows_environment(kanban_home):
    assert get_kanban_home() == kanban_home.resolve()
    assert get_contexts_dir() == kanban_home.resolve() / "contexts"
    assert get_global_config_path().name == "config.json"
    assert get_log_path().name == "kanban.log"


def test_home_defaults_to_dot_kanban(monkeypatch, tmp_path):
    monkeypatch.delenv("KANBAN_HOME")
    monkeypatch.setenv("HOME", str(tmp_path))
    get_kanban_home.cache_clear()
    assert get_kanban_home() == tmp_path / ".kanban"


@pytest.mark.parametrize("name", ["default", "work-2", "my_ctx", "A"])
def test_valid_names(name):
    assert Context(name).name == name


@pytest.mark.parametrize("name", ["", "has space", "../escape", "dot.name", "sl/ash"])
def test_invalid_names(name):
    with pytest.raises(ContextError):
        Context(name)


def test_paths_live_under_contexts_dir():
    ctx = Context(DEFAULT_CONTEXT)
    assert ctx.path() == get_contexts_dir() / "default"
    assert ctx.data_path == get_contexts_dir() / "default" / "data.json"
    assert ctx.config_path == get_contexts_dir() / "default" / "config.json"
    assert str(ctx) == "default"


def test_ensure_defaults_creates_directory_and_empty_board():
    ctx = Context("fresh")
    ctx.ensure_defaults()
    assert ctx.path().is_dir()
    assert json.loads(ctx.data_path.read_text()) == {"todo": [], "in_progress": [], "done": []}
    if os.name == "posix":
        assert stat.S_IMODE(ctx.path().stat().st_mode) == 0o755


def test_ensure_defaults_keeps_existing_data():
    ctx = Context("keep")
    ctx.ensure_defaults()
    ctx.data_path.write_text('{"todo": [], "in_progress": [], "done": [], "x": 1}')
    ctx.ensure_defaults()
    assert '"x": 1' in ctx.data_path.read_text()


def test_context_config_loaded_on_construction():
    ctx = Context("cfg", load=False)
    ctx.path().mkdir(parents=True)
    ctx.config_path.write_text(json.dumps({"delete_done": False}))
    assert Context("cfg").config.delete_done is False


def test_global_config_applies(kanban_home):
    kanban_home.mkdir(parents=True, exist_ok=True)
    get_global_config_path().write_text(json.dumps({"human_readable_date": False}))
    assert Context("any").config.human_readable_date is False


def test_bad_config_raises_on_construction():
    ctx = Context("bad", load=False)
    ctx.path().mkdir(parents=True)
    ctx.config_path.write_text(json.dumps({"nope": True}))
    with pytest.raises(ConfigError):
        Context("bad")
