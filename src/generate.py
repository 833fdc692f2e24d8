"""Generate fake todo data for a context (development helper).

Usage: kanban-generate <context> [--force] [--count=N] [--todo=N] [--progress=N]
"""
import random
import sys
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import click

from config import ConfigError
from context import Context, ContextError
from models import DATE_FORMAT, TodoType, TodoUrgency
from storage import Storage, StorageError

WORDS = (
    "api", "auth", "backend", "billing", "bug", "cache", "cleanup", "cli", "deploy",
    "docs", "frontend", "infra", "ops", "perf", "refactor", "release", "research",
    "review", "security", "test", "ui",
)
VERBS = ("Fix", "Write", "Review", "Refactor", "Investigate", "Document", "Ship", "Plan")
OBJECTS = (
    "the login flow", "pagination edge cases", "the release notes", "flaky tests",
    "the cache layer", "error messages", "the onboarding guide", "slow queries",
    "keyboard shortcuts", "the config loader",
)
URGENCIES = (TodoUrgency.LOW, TodoUrgency.NORMAL, TodoUrgency.URGENT)


def fake_todo(rng: random.Random, now: datetime) -> Dict[str, Any]:
    created = now - timedelta(seconds=rng.randint(0, 365 * 24 * 3600))
    sentences = [f"{rng.choice(VERBS)} {rng.choice(OBJECTS)}." for _ in range(rng.randint(1, 3))]
    return {
        "id": str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        "tags": rng.sample(WORDS, rng.randint(1, 3)),
        "description": " ".join(sentences),
        "urgency": rng.choice(URGENCIES).value,
        "created_at": created.strftime(DATE_FORMAT),
    }


def generate_todos(count: int, rng: Optional[random.Random] = None,
                   now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    rng = rng or random.Random()
    now = now or datetime.now()
    return [fake_todo(rng, now) for _ in range(count)]


@click.command()
@click.argument("context_name")
@click.option("--force", is_flag=True, help="Overwrite existing data.")
@click.option("--count", type=click.IntRange(min=0), default=None,
              help="Number of todos per column (default: random 10-20).")
@click.option("--todo", "todo_count", type=click.IntRange(min=0), default=None,
              help="Number of 'todo' items (overrides --count).")
@click.option("--progress", "progress_count", type=click.IntRange(min=0), default=None,
              help="Number of 'in_progress' items (overrides --count).")
def main(context_name: str, force: bool, count: Optional[int],
         todo_count: Optional[int], progress_count: Optional[int]) -> None:
    """Generate test todo data for CONTEXT_NAME."""
    try:
        context = Context(context_name)
    except (ContextError, ConfigError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    path = context.data_path
    if not force and path.exists():
        click.echo(f"Data already exists at: {path}")
        click.echo("Use --force to overwrite or remove the file manually.")
        sys.exit(1)

    rng = random.Random()
    todos = todo_count if todo_count is not None else count
    progress = progress_count if progress_count is not None else count
    todos = rng.randint(10, 20) if todos is None else todos
    progress = rng.randint(10, 20) if progress is None else progress

    data = Storage.default_data()
    data[TodoType.TODO.value] = generate_todos(todos, rng)
    data[TodoType.IN_PROGRESS.value] = generate_todos(progress, rng)
    try:
        context.ensure_defaults()
        Storage.save_raw(path, data)
    except (ContextError, StorageError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Generated test data for context: {context_name}")
    click.echo(f"  - {todos} todo items")
    click.echo(f"  - {progress} in_progress items")
    click.echo(f"Saved to: {path}")


if __name__ == "__main__":
    main()
