"""Interactive prompt flows for creating, editing and filtering todos.

The board only talks to a prompter through ask_todo / ask_search /
ask_urgency_filter, so tests can substitute a scripted one.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

import click

from models import Todo, TodoUrgency, parse_tags

ALL_URGENCIES = "all"


class PromptCancelled(Exception):
    """The user aborted a prompt (Ctrl-C / EOF); nothing should change."""


@dataclass
class TodoFields:
    tags: List[str] = field(default_factory=list)
    description: str = ""
    urgency: TodoUrgency = TodoUrgency.NORMAL

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoFields":
        return cls(tags=list(todo.tags), description=todo.description, urgency=todo.urgency)


class ClickPrompter:
    def ask_todo(self, heading: str, defaults: Optional[TodoFields] = None) -> TodoFields:
        defaults = defaults or TodoFields()
        try:
            click.secho(heading, bold=True)
            tags = click.prompt(
                "Tags (comma separated)",
                default=", ".join(defaults.tags),
                show_default=bool(defaults.tags),
            )
            description = self._ask_description(defaults.description)
            urgency = click.prompt(
                "Urgency",
                type=click.Choice([u.value for u in TodoUrgency]),
                default=defaults.urgency.value,
            )
        except click.Abort:
            raise PromptCancelled() from None
        return TodoFields(tags=parse_tags(tags), description=description, urgency=TodoUrgency(urgency))

    @staticmethod
    def _ask_description(default: str) -> str:
        while True:
            value = click.prompt(
                "Description",
                default=default or None,
                show_default=False,
            )
            value = value.strip()
            if value:
                return value
            click.echo("Description is required.")

    def ask_search(self, default: Optional[str] = None) -> str:
        try:
            return click.prompt("Search query", default=default or "", show_default=bool(default))
        except click.Abort:
            raise PromptCancelled() from None

    def ask_urgency_filter(self, default: Optional[TodoUrgency] = None) -> Optional[TodoUrgency]:
        choices = [ALL_URGENCIES] + [u.value for u in TodoUrgency]
        try:
            selected = click.prompt(
                "Filter by urgency",
                type=click.Choice(choices),
                default=default.value if default else ALL_URGENCIES,
            )
        except click.Abort:
            raise PromptCancelled() from None
        if selected == ALL_URGENCIES:
            return None
        return TodoUrgency(selected)
