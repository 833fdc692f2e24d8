"""Terminal event loop for the kanban board.

One blocking key read per iteration: the key is handled to completion
(state updated, data file possibly rewritten), the screen is redrawn, and
the loop idles briefly before reading again. Prompt flows (create, edit,
search, filter) run inline with the cursor visible, then the board state is
refreshed in place.
"""
import logging
import os
import shutil
import sys
import time
from typing import Callable, Optional

import click

from config import ConfigError
from context import DEFAULT_CONTEXT, Context, ContextError
from data_manager import DataManager
from keys import CharKeyEvent, KeyEvent, read_key
from logging_setup import LEVELS, configure_logging
from navigation import Navigator
from prompts import ClickPrompter, PromptCancelled
from storage import StorageError
from widgets import Action, AppWidget, MainWidget, Signal, SwitchTo

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

IDLE_DELAY = 0.01


# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first
# improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


def _hide_cursor() -> None:
    print("\033[?25l", end="", flush=True)


def _show_cursor() -> None:
    print("\033[?25h", end="", flush=True)


class App:
    def __init__(self, context: Context, navigator: Navigator, prompter=None,
                 version: str = __version__, key_reader: Callable[[], KeyEvent] = read_key):
        self.context = context
        self.navigator = navigator
        self.prompter = prompter or ClickPrompter()
        self.main_widget = MainWidget(navigator, context, self.prompter, version)
        self.widget: AppWidget = self.main_widget
        self.read_key = key_reader
        # Alt screen default ON; disable with KANBAN_ALT_SCREEN=0 (or false/no/off)
        self.alt_screen: bool = _truthy_env(os.getenv("KANBAN_ALT_SCREEN"), True)

    def run(self) -> int:
        """Main loop; the terminal is restored on every exit path.

        Errors raised while handling a key (e.g. a failed write) propagate
        after the terminal has been put back into its normal state.
        """
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        _hide_cursor()
        try:
            while True:
                self.draw()
                if not self.dispatch(self.read_key()):
                    break
                time.sleep(IDLE_DELAY)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            _show_cursor()
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)
        return 0

    def dispatch(self, event: KeyEvent) -> bool:
        """Handle one key; returns False when the app should quit."""
        if isinstance(event, CharKeyEvent):
            response = self.widget.handle_char_key(event)
        else:
            response = self.widget.handle_coded_key(event)

        if response is Signal.QUIT:
            return False
        if response is Signal.BACK:
            self.widget = self.main_widget
        elif isinstance(response, SwitchTo):
            self.widget = response.widget
        elif isinstance(response, Action):
            self.run_action(response)
        return True

    def run_action(self, action: Action) -> None:
        _clear_screen()
        _show_cursor()
        try:
            action.run()
        except PromptCancelled:
            logger.debug("%s cancelled", action.label or "prompt")
        finally:
            _hide_cursor()
        self.navigator.refresh()

    def draw(self) -> None:
        size = shutil.get_terminal_size((120, 30))
        _clear_screen()
        lines = self.widget.render(size.columns, size.lines)
        footer = self.widget.footer_text()
        print("\n".join(lines))
        if footer:
            print("\n" + footer.rjust(size.columns))


@click.command()
@click.argument("context_name", default=DEFAULT_CONTEXT, required=False)
@click.option("--log-level", type=click.Choice(LEVELS, case_sensitive=False), default=None,
              help="Log level for the log file (default: KANBAN_LOG_LEVEL or WARNING).")
@click.version_option(__version__, prog_name="kanban")
def main(context_name: str, log_level: Optional[str]) -> None:
    """Open the kanban board for CONTEXT_NAME (default: "default")."""
    try:
        configure_logging(log_level)
        context = Context(context_name)
        context.ensure_defaults()
        navigator = Navigator(DataManager(context))
    except (ContextError, ConfigError, StorageError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info("opening context %s", context)
    try:
        App(context, navigator).run()
    except StorageError as e:
        logger.error("aborting: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
