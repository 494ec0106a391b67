# src/task_planner/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..view.pipeline import render_view

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class TerminalIO:
    """ConsoleIO over stdin/stdout."""

    def emit(self, text: str) -> None:
        # Immediate user-visible feedback for long operations (sign-in, sync)
        print(f"[{_ts_local()}] {text}", flush=True)

    def confirm(self, prompt: str) -> bool:
        try:
            answer = input(f"{prompt} [y/N]: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer in ("y", "yes")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    _print_ts("[CONSOLE] Manage tasks with slash commands. Use /help for commands. Use /exit to quit.\n")
    print(render_view(state.tasks, state.filters).as_text())

    if state.calendar is not None:
        _print_ts(state.calendar.status.render())

    io = TerminalIO()

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, io=io)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."

        print(f"[{_ts_local()}] {reply}\n")

    logger.info("Console connector finished.")
