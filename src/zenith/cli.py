#!/usr/bin/env python3
"""
Zenith CLI - command-line interface for the Zenith bar.

Runs the bar and manages the task list and configuration from a shell.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from .config.loader import ConfigLoader
from .main import LOG_LEVELS, setup_logging
from .tasks.store import TaskStore
from .tasks.view import render
from .utils.errors import ConfigurationError
from .utils.paths import default_config_path

logger = logging.getLogger(__name__)


class ZenithCLI:
    """Main CLI handler for Zenith commands. Every command returns an exit code."""

    def __init__(self, store_path: Optional[str] = None, config_path: Optional[str] = None) -> None:
        self.store_path = store_path
        self.config_path: Path = Path(config_path).expanduser() if config_path else default_config_path()

    def run_bar(self, surface: Optional[str] = None) -> int:
        """Run the bar in the foreground."""
        from .main import run

        return run(str(self.config_path), surface)

    # Task commands

    def _load_store(self) -> TaskStore:
        path = self.store_path
        if path is None:
            try:
                path = ConfigLoader().load(self.config_path)["modules"].get("todo_storage")
            except ConfigurationError as e:
                logger.warning(f"{e}; using the default task file")
        return TaskStore.load(path)

    def list_tasks(self) -> int:
        store = self._load_store()
        if not len(store):
            print("No tasks.")
            return 0

        snapshot = render(store)
        for row in snapshot.rows:
            check = "[x]" if row.done else "[ ]"
            badge = f" ({row.badge})" if row.badge else ""
            print(f"{row.index + 1:>3}. {check} {row.text}{badge}")
        print(f"\n{snapshot.progress_text} done, {store.pending_count} pending")
        return 0

    def add_task(self, text: str, priority: Optional[int] = None) -> int:
        store = self._load_store()
        record = store.insert(text, priority)
        if record is None:
            print("Task text is empty, nothing added.")
            return 1
        print(f"Added task {len(store)}: {record.text}")
        return 0

    def toggle_task(self, number: int) -> int:
        store = self._load_store()
        if not store.toggle(number - 1):
            print(f"No task {number}.")
            return 1
        record = store[number - 1]
        print(f"Task {number} marked {'done' if record.done else 'pending'}: {record.text}")
        return 0

    def move_task_up(self, number: int) -> int:
        store = self._load_store()
        if not store.move_up(number - 1):
            print(f"Task {number} cannot move up.")
            return 1
        print(f"Moved task {number} to position {number - 1}.")
        return 0

    def remove_task(self, number: int) -> int:
        store = self._load_store()
        if not 1 <= number <= len(store):
            print(f"No task {number}.")
            return 1
        text = store[number - 1].text
        store.remove(number - 1)
        print(f"Removed task {number}: {text}")
        return 0

    def clear_done(self) -> int:
        store = self._load_store()
        removed = store.clear_done()
        print(f"Removed {removed} completed task{'s' if removed != 1 else ''}.")
        return 0

    # Config commands

    def show_config_path(self) -> int:
        print(self.config_path)
        return 0

    def show_config(self) -> int:
        try:
            config = ConfigLoader().load(self.config_path)
        except ConfigurationError as e:
            print(f"❌ {e}")
            return 1
        print(yaml.safe_dump(config, sort_keys=False, allow_unicode=True), end="")
        return 0

    def validate_config(self, path: Optional[str] = None) -> int:
        config_path = Path(path).expanduser() if path else self.config_path
        print(f"Validating {config_path}...")

        is_valid, errors, warnings = ConfigLoader().validate_file(config_path)
        for warning in warnings:
            print(f"  ⚠️  {warning}")
        for error in errors:
            print(f"  ❌ {error}")

        if is_valid:
            print("✅ Configuration is valid")
            return 0
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zenith",
        description="Zenith status bar",
    )
    parser.add_argument("--config", help="Path to YAML configuration file")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO for run, WARNING otherwise)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Run the bar in the foreground")
    run_parser.add_argument("--surface", help="Rendering surface (console, memory)")

    tasks_parser = subparsers.add_parser("tasks", help="Manage the task list")
    tasks_parser.add_argument("--store", help="Task file (default: from configuration)")
    tasks_subparsers = tasks_parser.add_subparsers(dest="tasks_command")

    tasks_subparsers.add_parser("list", help="List tasks")

    add_parser = tasks_subparsers.add_parser("add", help="Add a task ('3:text' sets priority 3)")
    add_parser.add_argument("text", nargs="+", help="Task text")
    add_parser.add_argument(
        "-p", "--priority", type=int, choices=range(0, 10), help="Priority 1 (highest) to 9, 0 for none"
    )

    for name, help_text in (
        ("done", "Toggle a task between done and pending"),
        ("up", "Move a task up one place"),
        ("rm", "Delete a task"),
    ):
        sub = tasks_subparsers.add_parser(name, help=help_text)
        sub.add_argument("number", type=int, help="Task number as shown by 'tasks list'")

    tasks_subparsers.add_parser("clear", help="Remove completed tasks")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    config_subparsers.add_parser("path", help="Show the configuration file path")
    config_subparsers.add_parser("show", help="Show the effective configuration")
    validate_parser = config_subparsers.add_parser("validate", help="Validate a configuration file")
    validate_parser.add_argument("path", nargs="?", help="File to validate (default: active config)")

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or ("INFO" if args.command == "run" else "WARNING"))

    cli = ZenithCLI(store_path=getattr(args, "store", None), config_path=args.config)

    if args.command == "run":
        return cli.run_bar(args.surface)

    elif args.command == "tasks":
        if args.tasks_command == "list":
            return cli.list_tasks()
        elif args.tasks_command == "add":
            return cli.add_task(" ".join(args.text), args.priority)
        elif args.tasks_command == "done":
            return cli.toggle_task(args.number)
        elif args.tasks_command == "up":
            return cli.move_task_up(args.number)
        elif args.tasks_command == "rm":
            return cli.remove_task(args.number)
        elif args.tasks_command == "clear":
            return cli.clear_done()
        else:
            return cli.list_tasks()

    elif args.command == "config":
        if args.config_command == "path":
            return cli.show_config_path()
        elif args.config_command == "show":
            return cli.show_config()
        elif args.config_command == "validate":
            return cli.validate_config(args.path)
        else:
            parser.print_help()
            return 1

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
