"""
Task list module.

The bar shows the first pending task and the pending count; activating it
opens a panel with the full list, a progress indicator and an input entry.
Every handler that changes the store re-synchronizes the whole view before
returning.
"""

import logging
from typing import Any, Dict, Optional

from ..surface.base import Node, Surface
from ..tasks.store import TaskStore
from ..tasks.view import MAX_LABEL_CHARS, DisplaySnapshot, TodoView, render
from .base import BaseModule

logger = logging.getLogger(__name__)


class TodoModule(BaseModule):
    """
    Interactive task list backed by a persistent ``TaskStore``.

    Configuration:
        todo_storage: Path of the task file (default: ~/.config/zenith/todos.json)
        todo_label_chars: Bar label truncation (default: 28)

    Args:
        config: Modules configuration
        store: Store to use instead of loading one (shared by reference)
    """

    module_type = "todo"
    update_interval = None  # Changes only on user actions

    def __init__(self, config: Optional[Dict[str, Any]] = None, store: Optional[TaskStore] = None):
        super().__init__(config)
        self.store = store if store is not None else TaskStore.load(self.config.get("todo_storage"))
        self.input_text = ""
        self.view: Optional[TodoView] = None
        self.last_snapshot: Optional[DisplaySnapshot] = None

    def build(self, surface: Surface) -> Node:
        self.view = TodoView(surface, self.module_type)
        self.panel = self.view.panel
        return self.view.container

    def refresh(self) -> None:
        self.sync()

    def sync(self) -> DisplaySnapshot:
        """Re-render the whole view from the current store contents."""
        snapshot = render(self.store, self.config.get("todo_label_chars", MAX_LABEL_CHARS))
        if self.view is not None:
            self.view.apply(snapshot)
        self.last_snapshot = snapshot
        return snapshot

    # Interaction handlers

    def set_input(self, text: str) -> None:
        """Record the text currently typed into the entry."""
        self.input_text = text
        if self.view is not None:
            self.view.set_input_text(text)

    def submit(self, text: Optional[str] = None) -> bool:
        """
        Add a task from ``text`` (or the pending input).

        Returns:
            True if a task was added
        """
        if text is not None:
            self.input_text = text
        if not self.input_text.strip():
            return False

        record = self.store.insert(self.input_text)
        if record is None:
            # e.g. "5:" with nothing after the shorthand
            return False

        logger.info(f"Added task '{record.text}' (priority {record.priority})")
        self.set_input("")
        self.sync()
        return True

    def toggle(self, index: int) -> bool:
        return self._apply(self.store.toggle(index), "toggle", index)

    def move_up(self, index: int) -> bool:
        return self._apply(self.store.move_up(index), "move up", index)

    def delete(self, index: int) -> bool:
        return self._apply(self.store.remove(index), "delete", index)

    def _apply(self, changed: bool, operation: str, index: int) -> bool:
        if not changed:
            logger.debug(f"Ignoring {operation} for task index {index} ({len(self.store)} tasks)")
            return False
        self.sync()
        return True
