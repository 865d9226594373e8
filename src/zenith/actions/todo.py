"""
Task list actions
"""

import logging
from typing import Any, Dict

from .base import ActionContext, BaseAction, IndexedTaskAction

logger = logging.getLogger(__name__)


class AddTaskAction(BaseAction):
    """Submit a new task. Without 'text', the pending input is submitted."""

    action_type = "todo_add"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        text = config.get("text")
        if text is not None and not isinstance(text, str):
            logger.error(f"todo_add text must be a string, got {text!r}")
            return False
        return context.get_module("todo").submit(text)


class ToggleTaskAction(IndexedTaskAction):
    """Flip a task between pending and done."""

    action_type = "todo_toggle"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        return context.get_module("todo").toggle(config["index"])


class MoveTaskUpAction(IndexedTaskAction):
    """Move a task one place towards the front of the list."""

    action_type = "todo_up"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        return context.get_module("todo").move_up(config["index"])


class DeleteTaskAction(IndexedTaskAction):
    """Delete a task."""

    action_type = "todo_delete"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        return context.get_module("todo").delete(config["index"])
