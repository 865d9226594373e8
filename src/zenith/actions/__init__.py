"""
Action system for Zenith
"""

from .base import ActionContext, BaseAction
from .panel import ClosePanelsAction, PanelAction, QuitAction
from .registry import registry
from .todo import AddTaskAction, DeleteTaskAction, MoveTaskUpAction, ToggleTaskAction

__all__ = [
    "BaseAction",
    "ActionContext",
    "registry",
    "AddTaskAction",
    "ToggleTaskAction",
    "MoveTaskUpAction",
    "DeleteTaskAction",
    "PanelAction",
    "ClosePanelsAction",
    "QuitAction",
]
