"""
Base action class for all user actions on the bar
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..utils.errors import ActionExecutionError

logger = logging.getLogger(__name__)


class ActionContext:
    """
    Context passed to actions during execution.

    Attributes:
        controller: Reference to BarController instance
        source: Where the action came from ("surface", "console", ...)

    Example:
        >>> context = ActionContext(controller=my_controller, source="console")
        >>> context.get_module("todo").toggle(0)
    """

    def __init__(self, controller, source: str = "surface"):
        """
        Initialize action context.

        Args:
            controller: BarController instance
            source: Origin of the action, for logging
        """
        self.controller = controller
        self.source = source

    def get_module(self, module_type: str):
        """
        Active module of the given type.

        Raises:
            ActionExecutionError: If that module is not on the bar
        """
        module = self.controller.module_manager.get_module(module_type)
        if module is None:
            raise ActionExecutionError(f"Module '{module_type}' is not active")
        return module


class BaseAction(ABC):
    """
    Base class for all action types.

    All action types must inherit from this class and implement execute().
    The action system uses a registry pattern to discover and register actions.

    Class Attributes:
        action_type: Unique identifier for this action (e.g., "todo_toggle")

    Example:
        >>> class MyAction(BaseAction):
        ...     action_type = "my_action"
        ...
        ...     def execute(self, context, config):
        ...         # Do something
        ...         return True
        ...
        ...     def get_required_params(self):
        ...         return ["my_param"]

    See Also:
        - ActionContext: Context passed to execute()
        - ActionRegistry: Auto-discovers and registers actions
    """

    # Action type identifier (must be unique)
    action_type: str = None

    def __init__(self):
        """
        Initialize the action.

        Raises:
            ValueError: If action_type is not defined
        """
        if not self.action_type:
            raise ValueError(f"{self.__class__.__name__} must define action_type")

    @abstractmethod
    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        """
        Execute the action

        Args:
            context: Action execution context
            config: Action description, e.g. {"type": "todo_toggle", "index": 0}

        Returns:
            True if the action changed something, False otherwise
        """
        pass

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate action configuration

        Checks that every required parameter is present.
        """
        missing = [param for param in self.get_required_params() if param not in config]
        if missing:
            logger.error(f"{self.action_type} action requires {', '.join(missing)}")
            return False
        return True

    def get_required_params(self) -> list:
        """
        Return list of required parameters for this action

        Override this to specify requirements
        """
        return []


class IndexedTaskAction(BaseAction):
    """Base for actions addressing one task by its zero-based index."""

    def get_required_params(self) -> list:
        return ["index"]

    def validate_config(self, config: Dict[str, Any]) -> bool:
        if not super().validate_config(config):
            return False
        index = config["index"]
        if isinstance(index, bool) or not isinstance(index, int):
            logger.error(f"{self.action_type} action index must be an integer, got {index!r}")
            return False
        return True
