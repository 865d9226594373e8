"""
Action registry: maps an action ``type`` to the action that performs it
"""

import importlib
import inspect
import logging
import pkgutil
from typing import Dict, List, Optional, Type

from .base import BaseAction

logger = logging.getLogger(__name__)

# Package modules that hold infrastructure rather than actions
_NOT_ACTION_MODULES = {"base", "registry"}


class ActionRegistry:
    """
    Actions are stateless, so the registry keeps one shared instance per type.

    Both surface activations and console commands resolve through
    ``get_action``.
    """

    def __init__(self):
        self._actions: Dict[str, BaseAction] = {}

    def register(self, action_class: Type[BaseAction]) -> BaseAction:
        """Instantiate ``action_class`` and make it the handler for its type"""
        if not inspect.isclass(action_class) or not issubclass(action_class, BaseAction):
            raise TypeError(f"{action_class} must inherit from BaseAction")

        action = action_class()
        if action.action_type in self._actions:
            logger.warning(f"Overwriting existing action type: {action.action_type}")

        self._actions[action.action_type] = action
        logger.debug(f"Registered action type: {action.action_type}")
        return action

    def get_action(self, action_type: str) -> Optional[BaseAction]:
        return self._actions.get(action_type)

    def list_actions(self) -> List[str]:
        return list(self._actions)

    def auto_discover(self) -> None:
        """Register every concrete action defined in the ``zenith.actions`` package"""
        import zenith.actions as actions_pkg

        for module_info in pkgutil.iter_modules(actions_pkg.__path__):
            if module_info.name in _NOT_ACTION_MODULES:
                continue

            try:
                module = importlib.import_module(f"{actions_pkg.__name__}.{module_info.name}")
            except ImportError as e:
                logger.error(f"Failed to load action module {module_info.name}: {e}")
                continue

            for _name, action_class in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(action_class, BaseAction)
                    and not inspect.isabstract(action_class)
                    and action_class.action_type
                    and action_class.action_type not in self._actions
                ):
                    self.register(action_class)


# Global registry instance
registry = ActionRegistry()
