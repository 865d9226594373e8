"""
Render target abstraction.

Modules never talk to a UI toolkit directly. They build a tree of nodes from
a surface and push display values into it through five primitives: set text,
set visual state, append child, remove all children and set visibility.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Receives the action description attached to an activated node
EventHandler = Callable[[Dict[str, Any]], None]


class Node(ABC):
    """
    A node of the rendered tree.

    Attributes:
        role: Free-form role name (e.g. "label", "button", "panel", "list")
        action: Action description triggered when the node is activated,
                e.g. ``{"type": "todo_toggle", "index": 2}``, or None
    """

    def __init__(self, role: str, action: Optional[Dict[str, Any]] = None):
        self.role = role
        self.action = dict(action) if action else None

    @abstractmethod
    def set_text(self, text: str) -> None:
        pass

    @abstractmethod
    def set_state(self, tag: Optional[str]) -> None:
        """Replace the visual state tag (None clears it)."""
        pass

    @abstractmethod
    def append_child(self, child: "Node") -> None:
        pass

    @abstractmethod
    def remove_all_children(self) -> None:
        pass

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        pass


class Surface(ABC):
    """
    Base class for rendering backends.

    A surface owns the node tree and reports user activations to a single
    event handler installed by the controller. All calls happen on the one
    thread that runs the bar.

    Class Attributes:
        name: Backend identifier used in configuration (e.g. "console")
    """

    name: str = "base"

    def __init__(self):
        self._event_handler: Optional[EventHandler] = None

    @property
    @abstractmethod
    def root(self) -> Node:
        """Top-level node modules attach their widgets to."""
        pass

    @abstractmethod
    def create_node(self, role: str, action: Optional[Dict[str, Any]] = None) -> Node:
        """Create a detached node."""
        pass

    def set_event_handler(self, handler: Optional[EventHandler]) -> None:
        self._event_handler = handler

    def activate(self, node: Node) -> bool:
        """
        Report a primary activation (click, Enter) of ``node``.

        Returns:
            True if the node had an action and a handler received it
        """
        if not node.action:
            logger.debug(f"Activated {node.role} node has no action")
            return False
        if not self._event_handler:
            logger.warning("No event handler installed, dropping activation")
            return False

        self._event_handler(dict(node.action))
        return True

    def flush(self) -> None:
        """Present pending changes. Called once per loop iteration."""
        pass

    def poll_input(self, timeout: float) -> List[str]:
        """
        Wait up to ``timeout`` seconds for text commands from the user.

        Surfaces without a text input channel just sleep.
        """
        if timeout > 0:
            time.sleep(timeout)
        return []

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"
