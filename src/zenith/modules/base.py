"""
Base class for all bar modules.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..scheduler import CONTINUE, STOP
from ..surface.base import Node, Surface

logger = logging.getLogger(__name__)

PLACEHOLDER = "--"


class BaseModule(ABC):
    """
    Base class for bar modules.

    A module owns a small piece of state, builds its part of the node tree
    once, and re-synchronizes that tree after every change. Periodic modules
    are driven by the scheduler through ``tick()``; interactive modules are
    driven by actions.

    Class Attributes:
        module_type: Unique identifier for this module type (e.g. "clock")
        update_interval: Seconds between samples, or None for modules that only
                         change in response to user actions

    Example:
        >>> class UptimeModule(BaseModule):
        ...     module_type = "uptime"
        ...     update_interval = 60.0
        ...
        ...     def build(self, surface):
        ...         self.label = surface.create_node("label")
        ...         return self.label
        ...
        ...     def sample(self):
        ...         return read_uptime()
        ...
        ...     def render(self, data):
        ...         self.label.set_text(f"up {data}")
    """

    module_type: str = None

    update_interval: Optional[float] = None

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize module with configuration.

        Args:
            config: The ``modules`` section of the bar configuration

        Raises:
            ValueError: If module_type is not defined
        """
        if not self.module_type:
            raise ValueError(f"{self.__class__.__name__} must define module_type")

        self.config = config or {}
        self.node: Optional[Node] = None
        self.panel: Optional[Node] = None
        self.panel_open = False
        self.mounted = False
        self._cached_data: Optional[Any] = None

    @abstractmethod
    def build(self, surface: Surface) -> Node:
        """
        Create this module's nodes.

        Returns:
            The module's top-level node, appended to the bar by the caller
        """
        pass

    def sample(self) -> Any:
        """
        Read the volatile value this module displays.

        Returns None when there is nothing to show. Only the scheduler calls
        this, never a user action.
        """
        return None

    def render(self, data: Any) -> None:
        """Push ``data`` into the nodes created by ``build``."""
        pass

    def validate_config(self) -> bool:
        """Override to reject unusable configuration."""
        return True

    def get_fallback_data(self) -> Any:
        """Data shown when sampling fails before any good reading exists."""
        return None

    def mount(self, surface: Surface) -> Node:
        """Build the nodes and paint the initial state so no frame is blank."""
        self.node = self.build(surface)
        self.mounted = True
        self.refresh()
        return self.node

    def unmount(self) -> None:
        """Mark the module as torn down; its timer stops on the next tick."""
        self.mounted = False

    def tick(self) -> bool:
        """Scheduler callback: sample and re-render, or STOP once unmounted."""
        if not self.mounted:
            return STOP
        self.refresh()
        return CONTINUE

    def refresh(self) -> None:
        self.render(self.safe_sample())

    def safe_sample(self) -> Any:
        """
        Sample with standardized error handling.

        A failed or empty sample carries the last good reading forward so a
        transient failure never blanks the display.
        """
        try:
            data = self.sample()
        except Exception as e:
            logger.error(f"Error sampling {self.module_type} module: {e}", exc_info=True)
            data = None

        if data is None:
            if self._cached_data is not None:
                return self._cached_data
            return self.get_fallback_data()

        self._cached_data = data
        return data

    # Overlay panel: pure presentation state, never persisted

    def toggle_panel(self) -> bool:
        return self.set_panel_open(not self.panel_open)

    def close_panel(self) -> bool:
        return self.set_panel_open(False)

    def set_panel_open(self, is_open: bool) -> bool:
        """
        Show or hide this module's panel.

        Returns:
            False if the module has no panel
        """
        if self.panel is None:
            logger.debug(f"{self.module_type} module has no panel")
            return False

        if is_open != self.panel_open:
            self.panel_open = is_open
            self.panel.set_visible(is_open)
            if is_open:
                self.on_panel_opened()
            logger.debug(f"{self.module_type} panel {'opened' if is_open else 'closed'}")
        return True

    def on_panel_opened(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(type={self.module_type}, interval={self.update_interval})>"
