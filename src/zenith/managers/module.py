"""
Module management for the bar.

This module manages the lifecycle of bar modules including discovery, setup,
timer registration and teardown.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..scheduler import Scheduler, Timer
from ..surface.base import Surface

logger = logging.getLogger(__name__)

# (config flag, module type) in bar order: left, center, right
MODULE_LAYOUT: List[Tuple[str, str]] = [
    ("todo", "todo"),
    ("calendar", "calendar"),
    ("clock", "clock"),
    ("system_stats", "system"),
]


class ModuleManager:
    """
    Manages the modules shown on the bar.

    Responsibilities:
    - Module lifecycle management
    - Timer registration for periodic modules
    - Lookup by module type for action dispatch
    """

    def __init__(self, surface: Surface, scheduler: Scheduler, registry: Optional["ModuleRegistry"] = None):
        """
        Initialize the module manager.

        Args:
            surface: Rendering surface modules attach to
            scheduler: Scheduler driving periodic modules
            registry: Module registry (default: a new, empty one)
        """
        self.surface = surface
        self.scheduler = scheduler
        self.module_registry = registry if registry is not None else ModuleRegistry()
        self.active_modules: Dict[str, Dict[str, Any]] = {}  # {module_type: module_data}

    def setup_modules(self, modules_config: Dict[str, Any]) -> int:
        """
        Set up every enabled module in bar order.

        Returns:
            Number of modules set up
        """
        count = 0
        for flag, module_type in MODULE_LAYOUT:
            if not modules_config.get(flag, True):
                logger.debug(f"Module {module_type} disabled in configuration")
                continue
            if self.setup_module(module_type, modules_config):
                count += 1
        return count

    def setup_module(self, module_type: str, config: Dict[str, Any], **kwargs) -> bool:
        """
        Instantiate, mount and schedule one module.

        Args:
            module_type: Registered module type
            config: Modules configuration
            **kwargs: Extra constructor arguments (e.g. a shared store)

        Returns:
            True if module was set up successfully, False otherwise
        """
        if module_type in self.active_modules:
            logger.warning(f"Module {module_type} is already active")
            return False

        module_class = self.module_registry.get_module_class(module_type)
        if not module_class:
            logger.error(f"Unknown module type: {module_type}")
            return False

        try:
            module = module_class(config, **kwargs)

            if not module.validate_config():
                logger.error(f"Invalid config for {module_type} module")
                return False

            node = module.mount(self.surface)
            self.surface.root.append_child(node)

            timer: Optional[Timer] = None
            if module.update_interval:
                timer = self.scheduler.every(module.update_interval, module.tick, name=module_type)

            self.active_modules[module_type] = {"module": module, "timer": timer}
            logger.info(f"Initialized {module_type} module")
            return True

        except Exception as e:
            logger.error(f"Failed to initialize {module_type} module: {e}", exc_info=True)
            return False

    def get_module(self, module_type: str):
        """Active module instance by type, or None."""
        module_data = self.active_modules.get(module_type)
        return module_data["module"] if module_data else None

    def remove_module(self, module_type: str) -> bool:
        """
        Tear down a module. Its timer deregisters itself on its next tick.
        """
        module_data = self.active_modules.pop(module_type, None)
        if not module_data:
            return False
        module_data["module"].unmount()
        logger.debug(f"Removed {module_type} module")
        return True

    def teardown(self) -> None:
        for module_type in list(self.active_modules):
            self.remove_module(module_type)
        self.surface.root.remove_all_children()

    def close_panels(self, except_module: Optional[str] = None) -> None:
        """Close every open panel, optionally keeping one."""
        for module_type, module_data in self.active_modules.items():
            if module_type != except_module:
                module_data["module"].close_panel()

    def list_active(self) -> List[str]:
        return list(self.active_modules)

    def has_modules(self) -> bool:
        return len(self.active_modules) > 0


class ModuleRegistry:
    """
    Registry for auto-discovering module types.

    Uses the same pattern as ActionRegistry for consistency.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._modules: Dict[str, type] = {}

    def register(self, module_class: type) -> None:
        """
        Register a module class.

        Raises:
            TypeError: If module_class doesn't inherit from BaseModule
            ValueError: If module_type is not defined
        """
        from zenith.modules.base import BaseModule

        if not isinstance(module_class, type) or not issubclass(module_class, BaseModule):
            raise TypeError(f"{module_class} must inherit from BaseModule")

        module_type = module_class.module_type
        if not module_type:
            raise ValueError(f"{module_class.__name__} must define module_type class attribute")

        if module_type in self._modules:
            logger.warning(f"Overwriting existing module type: {module_type}")

        self._modules[module_type] = module_class
        logger.debug(f"Registered module type: {module_type}")

    def get_module_class(self, module_type: str):
        return self._modules.get(module_type)

    def list_modules(self) -> list:
        return list(self._modules.keys())

    def auto_discover(self) -> None:
        """Auto-discover and register all module types in ``zenith.modules``."""
        import importlib
        import pkgutil

        import zenith.modules as modules_pkg
        from zenith.modules.base import BaseModule

        for _importer, modname, _ispkg in pkgutil.iter_modules(modules_pkg.__path__):
            if modname in ["base", "__init__"]:
                continue

            try:
                module = importlib.import_module(f"zenith.modules.{modname}")

                for attr_name in dir(module):
                    attr = getattr(module, attr_name)
                    if (
                        isinstance(attr, type)
                        and issubclass(attr, BaseModule)
                        and attr is not BaseModule
                        and attr.module_type
                        and attr.__module__ == module.__name__
                    ):
                        self.register(attr)

            except Exception as e:
                logger.error(f"Failed to load module {modname}: {e}")
