"""
Main controller for the Zenith bar.
"""

import logging
from typing import Any, Dict, Optional

from .actions.base import ActionContext
from .actions.registry import registry
from .config.loader import ConfigLoader, default_config
from .managers import ModuleManager
from .scheduler import Scheduler
from .surface import get_surface
from .surface.base import Surface
from .utils.errors import ZenithError, safe_execute

logger = logging.getLogger(__name__)

# Upper bound on one idle wait so quit requests are noticed promptly
MAX_IDLE = 0.25

# Console command -> action type for commands taking a 1-based task number
TASK_COMMANDS = {
    "done": "todo_toggle",
    "toggle": "todo_toggle",
    "up": "todo_up",
    "rm": "todo_delete",
    "del": "todo_delete",
}

PANEL_COMMANDS = {"open": "open", "close": "close", "panel": "toggle"}


def parse_command(line: str) -> Optional[Dict[str, Any]]:
    """
    Translate a console command into an action description.

    Examples:
        >>> parse_command("add 3:Deploy server")
        {'type': 'todo_add', 'text': '3:Deploy server'}
        >>> parse_command("done 2")
        {'type': 'todo_toggle', 'index': 1}

    Returns:
        Action description, or None if the command is not understood
    """
    line = line.strip()
    if not line:
        return None

    name, _, rest = line.partition(" ")
    name = name.lower()
    rest = rest.strip()

    if name == "add":
        return {"type": "todo_add", "text": rest}

    if name in TASK_COMMANDS:
        try:
            number = int(rest)
        except ValueError:
            return None
        return {"type": TASK_COMMANDS[name], "index": number - 1}

    if name in PANEL_COMMANDS:
        args = rest.split()
        if not args:
            return {"type": "close_panels"} if name == "close" else None
        return {"type": "panel", "module": args[0], "op": PANEL_COMMANDS[name]}

    if name in ("quit", "exit"):
        return {"type": "quit"}

    return None


class BarController:
    """
    Orchestrates the bar on a single thread.

    Responsibilities are delegated to:
    - ConfigLoader: configuration
    - Surface: the render target
    - ModuleManager: module lifecycle and timers
    - Scheduler: periodic ticks
    - ActionRegistry: user actions
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        surface: Optional[Surface] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """
        Initialize the bar controller.

        Args:
            config_path: Path to YAML configuration file (default location if None)
            surface: Surface to render into (created from config if None)
            scheduler: Scheduler to use (a new one if None)
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = default_config()
        self.running: bool = False

        self.config_loader = ConfigLoader()
        self.scheduler = scheduler or Scheduler()
        self.surface: Optional[Surface] = surface
        self.module_manager: Optional[ModuleManager] = None

        registry.auto_discover()
        logger.debug(f"Registered actions: {registry.list_actions()}")

    def load_config(self) -> bool:
        """
        Load configuration from file, falling back to defaults on error.

        Returns:
            True if the file (or its absence) was handled cleanly
        """
        try:
            self.config = self.config_loader.load(self.config_path)
            return True
        except ZenithError as e:
            logger.error(f"{e}; continuing with default configuration")
            self.config = default_config()
            return False

    def setup(self, surface_name: Optional[str] = None) -> None:
        """
        Obtain the surface and mount all enabled modules.

        Raises:
            SurfaceError: If no surface can be created (fatal)
        """
        bar_config = self.config["bar"]
        if self.surface is None:
            name = surface_name or bar_config.get("surface", "console")
            kwargs = {"separator": bar_config.get("separator", " | ")} if name == "console" else {}
            self.surface = get_surface(name, **kwargs)

        self.surface.set_event_handler(self.handle_action)

        self.module_manager = ModuleManager(self.surface, self.scheduler)
        self.module_manager.module_registry.auto_discover()
        logger.debug(f"Registered modules: {self.module_manager.module_registry.list_modules()}")

        count = self.module_manager.setup_modules(self.config["modules"])
        logger.info(f"Bar ready with {count} modules on the {self.surface.name} surface")
        self.surface.flush()

    def handle_action(self, config: Dict[str, Any], source: str = "surface") -> bool:
        """
        Execute a user action.

        Errors never propagate out of here: they are logged and the action
        counts as not performed.
        """
        action_type = config.get("type")
        action = registry.get_action(action_type) if action_type else None
        if not action:
            logger.error(f"Unknown action type: {action_type}")
            return False

        if not action.validate_config(config):
            return False

        context = ActionContext(controller=self, source=source)
        try:
            return bool(action.execute(context, config))
        except ZenithError as e:
            logger.warning(f"Action {action_type} failed: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error in {action_type} action: {e}", exc_info=True)
            return False

    def handle_command(self, line: str) -> bool:
        """Execute one console command line."""
        action = parse_command(line)
        if action is None:
            logger.warning(f"Unknown command: {line!r}")
            return False
        return self.handle_action(action, source="console")

    def run_once(self, timeout: float = 0.0) -> None:
        """One loop iteration: due timers, present, then wait for input."""
        self.scheduler.run_pending()
        self.surface.flush()

        for line in self.surface.poll_input(timeout):
            self.handle_command(line)
            self.surface.flush()

    def run(self, surface_name: Optional[str] = None) -> int:
        """
        Main application run loop.

        Returns:
            Process exit code
        """
        self.load_config()
        self.setup(surface_name)

        self.running = True
        logger.info("Zenith is running. Press Ctrl+C to exit.")

        try:
            while self.running:
                wait = self.scheduler.time_until_next()
                self.run_once(min(wait, MAX_IDLE) if wait is not None else MAX_IDLE)

        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        finally:
            self.shutdown()

        return 0

    def shutdown(self) -> None:
        """Tear down modules and release the surface."""
        logger.info("Shutting down Zenith...")
        self.running = False

        if self.module_manager:
            safe_execute(self.module_manager.teardown, description="Module teardown")
        self.scheduler.clear()
        if self.surface:
            safe_execute(self.surface.close, description=f"Closing the {self.surface.name} surface")
