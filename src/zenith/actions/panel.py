"""
Overlay panel and session actions
"""

import logging
from typing import Any, Dict

from .base import ActionContext, BaseAction

logger = logging.getLogger(__name__)

PANEL_OPERATIONS = ("toggle", "open", "close")


class PanelAction(BaseAction):
    """
    Open, close or toggle a module's panel.

    Opening a panel closes every other one: interacting with another part of
    the bar counts as an outside interaction for the open panel.
    """

    action_type = "panel"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        module_type = config["module"]
        op = config.get("op", "toggle")
        module = context.get_module(module_type)

        if op == "toggle":
            is_open = not module.panel_open
        else:
            is_open = op == "open"

        if is_open:
            context.controller.module_manager.close_panels(except_module=module_type)
        return module.set_panel_open(is_open)

    def validate_config(self, config: Dict[str, Any]) -> bool:
        if not super().validate_config(config):
            return False
        if config.get("op", "toggle") not in PANEL_OPERATIONS:
            logger.error(f"Panel op must be one of {', '.join(PANEL_OPERATIONS)}")
            return False
        return True

    def get_required_params(self) -> list:
        return ["module"]


class ClosePanelsAction(BaseAction):
    """Close all panels (focus left the bar)."""

    action_type = "close_panels"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        context.controller.module_manager.close_panels()
        return True


class QuitAction(BaseAction):
    """Stop the bar."""

    action_type = "quit"

    def execute(self, context: ActionContext, config: Dict[str, Any]) -> bool:
        logger.info(f"Quit requested from {context.source}")
        context.controller.running = False
        return True
