"""
Clock module: the current time, ticking every second.
"""

import logging
from datetime import datetime

from ..surface.base import Node, Surface
from .base import PLACEHOLDER, BaseModule

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%H:%M:%S"


class ClockModule(BaseModule):
    """
    Display the local time.

    Configuration:
        clock_format: strftime format string (default: "%H:%M:%S")
    """

    module_type = "clock"
    update_interval = 1.0

    def build(self, surface: Surface) -> Node:
        self.label = surface.create_node("label")
        return self.label

    def sample(self) -> datetime:
        return datetime.now()

    def render(self, data: datetime) -> None:
        self.label.set_text(self.format(data))

    def format(self, data: datetime) -> str:
        if data is None:
            return PLACEHOLDER

        format_str = self.config.get("clock_format", DEFAULT_FORMAT)
        try:
            return data.strftime(format_str)
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid clock format '{format_str}': {e}")
            return data.strftime(DEFAULT_FORMAT)

    def get_fallback_data(self) -> datetime:
        return datetime.now()
