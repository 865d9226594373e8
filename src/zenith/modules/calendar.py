"""
Calendar module: today's date on the bar, a month grid in a panel.
"""

import calendar
import logging
from datetime import date, datetime

from ..surface.base import Node, Surface
from .base import PLACEHOLDER, BaseModule

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%d %b"
CALENDAR_ICON = "📅"


def month_grid(day: date, firstweekday: int = 0) -> str:
    """Text month calendar for the month containing ``day``."""
    return calendar.TextCalendar(firstweekday).formatmonth(day.year, day.month).rstrip()


class CalendarModule(BaseModule):
    """
    Display the current date; activating the icon opens a month calendar.

    Configuration:
        date_format: strftime format for the bar label (default: "%d %b")
        first_weekday: 0 = Monday ... 6 = Sunday (default: 0)
    """

    module_type = "calendar"
    update_interval = 60.0

    def build(self, surface: Surface) -> Node:
        container = surface.create_node("module")

        self.label = surface.create_node("label")
        container.append_child(self.label)

        self.button = surface.create_node(
            "button", action={"type": "panel", "module": self.module_type, "op": "toggle"}
        )
        self.button.set_text(CALENDAR_ICON)
        container.append_child(self.button)

        self.panel = surface.create_node("panel")
        self.grid = surface.create_node("calendar")
        self.panel.append_child(self.grid)
        self.panel.set_visible(False)
        container.append_child(self.panel)

        return container

    def sample(self) -> datetime:
        return datetime.now()

    def render(self, data: datetime) -> None:
        if data is None:
            self.label.set_text(PLACEHOLDER)
            return

        format_str = self.config.get("date_format", DEFAULT_FORMAT)
        try:
            self.label.set_text(data.strftime(format_str))
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid date format '{format_str}': {e}")
            self.label.set_text(data.strftime(DEFAULT_FORMAT))

        self.grid.set_text(month_grid(data.date(), self.config.get("first_weekday", 0)))

    def on_panel_opened(self) -> None:
        # The grid may be up to a minute stale; the month may have rolled over
        self.refresh()

    def get_fallback_data(self) -> datetime:
        return datetime.now()
