"""
Task list view synchronization.

``render`` turns the store into a display snapshot; ``TodoView.apply`` pushes
a snapshot into the node tree. The display is always a function of the last
store contents, never of a diff: every pass rewrites every display value and
rebuilds the row list from scratch.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..surface.base import Node, Surface
from .store import TaskStore

logger = logging.getLogger(__name__)

# Bar label width bound; stored text is never truncated
MAX_LABEL_CHARS = 28

URGENT_PENDING = 5
HIGH_PROGRESS = 0.75
MID_PROGRESS = 0.40

EMPTY_LABEL = "+"
DONE_MARKER = "✓"
ALL_DONE_LABEL = f"{DONE_MARKER} All done"


@dataclass(frozen=True)
class RowSnapshot:
    index: int
    text: str
    done: bool
    priority: int
    priority_tier: str
    badge: Optional[str]
    can_move_up: bool


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything the task list shows, derived from the store."""

    label: str
    button_state: str
    progress_text: str
    progress_fraction: float
    progress_tier: str
    rows: Tuple[RowSnapshot, ...]


def progress_tier(fraction: float) -> str:
    if fraction >= HIGH_PROGRESS:
        return "high"
    if fraction >= MID_PROGRESS:
        return "mid"
    return "low"


def bar_label(store: TaskStore, max_chars: int = MAX_LABEL_CHARS) -> Tuple[str, str]:
    """Bar button label and its state (empty, active or urgent)."""
    if not len(store):
        return EMPTY_LABEL, "empty"

    pending = store.pending_count
    if pending == 0:
        return ALL_DONE_LABEL, "active"

    top = store.top_task()
    label = f"{top.text[:max_chars]} [{pending}]"
    return label, "urgent" if pending >= URGENT_PENDING else "active"


def render(store: TaskStore, max_label_chars: int = MAX_LABEL_CHARS) -> DisplaySnapshot:
    """Pure function from store contents to a display snapshot."""
    label, state = bar_label(store, max_label_chars)
    fraction = store.completion_ratio()

    rows = tuple(
        RowSnapshot(
            index=index,
            text=record.text,
            done=record.done,
            priority=record.priority,
            priority_tier=record.priority_tier,
            badge=record.badge,
            can_move_up=index > 0,
        )
        for index, record in enumerate(store)
    )

    return DisplaySnapshot(
        label=label,
        button_state=state,
        progress_text=f"{store.done_count}/{len(store)}",
        progress_fraction=fraction,
        progress_tier=progress_tier(fraction),
        rows=rows,
    )


class TodoView:
    """
    Node tree of the task list module.

    Layout::

        container
        ├── button            bar label, toggles the panel
        └── panel             hidden until opened
            ├── header        "Tasks" title + progress label
            ├── progress      fill percentage, tier as state
            ├── todo-list     one todo-row per task
            └── entry         pending input text
    """

    def __init__(self, surface: Surface, module_name: str = "todo"):
        self.surface = surface
        self.container = surface.create_node("module")
        self.button = surface.create_node(
            "button", action={"type": "panel", "module": module_name, "op": "toggle"}
        )
        self.panel = surface.create_node("panel")
        self.header = surface.create_node("header")
        self.title = surface.create_node("label")
        self.progress_label = surface.create_node("label")
        self.progress_fill = surface.create_node("progress")
        self.list = surface.create_node("todo-list")
        self.entry = surface.create_node("entry", action={"type": "todo_add"})

        self.title.set_text("Tasks")
        self.header.append_child(self.title)
        self.header.append_child(self.progress_label)

        self.panel.append_child(self.header)
        self.panel.append_child(self.progress_fill)
        self.panel.append_child(self.list)
        self.panel.append_child(self.entry)
        self.panel.set_visible(False)

        self.container.append_child(self.button)
        self.container.append_child(self.panel)

    def apply(self, snapshot: DisplaySnapshot) -> None:
        """Push every display value of ``snapshot`` into the tree."""
        self.button.set_text(snapshot.label)
        self.button.set_state(snapshot.button_state)

        self.progress_label.set_text(snapshot.progress_text)
        self.progress_fill.set_text(f"{snapshot.progress_fraction * 100:.0f}%")
        self.progress_fill.set_state(snapshot.progress_tier)

        self.list.remove_all_children()
        for row in snapshot.rows:
            self.list.append_child(self._build_row(row))

    def set_panel_visible(self, visible: bool) -> None:
        self.panel.set_visible(visible)

    def set_input_text(self, text: str) -> None:
        self.entry.set_text(text)

    def _build_row(self, row: RowSnapshot) -> Node:
        surface = self.surface
        node = surface.create_node("todo-row")
        node.set_state("done" if row.done else "pending")

        accent = surface.create_node("accent")
        accent.set_state(f"prio-{row.priority_tier}")
        node.append_child(accent)

        check = surface.create_node("check", action={"type": "todo_toggle", "index": row.index})
        check.set_text("[x]" if row.done else "[ ]")
        check.set_state("done" if row.done else "pending")
        node.append_child(check)

        label = surface.create_node("label")
        label.set_text(row.text)
        label.set_state("done" if row.done else None)
        node.append_child(label)

        if row.badge:
            badge = surface.create_node("badge")
            badge.set_text(row.badge)
            # Badges only come in three tiers; priority 0 has no badge
            badge.set_state(row.priority_tier)
            node.append_child(badge)

        if row.can_move_up:
            up = surface.create_node("button", action={"type": "todo_up", "index": row.index})
            up.set_text("▲")
            node.append_child(up)

        delete = surface.create_node("button", action={"type": "todo_delete", "index": row.index})
        delete.set_text("✕")
        node.append_child(delete)

        return node
