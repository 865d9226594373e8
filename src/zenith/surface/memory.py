"""
In-memory node tree.

Used headless (tests, embedding) and as the model behind the console surface.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .base import Node, Surface

logger = logging.getLogger(__name__)


class TreeNode(Node):
    """Node that simply records what was pushed into it."""

    def __init__(self, role: str, action: Optional[Dict[str, Any]] = None, surface=None):
        super().__init__(role, action)
        self.text = ""
        self.state: Optional[str] = None
        self.visible = True
        self.children: List["TreeNode"] = []
        self._surface = surface

    def set_text(self, text: str) -> None:
        if text != self.text:
            self.text = text
            self._touch()

    def set_state(self, tag: Optional[str]) -> None:
        if tag != self.state:
            self.state = tag
            self._touch()

    def append_child(self, child: Node) -> None:
        if not isinstance(child, TreeNode):
            raise TypeError(f"Cannot append {type(child).__name__} to a TreeNode")
        self.children.append(child)
        self._touch()

    def remove_all_children(self) -> None:
        if self.children:
            self.children = []
            self._touch()

    def set_visible(self, visible: bool) -> None:
        if visible != self.visible:
            self.visible = visible
            self._touch()

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, role: str) -> Optional["TreeNode"]:
        """First descendant (or self) with the given role."""
        return next((node for node in self.walk() if node.role == role), None)

    def find_all(self, role: str) -> List["TreeNode"]:
        return [node for node in self.walk() if node.role == role]

    def collect_text(self, skip_roles: Sequence[str] = ()) -> List[str]:
        """Non-empty texts of the visible subtree, skipping ``skip_roles`` subtrees."""
        if not self.visible or self.role in skip_roles:
            return []
        texts = [self.text] if self.text else []
        for child in self.children:
            texts.extend(child.collect_text(skip_roles))
        return texts

    def _touch(self) -> None:
        if self._surface is not None:
            self._surface.dirty = True

    def __repr__(self) -> str:
        return f"<TreeNode(role={self.role}, text={self.text!r}, state={self.state}, children={len(self.children)})>"


class MemorySurface(Surface):
    """
    Headless surface keeping the node tree in memory.

    Attributes:
        dirty: True when any node changed since the last flush
        flush_count: Number of flushes that had pending changes
    """

    name = "memory"

    def __init__(self):
        super().__init__()
        self.dirty = False
        self.flush_count = 0
        self._root = TreeNode("bar", surface=self)

    @property
    def root(self) -> TreeNode:
        return self._root

    def create_node(self, role: str, action: Optional[Dict[str, Any]] = None) -> TreeNode:
        return TreeNode(role, action, surface=self)

    def flush(self) -> None:
        if self.dirty:
            self.flush_count += 1
            self.dirty = False

    def bar_text(self, separator: str = " | ") -> str:
        """The bar as one line of text, panels excluded."""
        parts = []
        for module_node in self._root.children:
            text = " ".join(module_node.collect_text(skip_roles=("panel",)))
            if text:
                parts.append(text)
        return separator.join(parts)

    def open_panels(self) -> List[TreeNode]:
        return [node for node in self._root.find_all("panel") if node.visible]
