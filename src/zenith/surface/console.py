"""
Console surface: the bar as a status line on a text stream.

Output follows the status-line convention of swaybar/i3bar generators: one
line per change. Open panels are printed below the bar line, indented. Line
commands typed on stdin are the user-action source.
"""

import logging
import os
import selectors
import sys
from typing import List, Optional, TextIO

from ..utils.errors import SurfaceError
from .memory import MemorySurface, TreeNode

logger = logging.getLogger(__name__)

READ_CHUNK = 4096


class ConsoleSurface(MemorySurface):
    """
    Memory surface that prints itself on flush and reads commands from stdin.

    Args:
        stream: Output stream (default: sys.stdout)
        input_stream: Command stream (default: sys.stdin)
        separator: Text placed between modules on the bar line
        read_input: Whether to read commands at all
    """

    name = "console"

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        input_stream: Optional[TextIO] = None,
        separator: str = " | ",
        read_input: bool = True,
    ):
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout
        self.separator = separator
        self._last_output: Optional[str] = None
        self._selector: Optional[selectors.BaseSelector] = None
        self._input = input_stream if input_stream is not None else sys.stdin
        self._input_fd: Optional[int] = None
        # Bytes after the last newline, waiting for the rest of their line
        self._partial = b""

        if not hasattr(self.stream, "write"):
            raise SurfaceError(f"Console output is not writable: {self.stream!r}")

        if read_input:
            try:
                self._input_fd = self._input.fileno()
                self._selector = selectors.DefaultSelector()
                self._selector.register(self._input_fd, selectors.EVENT_READ)
            except (ValueError, OSError, AttributeError) as e:
                # Not selectable (e.g. replaced by a test double); run output-only
                logger.debug(f"Console input disabled: {e}")
                self._close_selector()

    def render(self) -> str:
        """Current bar line followed by any open panels."""
        lines = [self.bar_text(self.separator)]
        for panel in self.open_panels():
            lines.extend(f"  {line}" for line in _panel_lines(panel))
        return "\n".join(lines)

    def flush(self) -> None:
        if not self.dirty:
            return
        super().flush()

        output = self.render()
        if output == self._last_output:
            return
        self._last_output = output

        try:
            self.stream.write(output + "\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write bar output: {e}")

    def poll_input(self, timeout: float) -> List[str]:
        if self._selector is None:
            return super().poll_input(timeout)

        if not self._selector.select(max(timeout, 0.0)):
            return []

        # Unbuffered: select() only sees bytes not yet read from the descriptor
        try:
            chunk = os.read(self._input_fd, READ_CHUNK)
        except OSError as e:
            logger.error(f"Failed to read command input: {e}")
            self._close_selector()
            return []

        if not chunk:
            # EOF: stop watching stdin, keep the bar running
            logger.info("Command input closed")
            self._close_selector()
            lines, self._partial = [self._partial], b""
        else:
            *lines, self._partial = (self._partial + chunk).split(b"\n")

        commands = []
        for raw in lines:
            line = raw.decode("utf-8", errors="replace").strip()
            if line:
                commands.append(line)
        return commands

    def close(self) -> None:
        self._close_selector()

    def _close_selector(self) -> None:
        if self._selector is not None:
            self._selector.close()
            self._selector = None


def _panel_lines(panel: TreeNode) -> List[str]:
    """One line per panel child; list nodes expand to one numbered line per row."""
    lines = []
    for child in panel.children:
        if not child.visible:
            continue
        if child.role.endswith("list"):
            for number, row in enumerate(child.children, start=1):
                lines.append(f"{number:>2}. " + " ".join(row.collect_text()))
        elif child.text and "\n" in child.text:
            lines.extend(child.text.splitlines())
        else:
            text = " ".join(child.collect_text())
            if text:
                lines.append(text)
    return lines
