"""
Task record data model.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

MIN_PRIORITY = 0
MAX_PRIORITY = 9


def clamp_priority(value: Any) -> int:
    """Clamp a priority into [0, 9]. Raises ValueError for non-integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Priority must be an integer, got {value!r}")
    return max(MIN_PRIORITY, min(MAX_PRIORITY, value))


def has_priority_shorthand(text: str) -> bool:
    """True if the trimmed text starts with ``<digit>:``."""
    text = text.strip()
    return len(text) >= 2 and text[0] in "0123456789" and text[1] == ":"


def parse_priority(text: str) -> Tuple[int, str]:
    """
    Parse the ``N:text`` priority shorthand.

    The input is trimmed first. If it starts with an ASCII digit followed
    directly by a colon, the digit is the priority and the trimmed remainder
    is the text. Anything else yields priority 0 and the trimmed input.

    Example:
        >>> parse_priority("3:Deploy server")
        (3, 'Deploy server')
        >>> parse_priority("3Deploy")
        (0, '3Deploy')
    """
    text = text.strip()
    if has_priority_shorthand(text):
        return int(text[0]), text[2:].strip()
    return 0, text


@dataclass
class TaskRecord:
    """
    A single task.

    Fields:
        text: Description, never empty. Stored untruncated.
        done: Completion flag.
        priority: 0 (unset), 1 (highest) to 9 (lowest).
    """

    text: str
    done: bool = False
    priority: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskRecord":
        """
        Build a record from its stored form.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task record must be an object, got {type(data).__name__}")

        text = data.get("text")
        done = data.get("done", False)
        if not isinstance(text, str) or not text:
            raise ValueError(f"Task record has invalid text: {text!r}")
        if not isinstance(done, bool):
            raise ValueError(f"Task record has invalid done flag: {done!r}")

        return cls(text=text, done=done, priority=clamp_priority(data.get("priority", 0)))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def priority_tier(self) -> str:
        """Visual bucket for the priority: high, mid, low or none."""
        if 1 <= self.priority <= 3:
            return "high"
        if 4 <= self.priority <= 6:
            return "mid"
        if 7 <= self.priority <= 9:
            return "low"
        return "none"

    @property
    def badge(self) -> Optional[str]:
        return f"P{self.priority}" if self.priority > 0 else None
