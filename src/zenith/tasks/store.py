"""
Persistent, ordered task store.

The store is the only state in Zenith that survives a restart. It is loaded
once per process, mutated in place by the todo module, and written back to
disk synchronously after every successful mutation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..utils.paths import default_store_path
from .model import TaskRecord, clamp_priority, has_priority_shorthand, parse_priority

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TaskStore:
    """
    Ordered collection of task records backed by a JSON file.

    Order is significant: it is both the display order and the order in which
    the first pending task is searched for.

    On-disk format::

        {
          "items": [
            {"text": "Deploy server", "done": false, "priority": 3}
          ]
        }
    """

    def __init__(self, path: Optional[PathLike] = None, records: Optional[List[TaskRecord]] = None):
        """
        Initialize the store.

        Args:
            path: JSON file backing this store (default: ~/.config/zenith/todos.json)
            records: Initial records (default: empty)
        """
        self.path = Path(path).expanduser() if path else default_store_path()
        self.records: List[TaskRecord] = list(records) if records else []

    @classmethod
    def load(cls, path: Optional[PathLike] = None) -> "TaskStore":
        """
        Load the store from disk.

        A missing, unreadable or malformed file gives an empty store. This is
        never reported to the caller as an error.
        """
        store = cls(path)

        if not store.path.exists():
            logger.debug(f"No task file at {store.path}, starting empty")
            return store

        try:
            raw = store.path.read_text(encoding="utf-8")
            data = json.loads(raw)
            if not isinstance(data, dict) or not isinstance(data.get("items"), list):
                raise ValueError("expected an object with an 'items' list")
            store.records = [TaskRecord.from_dict(item) for item in data["items"]]
        except (OSError, ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.warning(f"Could not load tasks from {store.path}, starting empty: {e}")
            store.records = []
            return store

        logger.info(f"Loaded {len(store.records)} tasks from {store.path}")
        return store

    def save(self) -> bool:
        """
        Write the full ordered sequence to disk.

        Missing parent directories are created. Write failures are logged and
        absorbed so a transient filesystem error never ends the session.

        Returns:
            True if the file was written, False otherwise
        """
        payload = {"items": [record.to_dict() for record in self.records]}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save tasks to {self.path}: {e}")
            self._discard(tmp_path)
            return False

        logger.debug(f"Saved {len(self.records)} tasks to {self.path}")
        return True

    # Mutations. Each one saves before returning when it changed the store.

    def insert(self, text: str, priority: Optional[int] = None) -> Optional[TaskRecord]:
        """
        Append a new pending task.

        A leading ``N:`` shorthand sets the priority and takes precedence over
        the ``priority`` argument, which is clamped into [0, 9].

        Args:
            text: Raw input text
            priority: Priority to use when the text carries no shorthand

        Returns:
            The new record, or None if the text was empty after trimming
        """
        shorthand_priority, clean_text = parse_priority(text)
        # Undecodable input bytes (lone surrogates) cannot be written as UTF-8
        clean_text = clean_text.encode("utf-8", "replace").decode("utf-8")
        if not clean_text:
            logger.debug("Ignoring empty task text")
            return None

        if priority is None or has_priority_shorthand(text):
            priority = shorthand_priority
        else:
            priority = clamp_priority(priority)

        record = TaskRecord(text=clean_text, done=False, priority=priority)
        self.records.append(record)
        self.save()
        return record

    def toggle(self, index: int) -> bool:
        """Flip the done flag of the task at ``index``. No-op when out of range."""
        if not self._in_range(index):
            return False

        record = self.records[index]
        record.done = not record.done
        self.save()
        return True

    def move_up(self, index: int) -> bool:
        """Swap the task at ``index`` with its predecessor. No-op for 0 or out of range."""
        if index == 0 or not self._in_range(index):
            return False

        records = self.records
        records[index - 1], records[index] = records[index], records[index - 1]
        self.save()
        return True

    def remove(self, index: int) -> bool:
        """Delete the task at ``index``. No-op when out of range."""
        if not self._in_range(index):
            return False

        del self.records[index]
        self.save()
        return True

    def clear_done(self) -> int:
        """Remove all completed tasks. Returns the number removed."""
        remaining = [record for record in self.records if not record.done]
        removed = len(self.records) - len(remaining)
        if removed:
            self.records = remaining
            self.save()
        return removed

    # Derived aggregates, computed on demand and never stored.

    @property
    def pending_count(self) -> int:
        return sum(1 for record in self.records if not record.done)

    @property
    def done_count(self) -> int:
        return sum(1 for record in self.records if record.done)

    def top_task(self) -> Optional[TaskRecord]:
        """First pending task in store order, or None."""
        return next((record for record in self.records if not record.done), None)

    def completion_ratio(self) -> float:
        """Done / total, 0.0 for an empty store."""
        if not self.records:
            return 0.0
        return self.done_count / len(self.records)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.records)

    @staticmethod
    def _discard(tmp_path: Path) -> None:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove {tmp_path}: {e}")

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TaskRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> TaskRecord:
        return self.records[index]

    def __repr__(self) -> str:
        return f"<TaskStore(path={self.path}, tasks={len(self.records)}, pending={self.pending_count})>"
