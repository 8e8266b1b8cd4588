"""
JSONL-based storage for the weekly schedule log.

One JSON object per line, in recording order.  Appends write a single
line; the only rewrite is replace_entries(), used when a completed flag
is set.
"""

import json
from pathlib import Path
from typing import Sequence

from ..core.config import SCHEDULE_FILENAME, user_config_dir
from ..core.errors import ValidationError
from ..core.models import ScheduleEntry
from .serializers import dict_to_schedule_entry, schedule_entry_to_json_line


class JsonlScheduleStore:
    """
    ScheduleStore backed by a JSONL file.

    The file is created on first append; a missing file reads as an empty
    schedule.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Path to the JSONL schedule file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if the schedule file exists."""
        return self.path.exists()

    def init(self) -> None:
        """
        Create an empty schedule file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()

    def load_entries(self) -> list[ScheduleEntry]:
        """
        Load all entries in recording order.

        Returns:
            List of ScheduleEntry (empty if the file does not exist)

        Raises:
            ValidationError: If any line is not a valid entry
        """
        if not self.path.exists():
            return []

        entries: list[ScheduleEntry] = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                    if not isinstance(data, dict):
                        raise ValidationError("expected a JSON object")
                    entries.append(dict_to_schedule_entry(data))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.path}: {e}"
                    ) from e
        return entries

    def append_entry(self, entry: ScheduleEntry) -> None:
        """Append one entry as a new line."""
        self.init()
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(schedule_entry_to_json_line(entry) + "\n")

    def replace_entries(self, entries: Sequence[ScheduleEntry]) -> None:
        """
        Rewrite the file with ``entries``.

        Args:
            entries: Entries to write, in order
        """
        self.init()
        with open(self.path, "w", encoding="utf-8") as f:
            for entry in entries:
                f.write(schedule_entry_to_json_line(entry) + "\n")


def get_default_schedule_path() -> Path:
    """Return ~/.lift-planner/schedule.jsonl."""
    return user_config_dir() / SCHEDULE_FILENAME
