# SPDX-License-Identifier: MIT

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional, cast

import pendulum

from awcontext import configuration, time
from awcontext.errors import StorageError
from awcontext.model.context_entry import ContextEntry
from awcontext.template.context_entry import get_context_entry_template

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MINUTES = 30


class ContextStore:
    """
    Flat-file store of context entries, one JSON file per local calendar day.

    Each day file (``context-YYYY-MM-DD.json``) holds the entries created on
    that day in insertion order. A missing file means the day has no entries.

    There is no locking: two processes calling add() for the same day race on
    the read-modify-write and the later rewrite wins, dropping the other
    entry. This is a known limitation of a single-user tool. Each rewrite is
    atomic, so a crash never leaves a half-written day file behind.
    """

    def __init__(self, base_path: Optional[Path] = None) -> None:
        try:
            self.base_path = (
                base_path if base_path is not None else configuration.get_data_path()
            )
            self.base_path.mkdir(parents=True, exist_ok=True)
        except (OSError, RuntimeError) as e:
            raise StorageError(f"Could not create context directory: {e}") from e

    def add(self, context: str, tags: Iterable[str] = ()) -> ContextEntry:
        entry = get_context_entry_template(context, tags)

        # Fails loudly on a corrupt day file rather than overwriting it
        entries = self.get_entries_for_day(entry["timestamp"])
        entries.append(entry)
        self.__save_day(entry["timestamp"], entries)

        logger.debug(
            "Added context %s to %s",
            entry["id"],
            self.day_file_path(entry["timestamp"]).name,
        )
        return entry

    def query_by_range(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[ContextEntry]:
        if start > end:
            return []

        results: list[ContextEntry] = []
        day = time.local_date(start)
        last_day = time.local_date(end)
        while day <= last_day:
            try:
                entries = self.__load_day_file(self.day_file_path_for_date(day))
            except StorageError as e:
                logger.warning("Skipping unreadable day file: %s", e)
                entries = []
            results.extend(
                entry for entry in entries if start <= entry["timestamp"] <= end
            )
            day = day.add(days=1)

        return self.__sorted(results)

    def search_by_tag(self, tag: str) -> list[ContextEntry]:
        results: list[ContextEntry] = []
        for file_path in self.list_day_files():
            try:
                entries = self.__load_day_file(file_path)
            except StorageError as e:
                logger.warning("Skipping unreadable day file: %s", e)
                continue
            results.extend(entry for entry in entries if tag in entry["tags"])

        return self.__sorted(results)

    def find_nearest(
        self,
        to: pendulum.DateTime,
        within_minutes: int = DEFAULT_WINDOW_MINUTES,
    ) -> Optional[ContextEntry]:
        window = pendulum.duration(minutes=within_minutes)
        candidates = self.query_by_range(to - window, to + window)

        nearest: Optional[ContextEntry] = None
        nearest_distance: Optional[float] = None
        for entry in candidates:
            distance = abs((entry["timestamp"] - to).total_seconds())
            # Strict comparison keeps the earlier entry on a tie
            if nearest_distance is None or distance < nearest_distance:
                nearest = entry
                nearest_distance = distance
        return nearest

    def get_entries_for_day(self, moment: pendulum.DateTime) -> list[ContextEntry]:
        """
        Load the day file for the local day containing ``moment``.

        Raises StorageError if the file exists but cannot be read or decoded.
        """
        return self.__load_day_file(self.day_file_path(moment))

    def day_file_path(self, moment: pendulum.DateTime) -> Path:
        return self.day_file_path_for_date(time.local_date(moment))

    def day_file_path_for_date(self, day: pendulum.Date) -> Path:
        return self.base_path / (
            f"{configuration.DAY_FILE_PREFIX}{day.format(time.DAY_FORMAT)}"
            f"{configuration.DAY_FILE_SUFFIX}"
        )

    def list_day_files(self) -> list[Path]:
        return sorted(
            file_path
            for file_path in self.base_path.iterdir()
            if file_path.suffix == configuration.DAY_FILE_SUFFIX
            and file_path.is_file()
        )

    def __load_day_file(self, file_path: Path) -> list[ContextEntry]:
        if not file_path.is_file():
            return []
        try:
            raw_entries = json.loads(file_path.read_text(encoding="utf-8"))
            if not isinstance(raw_entries, list):
                raise ValueError("expected a JSON array of entries")
            return [
                self.__convert_entry_for_deserialization(raw_entry)
                for raw_entry in raw_entries
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StorageError(f"{file_path}: {e}") from e

    def __save_day(self, moment: pendulum.DateTime, entries: list[ContextEntry]) -> None:
        file_path = self.day_file_path(moment)
        serializable_entries = [
            self.__convert_entry_for_serialization(entry) for entry in entries
        ]
        content = json.dumps(
            serializable_entries, indent=2, sort_keys=True, ensure_ascii=False
        )

        # Write to a temp file in the same directory, then rename over the target
        temp_name: Optional[str] = None
        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{file_path.stem}.", suffix=".tmp", dir=self.base_path
            )
            with os.fdopen(fd, "w", encoding="utf-8") as temp_file:
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_name, file_path)
        except OSError as e:
            if temp_name is not None:
                Path(temp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write {file_path}: {e}") from e

    def __convert_entry_for_serialization(self, entry: ContextEntry) -> dict[str, Any]:
        return {
            "id": entry["id"],
            "timestamp": time.datetime_to_iso_str(entry["timestamp"]),
            "context": entry["context"],
            "tags": list(entry["tags"]),
        }

    def __convert_entry_for_deserialization(self, entry: Any) -> ContextEntry:
        if not isinstance(entry, dict):
            raise ValueError(f"expected an entry object, got {entry!r}")
        tags = entry.get("tags") or []
        if not isinstance(tags, list):
            raise ValueError(f"tags must be a list, got {tags!r}")
        return cast(
            ContextEntry,
            {
                "id": str(entry["id"]),
                "timestamp": time.datetime_from_str(entry["timestamp"]),
                "context": str(entry["context"]),
                "tags": [str(tag) for tag in tags],
            },
        )

    def __sorted(self, entries: list[ContextEntry]) -> list[ContextEntry]:
        return sorted(entries, key=lambda entry: entry["timestamp"])
