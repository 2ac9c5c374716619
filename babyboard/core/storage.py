"""Flat JSON file storage for the dashboard collections."""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


class JSONCollection:
    """Persist one ordered collection of records as a JSON array.

    Every operation reloads the file; nothing is cached between calls. A
    missing or unreadable file is treated as an empty collection so that a
    damaged file never takes the whole dashboard down.
    """

    def __init__(self, path: Path) -> None:
        """Initialise the collection backed by the JSON file at ``path``."""
        self.path = Path(path)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Persistence helpers
    def ensure(self) -> None:
        """Create the parent directory and an empty array file if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save([])

    def load(self) -> list[dict[str, Any]]:
        """Return the stored records, or ``[]`` if the file cannot be used."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            log.warning("Could not read %s, treating as empty: %s", self.path, exc)
            return []

        if not isinstance(data, list):
            log.warning("%s does not contain a JSON array, treating as empty", self.path)
            return []
        return [item for item in data if isinstance(item, dict)]

    def save(self, records: list[dict[str, Any]]) -> None:
        """Persist ``records`` atomically."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)

    @contextmanager
    def locked(self) -> Iterator[JSONCollection]:
        """Hold this collection's lock for a read-modify-write sequence."""
        with self._lock:
            yield self
