"""Shared read-modify-write plumbing for the collection services."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as RecordError

from ..core.models import Record
from ..core.storage import JSONCollection
from ..errors import NotFound

log = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class CollectionService(Generic[R]):
    """Load, validate and save one collection of ``model`` records.

    Stored entries that do not validate are left out of every view but are
    written back untouched, so a damaged record never hides or destroys the
    rest of its collection.
    """

    model: type[R]

    def __init__(self, collection: JSONCollection) -> None:
        self.collection = collection

    def _prepare(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Hook for upgrading a stored entry before validation."""
        return raw

    def _load(self) -> tuple[list[R], list[dict[str, Any]]]:
        records: list[R] = []
        invalid: list[dict[str, Any]] = []
        for raw in self.collection.load():
            try:
                records.append(self.model.model_validate(self._prepare(raw)))
            except RecordError as exc:
                log.warning(
                    "Skipping invalid %s record %r in %s: %s",
                    self.model.__name__, raw.get("id"), self.collection.path,
                    exc.errors(include_url=False),
                )
                invalid.append(raw)
        return records, invalid

    def _save(self, records: list[R], invalid: list[dict[str, Any]]) -> None:
        self.collection.save([r.to_dict() for r in records] + invalid)

    def _find(self, records: list[R], record_id: str | None) -> R | None:
        return next((r for r in records if r.id == record_id), None)

    def _append(self, record: R) -> None:
        with self.collection.locked():
            records, invalid = self._load()
            records.append(record)
            self._save(records, invalid)

    def _removed(self, entries: list[dict[str, Any]]) -> None:
        """Hook run after deleted ``entries`` have been saved away."""

    # ------------------------------------------------------------------
    def list(self) -> list[R]:
        return self._load()[0]

    def delete(self, record_id: str) -> None:
        """Remove the entry with ``record_id``, including an invalid one."""
        with self.collection.locked():
            records, invalid = self._load()
            removed = [r.to_dict() for r in records if r.id == record_id]
            removed += [raw for raw in invalid if raw.get("id") == record_id]
            if not removed:
                log.info(
                    "%s %s not found among %d records",
                    self.model.__name__, record_id, len(records) + len(invalid),
                )
                raise NotFound()
            self._save(
                [r for r in records if r.id != record_id],
                [raw for raw in invalid if raw.get("id") != record_id],
            )
        log.info("%s %s deleted", self.model.__name__, record_id)
        self._removed(removed)
