"""Name suggestions and voting."""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import NameSuggestion
from ..core.sanitize import check_length, is_blank, sanitize
from ..errors import NotFound, ValidationError
from .base import CollectionService
from .votes import CHOICES, apply_vote, upcast_ledger

log = logging.getLogger(__name__)

NAME_MAX = 50


class NameService(CollectionService[NameSuggestion]):
    """Suggest, list, vote on and delete baby names."""

    model = NameSuggestion

    def _prepare(self, raw: dict[str, Any]) -> dict[str, Any]:
        return upcast_ledger(raw)

    @staticmethod
    def public_view(record: NameSuggestion) -> dict[str, Any]:
        """Serialise ``record`` without the ledger of voter addresses."""
        data = record.to_dict()
        data.pop("votedBy", None)
        return data

    # ------------------------------------------------------------------
    def create(self, name: str | None) -> NameSuggestion:
        if is_blank(name):
            raise ValidationError("Name required")
        check_length(name, NAME_MAX, "Name")

        record = NameSuggestion(name=sanitize(name))
        self._append(record)
        log.info("Name suggested: %s (%s)", record.name, record.id)
        return record

    def vote(self, record_id: str | None, voter: str, choice: str | None) -> NameSuggestion:
        if is_blank(record_id) or choice not in CHOICES:
            raise ValidationError("Invalid ID or type")

        with self.collection.locked():
            records, invalid = self._load()
            record = self._find(records, record_id)
            if record is None:
                raise NotFound("Name not found")
            apply_vote(record, voter, choice)
            self._save(records, invalid)
        return record
