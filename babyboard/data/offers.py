"""Offer board: items passed on between friends, each with a photo."""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import Offer
from ..core.sanitize import check_length, is_blank, new_id, sanitize
from ..core.storage import JSONCollection
from ..errors import ValidationError
from .base import CollectionService
from .images import ImageStore

log = logging.getLogger(__name__)

NAME_MAX = 50
EMAIL_MAX = 200
DESCRIPTION_MAX = 1000


class OfferService(CollectionService[Offer]):
    """CRUD for offers, keeping each record and its image file together."""

    model = Offer

    def __init__(self, collection: JSONCollection, images: ImageStore) -> None:
        super().__init__(collection)
        self.images = images

    @staticmethod
    def public_view(record: Offer) -> dict[str, Any]:
        """Serialise ``record`` with the ``email`` key removed entirely."""
        data = record.to_dict()
        data.pop("email", None)
        return data

    @staticmethod
    def admin_view(record: Offer) -> dict[str, Any]:
        return record.to_dict()

    def _removed(self, entries: list[dict[str, Any]]) -> None:
        # The records are already gone; an image left behind is only logged
        for entry in entries:
            self.images.remove(entry.get("imageRef") or entry.get("imageUrl"))

    # ------------------------------------------------------------------
    def create(
        self,
        name: str | None,
        description: str | None,
        image_base64: str | None,
        email: str | None = None,
    ) -> Offer:
        """Store the image, then the record.

        If the image is rejected nothing is written; if the record cannot be
        saved the image is removed again.
        """
        if any(is_blank(v) for v in (name, description, image_base64)):
            raise ValidationError("Missing fields")
        check_length(name, NAME_MAX, "Name")
        check_length(description, DESCRIPTION_MAX, "Description")
        check_length(email, EMAIL_MAX, "Email")

        record_id = new_id()
        image_ref = self.images.ingest(image_base64, record_id)
        offer = Offer(
            id=record_id,
            name=sanitize(name),
            email=sanitize(email) or None,
            description=sanitize(description),
            image_ref=image_ref,
        )
        try:
            self._append(offer)
        except OSError:
            self.images.remove(image_ref)
            raise
        log.info("Offer created: %s (%s)", offer.name, offer.id)
        return offer
