"""Gift wishlist with reservations."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from ..core.models import WishlistItem
from ..core.sanitize import check_length, is_blank, sanitize
from ..errors import NotFound, ValidationError
from .base import CollectionService

log = logging.getLogger(__name__)

NAME_MAX = 200
PRICE_MAX = 50
NOTE_MAX = 500
ALLOWED_SCHEMES = {"http", "https"}


def validate_link(link: str) -> None:
    """Reject anything but an absolute http(s) URL."""
    try:
        parts = urlsplit(link.strip())
        # accessing ``port`` validates the netloc
        parts.port
    except ValueError as exc:
        raise ValidationError("Invalid link format.") from exc
    if not parts.scheme or not parts.netloc:
        raise ValidationError("Invalid link format.")
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError("Invalid link protocol. Only http and https are allowed.")
    if not parts.hostname:
        raise ValidationError("Invalid link format.")


class WishlistService(CollectionService[WishlistItem]):
    model = WishlistItem

    def create(
        self,
        name: str | None,
        link: str | None,
        price: str | None = None,
        note: str | None = None,
    ) -> WishlistItem:
        if is_blank(name) or is_blank(link):
            raise ValidationError("Name and Link required")
        check_length(name, NAME_MAX, "Name")
        check_length(price, PRICE_MAX, "Price")
        check_length(note, NOTE_MAX, "Note")
        validate_link(link)

        item = WishlistItem(
            name=sanitize(name),
            link=sanitize(link),
            price=sanitize(price) or "",
            note=sanitize(note) or "",
        )
        self._append(item)
        log.info("Wishlist item added: %s (%s)", item.name, item.id)
        return item

    def toggle_reservation(self, record_id: str | None, reserved_by: str | None = None) -> WishlistItem:
        """Flip the reservation state of an item.

        When the item becomes reserved ``reserved_by`` is recorded (or
        ``"Anonymous"``); releasing it clears the name again.
        """
        if is_blank(record_id):
            raise ValidationError("ID required")
        reserved_by = sanitize(reserved_by)

        with self.collection.locked():
            records, invalid = self._load()
            item = self._find(records, record_id)
            if item is None:
                raise NotFound()
            item.reserved = not item.reserved
            item.reserved_by = (reserved_by or "Anonymous") if item.reserved else None
            self._save(records, invalid)
        log.info("Wishlist item %s %s", item.id, "reserved" if item.reserved else "released")
        return item
