"""Record models for the four dashboard collections.

The models are implemented using :mod:`pydantic` so that records read from
disk are validated and serialised back with the camelCase keys the frontend
expects. Keys the models do not know about are kept, so rewriting a file never
drops data written by an older or newer version of the service.

Some fields accept an older key name when loading (``date`` for
``createdAt``, ``timestamp`` for ``submittedAt``, ``imageUrl`` for
``imageRef``); records are always written back with the current names.
"""

from __future__ import annotations

import datetime
from datetime import UTC
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .sanitize import new_id

VoteChoice = Literal["up", "down"]


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.datetime.now(tz=UTC).isoformat()


class Record(BaseModel):
    """Common base: an ``id`` plus round-tripping of unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class NameSuggestion(Record):
    """A suggested baby name and its vote ledger.

    Attributes
    ----------
    votes, dislikes:
        Aggregate counters, kept in step with ``voted_by`` by
        :func:`babyboard.data.votes.apply_vote`.
    voted_by:
        Maps each voter identity to its current choice. Stored as
        ``votedBy``.

    """

    name: str
    votes: int = 0
    dislikes: int = 0
    voted_by: dict[str, VoteChoice] = Field(default_factory=dict, alias="votedBy")

    @field_validator("votes", "dislikes", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class WishlistItem(Record):
    """A gift on the wishlist. ``reserved_by`` is set iff ``reserved``."""

    name: str
    link: str
    price: str = ""
    note: str = ""
    reserved: bool = False
    reserved_by: str | None = Field(None, alias="reservedBy")
    created_at: str = Field(
        default_factory=utc_now,
        validation_alias=AliasChoices("createdAt", "date", "created_at"),
        serialization_alias="createdAt",
    )


class Bet(Record):
    """A guess at the birth date, time, weight (g) and size (cm).

    Weight and size may be ``None`` in files written by older versions,
    which stored unparseable numbers as ``null``.
    """

    name: str
    date: str
    time: str = "12:00"
    weight: int | None = None
    size: int | None = None
    submitted_at: str = Field(
        default_factory=utc_now,
        validation_alias=AliasChoices("submittedAt", "timestamp", "submitted_at"),
        serialization_alias="submittedAt",
    )


class Offer(Record):
    """An item offered on the board together with its uploaded image."""

    name: str
    email: str | None = None
    description: str
    image_ref: str = Field(
        "",
        validation_alias=AliasChoices("imageRef", "imageUrl", "image_ref"),
        serialization_alias="imageRef",
    )
    submitted_at: str = Field(
        default_factory=utc_now,
        validation_alias=AliasChoices("submittedAt", "timestamp", "submitted_at"),
        serialization_alias="submittedAt",
    )
