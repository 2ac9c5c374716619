"""Per-voter ledger for name suggestions.

Each :class:`~babyboard.core.models.NameSuggestion` remembers the current
choice of every voter identity. ``votes``/``dislikes`` are a maintained cache
of that ledger: a changed vote first takes back the previous choice and then
counts the new one, so re-voting and withdrawing never double-count.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import NameSuggestion
from ..errors import Forbidden

log = logging.getLogger(__name__)

UNKNOWN_VOTER = "unknown"
CHOICES = ("up", "down", "none")

_COUNTER = {"up": "votes", "down": "dislikes"}


def upcast_ledger(raw: dict[str, Any]) -> dict[str, Any]:
    """Upgrade the stored ledger of ``raw`` to the voter -> choice mapping.

    Older files kept a plain list of voter addresses (under ``votedIPs``)
    without recording a direction. Every such entry is counted as an "up"
    vote. ``raw`` is modified in place and returned.
    """
    legacy = raw.pop("votedIPs", None)
    ledger = raw.get("votedBy", legacy)

    if isinstance(ledger, list):
        ledger = {str(voter): "up" for voter in ledger}
    elif not isinstance(ledger, dict):
        ledger = {}
    raw["votedBy"] = {
        str(voter): choice for voter, choice in ledger.items() if choice in _COUNTER
    }
    return raw


def apply_vote(record: NameSuggestion, voter: str, choice: str) -> NameSuggestion:
    """Record ``voter``'s ``choice`` ("up", "down" or "none") on ``record``.

    A resolvable voter repeating their current choice raises
    :class:`~babyboard.errors.Forbidden` and leaves ``record`` untouched.
    Votes from :data:`UNKNOWN_VOTER` are never deduplicated and never take
    back a previous vote.
    """
    resolvable = voter != UNKNOWN_VOTER
    previous = record.voted_by.get(voter)

    if resolvable and choice != "none" and previous == choice:
        raise Forbidden("Already voted")

    if resolvable and previous:
        counter = _COUNTER[previous]
        setattr(record, counter, max(0, getattr(record, counter) - 1))

    if choice == "none":
        record.voted_by.pop(voter, None)
    else:
        counter = _COUNTER[choice]
        setattr(record, counter, max(0, getattr(record, counter)) + 1)
        record.voted_by[voter] = choice

    log.debug(
        "Vote on %s by %s: %s -> %s (votes=%d, dislikes=%d)",
        record.id, voter, previous or "none", choice, record.votes, record.dislikes,
    )
    return record
