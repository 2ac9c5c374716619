"""Betting pool on the birth date, time, weight and size."""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from ..core.models import Bet
from ..core.sanitize import check_length, is_blank, sanitize
from ..errors import ValidationError
from .base import CollectionService

log = logging.getLogger(__name__)

NAME_MAX = 50
DEFAULT_TIME = "12:00"

_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def parse_int(value: Any) -> int:
    """Parse the leading integer of ``value`` ("3450g" -> 3450)."""
    if isinstance(value, bool):
        raise ValidationError("Weight and size must be numbers")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError("Weight and size must be numbers")
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        raise ValidationError("Weight and size must be numbers")
    try:
        return int(match.group(1))
    except ValueError as exc:
        # more digits than int() accepts from a string
        raise ValidationError("Weight and size must be numbers") from exc


class BetService(CollectionService[Bet]):
    model = Bet

    def create(
        self,
        name: str | None,
        date: str | None,
        weight: Any,
        size: Any,
        time: str | None = None,
    ) -> Bet:
        # A weight or size of 0 counts as missing
        if any(is_blank(v) for v in (name, date)) or not weight or not size:
            raise ValidationError("Missing fields")
        check_length(name, NAME_MAX, "Name")

        bet = Bet(
            name=sanitize(name),
            date=sanitize(date),
            time=sanitize(time) or DEFAULT_TIME,
            weight=parse_int(weight),
            size=parse_int(size),
        )
        self._append(bet)
        log.info("Bet placed by %s (%s)", bet.name, bet.id)
        return bet
