"""Identifier generation and free-text sanitisation."""

from __future__ import annotations

import uuid
from typing import Any

from ..errors import ValidationError


def new_id() -> str:
    """Return a fresh, opaque record identifier."""
    return uuid.uuid4().hex


def sanitize(value: Any) -> Any:
    """Escape ``<``/``>`` and trim outer whitespace of string ``value``.

    This is a minimal guard against stored markup, not context-aware
    escaping; quotes are left untouched. Non-string values pass through
    unchanged.
    """
    if not isinstance(value, str):
        return value
    return value.replace("<", "&lt;").replace(">", "&gt;").strip()


def is_blank(value: Any) -> bool:
    """Return ``True`` for ``None``, empty and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def check_length(value: str | None, limit: int, label: str) -> None:
    """Raise :class:`ValidationError` if ``value`` is longer than ``limit``."""
    if value is not None and len(value) > limit:
        raise ValidationError(f"{label} too long (max {limit} chars)")
