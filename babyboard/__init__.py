"""Core package for the baby dashboard.

This module exposes the record models, the storage layer and the app
factory so that consumers of the package can simply import them from
``babyboard``.
"""

from .api.app import create_app
from .config import Settings, load_settings
from .core.models import Bet, NameSuggestion, Offer, WishlistItem
from .core.storage import JSONCollection

__all__ = [
    "Bet",
    "JSONCollection",
    "NameSuggestion",
    "Offer",
    "Settings",
    "WishlistItem",
    "create_app",
    "load_settings",
]
