"""Tests for the record models."""

from babyboard.core.models import Bet, NameSuggestion, Offer, WishlistItem


def test_name_defaults() -> None:
    """A fresh suggestion starts without votes."""
    name = NameSuggestion(name="Mia")
    assert name.votes == 0
    assert name.dislikes == 0
    assert name.voted_by == {}
    assert isinstance(name.id, str) and name.id


def test_ids_are_unique() -> None:
    assert NameSuggestion(name="A").id != NameSuggestion(name="A").id


def test_camel_case_round_trip() -> None:
    item = WishlistItem(name="Stroller", link="https://example.com")
    data = item.to_dict()
    assert data["reservedBy"] is None
    assert data["reserved"] is False
    assert "createdAt" in data
    assert WishlistItem.model_validate(data).to_dict() == data


def test_older_key_names_are_read() -> None:
    """Records written by older versions load under the current names."""
    bet = Bet.model_validate(
        {"id": "1", "name": "Oma", "date": "2026-08-18", "time": "04:30",
         "weight": 3400, "size": 51, "timestamp": "2026-01-01T00:00:00Z"}
    )
    assert bet.submitted_at == "2026-01-01T00:00:00Z"
    assert "timestamp" not in bet.to_dict()

    offer = Offer.model_validate(
        {"id": "2", "name": "Tom", "description": "Crib", "imageUrl": "/uploads/2.jpg"}
    )
    assert offer.image_ref == "/uploads/2.jpg"
    assert offer.to_dict()["imageRef"] == "/uploads/2.jpg"


def test_unknown_keys_are_kept() -> None:
    name = NameSuggestion.model_validate({"id": "1", "name": "Ben", "origin": "Hebrew"})
    assert name.to_dict()["origin"] == "Hebrew"


def test_null_counters_become_zero() -> None:
    name = NameSuggestion.model_validate({"id": "1", "name": "Ben", "votes": None})
    assert name.votes == 0
