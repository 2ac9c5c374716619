import json

import pytest

from babyboard.core.models import NameSuggestion
from babyboard.core.storage import JSONCollection
from babyboard.data.names import NameService
from babyboard.data.votes import UNKNOWN_VOTER, apply_vote, upcast_ledger
from babyboard.errors import Forbidden, NotFound, ValidationError


def counts(record):
    return record.votes, record.dislikes


def test_up_down_none_changes_one_counter_per_step():
    name = NameSuggestion(name="Mia", votes=3, dislikes=2)

    apply_vote(name, "1.2.3.4", "up")
    assert counts(name) == (4, 2)
    apply_vote(name, "1.2.3.4", "down")
    assert counts(name) == (3, 3)
    apply_vote(name, "1.2.3.4", "none")
    assert counts(name) == (3, 2)
    assert "1.2.3.4" not in name.voted_by


@pytest.mark.parametrize(
    "sequence, expected",
    [
        (["up"], (1, 0)),
        (["up", "down"], (0, 1)),
        (["down", "none", "up"], (1, 0)),
        (["up", "none", "down", "up", "none"], (0, 0)),
        (["none"], (0, 0)),
    ],
)
def test_only_last_choice_counts(sequence, expected):
    name = NameSuggestion(name="Ida")
    for choice in sequence:
        apply_vote(name, "10.0.0.1", choice)
    assert counts(name) == expected


def test_repeated_choice_is_forbidden():
    name = NameSuggestion(name="Mia")
    apply_vote(name, "1.2.3.4", "up")
    with pytest.raises(Forbidden):
        apply_vote(name, "1.2.3.4", "up")
    assert counts(name) == (1, 0)
    assert name.voted_by == {"1.2.3.4": "up"}


def test_voters_are_independent():
    name = NameSuggestion(name="Mia")
    apply_vote(name, "a", "up")
    apply_vote(name, "b", "up")
    apply_vote(name, "c", "down")
    apply_vote(name, "a", "none")
    assert counts(name) == (1, 1)


def test_unknown_voter_is_not_deduplicated():
    name = NameSuggestion(name="Mia")
    for _ in range(3):
        apply_vote(name, UNKNOWN_VOTER, "up")
    assert counts(name) == (3, 0)


def test_decrement_is_floored_at_zero():
    name = NameSuggestion(name="Mia", votes=0, voted_by={"a": "up"})
    apply_vote(name, "a", "down")
    assert counts(name) == (0, 1)


def test_upcast_legacy_list():
    raw = {"id": "1", "name": "Ben", "votes": 2, "votedIPs": ["a", "b"]}
    upcast_ledger(raw)
    assert raw["votedBy"] == {"a": "up", "b": "up"}
    assert "votedIPs" not in raw


def test_upcast_keeps_mapping_and_fills_missing():
    assert upcast_ledger({"votedBy": {"a": "down"}})["votedBy"] == {"a": "down"}
    assert upcast_ledger({"votedIPs": {"a": "up"}})["votedBy"] == {"a": "up"}
    assert upcast_ledger({})["votedBy"] == {}


# ----------------------------------------------------------------------
# NameService


@pytest.fixture()
def names(tmp_path):
    return NameService(JSONCollection(tmp_path / "names.json"))


def test_create_and_vote_persists(names, tmp_path):
    mia = names.create("  Mia ")
    assert mia.name == "Mia"

    names.vote(mia.id, "1.2.3.4", "up")
    stored = json.loads((tmp_path / "names.json").read_text(encoding="utf-8"))
    assert stored[0]["votes"] == 1
    assert stored[0]["votedBy"] == {"1.2.3.4": "up"}


def test_vote_migrates_legacy_record(names, tmp_path):
    path = tmp_path / "names.json"
    path.write_text(
        json.dumps([{"id": "1", "name": "Ben", "votes": 1, "dislikes": 0, "votedIPs": ["9.9.9.9"]}]),
        encoding="utf-8",
    )

    # the legacy voter switches to "down": their assumed "up" is taken back
    record = names.vote("1", "9.9.9.9", "down")
    assert counts(record) == (0, 1)

    stored = json.loads(path.read_text(encoding="utf-8"))[0]
    assert stored["votedBy"] == {"9.9.9.9": "down"}
    assert "votedIPs" not in stored


def test_vote_errors(names):
    with pytest.raises(ValidationError, match="Invalid ID or type"):
        names.vote("1", "a", "sideways")
    with pytest.raises(ValidationError):
        names.vote(None, "a", "up")
    with pytest.raises(NotFound, match="Name not found"):
        names.vote("missing", "a", "up")


def test_create_validation(names):
    with pytest.raises(ValidationError, match="Name required"):
        names.create("   ")
    with pytest.raises(ValidationError, match="max 50"):
        names.create("x" * 51)


def test_public_view_hides_voters(names):
    mia = names.create("Mia")
    names.vote(mia.id, "1.2.3.4", "up")
    view = names.public_view(names.list()[0])
    assert view["votes"] == 1
    assert "votedBy" not in view


def test_delete(names, tmp_path):
    mia = names.create("Mia")
    names.create("Ida")
    before = (tmp_path / "names.json").read_bytes()

    with pytest.raises(NotFound):
        names.delete("missing")
    assert (tmp_path / "names.json").read_bytes() == before

    names.delete(mia.id)
    assert [n.name for n in names.list()] == ["Ida"]
