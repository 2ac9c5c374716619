import pytest

from babyboard.core.auth import AccessGate
from babyboard.core.sanitize import check_length, is_blank, sanitize
from babyboard.errors import ValidationError


def test_sanitize_escapes_angle_brackets_and_trims():
    assert sanitize("  <b>Mia</b> ") == "&lt;b&gt;Mia&lt;/b&gt;"
    # quotes are not touched
    assert sanitize('"Lea"') == '"Lea"'
    assert sanitize(None) is None
    assert sanitize(42) == 42


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   ")
    assert not is_blank("x")
    assert not is_blank(0)


def test_check_length():
    check_length("a" * 50, 50, "Name")
    check_length(None, 50, "Name")
    with pytest.raises(ValidationError, match=r"Name too long \(max 50 chars\)"):
        check_length("a" * 51, 50, "Name")


def test_access_gate():
    gate = AccessGate("2026")
    assert gate.authorize("2026")
    assert not gate.authorize("2025")
    assert not gate.authorize(None)
    assert not gate.authorize("")
    assert not AccessGate("").authorize("")
