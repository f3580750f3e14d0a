"""Tests for player storage and key helpers."""

from gatekeeper import storage


def test_safe_key_basic():
    assert storage.safe_key("12345") == "12345"
    assert storage.safe_key("test_user") == "test_user"


def test_safe_key_strips_path_tricks():
    assert storage.safe_key("../etc/passwd") == "etc-passwd"


def test_safe_key_empty():
    assert storage.safe_key("") == "anonymous"


def test_create_and_get_player():
    player = storage.create_player("42", "Aldric", "DE", "Europe/Berlin")
    assert player["chat_id"] == "42"
    loaded = storage.get_player("42")
    assert loaded["player_name"] == "Aldric"
    assert loaded["player_language"] == "DE"
    assert loaded["timezone"] == "Europe/Berlin"


def test_get_player_missing():
    assert storage.get_player("nobody") is None


def test_create_player_does_not_overwrite():
    storage.create_player("42", "Aldric")
    again = storage.create_player("42", "Someone Else")
    assert again["player_name"] == "Aldric"


def test_update_timezone():
    storage.create_player("42", "Aldric", tz="UTC")
    updated = storage.update_player_timezone("42", "Asia/Tokyo")
    assert updated["timezone"] == "Asia/Tokyo"
    assert storage.get_player("42")["timezone"] == "Asia/Tokyo"


def test_update_timezone_missing_player():
    assert storage.update_player_timezone("nobody", "UTC") is None
