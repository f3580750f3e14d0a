"""Tests for session, structure, traveler and event storage."""

from gatekeeper import storage

from tests.factories import make_row

PET = {"type": "cat", "name": "Ash"}


# ── Sessions ─────────────────────────────────────────────


def test_create_session_defaults():
    session = storage.create_session("42", PET, ["let-in"])
    assert session["day"] == 1
    assert session["active"] is True
    assert session["pet"] == PET
    assert storage.get_session(session["id"]) == session
    assert storage.session_dir(session["id"]).is_dir()


def test_create_session_with_given_id():
    session = storage.create_session("42", PET, [], session_id="abc123")
    assert session["id"] == "abc123"


def test_one_active_session_per_player():
    first = storage.create_session("42", PET, [])
    second = storage.create_session("42", PET, [])
    other = storage.create_session("99", PET, [])

    assert storage.get_session(first["id"])["active"] is False
    assert storage.get_active_session("42")["id"] == second["id"]
    assert storage.get_active_session("99")["id"] == other["id"]
    assert len(storage.list_sessions("42")) == 2


def test_get_active_session_none():
    assert storage.get_active_session("42") is None


def test_update_session_only_mutable_fields():
    session = storage.create_session("42", PET, [])
    updated = storage.update_session(session["id"], {"day": 3, "chat_id": "hacked"})
    assert updated["day"] == 3
    assert updated["chat_id"] == "42"


def test_update_session_missing():
    assert storage.update_session("nope", {"day": 2}) is None


# ── Structures ───────────────────────────────────────────


def test_set_structure_active():
    session = storage.create_session("42", PET, [])
    storage.save_structures(session["id"], [
        {"template_id": "chapel", "name": "Chapel", "active": False, "status": {}},
    ])
    assert storage.set_structure_active(session["id"], "chapel") is True
    assert storage.get_structure(session["id"], "chapel")["active"] is True


def test_set_structure_active_missing():
    session = storage.create_session("42", PET, [])
    assert storage.get_structures(session["id"]) == []
    assert storage.set_structure_active(session["id"], "chapel") is False


# ── Travelers ────────────────────────────────────────────


def test_get_travelers_by_day_sorted():
    session = storage.create_session("42", PET, [])
    rows = [make_row(2, 1), make_row(1, 2), make_row(1, 1)]
    storage.save_travelers(session["id"], rows)

    day1 = storage.get_travelers(session["id"], day=1)
    assert [r["id"] for r in day1] == ["1-1", "1-2"]
    assert len(storage.get_travelers(session["id"])) == 3


def test_complete_traveler():
    session = storage.create_session("42", PET, [])
    storage.save_travelers(session["id"], [make_row(1, 1)])
    row = storage.complete_traveler(session["id"], "1-1", "execute")
    assert row["complete"] is True
    assert storage.get_traveler(session["id"], "1-1")["decision"] == "execute"


def test_complete_traveler_missing():
    session = storage.create_session("42", PET, [])
    assert storage.complete_traveler(session["id"], "1-1", "allow") is None


# ── Events ───────────────────────────────────────────────


def test_events_append_only_and_limit():
    session = storage.create_session("42", PET, [])
    for i in range(12):
        storage.append_event(session["id"], f"event {i}", 1)

    events = storage.get_events(session["id"])
    assert len(events) == 12
    recent = storage.get_events(session["id"], limit=10)
    assert len(recent) == 10
    assert recent[0]["event"] == "event 2"
    assert recent[-1]["event"] == "event 11"
    assert recent[-1]["day"] == 1


def test_events_empty():
    session = storage.create_session("42", PET, [])
    assert storage.get_events(session["id"]) == []
    assert storage.get_events(session["id"], limit=0) == []
