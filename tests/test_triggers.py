"""Tests for fixed-traveler trigger dispatch and bundles."""

import logging

import pytest

from gatekeeper import storage
from gatekeeper.errors import NotFoundError
from gatekeeper.progression import INTERACTIONS
from gatekeeper.triggers import Trigger, bundle_for, dispatch, parse_trigger

from tests.factories import make_row, make_session, make_traveler


def _structures_with(*template_ids):
    return [
        {"template_id": tid, "name": tid.title(), "active": tid == "town",
         "status": {"human": 0, "infected": 0, "possessed": 0}}
        for tid in template_ids
    ]


# ── bundle_for ───────────────────────────────────────────


@pytest.mark.parametrize("trigger", list(Trigger))
def test_every_trigger_has_a_bundle(trigger):
    bundle = bundle_for(trigger, make_traveler(name="X"))
    assert bundle.event
    if bundle.interaction is not None:
        assert bundle.interaction in INTERACTIONS


def test_explanation_h_bundle():
    bundle = bundle_for(Trigger.EXPLANATION_H, make_traveler(name="Mithrail"))
    assert bundle.items == {"holy water": 2}
    assert bundle.structure == "chapel"
    assert bundle.interaction == "holy-water"


def test_parse_trigger():
    assert parse_trigger("Explanation_M") is Trigger.EXPLANATION_M
    assert parse_trigger("cult") is Trigger.CULT
    assert parse_trigger("Nonsense") is None
    assert parse_trigger(None) is None


# ── dispatch ─────────────────────────────────────────────


def test_dispatch_explanation_h():
    session = make_session()
    events = dispatch("Explanation_H", make_traveler(name="Mithrail"), session)

    sid = session["id"]
    assert storage.get_inventory(sid)["holy water"] == 2
    assert storage.get_structure(sid, "chapel")["active"] is True
    assert storage.get_session(sid)["available_interactions"][-1] == "holy-water"
    assert len(events) == 1
    assert storage.get_events(sid)[-1]["event"] == events[0]["event"]


def test_dispatch_event_only_trigger():
    session = make_session()
    events = dispatch("undead", make_traveler(name="Gravedigger"), session)
    assert len(events) == 1
    assert storage.get_inventory(session["id"])["holy water"] == 0


def test_dispatch_unknown_trigger_logged_and_ignored(caplog):
    session = make_session()
    with caplog.at_level(logging.WARNING, logger="gatekeeper.triggers"):
        events = dispatch("Nonsense", make_traveler(), session)
    assert events == []
    assert "Nonsense" in caplog.text
    assert storage.get_events(session["id"]) == []


def test_dispatch_missing_trigger_ignored():
    session = make_session()
    assert dispatch(None, make_traveler(), session) == []
    assert dispatch("", make_traveler(), session) == []


def test_dispatch_missing_structure_writes_nothing():
    """The bundle is validated before any write: no items, no interaction, no event."""
    session = make_session()
    sid = session["id"]
    storage.save_structures(sid, _structures_with("town"))  # no chapel

    with pytest.raises(NotFoundError):
        dispatch("Explanation_H", make_traveler(), session)

    assert storage.get_inventory(sid)["holy water"] == 0
    assert "holy-water" not in storage.get_session(sid)["available_interactions"]
    assert storage.get_events(sid) == []


def test_dispatch_twice_does_not_duplicate_interaction():
    session = make_session()
    sid = session["id"]
    storage.save_structures(sid, _structures_with("town", "gallows"))
    dispatch("Inquisition", make_traveler(), session)
    dispatch("Inquisition", make_traveler(), storage.get_session(sid))
    assert storage.get_session(sid)["available_interactions"].count("execute") == 1


def test_dispatch_completes_traveler_with_bundle():
    session = make_session(rows=[
        make_row(1, 1, is_fixed=True, dialog={"trigger": "Explanation_M"}),
    ])
    sid = session["id"]
    storage.save_structures(sid, _structures_with("town", "infirmary"))

    dispatch("Explanation_M", make_traveler(), session, traveler_id="1-1")

    row = storage.get_traveler(sid, "1-1")
    assert row["complete"] is True
    assert row["decision"] == "complete_fixed"
    assert storage.get_inventory(sid)["medicinal herbs"] == 2


def test_dispatch_unknown_trigger_leaves_traveler_open():
    session = make_session(rows=[make_row(1, 1, is_fixed=True)])
    dispatch("Nonsense", make_traveler(), session, traveler_id="1-1")
    assert storage.get_traveler(session["id"], "1-1")["complete"] is False
