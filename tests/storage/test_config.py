"""Tests for game config storage and presets."""

from gatekeeper import storage


def test_get_config_empty():
    """Returns defaults when no config file exists."""
    config = storage.get_config()
    assert config["run_length_days"] == 14
    assert config["population_max"] is None
    assert config["reputation_max"] == 10
    assert config["events_display_limit"] == 10
    assert config["default_interactions"] == ["check-papers", "let-in", "push-out"]
    assert config["starting_inventory"]["lantern fuel"] == 3
    assert config["generator_url"] == ""


def test_update_config_scalars_persist():
    storage.update_config({"run_length_days": 7, "population_max": 10})
    config = storage.get_config()
    assert config["run_length_days"] == 7
    assert config["population_max"] == 10


def test_update_config_inventory_merged():
    storage.update_config({"starting_inventory": {"holy water": 1}})
    config = storage.get_config()
    assert config["starting_inventory"] == {
        "holy water": 1, "lantern fuel": 3, "medicinal herbs": 0,
    }


def test_update_config_interactions_replaced():
    result = storage.update_config({"default_interactions": ["let-in"]})
    assert result["default_interactions"] == ["let-in"]


def test_update_config_ignores_unknown_keys():
    result = storage.update_config({"dragons": True})
    assert "dragons" not in result
    assert "dragons" not in storage.get_config()


def test_defaults_not_shared_between_calls():
    config = storage.get_config()
    config["starting_inventory"]["holy water"] = 99
    assert storage.get_config()["starting_inventory"]["holy water"] == 0


# ── Presets ──────────────────────────────────────────────


def test_structure_templates():
    templates = storage.get_structure_templates()
    ids = [t["id"] for t in templates]
    assert ids[0] == "town"
    assert {"chapel", "infirmary", "gallows"} <= set(ids)


def test_traveler_roster_has_fixed_and_pool():
    roster = storage.get_traveler_roster()
    assert roster["pool"]
    triggers = {f["traveler"]["dialog"]["trigger"] for f in roster["fixed"]}
    assert triggers == {"Revelation", "Explanation_H", "Inquisition", "Explanation_M", "undead", "cult"}


def test_pets():
    assert storage.get_pet("cat")["available"] is True
    assert storage.get_pet("fox")["available"] is False
    assert storage.get_pet("dragon") is None
