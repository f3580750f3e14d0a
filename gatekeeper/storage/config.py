"""Global game configuration (run length, clamps, starting kit, generator)."""

import json
from pathlib import Path
from typing import Any

from .core import data_dir

_CONFIG_DEFAULTS: dict[str, Any] = {
    "run_length_days": 14,
    "population_max": None,
    "reputation_max": 10,
    "events_display_limit": 10,
    "starting_inventory": {
        "holy water": 0,
        "lantern fuel": 3,
        "medicinal herbs": 0,
    },
    "default_interactions": ["check-papers", "let-in", "push-out"],
    "generator_url": "",
    "generator_timeout": 30,
}

_SCALAR_KEYS = (
    "run_length_days",
    "population_max",
    "reputation_max",
    "events_display_limit",
    "generator_url",
    "generator_timeout",
)


def _config_path() -> Path:
    return data_dir() / "config.json"


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config: dict[str, Any] = json.loads(json.dumps(_CONFIG_DEFAULTS))
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        for key in _SCALAR_KEYS:
            if key in stored:
                config[key] = stored[key]
        if isinstance(stored.get("starting_inventory"), dict):
            config["starting_inventory"].update(stored["starting_inventory"])
        if isinstance(stored.get("default_interactions"), list):
            config["default_interactions"] = stored["default_interactions"]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    Scalars are overwritten, starting_inventory is merged item-by-item,
    default_interactions is replaced wholesale. Unknown keys are ignored.
    """
    config = get_config()
    for key in _SCALAR_KEYS:
        if key in fields:
            config[key] = fields[key]
    if isinstance(fields.get("starting_inventory"), dict):
        config["starting_inventory"].update(fields["starting_inventory"])
    if isinstance(fields.get("default_interactions"), list):
        config["default_interactions"] = fields["default_interactions"]
    _config_path().write_text(json.dumps(config, indent=2))
    return config
