"""File-based JSON storage, one directory tree per player and session.

Data layout:
  data/
    config.json          Game settings (run length, clamps, starting kit, generator)
    players/
      <chat_id>.json     Player record (name, language, timezone)
    sessions/
      <id>.json          Session metadata (chat_id, day, pet, active, available_interactions)
      <id>/              Child resources:
        structures.json  Structures with population status
        travelers.json   Traveler rows for the whole run
        inventory.json   Consumable item counts
        reputation.json  Hidden reputation counters
        events.json      Append-only event log
  presets/
    structures.json      Structure templates copied into new sessions
    travelers.json       Traveler roster for the preset generator
    pets.json            Companion descriptions and names

Lookups return None (or False) when a record is missing; callers decide
whether that is a 404. Only apply_bundle() raises, and it raises before
writing anything.
"""

# Re-export all public symbols so `from gatekeeper import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    players_dir,
    presets_dir,
    safe_key,
    session_dir,
    sessions_dir,
)

from .presets import (  # noqa: F401
    get_pet,
    get_structure_templates,
    get_traveler_roster,
    list_pets,
)

from .players import (  # noqa: F401
    create_player,
    get_player,
    update_player_timezone,
)

from .sessions import (  # noqa: F401
    create_session,
    get_active_session,
    get_session,
    list_sessions,
    update_session,
)

from .structures import (  # noqa: F401
    get_structure,
    get_structures,
    save_structures,
    set_structure_active,
)

from .travelers import (  # noqa: F401
    complete_traveler,
    get_traveler,
    get_travelers,
    save_travelers,
)

from .inventory import (  # noqa: F401
    ITEMS,
    REPUTATION_KEYS,
    get_hidden_reputation,
    get_inventory,
    give_items,
    save_hidden_reputation,
    save_inventory,
    update_item,
)

from .events import (  # noqa: F401
    append_event,
    append_events,
    get_events,
)

from .bundles import (  # noqa: F401
    apply_bundle,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)
