"""Effect strings: the small mini-language travelers use to change counters.

An effect is "<key> <signed int>", e.g. "human -1" or "cult +2". Applying it
adds the value to record[key] and clamps the result:

  population status   floor 0, no ceiling unless population_max is configured
  hidden reputation   0..10

Anything that is not exactly two tokens with an integer second token is
ignored, as is a key the record does not have. Applying an effect never
raises.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

POPULATION_KEYS = ("human", "infected", "possessed")

REPUTATION_MIN = 0
REPUTATION_MAX = 10


def clamp(value: int, low: int | None = None, high: int | None = None) -> int:
    if low is not None and value < low:
        return low
    if high is not None and value > high:
        return high
    return value


def parse_effect(effect: Any) -> tuple[str, int] | None:
    """Split an effect into (key, delta). None when it is not a well-formed effect."""
    if not isinstance(effect, str):
        return None
    parts = effect.split()
    if len(parts) != 2:
        return None
    key, raw = parts
    try:
        value = int(raw)
    except ValueError:
        return None
    return key, value


def apply_effect(
    effect: Any,
    record: dict[str, int],
    *,
    low: int | None = 0,
    high: int | None = None,
) -> bool:
    """Apply an effect to record in place. Returns True if the record changed."""
    parsed = parse_effect(effect)
    if parsed is None:
        if effect:
            logger.warning("Ignoring malformed effect %r", effect)
        return False
    key, delta = parsed
    if key not in record:
        logger.debug("Effect key %r not in record %s; ignored", key, sorted(record))
        return False
    before = record[key]
    record[key] = clamp(before + delta, low, high)
    return record[key] != before


def apply_population_effect(
    effect: Any, status: dict[str, int], population_max: int | None = None
) -> bool:
    return apply_effect(effect, status, low=0, high=population_max)


def apply_reputation_effect(
    effect: Any, reputation: dict[str, int], reputation_max: int = REPUTATION_MAX
) -> bool:
    return apply_effect(effect, reputation, low=REPUTATION_MIN, high=reputation_max)
