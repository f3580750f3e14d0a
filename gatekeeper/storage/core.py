"""Storage initialization, path helpers, and key utilities."""

import re
import unicodedata
from pathlib import Path

_data_dir: Path | None = None
_presets_dir: Path | None = None


def safe_key(value: str) -> str:
    """Convert a chat id or other external key to a filesystem-safe name.

    "12345" → "12345", "test_user" → "test_user", "../x" → "x"
    """
    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^A-Za-z0-9_-]+", "-", text)
    text = text.strip("-")
    return text or "anonymous"


def init_storage(data_dir: Path, presets_dir: Path | None = None) -> None:
    global _data_dir, _presets_dir
    from . import presets as _presets_mod

    _data_dir = data_dir
    _data_dir.mkdir(parents=True, exist_ok=True)
    players_dir().mkdir(exist_ok=True)
    sessions_dir().mkdir(exist_ok=True)
    if presets_dir is None:
        # Default: repo_root/presets
        presets_dir = Path(__file__).parent.parent.parent / "presets"
    _presets_dir = presets_dir
    _presets_mod._cache.clear()


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def presets_dir() -> Path:
    assert _presets_dir is not None, "Call init_storage() before using storage"
    return _presets_dir


def players_dir() -> Path:
    return data_dir() / "players"


def sessions_dir() -> Path:
    return data_dir() / "sessions"


def session_dir(session_id: str) -> Path:
    return sessions_dir() / session_id
