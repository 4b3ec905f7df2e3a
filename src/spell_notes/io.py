"""I/O helpers — load spell data files, write Markdown and JSON artifacts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from spell_notes.models import SpellRecord


class LoadError(ValueError):
    """The spells directory or one of its files could not be loaded."""


class WriteError(OSError):
    """An output artifact could not be written."""


# ── Loading ──────────────────────────────────────────────────────

# data-file key -> SpellRecord field
_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "magic": "magic",
    "spellTier": "tier",
    "castSlot": "cast_slot",
    "manaCost": "mana_cost",
    "description": "description",
}


def normalize_spell(raw: Any) -> SpellRecord:
    """Adapt one parsed data file into a :class:`SpellRecord`.

    Game data files wrap the spell in ``{header: ..., data: {...}}``; older
    hand-written notes put the fields at the top level. Both are accepted.

    Raises
    ------
    ValueError
        If *raw* is not a mapping, or a numeric field is out of range.
    TypeError
        If a numeric field is not a number.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"expected a mapping, got {type(raw).__name__}")

    payload = raw.get("data") if "data" in raw else raw
    if not isinstance(payload, Mapping):
        raise ValueError(f"'data' must be a mapping, got {type(payload).__name__}")

    fields = {attr: payload.get(key) for key, attr in _FIELD_MAP.items()}
    return SpellRecord(**fields)


def load_spell_file(path: Path) -> SpellRecord:
    """Parse a single YAML spell file.

    Raises
    ------
    LoadError
        If the file cannot be read, is not valid YAML, or is not a spell.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read spell file {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise LoadError(f"Invalid YAML in {path}: {exc}") from exc

    try:
        return normalize_spell(raw)
    except (TypeError, ValueError) as exc:
        raise LoadError(f"Malformed spell in {path}: {exc}") from exc


def load_spell_records(spells_dir: Path) -> list[SpellRecord]:
    """Load every non-hidden file in *spells_dir*, one spell per file, in name order.

    Raises
    ------
    LoadError
        If the directory is missing or unreadable, or any file fails to load.
    """
    spells_dir = Path(spells_dir)
    if not spells_dir.exists():
        raise LoadError(f"Spells directory not found: {spells_dir}")
    if not spells_dir.is_dir():
        raise LoadError(f"Spells path is not a directory: {spells_dir}")

    try:
        entries = sorted(spells_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise LoadError(f"Cannot list spells directory {spells_dir}: {exc}") from exc

    # dot-files (.gitkeep, .DS_Store) are not spells
    return [
        load_spell_file(entry)
        for entry in entries
        if entry.is_file() and not entry.name.startswith(".")
    ]


# ── Writing ──────────────────────────────────────────────────────


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def write_text(path: Path, text: str) -> Path:
    """Write *text* to *path* via a temporary sibling and atomic replace.

    Raises
    ------
    WriteError
        If the directory cannot be created or the file cannot be written.
    """
    path = Path(path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise WriteError(f"Cannot write {path}: {exc}") from exc
    return path


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as pretty-printed JSON to *path* (atomic + deterministic)."""
    payload = json.dumps(
        data,
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
        default=_json_default,
    ) + "\n"
    return write_text(path, payload)
