"""Data models used across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Any


def _to_non_negative_int(value: Any, field_name: str) -> int:
    """Coerce a tier / mana value to ``int``; absent values become 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"{field_name} must be an integer")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = float(text) if "." in text else int(text)
        except ValueError:
            raise TypeError(f"{field_name} must be an integer, got {value!r}") from None
    if isinstance(value, Integral):
        result = int(value)
    elif isinstance(value, Real):
        if not float(value).is_integer():
            raise ValueError(f"{field_name} must be a whole number, got {value!r}")
        result = int(value)
    else:
        raise TypeError(f"{field_name} must be an integer")
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return result


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class SpellRecord:
    """One spell idea, normalized from either data-file shape."""

    name: str = ""
    magic: str = ""
    tier: int = 0
    cast_slot: str = ""
    mana_cost: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "name", _to_text(self.name))
        object.__setattr__(self, "magic", _to_text(self.magic))
        object.__setattr__(self, "cast_slot", _to_text(self.cast_slot))
        object.__setattr__(self, "description", _to_text(self.description))
        object.__setattr__(self, "tier", _to_non_negative_int(self.tier, "spellTier"))
        object.__setattr__(
            self, "mana_cost", _to_non_negative_int(self.mana_cost, "manaCost")
        )


@dataclass(frozen=True)
class SpellGroup:
    """Spells sharing one value of the grouping attribute, already sorted."""

    key: Any
    label: str
    spells: tuple[SpellRecord, ...] = ()

    @property
    def count(self) -> int:
        return len(self.spells)


@dataclass
class RunManifest:
    """Audit-trail manifest for a single generation run."""

    tool: str = "spell-notes"
    version: str = ""
    spells_dir: str = ""
    output_dir: str = ""
    created_at_utc: str = ""
    spell_count: int = 0
    reports: dict[str, str] = field(default_factory=dict)
    group_counts: dict[str, dict[str, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.spell_count = _to_non_negative_int(self.spell_count, "spell_count")

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "version": self.version,
            "spells_dir": self.spells_dir,
            "output_dir": self.output_dir,
            "created_at_utc": self.created_at_utc,
            "spell_count": self.spell_count,
            "reports": dict(self.reports),
            "group_counts": {axis: dict(counts) for axis, counts in self.group_counts.items()},
        }
