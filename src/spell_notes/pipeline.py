"""Grouping + sorting pipeline — pure functions, no side effects."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import astuple, fields
from functools import lru_cache
from typing import Any

import pandas as pd
from pyuca import Collator

from spell_notes.models import SpellGroup, SpellRecord

SPELL_COLUMNS: list[str] = [f.name for f in fields(SpellRecord)]
NUMERIC_COLUMNS: frozenset[str] = frozenset({"tier", "mana_cost"})

# Holds the SpellRecord itself so sorted frames map back to records.
_RECORD_COLUMN = "record"


# ── Title formatting ────────────────────────────────────────────


def title_case_words(label: str) -> str:
    """Upper-case the first character of every space-separated word.

    Only the first character changes: ``"fIRE"`` stays ``"FIRE"``.
    """
    return " ".join(word[:1].upper() + word[1:] for word in label.split(" "))


# ── Frame helpers ───────────────────────────────────────────────


def spells_frame(records: Iterable[SpellRecord]) -> pd.DataFrame:
    """Return one row per record, plus a ``record`` column holding the record."""
    records = list(records)
    rows = [astuple(record) for record in records]
    columns: dict[str, list[Any]] = {
        name: [row[idx] for row in rows] for idx, name in enumerate(SPELL_COLUMNS)
    }
    columns[_RECORD_COLUMN] = records
    frame = pd.DataFrame(columns, columns=[*SPELL_COLUMNS, _RECORD_COLUMN])
    for col in NUMERIC_COLUMNS:
        frame[col] = frame[col].astype("int64")
    return frame


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # loads the DUCET table; built once per process
    return Collator()


def _collation_key(values: pd.Series) -> pd.Series:
    """Numeric columns sort as-is; text sorts by Unicode collation rank."""
    if values.name in NUMERIC_COLUMNS:
        return values
    texts = values.astype(str)
    sort_key = _collator().sort_key
    ordered = sorted(set(texts), key=lambda text: (sort_key(text), text))
    return texts.map({text: rank for rank, text in enumerate(ordered)})


# ── Grouping engine ─────────────────────────────────────────────


def distinct_keys(frame: pd.DataFrame, column: str) -> list[Any]:
    """Distinct values of *column* in first-seen order."""
    return frame[column].drop_duplicates().tolist()


def sort_group(frame: pd.DataFrame, primary: str, secondary: str) -> pd.DataFrame:
    """Sort by *secondary*, then stably by *primary*.

    The second pass keeps the first pass's order among rows that tie on
    *primary*, so *secondary* acts as the tie-break.
    """
    ordered = frame.sort_values(secondary, kind="stable", key=_collation_key)
    return ordered.sort_values(primary, kind="stable", key=_collation_key)


def group_spells(
    records: Sequence[SpellRecord],
    key: str,
    primary: str,
    secondary: str,
    label: Callable[[Any], str],
) -> list[SpellGroup]:
    """Partition *records* by *key* and sort each group.

    Every record lands in exactly one group; groups are returned in the
    first-seen order of their key.
    """
    if key not in SPELL_COLUMNS:
        raise ValueError(f"Unknown grouping key: {key!r}")
    frame = spells_frame(records)
    groups: list[SpellGroup] = []
    for value in distinct_keys(frame, key):
        members = frame[frame[key] == value]
        ordered = sort_group(members, primary, secondary)
        groups.append(
            SpellGroup(
                key=value,
                label=label(value),
                spells=tuple(ordered[_RECORD_COLUMN].tolist()),
            )
        )
    return groups


def group_counts(groups: Iterable[SpellGroup]) -> dict[str, int]:
    """Map each group key (as text) to its spell count."""
    return {str(group.key): group.count for group in groups}
