"""Markdown report writer — produces the spell design notes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from spell_notes.io import write_text
from spell_notes.models import SpellGroup, SpellRecord
from spell_notes.pipeline import group_spells, title_case_words

# ── Table of contents data ──────────────────────────────────────

# (school, governing class), in the game's MagicType order
MAGIC_SCHOOLS: tuple[tuple[str, str], ...] = (
    ("Fire", "Pyromancy"),
    ("Lightning", "Fulgomancy"),
    ("Water", "Hydromancy"),
    ("Earth", "Geomancy"),
    ("Air", "Aeromancy"),
    ("Ice", "Cryomancy"),
    ("Force", "Trudomancy"),
    ("Light", "Photomancy"),
    ("Dark", "Umbramancy"),
    ("Arcane", "Arcanomancy"),
    ("Life", "Vitomancy"),
    ("Death", "Mortomancy"),
    ("Enhancement", "Ampiliomancy"),
    ("Reduction", "Diminiomancy"),
    ("Summoning", "Citomancy"),
    ("Necromancy", "Necromancy"),
    ("Polymorph", "Mutatiomancy"),
    ("Time", "Chronomancy"),
)
TOC_TIERS: range = range(0, 10)
TOC_MANA_COSTS: range = range(0, 5)

TOC_HEADING = "## Table of Contents"


def _toc(columns: tuple[str, str], rows: Iterable[tuple[str, str]]) -> str:
    left, right = columns
    lines = [
        TOC_HEADING,
        "",
        f"| {left} | {right} |",
        f"| {'-' * len(left)} | {'-' * len(right)} |",
    ]
    lines.extend(f"| {a} | {b} |" for a, b in rows)
    return "\n".join(lines)


def tier_placeholder(tier: Any) -> str:
    return f"#TLT{tier}#"


def mana_placeholder(mana: Any) -> str:
    return f"#MC{mana}#"


SCHOOL_TOC = _toc(
    ("Spell Type", "Governing Class"),
    ((f"[{school}](#{school.lower()})", cls) for school, cls in MAGIC_SCHOOLS),
)
TIER_TOC = _toc(
    ("Spell Tier", "Total Spells"),
    ((f"[Tier {t}](#tier-{t})", tier_placeholder(t)) for t in TOC_TIERS),
)
MANA_TOC = _toc(
    ("Mana Cost", "Total Spells"),
    ((f"[{m} Mana](#{m}-mana)", mana_placeholder(m)) for m in TOC_MANA_COSTS),
)


# ── Axis definitions ────────────────────────────────────────────


@dataclass(frozen=True)
class ReportAxis:
    """How one report document groups, sorts, labels and counts spells."""

    slug: str
    filename: str
    title: str
    toc: str
    key: str
    primary: str
    secondary: str
    second_column: str
    second_heading: str
    label: Callable[[Any], str]
    placeholder: Callable[[Any], str] | None = None

    @property
    def table_header(self) -> str:
        heading = self.second_heading
        return (
            f"| Name | {heading} | Slot | Description | Mana |\n"
            f"| ---- | {'-' * len(heading)} | ---- | ----------- | ---- |"
        )


BY_SCHOOL = ReportAxis(
    slug="school",
    filename="spells.md",
    title="Spell Idea List (by Magic School)",
    toc=SCHOOL_TOC,
    key="magic",
    primary="tier",
    secondary="name",
    second_column="tier",
    second_heading="Tier",
    label=title_case_words,
)
BY_TIER = ReportAxis(
    slug="tier",
    filename="spells_by_tier.md",
    title="Spell Idea List (by Tier)",
    toc=TIER_TOC,
    key="tier",
    primary="magic",
    secondary="name",
    second_column="magic",
    second_heading="Type",
    label=lambda tier: f"Tier {tier}",
    placeholder=tier_placeholder,
)
BY_MANA = ReportAxis(
    slug="mana",
    filename="spells_by_mana_cost.md",
    title="Spell Idea List (by Mana Cost)",
    toc=MANA_TOC,
    key="mana_cost",
    primary="tier",
    secondary="name",
    second_column="tier",
    second_heading="Tier",
    label=lambda mana: f"{mana} Mana",
    placeholder=mana_placeholder,
)

ALL_AXES: tuple[ReportAxis, ...] = (BY_SCHOOL, BY_TIER, BY_MANA)


# ── Rendering ───────────────────────────────────────────────────


def spell_to_row(spell: SpellRecord, axis: ReportAxis) -> str:
    """One Markdown table row; cell text is not escaped."""
    second = getattr(spell, axis.second_column)
    return (
        f"| {spell.name} | {second} | {spell.cast_slot} "
        f"| {spell.description} | {spell.mana_cost} |"
    )


def render_table(group: SpellGroup, axis: ReportAxis) -> str:
    """Heading, table header and one row per spell of *group*."""
    lines = [f"\n## {group.label}\n", axis.table_header]
    lines.extend(spell_to_row(spell, axis) for spell in group.spells)
    return "\n".join(lines) + "\n"


def fill_placeholder(document: str, token: str, count: int) -> str:
    """Replace the first occurrence of *token* in *document* with *count*."""
    return document.replace(token, str(count), 1)


def group_for_axis(records: Sequence[SpellRecord], axis: ReportAxis) -> list[SpellGroup]:
    return group_spells(records, axis.key, axis.primary, axis.secondary, axis.label)


def build_report(records: Sequence[SpellRecord], axis: ReportAxis) -> str:
    """Return the complete Markdown document for *axis*.

    Group counts are substituted into the table of contents only; spell
    text in the sections is never rewritten.
    """
    toc = axis.toc
    sections: list[str] = []
    for group in group_for_axis(records, axis):
        sections.append(render_table(group, axis))
        if axis.placeholder is not None:
            toc = fill_placeholder(toc, axis.placeholder(group.key), group.count)
    return f"# {axis.title}\n\n{toc}\n" + "".join(sections)


# ── Public API ───────────────────────────────────────────────────


def write_reports(
    out_dir: Path,
    records: Sequence[SpellRecord],
    axes: Sequence[ReportAxis] = ALL_AXES,
) -> dict[str, Path]:
    """Write one Markdown file per axis into *out_dir*; return ``{slug: path}``.

    Raises
    ------
    WriteError
        If an output file cannot be written.
    """
    out_dir = Path(out_dir)
    written: dict[str, Path] = {}
    for axis in axes:
        written[axis.slug] = write_text(out_dir / axis.filename, build_report(records, axis))
    return written
