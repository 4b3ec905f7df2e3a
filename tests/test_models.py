from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from spell_notes.models import RunManifest, SpellGroup, SpellRecord


def test_spell_record_defaults_are_empty_and_zero() -> None:
    spell = SpellRecord()

    assert spell.name == ""
    assert spell.magic == ""
    assert spell.tier == 0
    assert spell.mana_cost == 0


def test_spell_record_coerces_whole_numbers() -> None:
    spell = SpellRecord(name="Bolt", tier="2", mana_cost=3.0)  # type: ignore[arg-type]

    assert spell.tier == 2
    assert spell.mana_cost == 3
    assert isinstance(spell.mana_cost, int)


def test_spell_record_treats_none_and_blank_as_zero() -> None:
    spell = SpellRecord(name="Drift", tier=None, mana_cost="  ")  # type: ignore[arg-type]

    assert spell.tier == 0
    assert spell.mana_cost == 0


def test_spell_record_rejects_bad_numbers() -> None:
    with pytest.raises(ValueError, match="spellTier"):
        SpellRecord(tier=-1)

    with pytest.raises(ValueError, match="manaCost"):
        SpellRecord(mana_cost=1.5)  # type: ignore[arg-type]

    with pytest.raises(TypeError, match="spellTier"):
        SpellRecord(tier=True)

    with pytest.raises(TypeError, match="manaCost"):
        SpellRecord(mana_cost="lots")  # type: ignore[arg-type]


def test_spell_record_stringifies_text_fields() -> None:
    spell = SpellRecord(name=42, description=None)  # type: ignore[arg-type]

    assert spell.name == "42"
    assert spell.description == ""


def test_spell_record_is_immutable() -> None:
    spell = SpellRecord(name="Bolt")

    with pytest.raises(FrozenInstanceError):
        spell.name = "Spark"  # type: ignore[misc]


def test_spell_group_count_matches_spells() -> None:
    group = SpellGroup(key=1, label="Tier 1", spells=(SpellRecord(name="a"), SpellRecord(name="b")))

    assert group.count == 2
    assert SpellGroup(key="", label="").count == 0


def test_run_manifest_to_dict_returns_copies() -> None:
    manifest = RunManifest(
        version="0.2.0",
        spell_count=2,
        reports={"school": "spells.md"},
        group_counts={"tier": {"1": 2}},
    )

    payload = manifest.to_dict()
    payload["reports"]["tier"] = "x.md"
    payload["group_counts"]["tier"]["2"] = 5

    assert manifest.reports == {"school": "spells.md"}
    assert manifest.group_counts == {"tier": {"1": 2}}
    assert payload["tool"] == "spell-notes"


def test_run_manifest_rejects_negative_spell_count() -> None:
    with pytest.raises(ValueError, match="spell_count"):
        RunManifest(spell_count=-2)
