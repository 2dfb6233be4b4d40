"""Unit tests for core/extract/entries.py"""

import pytest

from statscribe.core.exceptions import EmptyInputError
from statscribe.core.extract.entries import (
    damage_parts,
    parse_background,
    parse_class_feature,
    parse_feat,
    parse_item,
    parse_spell,
    save_ability,
)


ACOLYTE = """\
Acolyte
Background
You have spent your life in the service of a temple.
Skill Proficiencies: Insight, Religion
Tool Proficiencies: None
Languages: Two of your choice
Equipment: A holy symbol, a prayer book, 5 sticks of incense
Feature: Shelter of the Faithful
As an acolyte, you command the respect of those who share your faith.
Suggested Characteristics: Acolytes are shaped by their experience.
"""


def test_spell_fields(fireball_text):
    spell = parse_spell(fireball_text)
    assert spell.name == "Fireball"
    assert (spell.level, spell.school, spell.ritual) == (3, "evocation", False)
    assert spell.casting_time == "1 action"
    assert spell.range == "150 feet"
    assert spell.components == "V, S, M (a tiny ball of bat guano and sulfur)"
    assert spell.materials == "a tiny ball of bat guano and sulfur"
    assert spell.duration == "Instantaneous"
    assert spell.description.startswith("A bright streak")
    assert spell.higher_levels.startswith("When you cast this spell using a spell slot of 4th level")
    assert [(d.dice, d.damage_type) for d in spell.damage] == [("8d6", "fire")]
    assert spell.save_ability == "dex"


def test_cantrip_and_ritual():
    cantrip = parse_spell("Fire Bolt\nEvocation cantrip\nCasting Time: 1 action\nYou hurl a mote of fire.")
    assert (cantrip.level, cantrip.school) == (0, "evocation")
    ritual = parse_spell("Detect Magic\n1st-level divination (ritual)\nCasting Time: 1 action")
    assert (ritual.level, ritual.ritual) == (1, True)


def test_spell_2024_level_form():
    spell = parse_spell("Shatter\nLevel 2 Evocation (Bard, Sorcerer, Wizard)\nCasting Time: Action")
    assert (spell.level, spell.school, spell.casting_time) == (2, "evocation", "Action")


def test_damage_parts_keep_largest_roll_per_type():
    parts = damage_parts("It takes 2d6 cold damage. At higher levels it takes 4d6 cold damage and 1d4 + 2 force damage.")
    assert [(p.dice, p.damage_type) for p in parts] == [("4d6", "cold"), ("1d4+2", "force")]


def test_save_ability():
    assert save_ability("must succeed on a Wisdom saving throw") == "wis"
    assert save_ability("makes a spell attack") == ""


def test_item_fields():
    item = parse_item(
        "Flame Tongue\n"
        "Weapon (any sword), rare (requires attunement)\n"
        "While the sword is ablaze, it deals an extra 2d6 fire damage.\n"
    )
    assert (item.name, item.item_type, item.subtype, item.rarity) == ("Flame Tongue", "weapon", "any sword", "rare")
    assert item.attunement is True
    assert item.attunement_requirement == ""


def test_item_attunement_requirement_and_very_rare():
    item = parse_item("Staff of Power\nStaff, very rare (requires attunement by a sorcerer, warlock, or wizard)\nThis staff can be wielded.")
    assert item.rarity == "very rare"
    assert item.attunement_requirement == "a sorcerer, warlock, or wizard"
    assert item.subtype == ""


def test_item_weight_price_and_properties():
    item = parse_item(
        "Handaxe\n"
        "Weapon (simple melee), common\n"
        "Damage: 1d6 slashing\n"
        "Properties: Light, Thrown (range 20/60)\n"
        "Weight: 2 lb.\n"
        "Cost: 50 sp\n"
    )
    assert item.weight == 2.0
    assert item.price == 5.0
    assert item.properties == ["light", "thrown"]


def test_class_feature_fields():
    feature = parse_class_feature("Action Surge\n2nd-level fighter feature\nYou can push yourself beyond your normal limits.")
    assert (feature.class_name, feature.level) == ("fighter", 2)
    assert feature.description == "You can push yourself beyond your normal limits."


def test_feat_with_prerequisite():
    feat = parse_feat("Grappler\nPrerequisite: Strength 13 or higher\nYou've developed the skills necessary to hold your own.")
    assert feat.prerequisite == "Strength 13 or higher"
    assert feat.description == "You've developed the skills necessary to hold your own."


def test_feat_without_prerequisite():
    feat = parse_feat("Alert\nFeat\nAlways on the lookout for danger.")
    assert feat.prerequisite == ""
    assert feat.description == "Always on the lookout for danger."


def test_background_fields():
    background = parse_background(ACOLYTE)
    assert background.skill_proficiencies == ["Insight", "Religion"]
    assert background.tool_proficiencies == []
    assert background.languages == "Two of your choice"
    assert background.equipment.startswith("A holy symbol")
    assert background.feature.name == "Shelter of the Faithful"
    assert background.feature.description == "As an acolyte, you command the respect of those who share your faith."
    assert "service of a temple" in background.description


@pytest.mark.parametrize("parse", [parse_spell, parse_item, parse_class_feature, parse_feat, parse_background])
def test_empty_block_raises(parse):
    with pytest.raises(EmptyInputError):
        parse("\n  \n")
