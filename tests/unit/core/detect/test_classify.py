"""Unit tests for core/detect/classify.py"""

import pytest

from statscribe.core.detect.classify import classify_block
from statscribe.core.models import ContentKind


@pytest.mark.parametrize("block, kind", [
    ("Fire Bolt\nEvocation cantrip\nCasting Time: 1 action", ContentKind.spell),
    ("Detect Magic\n1st-level divination (ritual)\nCasting Time: 1 action", ContentKind.spell),
    ("Bag of Holding\nWondrous item, uncommon\nThis bag has an interior space.", ContentKind.item),
    ("Wolf\nMedium beast, unaligned\nArmor Class 13 (natural armor)", ContentKind.monster),
    ("Action Surge\n2nd-level fighter feature\nYou can push yourself beyond your normal limits.", ContentKind.class_feature),
    ("Grappler\nPrerequisite: Strength 13 or higher\nYou've developed the skills.", ContentKind.feat),
    ("Alert\nFeat\nAlways on the lookout for danger.", ContentKind.feat),
    ("Acolyte\nBackground\nYou have spent your life in service to a temple.", ContentKind.background),
])
def test_structural_signatures(block, kind):
    """The line after the title decides the kind when it has a genre signature."""
    assert classify_block(block) == kind


def test_goblin_is_monster(goblin_text):
    """The reference goblin statblock is a monster."""
    assert classify_block(goblin_text) == ContentKind.monster


def test_mangled_header_falls_back_to_monster_heuristic():
    """AC/HP plus an ability pair identify a monster whose type line was lost."""
    block = "Goblin\n~~ smudged ~~\nArmor Class 15\nHit Points 7 (2d6)\nSTR 8 (-1) DEX 14 (+2)"
    assert classify_block(block) == ContentKind.monster


def test_spell_with_damage_is_not_monster():
    """A school name with casting time, range, and duration is a spell even when it mentions damage."""
    block = (
        "Burning Hands\n"
        "~~ smudged ~~\n"
        "Casting Time: 1 action\n"
        "Range: Self (15-foot cone)\n"
        "Duration: Instantaneous\n"
        "This evocation deals 3d6 fire damage to each creature in the cone."
    )
    assert classify_block(block) == ContentKind.spell


def test_unrecognized_block_is_unknown():
    """Running prose with no signature or keyword co-occurrence is unknown."""
    assert classify_block("Chapter 3\nThis chapter describes how adventurers rest.") == ContentKind.unknown


def test_single_line_block_is_unknown():
    """A lone running header has no second line and no keywords."""
    assert classify_block("MONSTER MANUAL") == ContentKind.unknown
