"""Root test configuration: sample documents shared across unit and integration tests"""

import pytest
import structlog


GOBLIN = (
    "Goblin\n"
    "Small humanoid (goblinoid), neutral evil\n"
    "Armor Class 15 (leather armor, shield)\n"
    "Hit Points 7 (2d6)\n"
    "Speed 30 ft.\n"
    "STR 8 (-1) DEX 14 (+2) CON 10 (+0) INT 10 (+0) WIS 8 (-1) CHA 8 (-1)\n"
    "Skills Stealth +6\n"
    "Senses darkvision 60 ft., passive Perception 9\n"
    "Languages Common, Goblin\n"
    "Challenge 1/4 (50 XP)\n"
    "Actions\n"
    "Scimitar. Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 5 (1d6 + 2) slashing damage."
)

OWLBEAR = """\
Owlbear
Large monstrosity, unaligned
Armor Class 13 (natural armor)
Hit Points 59 (7d10 + 21)
Speed 40 ft.
STR 20 (+5)
DEX 12 (+1)
CON 17 (+3)
INT 3 (-4)
WIS 12 (+1)
CHA 7 (-2)
Skills Perception +3
Senses darkvision 60 ft., passive Perception 13
Languages —
Challenge 3 (700 XP)
Keen Sight and Smell. The owlbear has advantage on Wisdom (Perception) checks
that rely on sight or smell.
Actions
Multiattack. The owlbear makes two attacks: one with its beak and one with its claws.
Beak. Melee Weapon Attack: +7 to hit, reach 5 ft., one creature.
Hit: 10 (1d10 + 5) piercing damage.
Claws. Melee Weapon Attack: +7 to hit, reach 5 ft., one target.
Hit: 14 (2d8 + 5) slashing damage.
"""

FIREBALL = """\
Fireball
3rd-level evocation
Casting Time: 1 action
Range: 150 feet
Components: V, S, M (a tiny ball of bat guano and sulfur)
Duration: Instantaneous
A bright streak flashes from your pointing finger to a point you choose within range. Each creature in a 20-foot-radius sphere must make a Dexterity saving throw. A target takes 8d6 fire damage on a failed save, or half as much damage on a successful one.
At Higher Levels. When you cast this spell using a spell slot of 4th level or higher, the damage increases by 1d6 for each slot level above 3rd.
"""

FLAME_TONGUE = """\
Flame Tongue
Weapon (any sword), rare (requires attunement)
You can use a bonus action to speak this magic sword's command word, causing flames to erupt from the blade. While the sword is ablaze, it deals an extra 2d6 fire damage.
"""


@pytest.fixture(autouse=True)
def reset_structlog():
    """CLI commands configure structlog against the runner's streams; restore defaults afterwards."""
    yield
    structlog.reset_defaults()


@pytest.fixture(name="goblin_text")
def goblin_text_fixture():
    return GOBLIN


@pytest.fixture(name="owlbear_text")
def owlbear_text_fixture():
    return OWLBEAR


@pytest.fixture(name="fireball_text")
def fireball_text_fixture():
    return FIREBALL


@pytest.fixture(name="document_text")
def document_text_fixture():
    """A small 'book page': running header, three entries, page number, and a repeated header."""
    return (
        "MONSTER MANUAL\n\n\n"
        f"{GOBLIN}\n\n\n"
        f"{FIREBALL}\n\n\n"
        "12\n"
        f"{FLAME_TONGUE}\n\n\n"
        "MONSTER MANUAL\n"
    )
