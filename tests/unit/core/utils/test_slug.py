"""Unit tests for core/utils/slug.py and core/utils/hashing.py"""

from statscribe.core.utils.hashing import block_fingerprint, sha256
from statscribe.core.utils.slug import slugify, unique_slug


def test_slugify():
    assert slugify("Ancient Red Dragon") == "ancient-red-dragon"
    assert slugify("Potion of Healing (Greater)") == "potion-of-healing-greater"
    assert slugify("  Goblin_Boss  ") == "goblin-boss"


def test_slugify_empty_falls_back():
    assert slugify("!!!") == "record"


def test_unique_slug_suffixes_repeats():
    taken: set[str] = set()
    assert unique_slug("Goblin", taken) == "goblin"
    assert unique_slug("Goblin", taken) == "goblin-2"
    assert unique_slug("Goblin", taken) == "goblin-3"


def test_sha256_is_stable():
    assert sha256("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_block_fingerprint_ignores_whitespace_and_case():
    assert block_fingerprint("MONSTER  MANUAL\n") == block_fingerprint("monster manual")
    assert block_fingerprint("Goblin") != block_fingerprint("Hobgoblin")
