"""Parse one monster statblock: clean, tag lines by section, extract fields, assemble the record"""

from statscribe.core.exceptions import EmptyInputError
from statscribe.core.models import Diagnostic, MonsterRecord
from statscribe.core.statblock import fields
from statscribe.core.statblock.sections import SectionId
from statscribe.core.statblock.tagger import SectionMap, TaggedLine, tag_lines
from statscribe.core.utils.text import clean_text


# Named-entry sections and the record field each one fills. Traits (2024 header) merge into features.
ENTRY_FIELDS: dict[SectionId, str] = {
    SectionId.features:          "features",
    SectionId.traits:            "features",
    SectionId.actions:           "actions",
    SectionId.bonus_actions:     "bonus_actions",
    SectionId.reactions:         "reactions",
    SectionId.legendary_actions: "legendary_actions",
    SectionId.lair_actions:      "lair_actions",
    SectionId.mythic_actions:    "mythic_actions",
    SectionId.villain_actions:   "villain_actions",
}


def assemble_record(name: str, sections: SectionMap, notes: list[Diagnostic] | None = None) -> MonsterRecord:
    """Run every field extractor over the tagged-line map and build the record.

    Pure aggregation: no cross-field validation happens here.
    """
    def get(section: SectionId) -> list[TaggedLine]:
        return sections.get(section, [])

    damage_immunities, mixed_conditions = fields.split_immunities(get(SectionId.damage_immunities))

    entries: dict[str, list] = {name_: [] for name_ in ENTRY_FIELDS.values()}
    for section, field_name in ENTRY_FIELDS.items():
        entries[field_name].extend(fields.extract_named_entries(section, get(section)))

    return MonsterRecord(
        name=name,
        **fields.extract_racial_details(get(SectionId.racial_details), notes),
        armor_class=fields.extract_armor(get(SectionId.armor), notes),
        hit_points=fields.extract_health(get(SectionId.health), notes),
        speeds=fields.extract_speed(get(SectionId.speed), notes),
        abilities=fields.extract_abilities(get(SectionId.ability_scores), notes),
        initiative=fields.extract_initiative(get(SectionId.initiative), get(SectionId.armor)),
        proficiency_bonus=fields.extract_proficiency_bonus(
            get(SectionId.proficiency_bonus), get(SectionId.challenge)),
        saving_throws=fields.extract_saving_throws(get(SectionId.saving_throws), notes),
        skills=fields.extract_skills(get(SectionId.skills), notes),
        damage_vulnerabilities=fields.extract_trait_list(
            SectionId.damage_vulnerabilities, get(SectionId.damage_vulnerabilities)),
        damage_resistances=fields.extract_trait_list(
            SectionId.damage_resistances, get(SectionId.damage_resistances)),
        damage_immunities=damage_immunities,
        condition_immunities=fields.extract_trait_list(
            SectionId.condition_immunities, get(SectionId.condition_immunities)) + mixed_conditions,
        senses=fields.extract_senses(get(SectionId.senses), notes),
        languages=fields.extract_languages(get(SectionId.languages)),
        gear=fields.extract_gear(get(SectionId.gear)),
        challenge=fields.extract_challenge(get(SectionId.challenge), notes),
        other_info=fields.extract_other(get(SectionId.other)),
        **entries,
    )


def tag_statblock(text: str) -> tuple[str, SectionMap]:
    """Clean text and tag its lines; returns (name, sections) with the name line under SectionId.name."""
    lines = clean_text(text).split("\n")
    first = next((i for i, ln in enumerate(lines) if ln.strip()), None)
    if first is None:
        raise EmptyInputError()
    name = lines[first].strip()
    sections = {SectionId.name: [TaggedLine(first, name, SectionId.name)]}
    sections.update(tag_lines(lines[first + 1:], start=first + 1))
    return name, sections


def parse_statblock_with_diagnostics(text: str) -> tuple[MonsterRecord, list[Diagnostic]]:
    """Parse a monster statblock and return it with any non-fatal section diagnostics."""
    name, sections = tag_statblock(text)
    notes: list[Diagnostic] = []
    return assemble_record(name, sections, notes), notes


def parse_statblock(text: str) -> MonsterRecord:
    """Parse a monster statblock into a MonsterRecord.

    Raises:
        EmptyInputError: text has no non-blank lines.
    """
    record, _ = parse_statblock_with_diagnostics(text)
    return record
