"""Data models for detected content blocks and the structured records parsed from them"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    """Restrict detected content blocks to a predefined set of game-content kinds"""
    spell = "spell"
    item = "item"
    monster = "monster"
    class_feature = "classFeature"
    feat = "feat"
    background = "background"
    unknown = "unknown"


class ContentBlock(BaseModel):
    """A single candidate content entry isolated from a larger text document."""
    model_config = ConfigDict(frozen=True)

    kind: ContentKind
    raw_text: str

    @property
    def title(self) -> str:
        """First non-blank line of the block."""
        return next((ln.strip() for ln in self.raw_text.splitlines() if ln.strip()), "")


class Diagnostic(BaseModel):
    """Non-fatal note about a section that did not match its expected shape."""
    section: str
    message: str
    line: Optional[int] = None


# --- statblock fields ---

class NamedEntry(BaseModel):
    name: str
    description: str = ""


class ArmorClass(BaseModel):
    value: int = 10
    formula: str = ""


class HitPoints(BaseModel):
    value: int = 0
    formula: str = ""


class Speed(BaseModel):
    movement_type: str = "walk"
    distance: int
    qualifier: str = ""       # e.g. "hover"


class AbilityScores(BaseModel):
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10


class SavingThrow(BaseModel):
    ability: str              # three-letter abbreviation, lower-case
    bonus: int


class Skill(BaseModel):
    skill_name: str
    bonus: int


class Sense(BaseModel):
    sense_type: str
    range: Optional[int] = None
    qualifier: str = ""       # e.g. "blind beyond this radius"
    special: bool = False     # qualitative sense with no numeric range


class Challenge(BaseModel):
    rating: float = Field(default=0.0, ge=0)
    xp: int = 0


class MonsterRecord(BaseModel):
    """Fully assembled creature data produced by the statblock parser."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    size: str = ""
    creature_type: str = ""
    subtype: str = ""
    alignment: str = ""
    armor_class: ArmorClass = Field(default_factory=ArmorClass)
    hit_points: HitPoints = Field(default_factory=HitPoints)
    speeds: list[Speed] = []
    abilities: AbilityScores = Field(default_factory=AbilityScores)
    initiative: Optional[int] = None
    proficiency_bonus: Optional[int] = None
    saving_throws: list[SavingThrow] = []
    skills: list[Skill] = []
    damage_vulnerabilities: list[str] = []
    damage_resistances: list[str] = []
    damage_immunities: list[str] = []
    condition_immunities: list[str] = []
    senses: list[Sense] = []
    languages: list[str] = []
    gear: list[str] = []
    challenge: Challenge = Field(default_factory=Challenge)
    features: list[NamedEntry] = []
    actions: list[NamedEntry] = []
    bonus_actions: list[NamedEntry] = []
    reactions: list[NamedEntry] = []
    legendary_actions: list[NamedEntry] = []
    lair_actions: list[NamedEntry] = []
    mythic_actions: list[NamedEntry] = []
    villain_actions: list[NamedEntry] = []
    other_info: list[str] = []


# --- simpler content records ---

class DamagePart(BaseModel):
    dice: str
    damage_type: str


class SpellRecord(BaseModel):
    name: str
    level: int = 0            # 0 = cantrip
    school: str = ""
    ritual: bool = False
    casting_time: str = ""
    range: str = ""
    components: str = ""
    materials: str = ""
    duration: str = ""
    description: str = ""
    higher_levels: str = ""
    damage: list[DamagePart] = []
    save_ability: str = ""


class ItemRecord(BaseModel):
    name: str
    item_type: str = ""
    subtype: str = ""
    rarity: str = ""
    attunement: bool = False
    attunement_requirement: str = ""
    weight: Optional[float] = None     # pounds
    price: Optional[float] = None      # gold pieces
    properties: list[str] = []
    description: str = ""


class ClassFeatureRecord(BaseModel):
    name: str
    class_name: str = ""
    level: Optional[int] = None
    description: str = ""


class FeatRecord(BaseModel):
    name: str
    prerequisite: str = ""
    description: str = ""


class BackgroundRecord(BaseModel):
    name: str
    skill_proficiencies: list[str] = []
    tool_proficiencies: list[str] = []
    languages: str = ""
    equipment: str = ""
    feature: Optional[NamedEntry] = None
    description: str = ""


Record = Union[MonsterRecord, SpellRecord, ItemRecord, ClassFeatureRecord, FeatRecord, BackgroundRecord]


class ParsedBlock(BaseModel):
    """A classified block together with the record extracted from it."""
    kind: ContentKind
    record: Record
    diagnostics: list[Diagnostic] = []


class BlockFailure(BaseModel):
    index: int
    kind: ContentKind
    error: str


class DocumentResult(BaseModel):
    """Per-document outcome: parsed records, per-block failures, and skipped-block count."""
    source: str
    records: list[ParsedBlock] = []
    failures: list[BlockFailure] = []
    skipped: int = 0
