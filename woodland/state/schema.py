"""
Pydantic models for Woodland game state.

The board definition is static and shared; GameState is the only mutable
entity and is always copied before an executor touches it.
Designed to serialize to plain JSON with no cycles and no executable content.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Faction(str, Enum):
    MARQUISE = "marquise"
    EYRIE = "eyrie"
    WOODLAND_ALLIANCE = "woodland_alliance"


class Suit(str, Enum):
    FOX = "fox"
    RABBIT = "rabbit"
    MOUSE = "mouse"
    BIRD = "bird"      # Wild for decree and supporters
    NONE = "none"


class Phase(str, Enum):
    BIRDSONG = "birdsong"
    DAYLIGHT = "daylight"
    EVENING = "evening"


class BuildingType(str, Enum):
    SAWMILL = "sawmill"
    WORKSHOP = "workshop"
    RECRUITER = "recruiter"
    ROOST = "roost"
    BASE_MOUSE = "base_mouse"
    BASE_RABBIT = "base_rabbit"
    BASE_FOX = "base_fox"
    KEEP = "keep"


class TokenType(str, Enum):
    WOOD = "wood"
    SYMPATHY = "sympathy"
    OTHER = "other"


class DecreeColumn(str, Enum):
    RECRUIT = "recruit"
    MOVE = "move"
    BATTLE = "battle"
    BUILD = "build"


class DecreeSource(str, Enum):
    VIZIER = "vizier"   # Permanent, survives turmoil
    NORMAL = "normal"


FACTION_ORDER: list[Faction] = [
    Faction.MARQUISE,
    Faction.EYRIE,
    Faction.WOODLAND_ALLIANCE,
]

# Tie-break order when picking the shortest decree column
DECREE_COLUMNS: list[DecreeColumn] = [
    DecreeColumn.RECRUIT,
    DecreeColumn.MOVE,
    DecreeColumn.BATTLE,
    DecreeColumn.BUILD,
]

# Suits that can carry an Alliance base or supporter pool of their own
BASE_SUITS: list[Suit] = [Suit.MOUSE, Suit.RABBIT, Suit.FOX]

BASE_TYPE_BY_SUIT: dict[Suit, BuildingType] = {
    Suit.MOUSE: BuildingType.BASE_MOUSE,
    Suit.RABBIT: BuildingType.BASE_RABBIT,
    Suit.FOX: BuildingType.BASE_FOX,
}

BASE_TYPES: set[BuildingType] = set(BASE_TYPE_BY_SUIT.values())

MARQUISE_BUILDABLE: set[BuildingType] = {
    BuildingType.SAWMILL,
    BuildingType.WORKSHOP,
    BuildingType.RECRUITER,
    BuildingType.KEEP,
}

TRACKED_MARQUISE_BUILDINGS: list[BuildingType] = [
    BuildingType.SAWMILL,
    BuildingType.WORKSHOP,
    BuildingType.RECRUITER,
]


# -----------------------------------------------------------------------------
# Fixed constants
# -----------------------------------------------------------------------------

TOTAL_WARRIORS: dict[Faction, int] = {
    Faction.MARQUISE: 25,
    Faction.EYRIE: 20,
    Faction.WOODLAND_ALLIANCE: 10,
}

MARQUISE_TOTAL_WOOD = 8
VICTORY_POINT_CAP = 30


class BuildingTrackStep(BaseModel):
    """One step of a Marquise building track."""
    model_config = ConfigDict(frozen=True)

    cost_wood: int
    victory_points: int


def _steps(*pairs: tuple[int, int]) -> tuple[BuildingTrackStep, ...]:
    return tuple(BuildingTrackStep(cost_wood=c, victory_points=v) for c, v in pairs)


# (wood cost, victory points) for each of the six buildings per type
MARQUISE_BUILDING_TRACKS: dict[BuildingType, tuple[BuildingTrackStep, ...]] = {
    BuildingType.SAWMILL: _steps((0, 1), (1, 2), (2, 2), (3, 3), (3, 4), (4, 5)),
    BuildingType.WORKSHOP: _steps((0, 1), (1, 2), (2, 2), (3, 3), (3, 4), (4, 5)),
    BuildingType.RECRUITER: _steps((0, 1), (1, 2), (2, 2), (3, 3), (3, 3), (4, 4)),
}

# Evening VP indexed by roosts placed
ROOST_TRACK_VP: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 7)

# VP for the sympathy step being filled, indexed by tokens already on the track
SYMPATHY_TRACK_VP: tuple[int, ...] = (0, 0, 1, 1, 2, 2, 3, 3, 4, 4)

# Supporters needed to spread sympathy, indexed by tokens already on the track
SYMPATHY_SPREAD_COST: tuple[int, ...] = (1, 1, 2, 2, 2, 3, 3, 3, 4, 4)

# Enemy warriors of one faction that impose martial law (+1 supporter)
MARTIAL_LAW_THRESHOLD = 3


# -----------------------------------------------------------------------------
# Board definition (immutable)
# -----------------------------------------------------------------------------

class ClearingDefinition(BaseModel):
    """A static board space."""
    model_config = ConfigDict(frozen=True)

    id: str
    suit: Suit
    building_slots: int = Field(ge=0)
    adjacent_clearings: tuple[str, ...] = ()
    x: int | None = None  # Layout hints for the renderer, unused by rules
    y: int | None = None


class BoardDefinition(BaseModel):
    """
    Ordered list of clearings with symmetric adjacency.

    Passed explicitly into every executor so tests can build small boards.
    """
    model_config = ConfigDict(frozen=True)

    clearings: tuple[ClearingDefinition, ...]

    @model_validator(mode="after")
    def _check_adjacency(self) -> "BoardDefinition":
        ids = [c.id for c in self.clearings]
        if len(ids) != len(set(ids)):
            raise ValueError("Clearing ids must be unique")
        known = set(ids)
        neighbours = {c.id: set(c.adjacent_clearings) for c in self.clearings}
        for clearing_id, adjacent in neighbours.items():
            for other in adjacent:
                if other not in known:
                    raise ValueError(f"{clearing_id} is adjacent to unknown clearing {other}")
                if other == clearing_id:
                    raise ValueError(f"{clearing_id} cannot be adjacent to itself")
                if clearing_id not in neighbours[other]:
                    raise ValueError(f"Adjacency {clearing_id} -> {other} is not symmetric")
        return self

    @property
    def clearing_ids(self) -> list[str]:
        return [c.id for c in self.clearings]

    def get(self, clearing_id: str) -> ClearingDefinition | None:
        """Look up a clearing definition by id."""
        for clearing in self.clearings:
            if clearing.id == clearing_id:
                return clearing
        return None

    def is_adjacent(self, from_id: str, to_id: str) -> bool:
        clearing = self.get(from_id)
        return clearing is not None and to_id in clearing.adjacent_clearings


# -----------------------------------------------------------------------------
# Board contents
# -----------------------------------------------------------------------------

class BuildingInstance(BaseModel):
    id: str
    faction: Faction
    type: BuildingType
    slot_index: int = 0


class TokenInstance(BaseModel):
    id: str
    faction: Faction
    type: TokenType


class ClearingState(BaseModel):
    """What currently sits in a clearing. Zero warrior entries are dropped."""
    id: str
    warriors: dict[Faction, int] = Field(default_factory=dict)
    buildings: list[BuildingInstance] = Field(default_factory=list)
    tokens: list[TokenInstance] = Field(default_factory=list)

    def warrior_count(self, faction: Faction) -> int:
        return self.warriors.get(faction, 0)

    def total_warriors(self) -> int:
        return sum(self.warriors.values())

    def add_warriors(self, faction: Faction, count: int) -> None:
        new_count = self.warriors.get(faction, 0) + count
        if new_count > 0:
            self.warriors[faction] = new_count
        else:
            self.warriors.pop(faction, None)

    def buildings_of(self, faction: Faction, building_type: BuildingType | None = None) -> list[BuildingInstance]:
        return [
            b for b in self.buildings
            if b.faction == faction and (building_type is None or b.type == building_type)
        ]

    def tokens_of(self, faction: Faction, token_type: TokenType | None = None) -> list[TokenInstance]:
        return [
            t for t in self.tokens
            if t.faction == faction and (token_type is None or t.type == token_type)
        ]


class BoardState(BaseModel):
    clearings: dict[str, ClearingState] = Field(default_factory=dict)


# -----------------------------------------------------------------------------
# Faction state
# -----------------------------------------------------------------------------

class BuildingTrackStatus(BaseModel):
    definition_id: str
    built_count: int = 0


class MarquiseBuildingTracks(BaseModel):
    sawmill: BuildingTrackStatus = Field(
        default_factory=lambda: BuildingTrackStatus(definition_id="marquise_sawmill")
    )
    workshop: BuildingTrackStatus = Field(
        default_factory=lambda: BuildingTrackStatus(definition_id="marquise_workshop")
    )
    recruiter: BuildingTrackStatus = Field(
        default_factory=lambda: BuildingTrackStatus(definition_id="marquise_recruiter")
    )

    def for_type(self, building_type: BuildingType) -> BuildingTrackStatus:
        return getattr(self, building_type.value)


class MarquiseState(BaseModel):
    faction: Literal["marquise"] = "marquise"
    warriors_in_supply: int = TOTAL_WARRIORS[Faction.MARQUISE]
    wood_in_supply: int = MARQUISE_TOTAL_WOOD
    building_tracks: MarquiseBuildingTracks = Field(default_factory=MarquiseBuildingTracks)
    total_sawmills_on_map: int = 0
    total_workshops_on_map: int = 0
    total_recruiters_on_map: int = 0


class DecreeCard(BaseModel):
    suit: Suit
    source: DecreeSource = DecreeSource.NORMAL
    id: str


class DecreeResolution(BaseModel):
    """Record of one decree card being carried out."""
    column: DecreeColumn
    card_id: str
    success: bool
    reason_if_fail: str | None = None


def _empty_columns() -> dict[DecreeColumn, list[DecreeCard]]:
    return {column: [] for column in DECREE_COLUMNS}


class Decree(BaseModel):
    columns: dict[DecreeColumn, list[DecreeCard]] = Field(default_factory=_empty_columns)
    last_resolution_result: list[DecreeResolution] | None = None

    @model_validator(mode="after")
    def _fill_columns(self) -> "Decree":
        for column in DECREE_COLUMNS:
            self.columns.setdefault(column, [])
        return self

    def all_cards(self) -> list[DecreeCard]:
        return [card for column in DECREE_COLUMNS for card in self.columns[column]]


class RoostTrackStatus(BaseModel):
    definition_id: str = "default_roost_track"
    roosts_placed: int = 0


class EyrieState(BaseModel):
    faction: Literal["eyrie"] = "eyrie"
    warriors_in_supply: int = TOTAL_WARRIORS[Faction.EYRIE]
    decree: Decree = Field(default_factory=Decree)
    roost_track: RoostTrackStatus = Field(default_factory=RoostTrackStatus)
    roosts_on_map: int = 0
    hand_size: int = 3


class AllianceBases(BaseModel):
    mouse: bool = False
    rabbit: bool = False
    fox: bool = False


class SympathyTrackStatus(BaseModel):
    definition_id: str = "default_sympathy_track"
    sympathy_placed: int = 0


class Supporters(BaseModel):
    mouse: int = 0
    rabbit: int = 0
    fox: int = 0
    bird: int = 0  # Wild

    def total(self) -> int:
        return self.mouse + self.rabbit + self.fox + self.bird


class WoodlandAllianceState(BaseModel):
    faction: Literal["woodland_alliance"] = "woodland_alliance"
    warriors_in_supply: int = TOTAL_WARRIORS[Faction.WOODLAND_ALLIANCE]
    bases: AllianceBases = Field(default_factory=AllianceBases)
    officers: int = 0
    sympathy_track: SympathyTrackStatus = Field(default_factory=SympathyTrackStatus)
    sympathy_on_map: int = 0
    supporters: Supporters = Field(default_factory=Supporters)


class FactionStates(BaseModel):
    marquise: MarquiseState = Field(default_factory=MarquiseState)
    eyrie: EyrieState = Field(default_factory=EyrieState)
    woodland_alliance: WoodlandAllianceState = Field(default_factory=WoodlandAllianceState)

    def warriors_in_supply(self, faction: Faction) -> int:
        return getattr(self, faction.value).warriors_in_supply


# -----------------------------------------------------------------------------
# Turn & root state
# -----------------------------------------------------------------------------

class TurnState(BaseModel):
    current_faction: Faction = Faction.MARQUISE
    phase: Phase = Phase.BIRDSONG
    round_number: int = 1
    action_substep: str | None = None


def _empty_victory_track() -> dict[Faction, int]:
    return {faction: 0 for faction in FACTION_ORDER}


class GameState(BaseModel):
    """
    Complete canonical game state.

    Every executor deep-copies this before validating, so a caller's
    instance is never modified.
    """
    board: BoardState = Field(default_factory=BoardState)
    factions: FactionStates = Field(default_factory=FactionStates)
    victory_track: dict[Faction, int] = Field(default_factory=_empty_victory_track)
    turn: TurnState = Field(default_factory=TurnState)

    def clone(self) -> "GameState":
        return self.model_copy(deep=True)

    def clearing(self, clearing_id: str) -> ClearingState | None:
        return self.board.clearings.get(clearing_id)
