"""
Action request schemas.

Every engine action is one variant of a tagged union discriminated on
``type``. The dispatcher keys its handler table on ActionType, and the
table is checked against this enum at import time, so a new variant
cannot be added without a handler.

Payload field names follow the wire contract: a move is
``{"type": "move", "faction": "eyrie", "from": "c2", "to": "c3", "warriors": 2}``.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..schema import BuildingType, DecreeColumn, Faction, TokenType


class ActionType(str, Enum):
    """Every action the engine can execute."""
    MOVE = "move"
    BATTLE = "battle"
    BUILD = "build"
    RECRUIT = "recruit"
    TOKEN = "token"
    PLACE_WOOD = "place_wood"
    BIRDSONG = "birdsong"     # Eyrie only
    EVENING = "evening"       # Eyrie only
    TURMOIL = "turmoil"       # Eyrie only


class _ActionBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MoveAction(_ActionBase):
    type: Literal["move"] = "move"
    faction: Faction
    from_clearing: str = Field(alias="from")
    to_clearing: str = Field(alias="to")
    warriors: int
    # Eyrie only: decree column whose card must match the origin suit
    decree_column: DecreeColumn | None = None


class BattleAction(_ActionBase):
    type: Literal["battle"] = "battle"
    clearing_id: str
    attacker: Faction
    defender: Faction
    decree_column: DecreeColumn | None = None


class BuildAction(_ActionBase):
    type: Literal["build"] = "build"
    faction: Faction
    clearing_id: str
    building_type: BuildingType | None = None
    decree_column: DecreeColumn | None = None


class RecruitAction(_ActionBase):
    type: Literal["recruit"] = "recruit"
    faction: Faction
    clearing_id: str | None = None
    warriors: int | None = None
    decree_column: DecreeColumn | None = None


class TokenAction(_ActionBase):
    type: Literal["token"] = "token"
    faction: Faction
    clearing_id: str
    token_type: TokenType


class PlaceWoodAction(_ActionBase):
    type: Literal["place_wood"] = "place_wood"
    clearing_id: str


class BirdsongAction(_ActionBase):
    type: Literal["birdsong"] = "birdsong"


class EveningAction(_ActionBase):
    type: Literal["evening"] = "evening"


class TurmoilAction(_ActionBase):
    type: Literal["turmoil"] = "turmoil"


Action = Annotated[
    Union[
        MoveAction,
        BattleAction,
        BuildAction,
        RecruitAction,
        TokenAction,
        PlaceWoodAction,
        BirdsongAction,
        EveningAction,
        TurmoilAction,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(Action)


def parse_action(data: dict) -> "Action":
    """Validate a raw payload into the matching action variant."""
    return _ACTION_ADAPTER.validate_python(data)
