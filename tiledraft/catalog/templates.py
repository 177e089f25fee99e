"""
Tile Templates - Immutable catalog definitions.

A template describes a placeable location type:
- Color category (starter + four playable colors)
- Doors (passable edges before rotation)
- Drafting cost in workers
- Actions, passive abilities, an optional quest and VP scoring rules

Templates never change after authoring. Runtime state (rotation,
claimed actions, usage counts) lives on PlacedTile in the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


RESOURCE_NAMES = ("energy", "money", "materials", "reputation", "workers")


class TileColor(Enum):
    """Color categories. STARTER is reserved for the seed tile."""
    STARTER = "starter"
    ORANGE = "orange"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"

    @classmethod
    def playable(cls) -> list[TileColor]:
        return [c for c in cls if c is not cls.STARTER]


class TileKind(Enum):
    """Broad role of a tile, used for display and catalog grouping."""
    STARTER = "starter"
    VP = "vp"
    ECONOMY = "economy"
    BUILD = "build"
    SOCIAL = "social"


@dataclass(frozen=True)
class Doors:
    """Passable edges of a template, in template orientation."""
    n: bool = False
    e: bool = False
    s: bool = False
    w: bool = False

    def get(self, direction: Any) -> bool:
        """Read the flag for a Direction (or its "N"/"E"/"S"/"W" value)."""
        key = getattr(direction, "value", direction)
        return getattr(self, str(key).lower())

    def as_dict(self) -> dict[str, bool]:
        return {"N": self.n, "E": self.e, "S": self.s, "W": self.w}

    @classmethod
    def from_string(cls, text: str) -> Doors:
        """Doors.from_string("NS") -> doors open on north and south."""
        letters = set(text.upper())
        return cls(n="N" in letters, e="E" in letters, s="S" in letters, w="W" in letters)


@dataclass(frozen=True)
class ResourceDelta:
    """
    An amount of each resource, plus optional flat VP.

    Used for action costs (magnitudes to subtract), action effects and
    rewards (amounts to add). Zero fields mean "not involved".
    """
    energy: int = 0
    money: int = 0
    materials: int = 0
    reputation: int = 0
    workers: int = 0
    vp: int = 0

    def items(self) -> Iterator[tuple[str, int]]:
        """Yield (resource, amount) for every non-zero resource field."""
        for name in RESOURCE_NAMES:
            amount = getattr(self, name)
            if amount:
                yield name, amount

    def get(self, resource: str) -> int:
        return getattr(self, resource)

    @property
    def is_empty(self) -> bool:
        return self.vp == 0 and not any(True for _ in self.items())

    def describe(self, sign: bool = True) -> str:
        """Human readable summary, e.g. "+2 money, -1 energy, +3 VP"."""
        parts = []
        for name, amount in self.items():
            parts.append(f"{amount:+d} {name}" if sign else f"{amount} {name}")
        if self.vp:
            parts.append(f"{self.vp:+d} VP" if sign else f"{self.vp} VP")
        return ", ".join(parts)


@dataclass(frozen=True)
class TileAction:
    """
    An action the player can claim while standing on the tile.

    max_uses=None means once per placed tile. A number means repeatable up
    to that many times, counted per template across the whole grid.
    """
    id: str
    label: str
    description: str = ""
    cost: ResourceDelta | None = None
    effect: ResourceDelta = field(default_factory=ResourceDelta)
    max_uses: int | None = None

    @property
    def is_repeatable(self) -> bool:
        return self.max_uses is not None


@dataclass(frozen=True)
class PassiveAbility:
    """Reward granted every time a tile of trigger_color is placed."""
    id: str
    trigger_color: TileColor
    reward: ResourceDelta
    description: str = ""


class QuestTrigger(Enum):
    """Resource expenditures that advance a quest."""
    SPEND_MONEY = "spend_money"
    SPEND_REPUTATION = "spend_reputation"
    SPEND_MATERIALS = "spend_materials"
    SPEND_ENERGY = "spend_energy"

    @property
    def resource(self) -> str:
        return self.value.removeprefix("spend_")


@dataclass(frozen=True)
class Quest:
    """Completes after `target` matching expenditures, paying `reward` once."""
    id: str
    label: str
    trigger: QuestTrigger
    target: int
    reward: ResourceDelta
    description: str = ""


@dataclass(frozen=True)
class VPLogic:
    """Static scoring: flat VP plus VP per placed tile of a color."""
    flat: int = 0
    per_color: dict[TileColor, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TileTemplate:
    """
    Catalog definition of a tile.

    `cost` is paid in workers when the tile is drafted.
    """
    id: str
    name: str
    color: TileColor
    doors: Doors
    description: str = ""
    kind: TileKind = TileKind.ECONOMY
    cost: int = 0
    actions: tuple[TileAction, ...] = ()
    passive_abilities: tuple[PassiveAbility, ...] = ()
    quest: Quest | None = None
    vp_logic: VPLogic | None = None

    @property
    def is_starter(self) -> bool:
        return self.color is TileColor.STARTER

    def get_action(self, action_id: str) -> TileAction | None:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None


@dataclass(frozen=True)
class TileCatalog:
    """
    The read-only table a session drafts from.

    `deck` is the ordered draft pool; `starter` seeds every new session
    and is never drafted.
    """
    starter: TileTemplate
    deck: tuple[TileTemplate, ...]

    def __post_init__(self):
        if not self.deck:
            raise ValueError("A catalog needs at least one draftable tile")

    def get(self, tile_id: str) -> TileTemplate | None:
        if tile_id == self.starter.id:
            return self.starter
        for tile in self.deck:
            if tile.id == tile_id:
                return tile
        return None

    def all_tiles(self) -> list[TileTemplate]:
        return [self.starter, *self.deck]
