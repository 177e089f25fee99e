"""
Game State - The session aggregate.

Design principles:
- One mutable aggregate per session, mutated only by GameSession
- Serializable: every field round-trips through the save envelope
- Templates are shared catalog objects; only PlacedTile carries runtime state
- Derived values (VP, tiles placed) are computed, never stored
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, TYPE_CHECKING

from ..catalog.templates import RESOURCE_NAMES, ResourceDelta, TileTemplate
from .geometry import Direction, Position, in_bounds
from .rotation import door_facing, rotate_doors

if TYPE_CHECKING:
    from ..catalog.templates import Doors
    from ..config import GameConfig


class GameStatus(Enum):
    """Session status. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class FocusMode(Enum):
    """Keyboard focus projection for the front end."""
    GRID = "grid"
    DETAILS = "details"


class MessageKind(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class GridIndexError(IndexError):
    """A grid access outside the declared bounds. Indicates a bug in the caller."""


@dataclass
class LogEntry:
    """A player-facing message."""
    id: int
    text: str
    kind: MessageKind = MessageKind.INFO


@dataclass
class GameResources:
    """Resource counters held by the player."""
    energy: int = 0
    money: int = 0
    materials: int = 0
    reputation: int = 0
    workers: int = 0

    def get(self, resource: str) -> int:
        return getattr(self, resource)

    def can_afford(self, cost: ResourceDelta | None) -> bool:
        if cost is None:
            return True
        return all(self.get(name) >= amount for name, amount in cost.items())

    def missing(self, cost: ResourceDelta | None) -> ResourceDelta:
        """How much of each resource is lacking to pay `cost`."""
        if cost is None:
            return ResourceDelta()
        shortfall = {
            name: amount - self.get(name)
            for name, amount in cost.items()
            if self.get(name) < amount
        }
        return ResourceDelta(**shortfall)

    def spend(self, cost: ResourceDelta) -> None:
        for name, amount in cost.items():
            if self.get(name) < amount:
                raise ValueError(f"Not enough {name} to spend {amount}")
        for name, amount in cost.items():
            setattr(self, name, self.get(name) - amount)

    def gain(self, delta: ResourceDelta) -> None:
        """Add every resource in `delta`. VP is not a resource and is ignored."""
        for name, amount in delta.items():
            setattr(self, name, self.get(name) + amount)

    def as_dict(self) -> dict[str, int]:
        return {name: self.get(name) for name in RESOURCE_NAMES}


@dataclass
class PlacedTile:
    """
    A template instance on the grid.

    claimed_actions holds one-time action ids claimed on THIS tile.
    action_usage counts repeatable-action uses made on this tile; the cap
    itself is enforced on the session-wide ledger keyed by template.
    """
    position: Position
    template: TileTemplate
    rotation: int = 0
    claimed_actions: list[str] = field(default_factory=list)
    action_usage: dict[str, int] = field(default_factory=dict)

    @property
    def doors(self) -> Doors:
        return rotate_doors(self.template.doors, self.rotation)

    def has_door(self, direction: Direction) -> bool:
        return door_facing(self.template.doors, self.rotation, direction)

    @property
    def instance_key(self) -> str:
        """Stable per-instance key. Tiles are never removed, so the cell is unique."""
        return f"{self.position.x},{self.position.y}"


@dataclass
class PendingDraft:
    """Context for a draft in progress, set and cleared as a unit."""
    target: Position
    direction: Direction  # Direction of travel into target
    options: list[TileTemplate] = field(default_factory=list)
    reroll_count: int = 0


@dataclass
class GameState:
    """
    Complete session state at a point in time.

    grid is indexed grid[y][x].
    """
    width: int
    height: int
    grid: list[list[PlacedTile | None]]
    player_position: Position
    resources: GameResources = field(default_factory=GameResources)

    selected_position: Position | None = None
    pending_draft: PendingDraft | None = None

    status: GameStatus = GameStatus.PLAYING
    loss_reason: str | None = None

    messages: list[LogEntry] = field(default_factory=list)
    next_message_id: int = 1

    # Ledgers
    passive_vp: int = 0
    repeatable_usage: dict[str, int] = field(default_factory=dict)  # "template:action" -> uses
    quest_progress: dict[str, int] = field(default_factory=dict)  # "x,y:quest" -> progress
    completed_quests: dict[str, bool] = field(default_factory=dict)

    # UI focus projection
    focus_mode: FocusMode = FocusMode.GRID
    focused_action_index: int = 0

    @classmethod
    def create(cls, config: GameConfig, starter: TileTemplate) -> GameState:
        """Fresh state: empty grid, starter tile at the start cell, starting resources."""
        start = Position(config.start_x, config.start_y)
        grid: list[list[PlacedTile | None]] = [
            [None for _ in range(config.grid_width)] for _ in range(config.grid_height)
        ]
        grid[start.y][start.x] = PlacedTile(position=start, template=starter, rotation=0)
        return cls(
            width=config.grid_width,
            height=config.grid_height,
            grid=grid,
            player_position=start,
            selected_position=start,
            resources=GameResources(
                energy=config.starting_energy,
                money=config.starting_money,
                materials=config.starting_materials,
                reputation=config.starting_reputation,
                workers=config.starting_workers,
            ),
        )

    @property
    def is_drafting(self) -> bool:
        return self.pending_draft is not None

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    def in_bounds(self, pos: Position) -> bool:
        return in_bounds(pos, self.width, self.height)

    def tile_at(self, pos: Position) -> PlacedTile | None:
        if not self.in_bounds(pos):
            raise GridIndexError(f"{pos} is outside the {self.width}x{self.height} grid")
        return self.grid[pos.y][pos.x]

    def place_tile(self, tile: PlacedTile) -> None:
        if self.tile_at(tile.position) is not None:
            raise ValueError(f"Cell {tile.position} is already occupied")
        self.grid[tile.position.y][tile.position.x] = tile

    def placed_tiles(self) -> Iterator[PlacedTile]:
        """All placed tiles in row-major order."""
        for row in self.grid:
            for tile in row:
                if tile is not None:
                    yield tile

    @property
    def tiles_placed(self) -> int:
        return sum(1 for _ in self.placed_tiles())

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def log(self, text: str, kind: MessageKind = MessageKind.INFO, limit: int = 100) -> LogEntry:
        """Append a message, keeping only the `limit` newest."""
        entry = LogEntry(id=self.next_message_id, text=text, kind=kind)
        self.next_message_id += 1
        self.messages.append(entry)
        if len(self.messages) > limit:
            del self.messages[: len(self.messages) - limit]
        return entry
