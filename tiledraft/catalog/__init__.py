"""Tile catalog - immutable template definitions and the default deck."""

from .templates import (
    RESOURCE_NAMES,
    Doors,
    PassiveAbility,
    Quest,
    QuestTrigger,
    ResourceDelta,
    TileAction,
    TileCatalog,
    TileColor,
    TileKind,
    TileTemplate,
    VPLogic,
)
from .tiles import ALL_TILES, DEFAULT_CATALOG, STARTER_TILE, TILE_DECK, get_tile
from .validation import CatalogValidationError, ValidationResult, validate_catalog

__all__ = [
    "RESOURCE_NAMES",
    "Doors",
    "PassiveAbility",
    "Quest",
    "QuestTrigger",
    "ResourceDelta",
    "TileAction",
    "TileCatalog",
    "TileColor",
    "TileKind",
    "TileTemplate",
    "VPLogic",
    "ALL_TILES",
    "DEFAULT_CATALOG",
    "STARTER_TILE",
    "TILE_DECK",
    "get_tile",
    "CatalogValidationError",
    "ValidationResult",
    "validate_catalog",
]
