"""
Catalog Validation - Sanity checks for tile catalogs.

Validates that:
1. Template ids are unique
2. Exactly one starter template exists and it is not in the draft deck
3. Costs, usage caps and quest targets are in range
4. Every drafted tile can be walked back out of (South door)
"""

from __future__ import annotations
from dataclasses import dataclass

from .templates import TileCatalog, TileColor, TileTemplate


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(catalog: TileCatalog, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete tile catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    # Starter checks
    starter = catalog.starter
    if starter.color is not TileColor.STARTER:
        errors.append(f"Starter tile '{starter.id}' must use the starter color")
    if not any(starter.doors.as_dict().values()):
        errors.append(f"Starter tile '{starter.id}' has no doors")

    seen: set[str] = set()
    for tile in catalog.all_tiles():
        if tile.id in seen:
            errors.append(f"Duplicate tile id '{tile.id}'")
        seen.add(tile.id)
        errors.extend(_validate_template(tile))

    for tile in catalog.deck:
        if tile.color is TileColor.STARTER:
            errors.append(f"Starter-colored tile '{tile.id}' cannot be in the draft deck")
        if not tile.doors.s:
            warnings.append(
                f"Tile '{tile.id}' has no South door - the player cannot walk back out"
            )

    if not any(tile.cost == 0 for tile in catalog.deck):
        warnings.append("No free tiles in the deck - a worker drought ends the game")

    result = ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise CatalogValidationError(errors)
    return result


def _validate_template(tile: TileTemplate) -> list[str]:
    """Validate a single template."""
    errors = []

    if not tile.id:
        errors.append("Tile id is required")
    if not tile.name:
        errors.append(f"Tile '{tile.id}' has no name")
    if tile.cost < 0:
        errors.append(f"Tile '{tile.id}' has negative cost {tile.cost}")

    action_ids: set[str] = set()
    for action in tile.actions:
        if action.id in action_ids:
            errors.append(f"Tile '{tile.id}' has duplicate action id '{action.id}'")
        action_ids.add(action.id)
        if action.max_uses is not None and action.max_uses < 1:
            errors.append(f"Action '{tile.id}.{action.id}' has max_uses < 1")
        if action.cost is not None:
            for name, amount in action.cost.items():
                if amount < 0:
                    errors.append(
                        f"Action '{tile.id}.{action.id}' has negative {name} cost"
                    )
        if action.effect.vp < 0:
            errors.append(f"Action '{tile.id}.{action.id}' removes VP")

    for passive in tile.passive_abilities:
        if passive.trigger_color is TileColor.STARTER:
            errors.append(
                f"Passive '{tile.id}.{passive.id}' triggers on the starter color, "
                "which is never placed"
            )
        if passive.reward.vp < 0:
            errors.append(f"Passive '{tile.id}.{passive.id}' removes VP")

    if tile.quest is not None:
        if tile.quest.target < 1:
            errors.append(f"Quest '{tile.id}.{tile.quest.id}' target must be >= 1")
        if tile.quest.reward.vp < 0:
            errors.append(f"Quest '{tile.id}.{tile.quest.id}' removes VP")

    if tile.vp_logic is not None:
        if TileColor.STARTER in tile.vp_logic.per_color:
            errors.append(f"Tile '{tile.id}' scores per starter tile")

    return errors
