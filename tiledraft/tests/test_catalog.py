"""
Tests for the tile catalog and its validation.
"""

import pytest

from ..catalog import (
    ALL_TILES,
    DEFAULT_CATALOG,
    STARTER_TILE,
    TILE_DECK,
    CatalogValidationError,
    Doors,
    QuestTrigger,
    ResourceDelta,
    TileAction,
    TileCatalog,
    TileColor,
    TileTemplate,
    get_tile,
    validate_catalog,
)
from .conftest import CAMP, PLAZA


class TestDefaultCatalog:
    """The shipped catalog is consistent."""

    def test_validates_cleanly(self):
        """The default catalog has no errors or warnings."""
        result = validate_catalog(DEFAULT_CATALOG)
        assert result.valid, result.errors
        assert result.warnings == []

    def test_starter_is_not_drafted(self):
        """The starter never appears in the deck."""
        assert STARTER_TILE.is_starter
        assert STARTER_TILE not in TILE_DECK
        assert all(tile.color in TileColor.playable() for tile in TILE_DECK)

    def test_lookup(self):
        """Tiles can be found by id."""
        assert get_tile("base_camp") is STARTER_TILE
        assert DEFAULT_CATALOG.get("market") is ALL_TILES["market"]
        assert get_tile("nope") is None
        assert len(DEFAULT_CATALOG.all_tiles()) == len(TILE_DECK) + 1

    def test_every_drafted_tile_has_a_way_back(self):
        """Every deck tile has a South door."""
        assert all(tile.doors.s for tile in TILE_DECK)


class TestValidation:
    """Tests for validate_catalog."""

    def test_duplicate_ids(self):
        """Duplicate ids are an error."""
        result = validate_catalog(TileCatalog(starter=CAMP, deck=(PLAZA, PLAZA)))
        assert not result.valid
        assert any("Duplicate tile id 'plaza'" in e for e in result.errors)

    def test_starter_in_deck(self):
        """The starter cannot be in the deck."""
        result = validate_catalog(TileCatalog(starter=CAMP, deck=(PLAZA, CAMP)))
        assert not result.valid

    def test_bad_action_cap(self):
        """Caps below one are an error."""
        broken = TileTemplate(
            id="broken",
            name="Broken",
            color=TileColor.BLUE,
            doors=Doors.from_string("S"),
            actions=(TileAction(id="spin", label="Spin", max_uses=0),),
        )
        result = validate_catalog(TileCatalog(starter=CAMP, deck=(PLAZA, broken)))
        assert any("max_uses" in e for e in result.errors)

    def test_missing_south_door_is_a_warning(self):
        """A missing South door only warns."""
        sideways = TileTemplate(
            id="sideways",
            name="Sideways",
            color=TileColor.BLUE,
            doors=Doors.from_string("EW"),
        )
        result = validate_catalog(TileCatalog(starter=CAMP, deck=(PLAZA, sideways)))
        assert result.valid
        assert any("South door" in w for w in result.warnings)

    def test_raise_on_error(self):
        """raise_on_error turns errors into an exception."""
        with pytest.raises(CatalogValidationError) as excinfo:
            validate_catalog(TileCatalog(starter=CAMP, deck=(PLAZA, PLAZA)), raise_on_error=True)
        assert excinfo.value.errors

    def test_empty_deck_is_rejected(self):
        """A catalog needs at least one deck tile."""
        with pytest.raises(ValueError):
            TileCatalog(starter=CAMP, deck=())


class TestTemplates:
    """Tests for template value types."""

    def test_doors_from_string(self):
        """Doors parse from compass letters."""
        assert Doors.from_string("ns") == Doors(n=True, s=True)
        assert Doors.from_string("NESW").as_dict() == {"N": True, "E": True, "S": True, "W": True}

    def test_resource_delta_describe(self):
        """Deltas render as signed text."""
        assert ResourceDelta(money=2, energy=-1, vp=3).describe() == "-1 energy, +2 money, +3 VP"
        assert ResourceDelta(money=2).describe(sign=False) == "2 money"
        assert ResourceDelta().is_empty

    def test_quest_trigger_resource(self):
        """Triggers name the resource they watch."""
        assert QuestTrigger.SPEND_MONEY.resource == "money"
        assert QuestTrigger.SPEND_ENERGY.resource == "energy"
