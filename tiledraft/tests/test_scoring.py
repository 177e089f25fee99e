"""
Tests for victory point scoring.
"""

from ..catalog.templates import Doors, TileColor, TileTemplate, VPLogic
from ..engine_core.geometry import Direction, Position
from ..engine_core.scoring import base_victory_points, color_counts
from ..engine_core.state import PlacedTile
from .conftest import CAMP, MILL, PLAZA, SHRINE, explore


OBELISK = TileTemplate(
    id="obelisk",
    name="Obelisk",
    color=TileColor.ORANGE,
    doors=Doors.from_string("S"),
)


def placed(template, x, y):
    return PlacedTile(position=Position(x, y), template=template)


class TestBaseVictoryPoints:
    """Tests for base_victory_points."""

    def test_starter_scores_nothing(self):
        """Starter tiles never score."""
        starter = TileTemplate(
            id="odd_camp",
            name="Odd Camp",
            color=TileColor.STARTER,
            doors=Doors.from_string("N"),
            vp_logic=VPLogic(flat=10),
        )
        assert base_victory_points([placed(starter, 0, 0)]) == 0

    def test_flat_vp(self):
        """Flat VP adds per tile."""
        assert base_victory_points([placed(SHRINE, 0, 0), placed(SHRINE, 1, 0)]) == 8

    def test_starter_not_counted_by_color(self):
        """The starter has no color for per-color scoring."""
        tiles = [placed(CAMP, 0, 0), placed(MILL, 1, 0), placed(PLAZA, 2, 0)]
        counts = color_counts(tiles)
        assert counts[TileColor.STARTER] == 0
        assert counts[TileColor.BLUE] == 1
        assert counts[TileColor.ORANGE] == 1

    def test_per_color_counts_whole_grid_including_itself(self):
        """Per-color VP counts every matching tile, the scorer included."""
        # Three other orange tiles plus the plaza itself: 2 VP x 4
        tiles = [
            placed(OBELISK, 0, 0),
            placed(OBELISK, 1, 0),
            placed(OBELISK, 2, 0),
            placed(PLAZA, 0, 1),
        ]
        assert base_victory_points(tiles) == 8

    def test_per_color_rules_stack(self):
        """Each per-color tile scores on its own."""
        # Each plaza scores 2 per orange tile: 2 plazas x 2 VP x 2 orange
        tiles = [placed(PLAZA, 0, 0), placed(PLAZA, 1, 0)]
        assert base_victory_points(tiles) == 8

    def test_empty_grid(self):
        """No tiles, no VP."""
        assert base_victory_points([]) == 0


class TestSessionVictoryPoints:
    """Session VP = grid VP + passive accumulator."""

    def test_fresh_session_has_zero_vp(self, session):
        """A new game starts at zero."""
        assert session.victory_points == 0

    def test_placing_orange_raises_existing_plaza(self, session):
        """Placed tiles raise the score of tiles already on the grid."""
        assert explore(session, Direction.N, "plaza")
        assert session.victory_points == 2
        session.state.place_tile(placed(OBELISK, 0, 0))
        assert session.victory_points == 4

    def test_passive_vp_is_added(self, session):
        """Passive VP is added to grid VP."""
        session.state.passive_vp = 7
        assert session.victory_points == 7
