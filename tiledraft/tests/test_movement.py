"""
Tests for movement.

Tests:
- Door-restricted moves (exit door and entrance door)
- Free movement mode
- Pointer moves and selection
- The shared move sequence
"""

from ..engine_core.geometry import Direction, Position
from ..engine_core.state import FocusMode, GameStatus, PlacedTile
from .conftest import PLAZA, explore


class TestMove:
    """Tests for GameSession.move."""

    def test_move_off_grid_is_noop(self, session):
        """Moving off the grid changes nothing."""
        assert not session.move(Direction.S)
        assert session.state.player_position == Position(1, 2)
        assert session.state.resources.energy == 50

    def test_move_onto_placed_tile_costs_one_energy(self, session):
        """Stepping onto a placed tile costs one energy."""
        explore(session, Direction.N, "plaza")
        energy = session.state.resources.energy

        assert session.move(Direction.S)

        assert session.state.player_position == Position(1, 2)
        assert session.state.selected_position == Position(1, 2)
        assert session.state.resources.energy == energy - 1
        assert session.state.messages[-1].text.startswith("Moved to Camp")

    def test_blocked_by_missing_exit_door(self, session):
        """No door on the current tile, no move."""
        # Mill placed northward keeps its N/S doors: no way East
        explore(session, Direction.N, "mill")
        assert not session.move(Direction.E)
        assert not session.is_drafting
        assert not session.can_move(Direction.E)

    def test_blocked_by_missing_entrance_door(self, session):
        """No door back on the target tile, no move."""
        # Shrine at (0, 1) only has its South door
        explore(session, Direction.W, "plaza")
        explore(session, Direction.N, "shrine")
        assert session.move(Direction.S)
        assert session.move(Direction.E)
        explore(session, Direction.N, "plaza")
        assert session.state.player_position == Position(1, 1)
        assert not session.move(Direction.W)
        assert session.state.player_position == Position(1, 1)

    def test_free_movement_ignores_doors(self, make_session):
        """With doors off, any orthogonal move is allowed."""
        session = make_session(door_restricted=False)
        explore(session, Direction.N, "mill")

        assert session.can_move(Direction.E)
        assert session.move(Direction.E)
        assert session.is_drafting

    def test_move_resets_focus(self, session):
        """Moving returns focus to the grid."""
        session.set_focus_mode(FocusMode.DETAILS)
        explore(session, Direction.N, "plaza")
        assert session.state.focus_mode is FocusMode.GRID
        assert session.state.focused_action_index == 0

    def test_attempt_move_alias(self, session):
        """attempt_move is move."""
        assert session.attempt_move(Direction.N)
        assert session.is_drafting


class TestMoveToTile:
    """Tests for pointer-driven moves."""

    def test_moves_to_adjacent_placed_tile(self, session):
        """Pointer moves reach a neighboring tile."""
        explore(session, Direction.N, "plaza")
        assert session.move_to_tile(Position(1, 2))
        assert session.state.player_position == Position(1, 2)

    def test_rejects_empty_cell(self, session):
        """Pointer moves never start a draft."""
        assert not session.move_to_tile(Position(1, 1))
        assert not session.is_drafting

    def test_rejects_non_adjacent(self, session):
        """Only neighbors can be reached."""
        explore(session, Direction.N, "plaza")
        explore(session, Direction.N, "plaza")
        assert not session.move_to_tile(Position(1, 2))

    def test_rejects_current_cell_and_out_of_bounds(self, session):
        """The current cell and off-grid cells are refused."""
        assert not session.move_to_tile(Position(1, 2))
        assert not session.move_to_tile(Position(5, 5))

    def test_requires_energy(self, session):
        """Without energy the player stays put."""
        explore(session, Direction.N, "plaza")
        session.state.resources.energy = 0
        assert not session.move_to_tile(Position(1, 2))
        assert session.state.player_position == Position(1, 1)

    def test_respects_doors(self, session, make_session):
        """Pointer moves use the same door rule as directional moves."""
        explore(session, Direction.N, "mill")
        session.state.place_tile(PlacedTile(position=Position(2, 1), template=PLAZA))
        # The mill at (1, 1) has no East door
        assert not session.move_to_tile(Position(2, 1))

        free = make_session(door_restricted=False)
        explore(free, Direction.N, "mill")
        free.state.place_tile(PlacedTile(position=Position(2, 1), template=PLAZA))
        assert free.move_to_tile(Position(2, 1))


class TestSelectTile:
    """Tests for selection."""

    def test_select_placed_tile_does_not_move(self, session):
        """Selecting a tile only changes the selection."""
        explore(session, Direction.N, "plaza")
        assert session.select_tile(Position(1, 2))

        assert session.state.selected_position == Position(1, 2)
        assert session.state.player_position == Position(1, 1)
        assert session.selected_tile.template.id == "camp"
        assert session.current_tile.template.id == "plaza"

    def test_select_out_of_bounds(self, session):
        """Off-grid selection is refused."""
        assert not session.select_tile(Position(-1, 0))

    def test_select_blocked_empty_neighbor(self, session):
        """An empty neighbor behind a wall cannot be drafted."""
        explore(session, Direction.N, "mill")
        assert not session.select_tile(Position(2, 1))
        assert not session.is_drafting


def test_game_over_blocks_movement(session):
    """Nothing moves once the game has ended."""
    session.state.status = GameStatus.LOST
    assert not session.move(Direction.N)
    assert not session.can_move(Direction.N)
    assert not session.is_drafting
