"""
Tests for save/load.

Tests:
- Round trip of a full session
- Version mismatch and malformed saves
- File backend
- Session autosave, load and reset
"""

import json
import logging

import pytest

from ..catalog.templates import TileCatalog
from ..config import GameConfig
from ..engine_core.geometry import Direction, Position
from ..engine_core.session import GameSession
from ..engine_core.state import GameStatus
from ..persistence.snapshot import (
    PositionModel,
    SaveEnvelope,
    SaveVersionMismatch,
    SnapshotError,
    decode_envelope,
    encode_envelope,
    snapshot_to_state,
    state_to_snapshot,
)
from ..persistence.store import FileBackend, MemoryBackend, SaveStore
from .conftest import CAMP, PLAZA, VAULT, explore


class BrokenBackend(MemoryBackend):
    def write(self, key, blob):
        raise OSError("disk full")


@pytest.fixture
def played(session):
    """A session with placed tiles, a claim, a quest step and an open draft."""
    explore(session, Direction.N, "vault")
    session.claim_action("deposit")
    session.move(Direction.N)
    session.reroll_draft()
    return session


class TestRoundTrip:
    """Tests for snapshot conversion."""

    def test_session_autosaves(self, played, store):
        """Commands save the session."""
        assert store.exists()

    def test_load_restores_everything(self, played, store, catalog):
        """A loaded state equals the saved one."""
        loaded = store.load(catalog)

        assert loaded is not None
        assert loaded is not played.state
        assert loaded == played.state
        assert loaded.pending_draft.reroll_count == 1
        assert loaded.tile_at(Position(1, 1)).claimed_actions == ["deposit"]

    def test_templates_rebind_to_catalog(self, played, store, catalog):
        """Templates are looked up by id on load."""
        loaded = store.load(catalog)
        assert loaded.tile_at(Position(1, 1)).template is VAULT

    def test_snapshot_models(self, played):
        """Snapshots store template ids and the draft direction."""
        snapshot = state_to_snapshot(played.state)
        assert {t.template_id for t in snapshot.tiles} == {"camp", "vault"}
        assert snapshot.pending_draft.direction is Direction.N

    def test_envelope_layout(self, played):
        """The save is a version, timestamp and state object."""
        data = json.loads(encode_envelope(played.state, "2.0", timestamp=123.0))
        assert set(data) == {"version", "timestamp", "state"}
        assert data["version"] == "2.0"
        assert data["timestamp"] == 123.0
        assert data["state"]["status"] == "playing"
        assert data["state"]["pending_draft"]["direction"] == "N"


class TestBadSaves:
    """Unusable saves mean "start fresh"."""

    def test_absent_save(self, catalog):
        """No save loads as None."""
        store = SaveStore(MemoryBackend())
        assert store.load(catalog) is None
        assert not store.exists()

    def test_version_mismatch_clears(self, played, store, catalog):
        """An incompatible version is discarded and cleared."""
        newer = SaveStore(store.backend, key=store.key, version="3.0")

        assert newer.load(catalog) is None
        assert not newer.exists()
        assert not store.exists()

    def test_malformed_blob(self, store, catalog):
        """Bad JSON loads as None and is left in place."""
        store.backend.write(store.key, "{not json")
        assert store.load(catalog) is None
        assert store.exists()

    def test_wrong_layout(self, store, catalog):
        """A body of the wrong shape loads as None."""
        store.backend.write(store.key, json.dumps({"version": "2.0", "state": {}}))
        assert store.load(catalog) is None

    def test_unknown_template(self, played, store):
        """Ids missing from the catalog load as None."""
        smaller = TileCatalog(starter=CAMP, deck=(PLAZA,))
        assert store.load(smaller) is None

    def test_decode_errors(self):
        """Version problems and parse problems raise different errors."""
        with pytest.raises(SaveVersionMismatch) as excinfo:
            decode_envelope(json.dumps({"version": "1.0"}), "2.0")
        assert excinfo.value.found == "1.0"
        assert excinfo.value.expected == "2.0"

        with pytest.raises(SnapshotError):
            decode_envelope("[]", "2.0")

    def test_player_must_stand_on_a_tile(self, session, catalog):
        """The player cannot be saved on an empty cell."""
        snapshot = state_to_snapshot(session.state)
        snapshot.player_position = PositionModel(x=0, y=0)
        with pytest.raises(SnapshotError):
            snapshot_to_state(snapshot, catalog)

    def test_draft_target_outside_grid(self, played, catalog):
        """A pending draft must point at a cell on the grid."""
        snapshot = state_to_snapshot(played.state)
        snapshot.pending_draft.target = PositionModel(x=9, y=9)
        with pytest.raises(SnapshotError, match="outside the grid"):
            snapshot_to_state(snapshot, catalog)

    def test_draft_target_not_next_to_player(self, played, catalog):
        """The target must be the neighbor in the saved direction."""
        snapshot = state_to_snapshot(played.state)
        snapshot.pending_draft.target = PositionModel(x=0, y=0)
        with pytest.raises(SnapshotError, match="of the player"):
            snapshot_to_state(snapshot, catalog)

    def test_draft_target_occupied(self, played, catalog):
        """A draft cannot be pending on a cell that already holds a tile."""
        snapshot = state_to_snapshot(played.state)
        snapshot.pending_draft.direction = Direction.S
        snapshot.pending_draft.target = PositionModel(x=1, y=2)
        with pytest.raises(SnapshotError, match="occupied"):
            snapshot_to_state(snapshot, catalog)

    def test_bad_draft_target_discarded_on_load(self, played, store, catalog):
        """The store treats a bad draft target as a malformed save."""
        snapshot = state_to_snapshot(played.state)
        snapshot.pending_draft.target = PositionModel(x=9, y=9)
        envelope = SaveEnvelope(version="2.0", timestamp=0.0, state=snapshot)
        store.backend.write(store.key, envelope.model_dump_json())

        assert store.load(catalog) is None

    def test_save_failure_is_swallowed(self, session, caplog):
        """Write failures are logged and reported as False."""
        store = SaveStore(BrokenBackend())
        with caplog.at_level(logging.WARNING):
            assert store.save(session.state) is False
        assert "disk full" in caplog.text


class TestFileBackend:
    """Tests for the on-disk backend."""

    def test_directory_created_on_first_save(self, tmp_path, session, catalog):
        """The save directory appears on first write."""
        save_dir = tmp_path / "saves"
        store = SaveStore(FileBackend(save_dir))
        assert not store.exists()
        assert not save_dir.exists()

        assert store.save(session.state)

        assert (save_dir / "tile-game-save.json").exists()
        assert store.load(catalog) == session.state

    def test_undecodable_file(self, tmp_path, catalog, config):
        """A save that is not UTF-8 is discarded and the game starts fresh."""
        (tmp_path / "tile-game-save.json").write_bytes(b"\xff\xfe\xfa not utf8")
        store = SaveStore(FileBackend(tmp_path))
        session = GameSession(catalog=catalog, config=config, store=store)

        assert store.load(catalog) is None
        assert not session.load()
        assert session.tiles_placed == 1
        assert store.exists()

    def test_clear(self, tmp_path, session):
        """Clearing removes the file and tolerates a missing one."""
        store = SaveStore(FileBackend(tmp_path))
        store.save(session.state)
        store.clear()
        assert not store.exists()
        store.clear()

    def test_from_config(self, tmp_path):
        """The store takes its location from config."""
        config = GameConfig(save_dir=tmp_path, save_key="slot")
        store = SaveStore.from_config(config)
        assert store.backend.save_dir == tmp_path
        assert store.key == "slot"
        assert store.version == "2.0"


class TestSessionPersistence:
    """Tests for GameSession save/load/reset."""

    def test_load_replaces_state(self, played, store, catalog, config):
        """Session load swaps in the saved state."""
        fresh = GameSession(catalog=catalog, config=config, store=store)
        assert fresh.load()
        assert fresh.state == played.state
        assert fresh.is_drafting

    def test_load_without_save(self, catalog, config):
        """Session load without a save keeps the fresh game."""
        session = GameSession(catalog=catalog, config=config, store=SaveStore(MemoryBackend()))
        assert not session.load()
        assert session.tiles_placed == 1

    def test_no_store(self, catalog, config):
        """A session without a store neither saves nor loads."""
        session = GameSession(catalog=catalog, config=config)
        assert not session.save()
        assert not session.load()

    def test_reset_clears_save(self, played, store):
        """Reset deletes the save."""
        played.reset_game()
        assert not store.exists()
        assert played.tiles_placed == 1
        assert not played.is_drafting

    def test_loaded_grid_size_wins_over_config(self, played, store, catalog):
        """Board-full is judged on the saved grid, not the configured one."""
        small = GameConfig(grid_width=1, grid_height=2, starting_workers=3)
        session = GameSession(catalog=catalog, config=small, store=store)

        assert session.load()
        assert session.select_draft_option(0)
        assert session.tiles_placed == 3
        assert session.state.cell_count == 9
        assert session.status is GameStatus.PLAYING
