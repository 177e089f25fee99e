"""
Save Store - Keyed, versioned persistence of a single game session.

The store:
- Holds one blob per key (the session uses a single well-known key)
- Writes are best-effort: failures are logged, never raised
- Loads return None for "start fresh" (absent, stale, or malformed save)
- Stale versions are cleared on load so they are not offered again

Backends are deliberately dumb key/value holders. FileBackend keeps one
JSON file per key on local disk; MemoryBackend is for tests and embedding.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from ..catalog.templates import TileCatalog
from ..config import DEFAULT_SAVE_KEY, SAVE_FORMAT_VERSION, GameConfig
from ..engine_core.state import GameState
from .snapshot import (
    SaveVersionMismatch,
    SnapshotError,
    decode_envelope,
    encode_envelope,
    snapshot_to_state,
)

logger = logging.getLogger(__name__)


class SaveBackend(Protocol):
    def read(self, key: str) -> str | None: ...
    def write(self, key: str, blob: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def contains(self, key: str) -> bool: ...


class MemoryBackend:
    """In-process backend. Contents vanish with the object."""

    def __init__(self):
        self.blobs: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self.blobs[key] = blob

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self.blobs


class FileBackend:
    """
    One `<key>.json` file per key under `save_dir`.

    The directory is created on first write, so constructing a backend
    for a read-only check never touches the filesystem.
    """

    def __init__(self, save_dir: str | Path | None = None):
        if save_dir is None:
            save_dir = Path.home() / ".tiledraft" / "saves"
        self.save_dir = Path(save_dir).expanduser()

    def _path(self, key: str) -> Path:
        return self.save_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, blob: str) -> None:
        self.save_dir.mkdir(parents=True, exist_ok=True)
        # Write then rename so a crash mid-write never leaves half a save
        tmp = self._path(key).with_suffix(".json.tmp")
        tmp.write_text(blob, encoding="utf-8")
        tmp.replace(self._path(key))

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def contains(self, key: str) -> bool:
        return self._path(key).exists()


class SaveStore:
    """
    Versioned save slot over a backend.

    Usage:
        store = SaveStore(FileBackend("~/.tiledraft/saves"))
        store.save(session.state)

        state = store.load(catalog)
        if state is None:
            ...  # start a fresh session
    """

    def __init__(
        self,
        backend: SaveBackend | None = None,
        key: str = DEFAULT_SAVE_KEY,
        version: str = SAVE_FORMAT_VERSION,
    ):
        self.backend = backend if backend is not None else MemoryBackend()
        self.key = key
        self.version = version

    @classmethod
    def from_config(cls, config: GameConfig) -> SaveStore:
        return cls(
            FileBackend(config.save_dir),
            key=config.save_key,
            version=config.save_version,
        )

    def save(self, state: GameState) -> bool:
        """Overwrite the slot with `state`. Returns False if the write failed."""
        try:
            self.backend.write(self.key, encode_envelope(state, self.version))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to save game under %r: %s", self.key, e)
            return False
        return True

    def load(self, catalog: TileCatalog) -> GameState | None:
        """
        Restore the saved state, or None if there is nothing usable.

        A version mismatch clears the slot. A malformed blob is left in
        place and reported; the next save overwrites it.
        """
        try:
            raw = self.backend.read(self.key)
        except UnicodeDecodeError as e:
            logger.warning("Discarding unreadable save %r: %s", self.key, e)
            return None
        except OSError as e:
            logger.warning("Failed to read save %r: %s", self.key, e)
            return None
        if raw is None:
            return None

        try:
            envelope = decode_envelope(raw, self.version)
        except SaveVersionMismatch as e:
            logger.info("Discarding incompatible save: %s", e)
            self.clear()
            return None
        except SnapshotError as e:
            logger.warning("Discarding malformed save: %s", e)
            return None

        try:
            return snapshot_to_state(envelope.state, catalog)
        except SnapshotError as e:
            logger.warning("Discarding malformed save: %s", e)
            return None

    def clear(self) -> None:
        try:
            self.backend.delete(self.key)
        except OSError as e:
            logger.warning("Failed to clear save %r: %s", self.key, e)

    def exists(self) -> bool:
        try:
            return self.backend.contains(self.key)
        except OSError:
            return False
