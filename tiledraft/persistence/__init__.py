"""
Persistence - Versioned save/load of a game session.

Saves are best-effort and never disturb the running session; a save that
cannot be used is treated as "start fresh".
"""

from .snapshot import (
    SaveEnvelope,
    SaveVersionMismatch,
    SnapshotError,
    StateSnapshot,
    decode_envelope,
    encode_envelope,
    snapshot_to_state,
    state_to_snapshot,
)
from .store import FileBackend, MemoryBackend, SaveBackend, SaveStore

__all__ = [
    "SaveEnvelope",
    "SaveVersionMismatch",
    "SnapshotError",
    "StateSnapshot",
    "decode_envelope",
    "encode_envelope",
    "snapshot_to_state",
    "state_to_snapshot",
    "FileBackend",
    "MemoryBackend",
    "SaveBackend",
    "SaveStore",
]
