"""
Game Configuration - Tunable constants for a session.

Grid dimensions, starting resources, thresholds and the movement mode
all live here rather than as literals in the engine. Values can be
overridden through environment variables (see GameConfig.from_env).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os


DEFAULT_SAVE_KEY = "tile-game-save"
SAVE_FORMAT_VERSION = "2.0"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class GameConfig:
    """
    Configuration for one game session.

    door_restricted switches between the two movement modes:
    - True: moves and drafts require a door on the current tile facing the
      target (and, for occupied targets, a door back on the target tile)
    - False: free orthogonal movement, doors are cosmetic
    """
    grid_width: int = 5
    grid_height: int = 8
    start_x: int | None = None  # Defaults to the middle column
    start_y: int | None = None  # Defaults to the bottom row

    starting_energy: int = 50
    starting_money: int = 0
    starting_materials: int = 0
    starting_reputation: int = 0
    starting_workers: int = 3

    win_vp_threshold: int = 100
    draft_size: int = 3
    max_rerolls: int = 3
    message_log_limit: int = 100

    door_restricted: bool = True

    save_dir: Path = field(default_factory=lambda: Path.home() / ".tiledraft" / "saves")
    save_key: str = DEFAULT_SAVE_KEY
    save_version: str = SAVE_FORMAT_VERSION

    def __post_init__(self):
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError("Grid dimensions must be positive")
        if self.start_x is None:
            self.start_x = self.grid_width // 2
        if self.start_y is None:
            self.start_y = self.grid_height - 1
        if not (0 <= self.start_x < self.grid_width and 0 <= self.start_y < self.grid_height):
            raise ValueError(
                f"Start position ({self.start_x}, {self.start_y}) is outside the "
                f"{self.grid_width}x{self.grid_height} grid"
            )
        if self.draft_size < 1:
            raise ValueError("draft_size must be >= 1")
        if self.message_log_limit < 1:
            raise ValueError("message_log_limit must be >= 1")
        self.save_dir = Path(self.save_dir).expanduser()

    @property
    def cell_count(self) -> int:
        return self.grid_width * self.grid_height

    @classmethod
    def from_env(cls, **overrides) -> GameConfig:
        """
        Build a config from TILEDRAFT_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        values = {
            "grid_width": _env_int("TILEDRAFT_GRID_WIDTH", 5),
            "grid_height": _env_int("TILEDRAFT_GRID_HEIGHT", 8),
            "starting_energy": _env_int("TILEDRAFT_STARTING_ENERGY", 50),
            "starting_workers": _env_int("TILEDRAFT_STARTING_WORKERS", 3),
            "win_vp_threshold": _env_int("TILEDRAFT_WIN_VP", 100),
            "door_restricted": _env_bool("TILEDRAFT_DOOR_RESTRICTED", True),
        }
        save_dir = os.getenv("TILEDRAFT_SAVE_DIR")
        if save_dir:
            values["save_dir"] = Path(save_dir)
        values.update(overrides)
        return cls(**values)
