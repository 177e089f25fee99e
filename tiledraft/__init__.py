"""
Tiledraft - Single-player tile-drafting exploration game engine.

The player walks an avatar across a fixed grid, discovers new tiles by
drafting from a static catalog, spends and gains resources through tile
actions, and races to a victory point threshold before energy runs out.

The engine provides:
- The authoritative session state and its command surface
- Drafting, rotation, movement and scoring rules
- Quest and passive ability resolution
- A versioned save/load adapter
- A thin HTTP API for a browser front end
"""

__version__ = "0.1.0"
