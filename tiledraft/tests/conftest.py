"""
Pytest fixtures for tiledraft tests.
"""

import pytest

from ..catalog.templates import (
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
from ..config import GameConfig
from ..engine_core.geometry import Direction
from ..engine_core.session import GameSession
from ..persistence.store import MemoryBackend, SaveStore


class ScriptedRng:
    """
    Stands in for random.Random in draft draws.

    choice() returns the deck entry whose id is next in `queue`, and the
    first deck entry once the queue is empty.
    """

    def __init__(self, ids=None):
        self.queue = list(ids or [])

    def choice(self, seq):
        if self.queue:
            wanted = self.queue.pop(0)
            for item in seq:
                if item.id == wanted:
                    return item
            raise AssertionError(f"{wanted!r} is not in the deck")
        return seq[0]

    def script(self, *ids):
        self.queue.extend(ids)


CAMP = TileTemplate(
    id="camp",
    name="Camp",
    color=TileColor.STARTER,
    kind=TileKind.STARTER,
    doors=Doors.from_string("NESW"),
    actions=(
        TileAction(id="forage", label="Forage", effect=ResourceDelta(money=1), max_uses=3),
    ),
)

PLAZA = TileTemplate(
    id="plaza",
    name="Plaza",
    color=TileColor.ORANGE,
    kind=TileKind.VP,
    doors=Doors.from_string("NESW"),
    cost=0,
    vp_logic=VPLogic(per_color={TileColor.ORANGE: 2}),
)

VAULT = TileTemplate(
    id="vault",
    name="Vault",
    color=TileColor.GREEN,
    doors=Doors.from_string("NESW"),
    cost=1,
    actions=(
        TileAction(
            id="deposit",
            label="Deposit",
            cost=ResourceDelta(money=5),
            effect=ResourceDelta(reputation=2),
        ),
    ),
    quest=Quest(
        id="hoard",
        label="Hoard",
        trigger=QuestTrigger.SPEND_MONEY,
        target=2,
        reward=ResourceDelta(materials=1, vp=5),
    ),
)

MILL = TileTemplate(
    id="mill",
    name="Mill",
    color=TileColor.BLUE,
    kind=TileKind.BUILD,
    doors=Doors.from_string("NS"),
    cost=1,
    actions=(
        TileAction(
            id="grind",
            label="Grind",
            cost=ResourceDelta(materials=1),
            effect=ResourceDelta(money=3),
            max_uses=2,
        ),
    ),
    passive_abilities=(
        PassiveAbility(
            id="toll",
            trigger_color=TileColor.ORANGE,
            reward=ResourceDelta(money=1, vp=1),
        ),
    ),
)

SHRINE = TileTemplate(
    id="shrine",
    name="Shrine",
    color=TileColor.PURPLE,
    kind=TileKind.SOCIAL,
    doors=Doors.from_string("S"),
    cost=0,
    passive_abilities=(
        PassiveAbility(
            id="blessing",
            trigger_color=TileColor.PURPLE,
            reward=ResourceDelta(reputation=1),
        ),
    ),
    vp_logic=VPLogic(flat=4),
)

PALACE = TileTemplate(
    id="palace",
    name="Palace",
    color=TileColor.PURPLE,
    kind=TileKind.VP,
    doors=Doors.from_string("NESW"),
    cost=9,
    vp_logic=VPLogic(flat=50),
)


@pytest.fixture
def catalog() -> TileCatalog:
    """Small hand-built catalog."""
    return TileCatalog(starter=CAMP, deck=(PLAZA, VAULT, MILL, SHRINE, PALACE))


@pytest.fixture
def config() -> GameConfig:
    """3x3 grid, player starts bottom-center at (1, 2)."""
    return GameConfig(
        grid_width=3,
        grid_height=3,
        starting_energy=50,
        starting_money=10,
        starting_workers=3,
    )


@pytest.fixture
def store() -> SaveStore:
    return SaveStore(MemoryBackend())


@pytest.fixture
def rng() -> ScriptedRng:
    return ScriptedRng()


@pytest.fixture
def session(catalog, config, store, rng) -> GameSession:
    return GameSession(catalog=catalog, config=config, store=store, rng=rng)


@pytest.fixture
def make_session(catalog, store):
    """Build a session with config overrides and a scripted draw order."""
    def _make(draws=(), **overrides) -> GameSession:
        values = dict(
            grid_width=3,
            grid_height=3,
            starting_energy=50,
            starting_money=10,
            starting_workers=3,
        )
        values.update(overrides)
        return GameSession(
            catalog=catalog,
            config=GameConfig(**values),
            store=store,
            rng=ScriptedRng(draws),
        )
    return _make


def explore(session: GameSession, direction: Direction, tile_id: str) -> bool:
    """Move into an empty cell and place `tile_id` from a draft of three copies."""
    session.rng.script(tile_id, tile_id, tile_id)
    if not session.move(direction):
        return False
    return session.select_draft_option(0)
