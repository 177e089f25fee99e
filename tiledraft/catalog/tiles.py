"""
Tile Catalog - The static set of tiles the game drafts from.

Every drafted tile is rotated so its South door faces back toward the
cell the player came from, so every playable tile carries a South door.

Colors:
- orange: monuments and VP engines
- green: economy (money)
- blue: construction (materials, workers)
- purple: social (reputation)
"""

from .templates import (
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


# ============================================================================
# Starter
# ============================================================================

STARTER_TILE = TileTemplate(
    id="base_camp",
    name="Base Camp",
    color=TileColor.STARTER,
    kind=TileKind.STARTER,
    doors=Doors.from_string("NEW"),
    description="Where every expedition begins.",
    actions=(
        TileAction(
            id="forage",
            label="Forage",
            description="Scrounge the camp for spare coin.",
            effect=ResourceDelta(money=1),
            max_uses=3,
        ),
        TileAction(
            id="recruit",
            label="Recruit",
            description="Pay a hand to join the crew.",
            cost=ResourceDelta(money=2),
            effect=ResourceDelta(workers=1),
            max_uses=5,
        ),
    ),
)


# ============================================================================
# Orange - VP
# ============================================================================

WATCHTOWER = TileTemplate(
    id="watchtower",
    name="Watchtower",
    color=TileColor.ORANGE,
    kind=TileKind.VP,
    doors=Doors.from_string("NS"),
    cost=1,
    description="A lookout over the surrounding land.",
    actions=(
        TileAction(
            id="survey",
            label="Survey",
            description="Map the land for the council.",
            cost=ResourceDelta(energy=1),
            effect=ResourceDelta(reputation=2),
        ),
    ),
    vp_logic=VPLogic(flat=3),
)

MONUMENT = TileTemplate(
    id="monument",
    name="Monument",
    color=TileColor.ORANGE,
    kind=TileKind.VP,
    doors=Doors.from_string("S"),
    cost=2,
    description="Worth more the more orange tiles stand beside it.",
    vp_logic=VPLogic(per_color={TileColor.ORANGE: 2}),
)

SHRINE = TileTemplate(
    id="shrine",
    name="Shrine",
    color=TileColor.ORANGE,
    kind=TileKind.VP,
    doors=Doors.from_string("NES"),
    cost=1,
    description="Pilgrims bring blessings whenever culture spreads.",
    passive_abilities=(
        PassiveAbility(
            id="shrine_blessing",
            trigger_color=TileColor.PURPLE,
            reward=ResourceDelta(vp=1),
            description="+1 VP whenever a purple tile is placed.",
        ),
    ),
    vp_logic=VPLogic(flat=2),
)

GRAND_PLAZA = TileTemplate(
    id="grand_plaza",
    name="Grand Plaza",
    color=TileColor.ORANGE,
    kind=TileKind.VP,
    doors=Doors.from_string("NESW"),
    cost=3,
    description="The heart of a thriving settlement.",
    vp_logic=VPLogic(flat=5, per_color={TileColor.GREEN: 1}),
)


# ============================================================================
# Green - Economy
# ============================================================================

MARKET = TileTemplate(
    id="market",
    name="Market",
    color=TileColor.GREEN,
    kind=TileKind.ECONOMY,
    doors=Doors.from_string("NES"),
    cost=0,
    description="Goods change hands here.",
    actions=(
        TileAction(
            id="trade",
            label="Trade",
            description="Sell materials at a profit.",
            cost=ResourceDelta(materials=1),
            effect=ResourceDelta(money=3),
            max_uses=3,
        ),
        TileAction(
            id="sell_goods",
            label="Sell Goods",
            effect=ResourceDelta(money=4),
        ),
    ),
)

FARM = TileTemplate(
    id="farm",
    name="Farm",
    color=TileColor.GREEN,
    kind=TileKind.ECONOMY,
    doors=Doors.from_string("NS"),
    cost=0,
    description="Fields that feed the expedition.",
    actions=(
        TileAction(
            id="harvest",
            label="Harvest",
            effect=ResourceDelta(energy=4, materials=1),
        ),
    ),
    passive_abilities=(
        PassiveAbility(
            id="farm_surplus",
            trigger_color=TileColor.GREEN,
            reward=ResourceDelta(money=1),
            description="+1 money whenever a green tile is placed.",
        ),
    ),
)

BANK = TileTemplate(
    id="bank",
    name="Bank",
    color=TileColor.GREEN,
    kind=TileKind.ECONOMY,
    doors=Doors.from_string("SW"),
    cost=2,
    description="Rewards those who keep money moving.",
    actions=(
        TileAction(
            id="invest",
            label="Invest",
            description="Buy standing with the merchant class.",
            cost=ResourceDelta(money=3),
            effect=ResourceDelta(reputation=2),
            max_uses=2,
        ),
    ),
    quest=Quest(
        id="bank_ledger",
        label="Balance the Ledger",
        trigger=QuestTrigger.SPEND_MONEY,
        target=3,
        reward=ResourceDelta(money=5, vp=10),
        description="Spend money three times.",
    ),
)

TRADING_POST = TileTemplate(
    id="trading_post",
    name="Trading Post",
    color=TileColor.GREEN,
    kind=TileKind.ECONOMY,
    doors=Doors.from_string("ESW"),
    cost=1,
    description="Travelers swap favors for coin.",
    actions=(
        TileAction(
            id="barter",
            label="Barter",
            cost=ResourceDelta(reputation=1),
            effect=ResourceDelta(money=3, workers=1),
        ),
    ),
)


# ============================================================================
# Blue - Build
# ============================================================================

QUARRY = TileTemplate(
    id="quarry",
    name="Quarry",
    color=TileColor.BLUE,
    kind=TileKind.BUILD,
    doors=Doors.from_string("NSW"),
    cost=0,
    description="Stone for every project.",
    actions=(
        TileAction(
            id="dig",
            label="Dig",
            cost=ResourceDelta(energy=1),
            effect=ResourceDelta(materials=2),
            max_uses=3,
        ),
    ),
)

WORKSHOP = TileTemplate(
    id="workshop",
    name="Workshop",
    color=TileColor.BLUE,
    kind=TileKind.BUILD,
    doors=Doors.from_string("NES"),
    cost=1,
    description="Turns raw materials into willing hands.",
    actions=(
        TileAction(
            id="build_tools",
            label="Build Tools",
            cost=ResourceDelta(materials=2),
            effect=ResourceDelta(workers=2),
        ),
    ),
    quest=Quest(
        id="workshop_orders",
        label="Fill the Orders",
        trigger=QuestTrigger.SPEND_MATERIALS,
        target=3,
        reward=ResourceDelta(workers=2, vp=5),
        description="Spend materials three times.",
    ),
)

SAWMILL = TileTemplate(
    id="sawmill",
    name="Sawmill",
    color=TileColor.BLUE,
    kind=TileKind.BUILD,
    doors=Doors.from_string("ES"),
    cost=1,
    description="Hard work, plenty of lumber.",
    actions=(
        TileAction(
            id="mill",
            label="Mill",
            cost=ResourceDelta(energy=2),
            effect=ResourceDelta(materials=3),
            max_uses=2,
        ),
    ),
)

GUILD_HALL = TileTemplate(
    id="guild_hall",
    name="Guild Hall",
    color=TileColor.BLUE,
    kind=TileKind.BUILD,
    doors=Doors.from_string("NS"),
    cost=2,
    description="Builders gather where builders thrive.",
    passive_abilities=(
        PassiveAbility(
            id="guild_apprentices",
            trigger_color=TileColor.BLUE,
            reward=ResourceDelta(workers=1),
            description="+1 worker whenever a blue tile is placed.",
        ),
    ),
    vp_logic=VPLogic(per_color={TileColor.BLUE: 2}),
)


# ============================================================================
# Purple - Social
# ============================================================================

TAVERN = TileTemplate(
    id="tavern",
    name="Tavern",
    color=TileColor.PURPLE,
    kind=TileKind.SOCIAL,
    doors=Doors.from_string("NESW"),
    cost=0,
    description="A warm meal and a willing crew.",
    actions=(
        TileAction(
            id="hire_hands",
            label="Hire Hands",
            cost=ResourceDelta(money=2),
            effect=ResourceDelta(workers=2),
        ),
        TileAction(
            id="rest",
            label="Rest",
            effect=ResourceDelta(energy=3),
        ),
    ),
)

THEATER = TileTemplate(
    id="theater",
    name="Theater",
    color=TileColor.PURPLE,
    kind=TileKind.SOCIAL,
    doors=Doors.from_string("NS"),
    cost=1,
    description="Performances build a reputation.",
    actions=(
        TileAction(
            id="perform",
            label="Perform",
            cost=ResourceDelta(energy=1),
            effect=ResourceDelta(reputation=2),
            max_uses=3,
        ),
    ),
)

EMBASSY = TileTemplate(
    id="embassy",
    name="Embassy",
    color=TileColor.PURPLE,
    kind=TileKind.SOCIAL,
    doors=Doors.from_string("ESW"),
    cost=2,
    description="Diplomacy pays in prestige.",
    actions=(
        TileAction(
            id="host_envoy",
            label="Host Envoy",
            cost=ResourceDelta(reputation=3),
            effect=ResourceDelta(money=2, vp=4),
        ),
    ),
    quest=Quest(
        id="embassy_treaty",
        label="Sign a Treaty",
        trigger=QuestTrigger.SPEND_REPUTATION,
        target=2,
        reward=ResourceDelta(vp=8),
        description="Spend reputation twice.",
    ),
)

LIBRARY = TileTemplate(
    id="library",
    name="Library",
    color=TileColor.PURPLE,
    kind=TileKind.SOCIAL,
    doors=Doors.from_string("NS"),
    cost=1,
    description="Chronicles every monument raised.",
    passive_abilities=(
        PassiveAbility(
            id="library_chronicle",
            trigger_color=TileColor.ORANGE,
            reward=ResourceDelta(reputation=1, vp=1),
            description="+1 reputation and +1 VP whenever an orange tile is placed.",
        ),
    ),
    vp_logic=VPLogic(flat=2),
)


# ============================================================================
# Deck
# ============================================================================

TILE_DECK: tuple[TileTemplate, ...] = (
    WATCHTOWER,
    MONUMENT,
    SHRINE,
    GRAND_PLAZA,
    MARKET,
    FARM,
    BANK,
    TRADING_POST,
    QUARRY,
    WORKSHOP,
    SAWMILL,
    GUILD_HALL,
    TAVERN,
    THEATER,
    EMBASSY,
    LIBRARY,
)

ALL_TILES: dict[str, TileTemplate] = {
    tile.id: tile for tile in (STARTER_TILE, *TILE_DECK)
}


def get_tile(tile_id: str) -> TileTemplate | None:
    """Get a template by id (starter included)."""
    return ALL_TILES.get(tile_id)


DEFAULT_CATALOG = TileCatalog(starter=STARTER_TILE, deck=TILE_DECK)
