"""
Game Session - The authoritative state machine.

LIFECYCLE:
1. Created fresh (starter tile, starting resources) or restored from a save
2. Player intents arrive one at a time: move, select, draft, reroll, claim
3. Each intent validates its preconditions against the current state;
   an invalid intent is a no-op that returns False
4. After every mutation: game-over evaluation, then a save
5. WON and LOST are terminal - every mutating command is rejected

DRAFTING:
    idle --(enter empty cell)--> drafting --(select option)--> idle
    Rerolls stay in drafting. A draft with no affordable option ends the
    game immediately.

Tile placement and the move onto the new tile happen inside one
select_draft_tile call; callers never see a placed tile the player has
not walked onto.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import random
from typing import TYPE_CHECKING

from ..catalog.templates import RESOURCE_NAMES, ResourceDelta, TileAction, TileCatalog, TileTemplate
from ..catalog.tiles import DEFAULT_CATALOG
from ..config import GameConfig
from .drafting import any_affordable, draw_options, is_affordable, reroll_cost
from .effect_resolver import EffectResolver, quest_key, usage_key
from .geometry import Direction, Position, adjacent_position, direction_between, is_adjacent
from .rotation import rotation_for_entry
from .scoring import base_victory_points
from .state import (
    FocusMode,
    GameState,
    GameStatus,
    MessageKind,
    PendingDraft,
    PlacedTile,
)

if TYPE_CHECKING:
    from ..persistence.store import SaveStore


logger = logging.getLogger(__name__)


@dataclass
class ActionUsage:
    """How far an action has been used, as seen from one placed tile."""
    current: int
    maximum: int
    is_complete: bool


@dataclass
class QuestProgress:
    current: int
    target: int
    is_complete: bool


class GameSession:
    """
    One play-through of the game.

    Usage:
        session = GameSession(config=GameConfig(), store=SaveStore(...))

        session.move(Direction.N)          # into an empty cell: starts a draft
        session.select_draft_option(0)     # place the first option and walk onto it
        session.claim_action("harvest")    # act on the tile under the player

        session.victory_points             # derived, recomputed per call
    """

    def __init__(
        self,
        catalog: TileCatalog = DEFAULT_CATALOG,
        config: GameConfig | None = None,
        store: SaveStore | None = None,
        rng: random.Random | None = None,
        state: GameState | None = None,
    ):
        self.catalog = catalog
        self.config = config or GameConfig()
        self.store = store
        self.rng = rng or random.Random()
        self.state = state or GameState.create(self.config, catalog.starter)

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def current_tile(self) -> PlacedTile | None:
        return self.state.tile_at(self.state.player_position)

    @property
    def selected_tile(self) -> PlacedTile | None:
        pos = self.state.selected_position
        if pos is None or not self.state.in_bounds(pos):
            return None
        return self.state.tile_at(pos)

    @property
    def victory_points(self) -> int:
        return base_victory_points(self.state.placed_tiles()) + self.state.passive_vp

    @property
    def tiles_placed(self) -> int:
        return self.state.tiles_placed

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_drafting(self) -> bool:
        return self.state.is_drafting

    @property
    def draft_options(self) -> list[TileTemplate]:
        if self.state.pending_draft is None:
            return []
        return list(self.state.pending_draft.options)

    # =========================================================================
    # Movement
    # =========================================================================

    def move(self, direction: Direction) -> bool:
        """
        Keyboard-style move one cell in `direction`.

        Occupied target: walk onto it. Empty target: start a draft.
        Returns False when nothing happened.
        """
        if not self._accepting_commands():
            return False

        target = adjacent_position(
            self.state.player_position, direction, self.state.width, self.state.height
        )
        if target is None:
            return False

        target_tile = self.state.tile_at(target)
        if not self._can_pass(direction, target_tile):
            logger.debug("Move %s blocked by doors", direction.value)
            return False

        if target_tile is not None:
            self._move_player(target)
            return True
        return self._start_draft(direction, target)

    attempt_move = move

    def can_move(self, direction: Direction) -> bool:
        """Would move(direction) do anything? Used for arrow affordances."""
        if not self._accepting_commands():
            return False
        target = adjacent_position(
            self.state.player_position, direction, self.state.width, self.state.height
        )
        if target is None:
            return False
        return self._can_pass(direction, self.state.tile_at(target))

    def move_to_tile(self, target: Position) -> bool:
        """Pointer-driven move onto an adjacent, already placed tile."""
        if not self._accepting_commands():
            return False
        if not self.state.in_bounds(target):
            return False
        if not is_adjacent(self.state.player_position, target):
            return False

        target_tile = self.state.tile_at(target)
        if target_tile is None:
            return False

        direction = direction_between(self.state.player_position, target)
        if direction is None or not self._can_pass(direction, target_tile):
            return False
        if self.state.resources.energy < 1:
            return False

        self._move_player(target)
        return True

    def select_tile(self, position: Position) -> bool:
        """
        Pointer selection.

        An empty neighbor reachable from the current tile starts a draft;
        an occupied cell becomes the selected (inspected) tile.
        """
        if not self._accepting_commands():
            return False
        if not self.state.in_bounds(position):
            return False

        tile = self.state.tile_at(position)
        if tile is None:
            direction = direction_between(self.state.player_position, position)
            if direction is None or not self._can_pass(direction, None):
                return False
            return self._start_draft(direction, position)

        self.state.selected_position = position
        return True

    def _can_pass(self, direction: Direction, target_tile: PlacedTile | None) -> bool:
        """
        The single movement check, shared by every path.

        With door restriction off, any orthogonal step is allowed. With it
        on, the current tile needs a door toward `direction` and an occupied
        target needs a door back.
        """
        if not self.config.door_restricted:
            return True
        current = self.current_tile
        if current is None or not current.has_door(direction):
            return False
        if target_tile is not None and not target_tile.has_door(direction.opposite):
            return False
        return True

    def _move_player(self, target: Position) -> None:
        """Shared move sequence: pay energy, relocate, evaluate, save."""
        self.state.resources.energy -= 1
        self.state.player_position = target
        self.state.selected_position = target
        self.state.focus_mode = FocusMode.GRID
        self.state.focused_action_index = 0

        tile = self.state.tile_at(target)
        self._log(f"Moved to {tile.template.name} {target}")

        self._check_game_over()
        self.save()

    # =========================================================================
    # Drafting
    # =========================================================================

    def _start_draft(self, direction: Direction, target: Position) -> bool:
        options = draw_options(self.catalog.deck, self.rng, self.config.draft_size)
        self.state.pending_draft = PendingDraft(
            target=target,
            direction=direction,
            options=options,
            reroll_count=0,
        )
        self._log(f"Exploring {direction.value}: choose a tile to place")

        if not any_affordable(options, self.state.resources.workers):
            self._end_no_affordable_options()
        self.save()
        return True

    def reroll_draft(self) -> bool:
        """Pay energy to redraw the options. At most max_rerolls per draft."""
        if not self.state.is_playing or not self.state.is_drafting:
            return False

        pending = self.state.pending_draft
        if pending.reroll_count >= self.config.max_rerolls:
            self._log("No rerolls left for this draft", MessageKind.WARNING)
            return False

        cost = reroll_cost(pending.reroll_count + 1)
        if self.state.resources.energy < cost:
            self._log(f"Not enough energy to reroll (needs {cost})", MessageKind.WARNING)
            return False

        self.state.resources.spend(ResourceDelta(energy=cost))
        pending.options = draw_options(self.catalog.deck, self.rng, self.config.draft_size)
        pending.reroll_count += 1
        self._log(f"Rerolled the draft for {cost} energy")

        if not any_affordable(pending.options, self.state.resources.workers):
            self._end_no_affordable_options()
        else:
            self._check_game_over()
        self.save()
        return True

    def next_reroll_cost(self) -> int | None:
        """Energy cost of the next reroll, or None when no reroll is possible."""
        pending = self.state.pending_draft
        if pending is None or pending.reroll_count >= self.config.max_rerolls:
            return None
        return reroll_cost(pending.reroll_count + 1)

    def draft_option_affordable(self, index: int) -> bool:
        options = self.draft_options
        if not 0 <= index < len(options):
            return False
        return is_affordable(options[index], self.state.resources.workers)

    def select_draft_tile(self, template: TileTemplate) -> bool:
        """
        Resolve the draft with `template`, which must be one of the options.

        Places the tile rotated toward the entry, pays its worker cost,
        fires passive abilities, then walks the player onto it.
        """
        if not self.state.is_playing or not self.state.is_drafting:
            return False

        pending = self.state.pending_draft
        if not any(option.id == template.id for option in pending.options):
            return False
        if not is_affordable(template, self.state.resources.workers):
            self._log(
                f"Not enough workers for {template.name} (needs {template.cost})",
                MessageKind.WARNING,
            )
            return False

        tile = PlacedTile(
            position=pending.target,
            template=template,
            rotation=rotation_for_entry(pending.direction),
        )
        self.state.place_tile(tile)
        if template.cost:
            self.state.resources.spend(ResourceDelta(workers=template.cost))
        self.state.pending_draft = None

        self._resolver().trigger_passives(template.color)
        self._log(f"Placed {template.name} at {tile.position}", MessageKind.SUCCESS)

        self._move_player(tile.position)
        return True

    def select_draft_option(self, index: int) -> bool:
        """select_draft_tile by position in the current options."""
        options = self.draft_options
        if not 0 <= index < len(options):
            return False
        return self.select_draft_tile(options[index])

    def _end_no_affordable_options(self) -> None:
        vp = self.victory_points
        self._finish(
            GameStatus.LOST,
            f"No affordable tiles to draft. Final score: {vp} VP",
        )

    # =========================================================================
    # Actions
    # =========================================================================

    def claim_action(self, action_id: str) -> bool:
        """
        Claim an action on the tile under the player.

        Repeatable actions count uses per template across the grid.
        One-time actions are tracked per placed tile.
        """
        if not self._accepting_commands():
            return False

        tile = self.current_tile
        if tile is None:
            return False
        action = tile.template.get_action(action_id)
        if action is None:
            return False

        if action.is_repeatable:
            key = usage_key(tile, action.id)
            used = self.state.repeatable_usage.get(key, 0)
            if used >= action.max_uses:
                return False
            if not self._check_affordable(action.cost, action.label):
                return False
            self._resolve_action(tile, action)
            self.state.repeatable_usage[key] = used + 1
            tile.action_usage[action.id] = tile.action_usage.get(action.id, 0) + 1
        else:
            if action.id in tile.claimed_actions:
                return False
            if not self._check_affordable(action.cost, action.label):
                return False
            self._resolve_action(tile, action)
            tile.claimed_actions.append(action.id)

        self._check_game_over()
        self.save()
        return True

    def _check_affordable(self, cost: ResourceDelta | None, label: str) -> bool:
        if self.state.resources.can_afford(cost):
            return True
        missing = self.state.resources.missing(cost)
        self._log(f"Cannot afford {label}: need {missing.describe(sign=False)} more", MessageKind.WARNING)
        return False

    def _resolve_action(self, tile: PlacedTile, action: TileAction) -> None:
        resolver = self._resolver()
        cost = action.cost or ResourceDelta()

        resolver.pay(cost)
        resolver.grant(action.effect)

        net = {
            name: action.effect.get(name) - cost.get(name)
            for name in RESOURCE_NAMES
        }
        delta = ResourceDelta(**net, vp=action.effect.vp)
        summary = delta.describe()
        self._log(
            f"{action.label}" + (f": {summary}" if summary else ""),
            MessageKind.SUCCESS,
        )

    # =========================================================================
    # Focus projection
    # =========================================================================

    def set_focus_mode(self, mode: FocusMode) -> None:
        self.state.focus_mode = mode
        if mode is FocusMode.DETAILS:
            self.state.focused_action_index = 0

    def set_focused_action_index(self, index: int) -> None:
        tile = self.current_tile
        if tile is None or not tile.template.actions:
            return
        max_index = len(tile.template.actions) - 1
        self.state.focused_action_index = max(0, min(max_index, index))

    def use_focused_action(self) -> bool:
        """Claim the focused action; drop back to grid focus when nothing is left."""
        tile = self.current_tile
        if tile is None or not tile.template.actions:
            return False
        index = self.state.focused_action_index
        if not 0 <= index < len(tile.template.actions):
            return False

        claimed = self.claim_action(tile.template.actions[index].id)

        has_remaining = any(
            not self.get_action_usage(tile, a.id).is_complete
            and self.state.resources.can_afford(a.cost)
            for a in tile.template.actions
        )
        if not has_remaining:
            self.set_focus_mode(FocusMode.GRID)
        return claimed

    # =========================================================================
    # Queries
    # =========================================================================

    def get_action_usage(self, tile: PlacedTile, action_id: str) -> ActionUsage:
        action = tile.template.get_action(action_id)
        if action is None:
            return ActionUsage(current=0, maximum=1, is_complete=False)
        if action.is_repeatable:
            used = self.state.repeatable_usage.get(usage_key(tile, action_id), 0)
            return ActionUsage(current=used, maximum=action.max_uses, is_complete=used >= action.max_uses)
        claimed = action_id in tile.claimed_actions
        return ActionUsage(current=int(claimed), maximum=1, is_complete=claimed)

    def get_quest_progress(self, tile: PlacedTile) -> QuestProgress | None:
        quest = tile.template.quest
        if quest is None:
            return None
        key = quest_key(tile, quest)
        return QuestProgress(
            current=self.state.quest_progress.get(key, 0),
            target=quest.target,
            is_complete=bool(self.state.completed_quests.get(key)),
        )

    def is_tile_complete(self, tile: PlacedTile) -> bool:
        return all(self.get_action_usage(tile, a.id).is_complete for a in tile.template.actions)

    def has_unused_actions(self, tile: PlacedTile) -> bool:
        return any(not self.get_action_usage(tile, a.id).is_complete for a in tile.template.actions)

    def can_afford(self, cost: ResourceDelta | None) -> bool:
        return self.state.resources.can_afford(cost)

    def missing_resources(self, cost: ResourceDelta | None) -> ResourceDelta:
        return self.state.resources.missing(cost)

    # =========================================================================
    # Game over
    # =========================================================================

    def _check_game_over(self) -> None:
        """First match wins: VP threshold, then energy, then a full board."""
        if not self.state.is_playing:
            return
        vp = self.victory_points
        if vp >= self.config.win_vp_threshold:
            self._finish(GameStatus.WON)
        elif self.state.resources.energy <= 0:
            self._finish(GameStatus.LOST, "Out of energy")
        elif self.state.tiles_placed >= self.state.cell_count:
            self._finish(GameStatus.LOST, "Board full, not enough VP")

    def _finish(self, status: GameStatus, reason: str | None = None) -> None:
        self.state.status = status
        self.state.loss_reason = reason
        self.state.pending_draft = None
        if status is GameStatus.WON:
            self._log(f"Victory with {self.victory_points} VP!", MessageKind.SUCCESS)
        else:
            self._log(f"Game over: {reason}", MessageKind.ERROR)
        logger.info("Game ended: %s (%s)", status.value, reason or "threshold reached")

    # =========================================================================
    # Lifecycle & persistence
    # =========================================================================

    def reset_game(self) -> None:
        """Discard the save and start over with a fresh state."""
        if self.store is not None:
            self.store.clear()
        self.state = GameState.create(self.config, self.catalog.starter)

    def save(self) -> bool:
        """Best-effort save. False if there is no store or the write failed."""
        if self.store is None:
            return False
        return self.store.save(self.state)

    def load(self) -> bool:
        """Replace the state with the saved one. False if there is nothing usable."""
        if self.store is None:
            return False
        loaded = self.store.load(self.catalog)
        if loaded is None:
            return False
        self.state = loaded
        return True

    # =========================================================================
    # Helpers
    # =========================================================================

    def _accepting_commands(self) -> bool:
        return self.state.is_playing and not self.state.is_drafting

    def _resolver(self) -> EffectResolver:
        return EffectResolver(self.state, log_limit=self.config.message_log_limit)

    def _log(self, text: str, kind: MessageKind = MessageKind.INFO) -> None:
        self.state.log(text, kind, limit=self.config.message_log_limit)
