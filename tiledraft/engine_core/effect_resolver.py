"""
Effect Resolver - Resource flows, quests and passive abilities.

This module handles the side effects that ripple out of a command:
- Paying action costs and granting effects/rewards
- Quest progress on every resource expenditure
- Passive ability propagation on every tile placement

Both quest and passive scans walk the entire grid. The grid is small
and bounded, so a full scan per event is fine.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..catalog.templates import PassiveAbility, Quest, ResourceDelta, TileColor
from .state import GameState, MessageKind, PlacedTile


def quest_key(tile: PlacedTile, quest: Quest) -> str:
    """Ledger key for a quest: per placed instance, per quest id."""
    return f"{tile.instance_key}:{quest.id}"


def usage_key(tile: PlacedTile, action_id: str) -> str:
    """Ledger key for a repeatable action: per template, shared by all copies."""
    return f"{tile.template.id}:{action_id}"


@dataclass
class EffectResolver:
    """
    Applies resource effects to a GameState.

    Does not check game status or preconditions - callers validate first.
    """
    state: GameState
    log_limit: int = 100

    def _log(self, text: str, kind: MessageKind = MessageKind.INFO) -> None:
        self.state.log(text, kind, limit=self.log_limit)

    def grant(self, reward: ResourceDelta) -> None:
        """Add resources and bank any flat VP in the passive-VP accumulator."""
        self.state.resources.gain(reward)
        if reward.vp:
            self.state.passive_vp += reward.vp

    def pay(self, cost: ResourceDelta) -> list[Quest]:
        """
        Spend `cost` and advance matching quests.

        Returns the quests completed by this expenditure.
        """
        self.state.resources.spend(cost)
        return self.advance_quests(cost)

    def advance_quests(self, spent: ResourceDelta) -> list[Quest]:
        """
        Advance every open quest whose trigger resource was spent.

        One expenditure moves a matching quest forward by exactly one step,
        whatever the amount spent.
        """
        completed: list[Quest] = []
        for tile in self.state.placed_tiles():
            quest = tile.template.quest
            if quest is None:
                continue
            key = quest_key(tile, quest)
            if self.state.completed_quests.get(key):
                continue
            if spent.get(quest.trigger.resource) <= 0:
                continue

            progress = self.state.quest_progress.get(key, 0) + 1
            self.state.quest_progress[key] = progress
            if progress >= quest.target:
                self._complete_quest(tile, quest, key)
                completed.append(quest)
        return completed

    def _complete_quest(self, tile: PlacedTile, quest: Quest, key: str) -> None:
        self.state.completed_quests[key] = True
        self.grant(quest.reward)
        reward_text = quest.reward.describe()
        self._log(
            f"Quest complete: {tile.template.name} - {quest.label}"
            + (f" ({reward_text})" if reward_text else ""),
            MessageKind.SUCCESS,
        )

    def trigger_passives(self, placed_color: TileColor) -> list[tuple[PlacedTile, PassiveAbility]]:
        """
        Fire every passive ability keyed on `placed_color`.

        Runs after the new tile is on the grid, so a tile can trigger its
        own passive.
        """
        fired: list[tuple[PlacedTile, PassiveAbility]] = []
        for tile in self.state.placed_tiles():
            for passive in tile.template.passive_abilities:
                if passive.trigger_color is not placed_color:
                    continue
                self.grant(passive.reward)
                fired.append((tile, passive))
                reward_text = passive.reward.describe()
                self._log(
                    f"{tile.template.name} triggered by {placed_color.value} tile"
                    + (f": {reward_text}" if reward_text else ""),
                    MessageKind.SUCCESS,
                )
        return fired
