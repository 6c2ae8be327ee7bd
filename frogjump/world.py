"""The world: the current map and everything that lives on it."""

from __future__ import annotations

from typing import TypeVar

import pygame

from .components import TransformComponent
from .config import MapID
from .effects import DisappearingEffect, Effect, TransitionEffect
from .enemies import Enemy
from .fruit import Item
from .player import Player
from .sound import SoundID, get_sound_manager
from .tilemap import TileMap
from .traps import Trap

T = TypeVar("T", bound=Trap)
E = TypeVar("E", bound=Enemy)


def _transform(entity) -> TransformComponent:
    transform = entity.get_component(TransformComponent)
    if transform is None:
        raise ValueError(f"{type(entity).__name__} has no transform")
    return transform


class World:
    """Holds the map, the player, items, traps, enemies and effects."""

    def __init__(self) -> None:
        self.tile_map = TileMap(spawner=self)
        self.player: Player | None = None
        self.transition = TransitionEffect()
        self.items: list[Item] = []
        self.traps: list[Trap] = []
        self.enemies: list[Enemy] = []
        self.effects: list[Effect] = []

    def init(self) -> None:
        """Start with a transition into the debug map."""
        self.transition.reset()
        self.tile_map.load(MapID.DEBUG)

    def load_map(self, map_id: MapID) -> None:
        """Drop everything and load another map behind a transition."""
        self.transition.reset()
        self.items.clear()
        self.traps.clear()
        self.effects.clear()
        self.enemies.clear()
        self.player = None
        self.tile_map.load(map_id)

    def update(self, dt: float) -> None:
        self.tile_map.update(dt)

        for item in list(self.items):
            item.update(dt)

        for trap in list(self.traps):
            trap.update(dt)
        for trap in [t for t in self.traps if t.expired]:
            self.destroy_trap(trap, -1)

        for enemy in list(self.enemies):
            enemy.update(dt)
        for enemy in [e for e in self.enemies if e.expired]:
            self.destroy_enemy(enemy, -1)

        self._update_effects(dt)

        if self.player is not None:
            self.player.update(dt)
            if self.player.expired:
                self.load_map(MapID.LEVEL_1)

        if not self.items:
            self.load_map(MapID.LEVEL_1)

    def render(self, surface: pygame.Surface) -> None:
        self.tile_map.render(surface)
        for item in self.items:
            item.render(surface)
        for trap in self.traps:
            trap.render(surface)
        for enemy in self.enemies:
            enemy.render(surface)
        for effect in self.effects:
            effect.render(surface)
        if self.player is not None:
            self.player.render(surface)
        self.transition.render(surface)

    def create_player(self, x: float, y: float) -> Player:
        """Create the player with its bottom-left corner at (x, y)."""
        player = Player(self)
        transform = _transform(player)
        transform.move(x, y - transform.rect.h)
        self.player = player
        return player

    def create_item(self, item: Item, x: float, y: float) -> Item:
        """Add an item with its bottom-left corner at (x, y)."""
        transform = _transform(item)
        transform.move(x, y - transform.rect.h)
        self.items.append(item)
        return item

    def create_trap(self, trap_cls: type[T]) -> T:
        trap = trap_cls()
        self.traps.append(trap)
        return trap

    def create_enemy(self, enemy_cls: type[E]) -> E:
        enemy = enemy_cls()
        enemy.tile_map = self.tile_map
        self.enemies.append(enemy)
        return enemy

    def destroy_item(self, item: Item, index: int) -> None:
        """Remove a collected item, leaving a puff where it was."""
        rect = _transform(item).rect
        effect = DisappearingEffect(rect.x + rect.w / 2.0, rect.y + rect.h / 2.0)
        effect_transform = _transform(effect)
        effect_transform.move(-effect_transform.rect.w / 2.0, -effect_transform.rect.h / 2.0)
        self.effects.append(effect)
        get_sound_manager().play_sound(SoundID.COLLECT_FRUIT)
        del self.items[index]

    def destroy_trap(self, trap: Trap, index: int = -1) -> None:
        """Remove a trap by position when index is above 0, otherwise by identity."""
        if index > 0:
            del self.traps[index]
        else:
            self.traps.remove(trap)

    def destroy_enemy(self, enemy: Enemy, index: int = -1) -> None:
        """Remove an enemy by position when index is above 0, otherwise by identity."""
        if index > 0:
            del self.enemies[index]
        else:
            self.enemies.remove(enemy)

    def is_transitioning(self) -> bool:
        return not self.transition.ended()

    def _update_effects(self, dt: float) -> None:
        self.transition.update(dt)
        remaining: list[Effect] = []
        for effect in self.effects:
            if effect.ended():
                continue
            effect.update(dt)
            remaining.append(effect)
        self.effects = remaining