"""Tile maps read from Tiled JSON files, with the entities they place."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

import pygame

from .background import Background
from .components import FRect, TransformComponent, draw_texture
from .config import MapID, TextureID
from .enemies import AngryPig, Enemy, Slime, Turtle
from .entity import Entity
from .fruit import Fruit, Item
from .resources import ResourceError, get_texture_store
from .traps import Arrow, FallingPlatform, Fan, FanType, Fire, Trampoline, Trap

TILE_SIZE = 32.0

_TERRAIN_COLUMNS = 22
_TEXTURE_TILE_W = 16.0
_TEXTURE_TILE_H = 16.0

_MAP_FILES = {
    MapID.DEBUG: "assets/Maps/debug_map.tmj",
    MapID.LEVEL_1: "assets/Maps/level_1.tmj",
}

_FRUITS = {
    "Banana": TextureID.BANANA,
    "Kiwi": TextureID.KIWI,
    "Cherry": TextureID.CHERRY,
    "Apple": TextureID.APPLE,
    "Orange": TextureID.ORANGE,
    "Pineapple": TextureID.PINEAPPLE,
    "Strawberry": TextureID.STRAWBERRY,
    "Melon": TextureID.MELON,
}

_BACKGROUNDS = {
    "BG_BROWN": TextureID.BG_BROWN,
    "BG_PINK": TextureID.BG_PINK,
    "BG_YELLOW": TextureID.BG_YELLOW,
    "BG_BLUE": TextureID.BG_BLUE,
    "BG_GREEN": TextureID.BG_GREEN,
    "BG_GRAY": TextureID.BG_GRAY,
    "BG_PURPLE": TextureID.BG_PURPLE,
}

_TRAPS: dict[str, type[Trap]] = {
    "Trampoline": Trampoline,
    "Fan": Fan,
    "Arrow": Arrow,
    "FPlatform": FallingPlatform,
    "Fire": Fire,
}

_ENEMIES: dict[str, type[Enemy]] = {
    "Slime": Slime,
    "AngryPig": AngryPig,
    "Turtle": Turtle,
}

T = TypeVar("T", bound=Trap)
E = TypeVar("E", bound=Enemy)

_REQUIRED = object()


class _Spawner(Protocol):
    """What a map needs to place the player, items, traps and enemies."""

    def create_player(self, x: float, y: float) -> Any: ...

    def create_item(self, item: Item, x: float, y: float) -> Item: ...

    def create_trap(self, trap_cls: type[T]) -> T: ...

    def create_enemy(self, enemy_cls: type[E]) -> E: ...


@dataclass
class Tile:
    """A drawable tile: where it goes, which part of which texture it shows."""

    rect: FRect = field(default_factory=lambda: FRect(0.0, 0.0, TILE_SIZE, TILE_SIZE))
    texture_rect: FRect = field(default_factory=FRect)
    texture_id: TextureID = TextureID.SHADOW


def make_tile_from_gid(gid: int) -> Tile:
    """Build the terrain tile for a Tiled global tile id (1-based)."""
    index = gid - 1
    column = index % _TERRAIN_COLUMNS
    row = index // _TERRAIN_COLUMNS
    return Tile(
        rect=FRect(0.0, 0.0, TILE_SIZE, TILE_SIZE),
        texture_rect=FRect(
            column * _TEXTURE_TILE_W, row * _TEXTURE_TILE_H, _TEXTURE_TILE_W, _TEXTURE_TILE_H
        ),
        texture_id=TextureID.TERRAIN,
    )


def fruit_name_to_texture(name: str) -> TextureID | None:
    """Texture of a fruit named in a map, or None if the name is unknown."""
    return _FRUITS.get(name)


def background_name_to_texture(name: str) -> TextureID | None:
    """Texture of a background named in a map, or None if the name is unknown."""
    return _BACKGROUNDS.get(name)


def map_path(map_id: MapID) -> str | None:
    """File that holds a map, or None if the map has no file."""
    return _MAP_FILES.get(map_id)


def _number(obj: dict, key: str, default: Any = _REQUIRED) -> float:
    if key in obj:
        value = obj[key]
    elif default is _REQUIRED:
        raise ResourceError(f"map entry has no {key!r}")
    else:
        return float(default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResourceError(f"map entry {key!r} is not a number: {value!r}")
    return float(value)


def _integer(obj: dict, key: str) -> int:
    value = obj.get(key) if isinstance(obj, dict) else None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ResourceError(f"map entry {key!r} is not an integer: {value!r}")
    return value


def _init_transform(entity: Entity, obj: dict) -> None:
    transform = entity.get_component(TransformComponent)
    if transform is None:
        raise ResourceError(f"{type(entity).__name__} has no transform")
    height = _number(obj, "height")
    transform.rect = FRect(
        _number(obj, "x"), _number(obj, "y") - height, _number(obj, "width"), height
    )
    transform.rotation = _number(obj, "rotation")


class TileMap:
    """A level: its ground grid, the tiles and shadows drawn from it, and its background.

    Loading a file also places its player, items, traps and enemies through
    the spawner; without a spawner only the ground is read.
    """

    def __init__(self, spawner: _Spawner | None = None) -> None:
        self.spawner = spawner
        self.background: Background | None = None
        self.content: list[list[list[int]]] = []
        self.layers: list[list[list[Tile | None]]] = []
        self.shadows: list[Tile] = []
        self.current_map_id: MapID | None = None

    def load(self, map_id: MapID) -> None:
        """Load one of the game's maps."""
        path = map_path(map_id)
        if path is None:
            self._reset()
            self._build()
        else:
            self.load_from_file(path)
        self.current_map_id = map_id

    def load_from_file(self, path: str) -> None:
        """Load a map from a Tiled JSON file."""
        self._reset()
        self.content = self._parse(path)
        self._build()

    def update(self, dt: float) -> None:
        if self.background is not None:
            self.background.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self.background is not None:
            self.background.render(surface)
        store = get_texture_store()
        for shadow in self.shadows:
            draw_texture(surface, store.get(shadow.texture_id), shadow.rect, shadow.texture_rect)
        for layer in self.layers:
            for row in layer:
                for tile in row:
                    if tile is None or tile.texture_id == TextureID.NONE:
                        continue
                    draw_texture(surface, store.get(tile.texture_id), tile.rect, tile.texture_rect)

    def get_tile_at(self, column: int, row: int) -> int:
        """Ground tile id at a grid cell; 0 outside the map or where it is empty."""
        if not self.content or row < 0 or column < 0:
            return 0
        ground = self.content[0]
        if row >= len(ground) or column >= len(ground[row]):
            return 0
        return ground[row][column]

    def _reset(self) -> None:
        if self.background is None:
            self.background = Background()
        self.layers = []
        self.shadows = []
        self.content = []

    def _build(self) -> None:
        self.layers = [self._renderable_layer(layer) for layer in self.content]
        self.shadows = self._build_shadows()

    @staticmethod
    def _renderable_layer(layer: list[list[int]]) -> list[list[Tile | None]]:
        rows: list[list[Tile | None]] = []
        for i, row in enumerate(layer):
            cells: list[Tile | None] = []
            for j, gid in enumerate(row):
                if gid <= 0:
                    cells.append(None)
                    continue
                tile = make_tile_from_gid(gid)
                tile.rect.x = j * TILE_SIZE
                tile.rect.y = i * TILE_SIZE
                cells.append(tile)
            rows.append(cells)
        return rows

    def _build_shadows(self) -> list[Tile]:
        if not self.content or not self.content[0]:
            return []
        return [
            Tile(
                rect=FRect(
                    TILE_SIZE * j - TILE_SIZE / 8.0,
                    TILE_SIZE * i + TILE_SIZE / 8.0,
                    TILE_SIZE,
                    TILE_SIZE,
                ),
                texture_rect=FRect(0.0, 0.0, _TEXTURE_TILE_W, _TEXTURE_TILE_H),
                texture_id=TextureID.SHADOW,
            )
            for i, row in enumerate(self.content[0])
            for j, gid in enumerate(row)
            if gid != 0
        ]

    def _parse(self, path: str) -> list[list[list[int]]]:
        try:
            with open(path, encoding="utf-8") as file:
                root = json.load(file)
        except OSError as exc:
            raise ResourceError(f"cannot open map {path!r}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ResourceError(f"map {path!r} is not valid JSON: {exc}") from exc

        if not isinstance(root, dict) or not isinstance(root.get("layers"), list):
            raise ResourceError(f"map {path!r} has no layers")

        layers: list[list[list[int]]] = []
        for layer in root["layers"]:
            name = layer.get("name", "")
            objects = layer.get("objects") or []
            if name == "Ground":
                grid = self._parse_ground(layer)
                if grid is not None:
                    layers.append(grid)
            elif name == "Items":
                for obj in objects:
                    self._load_item(obj)
            elif name == "Traps":
                for obj in objects:
                    self._load_trap(obj)
            elif name == "Characters":
                for obj in objects:
                    self._load_character(obj)
            elif name == "Background" and objects:
                self._load_background_by_name(objects[0].get("name", ""))
        return layers

    @staticmethod
    def _parse_ground(layer: dict) -> list[list[int]] | None:
        width = _integer(layer, "width")
        height = _integer(layer, "height")
        data = layer.get("data")
        if not isinstance(data, list):
            raise ResourceError("ground layer has no data")
        if len(data) < width * height:
            return None
        cells = data[: width * height]
        if any(isinstance(v, bool) or not isinstance(v, int) for v in cells):
            raise ResourceError("ground layer data holds a non-integer")
        return [cells[r * width:(r + 1) * width] for r in range(height)]

    def _load_item(self, obj: dict) -> None:
        if self.spawner is None:
            return
        texture = fruit_name_to_texture(obj.get("name", ""))
        if texture is None:
            return
        fruit = Fruit()
        fruit.set_type(texture)
        self.spawner.create_item(fruit, _number(obj, "x"), _number(obj, "y"))

    def _load_trap(self, obj: dict) -> None:
        if self.spawner is None:
            return
        trap_cls = _TRAPS.get(obj.get("name", ""))
        if trap_cls is None:
            return
        trap = self.spawner.create_trap(trap_cls)
        if isinstance(trap, Fan):
            if _number(obj, "rotation", 0.0) == 90.0:
                trap.set_type(FanType.HORIZONTAL)
        elif isinstance(trap, Arrow):
            trap.set_direction(_number(obj, "rotation", 0.0))
        _init_transform(trap, obj)

    def _load_character(self, obj: dict) -> None:
        if self.spawner is None:
            return
        name = obj.get("name", "")
        if name == "Player":
            self.spawner.create_player(_number(obj, "x"), _number(obj, "y"))
            return
        enemy_cls = _ENEMIES.get(name)
        if enemy_cls is None:
            return
        enemy = self.spawner.create_enemy(enemy_cls)
        enemy.tile_map = self
        _init_transform(enemy, obj)

    def _load_background_by_name(self, name: str) -> None:
        if self.background is None:
            return
        texture = background_name_to_texture(name)
        if texture is not None:
            self.background.reset(texture)