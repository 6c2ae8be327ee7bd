# frogjump

A small 2D platformer built on pygame. You steer a ninja frog through levels
made in the Tiled map editor. The frog can run, jump, double-jump, slide down
walls and jump off them. It collects fruit, and it either avoids enemies or
stomps on them.

## Installing

```
pip install .
```

To install the test dependencies as well, add the `test` extra:

```
pip install ".[test]"
```

## Running

```
frogjump
```

The command opens a 1280×720 window. It loads every sprite, sound, font and
map from an `assets/` folder in the current directory. Examples are
`assets/Maps/debug_map.tmj`, `assets/Maps/level_1.tmj`,
`assets/Sounds/Jump.wav` and `assets/Menu/Text/Coolvetica Rg.otf`. If a file
is missing, `frogjump.resources.ResourceError` is raised.

The game opens on the debug map. It loads level 1 in three cases:

- when the last fruit on the map has been collected;
- when the frog's death animation has finished;
- when you press E.

A diamond transition plays over every map change. During the transition the
frog ignores movement input.

Debug drawing is switched on. It outlines entity boxes and colliders, and it
shows the frame time in the top-left corner.

## Controls

| Key        | Action                                 |
|------------|----------------------------------------|
| A / D      | Move left / right                      |
| Left Shift | Run; speed builds up while it is held  |
| Space      | Jump, double jump, wall jump           |
| E          | Load level 1                           |

- Letting go of Space while rising cuts the jump short.
- A jump pressed just before landing is buffered.
- A jump pressed shortly after walking off a ledge still counts.
- To slide down a wall, push into it while falling.
- Pressing jump while sliding, or just after, pushes the frog away from the wall.

## What is in a level

### Fruit

Apples, bananas, cherries, kiwis, melons, oranges, pineapples and
strawberries. Touching a fruit collects it.

### Traps

- **Trampolines** launch the frog high into the air.
- **Fans** blow upwards, or sideways when rotated 90°. A fan blows for 4 seconds and then rests for 3.
- **Arrows** push the frog in the direction they point: up, right, down or left for a rotation of 0, 90, 180 or 270. Each arrow works once.
- **Falling platforms** bob gently in place. Once the frog lands on one, it sags and then drops away.
- **Fire blocks** ignite after the frog stands on them. While they burn, touching the flames kills the frog.

### Enemies

Landing on top of an enemy is a stomp. Any other contact kills the frog.

- **Slimes** die from a single stomp.
- **Angry pigs** need three stomps:
  - the first makes them walk;
  - the second makes them charge;
  - the third finishes them.
- **Turtles** put their spikes out and pull them back in on a timer. Touching a turtle while its spikes are out kills the frog. With the spikes in, a stomp defeats it.

## Map format

Levels are Tiled JSON files (`.tmj`). The game reads these layers:

- **`Ground`**: a tile layer. Every non-zero tile is solid. Tiles come from a 22-column sheet of 16×16 tiles and are drawn at 32×32.
- **`Items`**: objects named `Apple`, `Banana`, `Cherry`, `Kiwi`, `Melon`, `Orange`, `Pineapple` or `Strawberry`.
- **`Traps`**: objects named `Trampoline`, `Fan`, `Arrow`, `FPlatform` or `Fire`.
- **`Characters`**: objects named `Player`, `Slime`, `AngryPig` or `Turtle`.
- **`Background`**: the name of its first object chooses the scrolling backdrop. The names are `BG_BLUE`, `BG_BROWN`, `BG_GRAY`, `BG_GREEN`, `BG_PINK`, `BG_PURPLE` and `BG_YELLOW`.

Objects with any other name are ignored.

## Using it from Python

- **`frogjump.core.main()`** starts the game. `frogjump.core.Game` can also draw onto a surface you supply instead of opening a window.
- **`frogjump.tilemap.TileMap`**:
  - `load_from_file(path)` loads a map file;
  - `get_tile_at(column, row)` returns the ground tile id at a cell, or 0 outside the map.
- **`TileMap(spawner=...)`** places the player, items, traps and enemies through a spawner such as `frogjump.world.World`. Without a spawner, only the ground and background are read.
- **`frogjump.player_physics.PlayerBody`** holds the frog's movement and tile-collision rules. It takes a `Controls` value for each step and needs no window.

## What it does not do

The package does not ship any sprites, sounds, fonts or maps. You have to
provide the `assets/` folder yourself.

The game also lacks the following:

- a menu or level select beyond the E key;
- lives;
- score keeping;
- saving progress.