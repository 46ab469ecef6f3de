# steerdungeon

A small, dependency-free toolkit for a top-down monster-chasing simulation:

- **Vector maths** (`steerdungeon.vecmath`): immutable `Vec2` and `IVec2`, plus
  `safeinv`, `length`, `length_sq`, `normalize`, `truncate`, `sqr`, `dist_sq` and `dist`.
- **Dungeon generation** (`steerdungeon.dungeon`): a `Dungeon` tile grid indexed by
  `(x, y)` (`#` is wall, a space is floor) with `filled`, `from_rows`, `rows` and
  `render`, and the generators:
  - `gen_drunk_dungeon`: drunkard's walks that wrap around the map edges, each start
    joined to its nearest later start;
  - `gen_clamped_drunk_dungeon`: four walks kept off the border, all starts joined;
  - `gen_inv_dungeon` and `gen_inv_room_dungeon`: growth outward from a seed room,
    the latter stamping small 5x5 room shapes;
  - `gen_cellular_dungeon` and `run_cellular`: random noise smoothed by a cellular
    automaton (`run_cellular` returns a new dungeon and stops early when nothing changes).

  `find_walkable_tile` picks a random floor tile (raising `ValueError` if there is
  none) and `is_tile_walkable` tests a tile position.
- **Pathfinding** (`steerdungeon.pathfinder`): grid A* (`find_path_a_star`, optionally
  limited to a rectangle, returning an empty list when there is no path) and
  `prebuild_map`, which splits the map into square super tiles, finds the
  `PathPortal` openings between neighbours and links portals of the same tile with
  `PortalConnection` scores, returned as `DungeonPortals`.
- **Game objects** (`steerdungeon.objects`): `Entity`, `Color`, `Actions`,
  `MonsterSpawner`, and the factories `create_monster` and `create_player`.
- **Steering** (`steerdungeon.steering`): `create_seeker`, `create_pursuer`,
  `create_evader`, `create_fleer` (or `create_steer_beh` with a `SteerType`), which add
  seek/pursue/evade/flee together with separation, alignment and cohesion
  (`Behaviour` tags). `update_steering(entities, dt)` runs one tick.
- **Simulation** (`steerdungeon.game`): `Game` holds the entities, a spawner and a
  `Camera`. Without a dungeon it is an open arena with four starting monsters and a
  spawner that keeps adding monsters around the player; with a dungeon the player
  starts on a random floor tile and the portal graph is built into `game.portals`.
  `Game.update(dt, player_input)` moves the camera, the player (from the held keys
  `"left"`, `"right"`, `"up"`, `"down"`) and every entity, then spawns and steers.

## Installing

```
pip install .
```

## Generating a dungeon from the command line

```
steerdungeon --help
steerdungeon cellular --width 60 --height 40 --seed 7
steerdungeon rooms --seed 1 --smooth 2
```

The `steerdungeon` command takes a kind (`drunk`, the default, `inv`, `cellular` or
`rooms`), `--width` and `--height` (130 each by default), an optional `--seed`, and
`--smooth N` to run N extra cellular smoothing iterations. It prints the map as
text, one row per line. The same presets are available from Python as
`steerdungeon.cli.generate(kind, width, height, rng)`.

## Using it from Python

```python
import random

from steerdungeon.dungeon import gen_cellular_dungeon, find_walkable_tile
from steerdungeon.pathfinder import find_path_a_star, prebuild_map
from steerdungeon.game import Game

rng = random.Random(42)
dungeon = gen_cellular_dungeon(50, 50, 0.45, 10, rng)
print(dungeon.render())

start = find_walkable_tile(dungeon, rng)
portals = prebuild_map(dungeon, 10)
print(len(portals.portals), "portals")

game = Game(None, rng)          # open arena with monsters and a spawner
game.update(1 / 60, ["left"])
print(game.player.position, len(game.entities))
```

Every generator and `Game` take a `random.Random` instance, so a fixed seed gives a
repeatable result.

## What it does not do

There is no window, drawing or keyboard handling: entities carry a colour and a
texture name, and `Game` exposes a `Camera`, but nothing is rendered. Input is
passed to `Game.update` as key names. Maps are only shown as text by
`Dungeon.render` and the `steerdungeon` command.

## Running the tests

```
pip install .[test]
pytest
```