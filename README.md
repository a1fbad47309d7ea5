# thebeast

A small top-down action game. You fight through two stages of enemies. You
can pick up a sword that doubles your damage and collect the health that
fallen enemies drop. The boss waits at the end of the second stage.

## Installing

```
pip install .
```

The game needs `pygame`. It opens a 1280×960 window and reads its images and
sounds from an `assets/` directory under the current working directory, for
example `assets/player.png`, `assets/grass.png` and
`assets/theme_sound.mp3`. When an image or sound cannot be loaded, the game
logs an error and goes on without it.

## Playing

```
thebeast
```

You can also start it with `python -m thebeast.main`. The command takes no
options beyond `--help`.

The title screen has three buttons:

- **Play** shows the intro picture for three seconds, then the stage-one
  banner for two seconds, and then starts the game.
- **Quit** closes the game.
- The sound button turns the background music on or off.

| Key       | Action                                      |
|-----------|---------------------------------------------|
| W A S D   | Move                                        |
| Space     | Attack every enemy closer than 70 pixels    |

- Water cannot be crossed. Grass slows you to half speed. Dirt is open ground.
- An enemy chases you once you come within 200 pixels and hits you when you
  are closer than 70 pixels, at most once a second. Ordinary enemies deal 10
  damage and the boss deals 20.
- Your attacks deal 10 damage, or 20 once you have picked up the sword.
- Each enemy you defeat drops a health pickup worth 10 HP, up to your maximum
  of 100.
- When stage one is clear, a stage-two banner is shown and the second map is
  loaded with new enemies and the boss. Clear it to win.
- The win or lose screen is shown for three seconds, and then the game exits.

## Using the pieces

The modules can also be used on their own:

- `thebeast.vector`: `Vector2D`, a mutable 2D vector with `+`, `-`, `*` by a
  scalar, `/` by a scalar, `magnitude()` and a `(x, y)` string form. Dividing
  by zero returns an unchanged copy.
- `thebeast.ecs`: a minimal entity–component system made of `Component`,
  `Entity` and `Manager`. `Entity.add_component` attaches a component, calls
  its `init()` and returns it. `Entity.get_component` raises
  `ComponentNotFoundError` when no component of the requested type is attached.
  `Manager.refresh()` drops destroyed entities.
- `thebeast.textures`: `TextureManager`, which loads images and draws scaled,
  optionally mirrored regions of them onto a surface.
- `thebeast.tilemap`: `TileMap`, which holds the two level layouts, and
  `Tile` (`WATER`, `GRASS`, `DIRT`, and `OUTSIDE` for points off the grid).
  `tile_at(x, y)` returns the tile under a pixel position.
- `thebeast.components`: `TransformComponent`, `SpriteComponent`,
  `KeyboardController`, `HealthComponent` and `EnemyAIComponent`.
- `thebeast.game`: `Game`, the state machine that ties the pieces together
  (`GameState`, `Item`, `ItemType`). `Game` accepts a `clock` callable that
  returns milliseconds.

```python
from thebeast.vector import Vector2D

v = Vector2D(3, 4)
print(v.magnitude())   # 5.0
print(v / 5)           # (0.6, 0.8)
```

```python
from thebeast.ecs import Component, Manager

class Counter(Component):
    def init(self):
        self.ticks = 0

    def update(self):
        self.ticks += 1

manager = Manager()
counter = manager.add_entity().add_component(Counter())
manager.update()
print(counter.ticks)   # 1
```

## What it does not include

The package includes no images or sounds. Without an `assets/` directory the
game still runs, but it draws only what it can load, and that is mostly
nothing. There is no saving, no score keeping and no settings file.

## Running the tests

```
pip install .[test]
pytest
```