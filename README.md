# thehunter

A small 3D arcade game. Prey hop through a forest of trees and bushes, and
you have to shoot them before they run off the edge of the field. Each
escaped prey costs a life, after which you are immune to further losses for
a short while. Once your kills exceed ten times the current level, the level
goes up and the prey get faster. Once your kills exceed the life-up
threshold (50 at the start), you gain an extra life and the threshold
doubles. When the last life is lost, play stops and the kill count is reset;
press `r` to start a new game.

## Installing

```
pip install .
```

## Playing

```
thehunter
```

Options:

- `--textures DIR`: directory holding `bark.bmp` and `grass.bmp`
  (default: `bmp`, relative to the current working directory). Textures must
  be uncompressed 24- or 32-bit BMP files.
- `--seed N`: seed for the random placement of trees, bushes and prey.

The game starts paused; press `g` to begin.

### Keys

| Key       | Action                                             |
|-----------|----------------------------------------------------|
| `g`       | start or resume the game                           |
| `t`       | pause                                              |
| `r`       | restart, printing the score and level              |
| `q`       | shoot the upper left quarter                       |
| `w`       | shoot the upper right quarter                      |
| `a`       | shoot the lower left quarter                       |
| `s`       | shoot the lower right quarter                      |
| space     | shoot everything (long cooldown)                   |
| `n` / `m` | slow the prey down / speed them up by 10 %         |
| Esc       | quit, printing the score and level                 |

Quarter shots share a short cooldown; the space shot has its own, longer one.
Shots only count while the game is running.

## Using the pieces

The game logic is independent of the window and can be driven directly:

```python
import random
from thehunter.game import HunterGame, Quadrant

game = HunterGame(random.Random(1))
game.press("g")
game.tick()
hits = game.kill(Quadrant.ALL)
print(hits, game.prey_killed, game.level, game.lives)
```

- `thehunter.image`: `read_image(path)` and `parse_image(data)` decode a BMP
  into an `Image` with pixels in RGB (or RGBA) order, raising `BitmapError`
  on data they cannot decode; `new_image(width, height)` makes a blank one.
- `thehunter.scene`: a `Canvas` records `Face` polygons and `Solid` spheres
  and cubes under a transform stack; `draw_tree`, `draw_bush`, `draw_prey`,
  `draw_heart`, `draw_floor` and `draw_cube_with_texture` describe the models.
- `thehunter.game`: `HunterGame` holds the state and rules, and
  `build_scene` draws it onto a `Canvas`.
- `thehunter.app`: `Renderer` draws a game onto a pygame surface, `project`
  maps a world point to screen coordinates, `load_textures` reads the two
  bitmaps, and `main` runs the window.

## Limitations

Rendering is a simple software painter's algorithm in pygame: objects are
sorted far to near and drawn as flat-coloured polygons, ellipses and
rectangles. There is no lighting, and textures are not mapped onto surfaces;
each textured face is filled with its texture's average colour.

## Running the tests

```
pip install .[test]
pytest
```