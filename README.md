# arpgkit

Building blocks for a small 2D action RPG that do not depend on any
particular window system or graphics backend. Everything here is plain
Python with no third-party dependencies, and produces data (vertex lists,
draw batches, events) that a renderer of your choice can consume.

## What is inside

- `arpgkit.color` – `Color`, an immutable RGBA value with 8-bit channels
  (out-of-range channels raise `ValueError`), `Color.with_alpha`, and the
  constants `WHITE`, `BLACK`, `RED`, `GREEN`, `BLUE`, `YELLOW`, `MAGENTA`,
  `CYAN` and `TRANSPARENT`.
- `arpgkit.handle` – `Handle`, a generational index (`index`,
  `generation`); `is_valid()` is true for any non-zero generation.
- `arpgkit.timer` – `Timer`, which counts up towards a duration. A new
  timer is not running; `start()` runs it, and `update(dt, loop=False)`
  returns True on the step it finishes or loops. Properties: `running`,
  `finished`, `progress`, `duration`, `time`, `time_left`.
- `arpgkit.window_events` – `Key` (GLFW key codes), `MouseButton`,
  `ModifierKey`, `EventType`, `Event` and a FIFO `EventQueue` whose
  `pop()` returns None when empty.
- `arpgkit.vertices` – `Vector2` (add, subtract, scale, negate) and
  `Vertex` (position, color, texture coordinate).
- `arpgkit.sprites` – `Sprite`, `SpriteFlags`, `Batch` and
  `SpriteRenderer`. `sort()` orders sprites by layer, sorting y, sorting x
  and then render state; `draw()` returns `(vertices, batches)`, merging
  sprites with the same render state into one triangle strip joined by
  degenerate triangles, and keeps running drawing statistics.
- `arpgkit.shapes` – `ShapeRenderer` for debug lines, boxes, polygons (at
  most 8 points) and circles, with lifetimes (`update_lifetimes`) and view
  culling. `draw_all(camera_min, camera_max)` returns `(vertices, batches)`
  of `ShapeBatch` items with a `Primitive`.
- `arpgkit.tiled` – data types for Tiled maps, tilesets, wang sets and
  objects, a `Context` that caches what was loaded, and the lookups
  `find_property_by_name`, `get_property`, `get_tile_texture_rect`,
  `find_tileset_link_for_tile_gid`, `find_tile_with_gid` and
  `find_object_with_name`.
- `arpgkit.tiled_loading` – `load_map_from_file`, `load_tileset_from_file`
  and `load_template_from_file` for Tiled XML, plus `load_color`. Tile
  layers may be CSV, base64 or zlib-compressed base64. Files are read
  through `Context.file_load_callback`; diagnostics go to
  `Context.debug_message_callback`. A file that cannot be read or parsed
  raises `TiledLoadError`; a referenced tileset that fails to load leaves a
  link with `tileset_id` -1.
- `arpgkit.ui_bindings` – `HudBindings`, `TextboxBindings` and a small
  `DataModel` of named variables and event callbacks that tracks which
  variables are dirty.
- `arpgkit.ui_textbox` – `Textbox`, `TextboxSprite`, the built-in presets
  (`create_textbox_presets`, `presets_with_prefix`), RML plain-text helpers
  and `TextboxController`, which types text out, shows options and queues
  further boxes.
- `arpgkit.ui` – `UserInterface`: the menu stack (`MenuType`), HUD
  visibility, the `on_click_*` button handlers, `UIEvent`s for the game and
  a throttled `update`.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Timers:

```python
from arpgkit.timer import Timer

cooldown = Timer(0.5)
cooldown.start()
if cooldown.update(1 / 60):
    print("ready again")
```

Loading a Tiled map:

```python
from pathlib import Path
from arpgkit.tiled import Context, find_object_with_name
from arpgkit.tiled_loading import load_map_from_file

context = Context(file_load_callback=lambda path: Path(path).read_text())
map_id = load_map_from_file(context, "assets/tiled/maps/world.tmx")
world = context.maps[map_id]
spawn = find_object_with_name(world, "player_spawn")
```

Batching sprites:

```python
from arpgkit.sprites import Sprite, SpriteRenderer
from arpgkit.vertices import Vector2

renderer = SpriteRenderer()
renderer.add(Sprite(position=Vector2(16, 32), size=Vector2(16, 16)))
renderer.sort()
vertices, batches = renderer.draw()
```

Menus and the UI event queue:

```python
from arpgkit.ui import MenuType, UserInterface

ui = UserInterface()
ui.push_menu(MenuType.MAIN)
ui.on_click_play()
event = ui.next_event()  # UIEvent(type=UIEventType.PLAY_GAME)
```

## What it does not do

arpgkit is a library, not a game. It opens no window, draws nothing on
screen, talks to no GPU, plays no audio and loads no images or fonts. The
renderers hand back vertices and batches for you to upload; the textbox
controller reports sound event paths and visibility changes through
callbacks you supply; menus and the HUD are tracked as state only. There is
no command-line program, no networking and no settings storage.