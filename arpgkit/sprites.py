"""Sorting and batching of textured quads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from .color import WHITE, Color
from .handle import Handle
from .vertices import Vector2, Vertex

__all__ = ["SpriteFlags", "Sprite", "Batch", "SpriteRenderer"]


class SpriteFlags(IntFlag):
    VISIBLE = 1 << 0  # for use in game logic
    FLIP_HORIZONTALLY = 1 << 1
    FLIP_VERTICALLY = 1 << 2
    FLIP_DIAGONALLY = 1 << 3
    ROTATE_90 = FLIP_HORIZONTALLY | FLIP_DIAGONALLY
    ROTATE_180 = FLIP_HORIZONTALLY | FLIP_VERTICALLY
    ROTATE_270 = FLIP_VERTICALLY | FLIP_DIAGONALLY


@dataclass
class Sprite:
    """A textured quad in world space.

    ``position`` is the top-left corner, ``size`` the width and height;
    texture coordinates are normalized.
    """

    vertex_shader: Handle = field(default_factory=Handle)
    fragment_shader: Handle = field(default_factory=Handle)
    texture: Handle = field(default_factory=Handle)
    uniform_buffer: Handle = field(default_factory=Handle)
    uniform_buffer_size: int = 0
    uniform_buffer_offset: int = 0  # must be a multiple of 256
    sorting_point: Vector2 = field(default_factory=Vector2)
    position: Vector2 = field(default_factory=Vector2)
    size: Vector2 = field(default_factory=Vector2)
    tex_position: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    tex_size: Vector2 = field(default_factory=lambda: Vector2(1.0, 1.0))
    color: Color = WHITE
    sorting_layer: int = 0
    flags: SpriteFlags = SpriteFlags.VISIBLE

    def sort_key(self) -> tuple:
        """The draw order: layer, sorting y, sorting x, then render state."""
        return (
            self.sorting_layer,
            self.position.y + self.sorting_point.y,
            self.position.x + self.sorting_point.x,
            *self._render_state(),
        )

    def __lt__(self, other: Sprite) -> bool:
        if not isinstance(other, Sprite):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def _render_state(self) -> tuple:
        return (
            self.vertex_shader,
            self.fragment_shader,
            self.texture,
            self.uniform_buffer,
            self.uniform_buffer_size,
            self.uniform_buffer_offset,
        )


@dataclass
class Batch:
    """A run of sprites sharing render state, drawn as one triangle strip."""

    vertex_shader: Handle = field(default_factory=Handle)
    fragment_shader: Handle = field(default_factory=Handle)
    texture: Handle = field(default_factory=Handle)
    uniform_buffer: Handle = field(default_factory=Handle)
    uniform_buffer_size: int = 0
    uniform_buffer_offset: int = 0
    sprite_count: int = 0
    vertex_count: int = 0
    vertex_offset: int = 0

    def _render_state(self) -> tuple:
        return (
            self.vertex_shader,
            self.fragment_shader,
            self.texture,
            self.uniform_buffer,
            self.uniform_buffer_size,
            self.uniform_buffer_offset,
        )


class SpriteRenderer:
    """Collects sprites for a frame, sorts them and batches them for drawing."""

    def __init__(self) -> None:
        self._sprites: list[Sprite] = []
        self._sprites_drawn = 0
        self._batches_drawn = 0
        self._largest_batch_sprite_count = 0
        self._largest_batch_vertex_count = 0

    def __len__(self) -> int:
        return len(self._sprites)

    def add(self, sprite: Sprite) -> None:
        """Add a sprite to be sorted and drawn later."""
        self._sprites.append(sprite)

    def sort(self) -> None:
        """Stably sort the added sprites by draw order."""
        self._sprites.sort(key=Sprite.sort_key)

    def draw(self) -> tuple[list[Vertex], list[Batch]]:
        """Batch all added sprites and clear them.

        Returns the vertex list and the batches indexing into it. Sprites in
        one batch are joined by degenerate triangles: strips ABCD and EFGH
        become ABCDDEEFGH.
        """
        vertices: list[Vertex] = []
        batches: list[Batch] = []
        if not self._sprites:
            return vertices, batches

        for sprite in self._sprites:
            tl = sprite.position
            br = sprite.position + sprite.size
            tr = Vector2(br.x, tl.y)
            bl = Vector2(tl.x, br.y)

            tex_tl = sprite.tex_position
            tex_br = sprite.tex_position + sprite.tex_size
            tex_tr = Vector2(tex_br.x, tex_tl.y)
            tex_bl = Vector2(tex_tl.x, tex_br.y)

            if sprite.flags & SpriteFlags.FLIP_HORIZONTALLY:
                tex_tl, tex_tr = tex_tr, tex_tl
                tex_bl, tex_br = tex_br, tex_bl
            if sprite.flags & SpriteFlags.FLIP_VERTICALLY:
                tex_tl, tex_bl = tex_bl, tex_tl
                tex_tr, tex_br = tex_br, tex_tr
            if sprite.flags & SpriteFlags.FLIP_DIAGONALLY:
                tex_bl, tex_tr = tex_tr, tex_bl

            state = sprite._render_state()
            if batches and batches[-1]._render_state() == state:
                vertices.append(vertices[-1])
                vertices.append(Vertex(tl, sprite.color, tex_tl))
                batches[-1].vertex_count += 2
            else:
                batches.append(Batch(*state, vertex_offset=len(vertices)))

            vertices.extend(
                (
                    Vertex(tl, sprite.color, tex_tl),
                    Vertex(tr, sprite.color, tex_tr),
                    Vertex(bl, sprite.color, tex_bl),
                    Vertex(br, sprite.color, tex_br),
                )
            )
            batches[-1].sprite_count += 1
            batches[-1].vertex_count += 4

        for batch in batches:
            self._largest_batch_sprite_count = max(self._largest_batch_sprite_count, batch.sprite_count)
            self._largest_batch_vertex_count = max(self._largest_batch_vertex_count, batch.vertex_count)
        self._sprites_drawn += len(self._sprites)
        self._batches_drawn += len(batches)
        self._sprites.clear()
        return vertices, batches

    def clear_drawing_statistics(self) -> None:
        self._sprites_drawn = 0
        self._batches_drawn = 0
        self._largest_batch_sprite_count = 0
        self._largest_batch_vertex_count = 0

    @property
    def sprites_drawn(self) -> int:
        return self._sprites_drawn

    @property
    def batches_drawn(self) -> int:
        return self._batches_drawn

    @property
    def largest_batch_sprite_count(self) -> int:
        return self._largest_batch_sprite_count

    @property
    def largest_batch_vertex_count(self) -> int:
        return self._largest_batch_vertex_count