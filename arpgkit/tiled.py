"""Data model for Tiled maps, tilesets and templates, and lookups on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from .color import Color

__all__ = [
    "PropertyType",
    "Property",
    "ObjectType",
    "TileRef",
    "TilesetLink",
    "Object",
    "Frame",
    "Tile",
    "WangColor",
    "WangTile",
    "WangSet",
    "Tileset",
    "TextureRect",
    "LayerType",
    "Layer",
    "Map",
    "Context",
    "find_property_by_name",
    "get_property",
    "get_tile_texture_rect",
    "find_tileset_link_for_tile_gid",
    "find_tile_with_gid",
    "find_object_with_name",
]

_GID_MASK = 0x0FFFFFFF  # the high bits of a stored gid hold flip flags


class PropertyType(Enum):
    STRING = auto()
    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    COLOR = auto()
    FILE = auto()
    OBJECT = auto()


@dataclass
class Property:
    """A custom property; ``value`` has the Python type matching ``type``."""

    name: str = ""
    type: PropertyType = PropertyType.STRING
    value: object = ""


class ObjectType(Enum):
    RECTANGLE = auto()
    ELLIPSE = auto()
    POINT = auto()
    POLYGON = auto()
    POLYLINE = auto()
    TEXT = auto()
    TILE = auto()


@dataclass
class TileRef:
    """A tile reference as stored in a map: a global tile ID plus flip flags."""

    value: int = 0

    @property
    def gid(self) -> int:
        """The global tile ID without the flip flags."""
        return self.value & _GID_MASK


@dataclass
class TilesetLink:
    """Connects a map to a loaded tileset; first_gid 0 means no tileset."""

    first_gid: int = 0
    tileset_id: int = 0


@dataclass
class Object:
    id: int = 0
    name: str = ""
    class_: str = ""
    type: ObjectType = ObjectType.RECTANGLE
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    points: list[tuple[float, float]] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    tile: TileRef = field(default_factory=TileRef)
    tileset: TilesetLink = field(default_factory=TilesetLink)
    template_path: str = ""


@dataclass
class Frame:
    tile_id: int = 0
    duration_ms: int = 0


@dataclass
class Tile:
    class_: str = ""
    properties: list[Property] = field(default_factory=list)
    objects: list[Object] = field(default_factory=list)
    animation: list[Frame] = field(default_factory=list)


@dataclass
class WangColor:
    name: str = ""
    class_: str = ""
    properties: list[Property] = field(default_factory=list)
    tile_id: Optional[int] = None
    probability: float = 0.0
    color: Color = field(default_factory=Color)


@dataclass
class WangTile:
    """Wang color indices for the eight corners and edges; None means unset."""

    COUNT = 8

    tile_id: int = 0
    wang_ids: list[Optional[int]] = field(default_factory=lambda: [None] * WangTile.COUNT)


@dataclass
class WangSet:
    name: str = ""
    class_: str = ""
    properties: list[Property] = field(default_factory=list)
    tile_id: Optional[int] = None
    colors: list[WangColor] = field(default_factory=list)
    tiles: list[WangTile] = field(default_factory=list)


@dataclass
class Tileset:
    path: str = ""
    name: str = ""
    class_: str = ""
    tile_width: int = 0
    tile_height: int = 0
    tile_count: int = 0
    columns: int = 0
    spacing: int = 0
    margin: int = 0
    image_path: str = ""
    properties: list[Property] = field(default_factory=list)
    tiles: list[Tile] = field(default_factory=list)
    wangsets: list[WangSet] = field(default_factory=list)


@dataclass(frozen=True)
class TextureRect:
    """A rectangle in texture pixel coordinates."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


class LayerType(Enum):
    TILE = auto()
    OBJECT = auto()
    IMAGE = auto()
    GROUP = auto()


@dataclass
class Layer:
    type: LayerType = LayerType.TILE
    name: str = ""
    class_: str = ""
    width: int = 0
    height: int = 0
    visible: bool = True
    properties: list[Property] = field(default_factory=list)
    tiles: list[TileRef] = field(default_factory=list)
    objects: list[Object] = field(default_factory=list)


@dataclass
class Map:
    path: str = ""
    class_: str = ""
    width: int = 0
    height: int = 0
    tile_width: int = 0
    tile_height: int = 0
    properties: list[Property] = field(default_factory=list)
    tilesets: list[TilesetLink] = field(default_factory=list)
    layers: list[Layer] = field(default_factory=list)


@dataclass
class Context:
    """Holds everything loaded so far, plus the callbacks used for loading.

    ``file_load_callback`` takes a path and returns the file's contents,
    raising OSError when the file cannot be read. ``debug_message_callback``
    receives diagnostic messages.
    """

    tilesets: list[Tileset] = field(default_factory=list)
    templates: list[Object] = field(default_factory=list)
    maps: list[Map] = field(default_factory=list)
    file_load_callback: Optional[Callable[[str], "str | bytes"]] = None
    debug_message_callback: Optional[Callable[[str], None]] = None


def find_property_by_name(properties: list[Property], name: str) -> Property | None:
    """Return the first property with the given name, or None."""
    return next((prop for prop in properties if prop.name == name), None)


def get_property(properties: list[Property], name: str, property_type: PropertyType) -> object | None:
    """Return the value of a named property if it has the expected type, else None."""
    prop = find_property_by_name(properties, name)
    if prop is None or prop.type is not property_type:
        return None
    return prop.value


def get_tile_texture_rect(tileset: Tileset, tile_id: int) -> TextureRect:
    """Return where a tile lies within its tileset's image."""
    row, column = divmod(tile_id, tileset.columns)
    return TextureRect(
        x=column * (tileset.tile_width + tileset.spacing) + tileset.margin,
        y=row * (tileset.tile_height + tileset.spacing) + tileset.margin,
        w=tileset.tile_width,
        h=tileset.tile_height,
    )


def find_tileset_link_for_tile_gid(tileset_links: list[TilesetLink], tile_gid: int) -> TilesetLink:
    """Return the link with the highest first_gid not above the gid.

    The links must be sorted by first_gid. An empty link is returned if none fits.
    """
    return next(
        (link for link in reversed(tileset_links) if tile_gid >= link.first_gid),
        TilesetLink(),
    )


def find_tile_with_gid(
    tileset_links: list[TilesetLink], tilesets: list[Tileset], tile_gid: int
) -> Tile | None:
    """Return the tile that a global tile ID refers to, or None."""
    if tile_gid == 0:
        return None
    link = find_tileset_link_for_tile_gid(tileset_links, tile_gid)
    if link.first_gid == 0 or not 0 <= link.tileset_id < len(tilesets):
        return None
    tileset = tilesets[link.tileset_id]
    if not link.first_gid <= tile_gid < link.first_gid + tileset.tile_count:
        return None
    return tileset.tiles[tile_gid - link.first_gid]


def find_object_with_name(map: Map, name: str) -> Object | None:
    """Return the first object in any layer with the given non-empty name."""
    if not name:
        return None
    return next(
        (obj for layer in map.layers for obj in layer.objects if obj.name == name),
        None,
    )