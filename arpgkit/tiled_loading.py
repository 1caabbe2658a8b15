"""Loading of Tiled maps (.tmx), tilesets (.tsx) and object templates (.tx).

Files are read through ``Context.file_load_callback`` and diagnostics go to
``Context.debug_message_callback``. Everything loaded is cached in the
context by normalized path, and the loaders return indices into it.
"""

from __future__ import annotations

import copy
import dataclasses
import posixpath
import re
import string
import struct
import xml.etree.ElementTree as ET
import zlib
from typing import Optional

from .color import Color
from .tiled import (
    Context,
    Frame,
    Layer,
    LayerType,
    Map,
    Object,
    ObjectType,
    Property,
    PropertyType,
    Tile,
    TileRef,
    TilesetLink,
    Tileset,
    WangColor,
    WangSet,
    WangTile,
    find_tileset_link_for_tile_gid,
)

__all__ = [
    "TiledLoadError",
    "load_color",
    "load_tileset_from_file",
    "load_template_from_file",
    "load_map_from_file",
]

_INVALID_ID = -1  # tileset id stored in a link whose tileset failed to load

_FLOAT = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_FLOAT_RE = re.compile(r"\s*" + _FLOAT)
_POINT_RE = re.compile(rf"\s*({_FLOAT}),\s*({_FLOAT})")
_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|[0-9]*)")
_HEX_RE = re.compile(r"\s*[+-]?(?:0[xX])?([0-9a-fA-F]*)")
_UINT_RE = re.compile(r"\s*\+?(\d+)")
_CSV_NUMBER_RE = re.compile(r"\d+")

_BASE64_VALUES = {
    char: value
    for value, char in enumerate(string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/")
}

_LAYER_TYPES = {
    "layer": LayerType.TILE,
    "objectgroup": LayerType.OBJECT,
    "imagelayer": LayerType.IMAGE,
    "group": LayerType.GROUP,
}

_UINT32_MAX = 0xFFFFFFFF


class TiledLoadError(Exception):
    """Raised when a Tiled file cannot be read, parsed or resolved."""


# ---------------------------------------------------------------------------
# Attribute parsing


def _parse_integer(raw: Optional[str], lo: int, hi: int) -> int:
    if raw is None:
        return 0
    sign, digits = _INT_RE.match(raw).groups()
    if not digits:
        return 0
    value = int(digits, 16) if digits[:2].lower() == "0x" else int(digits)
    if sign == "-":
        value = -value
    return min(max(value, lo), hi)


def _as_int(raw: Optional[str]) -> int:
    return _parse_integer(raw, -(2**31), 2**31 - 1)


def _as_uint(raw: Optional[str]) -> int:
    return _parse_integer(raw, 0, _UINT32_MAX)


def _as_float(raw: Optional[str]) -> float:
    if raw is None:
        return 0.0
    match = _FLOAT_RE.match(raw)
    return float(match.group()) if match else 0.0


def _as_bool(raw: Optional[str], default: bool = False) -> bool:
    if raw is None:
        return default
    return raw[:1] in ("1", "t", "T", "y", "Y")


def _optional_tile_id(raw: Optional[str]) -> Optional[int]:
    value = _as_int(raw)
    return None if value < 0 else value


def load_color(text: Optional[str]) -> Color:
    """Parse a color written as "#RRGGBB" or "#AARRGGBB".

    Shorter strings fill the channels from blue upwards; alpha stays opaque
    unless eight digits are given.
    """
    default = Color(0, 0, 0, 255)
    if not text:
        return default
    if text.startswith("#"):
        text = text[1:]
    length = len(text)
    if length < 2:
        return default
    digits = _HEX_RE.match(text).group(1)
    value = min(int(digits, 16), _UINT32_MAX) if digits else 0
    b = value & 0xFF
    if length < 4:
        return Color(0, 0, b, 255)
    g = (value >> 8) & 0xFF
    if length < 6:
        return Color(0, g, b, 255)
    r = (value >> 16) & 0xFF
    if length < 8:
        return Color(r, g, b, 255)
    return Color(r, g, b, (value >> 24) & 0xFF)


# ---------------------------------------------------------------------------
# Shared helpers


def _report(context: Context, message: str) -> None:
    if context.debug_message_callback is not None:
        context.debug_message_callback(message)


def _fail(context: Context, message: str) -> TiledLoadError:
    _report(context, message)
    return TiledLoadError(message)


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    return posixpath.normpath(path) if path else ""


def _resolve(base_file: str, relative: str) -> str:
    return _normalize(posixpath.join(posixpath.dirname(base_file), relative))


def _read_document(context: Context, path: str, kind: str, root_tag: str) -> ET.Element:
    if context.file_load_callback is None:
        raise _fail(context, f"File load callback is not set: {path}")
    try:
        contents = context.file_load_callback(path)
    except OSError as exc:
        raise _fail(context, f"Failed to load {kind}: {path}") from exc
    try:
        root = ET.fromstring(contents)
    except ET.ParseError as exc:
        raise _fail(context, f"Failed to parse {kind}: {path}") from exc
    return root if root.tag == root_tag else ET.Element(root_tag)


def _grandchildren(node: ET.Element, child_tag: str, tag: str) -> list[ET.Element]:
    child = node.find(child_tag)
    return child.findall(tag) if child is not None else []


def _load_property(node: ET.Element) -> Property:
    name = node.get("name", "")
    kind = node.get("type", "string")
    raw = node.get("value")
    text = raw or ""
    loaders = {
        "string": (PropertyType.STRING, lambda: text),
        "int": (PropertyType.INT, lambda: _as_int(raw)),
        "float": (PropertyType.FLOAT, lambda: _as_float(raw)),
        "bool": (PropertyType.BOOL, lambda: _as_bool(raw)),
        "color": (PropertyType.COLOR, lambda: load_color(text)),
        "file": (PropertyType.FILE, lambda: text),
        "object": (PropertyType.OBJECT, lambda: _as_uint(raw)),
    }
    if kind not in loaders:
        # Class-typed and unknown properties keep only their name.
        return Property(name=name)
    prop_type, load_value = loaders[kind]
    return Property(name=name, type=prop_type, value=load_value())


def _load_properties(node: ET.Element, properties: list[Property]) -> None:
    properties.extend(_load_property(prop) for prop in _grandchildren(node, "properties", "property"))


def _load_points(node: ET.Element) -> list[tuple[float, float]]:
    """Parse a points attribute such as "0,0 0,16 16,16"."""
    text = node.get("points", "")
    points: list[tuple[float, float]] = []
    pos = 0
    while pos < len(text):
        match = _POINT_RE.match(text, pos)
        if match is None:
            break
        points.append((float(match.group(1)), float(match.group(2))))
        pos = match.end()
        if text.startswith(" ", pos):
            pos += 1
    return points


def _load_object(node: ET.Element, obj: Object) -> None:
    _load_properties(node, obj.properties)
    attributes = node.attrib
    if "id" in attributes:
        obj.id = _as_uint(attributes["id"])
    if "name" in attributes:
        obj.name = attributes["name"]
    if "type" in attributes:  # Tiled stores the class in "type" here
        obj.class_ = attributes["type"]
    if "x" in attributes:
        obj.x = _as_float(attributes["x"])
    if "y" in attributes:
        obj.y = _as_float(attributes["y"])
    if "width" in attributes:
        obj.width = _as_float(attributes["width"])
    if "height" in attributes:
        obj.height = _as_float(attributes["height"])

    if node.find("ellipse") is not None:
        obj.type = ObjectType.ELLIPSE
    elif node.find("point") is not None:
        obj.type = ObjectType.POINT
    elif (polygon := node.find("polygon")) is not None:
        obj.type = ObjectType.POLYGON
        obj.points.extend(_load_points(polygon))
    elif (polyline := node.find("polyline")) is not None:
        obj.type = ObjectType.POLYLINE
        obj.points.extend(_load_points(polyline))
    elif node.find("text") is not None:
        obj.type = ObjectType.TEXT

    if "gid" in attributes:
        obj.type = ObjectType.TILE
        obj.tile = TileRef(_as_uint(attributes["gid"]))


# ---------------------------------------------------------------------------
# Tilesets


def _parse_wang_ids(text: str) -> list[Optional[int]]:
    """Parse the comma-separated wang IDs of a tile; 0 means unset, n means color n-1."""
    wang_ids: list[Optional[int]] = [None] * WangTile.COUNT
    pos = 0
    for slot in range(WangTile.COUNT):
        if pos >= len(text):
            break
        match = _UINT_RE.match(text, pos)
        if match is not None:
            value = int(match.group(1))
            if value:
                wang_ids[slot] = value - 1
            pos = match.end()
        while pos < len(text) and text[pos] not in string.digits:
            pos += 1
    return wang_ids


def _load_wangset(node: ET.Element) -> WangSet:
    wangset = WangSet(
        name=node.get("name", ""),
        class_=node.get("class", ""),
        tile_id=_optional_tile_id(node.get("tile")),
    )
    _load_properties(node, wangset.properties)
    for color_node in node.findall("wangcolor"):
        wangcolor = WangColor(
            name=color_node.get("name", ""),
            class_=color_node.get("class", ""),
            tile_id=_optional_tile_id(color_node.get("tile")),
            probability=_as_float(color_node.get("probability")),
            color=load_color(color_node.get("color", "")),
        )
        _load_properties(color_node, wangcolor.properties)
        wangset.colors.append(wangcolor)
    for tile_node in node.findall("wangtile"):
        wangset.tiles.append(
            WangTile(
                tile_id=_as_uint(tile_node.get("tileid")),
                wang_ids=_parse_wang_ids(tile_node.get("wangid", "")),
            )
        )
    return wangset


def load_tileset_from_file(context: Context, path: str) -> int:
    """Load a tileset, or find it already loaded; return its index in ``context.tilesets``."""
    normalized = _normalize(path)
    for tileset_id, tileset in enumerate(context.tilesets):
        if tileset.path == normalized:
            return tileset_id

    node = _read_document(context, normalized, "tileset file", "tileset")
    image = node.find("image")
    image_source = image.get("source", "") if image is not None else ""

    tileset = Tileset(
        path=normalized,
        name=node.get("name", ""),
        class_=node.get("class", ""),
        tile_width=_as_uint(node.get("tilewidth")),
        tile_height=_as_uint(node.get("tileheight")),
        tile_count=_as_uint(node.get("tilecount")),
        columns=_as_uint(node.get("columns")),
        spacing=_as_uint(node.get("spacing")),
        margin=_as_uint(node.get("margin")),
        image_path=_resolve(normalized, image_source),
    )
    _load_properties(node, tileset.properties)
    tileset.tiles = [Tile() for _ in range(tileset.tile_count)]

    for tile_node in node.findall("tile"):
        tile_id = _as_uint(tile_node.get("id"))
        if tile_id >= tileset.tile_count:
            _report(context, f"Invalid tile ID in tileset: {tile_id}")
            continue
        tile = tileset.tiles[tile_id]
        tile.class_ = tile_node.get("type", "")  # Tiled stores the class in "type" here
        _load_properties(tile_node, tile.properties)
        for object_node in _grandchildren(tile_node, "objectgroup", "object"):
            obj = Object()
            _load_object(object_node, obj)
            tile.objects.append(obj)
        tile.animation.extend(
            Frame(tile_id=_as_uint(frame.get("tileid")), duration_ms=_as_uint(frame.get("duration")))
            for frame in _grandchildren(tile_node, "animation", "frame")
        )

    tileset.wangsets.extend(_load_wangset(wangset) for wangset in _grandchildren(node, "wangsets", "wangset"))

    context.tilesets.append(tileset)
    return len(context.tilesets) - 1


# ---------------------------------------------------------------------------
# Templates


def load_template_from_file(context: Context, path: str) -> int:
    """Load an object template, or find it already loaded; return its index in ``context.templates``."""
    normalized = _normalize(path)
    for template_id, template in enumerate(context.templates):
        if template.template_path == normalized:
            return template_id

    node = _read_document(context, normalized, "Tiled template", "template")
    object_node = node.find("object")
    obj = Object(template_path=normalized)
    _load_object(object_node if object_node is not None else ET.Element("object"), obj)

    tileset_node = node.find("tileset")
    if tileset_node is not None:
        source = tileset_node.get("source")
        if source is None:
            raise _fail(context, f"Tileset source attribute is missing: {obj.template_path}")
        obj.tileset.first_gid = _as_uint(tileset_node.get("firstgid"))
        obj.tileset.tileset_id = _load_linked_tileset(context, _resolve(obj.template_path, source))

    context.templates.append(obj)
    return len(context.templates) - 1


def _load_linked_tileset(context: Context, path: str) -> int:
    try:
        return load_tileset_from_file(context, path)
    except TiledLoadError:
        return _INVALID_ID


# ---------------------------------------------------------------------------
# Maps


def _report_layer(context: Context, map: Map, layer: Layer, headline: str) -> None:
    _report(context, f"{headline}\n  Map: {map.path}\n  Layer: {layer.name}")


def _base64_decode(text: str) -> bytes:
    """Decode base64 in groups of four; padding and unknown characters count as zero."""
    out = bytearray()
    whole = len(text) - len(text) % 4
    for group in (text[start : start + 4] for start in range(0, whole, 4)):
        a, b, c, d = (_BASE64_VALUES.get(char, 0) for char in group)
        out += bytes(((a << 2 | b >> 4) & 0xFF, (b << 4 | c >> 2) & 0xFF, (c << 6 | d) & 0xFF))
    return bytes(out)


def _fill_tiles(layer: Layer, data: bytes) -> None:
    count = min(len(data) // 4, len(layer.tiles))
    for tile, value in zip(layer.tiles, struct.unpack_from(f"<{count}I", data)):
        tile.value = value


def _load_tile_data(context: Context, map: Map, layer: Layer, node: ET.Element) -> None:
    data_node = node.find("data")
    if data_node is None:
        data_node = ET.Element("data")
    encoding = data_node.get("encoding", "")
    text = data_node.text or ""
    layer.tiles = [TileRef() for _ in range(layer.width * layer.height)]

    if encoding == "csv":
        for tile, match in zip(layer.tiles, _CSV_NUMBER_RE.finditer(text)):
            tile.value = int(match.group()) & _UINT32_MAX
        return

    if encoding != "base64":
        _report_layer(context, map, layer, f"Unknown Tiled map tile layer encoding: {encoding}")
        return

    encoded = text.strip()
    if len(encoded) % 4 != 0:
        _report_layer(context, map, layer, f"Invalid Base64 string length: {len(encoded)}")
        return
    decoded = _base64_decode(encoded)

    compression = data_node.get("compression", "")
    needed = len(layer.tiles) * 4
    if compression == "zlib":
        try:
            _fill_tiles(layer, zlib.decompress(decoded)[:needed])
        except zlib.error:
            _report_layer(context, map, layer, "Failed to decompress Tiled map tile layer data")
    elif not compression:
        # Up to 3 bytes of padding may trail the decoded data; they are ignored.
        if len(decoded) < needed:
            _report_layer(context, map, layer, f"Base64-decoded data is too small: {len(decoded)}")
            return
        _fill_tiles(layer, decoded)
    else:
        _report_layer(context, map, layer, f"Unknown Tiled map tile layer compression: {compression}")


def _load_layer_objects(context: Context, map: Map, layer: Layer, node: ET.Element) -> None:
    for object_node in node.findall("object"):
        obj = Object()
        template_source = object_node.get("template")
        if template_source is not None:
            try:
                template_id = load_template_from_file(context, _resolve(map.path, template_source))
            except TiledLoadError:
                pass
            else:
                obj = copy.deepcopy(context.templates[template_id])
        # Loading after the template is applied lets the object override it.
        _load_object(object_node, obj)
        if obj.tile.gid != 0 and obj.tileset.first_gid == 0:
            link = find_tileset_link_for_tile_gid(map.tilesets, obj.tile.gid)
            obj.tileset = dataclasses.replace(link)
        layer.objects.append(obj)


def _load_layer_recursive(context: Context, map: Map, node: ET.Element) -> None:
    layer_type = _LAYER_TYPES.get(node.tag)
    if layer_type is None:
        return  # e.g. <tileset> or <properties>

    layer = Layer(
        type=layer_type,
        name=node.get("name", ""),
        class_=node.get("class", ""),
        width=_as_uint(node.get("width")),
        height=_as_uint(node.get("height")),
        visible=_as_bool(node.get("visible"), True),
    )
    _load_properties(node, layer.properties)
    map.layers.append(layer)

    if layer_type is LayerType.TILE:
        _load_tile_data(context, map, layer, node)
    elif layer_type is LayerType.OBJECT:
        _load_layer_objects(context, map, layer, node)
    elif layer_type is LayerType.GROUP:
        for child in node:
            _load_layer_recursive(context, map, child)


def load_map_from_file(context: Context, path: str) -> int:
    """Load a map, or find it already loaded; return its index in ``context.maps``.

    Tilesets and templates it refers to are loaded too. A tileset that fails
    to load leaves a link whose ``tileset_id`` is -1.
    """
    normalized = _normalize(path)
    for map_id, loaded in enumerate(context.maps):
        if loaded.path == normalized:
            return map_id

    node = _read_document(context, normalized, "Tiled map", "map")
    map = Map(
        path=normalized,
        class_=node.get("class", ""),
        width=_as_uint(node.get("width")),
        height=_as_uint(node.get("height")),
        tile_width=_as_uint(node.get("tilewidth")),
        tile_height=_as_uint(node.get("tileheight")),
    )
    _load_properties(node, map.properties)

    for tileset_node in node.findall("tileset"):
        source = tileset_node.get("source")
        if source is None:
            _report(context, f"Embedded tilesets are not supported: {map.path}")
            continue
        map.tilesets.append(
            TilesetLink(
                first_gid=_as_uint(tileset_node.get("firstgid")),
                tileset_id=_load_linked_tileset(context, _resolve(map.path, source)),
            )
        )
    map.tilesets.sort(key=lambda link: link.first_gid)

    for child in node:
        _load_layer_recursive(context, map, child)

    context.maps.append(map)
    return len(context.maps) - 1