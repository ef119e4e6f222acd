"""Reading and writing STL meshes in ASCII and binary form."""

from __future__ import annotations

import struct
from typing import Iterable, Union

from verletkit.particle import Vec3
from verletkit.stl_model import Facet, StlModel

_HEADER_SIZE = 80
_COUNT = struct.Struct("<I")
_FACET = struct.Struct("<12fH")


class StlFormatError(ValueError):
    """Raised when STL data cannot be parsed."""


def is_ascii(data: Union[bytes, str]) -> bool:
    """True if the data starts with the word 'solid'."""
    prefix = data[:5]
    return prefix == b"solid" or prefix == "solid"


def _parse_floats(tokens: list[str], line_no: int) -> Vec3:
    try:
        return Vec3(*(float(t) for t in tokens))
    except ValueError as exc:
        raise StlFormatError(f"line {line_no}: bad number") from exc


def read_ascii(text: Union[str, bytes]) -> StlModel:
    """Parse an ASCII STL document into a model."""
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    lines = text.splitlines() or [""]
    first = lines[0]
    name = first[first.find(" ") + 1:]
    index = 1

    def line_tokens(i: int) -> list[str]:
        if i >= len(lines):
            raise StlFormatError("unexpected end of data inside facet")
        return lines[i].split()

    def read_normal(i: int) -> Vec3:
        tokens = line_tokens(i)
        if len(tokens) != 5:
            raise StlFormatError(f"line {i + 1}: problem reading normal line")
        return _parse_floats(tokens[2:], i + 1)

    def read_vertex(i: int) -> Vec3:
        tokens = line_tokens(i)
        if len(tokens) != 4:
            raise StlFormatError(f"line {i + 1}: problem reading vertex line")
        return _parse_floats(tokens[1:], i + 1)

    facets: list[Facet] = []
    while index < len(lines):
        tokens = lines[index].split()
        if tokens and tokens[0] == "endsolid":
            break
        if tokens and tokens[0] == "facet":
            normal = read_normal(index)
            # skip the "outer loop" line
            index += 2
            verts = [read_vertex(index + k) for k in range(3)]
            index += 3
            facets.append(Facet(normal, *verts))
        index += 1
    return StlModel(facets, name)


def _fmt(v: Vec3) -> str:
    return f"{v.x:g} {v.y:g} {v.z:g}"


def write_ascii(facets: Iterable[Facet], name: str = "") -> str:
    """Render facets as an ASCII STL document."""
    parts = [f"solid {name}\n"]
    for f in facets:
        parts.append(f"facet normal {_fmt(f.normal)}\n")
        parts.append("  outer loop\n")
        for v in f.vertices:
            parts.append(f"    vertex {_fmt(v)}\n")
        parts.append("  endloop\n")
        parts.append("endfacet\n")
    parts.append(f"end solid {name}")
    return "".join(parts)


def read_binary(data: bytes) -> StlModel:
    """Parse binary STL data into a model; binary files carry no name."""
    if len(data) < _HEADER_SIZE + _COUNT.size:
        raise StlFormatError("binary STL data is too short for its header")
    (count,) = _COUNT.unpack_from(data, _HEADER_SIZE)
    offset = _HEADER_SIZE + _COUNT.size
    if len(data) < offset + count * _FACET.size:
        raise StlFormatError(f"binary STL data is truncated: expected {count} facets")
    facets = []
    for values in _FACET.iter_unpack(data[offset:offset + count * _FACET.size]):
        normal, v1, v2, v3 = (Vec3(*values[k:k + 3]) for k in range(0, 12, 3))
        facets.append(Facet(normal, v1, v2, v3))
    return StlModel(facets, "")


def write_binary(facets: Iterable[Facet]) -> bytes:
    """Encode facets as binary STL with a blank header."""
    items = list(facets)
    chunks = [b" " * _HEADER_SIZE, _COUNT.pack(len(items))]
    for f in items:
        chunks.append(_FACET.pack(*f.normal, *f.vert1, *f.vert2, *f.vert3, 0))
    return b"".join(chunks)