"""Triangle facets and an in-memory STL model with simple transforms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from verletkit.particle import PointLike, Vec3, _to_vec3


@dataclass
class Facet:
    """One triangle of a mesh: a normal and three vertices."""

    normal: Vec3 = field(default_factory=Vec3)
    vert1: Vec3 = field(default_factory=Vec3)
    vert2: Vec3 = field(default_factory=Vec3)
    vert3: Vec3 = field(default_factory=Vec3)

    def __post_init__(self) -> None:
        self.normal = _to_vec3(self.normal)
        self.vert1 = _to_vec3(self.vert1)
        self.vert2 = _to_vec3(self.vert2)
        self.vert3 = _to_vec3(self.vert3)

    @property
    def vertices(self) -> tuple[Vec3, Vec3, Vec3]:
        return (self.vert1, self.vert2, self.vert3)


@dataclass
class StlModel:
    """A named list of facets that can be scaled, moved and centred."""

    facets: list[Facet] = field(default_factory=list)
    name: str = ""

    def __len__(self) -> int:
        return len(self.facets)

    def __iter__(self) -> Iterator[Facet]:
        return iter(self.facets)

    def scale(self, amount: float) -> None:
        """Multiply every vertex by amount; normals are left untouched."""
        for f in self.facets:
            f.vert1 = f.vert1 * amount
            f.vert2 = f.vert2 * amount
            f.vert3 = f.vert3 * amount

    def normalize(self) -> None:
        """Scale so the larger x-y extent becomes one.

        The extent is measured over a box that always includes the origin.
        """
        min_x = min_y = max_x = max_y = 0.0
        for f in self.facets:
            for v in f.vertices:
                min_x = min(min_x, v.x)
                max_x = max(max_x, v.x)
                min_y = min(min_y, v.y)
                max_y = max(max_y, v.y)
        extent = max(max_x - min_x, max_y - min_y)
        if extent == 0:
            raise ValueError("cannot normalize a model with no x-y extent")
        self.scale(1.0 / extent)

    def rescale(self, size: float) -> None:
        """Normalize, then scale up to size."""
        self.normalize()
        self.scale(size)

    def shift(self, amount: PointLike) -> None:
        """Translate every vertex by amount."""
        offset = _to_vec3(amount)
        for f in self.facets:
            f.vert1 = f.vert1 + offset
            f.vert2 = f.vert2 + offset
            f.vert3 = f.vert3 + offset

    def center(self, position: PointLike = Vec3()) -> None:
        """Move the model so its vertex centroid lies at position."""
        self.shift(_to_vec3(position) - self.center_point())

    def center_point(self) -> Vec3:
        """Mean of all vertices."""
        if not self.facets:
            raise ValueError("model has no facets")
        total = Vec3()
        for f in self.facets:
            total = total + f.vert1 + f.vert2 + f.vert3
        return total / (len(self.facets) * 3)