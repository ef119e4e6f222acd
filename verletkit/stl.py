"""Loading STL files into models and saving models built triangle by triangle."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from verletkit.particle import PointLike
from verletkit.stl_io import is_ascii, read_ascii, read_binary, write_ascii, write_binary
from verletkit.stl_model import Facet, StlModel

PathLike = Union[str, "os.PathLike[str]"]


class StlImporter(StlModel):
    """A model filled from an STL file, ASCII or binary."""

    def __init__(self) -> None:
        super().__init__([], "")

    def load(self, path: PathLike) -> StlImporter:
        """Read the file, detecting its format from the leading word 'solid'.

        Binary files carry no model name, so the name is reset to ''.
        """
        data = Path(path).read_bytes()
        model = read_ascii(data) if is_ascii(data) else read_binary(data)
        self.facets = model.facets
        self.name = model.name
        return self


class StlExporter(StlModel):
    """Collects triangles and writes them out as STL.

    Binary output is the default; set ``use_ascii`` to write text instead.
    """

    def __init__(self, use_ascii: bool = False) -> None:
        super().__init__([], "")
        self.use_ascii = use_ascii

    def begin_model(self, name: str = "") -> None:
        """Start a new model with the given name, discarding earlier triangles."""
        self.name = name
        self.facets = []

    def add_triangle(
        self, vert1: PointLike, vert2: PointLike, vert3: PointLike, normal: PointLike
    ) -> Facet:
        """Append one triangle and return the facet created for it."""
        facet = Facet(normal, vert1, vert2, vert3)
        self.facets.append(facet)
        return facet

    def save(self, path: PathLike) -> Path:
        """Write the model to path in the selected format and return the path."""
        target = Path(path)
        if self.use_ascii:
            target.write_text(write_ascii(self.facets, self.name), encoding="ascii")
        else:
            target.write_bytes(write_binary(self.facets))
        return target