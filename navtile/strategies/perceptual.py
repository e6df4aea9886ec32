"""Nearest perceptual match against a small reference table. Default strategy.

Converts each pixel to CIE L*a*b* (D65) and finds the reference entry with
the smallest squared Euclidean distance. Ties go to the earliest entry.
The winning entry's dither then picks the concrete colour at (x, y), so mid
greys and pale tints come out as a checkerboard of two palette colours.

Works on any tile source. For OpenTopoMap tiles with a known colour set the
`exact` strategy is sharper.

With --diagnostics every pixel prints as:
    <source hex> <output hex> = <table index>

Example:
    uv run navtile-tool perceptual ./tiles 14/8529/5975.png
"""

from __future__ import annotations

import numpy as np

from navtile.core.colour_space import rgb_to_lab, squared_distances
from navtile.core.diagnostics import DiagnosticSink
from navtile.core.dither import apply
from navtile.core.palette import RGB, PaletteColour
from navtile.core.tables import PERCEPTUAL_TABLE, PerceptualEntry
from navtile.core.types import Strategy

strategy = Strategy(
    name='perceptual',
    help='Nearest L*a*b* match against 14 reference shades, checker-dithered blends.',
)


class PerceptualClassifier:
    """Nearest-entry search over one perceptual table. Holds no per-pixel state."""

    def __init__(self, table: tuple[PerceptualEntry, ...] = PERCEPTUAL_TABLE):
        if not table:
            raise ValueError('Perceptual table must not be empty')
        self.table = table
        self._references = np.array([e.reference for e in table], dtype=np.float64)
        self._references.flags.writeable = False

    def nearest(self, pixel: RGB) -> int:
        """Index of the closest entry. np.argmin keeps the first of equal minima."""
        distances = squared_distances(rgb_to_lab(pixel), self._references)
        return int(np.argmin(distances))

    def classify(self, x: int, y: int, pixel: RGB, sink: DiagnosticSink | None = None) -> PaletteColour:
        idx = self.nearest(pixel)
        colour = apply(self.table[idx].dither, x, y)
        if sink is not None:
            sink.matched(pixel, colour, idx)
        return colour


_default = PerceptualClassifier()


@strategy.classifier
def classify(x: int, y: int, pixel: RGB, sink: DiagnosticSink | None = None) -> PaletteColour:
    return _default.classify(x, y, tuple(pixel), sink)
