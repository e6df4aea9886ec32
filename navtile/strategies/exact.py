"""Literal lookup in a table of known OpenTopoMap colours, with fallbacks.

Order of checks for each pixel:
  1. Near-neutral: if max(r,g,b) - min(r,g,b) < 21 and max > 80 the pixel
     is WHITE. Darker near-neutral pixels continue to step 2.
  2. Exact match: the first EXACT_TABLE entry with the same RGB wins, and
     its dither picks the colour at (x, y).
  3. Unmatched: returns RED. RED here flags "not in the table", not red
     map content.

Unmatched colours are reported to the diagnostic sink. Run with
--calibrate to get ready-to-paste ExactEntry lines for them.

Example:
    uv run navtile-tool exact ./tiles 16/34118/23903.png --calibrate
"""

from __future__ import annotations

from navtile.core.diagnostics import DiagnosticSink
from navtile.core.dither import apply
from navtile.core.palette import RED, RGB, WHITE, PaletteColour
from navtile.core.tables import EXACT_TABLE, ExactEntry
from navtile.core.types import Strategy

strategy = Strategy(
    name='exact',
    help='Exact lookup in the 113-entry OpenTopoMap table. Unmatched pixels become RED.',
)

NEUTRAL_SPREAD = 21
NEUTRAL_WHITE_ABOVE = 80

UNMATCHED = RED


def build_index(table: tuple[ExactEntry, ...]) -> dict[RGB, ExactEntry]:
    """Map each RGB key to its first entry in table order."""
    index: dict[RGB, ExactEntry] = {}
    for entry in table:
        index.setdefault(entry.rgb, entry)
    return index


def near_neutral(pixel: RGB) -> PaletteColour | None:
    """WHITE for light near-greys, None when the pixel needs a table lookup."""
    hi = max(pixel)
    lo = min(pixel)
    if hi - lo < NEUTRAL_SPREAD and hi > NEUTRAL_WHITE_ABOVE:
        return WHITE
    return None


class ExactClassifier:
    def __init__(self, table: tuple[ExactEntry, ...] = EXACT_TABLE):
        self.table = table
        self._index = build_index(table)

    def lookup(self, pixel: RGB) -> ExactEntry | None:
        return self._index.get(pixel)

    def classify(self, x: int, y: int, pixel: RGB, sink: DiagnosticSink | None = None) -> PaletteColour:
        neutral = near_neutral(pixel)
        if neutral is not None:
            return neutral

        entry = self.lookup(pixel)
        if entry is not None:
            return apply(entry.dither, x, y)

        if sink is not None:
            sink.unmatched(pixel)
        return UNMATCHED


_default = ExactClassifier()


@strategy.classifier
def classify(x: int, y: int, pixel: RGB, sink: DiagnosticSink | None = None) -> PaletteColour:
    return _default.classify(x, y, tuple(pixel), sink)
