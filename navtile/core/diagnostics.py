"""Diagnostic sinks for table calibration.

Classifiers never print. A caller that wants to see what happens passes a
sink, and the classifier reports each decision to it:

  matched(pixel, colour, index)   perceptual strategy, winning table index
  unmatched(pixel)                exact strategy, colour missing from the table

ConsoleSink renders both as truecolour swatches on stderr (source colour on
the left, output colour on the right). CalibrationSink collects unmatched
colours so they can be pasted into EXACT_TABLE.

Sinks are owned by the caller. Sharing one across threads is the caller's
responsibility.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from rich.console import Console
from rich.text import Text

from navtile.core.palette import RGB, PaletteColour, rgb_to_hex


def match_line(pixel: RGB, colour: PaletteColour, index: int) -> str:
    """'rrggbb rrggbb = idx' for a perceptual match."""
    return f'{rgb_to_hex(pixel)} {colour.hex} = {index}'


def table_entry_literal(pixel: RGB) -> str:
    """A ready-to-paste EXACT_TABLE line for an unmatched colour."""
    r, g, b = pixel
    return f'ExactEntry(({r:#04x}, {g:#04x}, {b:#04x}), solid(BLACK)),'


def _swatch(label: str, rgb: RGB) -> Text:
    r, g, b = rgb
    # black text on light backgrounds, white on dark
    fg = 'black' if (r * 299 + g * 587 + b * 114) // 1000 > 127 else 'white'
    return Text(label, style=f'{fg} on rgb({r},{g},{b})')


class DiagnosticSink:
    """No-op sink. Subclass and override what you need."""

    def matched(self, pixel: RGB, colour: PaletteColour, index: int) -> None:
        pass

    def unmatched(self, pixel: RGB) -> None:
        pass


class ConsoleSink(DiagnosticSink):
    """Print every decision as coloured swatches."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True, highlight=False)

    def matched(self, pixel: RGB, colour: PaletteColour, index: int) -> None:
        line = Text.assemble(
            _swatch(rgb_to_hex(pixel), pixel),
            ' ',
            _swatch(f'{colour.hex} = {index}', colour.rgb),
        )
        self.console.print(line)

    def unmatched(self, pixel: RGB) -> None:
        self.console.print(_swatch(table_entry_literal(pixel), pixel))


class TeeSink(DiagnosticSink):
    """Forward every event to several sinks, in order."""

    def __init__(self, *sinks: DiagnosticSink):
        self.sinks = sinks

    def matched(self, pixel: RGB, colour: PaletteColour, index: int) -> None:
        for s in self.sinks:
            s.matched(pixel, colour, index)

    def unmatched(self, pixel: RGB) -> None:
        for s in self.sinks:
            s.unmatched(pixel)


class CalibrationSink(DiagnosticSink):
    """Collect unmatched colours and table hit counts across one or more tiles."""

    def __init__(self) -> None:
        self.unmatched_counts: Counter[RGB] = Counter()
        self.match_counts: Counter[int] = Counter()

    def matched(self, pixel: RGB, colour: PaletteColour, index: int) -> None:
        self.match_counts[index] += 1

    def unmatched(self, pixel: RGB) -> None:
        self.unmatched_counts[tuple(pixel)] += 1  # type: ignore[index]

    @property
    def unmatched_total(self) -> int:
        return sum(self.unmatched_counts.values())

    def entries(self) -> list[str]:
        """Paste-ready literals, most frequent first, ties in first-seen order."""
        ordered = sorted(self.unmatched_counts.items(), key=lambda kv: -kv[1])
        return [table_entry_literal(rgb) for rgb, _count in ordered]

    def summary(self) -> dict[str, Any]:
        ordered = sorted(self.unmatched_counts.items(), key=lambda kv: -kv[1])
        return {
            'unmatched_total': self.unmatched_total,
            'unmatched': [{'hex': rgb_to_hex(rgb), 'count': n} for rgb, n in ordered],
            'matches': {str(idx): n for idx, n in sorted(self.match_counts.items())},
        }
