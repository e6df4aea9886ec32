"""Shared types for navtile-tool: Strategy, EncodeReport."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from navtile.core.diagnostics import DiagnosticSink
from navtile.core.palette import RGB, PaletteColour

Classify = Callable[[int, int, RGB, DiagnosticSink | None], PaletteColour]


class Strategy:
    """A self-registering colour classification strategy.

    Usage in a strategy module:

        strategy = Strategy(name='exact', help='Literal table lookup')

        @strategy.classifier
        def classify(x, y, pixel, sink=None):
            ...

    The result may depend on x and y only through their parity (the dither
    patterns repeat every two pixels), and must not depend on the sink.
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._classify_fn: Classify | None = None

    def classifier(self, fn: Classify) -> Classify:
        """Decorator to register the classify function."""
        self._classify_fn = fn
        return fn

    def classify(self, x: int, y: int, pixel: RGB, sink: DiagnosticSink | None = None) -> PaletteColour:
        """Classify one pixel at (x, y) to a palette colour."""
        if self._classify_fn is None:
            raise RuntimeError(f'Strategy {self.name} has no classify function')
        return self._classify_fn(x, y, pixel, sink)

    def __repr__(self) -> str:
        return f'Strategy({self.name!r})'


@dataclass
class EncodeReport:
    """Accumulates per-tile results for text/JSON output."""

    strategy: str = ''
    tiles: list[dict[str, Any]] = field(default_factory=list)
    calibration: dict[str, Any] | None = None
    ok_count: int = 0
    error_count: int = 0

    def add_tile(
        self,
        image_path: str,
        size: tuple[int, int],
        output_path: str | None,
        byte_count: int,
        census: dict[str, int],
        preview_path: str | None = None,
    ) -> None:
        """Record a successfully encoded tile."""
        self.tiles.append(
            {
                'image': image_path,
                'width': size[0],
                'height': size[1],
                'output': output_path,
                'preview': preview_path,
                'bytes': byte_count,
                'census': census,
            }
        )
        self.ok_count += 1

    def add_error(self, image_path: str, message: str) -> None:
        self.tiles.append({'image': image_path, 'error': message})
        self.error_count += 1
