"""Spatial dither patterns.

A table entry either paints one palette colour (``solid``) or alternates two
colours in a 2x2 checkerboard (``checker``) so that the 8-colour device can
approximate a blended shade. Patterns are pure functions of (x, y).

The pattern is a tag on the ``Dither`` value, not a callable, and ``Dither``
refuses to be built with the wrong number of candidates. A malformed table
therefore fails when the module is imported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from navtile.core.palette import PaletteColour


class Pattern(Enum):
    SOLID = 'solid'
    CHECKER = 'checker'


_ARITY = {
    Pattern.SOLID: 1,
    Pattern.CHECKER: 2,
}


@dataclass(frozen=True)
class Dither:
    """A pattern tag paired with its ordered candidate colours."""

    pattern: Pattern
    candidates: tuple[PaletteColour, ...]

    def __post_init__(self) -> None:
        expected = _ARITY[self.pattern]
        if len(self.candidates) != expected:
            raise ValueError(
                f'{self.pattern.value} dither needs {expected} candidate(s), got {len(self.candidates)}'
            )

    def at(self, x: int, y: int) -> PaletteColour:
        return apply(self, x, y)

    @property
    def is_blend(self) -> bool:
        return self.pattern is not Pattern.SOLID


def solid(colour: PaletteColour) -> Dither:
    return Dither(Pattern.SOLID, (colour,))


def checker(first: PaletteColour, second: PaletteColour) -> Dither:
    return Dither(Pattern.CHECKER, (first, second))


def solid_at(x: int, y: int, candidates: tuple[PaletteColour, ...]) -> PaletteColour:
    return candidates[0]


def checker_at(x: int, y: int, candidates: tuple[PaletteColour, ...]) -> PaletteColour:
    """First candidate where x and y have the same parity, second otherwise."""
    if x % 2 == y % 2:
        return candidates[0]
    return candidates[1]


def apply(dither: Dither, x: int, y: int) -> PaletteColour:
    """Select the concrete palette colour for pixel (x, y)."""
    match dither.pattern:
        case Pattern.SOLID:
            return solid_at(x, y, dither.candidates)
        case Pattern.CHECKER:
            return checker_at(x, y, dither.candidates)
    raise ValueError(f'Unknown dither pattern: {dither.pattern}')
