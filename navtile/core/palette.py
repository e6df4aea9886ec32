"""The fixed 8-colour device palette, its 3-bit codes and hex helpers."""

from __future__ import annotations

from enum import IntEnum

RGB = tuple[int, int, int]


class PaletteColour(IntEnum):
    """Output colours. The member value is the 3-bit code written to the device."""

    BLACK = 0
    WHITE = 1
    GREEN = 2
    BLUE = 3
    RED = 4
    YELLOW = 5
    ORANGE = 6
    UNKNOWN = 7

    @property
    def rgb(self) -> RGB:
        return PALETTE_RGB[self]

    @property
    def hex(self) -> str:
        return rgb_to_hex(PALETTE_RGB[self])


BLACK = PaletteColour.BLACK
WHITE = PaletteColour.WHITE
GREEN = PaletteColour.GREEN
BLUE = PaletteColour.BLUE
RED = PaletteColour.RED
YELLOW = PaletteColour.YELLOW
ORANGE = PaletteColour.ORANGE
UNKNOWN = PaletteColour.UNKNOWN

PALETTE_RGB: dict[PaletteColour, RGB] = {
    BLACK: (0, 0, 0),
    WHITE: (255, 255, 255),
    GREEN: (0, 255, 0),
    BLUE: (0, 0, 255),
    RED: (255, 0, 0),
    YELLOW: (255, 255, 50),
    ORANGE: (255, 127, 0),
    UNKNOWN: (255, 0, 255),  # preview only, the device has no such colour
}

# Reverse lookup for the seven named colours. UNKNOWN is deliberately absent.
_NAMED_BY_RGB: dict[RGB, PaletteColour] = {rgb: c for c, rgb in PALETTE_RGB.items() if c is not UNKNOWN}


def code_for(colour: PaletteColour) -> int:
    """Return the 3-bit device code for a palette colour."""
    return int(colour) & 0x07


def colour_for_rgb(rgb: RGB) -> PaletteColour:
    """Map an RGB triple to its named palette colour, UNKNOWN if it is not one."""
    return _NAMED_BY_RGB.get(tuple(rgb), UNKNOWN)  # type: ignore[arg-type]


def rgb_for(colour: PaletteColour) -> RGB:
    return PALETTE_RGB[colour]


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f'{r:02x}{g:02x}{b:02x}'


def hex_to_rgb(hex_str: str) -> RGB:
    """Parse '#rrggbb', 'rrggbb' or '#rgb'. Invalid input returns black."""
    h = hex_str.strip().lstrip('#')
    if len(h) == 3:
        h = ''.join(c * 2 for c in h)
    if len(h) != 6:
        return (0, 0, 0)
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError:
        return (0, 0, 0)
