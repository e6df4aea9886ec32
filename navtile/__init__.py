"""navtile: reduce map tiles to an 8-colour palette and pack them 4 bits per pixel.

    from navtile import encode
    raw = encode(png_bytes)                 # perceptual strategy
    raw = encode(png_bytes, 'exact')        # OpenTopoMap colour table
"""

from navtile.core.encoder import DecodeError, classify_image, decode_image, encode, encode_image, pack_codes
from navtile.core.palette import PaletteColour, code_for

__all__ = [
    'DecodeError',
    'PaletteColour',
    'classify_image',
    'code_for',
    'decode_image',
    'encode',
    'encode_image',
    'pack_codes',
]
