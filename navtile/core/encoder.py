"""Tile encoder: decode, classify every pixel, pack two codes per byte.

Output layout: byte i holds pixel 2i in the high nibble and pixel 2i+1 in the
low nibble, pixels in row-major order. A tile with an odd pixel count loses
its last pixel, the device format has no padding nibble.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence

import numpy as np
from PIL import Image

from navtile.core.diagnostics import DiagnosticSink
from navtile.core.palette import RGB, PaletteColour, code_for
from navtile.core.types import Strategy

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = 'perceptual'


class DecodeError(Exception):
    """Input bytes are not a decodable raster image."""


def decode_image(image_bytes: bytes) -> Image.Image:
    """Decode an encoded image, format detected from its content, as RGB."""
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
        fmt = img.format
        rgb = img.convert('RGB')
    except Image.DecompressionBombError as exc:
        raise DecodeError(f'Image too large to decode: {exc}') from exc
    except (OSError, ValueError, SyntaxError) as exc:
        # UnidentifiedImageError is an OSError; truncated data raises OSError on load
        raise DecodeError(f'Cannot decode image ({len(image_bytes)} bytes): {exc}') from exc
    logger.debug('decoded %s image %dx%d', fmt, rgb.width, rgb.height)
    return rgb


def resolve_strategy(strategy: str | Strategy) -> Strategy:
    if isinstance(strategy, Strategy):
        return strategy
    from navtile.registry import get

    return get(strategy)


def classify_image(
    image: Image.Image,
    strategy: str | Strategy = DEFAULT_STRATEGY,
    sink: DiagnosticSink | None = None,
) -> list[PaletteColour]:
    """Classify every pixel, row-major with x varying fastest.

    Dither patterns repeat every two pixels, so a result only depends on the
    pixel and the parity of x and y. Results are reused within this call
    when no sink is listening; a sink sees every pixel.
    """
    strat = resolve_strategy(strategy)
    rgb = image if image.mode == 'RGB' else image.convert('RGB')
    width = rgb.width
    pixels = np.asarray(rgb, dtype=np.uint8).reshape(-1, 3).tolist()
    colours = []
    seen: dict[tuple[RGB, int, int], PaletteColour] = {}
    for i, pixel in enumerate(map(tuple, pixels)):
        y, x = divmod(i, width)
        if sink is not None:
            colours.append(strat.classify(x, y, pixel, sink))
            continue
        key = (pixel, x & 1, y & 1)
        colour = seen.get(key)
        if colour is None:
            colour = seen[key] = strat.classify(x, y, pixel)
        colours.append(colour)
    return colours


def pack_codes(codes: Iterable[int]) -> bytes:
    """Pack 3-bit codes two per byte, high nibble first.

    A trailing unpaired code is dropped.
    """
    out = bytearray()
    high = True
    pxl = 0
    for code in codes:
        if high:
            pxl = (code & 0x0F) << 4
        else:
            pxl += code & 0x0F
            out.append(pxl)
        high = not high
    return bytes(out)


def encode_image(
    image: Image.Image,
    strategy: str | Strategy = DEFAULT_STRATEGY,
    sink: DiagnosticSink | None = None,
) -> bytes:
    """Encode an already decoded image."""
    colours = classify_image(image, strategy, sink)
    return pack_codes(code_for(c) for c in colours)


def encode(
    image_bytes: bytes,
    strategy: str | Strategy = DEFAULT_STRATEGY,
    sink: DiagnosticSink | None = None,
) -> bytes:
    """Decode image bytes and return the packed 4-bit-per-pixel tile.

    Raises DecodeError when the bytes are not a recognizable image.
    """
    image = decode_image(image_bytes)
    packed = encode_image(image, strategy, sink)
    logger.debug('packed %d pixels into %d bytes', image.width * image.height, len(packed))
    return packed


def census(colours: Sequence[PaletteColour]) -> dict[str, int]:
    """Count pixels per palette colour, zero counts omitted."""
    counts = np.bincount(np.fromiter((code_for(c) for c in colours), dtype=np.int64), minlength=8)
    return {PaletteColour(code).name.lower(): int(n) for code, n in enumerate(counts) if n}


def render_preview(colours: Sequence[PaletteColour], size: tuple[int, int]) -> Image.Image:
    """Render classified colours back to an RGB image for visual checking."""
    width, height = size
    if len(colours) != width * height:
        raise ValueError(f'Expected {width * height} colours for {width}x{height}, got {len(colours)}')
    arr = np.array([c.rgb for c in colours], dtype=np.uint8).reshape(height, width, 3)
    return Image.fromarray(arr)
