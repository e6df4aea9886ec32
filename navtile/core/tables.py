"""Classification tables.

PERCEPTUAL_TABLE is searched by nearest L*a*b* distance. EXACT_TABLE is a
curated list of colours observed in OpenTopoMap tiles, matched literally.

Both are ordered. For the perceptual table the earliest entry wins a distance
tie. The exact table contains repeated keys (some mapped to different
dithers); the first occurrence wins, so keep relative order when editing and
never deduplicate. New exact entries can be pasted straight from the
calibration output of ``navtile-tool exact ... --calibrate``.
"""

from __future__ import annotations

from dataclasses import dataclass

from navtile.core.colour_space import rgb_to_lab
from navtile.core.dither import Dither, checker, solid
from navtile.core.palette import BLACK, BLUE, GREEN, ORANGE, RED, RGB, WHITE, YELLOW


@dataclass(frozen=True)
class PerceptualEntry:
    source: RGB
    dither: Dither
    reference: tuple[float, float, float]

    @classmethod
    def from_rgb(cls, source: RGB, dither: Dither) -> PerceptualEntry:
        l_star, a_star, b_star = (float(v) for v in rgb_to_lab(source))
        return cls(source=source, dither=dither, reference=(l_star, a_star, b_star))


@dataclass(frozen=True)
class ExactEntry:
    rgb: RGB
    dither: Dither


PERCEPTUAL_TABLE: tuple[PerceptualEntry, ...] = (
    PerceptualEntry.from_rgb((255, 255, 255), solid(WHITE)),
    PerceptualEntry.from_rgb((0, 0, 0), solid(BLACK)),
    PerceptualEntry.from_rgb((90, 90, 90), solid(BLACK)),
    PerceptualEntry.from_rgb((0, 0, 255), solid(BLUE)),
    PerceptualEntry.from_rgb((255, 0, 0), solid(RED)),
    PerceptualEntry.from_rgb((0, 255, 0), solid(GREEN)),
    PerceptualEntry.from_rgb((255, 127, 0), solid(ORANGE)),
    PerceptualEntry.from_rgb((255, 255, 0), solid(YELLOW)),
    PerceptualEntry.from_rgb((127, 127, 127), checker(BLACK, WHITE)),
    PerceptualEntry.from_rgb((255, 255, 155), checker(YELLOW, WHITE)),
    PerceptualEntry.from_rgb((127, 255, 127), checker(GREEN, WHITE)),
    PerceptualEntry.from_rgb((212, 250, 212), checker(GREEN, WHITE)),
    PerceptualEntry.from_rgb((251, 212, 157), checker(RED, WHITE)),
    PerceptualEntry.from_rgb((127, 0, 255), checker(RED, BLUE)),
)

# fmt: off
EXACT_TABLE: tuple[ExactEntry, ...] = (
    ExactEntry((255, 255, 255), solid(WHITE)),
    ExactEntry((0, 0, 0), solid(BLACK)),
    ExactEntry((0, 0, 255), solid(BLUE)),
    ExactEntry((255, 0, 0), solid(RED)),
    ExactEntry((0, 255, 0), solid(GREEN)),
    ExactEntry((255, 127, 0), solid(ORANGE)),
    ExactEntry((255, 255, 0), solid(YELLOW)),
    ExactEntry((0xff, 0xff, 0xfb), solid(WHITE)),
    ExactEntry((0xec, 0xf3, 0xc4), checker(YELLOW, WHITE)),
    ExactEntry((0xf1, 0xf2, 0xd9), checker(YELLOW, WHITE)),
    ExactEntry((0xd3, 0xd3, 0xce), checker(BLACK, WHITE)),
    ExactEntry((0xd2, 0xd3, 0xce), checker(BLACK, WHITE)),
    ExactEntry((0xd2, 0xd3, 0xce), checker(BLACK, WHITE)),
    ExactEntry((0xd7, 0xd9, 0xc5), checker(BLACK, WHITE)),
    ExactEntry((0xe5, 0xf0, 0xd4), checker(GREEN, WHITE)),
    ExactEntry((0xce, 0xe7, 0xc3), checker(GREEN, WHITE)),
    ExactEntry((0xd1, 0xea, 0xc6), checker(GREEN, WHITE)),
    ExactEntry((0x97, 0xcb, 0x8d), checker(GREEN, BLACK)),
    ExactEntry((0xe6, 0xe9, 0xd4), checker(YELLOW, WHITE)),
    ExactEntry((0xf0, 0xf3, 0xd1), checker(YELLOW, WHITE)),
    ExactEntry((0xeb, 0xf4, 0xe9), checker(YELLOW, WHITE)),
    ExactEntry((0xee, 0xf2, 0xd2), checker(YELLOW, WHITE)),
    ExactEntry((0xef, 0xf0, 0xdc), solid(WHITE)),
    ExactEntry((0xff, 0xff, 0xda), solid(ORANGE)),
    ExactEntry((0x44, 0x44, 0x44), solid(BLACK)),
    ExactEntry((0x67, 0x66, 0xd9), solid(BLUE)),
    ExactEntry((0x86, 0xab, 0x84), solid(BLACK)),
    ExactEntry((0xad, 0xad, 0xaa), solid(BLACK)),
    ExactEntry((0x9d, 0x9d, 0x9b), solid(BLACK)),
    ExactEntry((0xef, 0xf2, 0xd2), solid(YELLOW)),
    ExactEntry((0xef, 0xf2, 0xd2), checker(GREEN, YELLOW)),
    ExactEntry((0xda, 0xe7, 0xc5), checker(GREEN, WHITE)),
    ExactEntry((0xa7, 0xcd, 0x92), solid(GREEN)),
    ExactEntry((0x55, 0xa6, 0xd8), solid(BLUE)),
    ExactEntry((0x6a, 0x69, 0xdc), solid(BLUE)),
    ExactEntry((0x97, 0xc6, 0xd6), checker(BLUE, WHITE)),
    ExactEntry((0x8d, 0xb2, 0xb4), checker(BLUE, BLACK)),
    ExactEntry((0xd9, 0xea, 0xa8), solid(GREEN)),
    ExactEntry((0xcc, 0xe3, 0x96), solid(GREEN)),
    ExactEntry((0xcc, 0xe3, 0x96), solid(GREEN)),
    ExactEntry((0xd3, 0xd4, 0xd1), checker(BLACK, WHITE)),
    ExactEntry((0xe2, 0xe2, 0xdd), checker(BLACK, WHITE)),
    ExactEntry((0xd5, 0xd5, 0xd2), checker(BLACK, WHITE)),
    ExactEntry((0xd7, 0xd8, 0xd2), checker(BLACK, WHITE)),
    ExactEntry((0xcc, 0xcd, 0xba), checker(BLACK, WHITE)),
    ExactEntry((0xf8, 0xf9, 0xe0), checker(YELLOW, WHITE)),
    ExactEntry((0xf5, 0xf6, 0xdd), checker(YELLOW, WHITE)),
    ExactEntry((0xe3, 0xe4, 0xd4), checker(YELLOW, WHITE)),
    ExactEntry((0xe9, 0xea, 0xd6), checker(YELLOW, WHITE)),
    ExactEntry((0xb3, 0xb3, 0xac), solid(BLACK)),
    ExactEntry((0xdf, 0xe0, 0xdc), solid(BLACK)),
    ExactEntry((0xdd, 0xdd, 0xd9), checker(BLACK, WHITE)),
    ExactEntry((0xdf, 0xe0, 0xdc), checker(BLACK, WHITE)),
    ExactEntry((0xdd, 0xdd, 0xd9), checker(BLACK, WHITE)),
    ExactEntry((0xf6, 0xf6, 0xf2), solid(WHITE)),
    ExactEntry((0xa3, 0xa4, 0x9e), solid(BLACK)),
    ExactEntry((0xb5, 0xb6, 0xa9), solid(BLACK)),
    ExactEntry((0xef, 0xf0, 0xd7), solid(WHITE)),
    ExactEntry((0xf1, 0xf2, 0xce), checker(YELLOW, WHITE)),
    ExactEntry((0xf2, 0xf5, 0xd3), checker(YELLOW, WHITE)),
    ExactEntry((0xc5, 0xc5, 0xc2), solid(BLACK)),
    ExactEntry((0xe9, 0xea, 0xe6), solid(WHITE)),
    ExactEntry((0x88, 0x89, 0x84), solid(BLACK)),
    ExactEntry((0x78, 0x79, 0x75), solid(BLACK)),
    ExactEntry((0xf5, 0xf5, 0xf2), solid(WHITE)),
    ExactEntry((0x4e, 0x52, 0xc4), solid(BLUE)),
    ExactEntry((0x66, 0x68, 0xca), solid(BLUE)),
    ExactEntry((0xa9, 0x74, 0xc6), checker(BLUE, RED)),
    ExactEntry((0x73, 0xb9, 0x6d), solid(GREEN)),
    ExactEntry((0xa4, 0xd2, 0x9b), solid(GREEN)),
    ExactEntry((0xd6, 0xef, 0xca), checker(GREEN, WHITE)),
    ExactEntry((0xd1, 0xea, 0xc5), checker(GREEN, WHITE)),
    ExactEntry((0xbd, 0xe1, 0xb2), checker(GREEN, WHITE)),
    ExactEntry((0xa9, 0xa9, 0xa6), solid(BLACK)),
    ExactEntry((0xf7, 0xf8, 0xdf), solid(WHITE)),
    ExactEntry((0xdb, 0xdc, 0xc7), solid(WHITE)),
    ExactEntry((0xe1, 0xe2, 0xd5), solid(WHITE)),
    ExactEntry((0xd7, 0xd7, 0xd4), solid(WHITE)),
    ExactEntry((0xe2, 0xe3, 0xdd), solid(WHITE)),
    ExactEntry((0x6a, 0x6a, 0x66), solid(BLACK)),
    ExactEntry((0xbb, 0xbc, 0xaa), solid(BLACK)),
    ExactEntry((0xd8, 0xd8, 0xba), checker(BLACK, YELLOW)),
    ExactEntry((0x8a, 0x8a, 0x7d), solid(BLACK)),
    ExactEntry((0xe2, 0xe3, 0xdd), solid(WHITE)),
    ExactEntry((0xff, 0xf0, 0xce), checker(ORANGE, WHITE)),
    ExactEntry((0x77, 0x78, 0x6b), solid(BLACK)),
    ExactEntry((0x86, 0x7b, 0x6e), solid(BLACK)),
    ExactEntry((0xfe, 0xfe, 0xfb), solid(WHITE)),
    ExactEntry((0xde, 0xea, 0xce), checker(GREEN, WHITE)),
    ExactEntry((0xef, 0xf2, 0xd1), checker(YELLOW, WHITE)),
    ExactEntry((0x94, 0x94, 0x92), solid(BLACK)),
    ExactEntry((0x96, 0x99, 0x8d), solid(BLACK)),
    ExactEntry((0x8f, 0x23, 0x31), solid(RED)),
    ExactEntry((0xc8, 0x1c, 0x33), solid(RED)),
    ExactEntry((0x69, 0x68, 0xe0), checker(BLUE, RED)),
    ExactEntry((0x87, 0x87, 0xb8), checker(BLACK, RED)),
    ExactEntry((0xe7, 0xea, 0xca), checker(WHITE, YELLOW)),
    ExactEntry((0xf6, 0xf9, 0xd7), checker(WHITE, YELLOW)),
    ExactEntry((0xd6, 0xe4, 0xac), solid(GREEN)),
    ExactEntry((0xc5, 0xdc, 0xb1), solid(GREEN)),
    ExactEntry((0xd2, 0xe4, 0x9a), solid(GREEN)),
    ExactEntry((0xf2, 0xf0, 0xc6), solid(YELLOW)),
    ExactEntry((0xf1, 0xf2, 0xdd), solid(WHITE)),
    ExactEntry((0xb1, 0x6a, 0xcb), solid(RED)),
    ExactEntry((0xbc, 0xbc, 0xa4), solid(BLACK)),
    ExactEntry((0xb4, 0xc5, 0xac), solid(BLACK)),
    ExactEntry((0xb3, 0xb3, 0x9c), solid(BLACK)),
    ExactEntry((0xb0, 0xd2, 0xd6), solid(BLUE)),
    ExactEntry((0x93, 0xc5, 0xd7), solid(BLUE)),
    ExactEntry((0xf1, 0xf5, 0xd2), checker(YELLOW, WHITE)),
    ExactEntry((0xd3, 0xe3, 0xcd), checker(BLACK, WHITE)),
    ExactEntry((0xd3, 0xe7, 0x99), checker(GREEN, YELLOW)),
    ExactEntry((0xc8, 0xd9, 0xa6), solid(GREEN)),
)
# fmt: on
