"""sRGB to CIE L*a*b* conversion (D65) for perceptual nearest-colour search."""

import numpy as np

# D65 reference white
_WHITE = np.array([0.95047, 1.0, 1.08883])

_RGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)

_EPSILON = 216 / 24389
_KAPPA = 24389 / 27


def rgb_to_lab(rgb) -> np.ndarray:
    """Convert RGB (0-255) to L*a*b*.

    Accepts a single triple or an (N, 3) array. Returns float64 with the same
    leading shape.
    """
    arr = np.asarray(rgb, dtype=np.float64) / 255.0

    # sRGB companding
    linear = np.where(arr > 0.04045, ((arr + 0.055) / 1.055) ** 2.4, arr / 12.92)

    xyz = linear @ _RGB_TO_XYZ.T / _WHITE
    f = np.where(xyz > _EPSILON, np.cbrt(xyz), (_KAPPA * xyz + 16) / 116)

    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]
    return np.stack([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)], axis=-1)


def squared_distances(lab: np.ndarray, references: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance from one Lab point to each row of references."""
    return ((references - lab) ** 2).sum(axis=1)
