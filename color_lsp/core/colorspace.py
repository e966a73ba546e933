"""Color space conversions between sRGB and the CSS functional models.

Every function works on plain floats. RGB channels are in [0,1] and hues in
degrees, except `rgba_to_hsla`, which takes 8-bit channels and returns hue
as a fraction of a turn (the shape the hover formatter prints).

Lab/LCH go through scikit-image (D65, 2 degree observer). OkLab/OkLCH use
Björn Ottosson's matrices. Results that overflow come back as NaN
rather than raising; callers decide what to do with them.
"""

import math
import warnings

import numpy as np
from skimage import color as skcolor

_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)

_LMS_TO_LINEAR_SRGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def clamp01(value: float) -> float:
    """Clamp to [0,1]. NaN becomes 0."""
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))


def _encode_srgb(linear: np.ndarray) -> tuple[float, float, float]:
    """Apply the sRGB transfer curve to linear channels and clip. NaN passes through."""
    magnitude = np.abs(linear)
    encoded = np.where(
        magnitude > 0.0031308,
        np.sign(linear) * (1.055 * magnitude ** (1 / 2.4) - 0.055),
        12.92 * linear,
    )
    r, g, b = (float(c) for c in np.clip(encoded, 0.0, 1.0))
    return r, g, b


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:  # noqa: E741
    if s == 0:
        return l, l, l
    a = s * min(l, 1.0 - l)

    def channel(n: int) -> float:
        k = (n + h / 30.0) % 12
        return l - a * max(-1.0, min(k - 3.0, 9.0 - k, 1.0))

    return channel(0), channel(8), channel(4)


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    def channel(n: int) -> float:
        k = (n + h / 60.0) % 6
        return v - v * s * max(0.0, min(k, 4.0 - k, 1.0))

    return channel(5), channel(3), channel(1)


def hwb_to_rgb(h: float, w: float, b: float) -> tuple[float, float, float]:
    if w + b >= 1.0:
        grey = w / (w + b)
        return grey, grey, grey
    r, g, bl = hsl_to_rgb(h, 1.0, 0.5)
    scale = 1.0 - w - b
    return r * scale + w, g * scale + w, bl * scale + w


def _lab_pixel_to_rgb(lab: np.ndarray) -> tuple[float, float, float]:
    # lab2rgb warns when it clips negative Z; out-of-gamut input is clipped anyway
    with warnings.catch_warnings(), np.errstate(all='ignore'):
        warnings.simplefilter('ignore', UserWarning)
        rgb = skcolor.lab2rgb(lab.reshape(1, 1, 3)).reshape(3)
    r, g, b = (float(c) for c in rgb)
    return r, g, b


def lab_to_rgb(l: float, a: float, b: float) -> tuple[float, float, float]:  # noqa: E741
    """CIE Lab (L in 0..100) to sRGB."""
    return _lab_pixel_to_rgb(np.array([l, a, b], dtype=np.float64))


def lch_to_rgb(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    # skimage takes the hue in radians
    lch = np.array([l, c, math.radians(h)], dtype=np.float64).reshape(1, 1, 3)
    with np.errstate(all='ignore'):
        lab = skcolor.lch2lab(lch)
    return _lab_pixel_to_rgb(lab)


def oklab_to_rgb(l: float, a: float, b: float) -> tuple[float, float, float]:  # noqa: E741
    """OkLab (L in 0..1) to sRGB."""
    with np.errstate(all='ignore'):
        lms = (_OKLAB_TO_LMS @ np.array([l, a, b], dtype=np.float64)) ** 3
        return _encode_srgb(_LMS_TO_LINEAR_SRGB @ lms)


def oklch_to_rgb(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    rad = math.radians(h)
    return oklab_to_rgb(l, c * math.cos(rad), c * math.sin(rad))


def rgba_to_hsla(r: int, g: int, b: int, a: int) -> tuple[float, float, float, float]:
    """Convert 8-bit RGBA to (hue turns, saturation, lightness, alpha), all in [0,1]."""
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0
    af = a / 255.0

    cmax = max(rf, gf, bf)
    cmin = min(rf, gf, bf)
    delta = cmax - cmin

    lightness = (cmax + cmin) / 2.0

    if delta == 0:
        return 0.0, 0.0, lightness, af

    saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))

    if cmax == rf:
        hue = 60.0 * (((gf - bf) / delta) % 6.0)
    elif cmax == gf:
        hue = 60.0 * (((bf - rf) / delta) + 2.0)
    else:
        hue = 60.0 * (((rf - gf) / delta) + 4.0)

    return hue / 360.0, saturation, lightness, af
