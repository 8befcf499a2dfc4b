"""RGB to HSL conversion and cross-representation colour equality.

Every comparison between an Rgb and an Hsl goes through rgb_to_hsl: the RGB
side is converted and the two HSL triples are compared component by
component. There is no HSL to RGB path, so equality never depends on a
round trip.

Stored saturation and lightness are truncated (int(x * 100)), not rounded,
which decides equality at boundary values:

    >>> rgb_to_hsl(150, 50, 60)
    Hsl(h=354, s=50, l=39)

rgb_array_to_hsl applies the same float64 operations, in the same order,
to a whole pixel array, so each pixel agrees exactly with rgb_to_hsl.
"""

import math

import numpy as np

from colour_checker.core.types import Colour, Hsl, Rgb


def _round_half_up(value: float) -> int:
    # Hue segments are never negative, so floor(x + 0.5) rounds halves away from zero
    return math.floor(value + 0.5)


def rgb_to_hsl(r: int, g: int, b: int) -> Hsl:
    """Convert 8-bit RGB channels to an Hsl colour."""
    red = r / 255.0
    green = g / 255.0
    blue = b / 255.0

    c_max = max(red, green, blue)
    c_min = min(red, green, blue)
    chroma = c_max - c_min

    if chroma == 0.0:
        hue = 0
    else:
        if red == c_max:
            segment = (green - blue) / chroma
            # Wrap negative segments into 0..6; the non-negative addend is zero.
            # TODO: confirm whether a non-zero shift was meant for segment >= 0
            shift = 360.0 / 60.0 if segment < 0.0 else 0.0 / 60.0
        elif green == c_max:
            segment = (blue - red) / chroma
            shift = 120.0 / 60.0
        elif blue == c_max:
            segment = (red - green) / chroma
            shift = 240.0 / 60.0
        else:
            raise AssertionError(f'no channel of rgb({r}, {g}, {b}) matches its maximum {c_max!r}')
        hue = _round_half_up((segment + shift) * 60.0)

    lightness = 0.5 * (c_max + c_min)

    denominator = 1.0 - abs(2 * lightness - 1.0)
    if lightness == 1.0 or denominator == 0.0:
        saturation = 0.0
    else:
        saturation = chroma / denominator

    return Hsl(hue, int(saturation * 100), int(lightness * 100))


def to_hsl(colour: Colour) -> Hsl:
    """Return the HSL form of a colour (Hsl values are returned unchanged)."""
    if isinstance(colour, Hsl):
        return colour
    return rgb_to_hsl(colour.r, colour.g, colour.b)


def colours_equal(a: Colour, b: Colour) -> bool:
    """Compare two colours, converting any RGB side to HSL when the variants differ."""
    if isinstance(a, Rgb) and isinstance(b, Rgb):
        return (a.r, a.g, a.b) == (b.r, b.g, b.b)
    return tuple(to_hsl(a)) == tuple(to_hsl(b))


def rgb_array_to_hsl(pixels) -> np.ndarray:
    """Convert an (..., 3) array of RGB channels to an (..., 3) int array of (h, s, l)."""
    arr = np.asarray(pixels)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f'expected an array with a trailing axis of 3 channels, got shape {arr.shape}')

    scaled = arr.astype(np.float64) / 255.0
    red, green, blue = scaled[..., 0], scaled[..., 1], scaled[..., 2]

    c_max = np.maximum(np.maximum(red, green), blue)
    c_min = np.minimum(np.minimum(red, green), blue)
    chroma = c_max - c_min

    # Grey pixels divide by zero here; np.select discards those lanes below
    with np.errstate(divide='ignore', invalid='ignore'):
        red_segment = (green - blue) / chroma
        red_segment = red_segment + np.where(red_segment < 0.0, 360.0 / 60.0, 0.0 / 60.0)
        green_segment = (blue - red) / chroma + 120.0 / 60.0
        blue_segment = (red - green) / chroma + 240.0 / 60.0

    segment = np.select(
        [chroma == 0.0, red == c_max, green == c_max],
        [0.0, red_segment, green_segment],
        default=blue_segment,
    )
    hue = np.floor(segment * 60.0 + 0.5)

    lightness = 0.5 * (c_max + c_min)
    denominator = 1.0 - np.abs(2 * lightness - 1.0)
    with np.errstate(divide='ignore', invalid='ignore'):
        saturation = np.where((lightness == 1.0) | (denominator == 0.0), 0.0, chroma / denominator)

    hsl = np.stack([hue, np.trunc(saturation * 100), np.trunc(lightness * 100)], axis=-1)
    return hsl.astype(np.int64)
