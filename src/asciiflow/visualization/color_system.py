"""
Color system module for ASCII Fluid Lab.

Converts the per-particle hue and alpha into RGBA arrays for matplotlib
artists, using HLS as the color space (equivalent to CSS hsla()), and the
configured hex background into the RGBA tuple the figure and axes are
painted with.
"""

import colorsys

import numpy as np

from .. import config


def hex_to_rgba(hex_color, alpha=1.0):
    """
    Convert a ``#rrggbb`` color to an RGBA tuple (0-1 range).

    Args:
        hex_color (str): Hex color, leading '#' optional
        alpha (float): Opacity of the result

    Returns:
        tuple: (r, g, b, a)
    """
    digits = hex_color.lstrip('#')
    if len(digits) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {hex_color!r}")
    r, g, b = (int(digits[i:i+2], 16) / 255.0 for i in (0, 2, 4))
    return r, g, b, float(alpha)


def background_rgba():
    """Surface background color from config.BACKGROUND_COLOR."""
    return hex_to_rgba(config.BACKGROUND_COLOR)


def hsl_to_rgb(hue, saturation=config.GLYPH_SATURATION, lightness=config.GLYPH_LIGHTNESS):
    """
    Convert a CSS-style HSL color to RGB.

    Args:
        hue (float): Hue in degrees (wrapped into [0, 360))
        saturation (float): 0..1
        lightness (float): 0..1

    Returns:
        tuple: (r, g, b) in 0..1
    """
    return colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)


def particle_colors(hues, alphas, saturation=config.GLYPH_SATURATION, lightness=config.GLYPH_LIGHTNESS):
    """
    RGBA colors for a batch of particles.

    Args:
        hues (array-like): Hue in degrees per particle, shape (N,)
        alphas (array-like): Opacity per particle, shape (N,)

    Returns:
        np.ndarray: RGBA colors, shape (N, 4)
    """
    hues = np.asarray(hues, dtype=float)
    alphas = np.asarray(alphas, dtype=float)
    colors = np.zeros((len(hues), 4))
    for i, hue in enumerate(hues):
        colors[i, :3] = hsl_to_rgb(hue, saturation, lightness)
    colors[:, 3] = np.clip(alphas, 0.0, 1.0)
    return colors


def trail_alpha_factors(tail_length, min_factor=config.TRAIL_TAIL_MIN_FACTOR, exponent=config.TRAIL_TAIL_EXP):
    """
    Alpha factor per trail segment, oldest first.

    factor(t) = min + (1 - min) * ((t + 1) / tail_length) ** exponent
    """
    t = np.arange(tail_length, dtype=float)
    return min_factor + (1.0 - min_factor) * ((t + 1) / tail_length) ** exponent
