"""
Colormaps for the Factor Pushing heatmap

Maps normalised cell values [0, 1] to RGB colors. Each colormap is a
(256, 3) uint8 array that serves as a lookup table. The modulo view uses
a separate per-residue hue wheel instead of a LUT.
"""

import colorsys
import numpy as np


SLATE_800 = (30, 41, 59)
WHITE = (255, 255, 255)


def _interpolate_colors(stops, n=256):
    """
    Build a colormap by interpolating between color stops.

    Args:
        stops: List of (position, (r, g, b)) where position is [0, 1]
        n: Number of entries in the LUT
    """
    lut = np.zeros((n, 3), dtype=np.uint8)
    positions = [s[0] for s in stops]
    colors = [s[1] for s in stops]

    for i in range(n):
        t = i / (n - 1)
        for j in range(len(positions) - 1):
            if positions[j] <= t <= positions[j + 1]:
                span = positions[j + 1] - positions[j]
                frac = 0 if span == 0 else (t - positions[j]) / span
                for c in range(3):
                    lut[i, c] = int(colors[j][c] + frac * (colors[j+1][c] - colors[j][c]))
                break
    return lut


def hsl_to_rgb(hue_deg, saturation, lightness):
    """CSS-style hsl() to an (r, g, b) uint8 tuple. s/l in [0, 1]."""
    r, g, b = colorsys.hls_to_rgb((hue_deg % 360) / 360.0, lightness, saturation)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


# --- Colormap Definitions ---

def heat_blue(n=256):
    """Light to dark blue at hue 220: lightness 95% down to 30%."""
    lut = np.zeros((n, 3), dtype=np.uint8)
    for i in range(n):
        t = i / (n - 1)
        lut[i] = hsl_to_rgb(220, 0.70, 0.95 - t * 0.65)
    return lut


def thermal():
    """Thermal camera look - blue cold to red hot."""
    return _interpolate_colors([
        (0.00, (0, 0, 20)),
        (0.20, (0, 0, 120)),
        (0.40, (30, 80, 180)),
        (0.50, (60, 180, 80)),
        (0.60, (200, 200, 30)),
        (0.80, (240, 80, 0)),
        (1.00, (255, 255, 255)),
    ])


def fire():
    """Black through red to yellow-white."""
    return _interpolate_colors([
        (0.00, (0, 0, 0)),
        (0.25, (120, 15, 0)),
        (0.55, (230, 80, 10)),
        (0.80, (255, 200, 50)),
        (1.00, (255, 255, 210)),
    ])


def ocean():
    """Deep blue to cyan to white."""
    return _interpolate_colors([
        (0.00, (0, 2, 15)),
        (0.30, (5, 30, 95)),
        (0.60, (20, 120, 190)),
        (1.00, (210, 250, 255)),
    ])


def plasma():
    """Purple-pink-orange-yellow."""
    return _interpolate_colors([
        (0.00, (10, 0, 20)),
        (0.30, (90, 15, 140)),
        (0.55, (195, 40, 100)),
        (0.80, (240, 140, 35)),
        (1.00, (245, 240, 80)),
    ])


# Registry of all colormaps
COLORMAPS = {
    "heat_blue": heat_blue,
    "thermal": thermal,
    "fire": fire,
    "ocean": ocean,
    "plasma": plasma,
}

COLORMAP_ORDER = list(COLORMAPS.keys())
DEFAULT_COLORMAP = "heat_blue"


def get_colormap(name):
    """Get a colormap LUT (256, 3) uint8 array by name."""
    return COLORMAPS[name]()


def normalize(values, min_val, max_val):
    """Scale values into [0, 1] against the grid bounds.

    A flat grid (min == max) uses a range of 1 so everything maps to 0.
    """
    span = float(max_val - min_val) or 1.0
    field = (np.asarray(values, dtype=np.float64) - float(min_val)) / span
    return np.clip(field, 0.0, 1.0)


def apply_colormap(field, lut):
    """
    Apply a colormap LUT to a 2D float field.

    Args:
        field: 2D numpy array with values in [0, 1]
        lut: (256, 3) uint8 colormap lookup table

    Returns:
        (H, W, 3) uint8 RGB image
    """
    indices = (np.clip(field, 0, 1) * 255).astype(np.uint8)
    return lut[indices]


def residue_palette(modulus):
    """(modulus, 3) uint8 table: one hue per residue, residue 0 is dark."""
    palette = np.zeros((modulus, 3), dtype=np.uint8)
    palette[0] = SLATE_800
    for r in range(1, modulus):
        palette[r] = hsl_to_rgb(r * 360.0 / modulus, 0.70, 0.90)
    return palette


def residue_colors(residues, modulus):
    """Map a 2D array of residues in [0, modulus) to (H, W, 3) uint8."""
    return residue_palette(modulus)[np.asarray(residues, dtype=np.int64)]


def residue_text_color(residue, modulus):
    """Label colour for one residue cell in the modulo view."""
    if residue == 0:
        return WHITE
    return hsl_to_rgb(residue * 360.0 / modulus, 0.80, 0.30)


def text_color_for(rgb):
    """White text on dark cells, slate text on light ones."""
    r, g, b = (int(c) for c in rgb)
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return WHITE if luminance < 140 else SLATE_800
