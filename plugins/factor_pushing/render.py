"""
Headless rendering of a GridState - no pygame dependency.

Used by the CLI (--snap / --print) and by the viewer, which blits the
same image and draws labels on top.
"""

import numpy as np

from .colormaps import apply_colormap, get_colormap, normalize, residue_colors
from .simulation import row_sum
from .view import ViewSettings, cell_label, residues


GAP_COLOR = (203, 213, 225)  # slate-300 grid lines


def cell_colors(grid, view=None):
    """(rows, count, 3) uint8 colour per cell for the given view."""
    if view is None:
        view = ViewSettings()
    if view.modulo_mode:
        return residue_colors(residues(grid, view.modulus), view.modulus)
    field = normalize(grid.as_array(), grid.min_val, grid.max_val)
    return apply_colormap(field, get_colormap(view.colormap))


def render_grid(grid, view=None, cell_px=8, gap=1):
    """
    Render the grid as an image, one square block per cell.

    Args:
        grid: GridState
        view: ViewSettings (standard heatmap if None)
        cell_px: Block size in pixels
        gap: Grid line width in pixels

    Returns:
        (H, W, 3) uint8 RGB image
    """
    colors = cell_colors(grid, view)
    n_rows, n_cols = colors.shape[:2]
    pitch = cell_px + gap

    h = n_rows * pitch + gap
    w = n_cols * pitch + gap
    image = np.empty((h, w, 3), dtype=np.uint8)
    image[:] = GAP_COLOR

    blocks = np.repeat(np.repeat(colors, cell_px, axis=0), cell_px, axis=1)
    ys = (gap + np.arange(n_rows)[:, None] * pitch + np.arange(cell_px)[None, :]).ravel()
    xs = (gap + np.arange(n_cols)[:, None] * pitch + np.arange(cell_px)[None, :]).ravel()
    image[np.ix_(ys, xs)] = blocks
    return image


def save_png(image, path):
    """Write an (H, W, 3) uint8 image to disk."""
    from PIL import Image
    Image.fromarray(image).save(path)
    return path


def format_table(grid, view=None, cache=None):
    """Plain-text grid: one line per row, cell labels then the row sum."""
    labels = [[cell_label(v, view, cache) for v in row] for row in grid.rows]
    width = max((len(s) for row in labels for s in row), default=1)
    t_width = len(str(max(grid.row_count - 1, 0)))

    lines = [
        f"Range: [{grid.min_val}, {grid.max_val}]    "
        f"Invariant Sum: {grid.invariant_sum:,}",
    ]
    for t, (row, cells) in enumerate(zip(grid.rows, labels)):
        body = " ".join(s.rjust(width) for s in cells)
        lines.append(f"t={str(t).rjust(t_width)} | {body} | {row_sum(row):,}")
    return "\n".join(lines)
