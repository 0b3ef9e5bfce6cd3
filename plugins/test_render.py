#!/usr/bin/env python3
"""
Tests for headless rendering, view settings and the CLI.

Verifies:
1. Heatmap / modulo colours and image geometry
2. Cell labels and tooltips
3. Text table output and PNG export
4. CLI argument handling (no window)
5. The wheel leaves out exactly the pygame modules
"""

import ast
import os
import tempfile

import numpy as np
import pytest
from pydantic import ValidationError

from factor_pushing.__main__ import main
from factor_pushing.colormaps import (
    COLORMAP_ORDER, SLATE_800, WHITE, apply_colormap, get_colormap, normalize,
    residue_palette, text_color_for,
)
from factor_pushing.render import GAP_COLOR, cell_colors, format_table, render_grid, save_png
from factor_pushing.simulation import SimulationParams, generate
from factor_pushing.view import ViewSettings, cell_label, cell_tooltip, residues


def _small_grid():
    # rows: (10, 11, 12, 13), (18, 5, 20, 3)
    return generate(SimulationParams(count=4, start_value=10, step=1, max_rows=2))


def test_colormap_luts():
    for name in COLORMAP_ORDER:
        lut = get_colormap(name)
        assert lut.shape == (256, 3)
        assert lut.dtype == np.uint8
    heat = get_colormap("heat_blue")
    assert int(heat[0].sum()) > int(heat[255].sum()), "low values are lighter"
    assert heat[255, 2] > heat[255, 0], "high end is blue"
    print("  ✓ colormap LUTs")


def test_normalize_flat_range():
    field = normalize([[5, 5], [5, 5]], 5, 5)
    assert np.all(field == 0.0)
    field = normalize([[0, 5, 10]], 0, 10)
    assert np.allclose(field, [[0.0, 0.5, 1.0]])


def test_heatmap_extremes():
    grid = _small_grid()
    colors = cell_colors(grid)
    lut = get_colormap("heat_blue")
    # min (3) and max (20) sit in row 1
    assert tuple(colors[1, 3]) == tuple(lut[0])
    assert tuple(colors[1, 2]) == tuple(lut[255])
    assert np.array_equal(colors, apply_colormap(normalize(grid.as_array(), 3, 20), lut))


def test_modulo_colors():
    grid = _small_grid()
    view = ViewSettings(modulo_mode=True, modulus=5)
    res = residues(grid, 5)
    assert res.tolist() == [[0, 1, 2, 3], [3, 0, 0, 3]]
    colors = cell_colors(grid, view)
    assert tuple(colors[0, 0]) == SLATE_800
    assert tuple(colors[0, 3]) == tuple(colors[1, 0])
    assert len({tuple(c) for c in residue_palette(7)}) == 7
    print("  ✓ modulo colours")


def test_render_geometry():
    grid = _small_grid()
    image = render_grid(grid, cell_px=8, gap=1)
    assert image.shape == (2 * 9 + 1, 4 * 9 + 1, 3)
    assert tuple(image[0, 0]) == GAP_COLOR
    colors = cell_colors(grid)
    # Interior of cell (row 1, col 2)
    assert tuple(image[1 + 9 + 4, 1 + 2 * 9 + 4]) == tuple(colors[1, 2])
    # Gap line between columns 0 and 1
    assert tuple(image[3, 9]) == GAP_COLOR
    print("  ✓ render geometry")


def test_cell_labels():
    assert cell_label(13) == "13"
    assert cell_label(12) == "2²·3"
    assert cell_label(1) == "1"
    assert cell_label(0) == "0"
    view = ViewSettings(modulo_mode=True, modulus=5)
    assert cell_label(12, view) == "2"
    assert cell_label(-1, view) == "4", "residues are never negative"


def test_cell_tooltip():
    text = cell_tooltip(12, 3, 7, ViewSettings(modulus=7))
    assert text.split("\n") == [
        "Row: 3, Col: 7", "Value: 12", "Factors: 2²·3", "Mod 7: 5",
    ]


def test_view_settings_validation():
    with pytest.raises(ValidationError):
        ViewSettings(modulus=1)
    with pytest.raises(ValidationError):
        ViewSettings(modulus=51)
    with pytest.raises(ValidationError):
        ViewSettings(colormap="rainbow")
    view = ViewSettings(isModuloMode=True)
    assert view.modulo_mode
    assert view.with_changes(modulus=9).modulus == 9


def test_text_color():
    assert text_color_for((0, 0, 0)) == WHITE
    assert text_color_for((250, 250, 250)) == SLATE_800


def test_format_table():
    table = format_table(_small_grid())
    lines = table.split("\n")
    assert lines[0] == "Range: [3, 20]    Invariant Sum: 46"
    assert len(lines) == 3
    assert lines[1].startswith("t=0 |")
    assert lines[1].endswith("| 46")
    assert "2²·3" in lines[1]
    assert "2²·5" in lines[2]  # 20


def test_save_png():
    from PIL import Image

    image = render_grid(_small_grid(), cell_px=4)
    with tempfile.TemporaryDirectory() as tmp:
        path = save_png(image, os.path.join(tmp, "grid.png"))
        with Image.open(path) as img:
            assert img.size == (image.shape[1], image.shape[0])
    print("  ✓ PNG export")


def test_cli_print_and_snap():
    assert main(["--count", "4", "--start", "10", "--rows", "2", "--print"]) == 0
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "snap.png")
        assert main(["odd_start", "--modulo", "6", "--cell", "3", "--snap", path]) == 0
        assert os.path.exists(path)


def test_cli_rejects_bad_input():
    assert main(["--bogus"]) == 2
    assert main(["--rows", "many"]) == 2
    assert main(["--modulo", "1", "--print"]) == 2
    assert main(["--colormap", "rainbow", "--print"]) == 2
    assert main(["--list"]) == 0
    print("  ✓ CLI")


def test_wheel_leaves_out_only_pygame_modules():
    """setup.py's exclusion list matches the modules that import pygame."""
    plugins = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(plugins, os.pardir, "setup.py")) as f:
        tree = ast.parse(f.read())
    excluded = next(
        ast.literal_eval(node.value.args[0])
        for node in tree.body
        if isinstance(node, ast.Assign) and node.targets[0].id == "PYGAME_MODULES"
    )

    package = os.path.join(plugins, "factor_pushing")
    uses_pygame = set()
    for name in os.listdir(package):
        if not name.endswith(".py"):
            continue
        with open(os.path.join(package, name)) as f:
            module = ast.parse(f.read())
        for node in ast.walk(module):
            if isinstance(node, ast.Import) and any(a.name == "pygame" for a in node.names):
                uses_pygame.add(name[:-3])
    assert uses_pygame == set(excluded)
    print("  ✓ headless wheel contents")


if __name__ == "__main__":
    print("\n=== Testing Rendering & CLI ===\n")

    test_colormap_luts()
    test_normalize_flat_range()
    test_heatmap_extremes()
    test_modulo_colors()
    test_render_geometry()
    test_cell_labels()
    test_cell_tooltip()
    test_view_settings_validation()
    test_text_color()
    test_format_table()
    test_save_png()
    test_cli_print_and_snap()
    test_cli_rejects_bad_input()
    test_wheel_leaves_out_only_pygame_modules()

    print("\n✓ All tests passed!\n")
