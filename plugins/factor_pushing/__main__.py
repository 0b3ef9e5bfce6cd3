"""
Factor Pushing Automaton - Entry Point

Usage:
    python -m factor_pushing [preset] [options]

Options:
    --count N         Cells per row (ring size)
    --start V         Start value of row 0
    --step S          Increment between row-0 cells
    --rows R          Number of rows (time steps) to generate
    --modulo M        Modulo view with modulus M (2-50)
    --colormap NAME   Heatmap colormap
    --cell PX         Cell size in pixels for --snap
    --snap PATH       Render the grid to a PNG and exit (no window)
    --print           Print the grid as a text table and exit
    --list            List presets

Examples:
    python -m factor_pushing
    python -m factor_pushing wide
    python -m factor_pushing --count 30 --start 100 --rows 50 --print
    python -m factor_pushing odd_start --modulo 6 --snap odd.png
"""

import sys

from pydantic import ValidationError

from .presets import PRESET_ORDER, list_presets, preset_params
from .render import format_table, render_grid, save_png
from .simulation import generate
from .view import ViewSettings


_INT_OPTIONS = {
    "--count": "count",
    "--start": "start_value",
    "--step": "step",
    "--rows": "max_rows",
}


def main(argv=None):
    preset = "default"
    overrides = {}
    view_changes = {}
    cell_px = 12
    snap_path = None
    print_table = False

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    try:
        while i < len(args):
            arg = args[i]
            if arg in _INT_OPTIONS and i + 1 < len(args):
                overrides[_INT_OPTIONS[arg]] = int(args[i + 1])
                i += 2
            elif arg == "--modulo" and i + 1 < len(args):
                view_changes["modulo_mode"] = True
                view_changes["modulus"] = int(args[i + 1])
                i += 2
            elif arg == "--colormap" and i + 1 < len(args):
                view_changes["colormap"] = args[i + 1]
                i += 2
            elif arg == "--cell" and i + 1 < len(args):
                cell_px = max(1, int(args[i + 1]))
                i += 2
            elif arg == "--snap" and i + 1 < len(args):
                snap_path = args[i + 1]
                i += 2
            elif arg == "--print":
                print_table = True
                i += 1
            elif arg == "--list":
                print("\nAvailable presets:")
                for key, name, desc in list_presets():
                    print(f"    {key:12s} {name:16s} {desc}")
                print()
                return 0
            elif arg in ("--help", "-h"):
                print(__doc__)
                return 0
            elif arg in PRESET_ORDER:
                preset = arg
                i += 1
            else:
                print(f"[FPA] Unknown argument: {arg}")
                print("[FPA] Use --help for usage")
                return 2
    except ValueError as e:
        print(f"[FPA] Expected an integer after {args[i]}: {e}")
        return 2

    try:
        params = preset_params(preset).with_changes(**overrides)
        view = ViewSettings().with_changes(**view_changes)
    except ValidationError as e:
        print(f"[FPA] Invalid parameters:\n{e}")
        return 2

    if print_table or snap_path:
        grid = generate(params)
        if print_table:
            print(format_table(grid, view))
        if snap_path:
            save_png(render_grid(grid, view, cell_px=cell_px), snap_path)
            print(f"[FPA] saved: {snap_path} ({grid.row_count} rows x {grid.width} cells)")
        return 0

    from .viewer import Viewer

    print("[FPA] Starting Factor Pushing viewer")
    print(f"  Preset: {preset}")
    print(f"  Params: count={params.count} start={params.start_value} "
          f"step={params.step} rows={params.max_rows}")
    print()

    viewer = Viewer(start_preset=preset, params=params, view=view)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
