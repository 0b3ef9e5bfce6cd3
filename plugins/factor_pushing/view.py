"""
Display settings and per-cell text for the grid.

Standard view labels each cell with its factorization (primes shown
plainly). Modulo view shows value mod m instead.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .colormaps import COLORMAPS, DEFAULT_COLORMAP
from .primes import factorize, is_prime


class ViewSettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    modulo_mode: bool = Field(default=False, alias="isModuloMode")
    modulus: int = Field(default=5, ge=2, le=50)
    colormap: str = DEFAULT_COLORMAP

    @field_validator("colormap")
    @classmethod
    def _known_colormap(cls, v):
        if v not in COLORMAPS:
            raise ValueError(
                f"unknown colormap {v!r}, expected one of {sorted(COLORMAPS)}")
        return v

    def with_changes(self, **changes):
        data = self.model_dump()
        data.update(changes)
        return ViewSettings(**data)


def residue(value, modulus):
    """Floor modulo, always in [0, modulus)."""
    return value % modulus


def residues(grid, modulus):
    """(rows, count) int64 array of every cell's residue."""
    return np.array([[v % modulus for v in row] for row in grid.rows],
                    dtype=np.int64)


def cell_label(value, view=None, cache=None):
    """Text drawn inside a cell."""
    if view is not None and view.modulo_mode:
        return str(residue(value, view.modulus))
    if is_prime(value, cache):
        return str(value)
    return factorize(value, cache)


def cell_tooltip(value, row, col, view=None, cache=None):
    """Hover details for one cell."""
    modulus = view.modulus if view is not None else ViewSettings().modulus
    return "\n".join([
        f"Row: {row}, Col: {col}",
        f"Value: {value}",
        f"Factors: {factorize(value, cache)}",
        f"Mod {modulus}: {residue(value, modulus)}",
    ])
