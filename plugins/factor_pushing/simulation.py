"""
Factor Pushing Automaton - Row-by-Row Simulation

Row 0 is the linear sequence start_value + i * step. Every following row
applies the transition rule to the previous row, simultaneously for all
cells on a ring:

    x_i' = x_i - gpf(x_i) + gpf(x_{i-1})

Each cell pushes its own greatest prime factor out and receives its left
neighbour's. The grid is always recomputed wholesale from parameters.

Usage:
    from factor_pushing.simulation import SimulationParams, generate
    grid = generate(SimulationParams(count=20, start_value=1, max_rows=30))
    grid.min_val, grid.max_val, grid.invariant_sum
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .primes import get_gpf


class SimulationCancelled(Exception):
    """Raised when a cooperative cancel check stops a run between rows."""


class SimulationParams(BaseModel):
    """Immutable input to one simulation run.

    count and max_rows below 1 are clamped to 1 so a minimal single-row
    grid always comes back. Non-integer input is rejected.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    count: int = Field(default=20, description="Cells per row (ring size)")
    start_value: int = Field(default=1, alias="startValue")
    step: int = Field(default=1, description="Row 0 increment between cells")
    max_rows: int = Field(default=30, alias="maxRows")

    @field_validator("count", "max_rows")
    @classmethod
    def _clamp_positive(cls, v):
        return max(1, v)

    def with_changes(self, **changes):
        """Return a new validated params object with some fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return SimulationParams(**data)


class GridState:
    """Rows produced by one run plus the tight min/max over every cell."""

    __slots__ = ("_rows", "_min_val", "_max_val")

    def __init__(self, rows, min_val, max_val):
        self._rows = tuple(tuple(r) for r in rows)
        self._min_val = min_val
        self._max_val = max_val

    @property
    def rows(self):
        return self._rows

    @property
    def min_val(self):
        return self._min_val

    @property
    def max_val(self):
        return self._max_val

    @property
    def row_count(self):
        return len(self._rows)

    @property
    def width(self):
        return len(self._rows[0]) if self._rows else 0

    def row_sums(self):
        return [row_sum(r) for r in self._rows]

    @property
    def invariant_sum(self):
        """Sum of the last row (0 for an empty grid)."""
        return row_sum(self._rows[-1]) if self._rows else 0

    def as_array(self):
        """(rows, count) float64 array for colour mapping.

        Float so values past the int64 range still render.
        """
        return np.asarray(self._rows, dtype=np.float64)

    def __eq__(self, other):
        if not isinstance(other, GridState):
            return NotImplemented
        return (self._rows == other._rows and self._min_val == other._min_val
                and self._max_val == other._max_val)

    def __hash__(self):
        return hash((self._rows, self._min_val, self._max_val))

    def __repr__(self):
        return (f"GridState(rows={self.row_count}x{self.width}, "
                f"min_val={self._min_val}, max_val={self._max_val})")


def row_sum(row):
    """Exact sum of one row's cells."""
    return sum(row)


def step_row(row, cache=None):
    """Apply the transition rule once, reading only from the old row."""
    count = len(row)
    gpfs = [get_gpf(v, cache) for v in row]
    # index 0's left neighbour wraps to count - 1
    return tuple(
        row[i] - gpfs[i] + gpfs[(i - 1 + count) % count]
        for i in range(count)
    )


def generate(params, cache=None, should_cancel=None):
    """Generate the full grid for params.

    Args:
        params: SimulationParams (or a dict of its fields)
        cache: FactorCache for GPF lookups (module default if None)
        should_cancel: optional zero-arg callable checked between rows;
            returning True raises SimulationCancelled

    Returns:
        GridState with exactly max_rows rows of count cells each
    """
    if not isinstance(params, SimulationParams):
        params = SimulationParams.model_validate(params)

    count = params.count
    max_rows = max(1, params.max_rows)

    first = tuple(params.start_value + i * params.step for i in range(count))
    rows = [first]
    current_min = min(first)
    current_max = max(first)

    for _ in range(max_rows - 1):
        if should_cancel is not None and should_cancel():
            raise SimulationCancelled(
                f"stopped after {len(rows)} of {max_rows} rows")
        new_row = step_row(rows[-1], cache)
        rows.append(new_row)

        # Track min/max for heatmap normalisation
        lo, hi = min(new_row), max(new_row)
        if lo < current_min:
            current_min = lo
        if hi > current_max:
            current_max = hi

    return GridState(rows, current_min, current_max)
