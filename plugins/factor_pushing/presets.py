"""
Factor Pushing Parameter Presets

Each preset is a starting parameter set worth looking at. Keys other than
name/description map straight onto SimulationParams fields.
"""

from .simulation import SimulationParams


PRESETS = {
    "default": {
        "name": "Counting Ring",
        "description": "1..20 on a ring, the classic starting picture",
        "count": 20, "start_value": 1, "step": 1, "max_rows": 30,
    },
    "wide": {
        "name": "Wide Ring",
        "description": "60 consecutive integers, long horizon",
        "count": 60, "start_value": 2, "step": 1, "max_rows": 80,
    },
    "odd_start": {
        "name": "Odd Ladder",
        "description": "Odd numbers only - no factor of 2 anywhere in row 0",
        "count": 24, "start_value": 3, "step": 2, "max_rows": 40,
    },
    "even_step": {
        "name": "Even Ladder",
        "description": "Multiples of 6, heavy in small prime factors",
        "count": 16, "start_value": 6, "step": 6, "max_rows": 40,
    },
    "deep": {
        "name": "Deep Run",
        "description": "Large starting values, slow drift",
        "count": 12, "start_value": 1000, "step": 7, "max_rows": 120,
    },
}

PRESET_ORDER = ["default", "wide", "odd_start", "even_step", "deep"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def preset_params(name):
    """SimulationParams for a preset (KeyError if unknown)."""
    p = PRESETS[name]
    return SimulationParams(**{k: v for k, v in p.items()
                               if k not in ("name", "description")})


def list_presets():
    """Return list of (key, name, description) in display order."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]
