"""Manufacturability checks for a box parameter set.

Every check runs; violations come back as an ordered list of messages and
nothing here raises for bad values.
"""
from __future__ import annotations

import math

from .parameters import ParameterSet

# (field, label) in reporting order
POSITIVE_FIELDS = [
    ("wall_thickness", "Wall thickness"),
    ("layer_height", "Layer height"),
    ("nozzle_size", "Nozzle size"),
    ("build_volume_width", "Build volume width"),
    ("build_volume_depth", "Build volume depth"),
    ("build_volume_height", "Build volume height"),
    ("box_width", "Box width"),
    ("box_depth", "Box depth"),
    ("box_height", "Box height"),
]

BUILD_LIMITS = [
    ("box_width", "build_volume_width", "width"),
    ("box_depth", "build_volume_depth", "depth"),
    ("box_height", "build_volume_height", "height"),
]


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def validate(params: ParameterSet) -> list[str]:
    """Return violation messages for `params`; empty means valid."""
    errors: list[str] = []

    for name, label in POSITIVE_FIELDS:
        value = getattr(params, name)
        if not math.isfinite(value):
            errors.append(f"{label} must be a finite number")
        elif value <= 0:
            errors.append(f"{label} must be greater than 0")

    if not math.isfinite(params.edge_fillet):
        errors.append("Edge fillet must be a finite number")
    elif params.edge_fillet < 0:
        errors.append("Edge fillet must not be negative")

    # relational checks only compare finite values; the rest are reported above
    wall = params.wall_thickness
    if _finite(wall, params.box_width) and wall * 2 >= params.box_width:
        errors.append("Wall thickness is too large for box width")
    if _finite(wall, params.box_depth) and wall * 2 >= params.box_depth:
        errors.append("Wall thickness is too large for box depth")
    if _finite(wall, params.box_height) and wall >= params.box_height:
        errors.append("Wall thickness is too large for box height")
    if _finite(wall, params.nozzle_size) and wall < params.nozzle_size:
        errors.append("Wall thickness must be at least the nozzle size")

    fillet = params.edge_fillet
    # zero fillet disables rounding, so the nozzle floor only applies above it
    if _finite(fillet, params.nozzle_size) and 0 < fillet < params.nozzle_size:
        errors.append("Edge fillet must be at least the nozzle size")
    if _finite(fillet, wall) and fillet > wall:
        errors.append("Edge fillet should not exceed wall thickness")

    for box_field, volume_field, axis in BUILD_LIMITS:
        box, volume = getattr(params, box_field), getattr(params, volume_field)
        if _finite(box, volume) and box > volume:
            errors.append(f"Box {axis} exceeds build volume {axis}")

    return errors


def is_valid(params: ParameterSet) -> bool:
    return not validate(params)
