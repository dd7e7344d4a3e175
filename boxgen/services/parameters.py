"""Box parameter set, defaults, form bounds and dependent-field clamping."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace as dc_replace

from ..config import DEFAULT_BUILD_VOLUME


@dataclass(frozen=True)
class ParameterSet:
    """All manufacturing/dimension inputs for one hollow box [mm].

    Values are stored as given. Use `validator.validate` to check them.
    """

    nozzle_size: float
    wall_thickness: float
    layer_height: float
    edge_fillet: float
    build_volume_width: float
    build_volume_depth: float
    build_volume_height: float
    box_width: float
    box_depth: float
    box_height: float

    def replace(self, **changes) -> "ParameterSet":
        """Return a new set with `changes` applied."""
        return dc_replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ParameterSet":
        """Build from a mapping, filling missing fields from the defaults."""
        names = {f.name for f in fields(cls)}
        known = {k: float(v) for k, v in data.items() if k in names}
        return DEFAULT_PARAMETERS.replace(**known)


DEFAULT_PARAMETERS = ParameterSet(
    nozzle_size=0.4,
    wall_thickness=1.0,
    layer_height=0.2,
    edge_fillet=0.4,
    build_volume_width=DEFAULT_BUILD_VOLUME[0],
    build_volume_depth=DEFAULT_BUILD_VOLUME[1],
    build_volume_height=DEFAULT_BUILD_VOLUME[2],
    box_width=25.4,
    box_depth=25.4,
    box_height=25.4,
)


@dataclass(frozen=True)
class FieldBound:
    minimum: float
    maximum: float
    step: float


# Form ranges [mm]. Box sizes are also capped by the build volume on the same
# axis; edge_fillet is bounded by nozzle_size and wall_thickness.
FIELD_BOUNDS = {
    "nozzle_size": FieldBound(0.2, 1.0, 0.1),
    "wall_thickness": FieldBound(0.5, 1.5, 0.1),
    "layer_height": FieldBound(0.1, 1.0, 0.1),
    "box_width": FieldBound(8.35, 1000.0, 0.1),
    "box_depth": FieldBound(8.35, 1000.0, 0.1),
    "box_height": FieldBound(8.35, 1000.0, 0.1),
    "build_volume_width": FieldBound(1.0, 1000.0, 1.0),
    "build_volume_depth": FieldBound(1.0, 1000.0, 1.0),
    "build_volume_height": FieldBound(1.0, 1000.0, 1.0),
}


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


BUILD_AXES = [
    ("box_width", "build_volume_width"),
    ("box_depth", "build_volume_depth"),
    ("box_height", "build_volume_height"),
]


def fillet_bounds(params: ParameterSet) -> tuple[float, float]:
    """Allowed (min, max) edge fillet for the current nozzle and wall."""
    return params.nozzle_size, params.wall_thickness


def reclamp(params: ParameterSet) -> ParameterSet:
    """Pull every field back into its form range after an edit.

    Box sizes never exceed the (clamped) build volume on their axis. The
    edge fillet follows the (already clamped) nozzle size and wall thickness. A zero fillet means "no rounding" and is left alone.
    Non-finite values fall back to the defaults.
    """
    changes = {}
    for name, bound in FIELD_BOUNDS.items():
        value = getattr(params, name)
        if not math.isfinite(value):
            value = getattr(DEFAULT_PARAMETERS, name)
        changes[name] = _clamp(value, bound.minimum, bound.maximum)
    for box_field, volume_field in BUILD_AXES:
        # the build volume wins over the form minimum
        changes[box_field] = min(changes[box_field], changes[volume_field])
    clamped = params.replace(**changes)

    fillet = clamped.edge_fillet
    if not math.isfinite(fillet) or fillet < 0:
        fillet = 0.0
    if fillet > 0:
        lo, hi = fillet_bounds(clamped)
        # wall >= nozzle is not guaranteed here; the upper bound wins
        fillet = min(max(fillet, lo), hi)
    return clamped.replace(edge_fillet=fillet)
