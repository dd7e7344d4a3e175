"""Layer quantization and cavity sizing for a validated parameter set."""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass

from .parameters import ParameterSet

log = logging.getLogger(__name__)

# Absorbs float error in box_height / layer_height (25.4 / 0.2 -> 126.999...)
LAYER_EPSILON = 1e-9
HEIGHT_DECIMALS = 9


class GeometryError(Exception):
    """Resolved or assembled geometry is degenerate, or the CSG engine failed."""


@dataclass(frozen=True)
class ResolvedDimensions:
    actual_box_height: float
    layer_count: int
    inner_width: float
    inner_depth: float
    inner_height: float
    wall_thickness: float

    def to_dict(self) -> dict:
        return asdict(self)


def quantize_height(box_height: float, layer_height: float) -> tuple[int, float]:
    """Round `box_height` down to whole layers. Returns (layer_count, height)."""
    layer_count = math.floor(box_height / layer_height + LAYER_EPSILON)
    actual = round(layer_count * layer_height, HEIGHT_DECIMALS)
    # rounding must never push the printed height past the request
    if actual > box_height:
        actual = box_height
    return layer_count, actual


def resolve(params: ParameterSet) -> ResolvedDimensions:
    """Quantize the height and derive the cavity.

    Only call with a parameter set that passed validation. Raises
    GeometryError when quantization leaves no printable layer or no cavity.
    """
    layer_count, actual_height = quantize_height(params.box_height, params.layer_height)
    if layer_count <= 0:
        raise GeometryError(
            f"Box height {params.box_height} mm is smaller than one "
            f"{params.layer_height} mm layer"
        )

    wall = params.wall_thickness
    inner_width = params.box_width - 2 * wall
    inner_depth = params.box_depth - 2 * wall
    inner_height = actual_height - wall
    if inner_width <= 0 or inner_depth <= 0 or inner_height <= 0:
        raise GeometryError("Wall thickness too large for resolved dimensions")

    resolved = ResolvedDimensions(
        actual_box_height=actual_height,
        layer_count=layer_count,
        inner_width=inner_width,
        inner_depth=inner_depth,
        inner_height=inner_height,
        wall_thickness=wall,
    )
    log.debug(
        "Resolved %d layers: height %.4f (requested %.4f), cavity %.3fx%.3fx%.3f",
        layer_count, actual_height, params.box_height,
        inner_width, inner_depth, inner_height,
    )
    return resolved
