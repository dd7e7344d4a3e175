"""Geometry assembly — outer box minus cavity, then optional edge rounding."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from ..config import FILLET_SEGMENTS
from .engine import CadQueryEngine, CsgEngine
from .parameters import ParameterSet
from .resolver import ResolvedDimensions

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimensionReport:
    """As-built dimensions. Consumers use these, not the requested ones."""

    width: float
    depth: float
    height: float
    wall_thickness: float
    layer_count: int
    inner_width: float
    inner_depth: float
    inner_height: float
    edge_fillet: float
    envelope: tuple[float, float, float]
    fillet_segments: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["envelope"] = list(self.envelope)
        return data


def assemble(
    params: ParameterSet,
    resolved: ResolvedDimensions,
    engine: CsgEngine | None = None,
    segments: int = FILLET_SEGMENTS,
):
    """Build the hollow box. Returns (solid, DimensionReport).

    The base sits on Z=0. The cavity starts one wall thickness above the
    base and reaches the top face, leaving the box open. Engine failures
    surface as GeometryError.
    """
    engine = engine or CadQueryEngine()
    wall = params.wall_thickness
    height = resolved.actual_box_height

    outer = engine.box(
        (params.box_width, params.box_depth, height),
        (0.0, 0.0, height / 2),
    )
    cavity = engine.box(
        (resolved.inner_width, resolved.inner_depth, resolved.inner_height),
        (0.0, 0.0, wall + resolved.inner_height / 2),
    )
    solid = engine.subtract(outer, cavity)
    log.debug("Hollow box %.3fx%.3fx%.3f, wall %.3f", params.box_width, params.box_depth, height, wall)

    fillet = params.edge_fillet
    if fillet > 0:
        solid = engine.rounded_offset(solid, fillet, corners="round", segments=segments)
        log.debug("Rounded edges r=%.3f (%d segments)", fillet, segments)

    grow = 2 * fillet
    report = DimensionReport(
        width=params.box_width,
        depth=params.box_depth,
        height=height,
        wall_thickness=wall,
        layer_count=resolved.layer_count,
        inner_width=resolved.inner_width,
        inner_depth=resolved.inner_depth,
        inner_height=resolved.inner_height,
        edge_fillet=fillet,
        envelope=(params.box_width + grow, params.box_depth + grow, height + grow),
        fillet_segments=segments,
    )
    return solid, report
