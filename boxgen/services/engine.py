"""CSG engine — the three solid operations the box assembler needs.

`CsgEngine` is the contract; `CadQueryEngine` is the OCC-backed implementation
used by the service. Solids are opaque to callers.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager

import cadquery as cq
from OCP.BRepOffset import BRepOffset_Mode
from OCP.BRepOffsetAPI import BRepOffsetAPI_MakeOffsetShape
from OCP.GeomAbs import GeomAbs_JoinType

from ..config import OFFSET_TOLERANCE
from .resolver import GeometryError

log = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

CORNER_STYLES = {
    "round": GeomAbs_JoinType.GeomAbs_Arc,
    "edge": GeomAbs_JoinType.GeomAbs_Intersection,
}


class CsgEngine(ABC):
    """Solid operations used to build a hollow box."""

    @abstractmethod
    def box(self, size: Vec3, center: Vec3):
        """Axis-aligned box of `size` centred on `center`."""

    @abstractmethod
    def subtract(self, solid, tool):
        """Boolean difference `solid - tool`."""

    @abstractmethod
    def rounded_offset(self, solid, radius: float, corners: str = "round", segments: int = 16):
        """Grow `solid` outward by `radius`, rounding convex edges."""


@contextmanager
def _engine_call(step: str):
    """Re-raise OCC/CadQuery failures as GeometryError."""
    try:
        yield
    except GeometryError:
        raise
    except Exception as e:  # OCC raises Standard_Failure subclasses, CadQuery ValueError
        log.warning("CSG %s failed: %s", step, e)
        raise GeometryError(f"CSG {step} failed: {e}") from e


def _single_solid(wp: cq.Workplane, step: str) -> cq.Solid:
    """The one closed solid held by `wp`; shells and multi-body results fail."""
    shape = wp.val()
    if not isinstance(shape, cq.Shape) or not shape.isValid():
        raise GeometryError(f"CSG {step} produced an invalid solid")
    solids = shape.Solids()
    if len(solids) != 1:
        raise GeometryError(f"CSG {step} produced {len(solids)} solids, expected 1")
    return solids[0]


def _check_valid(wp: cq.Workplane, step: str) -> cq.Workplane:
    _single_solid(wp, step)
    return wp


def _close_offset(shape: cq.Shape) -> cq.Shape:
    """Turn the offset skin into a solid. OCC returns the skin as a shell."""
    if isinstance(shape, cq.Solid):
        return shape
    shells = shape.Shells()
    if len(shells) != 1:
        raise GeometryError(f"CSG rounded offset produced {len(shells)} shells, expected 1")
    return cq.Solid.makeSolid(shells[0])


class CadQueryEngine(CsgEngine):
    """CadQuery/OpenCascade implementation.

    OCC keeps fillets as exact arcs, so `segments` has no effect on the
    B-rep; it is applied when the solid is tessellated for STL export.
    """

    def __init__(self, tolerance: float = OFFSET_TOLERANCE):
        self.tolerance = tolerance

    def box(self, size: Vec3, center: Vec3) -> cq.Workplane:
        if min(size) <= 0:
            raise GeometryError(f"Box size must be positive, got {size}")
        with _engine_call("box"):
            wp = cq.Workplane("XY").box(*size, centered=True).translate(center)
        return _check_valid(wp, "box")

    def subtract(self, solid: cq.Workplane, tool: cq.Workplane) -> cq.Workplane:
        with _engine_call("subtract"):
            wp = solid.cut(tool)
        return _check_valid(wp, "subtract")

    def rounded_offset(
        self,
        solid: cq.Workplane,
        radius: float,
        corners: str = "round",
        segments: int = 16,
    ) -> cq.Workplane:
        if radius <= 0:
            raise GeometryError(f"Offset radius must be positive, got {radius}")
        if corners not in CORNER_STYLES:
            raise GeometryError(f"Unknown corner style: {corners}")
        if segments < 4:
            raise GeometryError(f"Need at least 4 corner segments, got {segments}")

        base = _single_solid(solid, "subtract")
        with _engine_call("rounded offset"):
            builder = BRepOffsetAPI_MakeOffsetShape()
            builder.PerformByJoin(
                base.wrapped,
                radius,
                self.tolerance,
                BRepOffset_Mode.BRepOffset_Skin,
                False,
                False,
                CORNER_STYLES[corners],
            )
            if not builder.IsDone():
                raise GeometryError("CSG rounded offset did not complete")
            shape = _close_offset(cq.Shape.cast(builder.Shape()))
            wp = cq.Workplane("XY").add(shape)
        return _check_valid(wp, "rounded offset")
