"""Solid serialization (STL/STEP) and as-built measurements."""
from __future__ import annotations

import base64
import logging
import math
import tempfile
from pathlib import Path

import cadquery as cq

from ..config import FILLET_SEGMENTS, STL_TOLERANCE

log = logging.getLogger(__name__)

FORMATS = {"stl": "STL", "step": "STEP"}


class ExportError(Exception):
    """Serializer could not write the solid."""


def angular_tolerance(segments: int) -> float:
    """Angular deflection [rad] giving `segments` facets per full circle."""
    return 2 * math.pi / segments


def export_solid(
    solid: cq.Workplane,
    fmt: str = "stl",
    ascii: bool = False,
    segments: int = FILLET_SEGMENTS,
    tolerance: float = STL_TOLERANCE,
) -> bytes:
    """Serialize `solid` and return the file bytes."""
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise ExportError(f"Unsupported export format: {fmt}")

    with tempfile.TemporaryDirectory(prefix="boxgen_") as tmpdir:
        path = Path(tmpdir) / f"output.{fmt}"
        try:
            cq.exporters.export(
                solid,
                str(path),
                exportType=FORMATS[fmt],
                tolerance=tolerance,
                angularTolerance=angular_tolerance(segments),
                opt={"ascii": ascii} if fmt == "stl" else None,
            )
        except Exception as e:  # OCC writer failures
            raise ExportError(f"{fmt.upper()} export failed: {e}") from e
        if not path.exists():
            raise ExportError(f"{fmt.upper()} file not produced")
        data = path.read_bytes()

    log.debug("Exported %s: %d bytes", fmt.upper(), len(data))
    return data


def export_base64(solid: cq.Workplane, fmt: str = "stl", **kwargs) -> str:
    return base64.b64encode(export_solid(solid, fmt, **kwargs)).decode()


def measure(solid: cq.Workplane) -> dict:
    """Bounding box, size, volume and solid count of the built shape."""
    shape = solid.val()
    bb = shape.BoundingBox()
    return {
        "bounding_box": {
            "min": [round(bb.xmin, 2), round(bb.ymin, 2), round(bb.zmin, 2)],
            "max": [round(bb.xmax, 2), round(bb.ymax, 2), round(bb.zmax, 2)],
        },
        "size": [round(bb.xlen, 2), round(bb.ylen, 2), round(bb.zlen, 2)],
        "volume": round(shape.Volume(), 2),
        "solid_count": len(shape.Solids()),
    }
