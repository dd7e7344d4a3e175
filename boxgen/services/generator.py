"""Generation facade — validate, resolve, assemble in one call."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .assembler import DimensionReport, assemble
from .engine import CsgEngine
from .parameters import ParameterSet
from .resolver import GeometryError, resolve
from .validator import validate

log = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_INVALID = "invalid"
STATUS_GEOMETRY_ERROR = "geometry_error"


@dataclass(frozen=True)
class GenerationResult:
    status: str
    solid: Any = None
    report: DimensionReport | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def ok(cls, solid, report: DimensionReport) -> "GenerationResult":
        return cls(status=STATUS_OK, solid=solid, report=report)

    @classmethod
    def invalid(cls, errors: list[str]) -> "GenerationResult":
        return cls(status=STATUS_INVALID, errors=list(errors))

    @classmethod
    def geometry_error(cls, message: str) -> "GenerationResult":
        return cls(status=STATUS_GEOMETRY_ERROR, errors=[message])


def generate(params: ParameterSet, engine: CsgEngine | None = None) -> GenerationResult:
    """Turn a parameter set into a solid plus its dimension report.

    Violations stop the pass before any geometry is built. Geometry and
    engine failures come back as a single user-facing message.
    """
    errors = validate(params)
    if errors:
        log.info("Rejected parameters: %d violation(s)", len(errors))
        return GenerationResult.invalid(errors)

    try:
        resolved = resolve(params)
        solid, report = assemble(params, resolved, engine=engine)
    except GeometryError as e:
        log.info("Geometry error: %s", e)
        return GenerationResult.geometry_error(f"Model generation failed: {e}")
    except Exception as e:  # unexpected OCC/CadQuery faults
        log.exception("Unexpected engine failure")
        return GenerationResult.geometry_error(f"Model generation failed: {e}")

    log.info(
        "Generated box %.2fx%.2fx%.2f mm (%d layers)",
        report.width, report.depth, report.height, report.layer_count,
    )
    return GenerationResult.ok(solid, report)
