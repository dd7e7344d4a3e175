"""Box endpoints — validate, reclamp and generate with STL/STEP export."""
import asyncio
import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..services.exporter import ExportError, export_base64, measure
from ..services.generator import GenerationResult, generate as generate_box
from ..services.parameters import DEFAULT_PARAMETERS, ParameterSet, reclamp
from ..services.session import SessionRegistry
from ..services.validator import validate

router = APIRouter()
log = logging.getLogger(__name__)

_sessions = SessionRegistry()

_d = DEFAULT_PARAMETERS


class BoxParameters(BaseModel):
    # Range checks live in the validator so bad input comes back as messages
    nozzle_size: float = Field(default=_d.nozzle_size)
    wall_thickness: float = Field(default=_d.wall_thickness)
    layer_height: float = Field(default=_d.layer_height)
    edge_fillet: float = Field(default=_d.edge_fillet)
    build_volume_width: float = Field(default=_d.build_volume_width)
    build_volume_depth: float = Field(default=_d.build_volume_depth)
    build_volume_height: float = Field(default=_d.build_volume_height)
    box_width: float = Field(default=_d.box_width)
    box_depth: float = Field(default=_d.box_depth)
    box_height: float = Field(default=_d.box_height)

    def to_parameter_set(self) -> ParameterSet:
        return ParameterSet(**self.model_dump(include=set(BoxParameters.model_fields)))


class GenerateRequest(BoxParameters):
    stl_ascii: bool = Field(default=False)
    include_step: bool = Field(default=False)
    session_id: str | None = Field(default=None, max_length=128)


class ValidateResponse(BaseModel):
    valid: bool
    errors: list[str] = []


class GenerateResponse(BaseModel):
    success: bool
    status: str
    errors: list[str] = []
    report: dict | None = None
    metrics: dict | None = None
    stl_base64: str | None = None
    step_base64: str | None = None
    filename: str | None = None
    stale: bool = False


def _filename(report) -> str:
    return f"box_{report.width:g}x{report.depth:g}x{report.height:g}".replace(".", "_")


def _serialize(result: GenerationResult, req: GenerateRequest) -> GenerateResponse:
    """Export the solid and build the response. Runs in a worker thread."""
    if not result.success:
        return GenerateResponse(success=False, status=result.status, errors=result.errors)

    report = result.report
    try:
        stl_b64 = export_base64(
            result.solid, "stl", ascii=req.stl_ascii, segments=report.fillet_segments
        )
        step_b64 = export_base64(result.solid, "step") if req.include_step else None
    except ExportError as e:
        log.warning("Export failed: %s", e)
        return GenerateResponse(
            success=False,
            status="export_error",
            errors=[str(e)],
            report=report.to_dict(),
        )

    return GenerateResponse(
        success=True,
        status=result.status,
        report=report.to_dict(),
        metrics=measure(result.solid),
        stl_base64=stl_b64,
        step_base64=step_b64,
        filename=_filename(report) + ".stl",
    )


@router.post("/api/validate", response_model=ValidateResponse)
async def validate_parameters(req: BoxParameters):
    errors = validate(req.to_parameter_set())
    return ValidateResponse(valid=not errors, errors=errors)


@router.post("/api/reclamp", response_model=BoxParameters)
async def reclamp_parameters(req: BoxParameters):
    return BoxParameters(**reclamp(req.to_parameter_set()).to_dict())


@router.post("/api/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest):
    params = req.to_parameter_set()

    # Step 1: Validate -> resolve -> assemble (CSG runs off the event loop)
    stale = False
    if req.session_id:
        session = _sessions.get(req.session_id)
        result, stale = await session.submit(params)
    else:
        result = await asyncio.to_thread(generate_box, params)

    if stale:
        # A newer request from the same session owns the visible result
        return GenerateResponse(success=False, status="stale", stale=True)

    # Step 2: Serialize
    response = await asyncio.to_thread(_serialize, result, req)
    if response.success:
        log.info("Generated %s (%d layers)", response.filename, result.report.layer_count)
    return response
