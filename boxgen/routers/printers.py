"""Printers endpoint — returns bundled printer profiles from printers.json."""
import json

from fastapi import APIRouter

from ..config import PRINTERS_FILE

router = APIRouter()

_printers_cache = None


def _load_printers() -> dict:
    global _printers_cache
    if _printers_cache is None:
        with open(PRINTERS_FILE) as f:
            _printers_cache = json.load(f)
    return _printers_cache


@router.get("/api/printers")
async def get_printers():
    data = _load_printers()
    # Flattened for the printer dropdown; fields map onto the parameter set
    printers = []
    for key, info in data.items():
        width, depth, height = info["build_volume_mm"]
        printers.append({
            "id": key,
            "name": info["full_name"],
            "build_volume_width": width,
            "build_volume_depth": depth,
            "build_volume_height": height,
            "nozzle_size": info["nozzle_mm"],
            "layer_height": info["layer_height_mm"],
        })
    return {"printers": printers}
