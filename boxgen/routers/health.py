"""Health check endpoint."""
import importlib.util

from fastapi import APIRouter

router = APIRouter()


@router.get("/api/health")
async def health():
    # CadQuery pulls in OCP; a missing wheel shows up here
    cq_ok = importlib.util.find_spec("cadquery") is not None
    return {"status": "ok", "cadquery": cq_ok}
