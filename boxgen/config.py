"""Configuration — environment variables and path resolution."""
import os
from pathlib import Path

# Paths
PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
PRINTERS_FILE = Path(os.environ.get("PRINTERS_FILE", DATA_DIR / "printers.json"))

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Geometry
FILLET_SEGMENTS = int(os.environ.get("FILLET_SEGMENTS", "16"))
OFFSET_TOLERANCE = float(os.environ.get("OFFSET_TOLERANCE", "1e-4"))  # [mm]

# Default printer envelope W,D,H [mm]
DEFAULT_BUILD_VOLUME = tuple(
    float(v) for v in os.environ.get("DEFAULT_BUILD_VOLUME", "220,220,250").split(",")
)

# Export
STL_TOLERANCE = float(os.environ.get("STL_TOLERANCE", "0.01"))  # [mm] linear deflection

# Sessions (superseding generation per UI session)
MAX_SESSIONS = int(os.environ.get("MAX_SESSIONS", "64"))

# Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8420"))
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173,http://localhost:8420"
    ).split(",")
    if o.strip()
]
