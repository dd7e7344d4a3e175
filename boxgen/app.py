"""FastAPI entry point — CORS, routers."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import CORS_ORIGINS, LOG_LEVEL
from .routers import generate, health, printers

# Configure logging so app-level logs appear in uvicorn/journalctl output
logging.basicConfig(level=LOG_LEVEL, format="%(name)s %(levelname)s: %(message)s")

app = FastAPI(title="Hollow Box Generator", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(health.router)
app.include_router(printers.router)
app.include_router(generate.router)
