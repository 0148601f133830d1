"""
FastAPI application for the Graph-Based Money Muling Detection Engine.

Endpoints:
    POST /upload  — Accept CSV, return detection results as JSON
    GET  /health  — System health check
    GET  /metrics — Processing statistics
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from api.routes import router
from app.config import APP_VERSION, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Graph-Based Money Muling Detection Engine",
    description="Detects money muling rings using graph-based analysis of transaction data.",
    version=APP_VERSION,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Graph payloads can be large.
app.add_middleware(GZipMiddleware, minimum_size=1024)

app.include_router(router)
