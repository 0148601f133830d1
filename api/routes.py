"""
API Routes — upload, health, and metrics endpoints.
"""

import io
import logging

import pandas as pd
from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from app.config import APP_VERSION, MAX_TRANSACTIONS
from core.graph.graph_metrics import compute_graph_summary
from services.processing_pipeline import ProcessingService
from utils.metrics import MetricsTracker
from utils.validators import validate_csv

logger = logging.getLogger(__name__)

router = APIRouter()
metrics_tracker = MetricsTracker()


@router.get("/health")
async def health():
    """Return system health status."""
    return {"status": "healthy", "version": APP_VERSION}


@router.get("/metrics")
async def metrics():
    """Return processing statistics from the most recent run."""
    return metrics_tracker.get_metrics()


@router.post("/upload")
async def upload_csv(file: UploadFile = File(...)):
    """
    Accept CSV upload, perform graph-based money muling detection,
    and return a structured JSON response.
    """
    if not file.filename or not file.filename.endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are accepted.")

    try:
        contents = await file.read()
        # Keep ids as text so "007" stays "007"; amounts are coerced later.
        df = pd.read_csv(io.BytesIO(contents), dtype=str)
    except Exception as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"Failed to parse CSV: {str(e)}")

    validation_error = validate_csv(df)
    if validation_error:
        logger.warning("Rejected upload %s: %s", file.filename, validation_error)
        raise HTTPException(status_code=400, detail=validation_error)

    if len(df) > MAX_TRANSACTIONS:
        logger.warning("Rejected upload %s: %d rows", file.filename, len(df))
        raise HTTPException(
            status_code=413,
            detail=f"Too many transactions: {len(df)} (limit {MAX_TRANSACTIONS}).",
        )

    service = ProcessingService()
    result = service.process(df)
    metrics_tracker.record(result["summary"], compute_graph_summary(service.graph))

    return JSONResponse(content=result)
