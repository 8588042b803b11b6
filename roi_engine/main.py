"""FastAPI application exposing the ROI engine over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from roi_engine.engine.calculator import ROICalculationEngine
from roi_engine.engine.result import result_to_dict
from roi_engine.errors import InvalidInputError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="ROI Engine API", version="0.1.0")

engine = ROICalculationEngine()


class CalculateRequest(BaseModel):
    inputs: dict[str, Any]
    options: Optional[dict[str, Any]] = None


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.info(f"Rejected ROI request on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.post("/api/roi/calculate")
async def calculate_roi(body: CalculateRequest):
    """Run a full ROI calculation and return the report."""
    result = await run_in_threadpool(engine.calculate, body.inputs, body.options)
    return result_to_dict(result)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
