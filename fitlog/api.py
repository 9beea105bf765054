# -*- coding: utf-8 -*-
"""
fitlog calorie gateway

Stateless HTTP service: one workout description in, one calorie estimate out.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .estimate.api import router as estimate_router
from .estimate.errors import CalorieEstimationError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="fitlog calorie gateway",
    description="Estimate calories burned for a workout via a chat completion service.",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CalorieEstimationError)
async def _estimation_error(request: Request, exc: CalorieEstimationError) -> JSONResponse:
    logger.error("Error calculating calories: %s", exc.message)
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or wrongly typed fields: same 400 shape as the semantic checks.
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": errors})


app.include_router(estimate_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now().isoformat(),
    }


def run() -> None:
    """Start the gateway with uvicorn (``fitlog serve`` calls this too)."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("fitlog.api:app", host=settings.host, port=settings.port, reload=False)
