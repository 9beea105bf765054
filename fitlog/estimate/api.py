# -*- coding: utf-8 -*-
"""Calorie estimation — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .completion import CompletionClient
from .models import ErrorBody, EstimationRequest, EstimationResponse
from .service import estimate_calories

router = APIRouter(prefix="/api/calculate-calories", tags=["Calories"])


def get_completion_client() -> CompletionClient:
    return CompletionClient()


@router.get("", summary="Route reachability check")
def calculate_calories_status() -> dict:
    return {"status": "ok"}


@router.post(
    "",
    response_model=EstimationResponse,
    response_model_exclude_none=True,
    summary="Estimate calories burned for one workout",
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
def calculate_calories(
    request: EstimationRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    return estimate_calories(request, client)
