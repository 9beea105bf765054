# -*- coding: utf-8 -*-
"""Calorie estimation — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WeightUnit(str, Enum):
    lbs = "lbs"
    kg = "kg"


class EstimationRequest(BaseModel):
    """Inbound payload. Numeric fields accept strings; their meaning is checked in the service."""

    model_config = ConfigDict(populate_by_name=True)

    workout_type: Optional[str] = Field(None, alias="workoutType")
    duration: Optional[Union[float, str]] = Field(None, description="Minutes")
    reps: Optional[Union[int, float, str]] = Field(None, description="Repetition count")
    running_pace: Optional[str] = Field(None, alias="runningPace", description="e.g. '5:30' or '5.5' min/km")
    weight: Optional[Union[float, str]] = None
    weight_unit: Optional[str] = Field(None, alias="weightUnit", description="lbs | kg")


class EstimationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    calories: int = Field(..., ge=0)
    explanation: str
    workout_type: str = Field(..., alias="workoutType")
    duration: Optional[float] = None
    reps: Optional[int] = None


class ErrorBody(BaseModel):
    error: str
    details: Optional[Any] = None


class WorkoutQuantity(BaseModel):
    """Validated request: exactly one of duration or reps is set."""

    workout_type: str
    duration: Optional[float] = None
    reps: Optional[int] = None
    running_pace: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: WeightUnit = WeightUnit.kg
