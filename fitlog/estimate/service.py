# -*- coding: utf-8 -*-
"""Calorie estimation — request validation and the single round trip."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from .completion import CompletionClient, resolve_completion_settings
from .errors import RequestValidationFailed
from .models import EstimationRequest, EstimationResponse, WeightUnit, WorkoutQuantity
from .parsing import normalize_calories, parse_completion
from .prompt import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def validate_request(request: EstimationRequest) -> WorkoutQuantity:
    """Check the payload and resolve it to exactly one of duration or reps.

    A duration wins when both are sent; reps-only payloads are valid requests.
    """
    workout_type = (request.workout_type or "").strip()
    has_duration = not _is_blank(request.duration)
    has_reps = not _is_blank(request.reps)
    if not workout_type or not (has_duration or has_reps):
        raise RequestValidationFailed("Workout type and duration are required")

    duration: Optional[float] = None
    reps: Optional[int] = None
    if has_duration:
        duration = _to_float(request.duration)
        if duration is None or duration <= 0:
            raise RequestValidationFailed("Duration must be a positive number")
    else:
        reps_value = _to_float(request.reps)
        if reps_value is None or reps_value <= 0 or not reps_value.is_integer():
            raise RequestValidationFailed("Reps must be a positive whole number")
        reps = int(reps_value)

    weight = None if _is_blank(request.weight) else _to_float(request.weight)
    unit = WeightUnit.lbs if (request.weight_unit or "").strip().lower() == "lbs" else WeightUnit.kg
    pace = (request.running_pace or "").strip() or None

    return WorkoutQuantity(
        workout_type=workout_type,
        duration=duration,
        reps=reps,
        running_pace=pace,
        weight=weight,
        weight_unit=unit,
    )


def estimate_calories(request: EstimationRequest, client: CompletionClient) -> EstimationResponse:
    workout = validate_request(request)
    # Credential errors take precedence over anything after request validation.
    resolve_completion_settings()

    prompt = build_prompt(workout)
    content = client.complete(system_prompt=SYSTEM_PROMPT, user_prompt=prompt)
    calories, explanation = normalize_calories(parse_completion(content))

    logger.info(
        "estimated %s kcal for %r (duration=%s reps=%s)",
        calories,
        workout.workout_type,
        workout.duration,
        workout.reps,
    )
    return EstimationResponse(
        calories=calories,
        explanation=explanation,
        workout_type=request.workout_type,
        duration=workout.duration,
        reps=workout.reps,
    )
