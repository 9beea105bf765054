# -*- coding: utf-8 -*-
"""Calorie estimation — prompt assembly."""

from __future__ import annotations

import re
from typing import Optional

from ..workouts import is_running
from .models import WeightUnit, WorkoutQuantity

LBS_TO_KG = 0.453592
AVERAGE_ADULT = "approximately 70kg/154lbs"

SYSTEM_PROMPT = (
    "You are a fitness expert that calculates calories burned for workouts. "
    "Always respond with valid JSON only."
)

_PACE_NUM_RE = re.compile(r"(\d+\.?\d*)")


def format_number(value: float) -> str:
    """Render 30.0 as "30" and 7.5 as "7.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def lbs_to_kg(weight_lbs: float) -> float:
    return round(weight_lbs * LBS_TO_KG, 1)


def describe_weight(weight: Optional[float], unit: WeightUnit) -> tuple[str, str]:
    """Return (prompt line, figure used for the calculation); both empty without a positive weight."""
    if weight is None or weight <= 0:
        return "", ""
    if unit == WeightUnit.lbs:
        kg = lbs_to_kg(weight)
        return f"\nWeight: {format_number(weight)} lbs ({kg:.1f} kg)", f"{kg:.1f} kg"
    return f"\nWeight: {format_number(weight)} kg", f"{format_number(weight)} kg"


def pace_intensity(pace_min_per_km: float) -> str:
    if pace_min_per_km <= 5:
        return "very fast/high intensity"
    if pace_min_per_km <= 6:
        return "fast/moderate-high intensity"
    if pace_min_per_km <= 7:
        return "moderate intensity"
    return "slow/moderate-low intensity"


def pace_guidance(running_pace: str) -> str:
    match = _PACE_NUM_RE.search(running_pace)
    if not match:
        return ""
    pace = format_number(float(match.group(1)))
    return (
        f"\n\nIMPORTANT: The pace is {pace} min/km. \n"
        f"- A pace of {pace} min/km means the runner covers 1 kilometer in {pace} minutes.\n"
        "- FASTER paces (LOWER min/km numbers) = HIGHER intensity = MORE calories burned per minute.\n"
        "- For example: 5 min/km burns MORE calories than 7 min/km for the same duration.\n"
        f"- Calculate calories based on this intensity level. A {pace} min/km pace is "
        f"{pace_intensity(float(match.group(1)))}."
    )


def build_prompt(workout: WorkoutQuantity) -> str:
    running = is_running(workout.workout_type)
    pace = (workout.running_pace or "").strip() if running else ""

    if workout.reps is not None:
        quantity = f"Repetitions: {workout.reps} reps"
    else:
        quantity = f"Duration: {format_number(workout.duration or 0)} minutes"

    pace_info = f"\nRunning Pace: {pace} (in min/km format)" if pace else ""
    weight_info, weight_for_calculation = describe_weight(workout.weight, workout.weight_unit)
    guidance = pace_guidance(pace) if pace else ""

    if weight_for_calculation:
        weight_instruction = (
            f"Use the person's weight of {weight_for_calculation} to calculate calories. "
            "Heavier people burn more calories for the same activity."
        )
    else:
        weight_instruction = f"Assume an average adult (weighing {AVERAGE_ADULT}) performing this activity."

    if pace:
        intensity_instruction = (
            "Use the running pace to determine intensity. "
            "Remember: LOWER min/km = FASTER pace = MORE calories per minute. "
            f"A {pace} pace should result in higher calorie burn than a slower pace for the same duration."
        )
    else:
        intensity_instruction = "Use moderate intensity unless otherwise specified."

    return (
        "Calculate the approximate number of calories burned for the following workout:\n"
        "\n"
        f"Workout Type: {workout.workout_type}\n"
        f"{quantity}{pace_info}{weight_info}{guidance}\n"
        "\n"
        "Please provide:\n"
        "1. The estimated number of calories burned (as a single number, no text)\n"
        "2. A brief explanation (1-2 sentences) of how you calculated this\n"
        "\n"
        f"{weight_instruction} {intensity_instruction}\n"
        "\n"
        "Format your response as JSON with this structure:\n"
        "{\n"
        '  "calories": <number>,\n'
        '  "explanation": "<brief explanation>"\n'
        "}"
    )
