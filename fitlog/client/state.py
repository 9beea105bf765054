# -*- coding: utf-8 -*-
"""Client — form state, validation and reducer-style transitions.

Every transition takes a ``FormState`` and returns a new one; nothing here does I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..workouts import is_pushup, is_running
from .models import WorkoutEntry
from .storage import DEFAULT_WEIGHT_UNIT, WEIGHT_UNITS

INPUT_FIELDS = ("workout_type", "duration", "reps", "running_pace", "weight", "weight_unit")


class FormValidationError(ValueError):
    """Blocks a submission; the message is shown to the user as-is."""


@dataclass(frozen=True)
class FormState:
    workout_type: str = ""
    duration: str = ""
    reps: str = ""
    running_pace: str = ""
    weight: str = ""
    weight_unit: str = DEFAULT_WEIGHT_UNIT
    is_submitting: bool = False
    result: Optional[WorkoutEntry] = None
    error: Optional[str] = None
    history: Tuple[WorkoutEntry, ...] = field(default_factory=tuple)

    @property
    def is_pushup_workout(self) -> bool:
        return is_pushup(self.workout_type)

    @property
    def is_running_workout(self) -> bool:
        return is_running(self.workout_type)

    @property
    def visible_fields(self) -> Tuple[str, ...]:
        fields = ["workout_type", "reps" if self.is_pushup_workout else "duration"]
        if self.is_running_workout:
            fields.extend(["weight", "weight_unit", "running_pace"])
        return tuple(fields)


def set_field(state: FormState, name: str, value: str) -> FormState:
    if name not in INPUT_FIELDS:
        raise KeyError(f"unknown form field: {name}")
    if name == "weight_unit" and value not in WEIGHT_UNITS:
        raise ValueError(f"weight unit must be one of {', '.join(WEIGHT_UNITS)}")
    return replace(state, **{name: value})


def _parse_number(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def validate_form(state: FormState) -> None:
    if not state.workout_type.strip():
        raise FormValidationError("Please fill in the workout type")

    if state.is_pushup_workout:
        if not state.reps.strip():
            raise FormValidationError("Please fill in the number of reps")
        reps = _parse_number(state.reps.strip())
        if reps is None or reps <= 0 or not reps.is_integer():
            raise FormValidationError(
                "Please enter a valid number of reps (must be a positive whole number)"
            )
        return

    if not state.duration.strip():
        raise FormValidationError("Please fill in the duration")
    duration = _parse_number(state.duration.strip())
    if duration is None or duration <= 0:
        raise FormValidationError("Please enter a valid duration (in minutes)")


def build_payload(state: FormState) -> Dict[str, Any]:
    """Request body for a validated form; carries reps or duration, never both."""
    payload: Dict[str, Any] = {"workoutType": state.workout_type.strip()}
    if state.is_pushup_workout:
        payload["reps"] = int(float(state.reps.strip()))
    else:
        payload["duration"] = float(state.duration.strip())
    pace = state.running_pace.strip()
    if state.is_running_workout and pace:
        payload["runningPace"] = pace
    weight = state.weight.strip()
    if weight:
        payload["weight"] = weight
        payload["weightUnit"] = state.weight_unit
    return payload


def start_submit(state: FormState) -> FormState:
    return replace(state, is_submitting=True, result=None, error=None)


def entry_from_response(state: FormState, data: Dict[str, Any]) -> WorkoutEntry:
    """Build the history entry for a successful reply to the current form."""
    pushup = state.is_pushup_workout
    reps = data.get("reps")
    if pushup and reps is None:
        reps = int(float(state.reps.strip()))
    calories = float(data["calories"])
    if not math.isfinite(calories) or calories < 0:
        raise ValueError("Invalid calorie value in server response")
    return WorkoutEntry(
        workout_type=data.get("workoutType") or state.workout_type.strip(),
        duration=None if pushup else (data.get("duration") or float(state.duration.strip())),
        reps=reps if pushup else None,
        calories=int(math.floor(calories + 0.5)),
        explanation=data.get("explanation"),
    )


def submit_succeeded(state: FormState, entry: WorkoutEntry) -> FormState:
    """Show the result, prepend it to history and clear every input but the unit."""
    return replace(
        state,
        workout_type="",
        duration="",
        reps="",
        running_pace="",
        weight="",
        is_submitting=False,
        result=entry,
        error=None,
        history=(entry,) + state.history,
    )


def submit_failed(state: FormState, message: str) -> FormState:
    return replace(state, is_submitting=False, result=None, error=message)


def remove_entry(state: FormState, entry_id: str) -> FormState:
    return replace(state, history=tuple(e for e in state.history if e.id != entry_id))


def clear_history(state: FormState) -> FormState:
    return replace(state, history=())
