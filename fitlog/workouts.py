# -*- coding: utf-8 -*-
"""Workout type classification shared by the client form and the gateway."""

from __future__ import annotations

import re
from typing import Optional

_SEPARATORS_RE = re.compile(r"[\s\-]+")

RUNNING_TYPES = frozenset({"run", "running"})


def normalize_workout_type(workout_type: Optional[str]) -> str:
    """Lowercase and drop whitespace and hyphens ("Push-Ups" -> "pushups")."""
    if not workout_type:
        return ""
    return _SEPARATORS_RE.sub("", workout_type.strip().lower())


def is_pushup(workout_type: Optional[str]) -> bool:
    """True for "pushup", "push ups", "Push-Ups" and anything starting with "pushup"."""
    normalized = normalize_workout_type(workout_type)
    if not normalized:
        return False
    return normalized in {"pushup", "pushups"} or normalized.startswith("pushup")


def is_running(workout_type: Optional[str]) -> bool:
    if not workout_type:
        return False
    return workout_type.strip().lower() in RUNNING_TYPES
