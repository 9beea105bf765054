# -*- coding: utf-8 -*-
"""Workout logging client (form state, local history, command line)."""

from .controller import FormController, SubmissionError
from .models import WorkoutEntry
from .state import FormState, FormValidationError
from .storage import HistoryStore, JsonKeyValueStore

__all__ = [
    "FormController",
    "FormState",
    "FormValidationError",
    "HistoryStore",
    "JsonKeyValueStore",
    "SubmissionError",
    "WorkoutEntry",
]
