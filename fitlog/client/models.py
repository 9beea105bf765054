# -*- coding: utf-8 -*-
"""Client — history entry model."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_id() -> str:
    return str(int(time.time() * 1000))


class WorkoutEntry(BaseModel):
    """One logged workout. Exactly one of duration (minutes) or reps is set."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_new_id)
    workout_type: str = Field(..., alias="workoutType", min_length=1)
    duration: Optional[float] = Field(None, gt=0)
    reps: Optional[int] = Field(None, gt=0)
    calories: int = Field(..., ge=0)
    explanation: Optional[str] = None
    timestamp: str = Field(default_factory=_now_iso)

    @model_validator(mode="after")
    def _one_quantity(self) -> "WorkoutEntry":
        if (self.duration is None) == (self.reps is None):
            raise ValueError("exactly one of duration or reps must be set")
        return self

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
