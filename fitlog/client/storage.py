# -*- coding: utf-8 -*-
"""Client — durable key/value storage (JSON files) for history and preferences."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..config import settings
from .models import WorkoutEntry

logger = logging.getLogger(__name__)

HISTORY_KEY = "fitness-tracker-history"
WEIGHT_UNIT_KEY = "fitness-tracker-weight-unit"
DEFAULT_WEIGHT_UNIT = "lbs"
WEIGHT_UNITS = ("lbs", "kg")


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


class JsonKeyValueStore:
    """String values keyed by name, one file per key under ``root``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or (settings.data_root / "client")

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        fp = self._path(key)
        if not fp.exists():
            return None
        return fp.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        _ensure_dir(self.root)
        fp = self._path(key)
        tmp = fp.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(fp)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def has(self, key: str) -> bool:
        return self._path(key).exists()


class HistoryStore:
    """Persists the workout history list and the weight unit preference."""

    def __init__(self, store: JsonKeyValueStore | None = None) -> None:
        self.store = store or JsonKeyValueStore()

    def load_history(self) -> List[WorkoutEntry]:
        raw = self.store.get(HISTORY_KEY)
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("history record is not a list")
            return [WorkoutEntry.model_validate(r) for r in records]
        except (ValueError, ValidationError) as exc:
            logger.error("Error loading workout history: %s", exc, exc_info=True)
            return []

    def save_history(self, history: List[WorkoutEntry]) -> None:
        """Write the full list; an empty list removes the record instead."""
        if not history:
            self.store.remove(HISTORY_KEY)
            return
        payload = [entry.to_record() for entry in history]
        self.store.set(HISTORY_KEY, json.dumps(payload, ensure_ascii=False, indent=2))

    def load_weight_unit(self) -> str:
        unit = (self.store.get(WEIGHT_UNIT_KEY) or "").strip()
        return unit if unit in WEIGHT_UNITS else DEFAULT_WEIGHT_UNIT

    def save_weight_unit(self, unit: str) -> None:
        self.store.set(WEIGHT_UNIT_KEY, unit)
