# -*- coding: utf-8 -*-
"""Calorie estimation — completion reply parsing.

Two tiers only: the reply as a JSON object, else the first run of digits in the
raw text. The digit fallback is best-effort: "3 sets, about 250 kcal" yields 3.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, Optional

from .errors import ResponseParseError, ResponseValidationError

logger = logging.getLogger(__name__)

DEFAULT_EXPLANATION = "Calories calculated based on workout type and duration."

_DIGITS_RE = re.compile(r"\d+")


def parse_completion(content: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(content)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        return parsed

    logger.warning("completion reply is not a JSON object, falling back to digit scan")
    match = _DIGITS_RE.search(content or "")
    if not match:
        raise ResponseParseError("Could not parse OpenAI response")
    try:
        calories = int(match.group(0))
    except ValueError as exc:
        # Digit runs past the interpreter's int-string limit.
        raise ResponseParseError("Could not parse OpenAI response") from exc
    return {"calories": calories, "explanation": content}


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (OverflowError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_calories(parsed: Dict[str, Any]) -> tuple[int, str]:
    """Validate the parsed reply and return (rounded calories, explanation)."""
    raw = parsed.get("calories")
    calories = _as_number(raw)
    if calories is None or calories < 0:
        if isinstance(raw, float) and not math.isfinite(raw):
            # JSON error bodies cannot carry NaN or infinity.
            raw = str(raw)
        raise ResponseValidationError(
            "Invalid calorie calculation from OpenAI",
            details={"calories": raw},
        )

    explanation = parsed.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = DEFAULT_EXPLANATION
    return round_half_up(calories), explanation
