# -*- coding: utf-8 -*-
"""Calorie estimation — error taxonomy.

Every failure on the estimation path is one of these; the HTTP layer renders
them as ``{"error": message, "details": details}`` with ``status_code``.
"""

from __future__ import annotations

from typing import Any, Optional


class CalorieEstimationError(Exception):
    status_code = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class RequestValidationFailed(CalorieEstimationError):
    """The client sent an incomplete or out-of-range payload."""

    status_code = 400


class CredentialError(CalorieEstimationError):
    """The completion service key is missing or malformed."""

    status_code = 500


class CompletionServiceError(CalorieEstimationError):
    """The completion service rejected the call or could not be reached."""

    status_code = 500


class ResponseParseError(CalorieEstimationError):
    status_code = 500


class ResponseValidationError(CalorieEstimationError):
    status_code = 500
