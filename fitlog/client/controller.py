# -*- coding: utf-8 -*-
"""Client — form controller: owns the state, talks to the gateway, persists history."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from ..config import settings
from .models import WorkoutEntry
from .state import (
    FormState,
    FormValidationError,
    build_payload,
    clear_history,
    entry_from_response,
    remove_entry,
    set_field,
    start_submit,
    submit_failed,
    submit_succeeded,
    validate_form,
)
from .storage import HistoryStore

logger = logging.getLogger(__name__)

ENDPOINT = "/api/calculate-calories"
DEFAULT_ERROR = "Failed to calculate calories. Please try again."

Confirm = Callable[[str], bool]
Notify = Callable[[str], None]


class SubmissionError(RuntimeError):
    """The gateway call failed; the message is what the user sees."""


def _always_yes(message: str) -> bool:
    return True


def _log_notice(message: str) -> None:
    logger.warning(message)


class FormController:
    """Drives one form instance; at most one estimation request in flight."""

    def __init__(
        self,
        *,
        http: Optional[httpx.Client] = None,
        store: Optional[HistoryStore] = None,
        confirm: Confirm = _always_yes,
        notify: Notify = _log_notice,
    ) -> None:
        self.http = http or httpx.Client(base_url=settings.api_url, timeout=None)
        self.store = store or HistoryStore()
        self.confirm = confirm
        self.notify = notify
        self.state = FormState(
            weight_unit=self.store.load_weight_unit(),
            history=tuple(self.store.load_history()),
        )

    def set_field(self, name: str, value: str) -> FormState:
        self.state = set_field(self.state, name, value)
        if name == "weight_unit":
            self.store.save_weight_unit(value)
        return self.state

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self.http.post(ENDPOINT, json=payload)
        except httpx.HTTPError as exc:
            raise SubmissionError(str(exc) or DEFAULT_ERROR) from exc

        content_type = (resp.headers.get("content-type") or "").lower()
        if "application/json" not in content_type:
            raise SubmissionError(f"Server returned an error page. Details: {resp.text[:200]}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise SubmissionError(f"Server returned an error page. Details: {resp.text[:200]}") from exc
        if not resp.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise SubmissionError(message or "Failed to calculate calories")
        if not isinstance(data, dict):
            raise SubmissionError(DEFAULT_ERROR)
        return data

    def submit(self) -> Optional[WorkoutEntry]:
        """Validate, send one request and fold the outcome into the state.

        Returns the new history entry, or None when validation or the request failed.
        """
        if self.state.is_submitting:
            return None
        try:
            validate_form(self.state)
        except FormValidationError as exc:
            self.notify(str(exc))
            return None

        payload = build_payload(self.state)
        self.state = start_submit(self.state)
        try:
            data = self._post(payload)
            entry = entry_from_response(self.state, data)
        except (SubmissionError, KeyError, TypeError, ValueError, OverflowError) as exc:
            logger.error("Error submitting workout: %s", exc)
            self.state = submit_failed(self.state, str(exc) or DEFAULT_ERROR)
            return None

        self.state = submit_succeeded(self.state, entry)
        self.store.save_history(list(self.state.history))
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this workout?"):
            return False
        before = len(self.state.history)
        self.state = remove_entry(self.state, entry_id)
        if len(self.state.history) == before:
            return False
        self.store.save_history(list(self.state.history))
        return True

    def clear_history(self) -> bool:
        if not self.confirm("Are you sure you want to clear all workout history?"):
            return False
        self.state = clear_history(self.state)
        self.store.save_history([])
        return True

    def close(self) -> None:
        self.http.close()
