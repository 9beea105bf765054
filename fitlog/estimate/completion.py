# -*- coding: utf-8 -*-
"""Calorie estimation — OpenAI-compatible chat completion call."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .errors import CompletionServiceError, CredentialError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionSettings:
    base_url: str
    api_key: str
    model: str
    temperature: float
    timeout: Optional[float]


def resolve_completion_settings() -> CompletionSettings:
    """Fail fast on a missing or malformed key before any network traffic."""
    api_key = settings.openai_api_key
    if not api_key:
        raise CredentialError(
            "OpenAI API key is not configured. Please set OPENAI_API_KEY in your environment variables."
        )
    if not api_key.startswith(settings.api_key_prefix):
        raise CredentialError(
            f'Invalid API key format. OpenAI API keys should start with "{settings.api_key_prefix}".'
        )
    return CompletionSettings(
        base_url=settings.openai_base_url,
        api_key=api_key,
        model=settings.openai_model,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout,
    )


def _completions_url(base_url: str) -> str:
    base = base_url.rstrip("/")
    if base.endswith("/chat/completions"):
        return base
    return f"{base}/chat/completions"


def extract_upstream_error(resp: httpx.Response) -> tuple[str, Optional[str]]:
    """Pull (message, code) out of an OpenAI-style error body, falling back to the raw text."""
    raw = resp.text or ""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict):
            message = err.get("message")
            code = err.get("code") or err.get("type")
            if isinstance(message, str) and message.strip():
                return message.strip(), str(code) if code else None
        message = data.get("message") or data.get("detail")
        if isinstance(message, str) and message.strip():
            return message.strip(), None
    snippet = raw.replace("\n", " ").strip()[:200]
    return snippet or f"HTTP {resp.status_code}", None


def extract_message_content(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
    return ""


class CompletionClient:
    """Sends one chat completion request per call and returns the reply text."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._transport = transport

    def complete(self, *, system_prompt: str, user_prompt: str) -> str:
        cfg = resolve_completion_settings()
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        payload: Dict[str, Any] = {
            "model": cfg.model,
            "messages": messages,
            "temperature": cfg.temperature,
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {cfg.api_key}",
        }

        url = _completions_url(cfg.base_url)
        try:
            with httpx.Client(timeout=cfg.timeout, transport=self._transport) as client:
                resp = client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.error("completion service unreachable: %s", exc)
            raise CompletionServiceError(f"OpenAI API error: {exc}") from exc

        if resp.status_code >= 400:
            message, code = extract_upstream_error(resp)
            logger.error("completion service returned %s: %s", resp.status_code, message)
            raise CompletionServiceError(
                f"OpenAI API error: {message}",
                details=f"Error code: {code}" if code else None,
            )

        try:
            data = resp.json()
        except json.JSONDecodeError as exc:
            snippet = (resp.text or "").replace("\n", " ").strip()[:200]
            raise CompletionServiceError(f"OpenAI API error: non-JSON response: {snippet}") from exc

        content = extract_message_content(data)
        if not content:
            raise CompletionServiceError("No response from OpenAI")
        return content
