"""Single-shot client for an OpenAI-compatible chat-completions endpoint.

The default endpoint is the Hugging Face inference router; configure via
``COMPLETION_API_URL``, ``COMPLETION_MODEL`` and ``HUGGINGFACE_API_KEY``.

A missing API key is not checked locally: the request is sent without an
``Authorization`` header and the resulting 401 surfaces as a
:class:`CompletionError` like any other upstream failure.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gateway.config import settings

logger = logging.getLogger(__name__)

_EMPTY_OBJECT = "{}"
_EXCERPT_CHARS = 200


class CompletionError(Exception):
    """The completion service failed or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, excerpt: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.excerpt = excerpt


def _message_content(payload: Any) -> str:
    """Dig ``choices[0].message.content`` out of *payload*, or ``"{}"``."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return _EMPTY_OBJECT
    if not isinstance(content, str):
        return _EMPTY_OBJECT
    return content


class CompletionClient:
    """Immutable configuration plus a :meth:`complete` call.

    One instance is safe to share across requests; every call opens its own
    HTTP connection.
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        self.api_url = api_url or settings.completion_api_url
        self.api_key = settings.huggingface_api_key if api_key is None else api_key
        self.model = model or settings.completion_model
        self.temperature = (
            settings.completion_temperature if temperature is None else temperature
        )

    def complete(self, prompt: str, max_tokens: int, timeout: float) -> str:
        """Send *prompt* as a single user message and return the reply text.

        Args:
            prompt: The full instruction plus payload.
            max_tokens: Output token budget.
            timeout: Hard timeout for the whole request in seconds.

        Returns:
            The model's message content, or ``"{}"`` when the response
            envelope is malformed.

        Raises:
            CompletionError: On a non-2xx status, a timeout, or a transport
                failure.
        """
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": self.temperature,
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            with httpx.Client(timeout=timeout) as client:
                response = client.post(self.api_url, headers=headers, json=body)
        except httpx.TimeoutException as exc:
            raise CompletionError(f"Completion request timed out after {timeout}s") from exc
        except httpx.HTTPError as exc:
            raise CompletionError(f"Completion request failed: {exc}") from exc

        if not response.is_success:
            excerpt = response.text[:_EXCERPT_CHARS]
            raise CompletionError(
                f"Completion API error: {response.status_code} {excerpt}",
                status_code=response.status_code,
                excerpt=excerpt,
            )

        try:
            payload = response.json()
        except ValueError:
            logger.warning("[completion] response body is not JSON; treating as empty")
            return _EMPTY_OBJECT
        return _message_content(payload)
