"""Shared fixtures.

``RecordingClient`` stands in for :class:`gateway.llm.client.CompletionClient`
so pipeline tests can script the model's reply and assert how many times
(and with what prompt) it was called.
"""

from __future__ import annotations

from typing import Callable, Union

import pytest


class RecordingClient:
    """Fake completion client that records every call."""

    def __init__(
        self,
        reply: Union[str, Callable[[str], str]] = "{}",
        error: Exception | None = None,
    ) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def complete(self, prompt: str, max_tokens: int, timeout: float) -> str:
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "timeout": timeout})
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply


@pytest.fixture()
def make_client() -> Callable[..., RecordingClient]:
    """Factory fixture: ``make_client(reply=..., error=...)``."""
    return RecordingClient
