"""Tests for gateway.llm.client.CompletionClient.

``respx`` patches ``httpx`` at the transport layer so no real completion
service is contacted.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from gateway.llm.client import CompletionClient, CompletionError

_API_URL = "https://llm.example.com/v1/chat/completions"


def _envelope(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture()
def client() -> CompletionClient:
    return CompletionClient(api_url=_API_URL, api_key="secret", model="test-model")


class TestComplete:
    def test_returns_message_content(self, client: CompletionClient) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(
                return_value=httpx.Response(200, json=_envelope('{"0": "hi"}'))
            )
            assert client.complete("prompt", max_tokens=2048, timeout=5) == '{"0": "hi"}'

    def test_request_shape(self, client: CompletionClient) -> None:
        with respx.mock:
            route = respx.post(_API_URL).mock(
                return_value=httpx.Response(200, json=_envelope("ok"))
            )
            client.complete("Summarise this", max_tokens=512, timeout=5)

        request = route.calls.last.request
        body = json.loads(request.content)
        assert body["model"] == "test-model"
        assert body["messages"] == [{"role": "user", "content": "Summarise this"}]
        assert body["max_tokens"] == 512
        assert body["temperature"] == 0.3
        assert request.headers["Authorization"] == "Bearer secret"

    def test_non_2xx_raises_with_status_and_excerpt(self, client: CompletionClient) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(return_value=httpx.Response(500, text="x" * 500))
            with pytest.raises(CompletionError) as excinfo:
                client.complete("prompt", max_tokens=10, timeout=5)

        assert excinfo.value.status_code == 500
        assert excinfo.value.excerpt == "x" * 200

    def test_missing_key_surfaces_as_upstream_auth_failure(self) -> None:
        anonymous = CompletionClient(api_url=_API_URL, api_key="")
        with respx.mock:
            route = respx.post(_API_URL).mock(
                return_value=httpx.Response(401, json={"error": "Invalid credentials"})
            )
            with pytest.raises(CompletionError) as excinfo:
                anonymous.complete("prompt", max_tokens=10, timeout=5)

        assert excinfo.value.status_code == 401
        assert "Authorization" not in route.calls.last.request.headers

    def test_timeout_raises_completion_error(self, client: CompletionClient) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(side_effect=httpx.ReadTimeout("too slow"))
            with pytest.raises(CompletionError) as excinfo:
                client.complete("prompt", max_tokens=10, timeout=1)

        assert excinfo.value.status_code is None

    def test_connect_error_raises_completion_error(self, client: CompletionClient) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(side_effect=httpx.ConnectError("refused"))
            with pytest.raises(CompletionError):
                client.complete("prompt", max_tokens=10, timeout=1)


class TestMalformedEnvelope:
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"choices": []},
            {"choices": [{}]},
            {"choices": [{"message": {}}]},
            _envelope(None),
        ],
    )
    def test_degrades_to_empty_object(self, client: CompletionClient, payload: dict) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(return_value=httpx.Response(200, json=payload))
            assert client.complete("prompt", max_tokens=10, timeout=5) == "{}"

    def test_non_json_body_degrades_to_empty_object(self, client: CompletionClient) -> None:
        with respx.mock:
            respx.post(_API_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
            assert client.complete("prompt", max_tokens=10, timeout=5) == "{}"


def test_defaults_come_from_settings(monkeypatch) -> None:
    monkeypatch.setattr("gateway.config.settings.completion_model", "configured-model")
    monkeypatch.setattr("gateway.config.settings.huggingface_api_key", "env-key")
    client = CompletionClient()
    assert client.model == "configured-model"
    assert client.api_key == "env-key"
    assert client.temperature == 0.3
