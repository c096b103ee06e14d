"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from groqkit.llm._http import NO_RETRY
from groqkit.llm._settings import GroqSettings
from groqkit.llm._types import Tool

WEATHER_PARAMETERS = {
    "type": "object",
    "properties": {"city": {"type": "string"}},
    "required": ["city"],
}


async def _weather(arguments: str) -> str:
    city = json.loads(arguments)["city"]
    return json.dumps({"city": city, "temp": 20})


@pytest.fixture
def weather_tool() -> Tool:
    return Tool(
        name="get_weather",
        description="Get current weather for a city",
        parameters=WEATHER_PARAMETERS,
        execute=_weather,
    )


@pytest.fixture
def settings() -> GroqSettings:
    return GroqSettings(api_key="gsk-test", retry=NO_RETRY)


def chat_body(content: str | None = "", tool_calls: list[dict[str, Any]] | None = None) -> dict:
    """A minimal chat completion body with one choice."""
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": message,
                "finish_reason": "tool_calls" if tool_calls else "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def tool_call(call_id: str, name: str, arguments: str) -> dict[str, Any]:
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


class MockResponse:
    """Mimics ``requests.Response`` for testing post_json / get_json / stream_sse."""

    def __init__(
        self,
        json_data: dict[str, Any] | None = None,
        status_code: int = 200,
        text: str = "",
        lines: list[str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text or ""
        self.ok = 200 <= status_code < 300
        self._lines = lines or []
        self.headers: dict[str, str] = headers or {}
        self.closed = False

    def json(self) -> dict[str, Any]:
        if self._json_data is None:
            raise ValueError("No JSON")
        return self._json_data

    def iter_lines(self, **_kwargs: object) -> list[str]:
        return self._lines

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> MockResponse:
        return self

    def __exit__(self, *args: object) -> None:
        pass


@pytest.fixture
def mock_post(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Monkeypatch ``requests.post`` and return the mock."""
    mock = MagicMock()
    monkeypatch.setattr("requests.post", mock)
    return mock


@pytest.fixture
def mock_get(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Monkeypatch ``requests.get`` and return the mock."""
    mock = MagicMock()
    monkeypatch.setattr("requests.get", mock)
    return mock
