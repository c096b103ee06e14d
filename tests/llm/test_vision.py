"""Tests for VisionClient."""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from groqkit.llm._constants import DEFAULT_VISION_MODEL
from groqkit.llm._exceptions import ConfigurationError
from groqkit.llm._vision import VisionClient
from tests.conftest import chat_body, tool_call

IMAGE_URL = "https://example.com/cat.jpg"


def _make_chat(body: dict) -> MagicMock:
    chat = MagicMock()
    chat.send_chat_completion = AsyncMock(return_value=body)
    return chat


def _payload(chat: MagicMock) -> dict:
    return chat.send_chat_completion.await_args.args[0]


async def test_complete_with_image_url():
    chat = _make_chat(chat_body("A cat."))

    resp = await VisionClient(chat).complete_with_image_url(IMAGE_URL, "What is this?")

    assert resp.text == "A cat."
    assert _payload(chat) == {
        "model": DEFAULT_VISION_MODEL,
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "What is this?"},
                    {"type": "image_url", "image_url": {"url": IMAGE_URL}},
                ],
            }
        ],
    }


async def test_complete_with_image_url_temperature():
    chat = _make_chat(chat_body("A cat."))
    await VisionClient(chat).complete_with_image_url(IMAGE_URL, "?", temperature=0.2)
    assert _payload(chat)["temperature"] == 0.2


@pytest.mark.parametrize("url", ["", "not a url", "/relative/path.jpg"])
async def test_invalid_image_url_rejected(url):
    chat = _make_chat(chat_body("unused"))
    with pytest.raises(ConfigurationError):
        await VisionClient(chat).complete_with_image_url(url, "?")
    chat.send_chat_completion.assert_not_awaited()


async def test_data_uri_accepted():
    chat = _make_chat(chat_body("ok"))
    await VisionClient(chat).complete_with_image_url("data:image/png;base64,AAAA", "?")
    chat.send_chat_completion.assert_awaited_once()


async def test_complete_with_base64_image(tmp_path):
    image = tmp_path / "cat.jpg"
    image.write_bytes(b"\xff\xd8\xffjpeg")
    chat = _make_chat(chat_body("A cat."))

    await VisionClient(chat).complete_with_base64_image(image, "What is this?")

    parts = _payload(chat)["messages"][0]["content"]
    expected = "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xffjpeg").decode()
    assert parts[1] == {"type": "image_url", "image_url": {"url": expected}}


async def test_complete_with_base64_image_missing_file(tmp_path):
    chat = _make_chat(chat_body("unused"))
    with pytest.raises(FileNotFoundError):
        await VisionClient(chat).complete_with_base64_image(tmp_path / "nope.jpg", "?")


async def test_complete_with_tools_returns_calls_unexecuted(weather_tool):
    calls = [tool_call("call_1", "get_weather", '{"city":"Paris"}')]
    chat = _make_chat(chat_body(None, tool_calls=calls))

    resp = await VisionClient(chat).complete_with_tools(IMAGE_URL, "Weather here?", [weather_tool])

    assert [c.name for c in resp.tool_calls] == ["get_weather"]
    payload = _payload(chat)
    assert payload["tools"] == [weather_tool.to_wire()]
    assert payload["tool_choice"] == "auto"


async def test_complete_with_json_mode():
    chat = _make_chat(chat_body('{"animal": "cat"}'))
    resp = await VisionClient(chat).complete_with_json_mode(IMAGE_URL, "Describe as JSON.")
    assert resp.text == '{"animal": "cat"}'
    assert _payload(chat)["response_format"] == {"type": "json_object"}
