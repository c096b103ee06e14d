"""Tests for LlmTextProvider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from groqkit.llm._constants import DEFAULT_TEXT_MODEL
from groqkit.llm._exceptions import ConfigurationError
from groqkit.llm._text import LlmTextProvider
from tests.conftest import chat_body


def _make_chat(body: dict | None = None, chunks: list[dict] | None = None) -> MagicMock:
    chat = MagicMock()
    chat.send_chat_completion = AsyncMock(return_value=body)

    async def stream(payload):
        for chunk in chunks or []:
            yield chunk

    chat.stream_chat_completion = MagicMock(side_effect=stream)
    return chat


async def test_generate_returns_first_choice_text():
    chat = _make_chat(chat_body("Paris"))
    provider = LlmTextProvider(chat)

    assert await provider.generate("Capital of France?", "One word.") == "Paris"

    payload = chat.send_chat_completion.await_args.args[0]
    assert payload == {
        "model": DEFAULT_TEXT_MODEL,
        "messages": [
            {"role": "system", "content": "One word."},
            {"role": "user", "content": "Capital of France?"},
        ],
    }


async def test_generate_without_content_returns_empty_string():
    provider = LlmTextProvider(_make_chat(chat_body(None)))
    assert await provider.generate("Hi") == ""


async def test_generate_uses_configured_and_per_call_models():
    chat = _make_chat(chat_body("ok"))
    provider = LlmTextProvider(chat, model="llama-3.1-8b-instant")

    await provider.generate("Hi")
    await provider.generate("Hi", model="qwen/qwen3-32b")

    models = [c.args[0]["model"] for c in chat.send_chat_completion.await_args_list]
    assert models == ["llama-3.1-8b-instant", "qwen/qwen3-32b"]


async def test_generate_with_response_format():
    chat = _make_chat(chat_body('{"answer": "Paris"}'))
    schema = '{"name": "answer", "schema": {"type": "object"}}'

    await LlmTextProvider(chat).generate("Capital?", response_format=schema)

    payload = chat.send_chat_completion.await_args.args[0]
    assert payload["response_format"]["type"] == "json_schema"
    assert payload["response_format"]["json_schema"]["name"] == "answer"


async def test_generate_rejects_blank_prompt():
    chat = _make_chat(chat_body("unused"))
    with pytest.raises(ConfigurationError):
        await LlmTextProvider(chat).generate("   ")
    chat.send_chat_completion.assert_not_awaited()


async def test_generate_stream_yields_deltas():
    chunks = [
        {"choices": [{"delta": {"role": "assistant"}}]},
        {"choices": [{"delta": {"content": "Hel"}}]},
        {"choices": []},
        {"choices": [{"delta": {"content": "lo"}}]},
        {"choices": [{"delta": {}, "finish_reason": "stop"}]},
    ]
    chat = _make_chat(chunks=chunks)

    parts = [p async for p in LlmTextProvider(chat).generate_stream("Hi")]

    assert parts == ["Hel", "lo"]
    assert chat.stream_chat_completion.call_args.args[0]["messages"][-1]["content"] == "Hi"
