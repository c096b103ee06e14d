"""Chat completion transports for the Groq API."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any, Protocol, runtime_checkable

from groqkit.llm._async_http import async_get_json, async_post_json, async_stream_sse
from groqkit.llm._constants import CHAT_COMPLETIONS_PATH, MODELS_PATH
from groqkit.llm._http import SSE_DONE, get_json, post_json, stream_sse
from groqkit.llm._settings import GroqSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatTransport(Protocol):
    """Anything that can send a chat completion payload and return the response body."""

    async def send_chat_completion(self, payload: dict[str, Any]) -> dict[str, Any]: ...


def _streaming_copy(payload: dict[str, Any]) -> dict[str, Any]:
    return {**payload, "stream": True}


def _decode_chunk(data: str) -> dict[str, Any] | None:
    try:
        chunk = json.loads(data)
    except json.JSONDecodeError:
        logger.debug("Skipping undecodable stream line: %r", data)
        return None
    return chunk if isinstance(chunk, dict) else None


class ChatCompletionClient:
    """Blocking chat completion client built on ``requests``.

    Usage::

        client = ChatCompletionClient(GroqSettings.from_env())
        body = client.send_chat_completion(payload)
    """

    def __init__(self, settings: GroqSettings) -> None:
        self._settings = settings

    def send_chat_completion(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a chat completion and return the response body."""
        logger.debug("POST chat completion (model=%s)", payload.get("model"))
        return post_json(
            self._settings.url(CHAT_COMPLETIONS_PATH),
            self._settings.headers,
            payload,
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )

    def stream_chat_completion(self, payload: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Yield streamed completion chunks until the ``[DONE]`` sentinel."""
        for data in stream_sse(
            self._settings.url(CHAT_COMPLETIONS_PATH),
            self._settings.headers,
            _streaming_copy(payload),
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        ):
            if data.strip() == SSE_DONE:
                break
            if (chunk := _decode_chunk(data)) is not None:
                yield chunk

    def list_models(self) -> dict[str, Any]:
        """Return the ``/models`` listing."""
        return get_json(
            self._settings.url(MODELS_PATH),
            self._settings.headers,
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )


class AsyncChatCompletionClient:
    """Async chat completion client built on ``httpx``; satisfies :class:`ChatTransport`."""

    def __init__(self, settings: GroqSettings) -> None:
        self._settings = settings

    async def send_chat_completion(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a chat completion and return the response body."""
        logger.debug("POST chat completion (model=%s)", payload.get("model"))
        return await async_post_json(
            self._settings.url(CHAT_COMPLETIONS_PATH),
            self._settings.headers,
            payload,
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )

    async def stream_chat_completion(
        self, payload: dict[str, Any]
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield streamed completion chunks until the ``[DONE]`` sentinel."""
        async for data in async_stream_sse(
            self._settings.url(CHAT_COMPLETIONS_PATH),
            self._settings.headers,
            _streaming_copy(payload),
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        ):
            if data.strip() == SSE_DONE:
                break
            if (chunk := _decode_chunk(data)) is not None:
                yield chunk

    async def list_models(self) -> dict[str, Any]:
        """Return the ``/models`` listing."""
        return await async_get_json(
            self._settings.url(MODELS_PATH),
            self._settings.headers,
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )
