"""Vision completions: a text prompt plus one image."""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlparse

from groqkit.llm._builder import ChatCompletionRequestBuilder
from groqkit.llm._chat import AsyncChatCompletionClient
from groqkit.llm._constants import DEFAULT_VISION_MODEL
from groqkit.llm._exceptions import ConfigurationError
from groqkit.llm._types import Response, Tool, parse_response


def _validate_image_url(url: str) -> None:
    if not url:
        raise ConfigurationError("Image URL cannot be empty.")
    parsed = urlparse(url)
    if not parsed.scheme or not (parsed.netloc or parsed.scheme == "data"):
        raise ConfigurationError(f"Invalid image URL: {url!r}")


async def _encode_image(image_path: str | Path) -> str:
    path = Path(image_path)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found: {path}")
    data = await asyncio.to_thread(path.read_bytes)
    return base64.b64encode(data).decode("ascii")


class VisionClient:
    """Send image + prompt requests to a vision-capable model."""

    def __init__(self, chat: AsyncChatCompletionClient) -> None:
        self._chat = chat

    @staticmethod
    def _builder(image_url: str, prompt: str, model: str) -> ChatCompletionRequestBuilder:
        return (
            ChatCompletionRequestBuilder.create()
            .with_model(model)
            .with_user_prompt(prompt)
            .with_image_url(image_url)
        )

    async def _send(self, builder: ChatCompletionRequestBuilder) -> Response:
        raw = await self._chat.send_chat_completion(builder.build())
        return parse_response(raw)

    async def complete_with_image_url(
        self,
        image_url: str,
        prompt: str,
        model: str = DEFAULT_VISION_MODEL,
        temperature: float | None = None,
    ) -> Response:
        """Describe or answer questions about the image at ``image_url``."""
        _validate_image_url(image_url)
        builder = self._builder(image_url, prompt, model)
        if temperature is not None:
            builder = builder.with_temperature(temperature)
        return await self._send(builder)

    async def complete_with_base64_image(
        self,
        image_path: str | Path,
        prompt: str,
        model: str = DEFAULT_VISION_MODEL,
        temperature: float | None = None,
    ) -> Response:
        """Like :meth:`complete_with_image_url`, for a local JPEG sent inline."""
        encoded = await _encode_image(image_path)
        builder = self._builder(f"data:image/jpeg;base64,{encoded}", prompt, model)
        if temperature is not None:
            builder = builder.with_temperature(temperature)
        return await self._send(builder)

    async def complete_with_tools(
        self,
        image_url: str,
        prompt: str,
        tools: Sequence[Tool],
        model: str = DEFAULT_VISION_MODEL,
    ) -> Response:
        """Offer ``tools`` to the model; the returned tool calls are not executed."""
        _validate_image_url(image_url)
        builder = (
            self._builder(image_url, prompt, model).with_tools(tools).with_tool_choice("auto")
        )
        return await self._send(builder)

    async def complete_with_json_mode(
        self,
        image_url: str,
        prompt: str,
        model: str = DEFAULT_VISION_MODEL,
    ) -> Response:
        _validate_image_url(image_url)
        return await self._send(self._builder(image_url, prompt, model).with_json_mode())
