"""Single-prompt text generation helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator

from groqkit.llm._builder import ChatCompletionRequestBuilder
from groqkit.llm._chat import AsyncChatCompletionClient
from groqkit.llm._constants import DEFAULT_TEXT_MODEL
from groqkit.llm._types import parse_response


class LlmTextProvider:
    """Generate text from a user prompt and optional system prompt."""

    def __init__(self, chat: AsyncChatCompletionClient, model: str | None = None) -> None:
        self._chat = chat
        self._model = model or DEFAULT_TEXT_MODEL

    def _builder(
        self,
        user_prompt: str,
        system_prompt: str | None,
        response_format: str | None,
        model: str | None,
    ) -> ChatCompletionRequestBuilder:
        builder = (
            ChatCompletionRequestBuilder.create()
            .with_model(model or self._model)
            .with_user_prompt(user_prompt)
        )
        if system_prompt is not None:
            builder = builder.with_system_prompt(system_prompt)
        if response_format is not None:
            builder = builder.with_response_format(response_format)
        return builder

    async def generate(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        response_format: str | None = None,
        model: str | None = None,
    ) -> str:
        """Return the model's reply, or ``""`` when the response carries no content.

        ``response_format`` is a JSON schema given as a JSON string.
        """
        payload = self._builder(user_prompt, system_prompt, response_format, model).build()
        raw = await self._chat.send_chat_completion(payload)
        return parse_response(raw).text

    async def generate_stream(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        response_format: str | None = None,
        model: str | None = None,
    ) -> AsyncIterator[str]:
        """Yield content deltas as the model streams its reply."""
        payload = self._builder(user_prompt, system_prompt, response_format, model).build()
        async for chunk in self._chat.stream_chat_completion(payload):
            choices = chunk.get("choices") or []
            if not choices:
                continue
            if text := (choices[0].get("delta") or {}).get("content"):
                yield text
