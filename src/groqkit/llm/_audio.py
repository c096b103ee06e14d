"""Audio endpoints: transcription, translation, and speech synthesis."""

from __future__ import annotations

import asyncio
from typing import Any, BinaryIO

from groqkit.llm._async_http import async_post_bytes, async_post_multipart
from groqkit.llm._constants import (
    DEFAULT_SPEECH_MODEL,
    SPEECH_PATH,
    TRANSCRIPTIONS_PATH,
    TRANSLATIONS_PATH,
)
from groqkit.llm._settings import GroqSettings


def _form_fields(
    model: str,
    prompt: str | None,
    response_format: str,
    temperature: float | None,
    language: str | None = None,
) -> dict[str, str]:
    # Blank optional strings are left out of the form entirely.
    fields = {"model": model, "response_format": response_format}
    if prompt and prompt.strip():
        fields["prompt"] = prompt
    if language and language.strip():
        fields["language"] = language
    if temperature is not None:
        fields["temperature"] = str(temperature)
    return fields


async def _read(file: bytes | BinaryIO) -> bytes:
    if isinstance(file, bytes):
        return file
    return await asyncio.to_thread(file.read)


class AudioClient:
    """Thin passthrough to the Groq audio endpoints."""

    def __init__(self, settings: GroqSettings) -> None:
        self._settings = settings

    async def _upload(self, path: str, fields: dict[str, str], filename: str, data: bytes) -> Any:
        return await async_post_multipart(
            self._settings.url(path),
            self._settings.auth_headers,
            fields,
            {"file": (filename, data)},
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )

    async def create_transcription(
        self,
        file: bytes | BinaryIO,
        filename: str,
        model: str,
        prompt: str | None = None,
        response_format: str = "json",
        language: str | None = None,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Transcribe audio in its spoken language."""
        fields = _form_fields(model, prompt, response_format, temperature, language)
        return await self._upload(TRANSCRIPTIONS_PATH, fields, filename, await _read(file))

    async def create_translation(
        self,
        file: bytes | BinaryIO,
        filename: str,
        model: str,
        prompt: str | None = None,
        response_format: str = "json",
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Transcribe audio and translate it into English."""
        fields = _form_fields(model, prompt, response_format, temperature)
        return await self._upload(TRANSLATIONS_PATH, fields, filename, await _read(file))

    async def create_speech(
        self,
        text: str,
        voice: str,
        model: str = DEFAULT_SPEECH_MODEL,
        response_format: str = "wav",
    ) -> bytes:
        """Synthesize ``text`` and return the encoded audio bytes.

        Voices are named ``"<Name>-PlayAI"``, e.g. ``"Fritz-PlayAI"``. For Arabic
        speech pass ``model=ARABIC_SPEECH_MODEL`` (``"playai-tts-arabic"``) with an
        Arabic voice such as ``"Ahmad-PlayAI"``.
        """
        payload = {
            "input": text,
            "model": model,
            "voice": voice,
            "response_format": response_format,
        }
        return await async_post_bytes(
            self._settings.url(SPEECH_PATH),
            self._settings.headers,
            payload,
            timeout=self._settings.timeout,
            retry=self._settings.retry,
        )
