"""Endpoint paths, roles, and well-known parameter values."""

from __future__ import annotations

from enum import StrEnum

BASE_URL = "https://api.groq.com"

CHAT_COMPLETIONS_PATH = "/openai/v1/chat/completions"
MODELS_PATH = "/openai/v1/models"
TRANSCRIPTIONS_PATH = "/openai/v1/audio/transcriptions"
TRANSLATIONS_PATH = "/openai/v1/audio/translations"
SPEECH_PATH = "/openai/v1/audio/speech"

SYSTEM_ROLE = "system"
USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
TOOL_ROLE = "tool"

DEFAULT_TEXT_MODEL = "openai/gpt-oss-120b"
DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
DEFAULT_SPEECH_MODEL = "playai-tts"
ARABIC_SPEECH_MODEL = "playai-tts-arabic"


class ServiceTier(StrEnum):
    """Values accepted by ``service_tier``."""

    PERFORMANCE = "performance"
    ON_DEMAND = "on_demand"  # server default when omitted
    FLEX = "flex"
    AUTO = "auto"


class ReasoningFormat(StrEnum):
    """Values accepted by ``reasoning_format``."""

    RAW = "raw"
    PARSED = "parsed"
    HIDDEN = "hidden"
